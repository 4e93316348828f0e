from __future__ import annotations


class NitroError(Exception):
    """Base class for everything the Nitro relay raises on purpose."""


class ConfigurationError(NitroError):
    pass


class TransportError(NitroError):
    def __init__(self, status: int | None, body: str = ""):
        self.status = status
        self.body = body or ""
        if status is None:
            super().__init__(f"Nitro request failed: {self.body[:200]}")
        else:
            super().__init__(f"Nitro HTTP {status}: {self.body[:200]}")


class BackendError(NitroError):
    def __init__(self, code: int | None, message: str):
        self.code = code
        self.message = str(message or "").strip() or "unknown error"
        super().__init__(f"MCP Error {code}: {self.message}")


class MalformedStreamError(NitroError):
    pass
