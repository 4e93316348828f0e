from __future__ import annotations

from typing import Any
from typing import Sequence

import httpx

from controller.models import BackendEnvelope
from controller.models import ConversationTurn
from controller.models import OutboundRequest
from nitro.envelope import TOOLS_LIST_METHOD
from nitro.envelope import build_ask_envelope
from nitro.envelope import build_request_envelope
from nitro.envelope import extract_answer_text
from nitro.envelope import normalize_envelope
from nitro.envelope import parse_json_payload
from nitro.envelope import parse_sse_payload
from nitro.envelope import unwrap_result
from nitro.errors import ConfigurationError
from nitro.errors import TransportError
from nitro.identity import anonymous_user_id
from nitro.identity import discord_id_to_uuid

ACCEPT_HEADER = "application/json, text/event-stream"
DEFAULT_TIMEOUT_SECONDS = 120.0


class NitroClient:
    """
    JSON-RPC client for the Nitro MCP endpoint.

    Responses may come back as plain JSON or as a server-sent-event body;
    both are reduced to one BackendEnvelope before the result is read.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        model: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = (base_url or "").strip()
        self.api_key = (api_key or "").strip()
        if not self.base_url or not self.api_key:
            raise ConfigurationError("NITRO_BASE_URL and NITRO_API_KEY are required")
        self.model = (model or "").strip() or None
        self.timeout = float(timeout)
        self._http = http_client
        self._owns_http = http_client is None

    async def __aenter__(self) -> NitroClient:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self.timeout)
        return self._http

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    async def _call(self, envelope: dict[str, Any]) -> BackendEnvelope:
        print(f"[Nitro] -> {envelope['method']} id={envelope['id']}")
        try:
            resp = await self._client().post(
                self.base_url,
                params={"api_key": self.api_key},
                json=envelope,
                headers={
                    "Content-Type": "application/json",
                    "Accept": ACCEPT_HEADER,
                },
            )
        except httpx.HTTPError as e:
            # exception text from httpx can include the full URL with the key
            print(f"[Nitro] Transport failure: {type(e).__name__}")
            raise TransportError(None, type(e).__name__) from e

        if not resp.is_success:
            print(f"[Nitro] HTTP error {resp.status_code}: {resp.text[:300]}")
            raise TransportError(resp.status_code, resp.text)

        content_type = resp.headers.get("content-type", "")
        if "text/event-stream" in content_type:
            payload = parse_sse_payload(resp.text)
        else:
            payload = parse_json_payload(resp.text)
        return normalize_envelope(payload)

    async def list_tools(self) -> list[dict[str, Any]]:
        envelope = await self._call(build_request_envelope(TOOLS_LIST_METHOD))
        result = unwrap_result(envelope)
        if not isinstance(result, dict):
            return []
        return list(result.get("tools") or [])

    async def ask_nitro(self, request: OutboundRequest) -> str:
        envelope = await self._call(build_ask_envelope(request))
        return extract_answer_text(unwrap_result(envelope))

    async def ask(
        self,
        question: str,
        user_id: int | str | None = None,
        email: str | None = None,
        history: Sequence[ConversationTurn] | None = None,
    ) -> str:
        external_user_id = discord_id_to_uuid(user_id) if user_id is not None else anonymous_user_id()
        request = OutboundRequest(
            question=question,
            external_user_id=external_user_id,
            email=email,
            model=self.model,
            history=tuple(history or ()),
        )
        print(
            f"[Nitro] ask question_chars={len(question)} history={len(request.history)} "
            f"anonymous={user_id is None}"
        )
        return await self.ask_nitro(request)
