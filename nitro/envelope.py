from __future__ import annotations

import json
import re
import uuid
from typing import Any

from controller.models import BackendEnvelope
from controller.models import OutboundRequest
from nitro.errors import BackendError
from nitro.errors import MalformedStreamError

JSONRPC_VERSION = "2.0"
TOOLS_CALL_METHOD = "tools/call"
TOOLS_LIST_METHOD = "tools/list"
ASK_TOOL_NAME = "ask-nitro"

SSE_DATA_PREFIX = "data: "
SSE_DONE_MARKER = "[DONE]"

NO_RESPONSE_PLACEHOLDER = "No response received from Nitro AI"

# Tool invocation markers the backend leaves inline, e.g. {"tool":"books"}.
# Removing them is part of the answer contract, not cosmetic cleanup.
TOOL_MARKER_PATTERN = re.compile(r'\{"tool":"[^"]+"\}')


def build_request_envelope(method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
    envelope: dict[str, Any] = {
        "jsonrpc": JSONRPC_VERSION,
        "id": str(uuid.uuid4()),
        "method": method,
    }
    if params is not None:
        envelope["params"] = params
    return envelope


def build_ask_envelope(request: OutboundRequest) -> dict[str, Any]:
    return build_request_envelope(
        TOOLS_CALL_METHOD,
        {"name": ASK_TOOL_NAME, "arguments": request.to_arguments()},
    )


def parse_json_payload(body: str) -> dict[str, Any]:
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise MalformedStreamError(f"Nitro returned invalid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise MalformedStreamError("Nitro returned a non-object JSON payload")
    return payload


def parse_sse_payload(body: str) -> dict[str, Any]:
    """
    Return the last JSON object carried by a server-sent-event body.

    Every `data: ` line overwrites the previous one; keep-alives and other
    non-JSON payloads are skipped and `[DONE]` is never parsed.
    """
    last_data: dict[str, Any] | None = None
    for line in (body or "").splitlines():
        if not line.startswith(SSE_DATA_PREFIX):
            continue
        data_str = line[len(SSE_DATA_PREFIX):].strip()
        if not data_str or data_str == SSE_DONE_MARKER:
            continue
        try:
            parsed = json.loads(data_str)
        except ValueError:
            print(f"[Nitro] Skipping unparseable SSE data: {data_str[:120]!r}")
            continue
        if isinstance(parsed, dict):
            last_data = parsed

    if last_data is None:
        raise MalformedStreamError("No valid data found in SSE response")
    return last_data


def normalize_envelope(payload: dict[str, Any]) -> BackendEnvelope:
    error = payload.get("error")
    if error is not None and not isinstance(error, dict):
        error = {"code": None, "message": str(error)}
    if error is None and "result" not in payload:
        # Bare result objects show up on some streamed responses.
        return BackendEnvelope(id=None, result=payload)
    return BackendEnvelope(id=payload.get("id"), result=payload.get("result"), error=error)


def unwrap_result(envelope: BackendEnvelope) -> Any:
    if envelope.error is not None:
        raise BackendError(envelope.error.get("code"), envelope.error.get("message") or "")
    return envelope.result


def strip_tool_markers(text: str) -> str:
    return TOOL_MARKER_PATTERN.sub("", text or "")


def extract_answer_text(result: Any) -> str:
    content = result.get("content") if isinstance(result, dict) else None
    if not content:
        return NO_RESPONSE_PLACEHOLDER

    text = "\n".join(
        str(item.get("text") or "")
        for item in content
        if isinstance(item, dict) and item.get("type") == "text"
    )
    return strip_tool_markers(text).strip() or NO_RESPONSE_PLACEHOLDER
