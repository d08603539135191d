"""
Speech host tool results.

A tool result reaches us as the ``result`` block of ``/sdk/tools/call`` (or of
a finished task). Its ``content`` is either the capability's
``{code, message, data}`` envelope itself, or a list of text parts carrying
that envelope as JSON. The host may wrap the capability's envelope in one of
its own, so ``ensure_envelope`` descends until it reaches the envelope whose
``data`` holds the fields the caller expects (``text``/``segments`` for
``asr.transcribe``, ``output_path`` for ``tts.synthesize``).
"""

from __future__ import annotations

import json
from typing import Any


def decode_tool_result(result: Any) -> Any:
    content = result.get("content") if isinstance(result, dict) and "content" in result else result
    if not isinstance(content, list):
        return content

    texts = [part["text"] for part in content if isinstance(part, dict) and isinstance(part.get("text"), str)]
    if not texts:
        return content
    text = "".join(texts)
    try:
        return json.loads(text)
    except ValueError:
        return text


def _is_envelope(value: Any) -> bool:
    return isinstance(value, dict) and "code" in value and "data" in value


def ensure_envelope(raw: Any, *fields: str) -> dict[str, Any]:
    payload = decode_tool_result(raw)
    if not (isinstance(payload, dict) and "code" in payload):
        return {"code": 200, "message": "success", "data": payload}

    envelope = payload
    while envelope.get("code") == 200 and _is_envelope(envelope.get("data")):
        inner = envelope["data"]
        if fields and any(field in inner for field in fields):
            break
        envelope = inner
    return envelope


def envelope_error(envelope: dict[str, Any], fallback: str) -> str:
    message = str(envelope.get("message") or fallback)
    data = envelope.get("data")
    if isinstance(data, dict) and data.get("error_code"):
        message = f"{message} ({data.get('error_code')})"
    return message
