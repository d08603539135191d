import json

from pronunciation_coach.result_utils import decode_tool_result, ensure_envelope, envelope_error


def _text_parts(payload) -> list[dict]:
    text = json.dumps(payload)
    return [{"type": "text", "text": text[:10]}, {"type": "text", "text": text[10:]}]


def test_decode_tool_result_reads_dict_content():
    envelope = {"code": 200, "message": "success", "data": {"text": "hello"}}
    assert decode_tool_result({"content": envelope}) == envelope
    assert decode_tool_result(envelope) == envelope


def test_decode_tool_result_joins_text_parts():
    envelope = {"code": 200, "message": "success", "data": {"output_path": "/tmp/a.wav"}}
    assert decode_tool_result({"content": _text_parts(envelope)}) == envelope


def test_decode_tool_result_returns_plain_text_when_not_json():
    assert decode_tool_result([{"type": "text", "text": "not json"}]) == "not json"
    assert decode_tool_result([{"type": "image"}]) == [{"type": "image"}]


def test_ensure_envelope_descends_to_transcription_data():
    raw = {
        "code": 200,
        "message": "success",
        "data": {
            "code": 200,
            "message": "success",
            "data": {"text": "hello", "language": "en", "segments": []},
        },
    }
    envelope = ensure_envelope(raw, "text", "segments")
    assert envelope["data"] == {"text": "hello", "language": "en", "segments": []}


def test_ensure_envelope_surfaces_inner_failure():
    raw = {
        "content": _text_parts(
            {
                "code": 200,
                "message": "success",
                "data": {"code": 500, "message": "model missing", "data": {"error_code": "MODEL_NOT_FOUND"}},
            }
        )
    }
    envelope = ensure_envelope(raw, "output_path")
    assert envelope["code"] == 500
    assert envelope_error(envelope, "tts failed") == "model missing (MODEL_NOT_FOUND)"


def test_ensure_envelope_wraps_bare_payload():
    envelope = ensure_envelope({"content": {"text": "hi"}})
    assert envelope == {"code": 200, "message": "success", "data": {"text": "hi"}}


def test_envelope_error_falls_back_to_default_message():
    assert envelope_error({"code": 500}, "asr failed") == "asr failed"
