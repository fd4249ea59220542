"""JSON 编解码：项目内部模型 ⇄ Delight webhook API 字段。

出站只有一种结构（ChatMessage），入站有三种：
提交确认、轮询结果以及结构化错误。解码严格校验字段类型，
任何不符合约定的响应都抛出 DecodingError。
"""

import json
from typing import Any, Dict, Optional

from delight_client.domain.exceptions import DecodingError
from delight_client.domain.models import ApiErrorPayload, ChatMessage, ChatSubmitResult, PollResult


_MISSING = object()


def message_to_payload(message: ChatMessage) -> Dict[str, Any]:
    """把 ChatMessage 转成 webhook 请求体。"""

    return {
        "message": {
            "message_id": message.message_id,
            "from": {
                "id": message.sender.id,
                "username": message.sender.username,
                "language_code": message.sender.language_code,
            },
            "date": message.timestamp_ms,
            "text": message.text,
        }
    }


def encode_message(message: ChatMessage) -> bytes:
    return json.dumps(message_to_payload(message), ensure_ascii=False).encode("utf-8")


def parse_json(body: bytes) -> Any:
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise DecodingError(f"response is not valid JSON: {e}", cause=e)


def decode_error_payload(data: Any) -> Optional[ApiErrorPayload]:
    """若 data 是 {"error": {...}} 结构则返回 ApiErrorPayload，否则返回 None。

    这里不抛异常：调用方先试错误结构，不匹配再按正常响应解码。
    """

    if not isinstance(data, dict):
        return None
    err = data.get("error")
    if not isinstance(err, dict):
        return None
    message = err.get("message")
    type_ = err.get("type")
    if not isinstance(message, str) or not isinstance(type_, str):
        return None
    param = err.get("param")
    code = err.get("code")
    if param is not None and not isinstance(param, str):
        return None
    if code is not None and not isinstance(code, str):
        return None
    return ApiErrorPayload(message=message, type=type_, param=param, code=code)


def decode_submit_result(data: Any) -> ChatSubmitResult:
    obj = _require_object(data, "submit response")
    return ChatSubmitResult(
        text=_field(obj, "text", str),
        should_end_conversation=_field(obj, "shouldEndConversation", bool),
        poll_path=_field(obj, "poll", str),
        raw=obj,
    )


def decode_poll_result(data: Any) -> PollResult:
    obj = _require_object(data, "poll response")
    return PollResult(
        uuid=_field(obj, "uuid", str),
        completed=_field(obj, "completed", bool),
        text=_field(obj, "text", str, optional=True),
        new_tokens=_field(obj, "new_tokens", str, optional=True),
        raw=obj,
    )


def _require_object(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodingError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _field(obj: Dict[str, Any], key: str, expected: type, optional: bool = False) -> Any:
    value = obj.get(key, _MISSING)
    if value is _MISSING or value is None:
        if optional:
            return None
        raise DecodingError(f"missing required field {key!r}")
    # bool 是 int 的子类，这里要求类型完全一致
    if type(value) is not expected:
        raise DecodingError(
            f"field {key!r} expected {expected.__name__}, got {type(value).__name__}"
        )
    return value
