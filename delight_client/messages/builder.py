"""出站消息构造器。

message_id 与时间戳都来自可注入的策略函数，
测试中替换成固定值即可断言完整的请求体。
"""

from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import uuid4

from delight_client.domain.models import DEFAULT_LANGUAGE_CODE, ChatMessage, Sender


IdFactory = Callable[[], str]
Clock = Callable[[], int]


def wall_clock_ms() -> int:
    """当前 Unix 时间戳（毫秒）。"""

    return int(datetime.now(timezone.utc).timestamp() * 1000)


def make_id_factory(prefix: str = "Wi-Py-") -> IdFactory:
    def _new_id() -> str:
        return f"{prefix}{str(uuid4()).upper()}"

    return _new_id


class MessageBuilder:
    """根据调用方字段构造 ChatMessage，无副作用，不会失败。"""

    def __init__(self, id_factory: Optional[IdFactory] = None, clock: Optional[Clock] = None):
        self._id_factory = id_factory or make_id_factory()
        self._clock = clock or wall_clock_ms

    def build(
        self,
        text: str,
        user_id: str,
        username: str,
        message_id: Optional[str] = None,
    ) -> ChatMessage:
        return ChatMessage(
            message_id=message_id if message_id is not None else self._id_factory(),
            sender=Sender(id=user_id, username=username, language_code=DEFAULT_LANGUAGE_CODE),
            timestamp_ms=self._clock(),
            text=text,
        )
