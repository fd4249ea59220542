"""Delight 对话 Agent 的 Python 客户端。

提交一条用户消息到 webhook，再轮询状态接口直到 Agent 回复完成。

    client = DelightClient(DelightConfig.make_default())
    reply = await client.send_and_await_reply("hi", webhook_id, user_id, username)
"""

from delight_client.client import CallbackAdapter, DelightClient, DelightConfig
from delight_client.domain.exceptions import (
    AttemptsExhaustedError,
    ChatApiError,
    DecodingError,
    DelightError,
    InvalidUrlError,
    RequestError,
    UnsupportedPlatformError,
)
from delight_client.domain.models import ApiErrorPayload, ChatMessage, ChatSubmitResult, PollResult, Sender

__all__ = [
    "ApiErrorPayload",
    "AttemptsExhaustedError",
    "CallbackAdapter",
    "ChatApiError",
    "ChatMessage",
    "ChatSubmitResult",
    "DecodingError",
    "DelightClient",
    "DelightConfig",
    "DelightError",
    "InvalidUrlError",
    "PollResult",
    "RequestError",
    "Sender",
    "UnsupportedPlatformError",
]
