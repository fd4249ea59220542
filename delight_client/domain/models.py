"""Delight webhook API 的数据模型。

- ChatMessage: 发往 webhook 的一条用户消息（出站）。
- ChatSubmitResult: 提交后服务端的确认，包含轮询路径（入站）。
- PollResult: 轮询接口的单次结果（入站）。
- ApiErrorPayload: 服务端在失败时返回的结构化错误。

模型本身不关心 JSON 字段名，字段映射统一放在 codec 模块。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


# webhook 协议目前只接受英文
DEFAULT_LANGUAGE_CODE = "en"


@dataclass(frozen=True)
class Sender:
    """消息发送者。"""

    id: str
    username: str
    language_code: str = DEFAULT_LANGUAGE_CODE


@dataclass(frozen=True)
class ChatMessage:
    """一条出站消息，每次发送都重新构造，构造后不可变。

    - message_id: 调用方提供或自动生成的唯一 ID。
    - sender: 发送者信息。
    - timestamp_ms: 构造时刻的 Unix 毫秒时间戳。
    - text: 消息文本。
    """

    message_id: str
    sender: Sender
    timestamp_ms: int
    text: str


@dataclass
class ChatSubmitResult:
    """提交消息后服务端的确认。

    - text: 服务端即时返回的文本（通常是占位内容）。
    - should_end_conversation: 服务端是否要求结束会话。
    - poll_path: 相对路径，需拼接 base_url 后轮询。
    - raw: 原始响应 JSON，用于调试或日志记录。
    """

    text: str
    should_end_conversation: bool
    poll_path: str
    raw: Optional[dict] = field(default=None, repr=False)


@dataclass
class PollResult:
    """轮询接口的单次结果。

    只有 completed 为 True 时 text/new_tokens 才是最终内容，
    未完成时这两个字段可能为空或只包含部分输出。
    """

    uuid: str
    completed: bool
    text: Optional[str] = None
    new_tokens: Optional[str] = None
    raw: Optional[dict] = field(default=None, repr=False)

    @property
    def is_final(self) -> bool:
        return self.completed


@dataclass
class ApiErrorPayload:
    """服务端错误负载：{"error": {message, type, param, code}}。"""

    message: str
    type: str
    param: Optional[str] = None
    code: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "type": self.type, "param": self.param, "code": self.code}
