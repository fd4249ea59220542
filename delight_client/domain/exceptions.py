"""统一错误模型。

SDK 对外抛出的所有错误都继承自 DelightError，
调用方可以只捕获基类，也可以按具体类型（或 code）区分处理。
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from delight_client.domain.models import ApiErrorPayload


class DelightError(Exception):
    """SDK 错误基类。

    Attributes:
        code: 机器可读错误码（如 "REQUEST_ERROR"）。
        message: 用户可读错误信息。
        extra: 其他补充字段（例如 url、webhook_id 等）。
    """

    code = "DELIGHT_ERROR"

    def __init__(self, message: str, code: Optional[str] = None, **extra):
        self.code = code or self.code
        self.message = message
        self.extra = extra
        super().__init__(message)

    @property
    def kind(self) -> str:
        """错误类别名，即类名。"""

        return type(self).__name__

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class InvalidUrlError(DelightError):
    """base_url / webhook_id / poll 路径无法组成合法 URL，请求不会被发出。"""

    code = "INVALID_URL"


class RequestError(DelightError):
    """传输层错误，例如 DNS 失败、连接被拒、超时。"""

    code = "REQUEST_ERROR"

    def __init__(self, message: str, cause: Optional[BaseException] = None, **extra):
        super().__init__(message, **extra)
        self.cause = cause


class DecodingError(DelightError):
    """响应体不是预期的 JSON 结构。"""

    code = "DECODING_ERROR"

    def __init__(self, message: str, cause: Optional[BaseException] = None, **extra):
        super().__init__(message, **extra)
        self.cause = cause


class ChatApiError(DelightError):
    """服务端返回了结构化的 error 负载。"""

    code = "CHAT_ERROR"

    def __init__(self, payload: "ApiErrorPayload", **extra):
        message = f"{payload.message} (type={payload.type}"
        if payload.code:
            message += f", code={payload.code}"
        if payload.param:
            message += f", param={payload.param}"
        message += ")"
        super().__init__(message, **extra)
        self.payload = payload


class AttemptsExhaustedError(DelightError):
    """轮询次数用尽，Agent 仍未完成回复。"""

    code = "ATTEMPTS_EXHAUSTED"

    def __init__(self, attempts: int, **extra):
        super().__init__(f"reply not completed after {attempts} poll attempts", **extra)
        self.attempts = attempts


class UnsupportedPlatformError(DelightError):
    """运行环境缺少必需能力（例如回调接口需要正在运行的事件循环）。"""

    code = "UNSUPPORTED_PLATFORM"
