"""HTTP 传输抽象接口。

DelightClient 不直接依赖 httpx，而是依赖此协议：

- 默认实现是 HttpxTransport（httpx.AsyncClient）。
- 测试或特殊运行环境可以注入自己的实现。

传输层只负责把请求发出去并拿回状态码与响应体：
网络失败抛 RequestError，非 2xx 状态码不视为错误，由上层解析响应体。
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol


@dataclass(frozen=True)
class HttpRequest:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    content: bytes
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class HttpTransport(Protocol):
    """异步 HTTP 传输协议。

    实现者需要提供：
    - send(request): 发送一次请求，返回 HttpResponse；
      传输层失败时抛出 delight_client.domain.exceptions.RequestError。
    """

    async def send(self, request: HttpRequest) -> HttpResponse:
        ...
