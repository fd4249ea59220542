"""HTTP 传输层。

该包下的模块负责：
- 定义传输抽象接口 (base)。
- 提供基于 httpx 的默认实现 (httpx_transport)。
"""

from typing import Optional

from delight_client.config.settings import DelightSettings, load_settings
from delight_client.transport.base import HttpRequest, HttpResponse, HttpTransport
from delight_client.transport.httpx_transport import HttpxTransport


def create_transport(settings: Optional[DelightSettings] = None) -> HttpTransport:
    """根据配置创建默认传输实例。"""

    settings = settings or load_settings()
    return HttpxTransport(timeout=settings.http_timeout)


__all__ = ["HttpRequest", "HttpResponse", "HttpTransport", "HttpxTransport", "create_transport"]
