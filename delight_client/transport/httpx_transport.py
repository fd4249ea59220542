"""基于 httpx.AsyncClient 的默认传输实现。

- 未传入 client 时，每次请求创建并关闭一个 AsyncClient。
- 传入共享的 client 时复用它，生命周期由调用方负责。
"""

from typing import Optional

import httpx

from delight_client.domain.exceptions import InvalidUrlError, RequestError
from delight_client.transport.base import HttpRequest, HttpResponse


class HttpxTransport:
    """httpx 传输实现。"""

    def __init__(self, timeout: float = 30.0, client: Optional[httpx.AsyncClient] = None):
        self._timeout = timeout
        self._client = client

    async def send(self, request: HttpRequest) -> HttpResponse:
        try:
            if self._client is not None:
                resp = await self._request(self._client, request)
            else:
                async with httpx.AsyncClient(timeout=self._timeout, trust_env=False) as client:
                    resp = await self._request(client, request)
        except httpx.InvalidURL as e:
            raise InvalidUrlError(f"Invalid URL: {e}", url=request.url)
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接超时等
            raise RequestError(f"Request error: {str(e) or type(e).__name__}", cause=e, url=request.url)
        return HttpResponse(status_code=resp.status_code, content=resp.content, headers=dict(resp.headers))

    @staticmethod
    async def _request(client: httpx.AsyncClient, request: HttpRequest) -> httpx.Response:
        return await client.request(
            request.method,
            request.url,
            headers=request.headers or None,
            content=request.body,
        )
