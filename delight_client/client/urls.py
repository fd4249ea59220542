"""webhook / poll URL 拼接与校验。

拼接规则与线上协议保持一致：
- 提交：{base_url}/webhook/webwidget/{webhook_id}/
- 轮询：{base_url}{poll_path}

无法组成合法 URL 时抛 InvalidUrlError，此时不会发出任何请求。
"""

import re

import httpx

from delight_client.domain.exceptions import InvalidUrlError


# RFC 3986 path segment 允许的字符（pchar）
_SEGMENT_RE = re.compile(r"(?:[A-Za-z0-9\-._~!$&'()*+,;=:@]|%[0-9A-Fa-f]{2})+")


def webhook_url(base_url: str, webhook_id: str) -> str:
    if not webhook_id or not _SEGMENT_RE.fullmatch(webhook_id):
        raise InvalidUrlError(f"Invalid URL: bad webhook id {webhook_id!r}", webhook_id=webhook_id)
    return _checked(f"{base_url}/webhook/webwidget/{webhook_id}/")


def poll_url(base_url: str, poll_path: str) -> str:
    # 轮询路径必须是以 "/" 开头的相对路径，否则拼接结果指向错误的主机
    if not poll_path.startswith("/"):
        raise InvalidUrlError(f"Invalid URL: poll path {poll_path!r} is not relative", poll_path=poll_path)
    return _checked(f"{base_url}{poll_path}")


def _checked(url: str) -> str:
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        raise InvalidUrlError(f"Invalid URL: {url!r}", url=url)
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise InvalidUrlError(f"Invalid URL: {e}", url=url)
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidUrlError(f"Invalid URL: {url!r}", url=url)
    return url
