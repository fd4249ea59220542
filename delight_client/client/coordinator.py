"""Delight 对话工作流：提交消息 → 轮询直到 Agent 回复完成。

流程：
1. 构造 ChatMessage，POST 到 {base_url}/webhook/webwidget/{webhook_id}/。
2. 响应体先按错误结构解析，命中则抛 ChatApiError；否则解析为 ChatSubmitResult。
3. 用 base_url 拼出轮询 URL，按固定间隔 GET，直到 completed 为 True
   或者轮询次数用尽（AttemptsExhaustedError）。

只有“尚未完成”会触发下一次轮询；传输错误和解码错误立即结束，不在次数内重试。
取消沿用 asyncio 语义：在网络等待或间隔等待处取消任务即可。
"""

import logging
from typing import Any, Dict, Optional

from delight_client.client.config import DelightConfig
from delight_client.client.urls import poll_url, webhook_url
from delight_client.domain import codec
from delight_client.domain.exceptions import (
    AttemptsExhaustedError,
    ChatApiError,
    DecodingError,
    DelightError,
    RequestError,
)
from delight_client.domain.models import ChatSubmitResult, PollResult
from delight_client.infrastructure.logging.logger import log_event
from delight_client.messages.builder import MessageBuilder
from delight_client.transport.base import HttpRequest, HttpResponse


class DelightClient:
    """Delight webhook API 的异步客户端。

    同一个实例可以被多个协程并发使用，调用之间不共享可变状态。
    """

    def __init__(self, config: Optional[DelightConfig] = None):
        self._config = config or DelightConfig.make_default()
        self._builder = MessageBuilder(id_factory=self._config.id_factory, clock=self._config.clock)

    @property
    def config(self) -> DelightConfig:
        return self._config

    # ---- 提交 ----

    async def send_chat(
        self,
        text: str,
        webhook_id: str,
        user_id: str,
        username: str,
        message_id: Optional[str] = None,
    ) -> ChatSubmitResult:
        """提交一条消息，返回服务端确认（含轮询路径）。

        Raises:
            InvalidUrlError: webhook_id 无法组成合法 URL（不会发出请求）。
            RequestError: 传输层失败。
            ChatApiError: 服务端返回结构化错误。
            DecodingError: 响应体结构不符合约定。
        """

        url = webhook_url(self._config.base_url, webhook_id)
        message = self._builder.build(text, user_id, username, message_id=message_id)
        log_ctx = {"webhook_id": webhook_id, "message_id": message.message_id}
        request = HttpRequest(
            method="POST",
            url=url,
            headers={"Content-Type": "application/json"},
            body=codec.encode_message(message),
        )
        resp = await self._send(request, log_ctx)
        data = self._parse_body(resp, log_ctx)

        err = codec.decode_error_payload(data)
        if err is not None:
            log_event(logging.WARNING, "Chat rejected by server", log_ctx, error=err.as_dict())
            raise ChatApiError(err, webhook_id=webhook_id, message_id=message.message_id)

        try:
            result = codec.decode_submit_result(data)
        except DecodingError as e:
            log_event(logging.ERROR, "Submit response decoding failed", log_ctx, error=e.message)
            raise
        log_event(
            logging.INFO,
            "Chat submitted",
            log_ctx,
            poll_path=result.poll_path,
            should_end_conversation=result.should_end_conversation,
        )
        return result

    # ---- 轮询 ----

    async def poll(self, poll_path: str) -> PollResult:
        """对轮询路径发一次 GET，返回当前状态（可能尚未完成）。"""

        return await self._poll_once(poll_url(self._config.base_url, poll_path), {"poll_path": poll_path})

    async def poll_until_complete(self, poll_path: str, max_attempts: Optional[int] = None) -> PollResult:
        """轮询直到 completed 为 True。

        每次未完成后等待 poll_interval 秒再试，最多 max_attempts 次
        （None 时使用配置中的 max_poll_attempts）。

        Raises:
            AttemptsExhaustedError: 次数用尽仍未完成。
            RequestError / DecodingError: 任一次轮询失败即结束。
        """

        url = poll_url(self._config.base_url, poll_path)
        attempts = self._config.max_poll_attempts if max_attempts is None else max_attempts
        remaining = max(attempts, 0)
        log_ctx: Dict[str, Any] = {"poll_path": poll_path}
        while True:
            if remaining == 0:
                log_event(logging.WARNING, "Poll attempts exhausted", log_ctx, attempts=attempts)
                raise AttemptsExhaustedError(attempts, poll_path=poll_path)
            result = await self._poll_once(url, {**log_ctx, "attempt": attempts - remaining + 1})
            if result.completed:
                log_event(
                    logging.INFO,
                    "Reply completed",
                    log_ctx,
                    uuid=result.uuid,
                    attempts_used=attempts - remaining + 1,
                )
                return result
            await self._config.sleep(self._config.poll_interval)
            remaining -= 1

    async def send_and_await_reply(
        self,
        text: str,
        webhook_id: str,
        user_id: str,
        username: str,
        message_id: Optional[str] = None,
        max_attempts: Optional[int] = None,
    ) -> PollResult:
        """提交消息并等待 Agent 完成回复，返回 completed 为 True 的 PollResult。"""

        submitted = await self.send_chat(text, webhook_id, user_id, username, message_id=message_id)
        return await self.poll_until_complete(submitted.poll_path, max_attempts=max_attempts)

    # ---- 辅助方法 ----

    async def _poll_once(self, url: str, log_ctx: Dict[str, Any]) -> PollResult:
        resp = await self._send(HttpRequest(method="GET", url=url), log_ctx)
        data = self._parse_body(resp, log_ctx)
        try:
            result = codec.decode_poll_result(data)
        except DecodingError as e:
            log_event(logging.ERROR, "Poll response decoding failed", log_ctx, error=e.message)
            raise
        log_event(logging.INFO, "Poll result", log_ctx, uuid=result.uuid, completed=result.completed)
        return result

    async def _send(self, request: HttpRequest, log_ctx: Dict[str, Any]) -> HttpResponse:
        try:
            resp = await self._config.transport.send(request)
        except DelightError as e:
            log_event(logging.ERROR, "HTTP request failed", log_ctx, method=request.method, error=str(e))
            raise
        except Exception as e:
            # 注入的传输实现抛出的其他异常统一视为传输层失败
            log_event(logging.ERROR, "HTTP request failed", log_ctx, method=request.method, error=repr(e))
            raise RequestError(f"Request error: {e!r}", cause=e, url=request.url) from e
        if not resp.is_success:
            log_event(
                logging.WARNING,
                "Non-2xx response",
                log_ctx,
                method=request.method,
                status_code=resp.status_code,
            )
        return resp

    @staticmethod
    def _parse_body(resp: HttpResponse, log_ctx: Dict[str, Any]) -> Any:
        try:
            return codec.parse_json(resp.content)
        except DecodingError as e:
            log_event(logging.ERROR, "Response is not JSON", log_ctx, status_code=resp.status_code, error=e.message)
            raise
