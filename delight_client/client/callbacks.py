"""回调风格接口。

给无法直接 await 的调用方（例如事件驱动的插件宿主）使用：
每个方法把对应协程调度到当前事件循环，完成后调用 callback(result, error)，
成功时 error 为 None，失败时 result 为 None。任务被取消时不回调。
"""

import asyncio
import functools
from typing import Any, Callable, Coroutine, Optional

from delight_client.client.coordinator import DelightClient
from delight_client.domain.exceptions import DelightError, UnsupportedPlatformError
from delight_client.domain.models import ChatSubmitResult, PollResult


SubmitCallback = Callable[[Optional[ChatSubmitResult], Optional[DelightError]], None]
PollCallback = Callable[[Optional[PollResult], Optional[DelightError]], None]


class CallbackAdapter:
    """把 DelightClient 的协程接口包装成回调接口。"""

    def __init__(self, client: DelightClient):
        self._client = client

    def send_chat(
        self,
        text: str,
        webhook_id: str,
        user_id: str,
        username: str,
        callback: SubmitCallback,
        message_id: Optional[str] = None,
    ) -> "asyncio.Task[ChatSubmitResult]":
        coro = self._client.send_chat(text, webhook_id, user_id, username, message_id=message_id)
        return self._schedule(coro, callback)

    def poll(self, poll_path: str, callback: PollCallback) -> "asyncio.Task[PollResult]":
        return self._schedule(self._client.poll(poll_path), callback)

    def send_and_await_reply(
        self,
        text: str,
        webhook_id: str,
        user_id: str,
        username: str,
        callback: PollCallback,
        message_id: Optional[str] = None,
        max_attempts: Optional[int] = None,
    ) -> "asyncio.Task[PollResult]":
        coro = self._client.send_and_await_reply(
            text,
            webhook_id,
            user_id,
            username,
            message_id=message_id,
            max_attempts=max_attempts,
        )
        return self._schedule(coro, callback)

    def _schedule(self, coro: Coroutine[Any, Any, Any], callback: Callable[..., None]) -> asyncio.Task:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise UnsupportedPlatformError("callback API requires a running asyncio event loop")
        task = loop.create_task(coro)
        task.add_done_callback(functools.partial(self._deliver, callback))
        return task

    @staticmethod
    def _deliver(callback: Callable[..., None], task: asyncio.Task) -> None:
        if task.cancelled():
            return
        err = task.exception()
        if err is None:
            callback(task.result(), None)
        elif isinstance(err, DelightError):
            callback(None, err)
        else:
            task.get_loop().call_exception_handler(
                {"message": "Unexpected error in Delight callback task", "exception": err, "task": task}
            )
