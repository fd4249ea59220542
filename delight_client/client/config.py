"""客户端配置对象。

DelightClient 在构造时接收一个 DelightConfig，不读取任何进程级全局状态。
需要默认行为时显式调用 DelightConfig.make_default()。
"""

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from delight_client.config.settings import DEFAULT_BASE_URL, DelightSettings, load_settings
from delight_client.infrastructure.logging.logger import setup_logger
from delight_client.messages.builder import Clock, IdFactory, make_id_factory, wall_clock_ms
from delight_client.transport import HttpTransport, HttpxTransport, create_transport


Sleep = Callable[[float], Awaitable[None]]


@dataclass
class DelightConfig:
    """DelightClient 的运行配置。

    Attributes:
        base_url: API 基础 URL，末尾不带 "/"。
        transport: 注入的 HTTP 传输实现。
        max_poll_attempts: send_and_await_reply / poll_until_complete 的默认轮询次数。
        poll_interval: 两次轮询之间的固定间隔（秒）。
        sleep: 等待函数，测试中可替换为不真正休眠的实现。
        id_factory: message_id 生成策略。
        clock: 毫秒时间戳策略。
    """

    base_url: str = DEFAULT_BASE_URL
    transport: HttpTransport = field(default_factory=HttpxTransport)
    max_poll_attempts: int = 30
    poll_interval: float = 1.0
    sleep: Sleep = asyncio.sleep
    id_factory: IdFactory = field(default_factory=make_id_factory)
    clock: Clock = wall_clock_ms

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        if self.max_poll_attempts < 0:
            self.max_poll_attempts = 0

    @classmethod
    def from_settings(
        cls,
        settings: DelightSettings,
        transport: Optional[HttpTransport] = None,
    ) -> "DelightConfig":
        setup_logger(settings)
        return cls(
            base_url=settings.base_url,
            transport=transport or create_transport(settings),
            max_poll_attempts=settings.max_poll_attempts,
            poll_interval=settings.poll_interval,
            id_factory=make_id_factory(settings.message_id_prefix),
        )

    @classmethod
    def make_default(cls) -> "DelightConfig":
        """默认配置：读取环境变量 / .env / config.yaml，未配置时指向 qa 环境。"""

        return cls.from_settings(load_settings())
