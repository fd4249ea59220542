"""对话工作流层。

- config: DelightConfig 运行配置与默认配置工厂。
- coordinator: DelightClient，提交 → 轮询工作流。
- callbacks: 回调风格适配器。
"""

from delight_client.client.callbacks import CallbackAdapter
from delight_client.client.config import DelightConfig
from delight_client.client.coordinator import DelightClient

__all__ = ["CallbackAdapter", "DelightClient", "DelightConfig"]
