"""领域层模型与编解码。

包含：
- models: ChatMessage / ChatSubmitResult / PollResult / ApiErrorPayload。
- codec: 上述模型与 webhook JSON 之间的转换。
- exceptions: SDK 错误类型定义。
"""
