"""Minimal demonstration: send one message and wait for the agent's reply."""

import asyncio
import os
import sys

from delight_client import DelightClient, DelightConfig, DelightError


async def main(text: str) -> int:
    webhook_id = os.getenv("DELIGHT_WEBHOOK_ID")
    if not webhook_id:
        print("请先设置 DELIGHT_WEBHOOK_ID", file=sys.stderr)
        return 2
    client = DelightClient(DelightConfig.make_default())
    try:
        reply = await client.send_and_await_reply(text, webhook_id, user_id="demo-user", username="demo")
    except DelightError as e:
        print(f"[{e.kind}] {e}", file=sys.stderr)
        return 1
    print("User:", text)
    print("Agent:", reply.text)
    return 0


if __name__ == "__main__":
    question = " ".join(sys.argv[1:]) or "Hello! What can you do?"
    sys.exit(asyncio.run(main(question)))
