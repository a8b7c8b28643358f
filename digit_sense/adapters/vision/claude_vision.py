"""
Claude Vision digit classifier.

Sends the capture to Claude via the Anthropic API and asks for the digit only.
Requires ANTHROPIC_API_KEY in environment (digit_sense/.env or system env).
Errors propagate: anthropic.RateLimitError renders as "Error code: 429 ..." and
is retried by the Recognizer.
"""
import os
import anthropic
from digit_sense.adapters.vision.base import VisionAdapter

CLAUDE_MODEL = os.getenv("CLAUDE_MODEL", "claude-haiku-4-5-20251001")


class ClaudeVision(VisionAdapter):
    name = "claude"

    def __init__(self, status_store, api_key: str | None = None):
        self.status = status_store
        self._client = None
        self._ready = False
        api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            self.status.log("claude_vision: ANTHROPIC_API_KEY not set")
            return
        # SDK retries disabled: the Recognizer owns the retry budget
        self._client = anthropic.AsyncAnthropic(api_key=api_key, max_retries=0)
        self._ready = True
        self.status.log(f"claude_vision: ready ({CLAUDE_MODEL})")

    async def classify(self, instruction: str, media_type: str, data: str) -> str:
        if self._client is None:
            raise RuntimeError("claude_vision: client not configured")
        message = await self._client.messages.create(
            model=CLAUDE_MODEL,
            max_tokens=5,
            temperature=0.1,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "image",
                            "source": {
                                "type": "base64",
                                "media_type": media_type,
                                "data": data,
                            },
                        },
                        {"type": "text", "text": instruction},
                    ],
                }
            ],
        )
        return message.content[0].text if message.content else ""
