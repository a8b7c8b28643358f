"""
KIMI (Moonshot AI) Vision digit classifier.
Uses KIMI's OpenAI-compatible API with multimodal support.
Requires KIMI_API_KEY in digit_sense/.env.
"""
import os
import httpx
from digit_sense.adapters.vision.base import VisionAdapter

KIMI_API_URL = os.getenv("KIMI_API_URL", "https://api.moonshot.cn/v1/chat/completions")
KIMI_MODEL   = os.getenv("KIMI_MODEL", "moonshot-v1-8k-vision-preview")


class KimiCallError(RuntimeError):
    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}: {body[:300]}")


class KimiVision(VisionAdapter):
    name = "kimi"

    def __init__(self, status_store, api_key: str | None = None, timeout: float = 15.0, transport=None):
        self.status = status_store
        self._api_key = api_key or os.getenv("KIMI_API_KEY")
        self._ready   = bool(self._api_key)
        self.timeout  = timeout
        self._transport = transport
        if self._ready:
            self.status.log(f"kimi_vision: ready (model={KIMI_MODEL})")
        else:
            self.status.log("kimi_vision: KIMI_API_KEY not set")

    async def classify(self, instruction: str, media_type: str, data: str) -> str:
        payload = {
            "model": KIMI_MODEL,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "image_url",
                            "image_url": {"url": f"data:{media_type};base64,{data}"},
                        },
                        {"type": "text", "text": instruction},
                    ],
                }
            ],
            "max_tokens": 5,
            "temperature": 0.1,
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            resp = await client.post(KIMI_API_URL, json=payload, headers=headers)
        if not resp.is_success:
            self.status.log(f"kimi_vision: HTTP {resp.status_code}")
            raise KimiCallError(resp.status_code, resp.text)
        return resp.json()["choices"][0]["message"]["content"] or ""
