"""
Gemini digit classifier (google-genai).

Requires GEMINI_API_KEY or GOOGLE_API_KEY. Quota errors surface from the SDK as
"429 RESOURCE_EXHAUSTED ..." and are retried by the Recognizer.
"""
import base64
import os
from google import genai
from google.genai import types
from digit_sense.adapters.vision.base import VisionAdapter

GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")


class GeminiVision(VisionAdapter):
    name = "gemini"

    def __init__(self, status_store, api_key: str | None = None):
        self.status = status_store
        self._client = None
        self._ready = False
        api_key = api_key or os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY")
        if not api_key:
            self.status.log("gemini_vision: GEMINI_API_KEY / GOOGLE_API_KEY not set")
            return
        self._client = genai.Client(api_key=api_key)
        self._ready = True
        self.status.log(f"gemini_vision: ready ({GEMINI_MODEL})")

    async def classify(self, instruction: str, media_type: str, data: str) -> str:
        if self._client is None:
            raise RuntimeError("gemini_vision: client not configured")
        response = await self._client.aio.models.generate_content(
            model=GEMINI_MODEL,
            contents=[
                types.Part.from_bytes(data=base64.b64decode(data), mime_type=media_type),
                types.Part.from_text(text=instruction),
            ],
            config=types.GenerateContentConfig(
                temperature=0.1,
                max_output_tokens=5,
                # 2.5 models bill thinking tokens against max_output_tokens
                thinking_config=types.ThinkingConfig(thinking_budget=0),
            ),
        )
        return response.text or ""
