"""
Recognizer: turns a captured data URL into a single digit character.

Pipeline:
  1. Validate the capture: "data:<type>/<subtype>;base64,<payload>"
  2. Pick a mode-specific instruction (drawn digit vs hand gesture)
  3. Ask the vision backend for a short, digit-only reply
  4. Take the first decimal digit in the reply (no digit -> not retried)
  5. Quota / rate-limit failures are retried with exponential backoff;
     any other backend failure is surfaced immediately
"""
import asyncio
import re
from digit_sense.adapters.vision.base import VisionAdapter
from digit_sense.orchestrator.contracts import CaptureInput, InputMode, ParsedCapture, is_empty_capture
from digit_sense.orchestrator.errors import (
    EmptyInputError,
    InvalidInputError,
    NoDigitRecognizedError,
    RecognitionServiceError,
    RecognitionUnavailableError,
)
from digit_sense.orchestrator.settings import GameSettings

PROMPTS: dict[InputMode, str] = {
    InputMode.DRAW: (
        "This is a drawing of a single digit (0-9) on a black background. "
        "Identify the digit. Return ONLY the digit itself."
    ),
    InputMode.GESTURE: (
        "The image shows a person making a hand gesture or holding a digit. "
        "Identify the single digit (0-9) represented. Return ONLY the digit itself."
    ),
}

_CAPTURE_RE = re.compile(
    r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+);(?P<encoding>[\w-]+),(?P<data>.+)$",
    re.DOTALL,
)
_DIGIT_RE = re.compile(r"[0-9]")   # ASCII only, \d would accept full-width digits
_QUOTA_RE = re.compile(
    r"\b429\b|RESOURCE_EXHAUSTED|quota|rate[ _-]?limit|too many requests",
    re.IGNORECASE,
)


def parse_capture(capture: CaptureInput) -> ParsedCapture:
    if is_empty_capture(capture):
        raise EmptyInputError()
    m = _CAPTURE_RE.match(capture.strip())
    if m is None or m.group("encoding").lower() != "base64":
        raise InvalidInputError()
    return ParsedCapture(media_type=m.group("media_type"), encoding="base64", data=m.group("data"))


def extract_digit(reply: str | None) -> str:
    m = _DIGIT_RE.search(reply or "")
    if m is None:
        raise NoDigitRecognizedError(raw_reply=reply or "")
    return m.group(0)


def is_quota_error(exc: BaseException) -> bool:
    if getattr(exc, "status_code", None) == 429 or getattr(exc, "code", None) == 429:
        return True
    return bool(_QUOTA_RE.search(str(exc)))


class Recognizer:
    def __init__(self, backend: VisionAdapter, status_store, settings: GameSettings | None = None, sleep=asyncio.sleep):
        self.backend = backend
        self.status = status_store
        self.settings = settings or GameSettings()
        self._sleep = sleep

    def retry_delay_ms(self, attempt: int) -> int:
        """Backoff before retry number ``attempt + 1``: initial * 2^attempt."""
        return self.settings.initial_retry_delay_ms * (2 ** attempt)

    async def recognize(self, capture: CaptureInput, mode: InputMode = InputMode.DRAW) -> str:
        parsed = parse_capture(capture)
        instruction = PROMPTS[InputMode(mode)]
        max_retries = self.settings.max_retries

        last_error = ""
        for attempt in range(max_retries + 1):
            try:
                reply = await self.backend.classify(instruction, parsed.media_type, parsed.data)
            except Exception as e:
                if not is_quota_error(e):
                    self.status.log(f"recognizer: {self.backend.name} error: {e}")
                    raise RecognitionServiceError(str(e)) from e
                last_error = str(e)
                if attempt == max_retries:
                    break
                delay_ms = self.retry_delay_ms(attempt)
                self.status.log(
                    f"recognizer: quota hit (attempt {attempt + 1}/{max_retries + 1}), retrying in {delay_ms}ms"
                )
                await self._sleep(delay_ms / 1000)
                continue

            self.status.log(f"recognizer: raw reply = '{(reply or '').strip()}'")
            digit = extract_digit(reply)
            self.status.log(f"recognizer: → {digit} (mode={InputMode(mode).value})")
            return digit

        self.status.log(f"recognizer: giving up after {max_retries + 1} attempts: {last_error}")
        raise RecognitionUnavailableError(attempts=max_retries + 1, last_error=last_error)
