from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RoundStatus(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class InputMode(str, Enum):
    DRAW = "draw"        # free-draw canvas
    GESTURE = "gesture"  # camera snapshot of a hand gesture / held digit


# A capture is a data URL: "<descriptor>;<encoding>,<payload>", e.g. "data:image/png;base64,iVBOR..."
CaptureInput = str

# What an untouched browser canvas exports
EMPTY_CAPTURE = "data:,"


def is_empty_capture(capture: Optional[CaptureInput]) -> bool:
    return capture is None or not capture.strip() or capture.strip() == EMPTY_CAPTURE


@dataclass(frozen=True)
class Round:
    target_digit: int
    wrong_guess_count: int = 0
    status: RoundStatus = RoundStatus.PLAYING
    last_recognized_digit: Optional[int] = None
    generation: int = 0   # bumped by every start_round; stale results are compared against it

    @property
    def is_over(self) -> bool:
        return self.status is not RoundStatus.PLAYING


@dataclass(frozen=True)
class ParsedCapture:
    media_type: str      # e.g. "image/png"
    encoding: str        # always "base64" once validated
    data: str            # payload, passed to the backend untouched


@dataclass
class GuessOutcome:
    ok: bool
    round: Round
    error_code: Optional[str] = None
    error: Optional[str] = None
