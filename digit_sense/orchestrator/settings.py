import os
from dataclasses import dataclass

MAX_HINTS = 3
MAX_WRONG_GUESSES = 5
MAX_RETRIES = 3                 # retries after the first attempt
INITIAL_RETRY_DELAY_MS = 1000   # doubles on every retry


@dataclass(frozen=True)
class GameSettings:
    max_hints: int = MAX_HINTS
    max_wrong_guesses: int = MAX_WRONG_GUESSES
    max_retries: int = MAX_RETRIES
    initial_retry_delay_ms: int = INITIAL_RETRY_DELAY_MS

    def __post_init__(self):
        for name in ("max_hints", "max_retries", "initial_retry_delay_ms"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.max_wrong_guesses < 1:
            raise ValueError(f"max_wrong_guesses must be >= 1, got {self.max_wrong_guesses}")

    @classmethod
    def from_env(cls) -> "GameSettings":
        """Read overrides from DIGIT_SENSE_* env vars (digit_sense/.env is loaded by the API)."""
        return cls(
            max_hints=int(os.getenv("DIGIT_SENSE_MAX_HINTS", str(MAX_HINTS))),
            max_wrong_guesses=int(os.getenv("DIGIT_SENSE_MAX_WRONG_GUESSES", str(MAX_WRONG_GUESSES))),
            max_retries=int(os.getenv("DIGIT_SENSE_MAX_RETRIES", str(MAX_RETRIES))),
            initial_retry_delay_ms=int(os.getenv("DIGIT_SENSE_INITIAL_RETRY_DELAY_MS", str(INITIAL_RETRY_DELAY_MS))),
        )
