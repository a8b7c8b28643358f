from abc import ABC, abstractmethod
from contextlib import contextmanager


class CaptureSource(ABC):
    """Produces the player's guess as a data URL.

    Owners call acquire() when the source becomes active (round start / mode
    switch) and release() when switching away or tearing down.
    """

    name = "capture"

    @abstractmethod
    def capture(self) -> str | None:
        """Return "data:<type>;base64,<payload>" or None when nothing is available."""
        ...

    def clear(self):
        """Reset to blank. Idempotent."""

    def acquire(self):
        pass

    def release(self):
        pass

    @contextmanager
    def session(self):
        self.acquire()
        try:
            yield self
        finally:
            self.release()
