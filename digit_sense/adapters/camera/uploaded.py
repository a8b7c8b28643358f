"""Capture source fed by the browser: canvas exports and webcam snapshots arrive as data URLs."""
from digit_sense.adapters.camera.base import CaptureSource
from digit_sense.orchestrator.contracts import is_empty_capture


class UploadedFrame(CaptureSource):
    def __init__(self, status_store, name: str = "upload"):
        self.status = status_store
        self.name = name
        self._frame: str | None = None

    def push(self, data_url: str | None):
        self._frame = None if is_empty_capture(data_url) else data_url
        self.status.log(f"{self.name}: frame {'received' if self._frame else 'empty'}")

    def capture(self) -> str | None:
        return self._frame

    def clear(self):
        if self._frame is not None:
            self.status.log(f"{self.name}: cleared")
        self._frame = None

    def release(self):
        # a frame pushed for one mode must never be submitted under another
        self.clear()
