import random
from digit_sense.adapters.vision.base import VisionAdapter


class MockVision(VisionAdapter):
    """Offline stand-in: ignores the image and answers a random digit."""

    name = "mock"

    def __init__(self, status_store, rng: random.Random | None = None):
        self.status = status_store
        self._rng = rng or random.Random()

    async def classify(self, instruction: str, media_type: str, data: str) -> str:
        digit = str(self._rng.randint(0, 9))
        self.status.log(f"mock_vision: {digit}")
        return digit
