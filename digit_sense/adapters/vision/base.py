class VisionAdapter:
    """One request/response exchange with an external image classifier."""

    name = "vision"
    _ready = True

    async def classify(self, instruction: str, media_type: str, data: str) -> str:
        """Send instruction + inline base64 image, return the raw text reply.

        Must raise on transport/HTTP failure so the Recognizer can classify it.
        """
        raise NotImplementedError
