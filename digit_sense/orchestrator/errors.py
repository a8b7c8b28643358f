"""
Error taxonomy for a guess.

Every error carries a stable ``code`` (returned by the HTTP API) and a
``user_message`` (shown to the player). None of them touch round progress.
"""

ERR_EMPTY_INPUT = "EMPTY_INPUT"
ERR_INVALID_INPUT = "INVALID_INPUT"
ERR_NO_DIGIT = "NO_DIGIT"
ERR_QUOTA = "QUOTA_EXCEEDED"
ERR_SERVICE = "SERVICE_ERROR"
ERR_UNAVAILABLE = "UNAVAILABLE"
ERR_BUSY = "BUSY"
ERR_ROUND_OVER = "ROUND_OVER"
ERR_ROUND_SUPERSEDED = "ROUND_SUPERSEDED"
ERR_UNKNOWN = "UNKNOWN"


class DigitSenseError(Exception):
    """Base class for every error a guess can surface."""

    code = ERR_UNKNOWN
    default_message = "Failed to recognize input."

    def __init__(self, user_message: str | None = None):
        self.user_message = user_message or self.default_message
        super().__init__(self.user_message)


class EmptyInputError(DigitSenseError):
    code = ERR_EMPTY_INPUT
    default_message = "Please provide an input first."


class InvalidInputError(DigitSenseError):
    code = ERR_INVALID_INPUT
    default_message = "Invalid image format."


class NoDigitRecognizedError(DigitSenseError):
    code = ERR_NO_DIGIT
    default_message = "AI could not identify a clear digit. Please try again."

    def __init__(self, raw_reply: str = "", user_message: str | None = None):
        self.raw_reply = raw_reply
        super().__init__(user_message)


class QuotaExceededError(DigitSenseError):
    code = ERR_QUOTA
    default_message = "API Quota exceeded. Please try again in a few seconds."


class RecognitionUnavailableError(QuotaExceededError):
    """Retry budget spent on quota failures; terminal for this guess."""

    code = ERR_UNAVAILABLE
    default_message = "Recognition service is busy right now. Please try again in a moment."

    def __init__(self, attempts: int, last_error: str = ""):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__()


class RecognitionServiceError(DigitSenseError):
    code = ERR_SERVICE
    default_message = "Recognition failed."

    def __init__(self, upstream_message: str = ""):
        self.upstream_message = upstream_message
        super().__init__(upstream_message or None)


class RoundBusyError(DigitSenseError):
    code = ERR_BUSY
    default_message = "Still thinking about your last guess."


class RoundOverError(DigitSenseError):
    code = ERR_ROUND_OVER
    default_message = "This round is over. Start a new game to keep playing."


class RoundSupersededError(DigitSenseError):
    code = ERR_ROUND_SUPERSEDED
    default_message = "A new round has started; that guess was discarded."
