import asyncio
import random
from dataclasses import replace
from digit_sense.orchestrator.contracts import (
    CaptureInput, GuessOutcome, InputMode, Round, RoundStatus, is_empty_capture,
)
from digit_sense.orchestrator import errors
from digit_sense.orchestrator.errors import (
    DigitSenseError, EmptyInputError, RoundBusyError, RoundOverError, RoundSupersededError,
)
from digit_sense.orchestrator.hints import compute_hints
from digit_sense.orchestrator.settings import GameSettings

EMPTY_INPUT_MESSAGES = {
    InputMode.DRAW: "Please draw a digit first.",
    InputMode.GESTURE: "Camera not ready.",
}


def advance_round(round: Round, digit: int, max_wrong_guesses: int) -> Round:
    """Apply one successfully recognised digit to a playing round."""
    if digit == round.target_digit:
        return replace(round, last_recognized_digit=digit, status=RoundStatus.WON)
    wrong = round.wrong_guess_count + 1
    status = RoundStatus.LOST if wrong >= max_wrong_guesses else RoundStatus.PLAYING
    return replace(round, last_recognized_digit=digit, wrong_guess_count=wrong, status=status)


class GameController:
    def __init__(self, recognizer, status_store, settings: GameSettings | None = None, sources=None, rng=None):
        self.recognizer = recognizer
        self.status = status_store
        self.settings = settings or GameSettings()
        self.sources = dict(sources or {})
        self._rng = rng or random.Random()
        self._generation = 0
        self._in_flight: set[int] = set()
        self._active_source = None
        self.mode = InputMode.DRAW
        self.round: Round | None = None

    # ── Round lifecycle ─────────────────────────────────────────────────────

    def start_round(self) -> Round:
        """Draw a new target and replace the current round.

        Bumping the generation abandons any recognition still in flight for the
        previous round: its result will be dropped when it lands.
        """
        self._generation += 1
        if self._in_flight:
            self.status.log(f"game: abandoning in-flight guess for round(s) {sorted(self._in_flight)}")
        self.round = Round(target_digit=self._rng.randint(0, 9), generation=self._generation)
        self.status.last_error = None
        self.status.last_recognized = None

        draw = self.sources.get(InputMode.DRAW)
        if draw is not None:
            draw.clear()
        if self._active_source is None:
            self._acquire(self.mode)

        self.status.log(f"game: round #{self._generation} started")
        return self.round

    def compute_hints(self, round: Round) -> list[str]:
        return compute_hints(round.target_digit, round.wrong_guess_count, self.settings.max_hints)

    def tries_remaining(self, round: Round) -> int:
        return max(0, self.settings.max_wrong_guesses - round.wrong_guess_count)

    # ── Guessing ────────────────────────────────────────────────────────────

    async def submit_guess(self, round: Round, capture: CaptureInput | None, mode: InputMode | None = None) -> Round:
        """Recognise ``capture`` and return the advanced round.

        Any DigitSenseError propagates to the caller; the round is never
        changed by a failure, only by a recognised digit.
        """
        mode = InputMode(mode or self.mode)
        try:
            return await self._submit(round, capture, mode)
        except DigitSenseError as e:
            # a rejection for a replaced round must not show up in the new round's status
            if round.generation == self._generation:
                self.status.last_error = e.user_message
            self.status.log(f"game: guess rejected [{e.code}] {e.user_message}")
            raise

    async def _submit(self, round: Round, capture: CaptureInput | None, mode: InputMode) -> Round:
        if round.is_over:
            raise RoundOverError()
        if round.generation != self._generation or round != self.round:
            raise RoundSupersededError()
        if is_empty_capture(capture):
            raise EmptyInputError(EMPTY_INPUT_MESSAGES[mode])
        if round.generation in self._in_flight:
            raise RoundBusyError()

        self._in_flight.add(round.generation)
        self.status.set_busy(True)
        self.status.log(f"game: round #{round.generation} recognizing ({mode.value})")
        try:
            digit = int(await self.recognizer.recognize(capture, mode))
        finally:
            self._in_flight.discard(round.generation)
            self.status.set_busy(bool(self._in_flight))

        if round.generation != self._generation:
            self.status.log(f"game: dropping late result for round #{round.generation}")
            raise RoundSupersededError()

        new_round = advance_round(round, digit, self.settings.max_wrong_guesses)
        self.round = new_round
        self.status.last_recognized = digit
        self.status.last_error = None
        self.status.log(
            f"game: round #{new_round.generation} guess={digit} "
            f"wrong={new_round.wrong_guess_count} status={new_round.status.value}"
        )
        return new_round

    async def play(self, capture: CaptureInput | None = None) -> GuessOutcome:
        """Guess with ``capture`` (or the active source's frame) and never raise.

        Every failure is folded into a GuessOutcome carrying the user message.
        """
        if self.round is None:
            self.start_round()
        round = self.round
        if capture is None:
            source = self.sources.get(self.mode)
            capture = await asyncio.to_thread(source.capture) if source is not None else None

        try:
            new_round = await self.submit_guess(round, capture, self.mode)
        except DigitSenseError as e:
            return GuessOutcome(ok=False, round=self.round, error_code=e.code, error=e.user_message)
        except Exception as e:
            self.status.log(f"game: error {type(e).__name__}: {e}")
            self.status.last_error = errors.DigitSenseError.default_message
            return GuessOutcome(
                ok=False, round=self.round, error_code=errors.ERR_UNKNOWN, error=self.status.last_error,
            )
        return GuessOutcome(ok=True, round=new_round)

    # ── Capture source ownership ───────────────────────────────────────────

    def select_mode(self, mode: InputMode) -> InputMode:
        """Switch input mode: release the old capture source, acquire the new one."""
        mode = InputMode(mode)
        if mode == self.mode and self._active_source is not None:
            return mode
        self._release_active()
        self.mode = mode
        self.status.mode = mode.value
        self._acquire(mode)
        self.status.log(f"game: mode → {mode.value}")
        return mode

    def _acquire(self, mode: InputMode):
        source = self.sources.get(mode)
        if source is not None:
            source.acquire()
            self._active_source = source

    def _release_active(self):
        if self._active_source is not None:
            try:
                self._active_source.release()
            finally:
                self._active_source = None

    def close(self):
        self._release_active()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
