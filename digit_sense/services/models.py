from pydantic import BaseModel
from typing import Literal, Optional

ModeName = Literal["draw", "gesture"]


class RoundView(BaseModel):
    status: Literal["playing", "won", "lost"]
    wrong_guesses: int
    tries_remaining: int
    hints: list[str]
    last_recognized_digit: Optional[int] = None
    target_digit: Optional[int] = None   # revealed only once the round is over
    round_id: int


class GuessRequest(BaseModel):
    # data URL from the browser canvas / webcam; omit to use the server camera frame
    image: Optional[str] = None


class GuessResponse(BaseModel):
    ok: bool
    round: RoundView
    error_code: Optional[str] = None
    error: Optional[str] = None


class ModeRequest(BaseModel):
    mode: ModeName


class ModeResponse(BaseModel):
    ok: bool
    mode: ModeName


class StatusResponse(BaseModel):
    busy: bool
    mode: ModeName
    last_error: Optional[str] = None
    last_recognized: Optional[int] = None
    logs: list[str]
