import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from dotenv import load_dotenv
from digit_sense.services.models import (
    GuessRequest, GuessResponse, ModeRequest, ModeResponse, RoundView, StatusResponse,
)
from digit_sense.services.status_store import StatusStore
from digit_sense.orchestrator.contracts import InputMode, Round
from digit_sense.orchestrator.settings import GameSettings
from digit_sense.orchestrator.state_machine import GameController
from digit_sense.adapters.vision.recognizer import Recognizer
from digit_sense.adapters.vision.mock_vision import MockVision
from digit_sense.adapters.camera.uploaded import UploadedFrame

load_dotenv(dotenv_path="digit_sense/.env", override=False)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    controller.close()


app = FastAPI(title="digit-sense", lifespan=lifespan)

status = StatusStore()
settings = GameSettings.from_env()

# Vision adapter: controlled by VISION_ADAPTER env var
# Values: gemini | claude | kimi | mock  (default: gemini)
_vision_adapter = os.getenv("VISION_ADAPTER", "gemini").lower()

if _vision_adapter == "gemini":
    from digit_sense.adapters.vision.gemini_vision import GeminiVision
    vision = GeminiVision(status)
elif _vision_adapter == "claude":
    from digit_sense.adapters.vision.claude_vision import ClaudeVision
    vision = ClaudeVision(status)
elif _vision_adapter == "kimi":
    from digit_sense.adapters.vision.kimi_vision import KimiVision
    vision = KimiVision(status)
else:
    vision = MockVision(status)

if not vision._ready:
    status.log(f"vision: {type(vision).__name__} not ready, falling back to mock")
    vision = MockVision(status)

status.log(f"vision adapter: {type(vision).__name__}")

# Draw mode always comes from the browser canvas.
# Gesture mode: browser webcam snapshot (default) or a server-side OpenCV camera.
canvas = UploadedFrame(status, name="canvas")
camera_source = os.getenv("CAMERA_SOURCE", "browser").lower()
if camera_source == "cv2":
    from digit_sense.adapters.camera.cv2_camera import CV2Camera
    camera = CV2Camera(status)
else:
    camera = UploadedFrame(status, name="webcam")
status.log(f"camera: {type(camera).__name__}")

recognizer = Recognizer(vision, status, settings)
controller = GameController(
    recognizer,
    status,
    settings,
    sources={InputMode.DRAW: canvas, InputMode.GESTURE: camera},
)
controller.start_round()


def round_view(rnd: Round) -> RoundView:
    return RoundView(
        status=rnd.status.value,
        wrong_guesses=rnd.wrong_guess_count,
        tries_remaining=controller.tries_remaining(rnd),
        hints=controller.compute_hints(rnd),
        last_recognized_digit=rnd.last_recognized_digit,
        target_digit=rnd.target_digit if rnd.is_over else None,
        round_id=rnd.generation,
    )


@app.get("/status", response_model=StatusResponse)
def get_status():
    return StatusResponse(
        busy=status.busy,
        mode=status.mode,
        last_error=status.last_error,
        last_recognized=status.last_recognized,
        logs=status.logs,
    )


@app.get("/round", response_model=RoundView)
def get_round():
    return round_view(controller.round)


@app.post("/round/start", response_model=RoundView)
def start_round():
    status.log("ROUND_START")
    return round_view(controller.start_round())


@app.post("/mode", response_model=ModeResponse)
def set_mode(req: ModeRequest):
    mode = controller.select_mode(InputMode(req.mode))
    return ModeResponse(ok=True, mode=mode.value)


@app.post("/canvas/clear")
def clear_canvas():
    canvas.clear()
    return {"ok": True}


@app.post("/guess", response_model=GuessResponse)
async def guess(req: GuessRequest):
    """Submit one guess for the current round.

    Browser flows send the canvas export / webcam snapshot as ``image``; with
    CAMERA_SOURCE=cv2 in gesture mode the body can be empty and the server
    camera frame is used instead.
    """
    source = controller.sources.get(controller.mode)
    if req.image is not None and isinstance(source, UploadedFrame):
        source.push(req.image)
        outcome = await controller.play()
    else:
        outcome = await controller.play(req.image)
    return GuessResponse(
        ok=outcome.ok,
        round=round_view(outcome.round),
        error_code=outcome.error_code,
        error=outcome.error,
    )


@app.get("/health")
def health():
    return {
        "api": True,
        "vision_adapter": type(vision).__name__,
        "vision_ready": bool(vision._ready),
        "camera": type(camera).__name__,
        "settings": {
            "max_hints": settings.max_hints,
            "max_wrong_guesses": settings.max_wrong_guesses,
            "max_retries": settings.max_retries,
            "initial_retry_delay_ms": settings.initial_retry_delay_ms,
        },
    }
