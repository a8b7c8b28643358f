"""Shared fakes for the digit-sense tests."""

import os

import pytest

# The service module wires itself up at import time; keep it offline.
os.environ["VISION_ADAPTER"] = "mock"
os.environ["CAMERA_SOURCE"] = "browser"

from digit_sense.adapters.vision.base import VisionAdapter
from digit_sense.adapters.vision.recognizer import Recognizer
from digit_sense.adapters.camera.uploaded import UploadedFrame
from digit_sense.orchestrator.contracts import InputMode
from digit_sense.orchestrator.settings import GameSettings
from digit_sense.orchestrator.state_machine import GameController
from digit_sense.services.status_store import StatusStore

PNG = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8"


class ScriptedVision(VisionAdapter):
    """Replays a script of replies; Exception items are raised instead of returned."""

    name = "scripted"

    def __init__(self, script=None):
        self.script = list(script or [])
        self.calls = []

    async def classify(self, instruction, media_type, data):
        self.calls.append((instruction, media_type, data))
        item = self.script.pop(0) if self.script else "0"
        if isinstance(item, BaseException):
            raise item
        return item


class RecordingSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


class FixedRng:
    def __init__(self, *targets):
        self.targets = list(targets)

    def randint(self, a, b):
        return self.targets.pop(0) if len(self.targets) > 1 else self.targets[0]


class UpstreamError(Exception):
    pass


@pytest.fixture
def status():
    return StatusStore()


@pytest.fixture
def settings():
    return GameSettings()


@pytest.fixture
def vision():
    return ScriptedVision()


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def recognizer(vision, status, settings, sleep):
    return Recognizer(vision, status, settings, sleep=sleep)


@pytest.fixture
def canvas(status):
    return UploadedFrame(status, name="canvas")


@pytest.fixture
def webcam(status):
    return UploadedFrame(status, name="webcam")


@pytest.fixture
def make_controller(recognizer, status, settings, canvas, webcam):
    def _make(*targets):
        return GameController(
            recognizer,
            status,
            settings,
            sources={InputMode.DRAW: canvas, InputMode.GESTURE: webcam},
            rng=FixedRng(*(targets or (7,))),
        )
    return _make
