"""
OpenCV webcam capture adapter for gesture mode.
CAMERA_INDEX env var (default 0) selects the webcam device.
The device is held open only between acquire() and release().
"""
import base64
import os
import cv2
from digit_sense.adapters.camera.base import CaptureSource


class CV2Camera(CaptureSource):
    name = "cv2_camera"

    def __init__(self, status_store, index: int | None = None, jpeg_quality: int = 85):
        self.status = status_store
        self._index = index if index is not None else int(os.getenv("CAMERA_INDEX", "0"))
        self._quality = jpeg_quality
        self._cap = None

    def acquire(self):
        if self._cap is None or not self._cap.isOpened():
            self._cap = cv2.VideoCapture(self._index)
            if not self._cap.isOpened():
                self.status.log(f"cv2_camera: failed to open device {self._index}")
            else:
                self.status.log(f"cv2_camera: device {self._index} opened")

    def capture(self) -> str | None:
        if self._cap is None or not self._cap.isOpened():
            self.status.log("cv2_camera: not acquired")
            return None
        ret, frame = self._cap.read()
        if not ret or frame is None:
            self.status.log("cv2_camera: frame capture failed")
            return None
        ok, buf = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, self._quality])
        if not ok:
            return None
        b64 = base64.standard_b64encode(bytes(buf)).decode("utf-8")
        return f"data:image/jpeg;base64,{b64}"

    def release(self):
        if self._cap is not None:
            if self._cap.isOpened():
                self._cap.release()
                self.status.log(f"cv2_camera: device {self._index} released")
            self._cap = None
