from dataclasses import dataclass, field
from typing import Optional, List

MAX_LOG_LINES = 200


@dataclass
class StatusStore:
    busy: bool = False
    mode: str = "draw"
    last_error: Optional[str] = None
    last_recognized: Optional[int] = None
    logs: List[str] = field(default_factory=list)

    def set_busy(self, v: bool):
        self.busy = v

    def log(self, msg: str):
        self.logs.append(msg)
        if len(self.logs) > MAX_LOG_LINES:
            self.logs = self.logs[-MAX_LOG_LINES:]
