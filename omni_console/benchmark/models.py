"""Data models for the speed test."""
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from omni_console.shared.models import Provider
from .exceptions import InvalidTransitionError


def now_ms() -> int:
    return int(time.time() * 1000)


class SpeedTestStatus(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class SpeedTestResult:
    """Per-model speed test outcome. Leaves LOADING exactly once and never reverts."""
    id: str
    provider: Provider
    model: str
    status: SpeedTestStatus = SpeedTestStatus.LOADING
    latency: int = 0
    ttft: Optional[int] = None
    timestamp: int = field(default_factory=now_ms)
    error_msg: Optional[str] = None
    error_kind: Optional[str] = None

    def _check_pending(self) -> None:
        if self.status is not SpeedTestStatus.LOADING:
            raise InvalidTransitionError(f"{self.provider.value}/{self.id} already finished as {self.status.value}")

    def mark_success(self, latency: int, ttft: int) -> None:
        self._check_pending()
        self.status = SpeedTestStatus.SUCCESS
        self.latency = latency
        self.ttft = ttft

    def mark_error(self, message: str, kind: Optional[str] = None) -> None:
        self._check_pending()
        self.status = SpeedTestStatus.ERROR
        self.latency = 0
        self.error_msg = message
        self.error_kind = kind

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "provider": self.provider.value,
            "model": self.model,
            "status": self.status.value,
            "latency": self.latency,
            "ttft": self.ttft,
            "timestamp": self.timestamp,
            "errorMsg": self.error_msg,
            "errorKind": self.error_kind,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class SpeedStats:
    """Summary over the successful results of one run."""
    fastest: SpeedTestResult
    avg_latency: int
    avg_ttft: int
    count: int
    p50: float
    p90: float
    p95: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fastest": self.fastest.to_dict(),
            "avgLatency": self.avg_latency,
            "avgTtft": self.avg_ttft,
            "count": self.count,
            "p50": self.p50,
            "p90": self.p90,
            "p95": self.p95,
        }
