"""Controller metrics tracking."""

import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class ControllerMetrics:
    """Counters describing a controller's connection churn and traffic."""

    connections_created: int = 0
    connections_opened: int = 0
    connections_closed: int = 0
    switches_completed: int = 0
    switches_cancelled: int = 0
    messages_sent: int = 0
    last_open_time: Optional[float] = None
    last_close_time: Optional[float] = None


class MetricsTracker:
    """Tracks controller metrics."""

    def __init__(self):
        self.metrics = ControllerMetrics()

    def record_created(self) -> None:
        self.metrics.connections_created += 1

    def record_opened(self) -> None:
        self.metrics.connections_opened += 1
        self.metrics.last_open_time = time.time()

    def record_closed(self) -> None:
        self.metrics.connections_closed += 1
        self.metrics.last_close_time = time.time()

    def record_switch(self) -> None:
        self.metrics.switches_completed += 1

    def record_switch_cancelled(self) -> None:
        self.metrics.switches_cancelled += 1

    def record_sent(self, count: int) -> None:
        self.metrics.messages_sent += count

    def get_metrics(self) -> ControllerMetrics:
        """Get current metrics."""
        return self.metrics

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self.metrics)
