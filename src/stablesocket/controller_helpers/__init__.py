"""Helper modules for the connection controller."""

from .metrics_tracker import ControllerMetrics, MetricsTracker
from .pending_switch import PendingSwitch
from .state_broadcaster import StateBroadcaster, StateListener
from .status_reporter import StatusReporter

__all__ = [
    "ControllerMetrics",
    "MetricsTracker",
    "PendingSwitch",
    "StateBroadcaster",
    "StateListener",
    "StatusReporter",
]
