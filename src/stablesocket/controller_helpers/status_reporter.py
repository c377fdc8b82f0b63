"""Status reporting for the connection controller."""

from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from ..controller import ConnectionController


class StatusReporter:
    """Reports controller status and metrics."""

    def __init__(self, controller: "ConnectionController"):
        self.controller = controller

    def get_status(self) -> Dict[str, Any]:
        """Get current connection status and metrics."""
        controller = self.controller
        dispatcher = controller.dispatcher
        metrics = controller.metrics_tracker.as_dict()
        metrics["messages_received"] = dispatcher.messages_received
        metrics["decode_failures"] = dispatcher.decode_failures
        metrics["switches_collapsed"] = controller.pending_switch.rearm_count
        return {
            "name": controller.name,
            "target": controller.target,
            "address": controller.address,
            "state": controller.state.value,
            "pending_switch": controller.pending_switch.address,
            "queued_frames": len(controller.queue),
            "closing_connections": controller.closing_count,
            "disposed": controller.disposed,
            "metrics": metrics,
            "config": {
                "debounce_seconds": controller.config.debounce_seconds,
                "open_timeout_seconds": controller.config.open_timeout_seconds,
                "close_timeout_seconds": controller.config.close_timeout_seconds,
            },
        }
