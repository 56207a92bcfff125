"""Runtime orchestration components."""

from .pump import Pump, PumpMetrics, PumpState, start_pump

__all__ = [
    "Pump",
    "PumpMetrics",
    "PumpState",
    "start_pump",
]
