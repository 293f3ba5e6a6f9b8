"""Profile status queries and aggregation."""

from minidash.status.aggregator import StatusAggregator, format_status
from minidash.status.backend import MinikubeStatusBackend, StatusBackend
from minidash.status.models import ComponentState, KubeconfigState, StatusFlags, StatusSnapshot

__all__ = [
    "ComponentState",
    "KubeconfigState",
    "MinikubeStatusBackend",
    "StatusAggregator",
    "StatusBackend",
    "StatusFlags",
    "StatusSnapshot",
    "format_status",
]
