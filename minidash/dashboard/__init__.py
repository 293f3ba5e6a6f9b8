"""Profile dashboard engine."""

from minidash.dashboard.engine import Dashboard, PanelState, diff_profiles
from minidash.dashboard.events import PanelUpdate, ReconcileResult
from minidash.dashboard.layout import Rect, columns_for_width, compute_grid, rects_overlap
from minidash.dashboard.scheduler import RefreshScheduler
from minidash.dashboard.surface import RenderSurface

__all__ = [
    "Dashboard",
    "PanelState",
    "PanelUpdate",
    "ReconcileResult",
    "Rect",
    "RefreshScheduler",
    "RenderSurface",
    "columns_for_width",
    "compute_grid",
    "diff_profiles",
    "rects_overlap",
]
