"""Terminal UI for minidash."""

from minidash.tui.app import DashboardApp, ProfilePanel, run_dashboard

__all__ = ["DashboardApp", "ProfilePanel", "run_dashboard"]
