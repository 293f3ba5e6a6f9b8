"""Fakes for the dashboard collaborators."""

from __future__ import annotations

from minidash.dashboard.layout import Rect
from minidash.status.models import ComponentState, KubeconfigState, StatusFlags, StatusSnapshot


class FakeSurface:
    """Records every panel primitive in call order."""

    def __init__(self) -> None:
        self.panels: dict[str, dict] = {}
        self.ops: list[tuple] = []

    def create_panel(self, name: str, rect: Rect, title: str) -> None:
        assert name not in self.panels, f"panel {name} created twice"
        self.panels[name] = {"rect": rect, "text": "", "title": title}
        self.ops.append(("create", name))

    def place_panel(self, name: str, rect: Rect) -> None:
        self.panels[name]["rect"] = rect
        self.ops.append(("place", name))

    def update_panel(self, name: str, text: str) -> None:
        assert name in self.panels, f"update for missing panel {name}"
        self.panels[name]["text"] = text
        self.ops.append(("update", name))

    def delete_panel(self, name: str) -> None:
        del self.panels[name]
        self.ops.append(("delete", name))

    def list_panel_names(self) -> set[str]:
        return set(self.panels)

    def count(self, op: str) -> int:
        return sum(1 for entry in self.ops if entry[0] == op)

    def rect(self, name: str) -> Rect:
        return self.panels[name]["rect"]


class FakeStore:
    """Profile store returning scripted answers; exceptions are raised."""

    def __init__(self, *answers) -> None:
        self.answers = list(answers)
        self.calls = 0

    def list_profiles(self) -> list[str]:
        self.calls += 1
        answer = self.answers.pop(0) if len(self.answers) > 1 else self.answers[0]
        if isinstance(answer, Exception):
            raise answer
        return list(answer)


class FakeBackend:
    """Per-query answers; an exception instance is raised instead of returned."""

    def __init__(
        self,
        host=ComponentState.RUNNING,
        kubelet=ComponentState.RUNNING,
        apiserver=ComponentState.RUNNING,
        kubeconfig=True,
    ) -> None:
        self.answers = {
            "host": host,
            "kubelet": kubelet,
            "apiserver": apiserver,
            "kubeconfig": kubeconfig,
        }
        self.calls: list[str] = []

    def _answer(self, query: str, profile: str):
        self.calls.append(query)
        value = self.answers[query]
        if isinstance(value, Exception):
            raise value
        return value

    def get_host_state(self, profile: str) -> ComponentState:
        return self._answer("host", profile)

    def get_kubelet_state(self, profile: str) -> ComponentState:
        return self._answer("kubelet", profile)

    def get_apiserver_state(self, profile: str) -> ComponentState:
        return self._answer("apiserver", profile)

    def get_kubeconfig_state(self, profile: str) -> bool:
        return self._answer("kubeconfig", profile)


def healthy_check(profile: str) -> StatusSnapshot:
    return StatusSnapshot(
        profile=profile,
        host=ComponentState.RUNNING,
        kubelet=ComponentState.RUNNING,
        apiserver=ComponentState.RUNNING,
        kubeconfig=KubeconfigState.CONFIGURED,
        flags=StatusFlags.OK,
    )
