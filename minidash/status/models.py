"""Status data models for profile health monitoring."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum, IntFlag


class ComponentState(str, Enum):
    """State reported for one cluster component (host, kubelet, apiserver)."""

    NONE = "None"
    RUNNING = "Running"
    PAUSED = "Paused"
    SAVED = "Saved"
    STOPPED = "Stopped"
    STOPPING = "Stopping"
    STARTING = "Starting"
    ERROR = "Error"
    TIMEOUT = "Timeout"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, raw: str) -> "ComponentState":
        """Map backend text to a state; anything unrecognised is ``UNKNOWN``."""
        text = (raw or "").strip()
        if text == "Nonexistent":
            return cls.NONE
        for member in cls:
            if member.value.lower() == text.lower():
                return member
        return cls.UNKNOWN


class KubeconfigState(str, Enum):
    """Whether the profile's cluster is wired into kubeconfig."""

    NONE = "None"
    CONFIGURED = "Configured"
    MISCONFIGURED = "Misconfigured"


class StatusFlags(IntFlag):
    """Independent failure bits; the combined value is also an exit code."""

    OK = 0
    MINIKUBE_NOT_RUNNING = 1 << 0
    CLUSTER_NOT_RUNNING = 1 << 1
    K8S_NOT_RUNNING = 1 << 2

    def names(self) -> list[str]:
        labels = {
            StatusFlags.MINIKUBE_NOT_RUNNING: "MinikubeNotRunning",
            StatusFlags.CLUSTER_NOT_RUNNING: "ClusterNotRunning",
            StatusFlags.K8S_NOT_RUNNING: "K8sNotRunning",
        }
        return [label for flag, label in labels.items() if self & flag]


@dataclass(frozen=True)
class StatusSnapshot:
    """Combined status of one profile at one point in time."""

    profile: str
    host: ComponentState = ComponentState.NONE
    kubelet: ComponentState = ComponentState.NONE
    apiserver: ComponentState = ComponentState.NONE
    kubeconfig: KubeconfigState = KubeconfigState.NONE
    flags: StatusFlags = StatusFlags.OK
    taken_at: float = field(default_factory=time.time)

    @property
    def healthy(self) -> bool:
        return self.flags == StatusFlags.OK

    @property
    def exit_code(self) -> int:
        return int(self.flags)
