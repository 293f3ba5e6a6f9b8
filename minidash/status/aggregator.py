"""Aggregate per-component backend answers into one profile snapshot."""

from __future__ import annotations

import time
from datetime import datetime
from typing import Callable

from loguru import logger

from minidash.status.backend import StatusBackend
from minidash.status.models import (
    ComponentState,
    KubeconfigState,
    StatusFlags,
    StatusSnapshot,
)


class StatusAggregator:
    """Builds ``StatusSnapshot`` objects from a ``StatusBackend``.

    ``check_status`` never raises. Each backend failure is absorbed where it
    happens: the affected field becomes ``Unknown`` (or ``Misconfigured`` for
    kubeconfig) and the matching flag bit is set, while the remaining queries
    still run.
    """

    def __init__(self, backend: StatusBackend, clock: Callable[[], float] = time.time) -> None:
        self.backend = backend
        self._clock = clock

    def check_status(self, profile: str) -> StatusSnapshot:
        try:
            host = self.backend.get_host_state(profile)
        except Exception as exc:
            logger.debug(f"[status] {profile}: host query failed: {exc}")
            host = ComponentState.UNKNOWN

        if host != ComponentState.RUNNING:
            return StatusSnapshot(
                profile=profile,
                host=host,
                flags=StatusFlags.MINIKUBE_NOT_RUNNING,
                taken_at=self._clock(),
            )

        flags = StatusFlags.OK

        kubelet, failed = self._component(profile, "kubelet", self.backend.get_kubelet_state)
        if failed or kubelet != ComponentState.RUNNING:
            flags |= StatusFlags.CLUSTER_NOT_RUNNING

        apiserver, failed = self._component(profile, "apiserver", self.backend.get_apiserver_state)
        if failed or apiserver != ComponentState.RUNNING:
            flags |= StatusFlags.CLUSTER_NOT_RUNNING

        try:
            configured = self.backend.get_kubeconfig_state(profile)
        except Exception as exc:
            logger.debug(f"[status] {profile}: kubeconfig query failed: {exc}")
            configured = False
        if configured:
            kubeconfig = KubeconfigState.CONFIGURED
        else:
            kubeconfig = KubeconfigState.MISCONFIGURED
            flags |= StatusFlags.K8S_NOT_RUNNING

        return StatusSnapshot(
            profile=profile,
            host=host,
            kubelet=kubelet,
            apiserver=apiserver,
            kubeconfig=kubeconfig,
            flags=flags,
            taken_at=self._clock(),
        )

    @staticmethod
    def _component(
        profile: str,
        label: str,
        query: Callable[[str], ComponentState],
    ) -> tuple[ComponentState, bool]:
        try:
            return query(profile), False
        except Exception as exc:
            logger.debug(f"[status] {profile}: {label} query failed: {exc}")
            return ComponentState.UNKNOWN, True


def format_status(snapshot: StatusSnapshot) -> str:
    """Render a snapshot as the text shown inside a profile panel."""
    lines: list[str] = []
    if snapshot.kubeconfig == KubeconfigState.MISCONFIGURED:
        lines.append("Misconfigured")
        lines.append("")
    lines.extend(
        [
            f"host:       {snapshot.host.value}",
            f"kubelet:    {snapshot.kubelet.value}",
            f"apiserver:  {snapshot.apiserver.value}",
            f"kubeconfig: {snapshot.kubeconfig.value}",
        ]
    )
    if snapshot.flags:
        lines.append(f"flags:      {', '.join(snapshot.flags.names())}")
    stamp = datetime.fromtimestamp(snapshot.taken_at).strftime("%H:%M:%S")
    lines.append(f"updated:    {stamp}")
    return "\n".join(lines)
