"""Status backends answering per-profile component queries.

The aggregator only relies on the ``StatusBackend`` protocol. The bundled
``MinikubeStatusBackend`` shells out to the minikube CLI, one Go-template query
per component::

    minikube status -p <profile> --format {{.Host}}

``minikube status`` exits non-zero whenever a component is not running, so the
exit code alone is not treated as a failure; an empty answer is.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from loguru import logger

from minidash.errors import BackendQueryError
from minidash.status.models import ComponentState


class StatusBackend(Protocol):
    def get_host_state(self, profile: str) -> ComponentState:
        ...

    def get_kubelet_state(self, profile: str) -> ComponentState:
        ...

    def get_apiserver_state(self, profile: str) -> ComponentState:
        ...

    def get_kubeconfig_state(self, profile: str) -> bool:
        ...


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    stdout: str
    stderr: str = ""


CommandRunner = Callable[[Sequence[str], float], CommandResult]


def run_command(args: Sequence[str], timeout_s: float) -> CommandResult:
    """Run a command and capture its output.

    ``OSError`` (binary missing) and timeouts propagate to the caller.
    """
    proc = subprocess.run(
        list(args),
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="ignore",
        timeout=timeout_s,
    )
    return CommandResult(proc.returncode, proc.stdout or "", proc.stderr or "")


class MinikubeStatusBackend:
    """Status backend backed by ``minikube status``."""

    def __init__(
        self,
        command: str = "minikube",
        timeout_s: float = 10.0,
        runner: CommandRunner | None = None,
    ) -> None:
        self.command = command
        self.timeout_s = timeout_s
        self._runner = runner or run_command

    def get_host_state(self, profile: str) -> ComponentState:
        return ComponentState.parse(self._query(profile, "Host"))

    def get_kubelet_state(self, profile: str) -> ComponentState:
        return ComponentState.parse(self._query(profile, "Kubelet"))

    def get_apiserver_state(self, profile: str) -> ComponentState:
        return ComponentState.parse(self._query(profile, "APIServer"))

    def get_kubeconfig_state(self, profile: str) -> bool:
        return self._query(profile, "Kubeconfig") == "Configured"

    def _query(self, profile: str, field_name: str) -> str:
        args = [
            self.command,
            "status",
            "-p",
            profile,
            "--format",
            "{{." + field_name + "}}",
        ]
        try:
            result = self._runner(args, self.timeout_s)
        except subprocess.TimeoutExpired as exc:
            raise BackendQueryError(profile, field_name, f"timed out after {self.timeout_s}s") from exc
        except OSError as exc:
            raise BackendQueryError(profile, field_name, str(exc)) from exc

        value = result.stdout.strip().splitlines()
        if not value:
            reason = result.stderr.strip() or f"exit code {result.returncode}"
            raise BackendQueryError(profile, field_name, reason)
        # Multi-node profiles print one line per node; the first is the control plane.
        answer = value[0].strip()
        logger.trace(f"[status] {profile}.{field_name} -> {answer!r} (rc={result.returncode})")
        return answer
