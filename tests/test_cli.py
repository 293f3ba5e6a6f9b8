import json

import pytest
from typer.testing import CliRunner

from minidash import __version__
from minidash.cli import commands
from minidash.profiles.registry import ProfileRegistry
from minidash.status.aggregator import StatusAggregator
from minidash.status.models import ComponentState
from minidash.tui import app as tui_app
from tests._helpers import FakeBackend, FakeStore

runner = CliRunner()


def _fake_backends(monkeypatch, profiles, backend):
    monkeypatch.setattr(commands, "_build_registry", lambda config: ProfileRegistry(FakeStore(profiles)))
    monkeypatch.setattr(commands, "_build_aggregator", lambda config: StatusAggregator(backend))


def test_version():
    result = runner.invoke(commands.app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_status_healthy_profiles_exit_zero(monkeypatch):
    _fake_backends(monkeypatch, ["minikube", "dev"], FakeBackend())

    result = runner.invoke(commands.app, ["status"])

    assert result.exit_code == 0
    assert "minikube" in result.stdout
    assert "dev" in result.stdout


def test_status_exit_code_carries_flags(monkeypatch):
    _fake_backends(monkeypatch, ["dev"], FakeBackend(host=ComponentState.STOPPED))

    result = runner.invoke(commands.app, ["status"])

    assert result.exit_code == 1
    assert "Stopped" in result.stdout


def test_status_for_named_profiles_skips_registry(monkeypatch):
    store = FakeStore(["ignored"])
    monkeypatch.setattr(commands, "_build_registry", lambda config: ProfileRegistry(store))
    monkeypatch.setattr(
        commands,
        "_build_aggregator",
        lambda config: StatusAggregator(FakeBackend(kubeconfig=False)),
    )

    result = runner.invoke(commands.app, ["status", "dev"])

    assert result.exit_code == 4
    assert store.calls == 0


def test_status_without_profiles(monkeypatch):
    _fake_backends(monkeypatch, [], FakeBackend())

    result = runner.invoke(commands.app, ["status"])

    assert result.exit_code == 0
    assert "No minikube profiles found" in result.stdout


def test_dashboard_without_terminal_exits_nonzero(monkeypatch):
    _fake_backends(monkeypatch, [], FakeBackend())

    result = runner.invoke(commands.app, [])

    assert result.exit_code == 1
    assert "interactive terminal" in result.stdout


def _capture_dashboard(monkeypatch):
    seen = []

    def fake_run(config, registry, check):
        seen.append(config.dashboard)
        return 0

    _fake_backends(monkeypatch, [], FakeBackend())
    monkeypatch.setattr(tui_app, "run_dashboard", fake_run)
    return seen


@pytest.mark.parametrize(
    "args",
    [
        ["--refresh-interval", "0"],
        ["--poll-interval", "-5"],
        ["--refresh-interval", "0", "--poll-interval", "-5"],
        ["--columns", "-1"],
    ],
)
def test_dashboard_rejects_out_of_range_options(monkeypatch, args):
    seen = _capture_dashboard(monkeypatch)

    result = runner.invoke(commands.app, args)

    assert result.exit_code == 2
    assert seen == []


def test_dashboard_applies_interval_overrides(monkeypatch):
    seen = _capture_dashboard(monkeypatch)

    result = runner.invoke(
        commands.app,
        ["--refresh-interval", "2.5", "--poll-interval", "30", "--columns", "2"],
    )

    assert result.exit_code == 0
    assert (seen[0].refresh_interval_s, seen[0].poll_interval_s, seen[0].max_cols) == (2.5, 30.0, 2)


def test_init_writes_default_config(isolated_home):
    target = isolated_home / "cfg.json"

    result = runner.invoke(commands.app, ["--config", str(target), "init"])

    assert result.exit_code == 0
    assert json.loads(target.read_text(encoding="utf-8"))["dashboard"]["poll_interval_s"] == 10.0


def test_init_keeps_existing_config_when_declined(isolated_home):
    target = isolated_home / "cfg.json"
    target.write_text("{}", encoding="utf-8")

    result = runner.invoke(commands.app, ["--config", str(target), "init"], input="n\n")

    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8") == "{}"
