import json

import pytest
from pydantic import ValidationError

from minidash.config.loader import get_config_path, load_config, save_config
from minidash.config.schema import Config, DashboardConfig
from minidash.profiles.store import MinikubeCLIProfileStore
from minidash.status.backend import MinikubeStatusBackend


def test_defaults_when_file_missing(tmp_path):
    config = load_config(tmp_path / "missing.json")

    assert config.dashboard.refresh_interval_s == 10.0
    assert config.dashboard.poll_interval_s == 10.0
    assert config.dashboard.max_cols == 0
    assert config.minikube.command == "minikube"
    assert config.minikube.profile_source == "cli"


def test_values_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"dashboard": {"max_cols": 2}, "minikube": {"profile_source": "files"}}),
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.dashboard.max_cols == 2
    assert config.dashboard.cell_width == 31
    assert config.minikube.profile_source == "files"


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"dashboard": {"poll_interval_s": 20, "max_cols": 4}}), encoding="utf-8")
    monkeypatch.setenv("MINIDASH_DASHBOARD__POLL_INTERVAL_S", "5")

    config = load_config(path)

    assert config.dashboard.poll_interval_s == 5.0
    assert config.dashboard.max_cols == 4


def test_broken_or_invalid_file_falls_back_to_defaults(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    invalid = tmp_path / "invalid.json"
    invalid.write_text(json.dumps({"dashboard": {"pad": 0}}), encoding="utf-8")

    assert load_config(broken).dashboard.pad == 1
    assert load_config(invalid).dashboard.pad == 1


def test_save_writes_loadable_file(isolated_home):
    config = Config()
    config.dashboard.max_cols = 5

    written = save_config(config)

    assert written == get_config_path()
    assert written.parent == isolated_home / "minidash-home"
    assert load_config().dashboard.max_cols == 5


def test_default_log_path_lives_under_data_dir(isolated_home):
    assert Config().log_path == isolated_home / "minidash-home" / "logs" / "minidash.log"


def test_cells_must_be_larger_than_pad(tmp_path):
    with pytest.raises(ValidationError):
        DashboardConfig(cell_width=4, cell_height=4, pad=4)

    path = tmp_path / "config.json"
    path.write_text(json.dumps({"dashboard": {"cell_width": 4, "cell_height": 4, "pad": 4}}), encoding="utf-8")

    config = load_config(path)

    assert (config.dashboard.cell_width, config.dashboard.pad) == (31, 1)


def test_assigned_values_are_validated():
    config = Config()

    with pytest.raises(ValidationError):
        config.dashboard.poll_interval_s = -5
    with pytest.raises(ValidationError):
        config.dashboard.pad = 40
    with pytest.raises(ValidationError):
        config.minikube.timeout_s = 0

    assert config.dashboard.poll_interval_s == 10.0


def test_query_timeout_default_matches_backends():
    assert Config().minikube.timeout_s == 10.0
    assert MinikubeStatusBackend().timeout_s == Config().minikube.timeout_s
    assert MinikubeCLIProfileStore().timeout_s == Config().minikube.timeout_s
