"""Tests for jsonconfig.store load/save semantics."""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

import pytest

from jsonconfig.codec import NAMING_CAMEL, SerializerSettings
from jsonconfig.config import JsonConfig
from jsonconfig.errors import ConfigDecodeError
from jsonconfig.options import JsonConfigOptions, set_global_options
from jsonconfig.serializer import JsonSerializer, YamlSerializer
from jsonconfig.store import (
    LoadResult,
    config_to_text,
    default_path_for,
    load_config,
    save_config,
    try_load_config,
    try_save_config,
)


@dataclass
class AppSettings(JsonConfig):
    theme: str = "dark"
    retries: int = 3
    plugins: List[str] = field(default_factory=list)


@dataclass
class WindowState(JsonConfig):
    window_title: str = "main"
    width: int = 800


@dataclass
class X(JsonConfig):
    value: int = 1


class PlainPrefs:
    def __init__(self):
        self.volume = 5


class Channel(Enum):
    STABLE = "stable"
    BETA = "beta"


@dataclass
class RoutingTable(JsonConfig):
    ports: Dict[int, str] = field(default_factory=dict)
    rollout: Dict[Channel, int] = field(default_factory=dict)


class PlainAudio:
    def __init__(self):
        self.device = "default"


class PlainProfile:
    audio: PlainAudio

    def __init__(self):
        self.audio = PlainAudio()


CREATE = JsonConfigOptions(create_new=True, save_new=False)
CREATE_AND_SAVE = JsonConfigOptions(create_new=True, save_new=True)
NO_CREATE = JsonConfigOptions(create_new=False)


def test_save_then_load_round_trips_payload(tmp_path) -> None:
    path = tmp_path / "app.json"
    source = AppSettings(theme="light", retries=7, plugins=["git", "lint"])
    save_config(source, path)
    loaded = load_config(AppSettings, path)
    assert loaded == source
    assert loaded.path == str(path)


def test_default_path_is_type_name_in_working_directory(work_dir) -> None:
    assert default_path_for(AppSettings) == "AppSettings.json"
    assert default_path_for(PlainPrefs) == "PlainPrefs.json"

    save_config(AppSettings(theme="solarized"))
    assert (work_dir / "AppSettings.json").is_file()

    loaded = load_config(AppSettings)
    assert loaded.theme == "solarized"
    assert loaded.path == "AppSettings.json"


def test_create_new_without_save_new_writes_nothing(tmp_path) -> None:
    path = tmp_path / "missing.json"
    config = load_config(AppSettings, path, CREATE)
    assert config == AppSettings()
    assert config.path == str(path)
    assert config.options is CREATE
    assert not path.exists()


def test_create_new_with_save_new_writes_default(tmp_path) -> None:
    path = tmp_path / "missing.json"
    config = load_config(AppSettings, path, CREATE_AND_SAVE)
    assert config == AppSettings()
    assert path.read_text(encoding="utf-8") == config_to_text(config)


def test_missing_file_without_create_new_is_absent(tmp_path) -> None:
    path = tmp_path / "missing.json"
    assert load_config(AppSettings, path, NO_CREATE) is None
    result = try_load_config(AppSettings, path, NO_CREATE)
    assert result == (True, None)
    assert isinstance(result, LoadResult)
    assert result.success is True
    assert result.config is None
    assert not path.exists()


def test_null_document_is_absent(tmp_path) -> None:
    path = tmp_path / "null.json"
    path.write_text("null", encoding="utf-8")
    assert load_config(AppSettings, path) is None
    assert try_load_config(AppSettings, path) == (True, None)


def test_malformed_json_raises_but_try_load_reports_failure(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text('{"theme": "dark",', encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        load_config(AppSettings, path)
    assert try_load_config(AppSettings, path) == (False, None)


def test_type_mismatch_raises_decode_error(tmp_path) -> None:
    path = tmp_path / "wrong.json"
    path.write_text('{"retries": "many"}', encoding="utf-8")
    with pytest.raises(ConfigDecodeError, match="retries"):
        load_config(AppSettings, path)
    assert try_load_config(AppSettings, path).success is False


def test_global_default_applies_to_every_type_at_call_time(tmp_path) -> None:
    app_path = tmp_path / "app.json"
    window_path = tmp_path / "window.json"

    set_global_options(JsonConfigOptions(create_new=False))
    assert load_config(AppSettings, app_path) is None
    assert load_config(WindowState, window_path) is None

    set_global_options(JsonConfigOptions(create_new=True))
    assert load_config(AppSettings, app_path) == AppSettings()
    assert load_config(WindowState, window_path) == WindowState()


def test_create_and_save_through_global_default(work_dir) -> None:
    set_global_options(JsonConfigOptions(create_new=True, save_new=True))
    config = load_config(X, "X.json")
    assert config == X()
    written = (work_dir / "X.json").read_text(encoding="utf-8")
    assert written == config_to_text(X())
    assert json.loads(written) == {"value": 1}


def test_bookkeeping_never_reaches_the_file(tmp_path) -> None:
    path = tmp_path / "app.json"
    config = load_config(AppSettings, path, CREATE_AND_SAVE)
    config.save()
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert set(payload) == {"theme", "retries", "plugins"}


def test_save_defaults_to_bound_path(tmp_path) -> None:
    path = tmp_path / "app.json"
    config = load_config(AppSettings, path, CREATE)
    config.retries = 9
    save_config(config)
    assert load_config(AppSettings, path).retries == 9


def test_save_to_other_path_does_not_rebind(tmp_path) -> None:
    home = tmp_path / "home.json"
    other = tmp_path / "other.json"
    config = load_config(AppSettings, home, CREATE)
    save_config(config, other, NO_CREATE)
    assert other.is_file()
    assert not home.exists()
    assert config.path == str(home)
    assert config.options is CREATE


def test_save_options_resolution_order(tmp_path) -> None:
    path = tmp_path / "window.json"
    config = WindowState()

    save_config(config, path)
    assert "window_title" in path.read_text(encoding="utf-8")

    set_global_options(JsonConfigOptions(serializer_settings=SerializerSettings(naming=NAMING_CAMEL)))
    save_config(config, path)
    assert "windowTitle" in path.read_text(encoding="utf-8")

    config.options = JsonConfigOptions(serializer_settings=SerializerSettings(indent=None))
    save_config(config, path)
    assert path.read_text(encoding="utf-8") == '{"window_title": "main", "width": 800}'

    save_config(config, path, JsonConfigOptions(serializer=YamlSerializer()))
    assert "window_title: main" in path.read_text(encoding="utf-8")


def test_plain_class_supported(tmp_path) -> None:
    path = tmp_path / "prefs.json"
    prefs = load_config(PlainPrefs, path, CREATE)
    assert prefs.volume == 5
    prefs.volume = 9
    save_config(prefs)
    assert json.loads(path.read_text(encoding="utf-8")) == {"volume": 9}
    assert load_config(PlainPrefs, path).volume == 9


def test_try_save_reports_failure(tmp_path) -> None:
    assert try_save_config(AppSettings(), tmp_path) is False
    with pytest.raises(OSError):
        save_config(AppSettings(), tmp_path)
    assert try_save_config(AppSettings(), tmp_path / "ok.json") is True


def test_try_load_logs_swallowed_failure(tmp_path, caplog) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="jsonconfig.store"):
        assert try_load_config(AppSettings, path).success is False
    assert "Failed to load AppSettings" in caplog.text


def test_injected_filesystem_is_used(memory_fs) -> None:
    options = JsonConfigOptions(create_new=True, save_new=True, filesystem=memory_fs)
    config = load_config(AppSettings, "conf/app.json", options)
    assert config == AppSettings()
    assert json.loads(memory_fs.files["conf/app.json"])["theme"] == "dark"

    memory_fs.files["conf/app.json"] = '{"theme": "light"}'
    assert load_config(AppSettings, "conf/app.json", options).theme == "light"


def test_read_error_propagates(memory_fs, mocker) -> None:
    memory_fs.files["app.json"] = "{}"
    mocker.patch.object(memory_fs, "read_text", side_effect=PermissionError("denied"))
    options = JsonConfigOptions(filesystem=memory_fs)
    with pytest.raises(PermissionError):
        load_config(AppSettings, "app.json", options)
    assert try_load_config(AppSettings, "app.json", options) == (False, None)


@pytest.mark.parametrize("serializer", [JsonSerializer(), YamlSerializer()])
def test_non_string_dict_keys_round_trip(tmp_path, serializer) -> None:
    path = tmp_path / "routes.cfg"
    options = JsonConfigOptions(serializer=serializer)
    table = RoutingTable(
        ports={80: "http", 443: "https"},
        rollout={Channel.STABLE: 90, Channel.BETA: 10},
    )
    save_config(table, path, options)
    loaded = load_config(RoutingTable, path, options)
    assert loaded == table
    assert loaded.ports[443] == "https"
    assert loaded.rollout[Channel.BETA] == 10


def test_nested_plain_object_round_trip(tmp_path) -> None:
    path = tmp_path / "profile.json"
    profile = PlainProfile()
    profile.audio.device = "headset"
    save_config(profile, path)
    assert json.loads(path.read_text(encoding="utf-8")) == {"audio": {"device": "headset"}}

    loaded = load_config(PlainProfile, path)
    assert isinstance(loaded.audio, PlainAudio)
    assert loaded.audio.device == "headset"
