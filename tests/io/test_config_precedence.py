from __future__ import annotations

from pathlib import Path

import pytest

from scenekit.io import EngineSettings, IoConfigError

ENV_KEYS = [
    "SCENEKIT_WIDTH",
    "SCENEKIT_HEIGHT",
    "SCENEKIT_COORDINATE_PRECISION",
    "SCENEKIT_LOG_LEVEL",
]


def _write_scenekit_toml(tmp: Path, content: str) -> Path:
    p = tmp / "scenekit.toml"
    p.write_text(content)
    return p


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_engine_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    _write_scenekit_toml(
        tmp_path,
        """
        [engine]
        width = 800
        height = 500
        coordinate_precision = 2
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SCENEKIT_WIDTH", "1024")
    monkeypatch.setenv("SCENEKIT_COORDINATE_PRECISION", "none")
    monkeypatch.setenv("SCENEKIT_LOG_LEVEL", "debug")

    s = EngineSettings.load()

    assert s.width == 1024.0  # env override
    assert s.height == 500.0  # TOML
    assert s.coordinate_precision is None  # env override
    assert s.log_level == "DEBUG"


def test_engine_settings_from_toml_top_level_keys(tmp_path: Path, monkeypatch) -> None:
    _write_scenekit_toml(tmp_path, 'width = 320\nheight = 240\nlog_level = "INFO"\n')
    monkeypatch.chdir(tmp_path)

    s = EngineSettings.load()

    assert (s.width, s.height, s.log_level) == (320.0, 240.0, "INFO")


def test_engine_settings_from_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.scenekit.engine]\ncoordinate_precision = 3\n")
    monkeypatch.chdir(tmp_path)

    assert EngineSettings.load().coordinate_precision == 3


def test_engine_settings_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    s = EngineSettings.load()

    assert s == EngineSettings()
    assert (s.width, s.height, s.coordinate_precision, s.log_level) == (600.0, 400.0, None, "WARNING")


def test_unparseable_env_value_keeps_previous_layer(tmp_path: Path, monkeypatch) -> None:
    _write_scenekit_toml(tmp_path, "[engine]\nwidth = 700\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SCENEKIT_WIDTH", "wide")

    assert EngineSettings.load().width == 700.0


def test_out_of_range_values_raise(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SCENEKIT_HEIGHT", "-5")
    with pytest.raises(IoConfigError):
        EngineSettings.load()

    monkeypatch.delenv("SCENEKIT_HEIGHT")
    monkeypatch.setenv("SCENEKIT_LOG_LEVEL", "chatty")
    with pytest.raises(IoConfigError):
        EngineSettings.load()


def test_explicit_path_errors(tmp_path: Path) -> None:
    with pytest.raises(IoConfigError, match="not found"):
        EngineSettings.load(tmp_path / "missing.toml")

    bad = tmp_path / "bad.toml"
    bad.write_text("width = = 3\n")
    with pytest.raises(IoConfigError, match="invalid TOML"):
        EngineSettings.load(bad)

    binary = tmp_path / "binary.toml"
    binary.write_bytes(b"width = \xff\n")
    with pytest.raises(IoConfigError, match="invalid TOML"):
        EngineSettings.load(binary)
