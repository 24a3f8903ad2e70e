"""Test configuration management."""

import tomllib
from pathlib import Path

import pytest

from tagnorm.config.config import BPM_MAX_DEFAULT, ID3V2_VERSION_DEFAULT, Config
from tagnorm.config.paths import default_config_path


def test_default_config(config_runtime_env: Path) -> None:
    """Default configuration is created at the portable repo location."""
    _ = config_runtime_env
    config = Config()
    assert config.log_file is None
    assert config.bpm_max == BPM_MAX_DEFAULT
    assert config.id3v2_version == ID3V2_VERSION_DEFAULT
    assert config.cover_art is True

    saved_to = config.save()
    assert saved_to == default_config_path()
    assert saved_to.exists()


def test_load_creates_default_file(config_runtime_env: Path) -> None:
    expected = config_runtime_env / "config" / "config.toml"
    assert not expected.exists()

    config = Config.load()

    assert expected.exists()
    assert config == Config()


def test_save_load_toml(config_runtime_env: Path) -> None:
    """Saved values survive a reload."""
    _ = config_runtime_env
    original_config = Config(
        log_file=Path("/test/logs/tagnorm.log"),
        bpm_max=208.0,
        id3v2_version=3,
        cover_art=False,
    )
    _ = original_config.save()

    Config.reset()
    loaded_config = Config.load()

    assert loaded_config.log_file == Path("/test/logs/tagnorm.log")
    assert loaded_config.bpm_max == 208.0
    assert loaded_config.id3v2_version == 3
    assert loaded_config.cover_art is False


def test_empty_log_file_string_becomes_none() -> None:
    assert Config(log_file="  ").log_file is None  # pyright: ignore[reportArgumentType]


def test_singleton_behavior(config_runtime_env: Path) -> None:
    """Repeated loads of the same path return the cached instance."""
    _ = config_runtime_env
    config1 = Config.load()
    config1.bpm_max = 180.0
    _ = config1.save()

    config2 = Config.load()
    assert config2 is config1
    assert config2.bpm_max == 180.0


def test_load_explicit_path(config_runtime_env: Path) -> None:
    path = config_runtime_env / "other.toml"
    _ = path.write_text("id3v2_version = 3\n", encoding="utf-8")

    default = Config.load()
    explicit = Config.load(path)

    assert explicit is not default
    assert explicit.id3v2_version == 3
    assert default.id3v2_version == ID3V2_VERSION_DEFAULT


def test_unknown_keys_are_ignored(config_runtime_env: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = config_runtime_env / "legacy.toml"
    _ = path.write_text('base_path = "/music"\nbpm_max = 250.0\n', encoding="utf-8")

    config = Config.load(path)

    assert config.bpm_max == 250.0
    assert "base_path" in caplog.text


def test_invalid_toml_raises(config_runtime_env: Path) -> None:
    path = config_runtime_env / "broken.toml"
    _ = path.write_text("bpm_max = = 1\n", encoding="utf-8")

    with pytest.raises(tomllib.TOMLDecodeError):
        _ = Config.load(path)


def test_toml_comments(config_runtime_env: Path) -> None:
    """The rendered TOML explains every setting."""
    _ = config_runtime_env
    _ = Config(log_file=Path("/test/logs/tagnorm.log")).save()

    with open(default_config_path(), "r", encoding="utf-8") as f:
        content = f.read()

    assert "# tagnorm Configuration File" in content
    assert "# Log file path" in content
    assert 'log_file = "/test/logs/tagnorm.log"' in content
    assert "cover_art = true" in content
