"""Tests for configuration file persistence helpers."""

from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from tagnorm.config.file_ops import write_text_file


def test_write_text_file_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "config" / "config.toml"

    write_text_file(target, "bpm_max = 200\n")

    assert target.read_text(encoding="utf-8") == "bpm_max = 200\n"
    assert [p.name for p in target.parent.iterdir()] == ["config.toml"]


def test_write_text_file_replaces_existing(tmp_path: Path) -> None:
    target = tmp_path / "config.toml"
    _ = target.write_text("old", encoding="utf-8")

    write_text_file(target, "new")

    assert target.read_text(encoding="utf-8") == "new"


def test_write_text_file_keeps_original_on_failure(tmp_path: Path, mocker: MockerFixture) -> None:
    target = tmp_path / "config.toml"
    _ = target.write_text("old", encoding="utf-8")
    _ = mocker.patch("tagnorm.config.file_ops.os.replace", side_effect=OSError("disk full"))

    with pytest.raises(OSError, match="disk full"):
        write_text_file(target, "new")

    assert target.read_text(encoding="utf-8") == "old"
    assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]
