"""Configuration management for tagnorm."""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar, Final

from tagnorm.config.file_ops import write_text_file
from tagnorm.config.paths import default_config_path
from tagnorm.platform.logging import logger

BPM_MAX_DEFAULT: Final[float] = 300.0
ID3V2_VERSION_DEFAULT: Final[int] = 4


def _path_field(default: Path | None = None) -> Any:
    """Create a dataclass field that ``__post_init__`` converts to ``Path``."""
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration."""

    # Log file path; None keeps the default location
    log_file: Path | None = _path_field()

    # Upper bound used when repairing mangled ID3v2 BPM values
    bpm_max: float = BPM_MAX_DEFAULT

    # ID3v2 minor version written on save (3 or 4)
    id3v2_version: int = ID3V2_VERSION_DEFAULT

    # Whether `show` decodes embedded cover art
    cover_art: bool = True

    _instance: ClassVar[Config | None] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value.strip() else None)

    def save(self, path: Path | None = None) -> Path:
        """Write the configuration as commented TOML and return the target path."""
        config_dict = asdict(self)
        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        target = path or default_config_path()
        try:
            write_text_file(target, self._render_toml(config_dict))
            logger.info("Configuration saved to %s", target)
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        return target

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# tagnorm Configuration File")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/tagnorm.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Largest plausible BPM; bigger ID3v2 TBPM values are divided by 10")
        lines.append(f"bpm_max = {self._format_toml_value(config['bpm_max'])}")
        lines.append("")

        lines.append("# ID3v2 version written when saving MP3/WAV/AIFF tags (3 or 4)")
        lines.append(f"id3v2_version = {self._format_toml_value(config['id3v2_version'])}")
        lines.append("")

        lines.append("# Decode embedded cover art when showing a file")
        lines.append(f"cover_art = {self._format_toml_value(config['cover_art'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            return f'"{str(value)}"'
        return str(value)

    @classmethod
    def load(cls, path: Path | None = None) -> Config:
        """Load the configuration, creating a default file on first use.

        The loaded instance is cached until ``reset`` is called or a
        different ``path`` is requested.
        """
        config_file = path or default_config_path()
        if cls._instance is not None and cls._loaded_from == config_file:
            return cls._instance

        try:
            if config_file.exists():
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)

                known = {f.name for f in fields(cls)}
                unknown = sorted(set(config_dict) - known)
                if unknown:
                    logger.warning(
                        "Ignoring unknown configuration keys in %s: %s",
                        config_file,
                        ", ".join(unknown),
                    )
                instance = cls(**{k: v for k, v in config_dict.items() if k in known})
                logger.info("Configuration loaded from %s", config_file)
            else:
                instance = cls()
                _ = instance.save(config_file)
                logger.info("Created default configuration at %s", config_file)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error("Failed to load configuration: %s", e)
            raise

        cls._instance = instance
        cls._loaded_from = config_file
        return instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance."""
        cls._instance = None
        cls._loaded_from = None


__all__ = ["BPM_MAX_DEFAULT", "Config", "ID3V2_VERSION_DEFAULT"]
