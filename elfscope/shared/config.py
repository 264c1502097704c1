"""
elfscope Configuration Management
==================================

Centralized configuration for elfscope using Python dataclasses and
TOML-based persistence.

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[no-redef]


_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parents[2] / "config.toml"


# ========================== Section Configs ================================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Logging and general settings shared by the library and the CLI."""

    log_level: str = "INFO"
    log_file: str | None = None
    log_json: bool = False
    version: str = "0.1.0"


@dataclass(frozen=False, slots=True)
class DecoderConfig:
    """Parameters of the decode pipeline.

    ``read_chunk_size`` bounds each read issued while loading section
    content, so a section header declaring a huge ``sh_size`` fails on the
    first short read instead of allocating the declared size up front.
    """

    read_chunk_size: int = 65_536

    def __post_init__(self) -> None:
        if not isinstance(self.read_chunk_size, int) or self.read_chunk_size <= 0:
            raise ValueError(
                f"decoder.read_chunk_size must be a positive integer, "
                f"got {self.read_chunk_size!r}"
            )


@dataclass(frozen=False, slots=True)
class DisplayConfig:
    """What the console output renders for a loaded file."""

    show_segments: bool = True
    show_sections: bool = True
    show_symbols: bool = True
    max_symbol_rows: int = 200


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class ScopeConfig:
    """Master configuration aggregating all settings.

    Usage:
        >>> config = ScopeConfig.load()                  # from default path
        >>> config = ScopeConfig.load("custom.toml")     # from custom path
        >>> config.decoder.read_chunk_size
        65536
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> ScopeConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``config.toml`` in the
        project root and falls back to defaults when it is absent.  Missing
        keys take their dataclass defaults.

        Raises:
            FileNotFoundError: If *path* was given explicitly and does not
                exist.
            ValueError: The file is not valid TOML or holds an invalid
                setting.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            decoder=cls._build_section(DecoderConfig, raw.get("decoder", {})),
            display=cls._build_section(DisplayConfig, raw.get("display", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise the configuration tree to a plain dictionary."""
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are ignored.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


def get_config(path: str | Path | None = None) -> ScopeConfig:
    """Module-level convenience wrapper around :meth:`ScopeConfig.load`.

    Caches the result so that repeated calls share one instance.
    """
    if not hasattr(get_config, "_cached") or path is not None:
        get_config._cached = ScopeConfig.load(path)  # type: ignore[attr-defined]
    return get_config._cached  # type: ignore[attr-defined]
