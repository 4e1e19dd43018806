"""Run configuration: defaults, TOML loading, validation."""

from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from twmap.errors import ConfigurationError
from twmap.naming import GenerationMode

CONFIG_FILENAME = "twmap.toml"
PYPROJECT_FILENAME = "pyproject.toml"

_PREFIX_RE = re.compile(r"-?[A-Za-z_][A-Za-z0-9_-]*")
_DIRECTIVE_RE = re.compile(r"[A-Za-z][A-Za-z0-9-]*")


@dataclass(frozen=True)
class TwmapConfig:
    input: tuple[str, ...] = (
        "./src/**/*.{tsx,jsx,html}",
        "./components/**/*.{tsx,jsx}",
        "./app/**/*.{tsx,jsx,html}",
        "./pages/**/*.{tsx,jsx,html}",
    )
    output: str = "./twmap.css"
    mode: str = "hash"
    prefix: str = "tw-"
    ignore: tuple[str, ...] = (
        "node_modules/**",
        "dist/**",
        "build/**",
        "**/*.test.{js,ts,jsx,tsx}",
        "**/*.spec.{js,ts,jsx,tsx}",
    )
    css_compressor: bool = False
    directive: str = "apply"
    merge_existing: bool = False
    canonical_names: bool = False

    @property
    def generation_mode(self) -> GenerationMode:
        return GenerationMode(self.mode)

    def with_overrides(self, **overrides: Any) -> TwmapConfig:
        """Copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        for key in ("input", "ignore"):
            if key in changes:
                changes[key] = tuple(changes[key])
        return replace(self, **changes)


_FIELD_TYPES: dict[str, type] = {
    "input": tuple,
    "output": str,
    "mode": str,
    "prefix": str,
    "ignore": tuple,
    "css_compressor": bool,
    "directive": str,
    "merge_existing": bool,
    "canonical_names": bool,
}


def _coerce(key: str, value: object, source: str) -> object:
    """Check a raw TOML value against the field's type."""
    target = _FIELD_TYPES[key]
    if target is tuple:
        if isinstance(value, str):
            return (value,)
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return tuple(value)
        raise ConfigurationError(f"{source}: '{key}' must be a list of strings")
    if not isinstance(value, target):
        raise ConfigurationError(
            f"{source}: '{key}' must be a {target.__name__}, got {type(value).__name__}"
        )
    return value


def config_from_dict(data: dict[str, Any], source: str = "<config>") -> TwmapConfig:
    known = {f.name for f in fields(TwmapConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"{source}: unknown option(s): {', '.join(unknown)}")
    values = {key: _coerce(key, value, source) for key, value in data.items()}
    return TwmapConfig(**values)  # type: ignore[arg-type]


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except OSError as exc:
        raise ConfigurationError(f"{path}: cannot read config: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"{path}: invalid TOML: {exc}") from exc
    if path.name == PYPROJECT_FILENAME:
        return data.get("tool", {}).get("twmap", {})
    return data


def find_config(cwd: str | Path = ".") -> Path | None:
    """``twmap.toml`` in *cwd*, else a ``pyproject.toml`` with ``[tool.twmap]``."""
    base = Path(cwd)
    candidate = base / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    pyproject = base / PYPROJECT_FILENAME
    if pyproject.is_file() and _read_toml(pyproject):
        return pyproject
    return None


def load_config(path: str | Path | None = None, cwd: str | Path = ".") -> TwmapConfig:
    """Load configuration from *path*, or discover it in *cwd*.

    Falls back to the defaults when no config file exists. Raises
    :class:`ConfigurationError` for an explicit path that is missing or for
    malformed content. The result is not validated; call
    :func:`validate_config` after applying command-line overrides.
    """
    if path is not None:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigurationError(f"Config file not found: {config_path}")
    else:
        config_path = find_config(cwd)
        if config_path is None:
            return TwmapConfig()
    return config_from_dict(_read_toml(config_path), source=str(config_path))


def validate_config(config: TwmapConfig) -> TwmapConfig:
    """Raise :class:`ConfigurationError` unless *config* is usable."""
    modes = [m.value for m in GenerationMode]
    if config.mode not in modes:
        raise ConfigurationError(
            f"Invalid mode {config.mode!r}: expected one of {', '.join(modes)}"
        )
    if not _PREFIX_RE.fullmatch(config.prefix):
        raise ConfigurationError(
            f"Invalid prefix {config.prefix!r}: must start a CSS class name "
            "(letters, digits, '-' and '_', not starting with a digit)"
        )
    if not config.input or not all(p.strip() for p in config.input):
        raise ConfigurationError("At least one input pattern is required")
    if not config.output.strip():
        raise ConfigurationError("An output path is required")
    if not _DIRECTIVE_RE.fullmatch(config.directive):
        raise ConfigurationError(f"Invalid directive {config.directive!r}")
    return config


SAMPLE_CONFIG = """\
# twmap configuration

# Input file patterns to scan for class names
input = [
  "./src/**/*.{tsx,jsx,html}",
  "./components/**/*.{tsx,jsx}",
  "./app/**/*.{tsx,jsx,html}",
  "./pages/**/*.{tsx,jsx,html}",
]

# Output path for the generated CSS file
output = "./twmap.css"

# Class name generation mode
# "hash"        - short hash-based names (e.g. tw-a1b2c3)
# "incremental" - incremental names (e.g. tw-0, tw-1)
# "readable"    - somewhat readable names (e.g. tw-textcenter)
mode = "hash"

# Prefix for all generated class names
prefix = "tw-"

# Patterns to ignore during scanning
ignore = [
  "node_modules/**",
  "dist/**",
  "build/**",
  "**/*.test.{js,ts,jsx,tsx}",
  "**/*.spec.{js,ts,jsx,tsx}",
]

# Minify the generated CSS file
css_compressor = false

# Keep the rules of an existing output file and reuse their names
merge_existing = false
"""


def write_sample_config(path: str | Path) -> bool:
    """Write :data:`SAMPLE_CONFIG` to *path*; False if the file already exists."""
    target = Path(path)
    if target.exists():
        return False
    target.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return True
