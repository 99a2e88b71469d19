"""Typed loading of the optional ``appdrop.toml`` project file.

Example:

    [project]
    scheme = "MyApp"
    project = "MyApp.xcodeproj"
    executable = "mycli"

    [release]
    output_dir = "dist"
    build_dir = "build"
    sparkle_bin = "/opt/sparkle/bin"

Command-line options take precedence over the environment, which takes
precedence over this file.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "Config",
    "ConfigError",
    "ProjectConfig",
    "ReleaseConfig",
    "load_config",
    "load_project_config",
]

CONFIG_FILE_NAME = "appdrop.toml"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the config file cannot be read or parsed."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """Project detection overrides."""

    scheme: str | None = None
    project: str | None = None
    executable: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Release output locations and toolchain hints."""

    output_dir: str | None = None
    build_dir: str | None = None
    sparkle_bin: str | None = None


@dataclass(frozen=True, slots=True)
class Config:
    project: ProjectConfig = field(default_factory=ProjectConfig)
    release: ReleaseConfig = field(default_factory=ReleaseConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from parsed TOML; unknown keys are ignored."""
        project: StrDict = get_table(data, "project") or {}
        release: StrDict = get_table(data, "release") or {}

        return cls(
            project=ProjectConfig(
                scheme=get_str(project, "scheme"),
                project=get_str(project, "project"),
                executable=get_str(project, "executable"),
            ),
            release=ReleaseConfig(
                output_dir=get_str(release, "output_dir"),
                build_dir=get_str(release, "build_dir"),
                sparkle_bin=get_str(release, "sparkle_bin"),
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(
            ConfigError(
                f"Invalid TOML syntax: {e}",
                path=path,
                hint=f"Fix or remove {path.name}",
            )
        )
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse a config file.

    Args:
        path: Path to an ``appdrop.toml`` file.

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure.
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return Ok(Config.from_dict(result.value))


def load_project_config(root: Path) -> Result[Config, ConfigError]:
    """Load ``<root>/appdrop.toml``, or defaults when the file is absent."""
    path = root / CONFIG_FILE_NAME
    if not path.is_file():
        return Ok(Config())
    return load_config(path)
