"""Environment loading for release secrets.

A ``.env`` file in the working directory is merged into the process
environment without overriding variables that are already set, then the
secrets a plan needs are checked for presence.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, MutableMapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from .result import Err, Ok, Result

__all__ = ["DOTENV_FILE_NAME", "MissingEnvError", "load_dotenv_file", "load_env"]

DOTENV_FILE_NAME = ".env"


@dataclass(frozen=True, slots=True)
class MissingEnvError:
    """One or more required variables are unset or empty."""

    names: tuple[str, ...]
    hint: str | None = "Set them in the environment or in a .env file"

    @property
    def message(self) -> str:
        return f"Missing {', '.join(self.names)}"


def load_dotenv_file(path: Path, environ: MutableMapping[str, str]) -> list[str]:
    """Merge a dotenv file into ``environ``; existing keys win.

    Returns:
        The keys that were added.
    """
    if not path.is_file():
        return []

    added: list[str] = []
    for key, value in dotenv_values(path).items():
        if value is None or key in environ:
            continue
        environ[key] = value
        added.append(key)
    return added


def load_env(
    required: Iterable[str],
    *,
    environ: MutableMapping[str, str] | None = None,
    dotenv_path: Path | None = None,
) -> Result[dict[str, str], MissingEnvError]:
    """Load ``.env`` and return the values of ``required``.

    Args:
        required: Variable names that must be set and non-empty.
        environ: Mapping to read and update (defaults to ``os.environ``).
        dotenv_path: Dotenv file (defaults to ``./.env``).

    Returns:
        Ok(name -> value) or Err(MissingEnvError) listing every missing name.
    """
    env = os.environ if environ is None else environ
    load_dotenv_file(dotenv_path or Path.cwd() / DOTENV_FILE_NAME, env)

    values: dict[str, str] = {}
    missing: list[str] = []
    for name in sorted(set(required)):
        value = env.get(name)
        if not value:
            missing.append(name)
            continue
        values[name] = value

    if missing:
        return Err(MissingEnvError(names=tuple(missing)))
    return Ok(values)
