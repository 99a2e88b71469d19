from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import typer

from appdrop.core.config import Config, load_project_config
from appdrop.core.result import Err
from appdrop.output.console import ConsoleProtocol, RichConsole, Verbosity
from appdrop.output.errors import error_exit_code, print_error
from appdrop.release.constants import SPARKLE_BIN_VAR


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Options given before the command name."""

    root: Path | None = None
    quiet: bool = False
    verbose: bool = False


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: Config
    console: ConsoleProtocol
    home: Path


def global_options(ctx: typer.Context) -> GlobalOptions:
    obj = ctx.obj
    if isinstance(obj, GlobalOptions):
        return obj
    return GlobalOptions()


def build_context(options: GlobalOptions, *, json_output: bool = False) -> CLIContext:
    """Resolve the project root, console and ``appdrop.toml``.

    JSON output keeps the console quiet so stdout stays parseable.
    """
    verbosity = Verbosity.from_flags(quiet=options.quiet or json_output, verbose=options.verbose)
    console = RichConsole(verbosity)
    root = (options.root or Path.cwd()).expanduser().resolve()

    config_r = load_project_config(root)
    if isinstance(config_r, Err):
        print_error(config_r.error, console)
        raise typer.Exit(code=error_exit_code(config_r.error))

    return CLIContext(root=root, config=config_r.value, console=console, home=Path.home())


def resolve_update_tools_dir(
    explicit: Path | None,
    *,
    root: Path,
    config: Config,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Toolchain directory: option, then ``SPARKLE_BIN``, then appdrop.toml."""
    env = os.environ if environ is None else environ
    raw: str | Path | None = explicit or env.get(SPARKLE_BIN_VAR) or config.release.sparkle_bin
    if not raw:
        return None
    path = Path(raw).expanduser()
    return path if path.is_absolute() else root / path
