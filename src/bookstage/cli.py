"""
Command line interface for staging tutorial examples and building the book.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .build import BuildResult, build
from .config import ConfigError, StageConfig, default_config_path, get_settings, load_config
from .report import EXIT_EXAMPLE_FAILED, EXIT_INVALID_ARGS, report, write_manifest
from .staging import NotFoundError, RunContext, default_worker_count, list_examples, run_staging, validate
from .util import split_names

console = Console()
app = typer.Typer(help="Stage tutorial example assets and build the book.")
stage_and_build_app = typer.Typer(add_completion=False)
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def _configure_logging(level_name: Optional[str]) -> None:
    env_override = os.getenv("BOOKSTAGE_LOG_LEVEL")
    level_str = (env_override or level_name or "warning").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "WARNING"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _exit_invalid(message: str) -> typer.Exit:
    console.print(f"[bold red]Error:[/] {escape(message)}")
    return typer.Exit(code=EXIT_INVALID_ARGS)


def _load_config_or_exit(path: Optional[Path]) -> StageConfig:
    config_path = path or default_config_path()
    if config_path is None:
        return StageConfig()
    logger.info("Loading configuration from %s", config_path)
    try:
        return load_config(config_path)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {escape(str(exc))}")
        raise typer.Exit(code=EXIT_INVALID_ARGS) from exc


def _resolve_settings(config_path: Optional[Path], overrides: Dict[str, Any]) -> StageConfig:
    """
    Merge settings with precedence CLI option > environment > config file > default.
    """
    config = _load_config_or_exit(config_path)
    env = get_settings()
    merged = config.model_dump()
    env_values = {"source": env.source, "dest": env.dest, "build_command": env.builder}
    merged.update({key: value for key, value in env_values.items() if value is not None})
    merged.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return StageConfig.model_validate(merged)
    except ValueError as exc:
        raise _exit_invalid(str(exc)) from exc


def _require_source(settings: StageConfig) -> Path:
    if settings.source is None:
        raise _exit_invalid("No example source directory given (use --source).")
    try:
        listing = list_examples(settings.source)
        next(iter(listing), None)
    except NotFoundError as exc:
        raise _exit_invalid(str(exc)) from exc
    except OSError as exc:
        raise _exit_invalid(f"Cannot read example source directory: {exc}") from exc
    return listing.source_root


def _print_settings(settings: StageConfig, source_root: Path, dest_root: Path, workers: int) -> None:
    table = Table(title="Staging Plan")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    table.add_row("Source", str(source_root))
    table.add_row("Destination", str(dest_root))
    table.add_row("Only", ", ".join(settings.only) if settings.only else "all examples")
    table.add_row("Workers", str(workers))
    table.add_row("Builder", "skipped" if settings.skip_build else " ".join(settings.build_command))
    console.print(table)


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show bookstage version and exit.",
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    if version:
        console.print(f"[bold green]bookstage[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(
            "[bold yellow]bookstage[/] is ready. Run [cyan]bookstage run --source <dir> --dest <dir>[/] "
            "to stage examples and build the book.",
        )


@app.command("run")
@stage_and_build_app.command()
def run(
    source: Optional[Path] = typer.Option(
        None,
        "--source",
        "-s",
        help="Directory holding one folder per example.",
    ),
    dest: Optional[Path] = typer.Option(
        None,
        "--dest",
        "-d",
        help="Book content directory that receives the staged assets.",
    ),
    only: List[str] = typer.Option(
        None,
        "--only",
        help="Stage only these examples (comma separated or repeated).",
    ),
    skip_build: bool = typer.Option(
        False,
        "--skip-build",
        help="Stage assets without running the site builder.",
    ),
    book_root: Optional[Path] = typer.Option(
        None,
        "--book-root",
        help="Working directory for the site builder (defaults to the current directory).",
    ),
    builder: Optional[str] = typer.Option(
        None,
        "--builder",
        help='Site builder command line (default: "mdbook build").',
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the site builder before treating it as failed.",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-j",
        help="Number of examples staged concurrently.",
    ),
    manifest: Optional[bool] = typer.Option(
        None,
        "--manifest/--no-manifest",
        help="Write a JSON manifest of staged files into the destination.",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a bookstage TOML file (defaults to ./bookstage.toml when present).",
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Copy complete examples into the book and run the site builder.
    """
    _configure_logging(log_level)
    settings = _resolve_settings(
        config,
        {
            "source": source,
            "dest": dest,
            "only": split_names(only) or None,
            "skip_build": skip_build or None,
            "book_root": book_root,
            "build_command": builder,
            "build_timeout": timeout,
            "workers": workers,
            "manifest": manifest,
        },
    )

    source_root = _require_source(settings)
    if settings.dest is None:
        raise _exit_invalid("No destination directory given (use --dest).")
    dest_root = settings.dest.expanduser().resolve()
    if dest_root == source_root:
        raise _exit_invalid("Source and destination must be different directories.")
    pool_size = settings.workers or default_worker_count()
    _print_settings(settings, source_root, dest_root, pool_size)

    context = RunContext(
        source_root=source_root,
        dest_root=dest_root,
        only=settings.only or None,
        workers=pool_size,
    )
    try:
        results = run_staging(context)
    except (NotFoundError, OSError) as exc:
        raise _exit_invalid(f"Cannot read example source directory: {exc}") from exc

    if settings.manifest:
        write_manifest(dest_root, results)

    if settings.skip_build:
        build_result = BuildResult.skipped()
    else:
        book_dir = settings.book_root.expanduser().resolve() if settings.book_root else None
        build_result = build(
            dest_root,
            command=settings.build_command,
            cwd=book_dir,
            timeout=settings.build_timeout,
        )

    exit_code = report(results, build_result, console=console)
    if exit_code:
        raise typer.Exit(code=exit_code)


@app.command("list")
def list_command(
    source: Optional[Path] = typer.Option(
        None,
        "--source",
        "-s",
        help="Directory holding one folder per example.",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a bookstage TOML file.",
    ),
) -> None:
    """
    Show every example under the source directory and which assets it lacks.
    """
    settings = _resolve_settings(config, {"source": source})
    source_root = _require_source(settings)

    table = Table(title=f"Examples in {source_root}")
    table.add_column("Example")
    table.add_column("Status", overflow="fold")
    for name in list_examples(source_root):
        status = validate(source_root, name)
        if status.complete:
            table.add_row(name, "[green]complete[/]")
        else:
            table.add_row(name, f"[yellow]missing {', '.join(status.missing_files)}[/]")
    console.print(table)


@app.command()
def check(
    source: Optional[Path] = typer.Option(
        None,
        "--source",
        "-s",
        help="Directory holding one folder per example.",
    ),
    only: List[str] = typer.Option(
        None,
        "--only",
        help="Check only these examples (comma separated or repeated).",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a bookstage TOML file.",
    ),
) -> None:
    """
    Validate examples without copying anything; exit 1 if any is incomplete.
    """
    settings = _resolve_settings(config, {"source": source, "only": split_names(only) or None})
    source_root = _require_source(settings)
    names = settings.only or list(list_examples(source_root))

    incomplete = 0
    for name in sorted(names):
        status = validate(source_root, name)
        if status.complete:
            console.print(f"{escape(name)}: [green]complete[/]", highlight=False)
        else:
            incomplete += 1
            console.print(
                f"{escape(name)}: [yellow]missing {', '.join(status.missing_files)}[/]",
                highlight=False,
            )
    if incomplete:
        console.print(f"[bold red]{incomplete} example(s) incomplete.[/]")
        raise typer.Exit(code=EXIT_EXAMPLE_FAILED)


def _parser_exception(name: str) -> type:
    """
    Return the exception class of the click copy typer parses with.

    Recent typer releases bundle their own click, so the classes are looked up
    through typer.BadParameter instead of importing click directly.
    """
    for cls in typer.BadParameter.__mro__:
        if cls.__name__ == name:
            return cls
    raise ImportError(f"typer.BadParameter does not derive from {name}")


_UsageError = _parser_exception("UsageError")
_ClickException = _parser_exception("ClickException")


def _invoke(application: typer.Typer) -> None:
    try:
        code = application(standalone_mode=False)
    except _UsageError as exc:
        exc.show()
        raise SystemExit(EXIT_INVALID_ARGS) from exc
    except _ClickException as exc:
        exc.show()
        raise SystemExit(exc.exit_code) from exc
    except typer.Abort as exc:
        console.print("Aborted!")
        raise SystemExit(1) from exc
    raise SystemExit(code if isinstance(code, int) else 0)


def main() -> None:
    """
    Entry-point for the ``bookstage`` console script.
    """
    _invoke(app)


def stage_and_build_main() -> None:
    """
    Entry-point for the ``stage-and-build`` console script.
    """
    _invoke(stage_and_build_app)
