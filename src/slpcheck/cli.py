from __future__ import annotations

from pathlib import Path

import typer

from . import __version__
from .config import ValidatorConfig
from .logs import configure_logging
from .replay.report import encode_report
from .replay.validate import count_failures, validate_path

app = typer.Typer(add_completion=False)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"slpcheck {__version__}")
        raise typer.Exit()


@app.command("validate")
def cmd_validate(
    path: Path = typer.Argument(..., help="a .slp replay, or a directory of them"),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG|INFO|WARNING|ERROR (env: SLPCHECK_LOG_LEVEL)"),
    rollback_limit: int | None = typer.Option(
        None,
        "--rollback-limit",
        min=0,
        help="largest backward frame jump accepted as rollback (env: SLPCHECK_ROLLBACK_LIMIT)",
    ),
    ordering_players: int | None = typer.Option(
        None,
        "--ordering-players",
        min=0,
        help="only check event ordering for this many active players; 0 checks every match",
    ),
    check_legality: bool = typer.Option(False, "--check-legality", help="warn on non-tournament-legal settings"),
    strict: bool = typer.Option(False, "--strict", help="exit non-zero on any error finding, not just fatal ones"),
    json_output: bool = typer.Option(False, "--json", help="print a JSON report to stdout"),
    show_version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="print the version and exit",
    ),
) -> None:
    """Validate Slippi replays for corruption and anomalies."""
    config = ValidatorConfig.from_env().with_overrides(
        rollback_limit=rollback_limit,
        ordering_player_count=ordering_players,
        check_legality=True if check_legality else None,
        log_level=log_level,
    )
    configure_logging(config.log_level)

    if not path.exists():
        typer.echo(f"path not found: {path}", err=True)
        raise typer.Exit(code=2)

    results = validate_path(path, config)
    if not results:
        typer.echo(f"no .slp files under {path}", err=True)

    if json_output:
        typer.echo(encode_report(results).decode("utf-8"))
    else:
        for result in results:
            typer.echo(result.summary())

    if count_failures(results, strict=strict):
        raise typer.Exit(code=1)


def main(argv: list[str] | None = None) -> None:
    app(prog_name="slpcheck", args=argv)


if __name__ == "__main__":
    main()
