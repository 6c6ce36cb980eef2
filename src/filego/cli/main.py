import json
import sys
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table

from ..core.config import Settings
from ..core.errors import FileGoError
from ..core.logging import setup_logging
from ..core.models import CheckConfig, MergeConfig, SplitConfig
from ..ops.check import run_check
from ..ops.merge import run_merge
from ..ops.split import run_split

app = typer.Typer(add_completion=False, help="filego: split, check and merge chunked files")

# Exit code for configuration and filesystem failures; 1 is reserved for a
# check that ran but did not verify.
EXIT_FAILURE = 2


def _settings(ctx: typer.Context) -> Settings:
    if isinstance(ctx.obj, Settings):
        return ctx.obj
    return Settings.load_config()


def _fail(exc: FileGoError) -> NoReturn:
    typer.echo(f"{exc.code}: {exc.message}", err=True)
    if exc.detail:
        typer.echo(f"  {exc.detail}", err=True)
    raise typer.Exit(EXIT_FAILURE) from exc


@app.callback()
def _init(
    ctx: typer.Context,
    config_file: str | None = typer.Option(
        None, "--config", help="Config file (.filego.yaml auto-discovered)"
    ),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log format: json|plain|auto"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every chunk"),
) -> None:
    settings = Settings.load_config(config_file)
    ctx.obj = settings
    setup_logging(log_format or settings.LOG_FORMAT, verbose=verbose)  # type: ignore[arg-type]


@app.command()
def version() -> None:
    from .. import __version__

    typer.echo(__version__)


@app.command()
def config(ctx: typer.Context) -> None:
    """Show the effective settings."""
    typer.echo(json.dumps(_settings(ctx).model_dump(), indent=2, sort_keys=True))


@app.command()
def split(
    ctx: typer.Context,
    in_file: Path = typer.Argument(..., help="File to split"),
    out_dir: Path = typer.Argument(..., help="Directory receiving the chunks"),
    chunk_size: int | None = typer.Option(
        None, "--chunk-size", min=1, help="Chunk size in bytes"
    ),
    max_buffer: int | None = typer.Option(
        None, "--max-buffer", min=1, help="Maximum buffer capacity in bytes"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Split IN_FILE into numbered chunks inside OUT_DIR."""
    settings = _settings(ctx)
    cfg = SplitConfig(
        in_file=in_file,
        out_dir=out_dir,
        chunk_size=chunk_size or settings.FILEGO_CHUNK_SIZE,
        max_buffer_capacity=max_buffer or settings.FILEGO_MAX_BUFFER_CAPACITY,
    )
    try:
        result = run_split(cfg)
    except FileGoError as exc:
        _fail(exc)

    if as_json:
        typer.echo(result.model_dump_json())
    else:
        typer.echo(f"file_size: {result.file_size}")
        typer.echo(f"total_chunks: {result.total_chunks}")


@app.command()
def check(
    ctx: typer.Context,
    in_dir: Path = typer.Argument(..., help="Chunk directory"),
    file_size: int = typer.Option(..., "--file-size", min=0, help="Expected original size"),
    total_chunks: int = typer.Option(
        ..., "--total-chunks", min=0, help="Expected number of chunks"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Verify that IN_DIR holds every chunk and the expected total size."""
    settings = _settings(ctx)
    try:
        result = run_check(
            CheckConfig(in_dir=in_dir, file_size=file_size, total_chunks=total_chunks)
        )
    except FileGoError as exc:
        _fail(exc)

    if as_json:
        typer.echo(result.model_dump_json())
    else:
        console = Console(
            file=sys.stdout,
            color_system=None if settings.NO_COLOR else "auto",
        )
        if result.success:
            console.print("✅ chunk set verified")
        elif result.error and result.error.missing:
            table = Table(title=f"Missing chunks in {in_dir}")
            table.add_column("index", justify="right")
            for index in result.error.missing:
                table.add_row(str(index))
            console.print(table)
        elif result.error:
            console.print(f"❌ {result.error.message}")

    if not result.success:
        raise typer.Exit(1)


@app.command()
def merge(
    ctx: typer.Context,
    in_dir: Path = typer.Argument(..., help="Chunk directory"),
    out_file: Path = typer.Argument(..., help="File to write"),
    max_buffer: int | None = typer.Option(
        None, "--max-buffer", min=1, help="Maximum buffer capacity in bytes"
    ),
) -> None:
    """Merge the chunks in IN_DIR into OUT_FILE, replacing it if present."""
    settings = _settings(ctx)
    cfg = MergeConfig(
        in_dir=in_dir,
        out_file=out_file,
        max_buffer_capacity=max_buffer or settings.FILEGO_MAX_BUFFER_CAPACITY,
    )
    try:
        run_merge(cfg)
    except FileGoError as exc:
        _fail(exc)

    typer.echo(f"merged: {out_file}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
