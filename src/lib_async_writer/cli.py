"""Click command line interface for the asynchronous writer.

Purpose
-------
Offer a thin shell around :class:`lib_async_writer.AsyncStringWriter` so the
writer can be exercised from a terminal: pipe standard input through it, or
hammer it with concurrent producers and verify nothing was lost.

Contents
--------
* :func:`cli` - root group with ``--traceback`` and ``--use-dotenv`` toggles.
* ``info``, ``pipe``, ``stresstest`` commands.
* :func:`main` - entry point used by the console script and ``python -m``.

System Role
-----------
Presentation layer only: configuration comes from
:mod:`lib_async_writer.config`, error rendering from ``lib_cli_exit_tools``.
"""

from __future__ import annotations

import os
import threading
import time
from pathlib import Path
from typing import Any, Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as config_module
from .adapters.sinks import FileSink, RichConsoleSink
from .adapters.writer import AsyncStringWriter

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help="Load environment variables from the nearest .env before running commands.",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Drive an asynchronous batching writer from the command line."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    env_toggle = os.getenv(config_module.DOTENV_ENV_VAR)
    if config_module.should_use_dotenv(explicit=explicit, env_value=env_toggle):
        config_module.enable_dotenv()

    if ctx.invoked_subcommand is None:
        click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def info_command() -> None:
    """Print package metadata."""

    click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("pipe", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--capacity", type=click.IntRange(min=1), default=None, help="Maximum batch length in characters.")
@click.option(
    "--newline",
    type=click.Choice(sorted(config_module.NEWLINE_ALIASES)),
    default=None,
    help="Separator placed between lines of a batch.",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Append batches to this file instead of printing them.",
)
@click.option("--no-color", is_flag=True, default=False, help="Disable colour on console output.")
@click.option("--style", default=None, help="Rich style applied to console output.")
def pipe_command(capacity: int | None, newline: str | None, output: Path | None, no_color: bool, style: str | None) -> None:
    """Forward standard input line by line through the writer."""

    settings = config_module.WriterSettings.from_env().with_overrides(
        capacity=capacity,
        newline=config_module.NEWLINE_ALIASES[newline] if newline else None,
    )
    if output is not None:
        sink: Any = FileSink(output)
    else:
        sink = RichConsoleSink(style=style, no_color=no_color)

    source = click.get_text_stream("stdin")
    with AsyncStringWriter.from_settings(sink, settings) as writer:
        for raw in source:
            writer.enqueue(raw.rstrip("\r\n"))
    snapshot = writer.snapshot()
    click.echo(f"piped {snapshot.lines_written} lines in {snapshot.batches_flushed} batches", err=True)


@cli.command("stresstest", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--producers", type=click.IntRange(min=1), default=4, show_default=True, help="Concurrent producer threads.")
@click.option("--lines", type=click.IntRange(min=1), default=1000, show_default=True, help="Lines enqueued per producer.")
@click.option("--capacity", type=click.IntRange(min=1), default=4096, show_default=True, help="Maximum batch length.")
def stresstest_command(producers: int, lines: int, capacity: int) -> None:
    """Run concurrent producers against one writer and verify delivery."""

    report = _stresstest(producers=producers, lines=lines, capacity=capacity)
    click.echo(
        f"producers={report['producers']} lines={report['lines']} "
        f"received={report['received']}/{report['expected']} batches={report['batches']} "
        f"largest_batch={report['largest_batch']} elapsed={report['elapsed']:.3f}s"
    )
    if report["received"] != report["expected"] or not report["ordered"]:
        raise click.ClickException("stresstest detected lost or reordered lines")


def _stresstest(*, producers: int, lines: int, capacity: int) -> dict[str, Any]:
    """Enqueue ``producers * lines`` tagged lines concurrently and audit the batches."""

    batches: list[str] = []
    start = threading.Barrier(producers)

    def produce(writer: AsyncStringWriter, producer: int) -> None:
        start.wait()
        for index in range(lines):
            writer.enqueue(f"{producer}:{index}")

    began = time.perf_counter()
    with AsyncStringWriter(batches.append, capacity=capacity, newline="\n") as writer:
        threads = [threading.Thread(target=produce, args=(writer, producer)) for producer in range(producers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
    elapsed = time.perf_counter() - began

    last_seen = [-1] * producers
    ordered = True
    received = 0
    for batch in batches:
        for line in batch.split("\n"):
            producer, index = (int(part) for part in line.split(":"))
            if index <= last_seen[producer]:
                ordered = False
            last_seen[producer] = index
            received += 1

    return {
        "producers": producers,
        "lines": lines,
        "expected": producers * lines,
        "received": received,
        "batches": len(batches),
        "largest_batch": max((len(batch) for batch in batches), default=0),
        "ordered": ordered,
        "elapsed": elapsed,
    }


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI through ``lib_cli_exit_tools`` and return the exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards
    unless ``restore_traceback`` is ``False``.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
