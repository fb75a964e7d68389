"""Command line interface: ``shamir-consensus [PATH]``."""

from __future__ import annotations

import logging

import click

from .consensus import ConsensusReconstructor
from .errors import ShamirError
from .loader import load_document
from .policy import policy
from .report import render_report

_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


@click.command()
@click.argument("path", default="input.json", type=click.Path(dir_okay=False))
@click.option("--workers", type=click.IntRange(min=1), default=policy.workers, show_default=True,
              help="Processes used to score combinations")
@click.option("--timeout", type=click.FloatRange(min=0), default=policy.timeout, show_default=True,
              help="Deadline in seconds for the whole enumeration (0 disables it)")
@click.option("--progress/--no-progress", default=policy.progress, show_default=True,
              help="Show a progress bar while scoring combinations")
@click.option("--log-level", type=click.Choice(_LEVELS, case_sensitive=False), default=policy.log_level,
              show_default=True, help="Logging verbosity on stderr")
@click.option("-v", "--verbose", is_flag=True, help="Trace every combination (same as --log-level DEBUG)")
def main(path: str, workers: int, timeout: float, progress: bool, log_level: str, verbose: bool) -> None:
    """Reconstruct a threshold-shared secret from PATH and flag wrong shares.

    Every k-subset of the n shares is interpolated over GF(2^127 - 1); the
    secret produced by most subsets wins, and shares that never appear in an
    agreeing subset are reported as wrong.
    """
    _configure_logging("DEBUG" if verbose else log_level.upper())

    click.echo(f"Reading from: {path}")
    try:
        document = load_document(path)
        result = ConsensusReconstructor(
            document.shares,
            document.k,
            workers=workers,
            timeout=timeout,
            progress=progress,
        ).reconstruct()
    except ShamirError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(render_report(document, result))


if __name__ == "__main__":
    main()
