"""Command line interface for :mod:`ccreport`."""

from typing import Callable, Optional

import click

from .config import ReportError, resolve_directory, resolve_keys, resolve_match_mode
from .models import MatchMode
from .report import pivot_rows, render_table
from .scanner import iter_rows, run
from .version import VERSION

__all__ = [
    "main",
]


def report_options(func: Callable) -> Callable:
    """Options shared by the commands that scan result files."""
    options = [
        click.option(
            "--dir",
            "directory",
            help="Result directory (default: $CCREPORT_DIR or the optimizer's best/ directory)",
        ),
        click.option(
            "--key",
            "keys",
            multiple=True,
            help="Key to report, repeatable; order is kept",
        ),
        click.option(
            "--keys-file",
            type=click.Path(dir_okay=False),
            help="YAML file with a top-level 'keys' list",
        ),
        click.option(
            "--match",
            type=click.Choice([m.value for m in MatchMode]),
            help="Key matching mode (default: $CCREPORT_MATCH or substring)",
        ),
        click.option(
            "--sort/--no-sort",
            default=True,
            help="Sort result files by name (default: sorted)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=VERSION)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    r"""ccreport - report values from cold-clear optimizer result files.

    Scans every file whose name contains "json" in the result directory
    and prints the value following each configured key.
    """
    import logging

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            force=True,
        )
        logging.getLogger("ccreport").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s", force=True)


@main.command()
@report_options
def show(
    directory: Optional[str],
    keys: tuple[str, ...],
    keys_file: Optional[str],
    match: Optional[str],
    sort: bool,
) -> None:
    """Print one "name value key" line per matching fragment.

    Lines are grouped by key first, then by result file.


    Example:
      ccreport show --dir ./best --key clear1 --key clear2
    """
    try:
        run(
            resolve_directory(directory),
            resolve_keys(keys, keys_file),
            mode=resolve_match_mode(match),
            sort=sort,
        )
    except (ReportError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()


@main.command()
@report_options
@click.option("--output", help="Also save the table as CSV to this file")
def table(
    directory: Optional[str],
    keys: tuple[str, ...],
    keys_file: Optional[str],
    match: Optional[str],
    sort: bool,
    output: Optional[str],
) -> None:
    """Print a table with one row per result file and one column per key.

    Example:
      ccreport table --dir ./best --output best.csv
    """
    try:
        key_list = resolve_keys(keys, keys_file)
        rows = list(
            iter_rows(
                resolve_directory(directory),
                key_list,
                mode=resolve_match_mode(match),
                sort=sort,
            )
        )
    except (ReportError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()

    pivot = pivot_rows(rows, key_list)
    click.echo(render_table(pivot))

    if output:
        try:
            pivot.to_csv(output)
        except OSError as e:
            click.echo(f"Error: cannot save table: {e}", err=True)
            raise click.Abort()
        click.echo(f"\nTable saved to: {output}")


@main.command()
@click.option("--keys-file", type=click.Path(dir_okay=False), help="YAML file with a 'keys' list")
def keys(keys_file: Optional[str]) -> None:
    """List the keys that would be reported, in order."""
    try:
        for key in resolve_keys(keys_file=keys_file):
            click.echo(key)
    except ReportError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()


if __name__ == "__main__":
    main()
