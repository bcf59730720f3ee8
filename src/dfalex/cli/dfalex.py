"""
dfalex - Scanner Command-Line Interface
=======================================

Scans a source file and prints the token stream, the final symbol table
and any errors recorded along the way.

Usage Examples
--------------
Scan a file:
    $ dfalex program.src

Read from standard input:
    $ echo "int x = 10;" | dfalex -

Old-style terminator rendering:
    $ dfalex --terminator-label program.src

Inspect automata:
    $ dfalex --list-automata
    $ dfalex --dump-automata identifier --dump-automata operator
    $ dfalex --dump-automata all

Exit status is 0 for a clean scan and 1 if any errors were recorded.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from dfalex import __version__
from dfalex.cli.errors import ExitCode, handle_cli_exception
from dfalex.library import default_library
from dfalex.render import format_automaton, format_errors, format_symbol_table, format_tokens
from dfalex.scanner import Scanner, ScannerOptions


@click.command()
@click.argument(
    "source",
    required=False,
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "--dump-automata", "dump",
    multiple=True,
    metavar="NAME",
    help="Print the structure of an automaton (repeatable, 'all' for every one)",
)
@click.option(
    "--list-automata",
    is_flag=True,
    help="List automaton names in scan priority order",
)
@click.option(
    "--terminator-label",
    is_flag=True,
    help="Render ';' as <KEYWORD, TERMINATOR>",
)
@click.option(
    "--no-symbols",
    is_flag=True,
    help="Do not print the symbol table",
)
@click.option(
    "--max-errors",
    type=click.IntRange(min=1),
    default=1000,
    show_default=True,
    help="Maximum number of errors to keep",
)
@click.option(
    "--max-iterations",
    type=click.IntRange(min=1),
    default=None,
    help="Stop scanning after this many cursor steps",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging)",
)
@click.version_option(version=__version__, prog_name="dfalex")
def main(
    source: Optional[Path],
    dump: tuple[str, ...],
    list_automata: bool,
    terminator_label: bool,
    no_symbols: bool,
    max_errors: int,
    max_iterations: Optional[int],
    verbose: bool,
) -> None:
    """
    Scan SOURCE and print tokens, symbol table and errors.

    SOURCE is a text file, or '-' to read standard input.

    \b
    Examples:
        dfalex program.src                    # Scan a file
        dfalex --terminator-label prog.src    # ';' as TERMINATOR
        dfalex --dump-automata decimal        # Show one automaton
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        library = default_library()

        if list_automata:
            for name in library.names():
                click.echo(name)

        names = library.names() if "all" in dump else list(dump)
        for name in names:
            click.echo(format_automaton(library.get(name)))
            click.echo()

        if source is None:
            if not (list_automata or dump):
                raise click.BadParameter("missing SOURCE", param_hint="'SOURCE'")
            return

        if str(source) == "-":
            text = click.get_text_stream("stdin").read()
        else:
            text = source.read_text(encoding="utf-8")

        options = ScannerOptions(max_errors=max_errors, max_iterations=max_iterations)
        result = Scanner(library, options).scan(text)

        if verbose:
            click.echo(f"Scanned {source}: {len(result.tokens)} tokens, {result.lines} lines")

        if result.tokens:
            click.echo(format_tokens(result.tokens, terminator_label))

        if not no_symbols:
            click.echo()
            click.echo(format_symbol_table(result.symbols))

        if result.has_errors:
            click.echo()
            click.echo(format_errors(result.errors))
            if result.dropped_errors:
                click.echo(f"... {result.dropped_errors} more error(s) not shown")

        if result.truncated:
            click.echo("warning: scan stopped at the iteration limit", err=True)

        if result.has_errors:
            sys.exit(ExitCode.SCAN_ERRORS)

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
