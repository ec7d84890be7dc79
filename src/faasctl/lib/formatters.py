"""
Output Formatting Functions.

This module provides consistent formatting helpers for argparse help output,
durations and tables across faasctl commands.

Functions
---------
create_subparsers : Create nested subparsers with consistent formatting
format_seconds : Format an elapsed time in seconds as a short string
format_table : Format data as ASCII table with headers

Classes
-------
CapitalizedHelpFormatter : Custom argparse formatter with capitalized section titles
"""

import argparse


class CapitalizedHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """
    Custom help formatter that capitalizes section titles.

    Extends RawDescriptionHelpFormatter to:
    - Capitalize "usage:" to "Usage:"
    - Add newline after usage for better readability
    - Preserve raw formatting for description text
    """

    def add_usage(self, usage, actions, groups, prefix=None):
        if prefix is None:
            prefix = "Usage:\n  "
        return super().add_usage(usage, actions, groups, prefix)


def create_subparsers(parser: argparse.ArgumentParser, dest: str, **kwargs) -> argparse._SubParsersAction:
    """
    Create subparsers with consistent formatting applied automatically.

    Wraps parser.add_subparsers() so that every nested subcommand gets
    CapitalizedHelpFormatter and an "Options" section title.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        Parent parser to add subparsers to
    dest : str
        Destination attribute name for storing the subcommand
    **kwargs
        Additional arguments passed to add_subparsers()

    Returns
    -------
    argparse._SubParsersAction
        Subparsers object with formatting applied

    Examples
    --------
    >>> parser = argparse.ArgumentParser()
    >>> subparsers = create_subparsers(parser, "subcommand", title="Subcommands")
    >>> sub = subparsers.add_parser("pull", help="Pull templates")
    """
    defaults = {
        "help": "",
        "title": "Subcommands",
    }
    defaults.update(kwargs)

    subparsers = parser.add_subparsers(dest=dest, **defaults)

    original_add_parser = subparsers.add_parser

    def custom_add_parser(*args, **parse_kwargs):
        if "formatter_class" not in parse_kwargs:
            parse_kwargs["formatter_class"] = CapitalizedHelpFormatter
        subparser = original_add_parser(*args, **parse_kwargs)
        subparser._optionals.title = "Options"
        return subparser

    subparsers.add_parser = custom_add_parser

    return subparsers


def format_seconds(seconds: float) -> str:
    """
    Format an elapsed time in seconds as a short human-readable string.

    Parameters
    ----------
    seconds : float
        Elapsed time in seconds.

    Returns
    -------
    str
        "0.4s", "12.0s", "2m 5s" style string.

    Examples
    --------
    >>> format_seconds(0.42)
    '0.4s'
    >>> format_seconds(125)
    '2m 5s'
    """
    if seconds < 0:
        return "0.0s"
    if seconds < 60:
        return f"{seconds:.1f}s"

    total_seconds = int(seconds)
    minutes = total_seconds // 60
    remainder = total_seconds % 60
    if remainder > 0:
        return f"{minutes}m {remainder}s"
    return f"{minutes}m"


def format_table(headers: list[str], rows: list[list[str]], column_widths: list[int] = None) -> str:
    """
    Format data as ASCII table with headers and rows.

    Parameters
    ----------
    headers : list of str
        Column headers.
    rows : list of list of str
        Table rows, where each row is a list of cell values.
    column_widths : list of int, optional
        Fixed column widths. If None, auto-calculated from data.

    Returns
    -------
    str
        Formatted ASCII table with aligned columns and separator line.

    Examples
    --------
    >>> print(format_table(["Function", "Result"], [["fn-a", "ok"]]))
    Function  Result
    ----------------
    fn-a      ok
    """
    if not headers or not rows:
        return ""

    if column_widths is None:
        column_widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(column_widths):
                    column_widths[i] = max(column_widths[i], len(str(cell)))

    header_row = "  ".join(h.ljust(w) for h, w in zip(headers, column_widths))
    separator = "-" * len(header_row)

    formatted_rows = []
    for row in rows:
        formatted_row = "  ".join(str(cell).ljust(w) for cell, w in zip(row, column_widths))
        formatted_rows.append(formatted_row.rstrip())

    return "\n".join([header_row.rstrip(), separator] + formatted_rows)
