# privacy_sexy/parsing/parser.py
from __future__ import annotations

import argparse

from privacy_sexy.core.models import OS


def _add_common(p: argparse.ArgumentParser) -> None:
    g_src = p.add_argument_group("Collection source")
    g_flt = p.add_argument_group("Filters")
    g_misc = p.add_argument_group("Miscellaneous")

    # -----------------------
    # Collection source
    # -----------------------
    g_src.add_argument(
        "--os",
        dest="os",
        choices=[o.value for o in OS],
        default=None,
        help="Target OS of the collection. Defaults to the running system.",
    )
    src = g_src.add_mutually_exclusive_group()
    src.add_argument(
        "-f",
        "--file",
        metavar="PATH",
        dest="file",
        help=(
            "Read the collection from a local YAML file instead of "
            "<collections>/<os>.yaml (see PRIVACY_SEXY_COLLECTIONS)."
        ),
    )
    src.add_argument(
        "-u",
        "--url",
        metavar="URL",
        dest="url",
        help="Download the collection from URL.",
    )
    src.add_argument(
        "--remote",
        action="store_true",
        dest="remote",
        help="Download the upstream collection maintained for --os.",
    )

    # -----------------------
    # Filters
    # -----------------------
    lvl = g_flt.add_mutually_exclusive_group()
    lvl.add_argument(
        "-s",
        "--strict",
        action="store_const",
        const="strict",
        dest="recommend",
        help="Keep scripts recommended as strict or standard.",
    )
    lvl.add_argument(
        "-t",
        "--standard",
        action="store_const",
        const="standard",
        dest="recommend",
        help="Keep only scripts recommended as standard.",
    )
    g_flt.add_argument(
        "-n",
        "--name",
        metavar="NAME",
        action="append",
        dest="names",
        help=(
            "Keep only the named script. Naming a category keeps every script "
            "below it. Repeatable."
        ),
    )
    g_flt.add_argument(
        "-r",
        "--revert",
        action="store_true",
        dest="revert",
        help="Emit revert code instead of code.",
    )

    # -----------------------
    # Miscellaneous
    # -----------------------
    g_misc.add_argument(
        "--json-logs",
        action="store_true",
        dest="json_logs",
        help="Emit logs as JSON lines on stderr (also PRIVACY_SEXY_JSON_LOGS=1).",
    )
    g_misc.add_argument(
        "--report",
        action="store_true",
        dest="report",
        help="Print a JSON resolution report on stderr.",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with its `echo` and `run` subcommands."""
    p = argparse.ArgumentParser(
        prog="privacy-sexy",
        formatter_class=argparse.RawTextHelpFormatter,
        description=(
            "privacy-sexy – build privacy & security tweak scripts from a collection\n"
            "`echo` prints the generated script, `run` executes it."
        ),
    )
    sub = p.add_subparsers(dest="command", metavar="COMMAND", required=True)
    for name, help_text in (
        ("echo", "Print the generated script on stdout."),
        ("run", "Execute the generated script and exit with its status."),
    ):
        sp = sub.add_parser(name, help=help_text, formatter_class=argparse.RawTextHelpFormatter)
        _add_common(sp)
    return p
