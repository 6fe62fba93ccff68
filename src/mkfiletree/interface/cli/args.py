from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the mkfiletree CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="mkfiletree",
        description="Materialize a directory/file layout described by a JSON tree.",
    )

    p.add_argument(
        "tree_file",
        help="JSON document: objects are directories, strings are file contents, "
             "true creates an empty file, null/false skip the entry.",
    )

    # --- Target Selection ---
    target = p.add_mutually_exclusive_group()
    target.add_argument(
        "-r", "--root",
        dest="root",
        default=None,
        help="Directory the tree is anchored to (default: current directory).",
    )
    target.add_argument(
        "--temp",
        action="store_true",
        help="Materialize into a fresh temporary directory and print its path.",
    )
    p.add_argument(
        "--keep",
        dest="keep_temp",
        action="store_true",
        help="With --temp, keep the temporary directory after exit.",
    )

    # --- Writing ---
    p.add_argument(
        "--encoding",
        default=None,
        help="Encoding of text contents (default: utf-8).",
    )
    p.add_argument(
        "--no-parents",
        action="store_true",
        help="Fail instead of creating missing parents for names holding separators.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the planned operations without touching the filesystem.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON configuration file (default: user data directory).",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore any stored configuration.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print results as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options given on the command line appear in the result.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.root is not None:
        overrides["root"] = args.root
    if args.temp:
        overrides["temp"] = True
    if args.keep_temp:
        overrides["keep_temp"] = True

    if args.encoding is not None:
        overrides["encoding"] = args.encoding
    if args.no_parents:
        overrides["create_parents"] = False
    if args.dry_run:
        overrides["dry_run"] = True

    if args.log_file is not None:
        overrides["log_file"] = args.log_file
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
