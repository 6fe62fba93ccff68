from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: configuration loading and merging (defaults,
stored file, command-line overrides), logging bootstrap, tree loading,
materialization and result rendering.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from mkfiletree.core.builder import TreeDefinitionError, load_tree_file
from mkfiletree.core.evaluator import materialize, plan
from mkfiletree.core.temp_root import materialize_temp
from mkfiletree.core.validator import validate_config
from mkfiletree.domain.config import get_default_config, load_config
from mkfiletree.domain.operations import Operation
from mkfiletree.infra.fs import HostFileSystem, RecordingFileSystem
from mkfiletree.infra.logging import LoggingConfig, configure_logging, get_logger
from mkfiletree.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FS_ERROR = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Resolve configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config(args.config_file)
    raw_conf = dict(base_conf)
    raw_conf.update(cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)

    # 2. Logging bootstrap (console on stderr, optional file)
    configure_logging(LoggingConfig(
        level=conf["log_level"],
        console=True,
        log_file=conf["log_file"] or None,
    ))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if conf["keep_temp"] and not conf["temp"]:
        logger.warning("--keep has no effect without --temp.")

    if conf["dry_run"] and conf["temp"]:
        print("ERROR: --dry-run cannot be combined with --temp.", file=sys.stderr)
        return EXIT_USAGE

    # 3. Load the tree description
    try:
        tree = load_tree_file(args.tree_file)
    except (OSError, TreeDefinitionError) as e:
        logger.error(f"Cannot load tree: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    # 4. Materialization phase
    try:
        if conf["dry_run"]:
            operations = plan(conf["root"], tree, encoding=conf["encoding"])
            _render_operations(operations, args.json_output)
            return EXIT_OK

        recorder = RecordingFileSystem(HostFileSystem(create_parents=conf["create_parents"]))
        if conf["temp"]:
            handle = materialize_temp(tree, fs=recorder, encoding=conf["encoding"])
            root = str(handle.path)
            if conf["keep_temp"]:
                handle.keep()
            else:
                handle.cleanup()
        else:
            root = conf["root"]
            materialize(root, tree, fs=recorder, encoding=conf["encoding"])
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FS_ERROR
    except (UnicodeError, TypeError) as e:
        # File content that cannot be turned into bytes
        logger.error(f"Invalid file content: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    # 5. Output rendering phase
    _render_result(root, recorder.operations, conf, args.json_output)
    return EXIT_OK

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _render_operations(operations: List[Operation], as_json: bool) -> None:
    """Print a dry-run plan."""
    if as_json:
        print(json.dumps([op.to_dict() for op in operations], ensure_ascii=False, indent=2))
        return
    for op in operations:
        print(op.describe())
    print(f"{len(operations)} operation(s) planned.")


def _render_result(root: str, operations: List[Operation], conf: Dict[str, Any], as_json: bool) -> None:
    """Print the summary of a completed materialization."""
    dirs = sum(1 for op in operations if op.is_dir)
    files = len(operations) - dirs
    removed = conf["temp"] and not conf["keep_temp"]

    if as_json:
        payload = {
            "root": root,
            "directories": dirs,
            "files": files,
            "temporary": conf["temp"],
            "removed": removed,
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    print(root or ".")
    print(f"Created {dirs} directories and {files} files.")
    if removed:
        print("Temporary root removed.")
