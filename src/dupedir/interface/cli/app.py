from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging initialization, merging of
configuration sources (defaults, saved settings and CLI overrides),
pre-flight input checks, analysis execution and result rendering.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from dupedir.core.pipeline.engine import run_analysis
from dupedir.core.pipeline.validator import validate_config
from dupedir.domain.config import get_default_config, load_config, save_config
from dupedir.domain.models import DuplicateReport
from dupedir.infra.fs import find_missing_paths
from dupedir.infra.logging import LoggingConfig, configure_logging, get_default_log_path, get_logger
from dupedir.interface.cli import args as cli_args
from dupedir.interface.cli.render import render_report

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2
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
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    log_file = None
    if args.log_file is not None:
        log_file = args.log_file or get_default_log_path()
    configure_logging(LoggingConfig(level="DEBUG" if args.debug else "INFO", console=True, log_file=log_file))

    # 3. Resolve configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config:
        save_config(clean_conf)

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Pre-flight input verification
    error = _check_inputs(args, clean_conf)
    if error:
        logger.error(error)
        print(f"ERROR: {error}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    # 5. Analysis phase
    try:
        report = run_analysis(clean_conf, store_listing=args.list_file)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(f"Analysis failed: {e}", exc_info=True)
        print(f"ERROR: Analysis failed: {e}", file=sys.stderr)
        return EXIT_FAILURE

    # 6. Output rendering phase
    if args.json_output:
        print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(report, clean_conf["top"])

    return EXIT_OK if report.ok else EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of known, non-None override values into the base.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k in get_default_config():
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out


def _check_inputs(args: Any, conf: Dict[str, Any]) -> str:
    """Return an error message when the requested action cannot run."""
    if not (args.scan or args.list_file or args.listing_files):
        return "One action is required: --scan, --list FILE or --load FILE."

    if (args.scan or args.list_file) and not conf["scan_dirs"]:
        return "At least one --dir is required to scan."

    missing = find_missing_paths(conf["scan_dirs"], want_dir=True)
    if missing:
        return f"Directory does not exist: {', '.join(missing)}"

    if not args.list_file:
        missing = find_missing_paths(conf["listing_files"], want_dir=False)
        if missing:
            return f"Listing file does not exist: {', '.join(missing)}"

    return ""

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(report: DuplicateReport, top: int) -> None:
    """
    Print the report to standard output.

    Args:
        report: The analysis report to render.
        top: Maximum number of candidates to print (0 prints all).
    """
    if not report.ok:
        print(f"ERROR: {report.error}", file=sys.stderr)
        return

    action = report.summary.get("action")

    if action == "store":
        print(f"Stored {report.files_indexed:,} file paths in {report.listing_path}")
        return

    print(
        f"Indexed {report.files_indexed:,} files, {report.file_names:,} file names, "
        f"{report.directories:,} directories"
    )
    if report.files_skipped:
        print(f"Skipped paths: {report.files_skipped:,}")

    if action != "find":
        return

    mode = "hierarchy" if report.aggregate_hierarchy else "direct"
    print(f"Duplicate candidates ({mode}, min {report.min_shared_files} shared files): {len(report.duplicates):,}")
    for line in render_report(report, top):
        print(line)

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
