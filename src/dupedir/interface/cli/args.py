from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
argparse namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the dupedir CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="dupedir",
        description="Find directories that are likely duplicates by comparing the file names they contain.",
    )

    # --- Actions (one per run) ---
    action = p.add_mutually_exclusive_group()
    action.add_argument(
        "-s", "--scan",
        action="store_true",
        help="Scan the directories given with --dir.",
    )
    action.add_argument(
        "-o", "--list",
        dest="list_file",
        metavar="FILE",
        default=None,
        help="Scan the directories given with --dir and store the file listing in FILE.",
    )
    action.add_argument(
        "-l", "--load",
        dest="listing_files",
        metavar="FILE",
        action="append",
        default=None,
        help="Load a file listing (can be repeated).",
    )

    # --- Inputs ---
    p.add_argument(
        "-d", "--dir",
        dest="scan_dirs",
        metavar="DIR",
        action="append",
        default=None,
        help="A directory to scan (can be repeated).",
    )

    # --- Analysis ---
    p.add_argument(
        "-f", "--find",
        action="store_true",
        help="Find duplicate directories.",
    )
    p.add_argument(
        "-y", "--hierarchy",
        action="store_true",
        help="Aggregate shared files over directory hierarchies.",
    )
    p.add_argument(
        "--min-shared",
        dest="min_shared_files",
        type=int,
        metavar="N",
        default=None,
        help="Minimum number of shared file names for a pair to be reported (default: 3).",
    )
    p.add_argument(
        "--max-dirs",
        dest="max_candidate_dirs",
        type=int,
        metavar="N",
        default=None,
        help="Ignore file names found in more than N directories (default: 50).",
    )

    # --- Output ---
    p.add_argument(
        "--top",
        type=int,
        metavar="N",
        default=None,
        help="Only print the N best candidates (0 prints all).",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the report as JSON.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the saved configuration.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Remember the analysis settings of this run.",
    )
    p.add_argument(
        "--log-file",
        nargs="?",
        const="",
        default=None,
        metavar="FILE",
        help="Also write logs to FILE (default location if FILE is omitted).",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Unset options map to None so that the merge keeps the base value.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["scan_dirs"] = args.scan_dirs
    overrides["listing_files"] = args.listing_files

    if args.find:
        overrides["find"] = True
    if args.hierarchy:
        overrides["aggregate_hierarchy"] = True

    overrides["min_shared_files"] = args.min_shared_files
    overrides["max_candidate_dirs"] = args.max_candidate_dirs
    overrides["top"] = args.top

    return overrides
