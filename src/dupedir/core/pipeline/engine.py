from __future__ import annotations

"""
Core orchestration pipeline.

Coordinates a complete analysis run:
1. Validates the configuration.
2. Checks that every input directory and listing exists.
3. Either stores a listing of the scanned files, or feeds scanned and
   listed paths into a fresh index.
4. Finalizes the directory hierarchy and, when requested, ranks the
   duplicate directory candidates.
"""

import logging
from typing import Any, Dict, Optional

from dupedir.core.pipeline.validator import validate_config
from dupedir.core.services.finder import DuplicateFinder
from dupedir.core.services.scanner import collect_files, yield_files_from_dirs
from dupedir.domain.models import DuplicateReport, create_error_report, create_success_report
from dupedir.infra.fs import find_missing_paths, normalize_path
from dupedir.infra.listing import read_listing, write_listing

logger = logging.getLogger(__name__)


def run_analysis(
        config: Optional[Dict[str, Any]],
        *,
        store_listing: Optional[str] = None,
        finder: Optional[DuplicateFinder] = None,
) -> DuplicateReport:
    """
    Execute a full analysis run.

    Args:
        config: The configuration dictionary (raw or partial).
        store_listing: If set, scan 'scan_dirs' and write their files to this
                       listing instead of analyzing them.
        finder: Optional finder to reuse; it is reset before use.

    Returns:
        DuplicateReport: Status, index statistics and ranked duplicates.
    """
    logger.debug("Analysis run started.")

    # -------------------------------------------------------------------------
    # 1) Config validation
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    scan_dirs = cfg["scan_dirs"]
    listing_files = cfg["listing_files"]

    # -------------------------------------------------------------------------
    # 2) Input verification
    # -------------------------------------------------------------------------
    missing_dirs = find_missing_paths(scan_dirs, want_dir=True)
    if missing_dirs:
        msg = f"Directory does not exist: {', '.join(missing_dirs)}"
        logger.error(msg)
        return create_error_report(msg, cfg)

    # -------------------------------------------------------------------------
    # 3a) Store mode: listing only, no analysis
    # -------------------------------------------------------------------------
    if store_listing:
        return _store_listing(cfg, normalize_path(store_listing))

    missing_listings = find_missing_paths(listing_files, want_dir=False)
    if missing_listings:
        msg = f"Listing file does not exist: {', '.join(missing_listings)}"
        logger.error(msg)
        return create_error_report(msg, cfg)

    if not scan_dirs and not listing_files:
        msg = "Nothing to analyze: provide directories to scan or listing files to load."
        logger.error(msg)
        return create_error_report(msg, cfg)

    # -------------------------------------------------------------------------
    # 3b) Indexing
    # -------------------------------------------------------------------------
    finder = finder or DuplicateFinder()
    finder.reset()

    try:
        for listing in listing_files:
            logger.info(f"Loading files listing from {listing}")
            finder.ingest_all(read_listing(listing))
    except OSError as e:
        msg = f"Failed to read listing: {e}"
        logger.error(msg)
        return create_error_report(msg, cfg)

    finder.ingest_all(yield_files_from_dirs(scan_dirs))
    finder.finalize_index()

    stats = finder.stats()
    logger.info(
        f"Indexed {stats['files_indexed']:,} files "
        f"({stats['files_skipped']:,} skipped) in {stats['directories']:,} directories"
    )

    # -------------------------------------------------------------------------
    # 4) Duplicate search
    # -------------------------------------------------------------------------
    if not cfg["find"]:
        return create_success_report(cfg, stats, summary_extra={"action": "index"})

    duplicates = finder.find_duplicates(
        aggregate_hierarchy=cfg["aggregate_hierarchy"],
        min_shared_files=cfg["min_shared_files"],
        max_candidate_dirs=cfg["max_candidate_dirs"],
    )

    return create_success_report(
        cfg,
        stats,
        duplicates=[finder.describe(d) for d in duplicates],
        summary_extra={"action": "find", "candidates": len(duplicates)},
    )


def _store_listing(cfg: Dict[str, Any], listing_path: str) -> DuplicateReport:
    """Scan the configured directories and persist their files."""
    if not cfg["scan_dirs"]:
        msg = "Storing a listing requires at least one directory to scan."
        logger.error(msg)
        return create_error_report(msg, cfg)

    logger.info(f"Storing files listing in {listing_path}")
    files = collect_files(cfg["scan_dirs"])

    try:
        written = write_listing(listing_path, files)
    except OSError as e:
        msg = f"Failed to write listing '{listing_path}': {e}"
        logger.error(msg)
        return create_error_report(msg, cfg)

    return create_success_report(
        cfg,
        {"files_indexed": written},
        listing_path=listing_path,
        summary_extra={"action": "store", "files_listed": written},
    )
