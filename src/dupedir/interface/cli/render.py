from __future__ import annotations

"""
Duplicate Report Rendering.

Turns duplicate candidate records into fixed-layout text lines:

    {score} pct% [shared / shared subtree] - [files / subtree files] path1 - [...] path2
"""

from typing import Any, Dict, List

from dupedir.domain.models import DuplicateReport


def format_duplicate(dup: Dict[str, Any]) -> str:
    """
    Format one described candidate as a single line.

    Args:
        dup: Candidate dictionary including the directories' file counts.

    Returns:
        str: The rendered line.
    """
    return (
        f"{{{dup['score']:05.2f}}} {100 * dup['overlap']:05.2f}% "
        f"[{dup['common_files']:,} / {dup['common_files_subtree']:,}] - "
        f"[{dup.get('dir1_files', 0):,} / {dup.get('dir1_files_subtree', 0):,}] {dup['path1']} - "
        f"[{dup.get('dir2_files', 0):,} / {dup.get('dir2_files_subtree', 0):,}] {dup['path2']}"
    )


def render_report(report: DuplicateReport, top: int = 0) -> List[str]:
    """
    Render the candidates of a report, best first.

    Args:
        report: A successful report.
        top: Maximum number of candidates to render (0 renders all).

    Returns:
        List[str]: One line per rendered candidate.
    """
    duplicates = report.duplicates[:top] if top > 0 else report.duplicates
    return [format_duplicate(d) for d in duplicates]
