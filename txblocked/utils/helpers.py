# txblocked/utils/helpers.py - Helper functions
"""
General formatting and filtering helpers.
"""

from typing import Iterable, List, Optional, Sequence
import logging

from txblocked.analyzer.weights import AnalysisRow


logger = logging.getLogger(__name__)


TIME_UNIT_DIVISORS = {
    'ns': 1,
    'us': 1000,
    'ms': 1_000_000,
}


def convert_duration(duration_ns: int, unit: str = 'us') -> float:
    """
    Convert a nanosecond duration to another unit.

    Args:
        duration_ns: Duration in nanoseconds
        unit: Target unit ('ns', 'us' or 'ms')

    Returns:
        Duration in the target unit
    """
    if unit not in TIME_UNIT_DIVISORS:
        raise ValueError(f"Unknown time unit: {unit}")
    return duration_ns / TIME_UNIT_DIVISORS[unit]


def format_duration(duration_ns: int) -> str:
    """
    Format duration in nanoseconds to human-readable string.

    Args:
        duration_ns: Duration in nanoseconds

    Returns:
        Formatted string (e.g., "1.5ms")
    """
    if duration_ns < 1000:
        return f"{duration_ns}ns"
    elif duration_ns < 1_000_000:
        return f"{duration_ns/1000:.1f}us"
    elif duration_ns < 1_000_000_000:
        return f"{duration_ns/1_000_000:.1f}ms"
    else:
        return f"{duration_ns/1_000_000_000:.1f}s"


def filter_rows(rows: Iterable[AnalysisRow],
                reasons: Optional[Sequence[str]] = None,
                min_duration_ns: int = 0) -> List[AnalysisRow]:
    """
    Keep rows matching the reason list and minimum duration.

    Args:
        rows: Analysis rows
        reasons: Reason labels to keep (case-insensitive); empty keeps all
        min_duration_ns: Drop rows shorter than this

    Returns:
        Matching rows in their original order
    """
    wanted = {r.lower() for r in reasons or []}

    filtered = [
        row for row in rows
        if (not wanted or row.reason.value.lower() in wanted)
        and row.duration >= min_duration_ns
    ]

    logger.debug(f"Filter kept {len(filtered)} rows")
    return filtered
