# txblocked/analyzer/classifier.py - Blocked reason classification
"""
Maps a blocked-cause bitmask to a single canonical reason.

When several causes are set at once only the highest priority one is
reported, so every event lands in exactly one reason bucket.
"""

from typing import Tuple

from txblocked.collector.events import BlockedFlags, BlockReason


# Checked top to bottom; first match wins
REASON_PRIORITY: Tuple[Tuple[BlockedFlags, BlockReason], ...] = (
    (BlockedFlags.SCHEDULING, BlockReason.SCHEDULING),
    (BlockedFlags.PACING, BlockReason.PACING),
    (BlockedFlags.AMPLIFICATION_PROTECTION, BlockReason.AMPLIFICATION_PROTECTION),
    (BlockedFlags.CONGESTION_CONTROL, BlockReason.CONGESTION_CONTROL),
    (BlockedFlags.CONN_FLOW_CONTROL, BlockReason.CONN_FLOW_CONTROL),
    (BlockedFlags.STREAM_FLOW_CONTROL, BlockReason.STREAM_FLOW_CONTROL),
    (BlockedFlags.APP, BlockReason.APP),
    (BlockedFlags.STREAM_ID_FLOW_CONTROL, BlockReason.STREAM_ID_FLOW_CONTROL),
)


def classify(flags: int) -> BlockReason:
    """
    Classify a blocked-cause bitmask.

    Args:
        flags: Bitmask of BlockedFlags values

    Returns:
        Highest priority reason set in the mask, or BlockReason.NONE
    """
    mask = int(flags)
    for flag, reason in REASON_PRIORITY:
        if mask & flag:
            return reason
    return BlockReason.NONE


def reason_rank(reason: BlockReason) -> int:
    """Position of a reason in priority order (NONE sorts last)."""
    for rank, (_, candidate) in enumerate(REASON_PRIORITY):
        if candidate is reason:
            return rank
    return len(REASON_PRIORITY)


def parse_flags(value) -> int:
    """
    Parse a bitmask given as an int, a numeric string or flag names.

    Accepts 6, "0x06", "PACING|AMPLIFICATION_PROTECTION" or a list such as
    ["Pacing", "App"]. Names are matched ignoring case, spaces and
    underscores against both the flag names and the reason labels.

    Raises:
        ValueError: If the value cannot be interpreted
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid flags value: {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Flags must be non-negative: {value}")
        return value

    if isinstance(value, str):
        text = value.strip()
        try:
            return parse_flags(int(text, 0))
        except ValueError:
            names = [part for part in text.replace(",", "|").split("|") if part.strip()]
    elif isinstance(value, (list, tuple)):
        names = list(value)
    else:
        raise ValueError(f"Invalid flags value: {value!r}")

    mask = 0
    for name in names:
        mask |= _flag_for_name(str(name))
    return mask


def _normalize(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalnum())


# "connflowcontrol" and "connectionflowcontrol" both map to CONN_FLOW_CONTROL
_FLAG_NAMES = {_normalize(flag.name): flag for flag, _ in REASON_PRIORITY}
_FLAG_NAMES.update({_normalize(reason.value): flag for flag, reason in REASON_PRIORITY})
_FLAG_NAMES[_normalize(BlockedFlags.NONE.name)] = BlockedFlags.NONE


def _flag_for_name(name: str) -> BlockedFlags:
    try:
        return _FLAG_NAMES[_normalize(name)]
    except KeyError:
        raise ValueError(f"Unknown blocked flag: {name!r}") from None
