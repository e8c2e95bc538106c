"""Japanese rank text parser."""

import logging
import re

from sumoparse.dictionaries import RANK_DIVISIONS, TITLE_RANKS, rank_prefixes
from sumoparse.japanese import HITTOU, MAIME, parse_position
from sumoparse.models import (
    BanzukeSlot,
    Division,
    Maegashira,
    Numbered,
    Rank,
    Side,
    Titled,
)

logger = logging.getLogger(__name__)

_MAIME_PATTERN = re.compile(rf"^(.+){MAIME}$")

_RANK_PREFIXES = rank_prefixes()


def parse_rank(
    text: str,
    division: Division | None = None,
    side: Side | None = None,
) -> BanzukeSlot | None:
    """Parse rank text such as 横綱, 前頭六枚目, 十両筆頭 or 三枚目.

    ``division`` is used only when the text does not name one itself.
    Returns None when the rank cannot be placed in any division.
    """
    clean = (text or "").strip()
    side = side or Side.EAST

    if clean == HITTOU:
        if division is None:
            return None
        return _slot(division, 1, side)

    for japanese, english in _RANK_PREFIXES:
        if not clean.startswith(japanese):
            continue

        title = TITLE_RANKS.get(english)
        if title is not None:
            # Titles never carry a position.
            return BanzukeSlot(Division.MAKUUCHI, side, Titled(title))

        remainder = clean[len(japanese):].strip()
        position = parse_position(remainder) if remainder else 1
        if position is None:
            logger.warning("Unrecognised position %r in rank %r, using 1", remainder, clean)
            position = 1
        return _slot(RANK_DIVISIONS[english], position, side)

    m = _MAIME_PATTERN.match(clean)
    if m:
        if division is None:
            logger.debug("Position-only rank %r without a division", clean)
            return None
        position = parse_position(clean)
        if position is None:
            logger.warning("Unrecognised position in rank %r, using 1", clean)
            position = 1
        return _slot(division, position, side)

    if division is None:
        logger.debug("Unknown rank %r without a division", clean)
        return None
    logger.warning("Unknown rank %r, falling back to %s", clean, division.label)
    return _slot(division, 1, side)


def _slot(division: Division, position: int, side: Side) -> BanzukeSlot:
    rank: Rank
    if division is Division.MAKUUCHI:
        rank = Maegashira(position)
    else:
        rank = Numbered(division, position)
    return BanzukeSlot(division, side, rank)
