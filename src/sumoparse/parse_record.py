"""Win/loss record parser."""

import logging
import re

from sumoparse.models import Record

logger = logging.getLogger(__name__)

_RECORD_WITH_REST = re.compile(r"（?(\d+)勝(\d+)敗(\d+)休）?")
_RECORD = re.compile(r"（?(\d+)勝(\d+)敗）?")


def parse_record(text: str) -> Record:
    """Parse （6勝2敗） or （1勝0敗3休）. Anything else is 0-0."""
    if not text:
        return Record(wins=0, losses=0)

    m = _RECORD_WITH_REST.search(text)
    if m:
        return Record(wins=int(m.group(1)), losses=int(m.group(2)), rest=int(m.group(3)))

    m = _RECORD.search(text)
    if m:
        return Record(wins=int(m.group(1)), losses=int(m.group(2)))

    logger.warning("Unrecognised record text %r", text)
    return Record(wins=0, losses=0)
