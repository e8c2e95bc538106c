"""Hoshitori (standings table) HTML parser."""

import logging
import re

from bs4 import BeautifulSoup, Tag

from sumoparse.japanese import romaji_with_macrons, strip_diacritics
from sumoparse.models import Division, Shikona, Side, Wrestler
from sumoparse.parse_rank import parse_rank

logger = logging.getLogger(__name__)

_PROFILE_ID_PATTERN = re.compile(r"(\d+)")


def parse_hoshitori_page(html: str, division: Division) -> list[Wrestler]:
    """Parse a standings page and return one Wrestler per listed rikishi."""
    soup = BeautifulSoup(html, "html.parser")
    table = soup.find("table", id="ew_table_sm")
    if not table:
        logger.warning("No standings table found for %s", division.label)
        return []

    wrestlers: list[Wrestler] = []
    unranked = 0
    for tr in table.find_all("tr"):
        # cells: [East box, Rank, West box]
        cells = tr.find_all(["td", "th"], recursive=False)
        if len(cells) != 3:
            continue

        rank_text = cells[1].get_text(strip=True)

        for cell, side in ((cells[0], Side.EAST), (cells[2], Side.WEST)):
            box = cell.find("div", class_="box")
            if not box:
                continue
            wrestler = _extract_wrestler(box, rank_text, division, side)
            if wrestler.current is None:
                unranked += 1
            wrestlers.append(wrestler)

    logger.info(
        "Parsed %d rikishi from %s standings (unranked=%d)",
        len(wrestlers), division.label, unranked,
    )
    return wrestlers


def _extract_wrestler(
    box: Tag,
    rank_text: str,
    division: Division,
    side: Side,
) -> Wrestler:
    link = box.find("a")
    href = link.get("href", "") if link else ""
    m = _PROFILE_ID_PATTERN.search(href)
    wrestler_id = int(m.group(1)) if m else 0

    kanji = ""
    if link:
        span = link.find("span")
        kanji = (span or link).get_text(strip=True)

    hiragana_tag = box.find(class_="hoshi_br")
    hiragana = "".join(hiragana_tag.get_text().split()) if hiragana_tag else ""

    return Wrestler(
        id=wrestler_id,
        shikona=_shikona(kanji, hiragana),
        current=parse_rank(rank_text, division, side),
    )


def _shikona(kanji: str, hiragana: str) -> Shikona:
    if not hiragana:
        return Shikona.from_kanji(kanji)
    romaji = romaji_with_macrons(hiragana).capitalize()
    return Shikona(
        kanji=kanji,
        hiragana=hiragana,
        romaji=romaji,
        english=strip_diacritics(romaji),
    )
