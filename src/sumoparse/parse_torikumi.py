"""Torikumi (daily bout table) HTML parser."""

import datetime
import logging
import re
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from sumoparse.dictionaries import lookup_kimarite
from sumoparse.japanese import kanji_to_number
from sumoparse.models import (
    BanzukeSlot,
    BoutResult,
    Division,
    MatchupData,
    MatchupSide,
    Shikona,
    Side,
)
from sumoparse.parse_rank import parse_rank
from sumoparse.parse_record import parse_record
from sumoparse.roster import NameResolver
from sumoparse.util import RosterNotFoundError

logger = logging.getLogger(__name__)

WIN_CLASS = "win"
PLAYER_CLASS = "player"
RESULT_CLASS = "result"
DECIDE_CLASS = "decide"
DECIDED_IMAGE = "result_ic"  # result_ic01 = white star, result_ic02 = black star
KIMARITE_SUFFIX = "取組解説"


def parse_torikumi_page(
    html: str,
    division: Division,
    resolver: NameResolver,
) -> list[MatchupData]:
    """Parse a torikumi page and return one MatchupData per bout."""
    soup = BeautifulSoup(html, "html.parser")
    table = soup.find("table", id="torikumi_table")
    if not table:
        logger.warning("No torikumi table found for %s", division.label)
        return []

    # A missing roster for the table's own division aborts the page.
    resolver.cache.get_or_load(division)

    matchups: list[MatchupData] = []
    skipped = 0
    rows = table.find_all("tr")
    for row_index, tr in enumerate(rows, start=1):
        # Header row: th cells only
        if not tr.find("td"):
            continue
        matchup = parse_matchup_row(tr, division, resolver, row_index=row_index)
        if matchup is None:
            skipped += 1
            logger.warning("Skipping torikumi row %d in %s", row_index, division.label)
            continue
        matchups.append(matchup)
        logger.debug(
            "  %s row %d: %s vs %s -> %s/%s",
            division.label, row_index,
            matchup.east.shikona.english, matchup.west.shikona.english,
            matchup.east.result.name, matchup.west.result.name,
        )

    logger.info(
        "Parsed %d bouts for %s (skipped=%d)", len(matchups), division.label, skipped,
    )
    return matchups


def parse_matchup_row(
    row: Tag,
    division: Division,
    resolver: NameResolver,
    row_index: int = 0,
) -> MatchupData | None:
    """Parse one bout row. East is the first cell, West the last."""
    try:
        cells = row.find_all("td", recursive=False)
        if len(cells) < 2:
            return None

        east_cell = cells[0]
        west_cell = cells[-1]

        east = _parse_side(east_cell, division, Side.EAST, resolver)
        west = _parse_side(west_cell, division, Side.WEST, resolver)
        if east is None or west is None:
            return None

        return MatchupData(east=east, west=west)
    except Exception as e:
        logger.warning(
            "Failed to parse torikumi row %d in %s: %s", row_index, division.label, e,
        )
        return None


def _parse_side(
    cell: Tag,
    division: Division,
    side: Side,
    resolver: NameResolver,
) -> MatchupSide | None:
    rank_text = _text(cell.find(class_="rank"))
    current = parse_rank(rank_text, division, side)

    kanji = _extract_kanji(cell)
    record = parse_record(_text(cell.find(class_="perform")))

    if not kanji or current is None:
        logger.debug("Incomplete %s side: kanji=%r rank=%r", side.value, kanji, rank_text)
        return None

    shikona = _resolve_shikona(kanji, current, division, resolver)
    result = determine_result(cell)
    technique = extract_technique(cell) if result is BoutResult.WIN else None

    return MatchupSide(
        shikona=shikona,
        current=current,
        record=record,
        result=result,
        technique=technique,
    )


def _resolve_shikona(
    kanji: str,
    current: BanzukeSlot,
    division: Division,
    resolver: NameResolver,
) -> Shikona:
    # A listed rank can belong to another division than the table's.
    lookup_division = current.division
    try:
        wrestler = resolver.resolve(kanji, lookup_division)
    except RosterNotFoundError as e:
        if lookup_division is division:
            raise
        logger.warning("%s; searching from %s instead", e, division.label)
        lookup_division = division
        wrestler = resolver.resolve(kanji, lookup_division)
    if wrestler is None:
        logger.warning(
            "Rikishi not found in rosters: %r (division: %s)", kanji, lookup_division.label,
        )
        return Shikona.from_kanji(kanji)
    return wrestler.shikona


def _extract_kanji(cell: Tag) -> str:
    name = cell.find(class_="name")
    if not name:
        return ""
    span = name.find("span")
    if span and span.get_text(strip=True):
        return span.get_text(strip=True)
    link = name.find("a")
    return link.get_text(strip=True) if link else ""


def _text(tag: Tag | None) -> str:
    return tag.get_text(strip=True) if tag else ""


def determine_result(cell: Tag) -> BoutResult:
    """Win/Loss/NoResult from the cell's classes and the row's result images.

    A ``win`` class always wins over any other marker.
    """
    classes = cell.get("class") or []
    if WIN_CLASS in classes:
        return BoutResult.WIN

    if PLAYER_CLASS in classes:
        row = cell.find_parent("tr")
        if row is not None and _row_has_decided_result(row):
            return BoutResult.LOSS

    return BoutResult.NO_RESULT


def _row_has_decided_result(row: Tag) -> bool:
    for result_cell in row.find_all("td", class_=RESULT_CLASS):
        for img in result_cell.find_all("img"):
            if DECIDED_IMAGE in img.get("src", ""):
                return True
    return False


def extract_technique(cell: Tag) -> str | None:
    """English kimarite from the row's decide cell, or None."""
    row = cell.find_parent("tr")
    if row is None:
        return None
    decide = row.find("td", class_=DECIDE_CLASS)
    if not decide:
        return None
    link = decide.find("a", class_="technic") or decide
    japanese = link.get_text(strip=True).replace(KIMARITE_SUFFIX, "").strip()
    if not japanese:
        return None

    english = lookup_kimarite(japanese)
    if english is None:
        logger.debug("Kimarite not in dictionary: %r", japanese)
    return english


# Day names shown in the page heading, by tournament day.
DAY_NAMES = {
    1: "初日", 2: "二日目", 3: "三日目", 4: "四日目", 5: "五日目",
    6: "六日目", 7: "七日目", 8: "中日", 9: "九日目", 10: "十日目",
    11: "十一日目", 12: "十二日目", 13: "十三日目", 14: "十四日目", 15: "千秋楽",
}
REIWA_EPOCH_YEAR = 2018  # 令和1年 = 2019
JST = datetime.timezone(datetime.timedelta(hours=9))

_REIWA_DATE_PATTERN = re.compile(r"令和(\S+?)年(\d+)月(\d+)日")
_DAY_NAME_PATTERN = re.compile(r"場所[:：]\s*(\S+)")


@dataclass(frozen=True)
class PageDay:
    """Which tournament day a torikumi page says it shows."""

    day: int | None
    date: datetime.date | None
    day_name: str | None


def parse_page_day(html: str) -> PageDay:
    """Read the hidden #day field, the #dayHead date and the .mdDate day name."""
    soup = BeautifulSoup(html, "html.parser")

    day = None
    day_input = soup.find(id="day")
    value = (day_input.get("value") or "").strip() if day_input else ""
    if value.isdigit():
        day = int(value)

    date = None
    head = soup.find(id="dayHead")
    m = _REIWA_DATE_PATTERN.search(head.get_text(strip=True)) if head else None
    if m:
        year_text = m.group(1)
        year = int(year_text) if year_text.isdigit() else kanji_to_number(year_text)
        try:
            date = datetime.date(REIWA_EPOCH_YEAR + year, int(m.group(2)), int(m.group(3)))
        except ValueError:
            logger.warning("Invalid date in day heading: %r", m.group(0))

    day_name = None
    md_date = soup.find(class_="mdDate")
    m = _DAY_NAME_PATTERN.search(md_date.get_text(strip=True)) if md_date else None
    if m:
        day_name = m.group(1)

    return PageDay(day=day, date=date, day_name=day_name)


def check_page_day(
    page: PageDay,
    requested_day: int,
    today: datetime.date | None = None,
) -> list[str]:
    """Warnings for a page that does not show the requested day. Empty when it does."""
    warnings = []
    if page.day is not None and page.day != requested_day:
        warnings.append(f"Requested day {requested_day} but page shows day {page.day}")

    if page.day is not None and page.day_name is not None:
        expected = DAY_NAMES.get(page.day)
        if expected is not None and page.day_name != expected:
            warnings.append(
                f"Day {page.day} should be {expected!r} but page shows {page.day_name!r}"
            )

    if page.date is not None:
        today = today or datetime.datetime.now(JST).date()
        # Torikumi are published the day before.
        if page.date > today + datetime.timedelta(days=1):
            warnings.append(f"Page date {page.date.isoformat()} is in the future (today {today})")

    return warnings
