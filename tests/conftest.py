"""Shared pytest fixtures for HTML fixtures and roster data."""

import json
from collections.abc import Iterator
from pathlib import Path

import pytest

from sumoparse.models import (
    BanzukeSlot,
    Division,
    Maegashira,
    Numbered,
    Shikona,
    Side,
    Title,
    Titled,
    Wrestler,
)
from sumoparse.roster import NameResolver, RosterCache, roster_path

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def make_wrestler(
    wid: int,
    kanji: str,
    english: str,
    slot: BanzukeSlot | None = None,
    hiragana: str = "",
    romaji: str = "",
) -> Wrestler:
    return Wrestler(
        id=wid,
        shikona=Shikona(
            kanji=kanji,
            hiragana=hiragana or kanji,
            romaji=romaji or english,
            english=english,
        ),
        current=slot,
    )


def makuuchi_roster() -> list[Wrestler]:
    return [
        make_wrestler(
            3842, "豊昇龍", "Hoshoryu",
            BanzukeSlot(Division.MAKUUCHI, Side.EAST, Titled(Title.YOKOZUNA)),
            hiragana="ほうしょうりゅう", romaji="Hōshōryū",
        ),
        make_wrestler(
            3761, "琴櫻", "Kotozakura",
            BanzukeSlot(Division.MAKUUCHI, Side.EAST, Titled(Title.OZEKI)),
            hiragana="ことざくら",
        ),
        make_wrestler(
            3990, "獅司", "Shishi",
            BanzukeSlot(Division.MAKUUCHI, Side.EAST, Maegashira(18)),
            hiragana="しし",
        ),
    ]


def juryo_roster() -> list[Wrestler]:
    return [
        make_wrestler(
            4116, "大青山", "Daiseizan",
            BanzukeSlot(Division.JURYO, Side.WEST, Numbered(Division.JURYO, 1)),
            hiragana="だいせいざん",
        ),
    ]


def write_roster(data_dir: Path, division: Division, wrestlers: list[Wrestler]) -> Path:
    path = roster_path(data_dir, division)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"rikishi": [w.to_dict() for w in wrestlers]}
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture()
def torikumi_sample_html() -> str:
    return (FIXTURES_DIR / "torikumi_sample.html").read_text(encoding="utf-8")


@pytest.fixture()
def hoshitori_sample_html() -> str:
    return (FIXTURES_DIR / "hoshitori_sample.html").read_text(encoding="utf-8")


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    """Data dir with Makuuchi and Juryo rosters only."""
    write_roster(tmp_path, Division.MAKUUCHI, makuuchi_roster())
    write_roster(tmp_path, Division.JURYO, juryo_roster())
    return tmp_path


@pytest.fixture()
def roster_cache(data_dir: Path) -> Iterator[RosterCache]:
    cache = RosterCache(data_dir)
    yield cache
    cache.clear()


@pytest.fixture()
def resolver(roster_cache: RosterCache) -> NameResolver:
    return NameResolver(roster_cache)
