"""JSON output for parsed matchups."""

import json
import logging
from pathlib import Path
from typing import Any

from sumoparse.dictionaries import division_japanese, lookup_kimarite_en
from sumoparse.models import Division, MatchupData, MatchupSide, rank_label

logger = logging.getLogger(__name__)


def _side_to_dict(side: MatchupSide) -> dict[str, Any]:
    return {
        "shikona": {
            "kanji": side.shikona.kanji,
            "hiragana": side.shikona.hiragana,
            "romaji": side.shikona.romaji,
            "english": side.shikona.english,
        },
        "rank": rank_label(side.current.rank),
        "current": side.current.to_dict(),
        "record": str(side.record),
        "result": side.result.name.lower(),
    }


def matchup_to_dict(matchup: MatchupData) -> dict[str, Any]:
    winner = matchup.winner
    technique = winner.technique if winner else None
    return {
        "east": _side_to_dict(matchup.east),
        "west": _side_to_dict(matchup.west),
        "technique": technique,
        "technique_ja": lookup_kimarite_en(technique) if technique else None,
    }


def write_matchups_json(
    matchups: list[MatchupData],
    path: Path,
    division: Division,
    day: int,
) -> None:
    """Write one object per bout, in torikumi order, under a division/day header."""
    payload = {
        "division": division.label,
        "division_ja": division_japanese(division),
        "day": day,
        "count": len(matchups),
        "matchups": [matchup_to_dict(m) for m in matchups],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
        f.write("\n")
    logger.info("Wrote %d matchups to %s", len(matchups), path)
