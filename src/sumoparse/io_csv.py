"""CSV output for parsed matchups."""

import csv
import logging
from pathlib import Path

from sumoparse.models import Division, MatchupData, MatchupSide, rank_label

logger = logging.getLogger(__name__)

MATCHUP_COLUMNS = [
    "east_rank", "east_record", "east_kanji", "east_hiragana", "east_name",
    "east_result", "technique",
    "west_result", "west_name", "west_hiragana", "west_kanji", "west_record",
    "west_rank",
]


def matchup_filename(day: int, division: Division, ext: str = "csv") -> str:
    return f"day_{day:02d}_{division.value}_{division.name.lower()}.{ext}"


def _side_to_dict(prefix: str, side: MatchupSide) -> dict[str, str]:
    return {
        f"{prefix}_rank": rank_label(side.current.rank),
        f"{prefix}_record": str(side.record),
        f"{prefix}_kanji": side.shikona.kanji,
        f"{prefix}_hiragana": side.shikona.hiragana,
        f"{prefix}_name": side.shikona.english,
        f"{prefix}_result": side.result.value,
    }


def matchups_to_rows(matchups: list[MatchupData]) -> list[dict[str, str]]:
    rows = []
    for m in matchups:
        row = _side_to_dict("east", m.east)
        row.update(_side_to_dict("west", m.west))
        winner = m.winner
        row["technique"] = (winner.technique or "") if winner else ""
        rows.append(row)
    return rows


def _write_csv(path: Path, rows: list[dict], fieldnames: list[str]) -> None:
    """Write rows to CSV with LF line endings."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(
            f, fieldnames=fieldnames, quoting=csv.QUOTE_MINIMAL,
            lineterminator="\n",
        )
        writer.writeheader()
        writer.writerows(rows)


def write_matchups_csv(matchups: list[MatchupData], path: Path) -> None:
    """Write one row per bout, in torikumi order."""
    rows = matchups_to_rows(matchups)
    _write_csv(path, rows, MATCHUP_COLUMNS)
    logger.info("Wrote %d matchup rows to %s", len(rows), path)
