"""Per-division roster files, the roster cache and wrestler name resolution."""

import json
import logging
import re
import threading
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from sumoparse.japanese import strip_diacritics
from sumoparse.models import Division, Wrestler
from sumoparse.sorting import sort_wrestlers
from sumoparse.util import RosterNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".sumo-cli"
JSON_DIR = "json"

# Fallback search order for names not in the preferred division.
DIVISION_SEARCH_ORDER: tuple[Division, ...] = (
    Division.MAKUUCHI,
    Division.JURYO,
    Division.MAKUSHITA,
    Division.SANDANME,
    Division.JONIDAN,
    Division.JONOKUCHI,
)

# Applied in order. Collapses long vowels that romanizations spell differently.
PHONETIC_COLLAPSE_RULES: tuple[tuple[str, str], ...] = (
    ("ou", "o"),
    ("oo", "o"),
    ("uu", "u"),
    ("ei", "e"),
    ("aa", "a"),
    ("ii", "i"),
    ("ee", "e"),
)

_NON_LETTERS = re.compile(r"[^a-z]")

RosterLoader = Callable[[Division], list[Wrestler]]


def roster_path(data_dir: Path, division: Division) -> Path:
    """{data_dir}/json/{n}_{name}_rikishi.json"""
    return data_dir / JSON_DIR / f"{division.value}_{division.name.lower()}_rikishi.json"


def load_roster_file(path: Path, division: Division) -> list[Wrestler]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise RosterNotFoundError(division, path, str(e)) from e

    entries = data.get("rikishi", []) if isinstance(data, dict) else []
    wrestlers = []
    for entry in entries:
        try:
            wrestlers.append(Wrestler.from_dict(entry))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping malformed roster entry in %s: %s", path, e)
    logger.debug("Loaded %d rikishi from %s", len(wrestlers), path)
    return wrestlers


def save_roster(wrestlers: Sequence[Wrestler], data_dir: Path, division: Division) -> Path:
    """Write a division roster in comparator order."""
    path = roster_path(data_dir, division)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "division": division.label,
        "rikishi": [w.to_dict() for w in sort_wrestlers(wrestlers)],
    }
    path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8",
    )
    logger.info("Wrote %d rikishi to %s", len(wrestlers), path)
    return path


class RosterCache:
    """Lazily loaded, never evicted, per-division rosters.

    Concurrent first loads of the same division share a single load.
    """

    def __init__(
        self,
        data_dir: Path = DEFAULT_DATA_DIR,
        loader: RosterLoader | None = None,
    ) -> None:
        self.data_dir = Path(data_dir)
        self._loader = loader or self._load_from_disk
        self._rosters: dict[Division, tuple[Wrestler, ...]] = {}
        self._in_flight: dict[Division, threading.Event] = {}
        self._lock = threading.Lock()

    def _load_from_disk(self, division: Division) -> list[Wrestler]:
        return load_roster_file(roster_path(self.data_dir, division), division)

    def is_loaded(self, division: Division) -> bool:
        with self._lock:
            return division in self._rosters

    def get_or_load(self, division: Division) -> tuple[Wrestler, ...]:
        while True:
            with self._lock:
                roster = self._rosters.get(division)
                if roster is not None:
                    return roster
                event = self._in_flight.get(division)
                if event is None:
                    event = threading.Event()
                    self._in_flight[division] = event
                    owner = True
                else:
                    owner = False

            if not owner:
                # Another thread is loading; on failure the loop retries the load here.
                event.wait()
                continue

            try:
                loaded = tuple(self._loader(division))
            except BaseException:
                with self._lock:
                    del self._in_flight[division]
                event.set()
                raise

            with self._lock:
                self._rosters[division] = loaded
                del self._in_flight[division]
            event.set()
            logger.info("Cached %d rikishi for %s", len(loaded), division.label)
            return loaded

    def preload(self, divisions: Iterable[Division] = DIVISION_SEARCH_ORDER) -> None:
        for division in divisions:
            self.get_or_load(division)

    def clear(self) -> None:
        with self._lock:
            self._rosters.clear()


def normalize_name(name: str) -> str:
    """Lower-case ASCII letters only: 'Hōshōryū' -> 'hoshoryu'."""
    return _NON_LETTERS.sub("", strip_diacritics(name or "").lower())


def collapse_phonetics(name: str) -> str:
    for pattern, replacement in PHONETIC_COLLAPSE_RULES:
        name = name.replace(pattern, replacement)
    return name


def names_match(query: str, candidate: str) -> bool:
    """Compare two romanized names, tolerating long-vowel spelling differences."""
    q = normalize_name(query)
    c = normalize_name(candidate)
    if not q or not c:
        return False
    if q == c:
        return True
    if collapse_phonetics(q) == c:
        return True
    return collapse_phonetics(c) == q


class NameResolver:
    def __init__(self, cache: RosterCache) -> None:
        self.cache = cache

    def _search_order(self, preferred: Division) -> list[Division]:
        return [preferred] + [d for d in DIVISION_SEARCH_ORDER if d is not preferred]

    def _roster(self, division: Division, preferred: Division) -> tuple[Wrestler, ...]:
        if division is preferred:
            return self.cache.get_or_load(division)
        try:
            return self.cache.get_or_load(division)
        except RosterNotFoundError as e:
            logger.warning("Skipping %s in fallback search: %s", division.label, e)
            return ()

    def resolve(self, kanji: str, preferred: Division) -> Wrestler | None:
        """Exact kanji lookup, preferred division first."""
        if not kanji:
            return None
        for division in self._search_order(preferred):
            for wrestler in self._roster(division, preferred):
                if wrestler.kanji_name == kanji:
                    if division is not preferred:
                        logger.debug(
                            "Found %s in %s instead of %s",
                            kanji, division.label, preferred.label,
                        )
                    return wrestler
        logger.debug("Rikishi not found in any division: %s", kanji)
        return None

    def resolve_romanized(self, name: str, preferred: Division) -> Wrestler | None:
        """Fuzzy lookup by English or romaji name."""
        for division in self._search_order(preferred):
            for wrestler in self._roster(division, preferred):
                if names_match(name, wrestler.shikona.english) or names_match(
                    name, wrestler.shikona.romaji,
                ):
                    return wrestler
        logger.debug("No romanized match for %s", name)
        return None
