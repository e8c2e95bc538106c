"""Data models."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Union


class Division(IntEnum):
    """Competition tiers, top first. Values are the federation's division numbers."""

    MAKUUCHI = 1
    JURYO = 2
    MAKUSHITA = 3
    SANDANME = 4
    JONIDAN = 5
    JONOKUCHI = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_label(cls, text: str) -> "Division":
        """Accept an English name ("juryo") or a number ("2")."""
        value = text.strip()
        try:
            if value.isdigit():
                return cls(int(value))
            return cls[value.upper()]
        except (KeyError, ValueError):
            raise ValueError(
                f"Invalid division: {text}. Available divisions: "
                + ", ".join(f"{d.value}={d.name.lower()}" for d in cls)
            ) from None


class Title(IntEnum):
    """Named ranks of the top division, in hierarchy order."""

    YOKOZUNA = 1
    OZEKI = 2
    SEKIWAKE = 3
    KOMUSUBI = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Side(Enum):
    EAST = "East"
    WEST = "West"


class BoutResult(Enum):
    WIN = "W"
    LOSS = "L"
    NO_RESULT = ""


@dataclass(frozen=True)
class Titled:
    title: Title


@dataclass(frozen=True)
class Maegashira:
    number: int

    def __post_init__(self) -> None:
        if self.number < 1:
            raise ValueError(f"Maegashira number must be >= 1, got {self.number}")


@dataclass(frozen=True)
class Numbered:
    division: Division
    number: int

    def __post_init__(self) -> None:
        if self.division is Division.MAKUUCHI:
            raise ValueError("Makuuchi ranks are Titled or Maegashira")
        if self.number < 1:
            raise ValueError(f"Rank number must be >= 1, got {self.number}")


Rank = Union[Titled, Maegashira, Numbered]


def rank_division(rank: Rank) -> Division:
    """Division implied by a rank."""
    if isinstance(rank, Numbered):
        return rank.division
    return Division.MAKUUCHI


def rank_label(rank: Rank) -> str:
    if isinstance(rank, Titled):
        return rank.title.label
    if isinstance(rank, Maegashira):
        return f"Maegashira {rank.number}"
    return f"{rank.division.label} {rank.number}"


def rank_to_dict(rank: Rank) -> dict[str, Any]:
    if isinstance(rank, Titled):
        return {"kind": "Titled", "title": rank.title.label}
    return {"kind": type(rank).__name__, "number": rank.number}


def rank_from_dict(data: dict[str, Any], division: Division) -> Rank:
    kind = data.get("kind")
    if kind == "Titled":
        return Titled(Title[str(data["title"]).upper()])
    if kind == "Maegashira":
        return Maegashira(int(data["number"]))
    if kind == "Numbered":
        return Numbered(division, int(data["number"]))
    raise ValueError(f"Unknown rank kind: {kind!r}")


@dataclass(frozen=True)
class BanzukeSlot:
    division: Division
    side: Side
    rank: Rank

    def __post_init__(self) -> None:
        if rank_division(self.rank) is not self.division:
            raise ValueError(
                f"Rank {self.rank} does not belong to division {self.division.label}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "division": self.division.label,
            "side": self.side.value,
            "rank": rank_to_dict(self.rank),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BanzukeSlot":
        division = Division[str(data["division"]).upper()]
        return cls(
            division=division,
            side=Side(data["side"]),
            rank=rank_from_dict(data["rank"], division),
        )


@dataclass(frozen=True)
class Shikona:
    kanji: str
    hiragana: str
    romaji: str
    english: str

    @classmethod
    def from_kanji(cls, kanji: str) -> "Shikona":
        """Fallback when a name cannot be resolved against the rosters."""
        return cls(kanji=kanji, hiragana=kanji, romaji=kanji, english=kanji)


@dataclass(frozen=True)
class Wrestler:
    id: int
    shikona: Shikona
    current: BanzukeSlot | None = None

    @property
    def kanji_name(self) -> str:
        return self.shikona.kanji

    @property
    def english_name(self) -> str:
        return self.shikona.english

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "shikona": {
                "kanji": self.shikona.kanji,
                "hiragana": self.shikona.hiragana,
                "romaji": self.shikona.romaji,
                "english": self.shikona.english,
            },
            "current": self.current.to_dict() if self.current else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Wrestler":
        shikona = data.get("shikona") or {}
        current = data.get("current")
        return cls(
            id=int(data.get("id", 0)),
            shikona=Shikona(
                kanji=shikona.get("kanji", ""),
                hiragana=shikona.get("hiragana", ""),
                romaji=shikona.get("romaji", ""),
                english=shikona.get("english", ""),
            ),
            current=BanzukeSlot.from_dict(current) if current else None,
        )


@dataclass(frozen=True)
class Record:
    wins: int
    losses: int
    rest: int | None = None  # only when bouts were missed

    def __str__(self) -> str:
        text = f"{self.wins}-{self.losses}"
        if self.rest is not None:
            text += f"-{self.rest}"
        return text


@dataclass(frozen=True)
class MatchupSide:
    shikona: Shikona
    current: BanzukeSlot
    record: Record
    result: BoutResult
    technique: str | None = None

    def __post_init__(self) -> None:
        if self.technique is not None and self.result is not BoutResult.WIN:
            raise ValueError("technique is only recorded for the winning side")


@dataclass(frozen=True)
class MatchupData:
    east: MatchupSide
    west: MatchupSide

    def __post_init__(self) -> None:
        if self.east.result is BoutResult.WIN and self.west.result is BoutResult.WIN:
            raise ValueError("both sides of a bout cannot win")

    @property
    def winner(self) -> MatchupSide | None:
        if self.east.result is BoutResult.WIN:
            return self.east
        if self.west.result is BoutResult.WIN:
            return self.west
        return None
