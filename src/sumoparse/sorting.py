"""Banzuke ordering of wrestlers.

Order: division, then titled ranks by title, then numbered ranks by
number, then East before West, then English name (case-insensitive).
Wrestlers without a slot go last and keep their input order.
"""

from collections.abc import Iterable

from sumoparse.models import BanzukeSlot, Side, Titled, Wrestler

_SIDE_ORDER = {Side.EAST: 0, Side.WEST: 1}
_TITLED_BAND = 0
_NUMBERED_BAND = 1


def slot_sort_key(slot: BanzukeSlot) -> tuple[int, int, int, int]:
    if isinstance(slot.rank, Titled):
        band, position = _TITLED_BAND, slot.rank.title.value
    else:
        band, position = _NUMBERED_BAND, slot.rank.number
    return (slot.division.value, band, position, _SIDE_ORDER[slot.side])


def wrestler_sort_key(wrestler: Wrestler) -> tuple:
    if wrestler.current is None:
        return (1,)
    return (
        0, *slot_sort_key(wrestler.current), wrestler.english_name.casefold(), wrestler.id,
    )


def compare_wrestlers(a: Wrestler, b: Wrestler) -> int:
    ka = wrestler_sort_key(a)
    kb = wrestler_sort_key(b)
    if ka < kb:
        return -1
    if ka > kb:
        return 1
    return 0


def sort_wrestlers(wrestlers: Iterable[Wrestler]) -> list[Wrestler]:
    # sorted() is stable, so unranked wrestlers keep their relative order.
    return sorted(wrestlers, key=wrestler_sort_key)
