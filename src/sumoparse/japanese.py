"""Japanese numeral, position and kana helpers."""

import unicodedata

import pykakasi

HITTOU = "筆頭"  # top slot of a numbered tier
MAIME = "枚目"  # ordinal counter suffix

_DIGITS = {
    "〇": 0, "一": 1, "二": 2, "三": 3, "四": 4,
    "五": 5, "六": 6, "七": 7, "八": 8, "九": 9,
}
_UNITS = {"十": 10, "百": 100, "千": 1000}


def kanji_to_number(text: str) -> int:
    """Convert a kanji numeral such as 十八 or 四十五 to an int.

    Returns 0 for empty or unrecognized text.
    """
    text = (text or "").strip()
    if not text:
        return 0

    total = 0
    pending: int | None = None
    last_unit = None
    for ch in text:
        if ch in _DIGITS:
            if pending is not None:
                return 0
            pending = _DIGITS[ch]
        elif ch in _UNITS:
            unit = _UNITS[ch]
            if last_unit is not None and unit >= last_unit:
                return 0
            total += (1 if pending is None else pending) * unit
            pending = None
            last_unit = unit
        else:
            return 0
    if pending is not None:
        total += pending
    return total


def parse_position(text: str | None) -> int | None:
    """Position from 筆頭, 'N枚目' or a bare numeral; None if not a position."""
    if text is None:
        return None
    text = text.strip()
    if text == HITTOU:
        return 1
    if text.endswith(MAIME):
        text = text[: -len(MAIME)]
    value = kanji_to_number(text)
    return value if value > 0 else None


# Long vowels written with macrons. "ei" is left alone, as in shikona spellings.
_MACRONS = (("ou", "ō"), ("oo", "ō"), ("uu", "ū"), ("aa", "ā"))

_kakasi = pykakasi.kakasi()


def kana_to_romaji(text: str) -> str:
    """Hepburn romaji for kana text, without macrons: ほうしょう -> houshou."""
    text = (text or "").strip()
    if not text:
        return ""
    return "".join(item["hepburn"] for item in _kakasi.convert(text))


def romaji_with_macrons(text: str) -> str:
    romaji = kana_to_romaji(text)
    for pattern, macron in _MACRONS:
        romaji = romaji.replace(pattern, macron)
    return romaji


def strip_diacritics(text: str) -> str:
    """'Hōshōryū' -> 'Hoshoryu'."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))
