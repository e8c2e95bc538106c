"""Japanese <-> English dictionaries for divisions, ranks and kimarite.

Each table is written once as English -> Japanese and inverted at import
time. Inversion refuses duplicate Japanese values so that every lookup in
either direction is lossless.
"""

from collections.abc import Mapping
from types import MappingProxyType

from sumoparse.models import Division, Title


def invert(table: Mapping[str, str]) -> Mapping[str, str]:
    """Return a read-only Japanese -> English view of an English -> Japanese table."""
    inverted: dict[str, str] = {}
    for english, japanese in table.items():
        if japanese in inverted:
            raise ValueError(
                f"Duplicate Japanese value {japanese!r} for "
                f"{inverted[japanese]!r} and {english!r}"
            )
        inverted[japanese] = english
    return MappingProxyType(inverted)


DIVISIONS_EN: Mapping[str, str] = MappingProxyType({
    "makuuchi": "幕内",
    "juryo": "十両",
    "makushita": "幕下",
    "sandanme": "三段目",
    "jonidan": "序二段",
    "jonokuchi": "序ノ口",
})

RANKS_EN: Mapping[str, str] = MappingProxyType({
    "yokozuna": "横綱",
    "ozeki": "大関",
    "sekiwake": "関脇",
    "komusubi": "小結",
    "maegashira": "前頭",
    "juryo": "十両",
    "makushita": "幕下",
    "sandanme": "三段目",
    "jonidan": "序二段",
    "jonokuchi": "序ノ口",
})

# Orthography follows the association's torikumi pages.
KIMARITE_EN: Mapping[str, str] = MappingProxyType({
    # kihon-waza
    "tsuki-dashi": "突き出し",
    "tsuki-taoshi": "突き倒し",
    "oshi-dashi": "押し出し",
    "oshi-taoshi": "押し倒し",
    "yori-kiri": "寄り切り",
    "yori-taoshi": "寄り倒し",
    "abise-taoshi": "浴びせ倒し",
    # nage-te
    "uwate-nage": "上手投げ",
    "shitate-nage": "下手投げ",
    "kote-nage": "小手投げ",
    "sukui-nage": "すくい投げ",
    "uwate-dashi-nage": "上手出し投げ",
    "shitate-dashi-nage": "下手出し投げ",
    "koshi-nage": "腰投げ",
    "kubi-nage": "首投げ",
    "ippon-zeoi": "一本背負い",
    "nicho-nage": "二丁投げ",
    "yagura-nage": "櫓投げ",
    "kake-nage": "掛け投げ",
    "tsukami-nage": "つかみ投げ",
    # kake-te
    "uchi-gake": "内掛け",
    "soto-gake": "外掛け",
    "chon-gake": "ちょん掛け",
    "kiri-kaeshi": "切り返し",
    "kawazu-gake": "河津掛け",
    "ke-kaeshi": "蹴返し",
    "keta-guri": "蹴手繰り",
    "mitokoro-zeme": "三所攻め",
    "watashi-komi": "渡し込み",
    "nimai-geri": "二枚蹴り",
    "komata-sukui": "小股すくい",
    "soto-komata": "外小股",
    "omata": "大股",
    "tsuma-tori": "褄取り",
    "kozuma-tori": "小褄取り",
    "ashi-tori": "足取り",
    "suso-tori": "裾取り",
    "suso-harai": "裾払い",
    # sori-te
    "izori": "居反り",
    "shumoku-zori": "撞木反り",
    "kake-zori": "掛け反り",
    "tasuki-zori": "たすき反り",
    "soto-tasuki-zori": "外たすき反り",
    "tsutae-zori": "伝え反り",
    # hineri-te
    "tsuki-otoshi": "突き落とし",
    "maki-otoshi": "巻き落とし",
    "tottari": "とったり",
    "saka-tottari": "逆とったり",
    "kata-sukashi": "肩透かし",
    "soto-muso": "外無双",
    "uchi-muso": "内無双",
    "zubuneri": "ずぶねり",
    "uwate-hineri": "上手捻り",
    "shitate-hineri": "下手捻り",
    "amiuchi": "網打ち",
    "saba-ori": "鯖折り",
    "harima-nage": "波離間投げ",
    "osakate": "大逆手",
    "kaina-hineri": "腕捻り",
    "gassho-hineri": "合掌捻り",
    "tokkuri-nage": "徳利投げ",
    "kubi-hineri": "首捻り",
    "kote-hineri": "小手捻り",
    # tokushu-waza
    "hiki-otoshi": "引き落とし",
    "hikkake": "引っ掛け",
    "hataki-komi": "はたき込み",
    "sokubi-otoshi": "素首落とし",
    "tsuri-dashi": "吊り出し",
    "okuri-tsuri-dashi": "送り吊り出し",
    "tsuri-otoshi": "吊り落とし",
    "okuri-tsuri-otoshi": "送り吊り落とし",
    "okuri-dashi": "送り出し",
    "okuri-taoshi": "送り倒し",
    "okuri-nage": "送り投げ",
    "okuri-gake": "送り掛け",
    "okuri-hiki-otoshi": "送り引き落とし",
    "wari-dashi": "割り出し",
    "utchari": "うっちゃり",
    "kime-dashi": "極め出し",
    "kime-taoshi": "極め倒し",
    "ushiro-motare": "後ろもたれ",
    "yobi-modoshi": "呼び戻し",
    # non-techniques
    "isami-ashi": "勇み足",
    "koshi-kudake": "腰砕け",
    "tsuki-te": "つき手",
    "tsuki-hiza": "つきひざ",
    "fumi-dashi": "踏み出し",
    # default wins
    "fusensho": "不戦勝",
    "hansoku": "反則",
})

DIVISIONS_JP = invert(DIVISIONS_EN)
RANKS_JP = invert(RANKS_EN)
KIMARITE_JP = invert(KIMARITE_EN)

TITLE_RANKS: Mapping[str, Title] = MappingProxyType({
    "yokozuna": Title.YOKOZUNA,
    "ozeki": Title.OZEKI,
    "sekiwake": Title.SEKIWAKE,
    "komusubi": Title.KOMUSUBI,
})

RANK_DIVISIONS: Mapping[str, Division] = MappingProxyType({
    "maegashira": Division.MAKUUCHI,
    "juryo": Division.JURYO,
    "makushita": Division.MAKUSHITA,
    "sandanme": Division.SANDANME,
    "jonidan": Division.JONIDAN,
    "jonokuchi": Division.JONOKUCHI,
})


def lookup_division(japanese: str) -> Division | None:
    english = DIVISIONS_JP.get(japanese.strip())
    return Division[english.upper()] if english else None


def division_japanese(division: Division) -> str:
    return DIVISIONS_EN[division.name.lower()]


def lookup_kimarite(japanese: str) -> str | None:
    return KIMARITE_JP.get(japanese.strip())


def lookup_kimarite_en(english: str) -> str | None:
    return KIMARITE_EN.get(english.strip().lower())


def rank_prefixes() -> list[tuple[str, str]]:
    """(japanese, english) rank pairs, longest Japanese first for prefix scans."""
    return sorted(RANKS_JP.items(), key=lambda item: len(item[0]), reverse=True)
