"""
Vocal technique labels reported by the seimitsu scorer.

The firmware logs techniques as "detected ... tech <id>". Ids run from 0
to 0x2b; 0x11 is never emitted.
"""
from types import MappingProxyType

UNKNOWN_TECHNIQUE = "不明な技"

TECHNIQUE_NAMES = MappingProxyType({
    0x00: "しゃくり",
    0x01: "大しゃくり",
    0x02: "早いしゃくり",
    0x03: "早いしゃくり(強)",
    0x04: "L字アクセント",
    0x05: "L字アクセント(強)",
    0x06: "V字アクセント",
    0x07: "V字アクセント(谷切れ)",
    0x08: "V字アクセント(下から)",
    0x09: "逆V字アクセント",
    0x0a: "こぶし(先頭)",
    0x0b: "こぶし(中間)",
    0x0c: "フライダウン",
    0x0d: "ハンマリング・オン",
    0x0e: "プリング・オフ",
    0x0f: "上昇ポルタメント",
    0x10: "下降ポルタメント",
    0x12: "フォール",
    0x13: "早いフォール",
    0x14: "ヒーカップ",
    0x15: "フォール付きヒーカップ",
    0x16: "スロウダウン",
    0x17: "スライダー",
    0x18: "水平",
    0x19: "スタッカート",
    0x1a: "U形",
    0x1b: "逆U形",
    0x1c: "への字形",
    0x1d: "アーチ形",
    0x1e: "特殊ビブラート30",
    0x1f: "特殊ビブラート31",
    0x20: "特殊ビブラート32",
    0x21: "ビブラート33",
    0x22: "ビブラート34",
    0x23: "ビブラート35",
    0x24: "ビブラート36",
    0x25: "ビブラート37",
    0x26: "ビブラート38",
    0x27: "ジャストヒット",
    0x28: "エッジボイス",
    0x29: "フォールエッジ",
    0x2a: "逆こぶし",
    0x2b: "歌い回しなし",
})


def technique_name(tech_id: int) -> str:
    """Label for a technique id; unknown ids get UNKNOWN_TECHNIQUE."""
    return TECHNIQUE_NAMES.get(int(tech_id), UNKNOWN_TECHNIQUE)
