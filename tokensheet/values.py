"""數值正規化與字串工具."""

import math
import re

_PX_OR_REM = re.compile(r"(\d*\.?\d+)(rem|px)")
_IMAGE_MARKER = re.compile(r"""(\ufffc|<img[^>]*alt=["']([^"']+)["'][^>]*>|<img[^>]*>)""")
_UNITLESS_PROPERTIES = ("font-weight", "opacity", "line-height")


def format_number(value) -> str:
    """最短表示：16.0 → "16"，0.48 → "0.48"."""
    number = float(value)
    if number == 0:
        return "0"
    if number.is_integer():
        return str(int(number))
    return repr(number)


def normalize_value(property_name: str, value: float) -> str:
    """依屬性種類把原始數值轉成 CSS 字串.

    - opacity：大於 1 視為百分比（48 → 0.48）
    - line-height：大於 4 視為 px，否則是倍數
    - 其餘尺寸加 px（font-weight 等無單位屬性除外）
    """
    prop = property_name.lower()
    if prop == "opacity":
        return format_number(value / 100 if value > 1 else value)
    if "line-height" in prop:
        return f"{format_number(value)}px" if value > 4 else format_number(value)
    if not any(unitless in prop for unitless in _UNITLESS_PROPERTIES):
        return f"{format_number(value)}px"
    return format_number(value)


def _floor(value: float, precision: int) -> float:
    factor = 10 ** precision
    return math.floor(value * factor) / factor


def rem(value: str, baseline: int = 16, precision: int = 3) -> str:
    """把字串中所有 `<n>px` 換成 rem（無條件捨去到 precision 位）."""
    def _convert(match: re.Match) -> str:
        number, unit = match.group(1), match.group(2)
        if unit != "px":
            return match.group(0)
        return f"{format_number(_floor(float(number) / baseline, precision))}rem"

    return _PX_OR_REM.sub(_convert, value)


def sanitize_name(name: str) -> str:
    normalized = name.lower()
    normalized = _IMAGE_MARKER.sub(lambda m: m.group(2).lower() if m.group(2) else "img", normalized)
    normalized = re.sub(r"[^a-z0-9]", "-", normalized)
    normalized = re.sub(r"-+", "-", normalized)
    return normalized.strip("-")


def scss_variable_name(name: str) -> str:
    """SCSS 變數名稱必須以字母開頭，否則補上 v."""
    if not re.match(r"[a-zA-Z]", name):
        name = "v" + name
    return f"${name}"
