"""
Box-model 修正 — 把 border 寬度反映到 padding / 尺寸上

擷取端回報的 padding 與寬高不含 border，輸出端的 border 會撐大盒子：
padding 要扣掉 border，寬高要加上 border，並用 relative 位移補回左上角。
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from .errors import BoxModelConflictError, ShorthandError, UnknownBoxModelError

BORDER_PROPERTIES = (
    "border",
    "border-left",
    "border-right",
    "border-top",
    "border-bottom",
    "border-width",
    "border-left-width",
    "border-right-width",
    "border-top-width",
    "border-bottom-width",
)

PADDING_PROPERTIES = ("padding", "padding-top", "padding-right", "padding-bottom", "padding-left")
HEIGHT_PROPERTIES = ("height", "min-height", "max-height")
WIDTH_PROPERTIES = ("width", "min-width", "max-width")
SIDES = ("top", "right", "bottom", "left")

BOX_MODEL_MODES = ("full", "padding", "split", "off")

_NUMERIC = re.compile(r"^(-?\d*\.?\d+)(px|rem)?$")


@dataclass(frozen=True)
class CssValue:
    format: str  # px | rem | none | scss | unknown
    value: Optional[float]
    text: str


def _fmt(number: float, unit: str) -> str:
    if number == 0:
        return "0"
    if float(number).is_integer():
        return f"{int(number)}{unit}"
    return f"{round(number, 6)!r}{unit}"


def parse_css_value(text: str) -> CssValue:
    if text in ("0", "0px", "0rem"):
        return CssValue("none", 0, "0")
    if text.startswith("$"):
        return CssValue("scss", None, f"#{{{text}}}")
    match = _NUMERIC.match(text)
    if match:
        number, unit = match.group(1), match.group(2)
        # 無單位的數字視同 unknown 格式，只保留數值
        return CssValue(unit or "unknown", float(number), text)
    return CssValue("unknown", None, text)


def _same_length_unit(a: CssValue, b: CssValue) -> bool:
    return a.format == b.format and a.format in ("px", "rem")


def subtract(a: str, b: str) -> str:
    """a - b，數值結果不小於 0；單位不同時輸出 calc()."""
    left, right = parse_css_value(a), parse_css_value(b)
    if left.value == 0 or right.value == 0:
        return left.text
    if _same_length_unit(left, right):
        return _fmt(max(0.0, left.value - right.value), left.format)
    return f"calc({left.text} - {right.text})"


def add(a: str, b: str) -> str:
    left, right = parse_css_value(a), parse_css_value(b)
    if right.value == 0:
        return left.text
    if left.value == 0:
        return right.text
    if _same_length_unit(left, right):
        return _fmt(left.value + right.value, left.format)
    return f"calc({left.text} + {right.text})"


def negative(value: str) -> str:
    parsed = parse_css_value(value)
    if parsed.value == 0:
        return parsed.text
    return f"-{parsed.text}"


def divide(value: str, by: int) -> str:
    """px/rem 直接相除；其他值交給 Sass（需要 @use "sass:math"）."""
    parsed = parse_css_value(value)
    if parsed.value == 0:
        return parsed.text
    if parsed.format in ("px", "rem"):
        return _fmt(parsed.value / by, parsed.format)
    return f"math.div({parsed.text}, {by})"


def split_values(value: str) -> List[str]:
    """以空白切開，但括號內（calc()、rgba()）的空白不切."""
    parts, depth, current = [], 0, ""
    for char in value.strip():
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
        if char.isspace() and depth == 0:
            if current:
                parts.append(current)
            current = ""
        else:
            current += char
    if current:
        parts.append(current)
    return parts


def parse_shorthand(value: str) -> Dict[str, str]:
    parts = split_values(value)
    if len(parts) == 1:
        top = right = bottom = left = parts[0]
    elif len(parts) == 2:
        top, right = parts
        bottom, left = top, right
    elif len(parts) == 3:
        top, right, bottom = parts
        left = right
    elif len(parts) == 4:
        top, right, bottom, left = parts
    else:
        raise ShorthandError(f"Invalid shorthand: '{value}'")
    return {"top": top, "right": right, "bottom": bottom, "left": left}


def to_shorthand(sides: Dict[str, str]) -> str:
    """最短等價寫法；缺少的邊視為 0."""
    top = sides.get("top") or "0"
    right = sides.get("right") or "0"
    bottom = sides.get("bottom") or "0"
    left = sides.get("left") or "0"
    if top == right == bottom == left:
        return top
    if top == bottom and right == left:
        return f"{top} {right}"
    if right == left:
        return f"{top} {right} {bottom}"
    return f"{top} {right} {bottom} {left}"


def parse_border(value: str) -> str:
    if value == "none":
        return "0"
    parts = split_values(value)
    return parts[0] if parts else value


def border_widths(styles: Dict[str, str]) -> Dict[str, Optional[str]]:
    """每一邊的 border 寬度：side-width → border-width → border-side → border."""
    border = parse_border(styles["border"]) if styles.get("border") else None
    shorthand = parse_shorthand(styles["border-width"]) if styles.get("border-width") else {}
    widths = {}
    for side in SIDES:
        side_border = styles.get(f"border-{side}")
        widths[side] = (
            styles.get(f"border-{side}-width")
            or shorthand.get(side)
            or (parse_border(side_border) if side_border else None)
            or border
        )
    return widths


def _has_any(styles: Dict[str, str], props) -> bool:
    return any(prop in styles for prop in props)


def patch_padding(styles: Dict[str, str]) -> Dict[str, str]:
    if not (_has_any(styles, PADDING_PROPERTIES) and _has_any(styles, BORDER_PROPERTIES)):
        return dict(styles)

    borders = border_widths(styles)
    shorthand = parse_shorthand(styles["padding"]) if styles.get("padding") else {}

    patched = {}
    for side in SIDES:
        padding = styles.get(f"padding-{side}") or shorthand.get(side)
        if not padding:
            continue
        patched[side] = subtract(padding, borders[side]) if borders[side] else padding

    final = {}
    if len(patched) == 4 and all(patched.values()):
        final["padding"] = to_shorthand(patched)
    else:
        # 只輸出原本就有的 longhand
        for side, value in patched.items():
            if styles.get(f"padding-{side}"):
                final[f"padding-{side}"] = value

    result = {k: v for k, v in styles.items() if k not in PADDING_PROPERTIES}
    result.update(final)
    return result


def patch_size(styles: Dict[str, str]) -> Dict[str, str]:
    if not (_has_any(styles, HEIGHT_PROPERTIES + WIDTH_PROPERTIES) and _has_any(styles, BORDER_PROPERTIES)):
        return dict(styles)

    result = dict(styles)
    borders = border_widths(styles)

    for prop in HEIGHT_PROPERTIES:
        if result.get(prop):
            for side in ("top", "bottom"):
                if borders[side]:
                    result[prop] = add(result[prop], borders[side])

    for prop in WIDTH_PROPERTIES:
        if result.get(prop):
            for side in ("left", "right"):
                if borders[side]:
                    result[prop] = add(result[prop], borders[side])

    for prop in ("position", "left", "top"):
        if result.get(prop):
            raise BoxModelConflictError(
                f"Cannot compensate border offset: '{prop}' is already set to '{result[prop]}'"
            )

    result["position"] = "relative"
    if borders["left"]:
        result["left"] = negative(borders["left"])
    if borders["top"]:
        result["top"] = negative(borders["top"])
    return result


def patch_split(styles: Dict[str, str]) -> Dict[str, str]:
    """border 寬度先減半再跑 padding / size，最後還原 border 寬度."""
    if not _has_any(styles, BORDER_PROPERTIES):
        return dict(styles)

    borders = border_widths(styles)
    temp = dict(styles)
    for side in SIDES:
        if borders[side]:
            temp[f"border-{side}-width"] = divide(borders[side], 2)

    result = patch_size(patch_padding(temp))
    for side in SIDES:
        key = f"border-{side}-width"
        if styles.get(key):
            result[key] = styles[key]
        else:
            result.pop(key, None)
    return result


def apply_box_model(styles: Dict[str, str], mode: str = "full") -> Dict[str, str]:
    if mode == "off":
        return dict(styles)
    if mode == "padding":
        return patch_padding(styles)
    if mode == "split":
        return patch_split(styles)
    if mode == "full":
        return patch_size(patch_padding(styles))
    raise UnknownBoxModelError(f"Unknown box model mode: {mode}")
