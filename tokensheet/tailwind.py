"""
Tailwind 輸出 — CSS 屬性/值 → utility class

  * tailwind-scss：Tailwind v3 預設主題，包成 `@mixin name { @apply ...; }`
  * tailwind-v4：由變數反查的動態主題，輸出 `@theme` + `@utility`

主題表查不到的值一律退回 arbitrary value（`w-[13px]`），不算錯誤。
"""

import math
import re
from typing import Callable, Dict, List, Optional

from .box_model import parse_shorthand, split_values
from .errors import ShorthandError
from .naming_engine import DEFAULT_NAMING, TAILWIND_V4_NAMING
from .result import GenerationOptions, GenerationResult, deduplicate_messages
from .theme import ThemeTables, build_dynamic_theme, theme_directive
from .variants import group_by_name, group_instances

BORDER_STYLES = {"none", "hidden", "dotted", "dashed", "solid", "double", "groove", "ridge", "inset", "outset"}

BORDER_PREFIXES = {
    "border": "border",
    "border-top": "border-t",
    "border-right": "border-r",
    "border-bottom": "border-b",
    "border-left": "border-l",
    "border-x": "border-x",
    "border-y": "border-y",
}

FLEX_DIRECTION = {
    "row": "flex-row",
    "row-reverse": "flex-row-reverse",
    "column": "flex-col",
    "column-reverse": "flex-col-reverse",
}

ALIGN_ITEMS = {
    "stretch": "items-stretch",
    "flex-start": "items-start",
    "flex-end": "items-end",
    "center": "items-center",
    "baseline": "items-baseline",
}

JUSTIFY_CONTENT = {
    "flex-start": "justify-start",
    "flex-end": "justify-end",
    "center": "justify-center",
    "space-between": "justify-between",
    "space-around": "justify-around",
    "space-evenly": "justify-evenly",
}

_HEX = re.compile(r"#[0-9a-fA-F]{3,8}\b")

Generator = Callable[[str, str, tuple, ThemeTables], Optional[str]]


def _arbitrary(value: str) -> str:
    """Tailwind arbitrary value 不能有空白，一律換成 _."""
    return "[" + re.sub(r"\s+", "_", value.strip()) + "]"


def normalize_token(table: Dict[str, str], value: str) -> str:
    """查表；"DEFAULT" → 空字串（不帶後綴），查不到 → `[value]`."""
    mapping = table.get(value)
    if mapping == "DEFAULT":
        return ""
    return mapping if mapping is not None else _arbitrary(value)


def _color(table: Dict[str, str], value: str) -> str:
    if value.startswith("#") and value not in table:
        return normalize_token(table, value.lower()) if value.lower() in table else _arbitrary(value)
    return normalize_token(table, value)


def _js_round(number: float) -> int:
    return math.floor(number + 0.5)


def two_sides(value: str) -> List[str]:
    parts = split_values(value)
    return [parts[0], parts[1] if len(parts) > 1 else parts[0]]


def border_radius_corners(value: str) -> List[str]:
    """tl, tr, br, bl 順序."""
    parts = split_values(value)
    a = parts[0]
    b = parts[1] if len(parts) > 1 else a
    c = parts[2] if len(parts) > 2 else a
    d = parts[3] if len(parts) > 3 else b
    return [a, b, c, b] if len(parts) == 3 else [a, b, c, d]


def padding_classes(value, prop, path, theme) -> str:
    try:
        sides = parse_shorthand(value)
    except ShorthandError:
        return f"p-{_arbitrary(value)}"
    return " ".join(
        f"p{side[0]}-{normalize_token(theme.spacing, sides[side])}"
        for side in ("top", "right", "bottom", "left")
    )


def gap_classes(value, prop, path, theme) -> str:
    x, y = two_sides(value)
    return f"gap-x-{normalize_token(theme.spacing, x)} gap-y-{normalize_token(theme.spacing, y)}"


def border_radius_classes(value, prop, path, theme) -> str:
    classes = []
    for corner, size in zip(("tl", "tr", "br", "bl"), border_radius_corners(value)):
        suffix = normalize_token(theme.border_radius, "0px" if size == "0" else size)
        classes.append(f"rounded-{corner}-{suffix}" if suffix else f"rounded-{corner}")
    return " ".join(classes)


def parse_border_shorthand(value: str) -> Dict[str, Optional[str]]:
    width = style = color = None
    for part in split_values(value):
        if width is None and "px" in part:
            width = part
        elif style is None and part in BORDER_STYLES:
            style = part
        elif color is None:
            color = part
    return {"width": width, "style": style, "color": color}


def border_classes(value, prop, path, theme) -> str:
    prefix = BORDER_PREFIXES.get(prop, "border")
    parts = parse_border_shorthand(value)
    classes = []
    if parts["width"]:
        suffix = normalize_token(theme.border_widths, parts["width"])
        classes.append(f"{prefix}-{suffix}" if suffix else prefix)
    if parts["style"]:
        classes.append(f"{prefix}-{parts['style']}")
    if parts["color"]:
        classes.append(f"{prefix}-{_color(theme.colors, parts['color'])}")
    return " ".join(classes)


def _unquote(text: str) -> str:
    return re.sub(r"""['"]""", "", text).lower()


def font_family_class(value, prop, path, theme) -> str:
    wanted = _unquote(value)
    for category, fonts in theme.font_family.items():
        if category == wanted:
            return f"font-{category}"
        if any(_unquote(font) == wanted for font in fonts):
            return f"font-{category}"
    return f"font-{_arbitrary(value)}"


def display_class(value, prop, path, theme) -> str:
    return "hidden" if value == "none" else value


def _normalize_shadow(value: str) -> str:
    value = re.sub(r"\s+", " ", value.strip())
    return re.sub(r"\s*,\s*", ", ", value)


def box_shadow_class(value, prop, path, theme) -> str:
    wanted = _normalize_shadow(value)
    for shadow, name in theme.box_shadow.items():
        if _normalize_shadow(shadow) == wanted:
            return f"shadow-{name}"

    def _theme_color(match: re.Match) -> str:
        hex_value = match.group(0)
        name = theme.colors.get(hex_value) or theme.colors.get(hex_value.lower())
        return f"var(--{name})" if name else hex_value

    # 逗號切開後各段去空白：括號內的空白一併消失
    cleaned = ",".join(piece.strip() for piece in value.split(","))
    return f"shadow-{_arbitrary(_HEX.sub(_theme_color, cleaned))}"


def opacity_class(value, prop, path, theme) -> str:
    number = float(value.replace("%", ""))
    if "%" in value or number > 1:
        return f"opacity-{_js_round(number)}"
    return f"opacity-{_js_round(number * 100)}"


def background_class(value, prop, path, theme) -> str:
    # 向量圖形的填色在 Tailwind 裡要用 text- 才會套到 currentColor
    prefix = "text" if any(node.type == "VECTOR" for node in path) else "bg"
    return f"{prefix}-{_color(theme.colors, value)}"


def _lookup(prefix: str, table_name: str) -> Generator:
    def generator(value, prop, path, theme):
        return f"{prefix}-{normalize_token(getattr(theme, table_name), value)}"
    return generator


def _fixed(table: Dict[str, str]) -> Generator:
    def generator(value, prop, path, theme):
        return table.get(value)
    return generator


CLASS_GENERATORS: Dict[str, Generator] = {
    "padding": padding_classes,
    "display": display_class,
    "border-radius": border_radius_classes,
    "box-shadow": box_shadow_class,
    "font-weight": _lookup("font", "font_weight"),
    "font-size": _lookup("text", "font_size"),
    "font-family": font_family_class,
    "color": lambda value, prop, path, theme: f"text-{_color(theme.colors, value)}",
    "background": background_class,
    "gap": gap_classes,
    "flex-direction": _fixed(FLEX_DIRECTION),
    "align-items": _fixed(ALIGN_ITEMS),
    "justify-content": _fixed(JUSTIFY_CONTENT),
    "height": _lookup("h", "spacing"),
    "width": _lookup("w", "spacing"),
    "max-height": _lookup("max-h", "spacing"),
    "max-width": _lookup("max-w", "spacing"),
    "min-height": _lookup("min-h", "spacing"),
    "min-width": _lookup("min-w", "spacing"),
    "opacity": opacity_class,
}
for _border_prop in BORDER_PREFIXES:
    CLASS_GENERATORS[_border_prop] = border_classes


def create_classes(styles: Dict[str, str], path=(), theme: Optional[ThemeTables] = None) -> List[str]:
    """沒有對應 generator 的屬性直接略過."""
    theme = theme or ThemeTables()
    classes = []
    for prop, value in styles.items():
        generator = CLASS_GENERATORS.get(prop)
        if generator is None:
            continue
        result = generator(value, prop, tuple(path), theme)
        if result:
            classes.append(result)
    return classes


def _style_property_and_value(token) -> dict:
    return {token.property: token.raw_value}


def tailwind_instances(collection, combinatorial: bool, options: GenerationOptions, naming=DEFAULT_NAMING) -> list:
    groups = group_by_name(t for t in collection.style_tokens() if t.has_values())
    return group_instances(
        collection,
        groups,
        _style_property_and_value,
        naming=naming,
        combinatorial=combinatorial,
        box_model=options.box_model,
    )


def transform_to_tailwind_scss(collection, combinatorial: bool = False, options: GenerationOptions = None) -> GenerationResult:
    options = options or GenerationOptions()
    warnings, errors = deduplicate_messages(collection.style_tokens())
    output = "/* Generated Tailwind-SCSS */"
    # v3 的 SCSS 版本不能用動態主題：sass 變數無法對應內建 utility
    theme = ThemeTables()
    for instance in tailwind_instances(collection, combinatorial, options, DEFAULT_NAMING):
        classes = create_classes(instance.styles, instance.path, theme)
        if classes:
            output += f"\n@mixin {instance.name} {{\n  @apply {' '.join(classes)}; \n}}\n"
    return GenerationResult(output, warnings, errors)


def transform_to_tailwind_v4(collection, combinatorial: bool = False, options: GenerationOptions = None) -> GenerationResult:
    options = options or GenerationOptions()
    warnings, errors = deduplicate_messages(collection.style_tokens())
    output = theme_directive(collection)
    if options.output_mode == "variables":
        return GenerationResult(output, warnings, errors)

    theme = ThemeTables().merged(build_dynamic_theme(collection.variable_tokens()))
    output += "\n\n/* Generated Tailwind Utilities */\n"
    for instance in tailwind_instances(collection, combinatorial, options, TAILWIND_V4_NAMING):
        classes = create_classes(instance.styles, instance.path, theme)
        if classes:
            output += f"\n@utility {instance.name} {{\n  @apply {' '.join(classes)}; \n}}\n"
    return GenerationResult(output, warnings, errors)
