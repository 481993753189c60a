"""
Tailwind 主題對照表

- 預設表：Tailwind v3 內建的 spacing / 色票 / 字重…（值 → class 後綴）
- 動態表：由文件中的 variable tokens 反查出來，Tailwind v4 用
- theme directive：v4 輸出開頭的 `:root` + `@theme` 區塊
"""

import re
from dataclasses import dataclass, field, replace
from typing import Dict, List

# ─── 預設表 ───────────────────────────────────────────────────────────────

DEFAULT_SPACING = {
    "0": "0", "0px": "0", "1px": "px", "2px": "0.5", "4px": "1", "6px": "1.5",
    "8px": "2", "10px": "2.5", "12px": "3", "14px": "3.5", "16px": "4",
    "20px": "5", "24px": "6", "28px": "7", "32px": "8", "36px": "9",
    "40px": "10", "44px": "11", "48px": "12", "56px": "14", "64px": "16",
    "80px": "20", "96px": "24", "112px": "28", "128px": "32", "144px": "36",
    "160px": "40", "176px": "44", "192px": "48", "208px": "52", "224px": "56",
    "240px": "60", "256px": "64", "288px": "72", "320px": "80", "384px": "96",
}

DEFAULT_BORDER_WIDTHS = {"0px": "0", "1px": "DEFAULT", "2px": "2", "4px": "4", "8px": "8"}

DEFAULT_BORDER_RADIUS = {
    "0px": "none", "2px": "sm", "4px": "DEFAULT", "6px": "md", "8px": "lg",
    "12px": "xl", "16px": "2xl", "24px": "3xl", "9999px": "full",
}

STANDARD_FONT_WEIGHTS = {
    "100": "thin", "200": "extralight", "300": "light", "400": "normal",
    "500": "medium", "600": "semibold", "700": "bold", "800": "extrabold",
    "900": "black",
}

DEFAULT_FONT_SIZE = {
    "12px": "xs", "14px": "sm", "16px": "base", "18px": "lg", "20px": "xl",
    "24px": "2xl", "30px": "3xl", "36px": "4xl", "48px": "5xl", "60px": "6xl",
    "72px": "7xl", "96px": "8xl", "128px": "9xl",
}

DEFAULT_FONT_FAMILY = {
    "sans": ["ui-sans-serif", "system-ui", "sans-serif", "Apple Color Emoji",
             "Segoe UI Emoji", "Segoe UI Symbol", "Noto Color Emoji"],
    "serif": ["ui-serif", "Georgia", "Cambria", "Times New Roman", "Times", "serif"],
    "mono": ["ui-monospace", "SFMono-Regular", "Menlo", "Monaco", "Consolas",
             "Liberation Mono", "Courier New", "monospace"],
}

_SHADES = ("50", "100", "200", "300", "400", "500", "600", "700", "800", "900", "950")

_PALETTE = {
    "slate": "#f8fafc #f1f5f9 #e2e8f0 #cbd5e1 #94a3b8 #64748b #475569 #334155 #1e293b #0f172a #020617",
    "gray": "#f9fafb #f3f4f6 #e5e7eb #d1d5db #9ca3af #6b7280 #4b5563 #374151 #1f2937 #111827 #030712",
    "zinc": "#fafafa #f4f4f5 #e4e4e7 #d4d4d8 #a1a1aa #71717a #52525b #3f3f46 #27272a #18181b #09090b",
    "neutral": "#fafafa #f5f5f5 #e5e5e5 #d4d4d4 #a3a3a3 #737373 #525252 #404040 #262626 #171717 #0a0a0a",
    "stone": "#fafaf9 #f5f5f4 #e7e5e4 #d6d3d1 #a8a29e #78716c #57534e #44403c #292524 #1c1917 #0c0a09",
    "red": "#fef2f2 #fee2e2 #fecaca #fca5a5 #f87171 #ef4444 #dc2626 #b91c1c #991b1b #7f1d1d #450a0a",
    "orange": "#fff7ed #ffedd5 #fed7aa #fdba74 #fb923c #f97316 #ea580c #c2410c #9a3412 #7c2d12 #431407",
    "amber": "#fffbeb #fef3c7 #fde68a #fcd34d #fbbf24 #f59e0b #d97706 #b45309 #92400e #78350f #451a03",
    "yellow": "#fefce8 #fef9c3 #fef08a #fde047 #facc15 #eab308 #ca8a04 #a16207 #854d0e #713f12 #422006",
    "lime": "#f7fee7 #ecfccb #d9f99d #bef264 #a3e635 #84cc16 #65a30d #4d7c0f #3f6212 #365314 #1a2e05",
    "green": "#f0fdf4 #dcfce7 #bbf7d0 #86efac #4ade80 #22c55e #16a34a #15803d #166534 #14532d #052e16",
    "emerald": "#ecfdf5 #d1fae5 #a7f3d0 #6ee7b7 #34d399 #10b981 #059669 #047857 #065f46 #064e3b #022c22",
    "teal": "#f0fdfa #ccfbf1 #99f6e4 #5eead4 #2dd4bf #14b8a6 #0d9488 #0f766e #115e59 #134e4a #042f2e",
    "cyan": "#ecfeff #cffafe #a5f3fc #67e8f9 #22d3ee #06b6d4 #0891b2 #0e7490 #155e75 #164e63 #083344",
    "sky": "#f0f9ff #e0f2fe #bae6fd #7dd3fc #38bdf8 #0ea5e9 #0284c7 #0369a1 #075985 #0c4a6e #082f49",
    "blue": "#eff6ff #dbeafe #bfdbfe #93c5fd #60a5fa #3b82f6 #2563eb #1d4ed8 #1e40af #1e3a8a #172554",
    "indigo": "#eef2ff #e0e7ff #c7d2fe #a5b4fc #818cf8 #6366f1 #4f46e5 #4338ca #3730a3 #312e81 #1e1b4b",
    "violet": "#f5f3ff #ede9fe #ddd6fe #c4b5fd #a78bfa #8b5cf6 #7c3aed #6d28d9 #5b21b6 #4c1d95 #2e1065",
    "purple": "#faf5ff #f3e8ff #e9d5ff #d8b4fe #c084fc #a855f7 #9333ea #7e22ce #6b21a8 #581c87 #3b0764",
    "fuchsia": "#fdf4ff #fae8ff #f5d0fe #f0abfc #e879f9 #d946ef #c026d3 #a21caf #86198f #701a75 #4a044e",
    "pink": "#fdf2f8 #fce7f3 #fbcfe8 #f9a8d4 #f472b6 #ec4899 #db2777 #be185d #9d174d #831843 #500724",
    "rose": "#fff1f2 #ffe4e6 #fecdd3 #fda4af #fb7185 #f43f5e #e11d48 #be123c #9f1239 #881337 #4c0519",
}


def _build_default_colors() -> Dict[str, str]:
    colors = {"#000000": "black", "#ffffff": "white", "#000": "black", "#fff": "white"}
    for family, hexes in _PALETTE.items():
        for shade, hex_value in zip(_SHADES, hexes.split()):
            # 同一色碼出現在多個色系時保留第一個
            colors.setdefault(hex_value, f"{family}-{shade}")
    return colors


DEFAULT_COLORS = _build_default_colors()


@dataclass
class ThemeTables:
    """值 → Tailwind class 後綴；"DEFAULT" 代表不帶後綴的 class."""
    spacing: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SPACING))
    colors: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COLORS))
    border_widths: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_BORDER_WIDTHS))
    border_radius: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_BORDER_RADIUS))
    font_weight: Dict[str, str] = field(default_factory=lambda: dict(STANDARD_FONT_WEIGHTS))
    font_size: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_FONT_SIZE))
    font_family: Dict[str, List[str]] = field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_FONT_FAMILY.items()}
    )
    line_height: Dict[str, str] = field(default_factory=dict)
    box_shadow: Dict[str, str] = field(default_factory=dict)

    def merged(self, other: "ThemeTables") -> "ThemeTables":
        """other 的對照覆蓋自己的；回傳新物件."""
        return replace(
            self,
            spacing={**self.spacing, **other.spacing},
            colors={**self.colors, **other.colors},
            border_widths={**self.border_widths, **other.border_widths},
            border_radius={**self.border_radius, **other.border_radius},
            font_weight={**self.font_weight, **other.font_weight},
            font_size={**self.font_size, **other.font_size},
            font_family={**self.font_family, **other.font_family},
            line_height={**self.line_height, **other.line_height},
            box_shadow={**self.box_shadow, **other.box_shadow},
        )


def empty_theme() -> ThemeTables:
    return ThemeTables(
        spacing={}, colors={}, border_widths={}, border_radius={},
        font_weight={}, font_size={}, font_family={}, line_height={}, box_shadow={},
    )


# ─── 動態表：由 variable tokens 反查 ──────────────────────────────────────


def _strip_dollar(value: str) -> str:
    return value[1:] if value.startswith("$") else value


def _after(name: str, marker: str) -> str:
    return re.sub(rf"^.*{marker}-", "", name)


def build_dynamic_theme(variable_tokens) -> ThemeTables:
    """variable token 的值 → 主題名稱（類別依名稱判斷，不只看 property）."""
    theme = empty_theme()
    theme.font_weight = dict(STANDARD_FONT_WEIGHTS)

    for token in variable_tokens:
        name = token.name
        value = _strip_dollar(token.raw_value)

        if token.property == "color" or "color" in token.property or name.startswith("colors-"):
            clean = re.sub(r"^color-", "", re.sub(r"^colors-", "", name))
            theme.colors[value] = f"colors-{clean}"
        elif "border-radius" in name or token.property == "border-radius":
            theme.border_radius[value] = _after(name, "border-radius")
        elif "border-width" in name or token.property == "border-width":
            theme.border_widths[value] = _after(name, "border-width")
        elif "font-weight" in name or token.property == "font-weight":
            clean = _after(name, "font-weight")
            target = STANDARD_FONT_WEIGHTS.get(clean) or STANDARD_FONT_WEIGHTS.get(value) or clean
            theme.font_weight[clean] = target
            theme.font_weight[value] = target
        elif "font-size" in name or token.property == "font-size":
            theme.font_size[value] = _after(name, "font-size")
        elif "font-family" in name or token.property == "font-family":
            clean = re.sub(r"^font-", "", _after(name, "font-family"))
            fonts = theme.font_family.setdefault(clean, [])
            if value not in fonts:
                fonts.append(value)
        elif "font-leading" in name or "line-height" in name:
            theme.line_height[value] = _after(_after(name, "font-leading"), "line-height")
        elif token.property == "box-shadow":
            theme.box_shadow[value] = re.sub(r"^(effect-|shadow-|box-shadow-)", "", name)
        elif token.property == "spacing":
            theme.spacing[value] = re.sub(r"^spacing-", "", name)

    return theme


# ─── Tailwind v4 theme directive ──────────────────────────────────────────

_CATEGORIES = (
    "colors", "spacing", "font-family", "font-weight", "font-size",
    "border-width", "border-radius", "line-height", "icon-size",
    "screen-size", "box-shadow",
)


def _natural_key(text: str):
    return [int(piece) if piece.isdigit() else piece.lower() for piece in re.split(r"(\d+)", text)]


def _categorize(name: str, prop: str):
    """回傳 (類別, CSS 變數名稱)；無法歸類時回傳 None."""
    if prop == "color" or name.startswith("colors-"):
        clean = re.sub(r"^color-", "", re.sub(r"^colors-", "", name))
        return "colors", f"--colors-{clean}"
    for marker in ("border-radius", "border-width", "font-weight", "font-size"):
        if marker in name or prop == marker:
            return marker, f"--{marker}-{_after(name, marker)}"
    if "font-family" in name or prop == "font-family":
        clean = re.sub(r"^font-", "", _after(name, "font-family"))
        return "font-family", f"--font-{clean}"
    if "font-leading" in name or "line-height" in name:
        return "line-height", f"--line-height-{_after(_after(name, 'font-leading'), 'line-height')}"
    if "icon-size" in name:
        return "icon-size", f"--icon-size-{_after(name, 'icon-size')}"
    if "screen-size" in name:
        return "screen-size", f"--screen-size-{_after(name, 'screen-size')}"
    if prop == "box-shadow":
        return "box-shadow", f"--{re.sub(r'^(effect-|shadow-|box-shadow-)', '', name)}"
    if prop == "spacing":
        return "spacing", f"--spacing-{re.sub(r'^spacing-', '', name)}"
    return None


def primitive_to_css_var(primitive: str) -> str:
    """語意變數指向的 primitive 名稱 → var(--...) 參照."""
    if "color" in primitive or "colour" in primitive:
        clean = re.sub(r"^(colors|color|colours|colour)-", "", primitive)
        return f"var(--colors-{clean})"
    for marker in ("border-radius", "border-width", "font-weight", "font-size"):
        if marker in primitive:
            return f"var(--{marker}-{_after(primitive, marker)})"
    if "font" in primitive or primitive.startswith(("inter", "roboto")):
        return f"var(--font-{re.sub(r'^font-', '', primitive)})"
    if "line-height" in primitive or "font-leading" in primitive:
        return f"var(--line-height-{_after(_after(primitive, 'line-height'), 'font-leading')})"
    if "icon-size" in primitive:
        return f"var(--icon-size-{_after(primitive, 'icon-size')})"
    if "screen-size" in primitive:
        return f"var(--screen-size-{_after(primitive, 'screen-size')})"
    if "shadow" in primitive or "effect" in primitive:
        return f"var(--{re.sub(r'^(effect-|shadow-|box-shadow-)', '', primitive)})"
    if "spacing" in primitive:
        return f"var(--spacing-{re.sub(r'^spacing-', '', primitive)})"
    return f"var(--{primitive})"


_THEME_RENAMES = (
    ("colors-", "color-"),
    ("line-height-", "leading-"),
    ("border-radius-", "radius-"),
    ("border-width-", "border-"),
    ("icon-size-", "icon-"),
    ("screen-size-", "screen-"),
    ("box-shadow-", "shadow-"),
)


def theme_name(css_var: str) -> str:
    """--colors-blue-100 → --color-blue-100，--line-height-lg → --leading-lg."""
    name = css_var[2:]
    for old, new in _THEME_RENAMES:
        if name.startswith(old):
            return "--" + new + name[len(old):]
    return "--" + name


def _collect(tokens, semantic: bool) -> Dict[str, Dict[str, str]]:
    buckets: Dict[str, Dict[str, str]] = {category: {} for category in _CATEGORIES}
    for token in tokens:
        found = _categorize(token.name, token.property)
        if not found:
            continue
        category, key = found
        value = _strip_dollar(token.raw_value)
        if semantic:
            value = primitive_to_css_var(value)
        buckets[category][key] = value
    return buckets


def _lines(entries) -> str:
    return "".join(f"  {key}: {value};\n" for key, value in sorted(entries, key=lambda e: _natural_key(e[0])))


def theme_directive(collection) -> str:
    variables = collection.variable_tokens()
    primitives = _collect([t for t in variables if t.variable_type == "primitive"], semantic=False)
    semantics = _collect([t for t in variables if t.variable_type == "semantic"], semantic=True)

    has_primitives = any(primitives.values())
    out = ""
    if has_primitives:
        out += ":root {\n"
        for category in _CATEGORIES:
            out += _lines(primitives[category].items())
        out += "}\n\n"

    out += "/* Generated Tailwind Theme */\n@theme {\n"
    if has_primitives:
        for category in _CATEGORIES:
            out += _lines((theme_name(key), f"var({key})") for key in primitives[category])
    if any(semantics.values()):
        for category in _CATEGORIES:
            out += _lines((theme_name(key), value) for key, value in semantics[category].items())
    out += "}\n"
    return out
