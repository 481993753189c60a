"""
主題對照表與 Tailwind v4 theme directive 測試
"""
from tokensheet.theme import (
    DEFAULT_COLORS,
    ThemeTables,
    build_dynamic_theme,
    empty_theme,
    primitive_to_css_var,
    theme_directive,
    theme_name,
)
from tokensheet.tokens import TokenCollection, VariableToken


def var(name, prop, value, variable_type="primitive", primitive_ref=None):
    return VariableToken(
        name=name,
        property=prop,
        value=value,
        raw_value=value,
        variable_type=variable_type,
        primitive_ref=primitive_ref,
    )


# ─── 預設表 ─────────────────────────────────────────────────────────────────

def test_default_colors_first_family_wins():
    assert DEFAULT_COLORS["#ef4444"] == "red-500"
    # zinc-50 與 neutral-50 同色碼
    assert DEFAULT_COLORS["#fafafa"] == "zinc-50"
    assert DEFAULT_COLORS["#ffffff"] == "white"


def test_merged_overlays_without_mutating():
    base = ThemeTables()
    dynamic = empty_theme()
    dynamic.spacing["16px"] = "md"
    merged = base.merged(dynamic)
    assert merged.spacing["16px"] == "md"
    assert merged.spacing["8px"] == "2"
    assert base.spacing["16px"] == "4"


# ─── 動態表 ─────────────────────────────────────────────────────────────────

def test_build_dynamic_theme_categories():
    theme = build_dynamic_theme([
        var("colors-blue-500", "color", "#3b82f6"),
        var("border-radius-lg", "border-radius", "12px"),
        var("font-size-body", "font-size", "15px"),
        var("font-family-brand", "font-family", "Inter"),
        var("shadow-card", "box-shadow", "0 1px 2px #000"),
        var("spacing-gutter", "spacing", "18px"),
        var("font-weight-700", "font-weight", "700"),
    ])
    assert theme.colors == {"#3b82f6": "colors-blue-500"}
    assert theme.border_radius == {"12px": "lg"}
    assert theme.font_size == {"15px": "body"}
    assert theme.font_family == {"brand": ["Inter"]}
    assert theme.box_shadow == {"0 1px 2px #000": "card"}
    assert theme.spacing == {"18px": "gutter"}
    assert theme.font_weight["700"] == "bold"


def test_dynamic_theme_strips_scss_prefix():
    theme = build_dynamic_theme([var("colors-link", "color", "$colors-blue-500")])
    assert theme.colors == {"colors-blue-500": "colors-link"}


# ─── theme directive ────────────────────────────────────────────────────────

def test_theme_name_renames():
    assert theme_name("--colors-blue-100") == "--color-blue-100"
    assert theme_name("--line-height-lg") == "--leading-lg"
    assert theme_name("--border-radius-sm") == "--radius-sm"
    assert theme_name("--spacing-4") == "--spacing-4"


def test_primitive_to_css_var():
    assert primitive_to_css_var("colors-blue-500") == "var(--colors-blue-500)"
    assert primitive_to_css_var("font-size-lg") == "var(--font-size-lg)"
    assert primitive_to_css_var("spacing-4") == "var(--spacing-4)"


def test_theme_directive_primitives_and_semantics():
    collection = TokenCollection(tokens=(
        var("colors-blue-10", "color", "#1"),
        var("colors-blue-9", "color", "#2"),
        var("colors-link", "color", "$colors-blue-9", variable_type="semantic", primitive_ref="colors-blue-9"),
    ))
    assert theme_directive(collection) == (
        ":root {\n"
        "  --colors-blue-9: #2;\n"
        "  --colors-blue-10: #1;\n"
        "}\n\n"
        "/* Generated Tailwind Theme */\n@theme {\n"
        "  --color-blue-9: var(--colors-blue-9);\n"
        "  --color-blue-10: var(--colors-blue-10);\n"
        "  --color-link: var(--colors-blue-9);\n"
        "}\n"
    )
