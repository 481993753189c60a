"""
Tailwind class 產生器單元測試
主題表查詢、arbitrary value、各屬性 generator、兩種輸出格式
"""
import pytest
from tokensheet.result import GenerationOptions
from tokensheet.tailwind import (
    box_shadow_class,
    create_classes,
    normalize_token,
    parse_border_shorthand,
    transform_to_tailwind_scss,
    transform_to_tailwind_v4,
)
from tokensheet.theme import DEFAULT_BORDER_WIDTHS, DEFAULT_SPACING, ThemeTables
from tokensheet.tokens import PathNode, StyleToken, TokenCollection, VariableToken


THEME = ThemeTables()
PATH = (PathNode("Page", "SECTION"), PathNode("Btn", "FRAME"))


def classes(styles, path=PATH, theme=THEME):
    return create_classes(styles, path, theme)


# ─── normalize_token ────────────────────────────────────────────────────────

def test_normalize_token_hit_and_miss():
    assert normalize_token(DEFAULT_SPACING, "16px") == "4"
    assert normalize_token(DEFAULT_SPACING, "13px") == "[13px]"


def test_normalize_token_default_is_bare():
    assert normalize_token(DEFAULT_BORDER_WIDTHS, "1px") == ""


# ─── spacing 類 ─────────────────────────────────────────────────────────────

def test_padding_four_sides():
    assert classes({"padding": "16px 8px"}) == ["pt-4 pr-2 pb-4 pl-2"]
    assert classes({"padding": "13px"}) == ["pt-[13px] pr-[13px] pb-[13px] pl-[13px]"]


def test_padding_calc_values_stay_whole():
    assert classes({"padding": "6px calc(1rem - 2px)"}) == [
        "pt-1.5 pr-[calc(1rem_-_2px)] pb-1.5 pl-[calc(1rem_-_2px)]"
    ]


def test_padding_with_too_many_values_falls_back_to_arbitrary():
    assert classes({"padding": "1px 2px 3px 4px 5px"}) == ["p-[1px_2px_3px_4px_5px]"]


def test_gap_two_axes():
    assert classes({"gap": "8px"}) == ["gap-x-2 gap-y-2"]
    assert classes({"gap": "8px 16px"}) == ["gap-x-2 gap-y-4"]


def test_sizes():
    assert classes({"width": "16px", "height": "40px"}) == ["w-4", "h-10"]
    assert classes({"max-width": "13px", "min-height": "0px"}) == ["max-w-[13px]", "min-h-0"]


def test_size_arbitrary_value_has_no_spaces():
    assert classes({"width": "calc(100% + 2px)"}) == ["w-[calc(100%_+_2px)]"]
    assert normalize_token(DEFAULT_SPACING, "calc(1rem - 2px)") == "[calc(1rem_-_2px)]"


# ─── border ─────────────────────────────────────────────────────────────────

def test_border_radius_corners():
    assert classes({"border-radius": "4px"}) == ["rounded-tl rounded-tr rounded-br rounded-bl"]
    assert classes({"border-radius": "0"}) == ["rounded-tl-none rounded-tr-none rounded-br-none rounded-bl-none"]
    assert classes({"border-radius": "8px 13px"}) == [
        "rounded-tl-lg rounded-tr-[13px] rounded-br-lg rounded-bl-[13px]"
    ]


def test_border_radius_three_values():
    assert classes({"border-radius": "2px 4px 8px"}) == ["rounded-tl-sm rounded-tr rounded-br-lg rounded-bl"]


def test_parse_border_shorthand():
    assert parse_border_shorthand("1px solid #ef4444") == {"width": "1px", "style": "solid", "color": "#ef4444"}
    assert parse_border_shorthand("dashed") == {"width": None, "style": "dashed", "color": None}


def test_border_width_style_color():
    assert classes({"border": "1px solid #ef4444"}) == ["border border-solid border-red-500"]
    assert classes({"border-top": "2px dashed #000"}) == ["border-t-2 border-t-dashed border-t-black"]
    assert classes({"border-left": "3px solid #123456"}) == ["border-l-[3px] border-l-solid border-l-[#123456]"]


# ─── 色彩 / 文字 ────────────────────────────────────────────────────────────

def test_color_lookup_is_case_insensitive():
    assert classes({"color": "#EF4444"}) == ["text-red-500"]
    assert classes({"color": "#123456"}) == ["text-[#123456]"]


def test_background_vector_uses_text():
    vector = PATH + (PathNode("icon", "VECTOR"),)
    assert classes({"background": "#ffffff"}) == ["bg-white"]
    assert classes({"background": "#ffffff"}, path=vector) == ["text-white"]


def test_font_properties():
    assert classes({"font-weight": "700", "font-size": "14px"}) == ["font-bold", "text-sm"]
    assert classes({"font-family": "Georgia"}) == ["font-serif"]
    assert classes({"font-family": "'mono'"}) == ["font-mono"]
    assert classes({"font-family": "Inter"}) == ["font-[Inter]"]


# ─── layout ─────────────────────────────────────────────────────────────────

def test_display_and_flex():
    assert classes({"display": "none"}) == ["hidden"]
    assert classes({"display": "flex", "flex-direction": "column"}) == ["flex", "flex-col"]
    assert classes({"align-items": "center", "justify-content": "space-between"}) == [
        "items-center",
        "justify-between",
    ]


def test_unmapped_values_and_properties_skipped():
    assert classes({"justify-content": "normal", "cursor": "pointer"}) == []


# ─── opacity ────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("value, expected", [
    ("75%", "opacity-75"),
    ("0.333", "opacity-33"),
    ("0.5", "opacity-50"),
    ("0.125", "opacity-13"),
    ("1", "opacity-100"),
    ("48", "opacity-48"),
])
def test_opacity(value, expected):
    assert classes({"opacity": value}) == [expected]


# ─── box-shadow ─────────────────────────────────────────────────────────────

def test_box_shadow_arbitrary():
    assert box_shadow_class("0px 4px 8px rgba(0, 0, 0, 0.1)", "box-shadow", PATH, THEME) == (
        "shadow-[0px_4px_8px_rgba(0,0,0,0.1)]"
    )


def test_box_shadow_theme_color_becomes_var():
    assert box_shadow_class("0 1px 2px #EF4444", "box-shadow", PATH, THEME) == "shadow-[0_1px_2px_var(--red-500)]"


def test_box_shadow_theme_match():
    theme = ThemeTables(box_shadow={"0 1px 2px 0 rgba(0,0,0,0.05)": "sm"})
    assert box_shadow_class("0 1px 2px 0  rgba(0, 0, 0, 0.05)", "box-shadow", PATH, theme) == "shadow-sm"


# ─── 輸出格式 ───────────────────────────────────────────────────────────────

def style(name, prop, value, path=PATH):
    return StyleToken(name=name, property=prop, value=value, raw_value=value, path=path)


LINK_PATH = (PathNode("Page", "SECTION"), PathNode("Link", "FRAME"))


def make_collection(*extra):
    tokens = (
        style("btn", "padding", "16px"),
        style("btn", "color", "#ef4444"),
        style("btn", "cursor", "pointer"),
        style("empty", "cursor", "pointer"),
    ) + extra
    return TokenCollection(tokens=tokens)


def test_tailwind_scss_output():
    result = transform_to_tailwind_scss(make_collection())
    assert result.result == (
        "/* Generated Tailwind-SCSS */"
        "\n@mixin page-btn {\n  @apply pt-4 pr-4 pb-4 pl-4 text-red-500; \n}\n"
    )


def test_tailwind_v4_output():
    result = transform_to_tailwind_v4(make_collection())
    assert result.result == (
        "/* Generated Tailwind Theme */\n@theme {\n}\n"
        "\n\n/* Generated Tailwind Utilities */\n"
        "\n@utility btn {\n  @apply pt-4 pr-4 pb-4 pl-4 text-red-500; \n}\n"
    )


def test_tailwind_v4_uses_dynamic_theme():
    brand = VariableToken(
        name="colors-brand",
        property="color",
        value="#123456",
        raw_value="#123456",
        variable_type="primitive",
    )
    result = transform_to_tailwind_v4(make_collection(brand, style("link", "color", "#123456", LINK_PATH)))
    assert ":root {\n  --colors-brand: #123456;\n}\n" in result.result
    assert "  --color-brand: var(--colors-brand);\n" in result.result
    assert "@utility link {\n  @apply text-colors-brand; \n}" in result.result


def test_tailwind_scss_ignores_dynamic_theme():
    brand = VariableToken(name="colors-brand", property="color", value="#123456", raw_value="#123456")
    result = transform_to_tailwind_scss(make_collection(brand, style("link", "color", "#123456", LINK_PATH)))
    assert "@apply text-[#123456];" in result.result


def test_tailwind_v4_variables_mode_only_theme():
    result = transform_to_tailwind_v4(make_collection(), options=GenerationOptions(output_mode="variables"))
    assert result.result == "/* Generated Tailwind Theme */\n@theme {\n}\n"


# ─── box-model 修正後的值 ───────────────────────────────────────────────────

BORDERED_PADDING = [
    ("8px 1rem", "pt-1.5 pr-[calc(1rem_-_2px)] pb-1.5 pl-[calc(1rem_-_2px)]"),
    ("8px 1rem 8px 2rem", "pt-1.5 pr-[calc(1rem_-_2px)] pb-1.5 pl-[calc(2rem_-_2px)]"),
]


def bordered(padding):
    return TokenCollection(tokens=(
        style("btn", "padding", padding),
        style("btn", "border", "2px solid #000000"),
    ))


@pytest.mark.parametrize("padding,expected", BORDERED_PADDING)
def test_tailwind_scss_mixed_unit_padding(padding, expected):
    result = transform_to_tailwind_scss(bordered(padding))
    assert result.result == (
        "/* Generated Tailwind-SCSS */"
        f"\n@mixin page-btn {{\n  @apply border-2 border-solid border-black {expected}; \n}}\n"
    )


@pytest.mark.parametrize("padding,expected", BORDERED_PADDING)
def test_tailwind_v4_mixed_unit_padding(padding, expected):
    result = transform_to_tailwind_v4(bordered(padding))
    assert f"@utility btn {{\n  @apply border-2 border-solid border-black {expected}; \n}}" in result.result


def test_tailwind_width_compensation_has_no_spaces():
    collection = TokenCollection(tokens=(
        style("btn", "width", "10rem"),
        style("btn", "border", "2px solid #000000"),
    ))
    result = transform_to_tailwind_scss(collection).result
    assert "w-[calc(calc(10rem_+_2px)_+_2px)]" in result
    assert "@apply w-[calc(calc(10rem_+_2px)_+_2px)] border-2 border-solid border-black;" in result
