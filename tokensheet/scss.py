"""
SCSS 輸出 — 變數區塊 + @mixin

變數：primitive / semantic 兩段（多 mode 時改用 CSS custom properties）
mixin：每個 instance 一個，綁定變數的值輸出成 `$name`
"""

import dataclasses
from typing import Dict, List

from .naming_engine import DEFAULT_NAMING
from .result import GenerationOptions, GenerationResult, deduplicate_messages
from .tokens import render_parts
from .values import rem, sanitize_name, scss_variable_name
from .variants import group_by_name, group_instances

LAYOUT_PROPERTIES = (
    "display",
    "flex-direction",
    "align-items",
    "gap",
    "padding",
    "padding-top",
    "padding-right",
    "padding-bottom",
    "padding-left",
)

_COLOR_PROPERTIES = ("color", "background", "fills")


def _variable_value(token) -> str:
    return rem(token.raw_value) if token.value_type == "px" else token.raw_value


def primitive_variables(collection) -> Dict[str, str]:
    """sanitized 名稱 → 值（px 轉 rem）."""
    primitives = {}
    for token in collection.variable_tokens():
        if token.variable_type == "primitive" and token.raw_value:
            primitives[sanitize_name(token.name)] = _variable_value(token)
    return primitives


def _single_mode_section(collection, primitives: Dict[str, str], warnings: List[str]) -> str:
    semantics = {}
    for token in collection.variable_tokens():
        if token.variable_type == "semantic" and token.primitive_ref:
            semantics[sanitize_name(token.name)] = scss_variable_name(sanitize_name(token.primitive_ref))

    for name in list(semantics):
        if name in primitives:
            warnings.append(f'Variable "{name}" is defined as both primitive and semantic; keeping the primitive.')
            del semantics[name]

    out = ""
    if primitives:
        out += "// Primitive SCSS Variables\n"
        for name, value in primitives.items():
            out += f"{scss_variable_name(name)}: {value};\n"
    if semantics:
        if primitives:
            out += "\n"
        out += "// Semantic SCSS Variables\n"
        for name, value in semantics.items():
            out += f"{scss_variable_name(name)}: {value};\n"
    return out


def _mode_selector(mode_id: str, default_mode: str, collection) -> str:
    if mode_id == default_mode:
        return ":root"
    mode_name = sanitize_name(collection.modes.get(mode_id, mode_id))
    return f'[data-theme="{mode_name}"]'


def _multi_mode_section(collection) -> str:
    """每個 mode 一個 custom property 區塊，SCSS 變數指向 var(--name)."""
    blocks: Dict[str, Dict[str, str]] = {}
    names: List[str] = []

    for token in collection.variable_tokens():
        name = sanitize_name(token.name)
        if name not in names:
            names.append(name)
        if token.has_modes:
            for mode_id in token.modes:
                ref = token.mode_primitive_refs.get(mode_id)
                if ref:
                    value = f"var(--{sanitize_name(ref)})"
                else:
                    value = token.mode_values[mode_id]
                    value = rem(value) if token.value_type == "px" else value
                selector = _mode_selector(mode_id, token.modes[0], collection)
                blocks.setdefault(selector, {})[name] = value
        else:
            if token.primitive_ref:
                value = f"var(--{sanitize_name(token.primitive_ref)})"
            else:
                value = _variable_value(token)
            blocks.setdefault(":root", {})[name] = value

    out = "// Theme Custom Properties\n"
    for selector in [":root"] + [s for s in blocks if s != ":root"]:
        if selector not in blocks:
            continue
        out += f"{selector} {{\n"
        for name, value in blocks[selector].items():
            out += f"  --{name}: {value};\n"
        out += "}\n\n"
    out += "// SCSS Variables\n"
    for name in names:
        out += f"{scss_variable_name(name)}: var(--{name});\n"
    return out


def _replace_colors(value: str, primitives: Dict[str, str]) -> str:
    by_value = {}
    for name, literal in primitives.items():
        by_value.setdefault(literal, name)
    return " ".join(
        scss_variable_name(by_value[part]) if part in by_value else part for part in value.split(" ")
    )


def gradient_name(token) -> str:
    return f"gradient-{sanitize_name(token.name)}"


def _is_gradient(token) -> bool:
    return token.property == "fills" and bool(token.raw_value) and "gradient" in token.raw_value


def mixin_property_and_value(token, primitives: Dict[str, str]) -> dict:
    if token.parts:
        value = render_parts(token.parts, scss=True)
        return {token.property: rem(value) if token.value_type == "px" else value}

    if _is_gradient(token):
        if token.variable_refs:
            return {token.property: scss_variable_name(gradient_name(token))}
        return {token.property: _variable_value(token)}

    ref = token.variable_refs.get(token.property)
    if ref is not None:
        return {token.property: scss_variable_name(sanitize_name(ref.name))}

    value = _variable_value(token)
    if token.property in _COLOR_PROPERTIES:
        value = _replace_colors(value, primitives)
    return {token.property: value}


def sort_and_dedupe(tokens) -> list:
    """版面屬性優先，其餘保持原順序；同屬性後者覆蓋前者."""
    valid = [t for t in tokens if t.has_values()]

    def rank(token):
        if token.property in LAYOUT_PROPERTIES:
            return LAYOUT_PROPERTIES.index(token.property)
        return len(LAYOUT_PROPERTIES)

    result: list = []
    for token in sorted(valid, key=rank):
        for i, existing in enumerate(result):
            if existing.property == token.property:
                result[i] = token
                break
        else:
            result.append(token)
    return result


def scss_instances(collection, combinatorial: bool, options: GenerationOptions, primitives=None) -> list:
    if primitives is None:
        primitives = primitive_variables(collection)
    groups = {}
    for name, tokens in group_by_name(collection.style_tokens()).items():
        kept = sort_and_dedupe(tokens)
        if kept:
            groups[name] = kept

    naming = dataclasses.replace(DEFAULT_NAMING, include_page_in_path=options.include_page_in_path)
    return group_instances(
        collection,
        groups,
        lambda token: mixin_property_and_value(token, primitives),
        naming=naming,
        combinatorial=combinatorial,
        box_model=options.box_model,
    )


def transform_to_scss(collection, combinatorial: bool = False, options: GenerationOptions = None) -> GenerationResult:
    options = options or GenerationOptions()
    warnings, errors = deduplicate_messages(collection.style_tokens())

    primitives = primitive_variables(collection)
    if any(t.has_modes for t in collection.variable_tokens()):
        output = _multi_mode_section(collection)
    else:
        output = _single_mode_section(collection, primitives, warnings)

    gradients = {}
    for token in collection.style_tokens():
        if _is_gradient(token):
            gradients[gradient_name(token)] = token
    if gradients:
        output += "\n// Generated Gradient Variables\n"
        for name, token in gradients.items():
            value = token.raw_value
            for var_name, literal in primitives.items():
                if not literal.startswith(("#", "rgb", "hsl")):
                    continue
                value = value.replace(literal, scss_variable_name(var_name))
            output += f"{scss_variable_name(name)}: {value};\n"

    if options.output_mode != "variables":
        instances = scss_instances(collection, combinatorial, options, primitives)
        output += "\n// Generated SCSS Mixins\n"
        for instance in instances:
            output += f"@mixin {instance.name} {{\n"
            for prop, value in instance.styles.items():
                output += f"  {prop}: {value};\n"
            output += "}\n"

    if "math.div(" in output:
        output = '@use "sass:math";\n\n' + output
    return GenerationResult(output, warnings, errors)
