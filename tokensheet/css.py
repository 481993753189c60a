"""CSS 輸出：每個 instance 一條 class rule."""

from .naming_engine import DEFAULT_NAMING
from .result import GenerationOptions, GenerationResult, deduplicate_messages
from .values import rem
from .variants import group_by_name, group_instances

HEADER = "/* Generated CSS */"


def _skip(token) -> bool:
    if token.value == "inherit":
        return True
    if token.property in ("gap", "padding") and token.value in ("0", "0px"):
        return True
    # 1px 是瀏覽器預設值
    return token.property == "border-width" and token.value == "1px"


def class_property_and_value(token) -> dict:
    base = token.value or token.raw_value
    if not base:
        return {token.property: ""}
    return {token.property: rem(base) if token.value_type == "px" else base}


def css_groups(collection) -> dict:
    groups = {}
    for name, tokens in group_by_name(t for t in collection.style_tokens() if t.has_values()).items():
        kept = []
        seen = set()
        for token in tokens:
            if token.property in seen or _skip(token):
                continue
            seen.add(token.property)
            kept.append(token)
        if kept:
            groups[name] = kept
    return groups


def render_rules(instances) -> str:
    out = ""
    for instance in instances:
        out += f"\n.{instance.name} {{\n"
        for prop, value in instance.styles.items():
            out += f"  {prop}: {value};\n"
        out += "}\n"
    return out


def css_instances(collection, combinatorial: bool, options: GenerationOptions) -> list:
    return group_instances(
        collection,
        css_groups(collection),
        class_property_and_value,
        naming=DEFAULT_NAMING,
        combinatorial=combinatorial,
        box_model=options.box_model,
    )


def transform_to_css(collection, combinatorial: bool = False, options: GenerationOptions = None) -> GenerationResult:
    """output_mode 對 CSS 沒有作用：永遠輸出全部 class."""
    options = options or GenerationOptions()
    warnings, errors = deduplicate_messages(collection.style_tokens())
    instances = css_instances(collection, combinatorial, options)
    return GenerationResult(HEADER + render_rules(instances), warnings, errors)
