"""
Token 資料模型 — 整條管線唯一讀取的輸入

TokenCollection 由外部擷取流程建立一次，之後只讀不寫；
命名、分組、box-model 修正都產生新的結構，不改動原始 token。
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from .errors import TokenError
from .values import format_number, sanitize_name, scss_variable_name


@dataclass(frozen=True)
class PathNode:
    """文件樹上的一個節點；COMPONENT 節點的名稱是 `prop=value` 組合."""
    name: str
    type: str = "FRAME"


# ─── 結構化值：取代「預先格式化好的 SCSS 字串」 ────────────────────────────


@dataclass(frozen=True)
class Length:
    value: float
    unit: str = "px"
    variable: Optional[str] = None

    def css_text(self) -> str:
        return f"{format_number(self.value)}{self.unit}"


@dataclass(frozen=True)
class ColorRef:
    color: str
    variable: Optional[str] = None

    def css_text(self) -> str:
        return self.color


@dataclass(frozen=True)
class Keyword:
    text: str
    variable: Optional[str] = None

    def css_text(self) -> str:
        return self.text


ValuePart = Union[Length, ColorRef, Keyword]


def render_parts(parts: Tuple[ValuePart, ...], scss: bool = False) -> str:
    """把結構化值組回字串；scss=True 時綁定變數的部分輸出 `$name`."""
    out = []
    for part in parts:
        if scss and part.variable:
            out.append(scss_variable_name(sanitize_name(part.variable)))
        else:
            out.append(part.css_text())
    return " ".join(out)


# ─── Variable tokens（以 has_modes 區分兩種形狀） ─────────────────────────────


@dataclass(frozen=True)
class VariableToken:
    """單一值的設計變數."""
    name: str
    property: str
    value: str
    raw_value: str
    path: Tuple[PathNode, ...] = ()
    value_type: Optional[str] = None
    primitive_ref: Optional[str] = None
    variable_type: Optional[str] = None
    metadata: dict = field(default_factory=dict)

    kind = "variable"
    has_modes = False


@dataclass(frozen=True)
class ModeVariableToken:
    """多 mode（主題）的設計變數；頂層 value 必須等於目前 mode 的值."""
    name: str
    property: str
    value: str
    raw_value: str
    mode_id: str
    mode_name: str
    modes: Tuple[str, ...]
    mode_values: Dict[str, str]
    path: Tuple[PathNode, ...] = ()
    value_type: Optional[str] = None
    primitive_ref: Optional[str] = None
    variable_type: Optional[str] = None
    mode_primitive_refs: Dict[str, str] = field(default_factory=dict)
    metadata: dict = field(default_factory=dict)

    kind = "variable"
    has_modes = True

    def __post_init__(self) -> None:
        missing = [m for m in self.modes if m not in self.mode_values]
        if missing:
            raise TokenError(f"Variable '{self.name}' has no value for modes: {', '.join(missing)}")
        current = self.mode_values.get(self.mode_id)
        if current is None:
            raise TokenError(f"Variable '{self.name}' current mode '{self.mode_id}' is not in modes")
        if self.raw_value != current:
            raise TokenError(
                f"Variable '{self.name}' rawValue '{self.raw_value}' differs from mode value '{current}'"
            )


AnyVariableToken = Union[VariableToken, ModeVariableToken]


@dataclass(frozen=True)
class StyleToken:
    """單一節點的單一 CSS 屬性."""
    name: str
    property: str
    value: Optional[str]
    raw_value: Optional[str]
    path: Tuple[PathNode, ...] = ()
    value_type: Optional[str] = None
    variable_refs: Dict[str, AnyVariableToken] = field(default_factory=dict)
    parts: Tuple[ValuePart, ...] = ()
    warnings: Tuple[str, ...] = ()
    errors: Tuple[str, ...] = ()
    component_id: Optional[str] = None
    component_set_id: Optional[str] = None
    metadata: dict = field(default_factory=dict)

    kind = "style"

    def has_values(self) -> bool:
        return bool(self.value) and bool(self.raw_value)


@dataclass(frozen=True)
class ComponentSetToken:
    """variant_options 保留宣告順序；每個屬性的第一個值視為預設值."""
    id: str
    name: str
    variant_options: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    def defaults(self) -> Dict[str, str]:
        return {prop: values[0] for prop, values in self.variant_options.items() if values}


@dataclass(frozen=True)
class ComponentToken:
    id: str
    name: str
    component_set_id: Optional[str] = None
    variant_properties: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class InstanceToken:
    id: str
    name: str
    component_id: Optional[str] = None


@dataclass(frozen=True)
class TokenCollection:
    tokens: Tuple[Union[StyleToken, AnyVariableToken], ...] = ()
    components: Dict[str, ComponentToken] = field(default_factory=dict)
    component_sets: Dict[str, ComponentSetToken] = field(default_factory=dict)
    instances: Dict[str, InstanceToken] = field(default_factory=dict)
    modes: Dict[str, str] = field(default_factory=dict)

    def style_tokens(self) -> list:
        return [t for t in self.tokens if t.kind == "style"]

    def variable_tokens(self) -> list:
        return [t for t in self.tokens if t.kind == "variable"]


@dataclass(frozen=True)
class ProcessedValue:
    """擷取規則的回傳型別；規則不適用時回傳 None 而不是這個物件."""
    value: Optional[str]
    raw_value: Optional[str]
    value_type: Optional[str] = None
    warnings: Tuple[str, ...] = ()
    errors: Tuple[str, ...] = ()


# ─── JSON 載入 ────────────────────────────────────────────────────────────


def _path_from_json(raw) -> Tuple[PathNode, ...]:
    nodes = []
    for item in raw or []:
        if isinstance(item, str):
            nodes.append(PathNode(name=item))
        else:
            nodes.append(PathNode(name=str(item.get("name", "")), type=item.get("type", "FRAME")))
    return tuple(nodes)


def _part_from_json(raw: dict) -> ValuePart:
    kind = raw.get("kind")
    if kind == "length":
        return Length(float(raw["value"]), raw.get("unit", "px"), raw.get("variable"))
    if kind == "color":
        return ColorRef(raw["color"], raw.get("variable"))
    if kind == "keyword":
        return Keyword(raw["text"], raw.get("variable"))
    raise TokenError(f"Unknown value part kind '{kind}'")


def _variable_from_json(raw: dict) -> AnyVariableToken:
    metadata = dict(raw.get("metadata") or {})
    common = dict(
        name=raw["name"],
        property=raw.get("property", ""),
        value=str(raw.get("value", "")),
        raw_value=str(raw.get("rawValue", "")),
        path=_path_from_json(raw.get("path")),
        value_type=raw.get("valueType"),
        primitive_ref=raw.get("primitiveRef"),
        variable_type=metadata.get("variableTokenType"),
        metadata=metadata,
    )
    if "modeId" in raw and "modes" in raw and "modeValues" in raw:
        return ModeVariableToken(
            mode_id=raw["modeId"],
            mode_name=raw.get("modeName", raw["modeId"]),
            modes=tuple(raw["modes"]),
            mode_values={k: str(v) for k, v in raw["modeValues"].items()},
            mode_primitive_refs=dict(raw.get("modePrimitiveRefs") or {}),
            **common,
        )
    return VariableToken(**common)


def _style_from_json(raw: dict) -> StyleToken:
    refs = {key: _variable_from_json(var) for key, var in (raw.get("variableRefs") or {}).items()}
    value = raw.get("value")
    raw_value = raw.get("rawValue")
    return StyleToken(
        name=raw["name"],
        property=raw["property"],
        value=None if value is None else str(value),
        raw_value=None if raw_value is None else str(raw_value),
        path=_path_from_json(raw.get("path")),
        value_type=raw.get("valueType"),
        variable_refs=refs,
        parts=tuple(_part_from_json(p) for p in raw.get("parts") or []),
        warnings=tuple(raw.get("warnings") or ()),
        errors=tuple(raw.get("errors") or ()),
        component_id=raw.get("componentId"),
        component_set_id=raw.get("componentSetId"),
        metadata=dict(raw.get("metadata") or {}),
    )


def _variant_options(raw: dict) -> Dict[str, Tuple[str, ...]]:
    if "variantOptions" in raw:
        return {k: tuple(v) for k, v in raw["variantOptions"].items()}
    # Figma 原始格式：{prop: {"values": [...]}}
    group_props = raw.get("variantGroupProperties") or {}
    return {k: tuple(v.get("values", [])) for k, v in group_props.items()}


def collection_from_dict(data: dict) -> TokenCollection:
    """從 JSON 物件建立 TokenCollection（鍵名沿用擷取端的 camelCase）."""
    if not isinstance(data, dict):
        raise TokenError("Token collection must be a JSON object")

    tokens = []
    for index, raw in enumerate(data.get("tokens") or []):
        try:
            kind = raw.get("type")
            if kind == "style":
                tokens.append(_style_from_json(raw))
            elif kind == "variable":
                tokens.append(_variable_from_json(raw))
            else:
                raise TokenError(f"unknown token type '{kind}'")
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise TokenError(f"Invalid token at index {index}: {e}") from e

    components = {
        cid: ComponentToken(
            id=cid,
            name=raw.get("name", cid),
            component_set_id=raw.get("componentSetId") or raw.get("parentId"),
            variant_properties=dict(raw.get("variantProperties") or {}),
        )
        for cid, raw in (data.get("components") or {}).items()
    }
    component_sets = {
        sid: ComponentSetToken(id=sid, name=raw.get("name", sid), variant_options=_variant_options(raw))
        for sid, raw in (data.get("componentSets") or {}).items()
    }
    instances = {
        iid: InstanceToken(id=iid, name=raw.get("name", iid), component_id=raw.get("componentId"))
        for iid, raw in (data.get("instances") or {}).items()
    }
    return TokenCollection(
        tokens=tuple(tokens),
        components=components,
        component_sets=component_sets,
        instances=instances,
        modes=dict(data.get("modes") or {}),
    )


def load_collection(path: str) -> TokenCollection:
    """讀取 token JSON 檔."""
    with open(Path(path), "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise TokenError(f"'{path}' is not valid JSON: {e}") from e
    return collection_from_dict(data)
