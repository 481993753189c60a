"""
Variant 分組引擎 — style tokens → instances（每個產生的名稱一份樣式）

兩種做法必須得到完全相同的結果：
  * template：依觀察到的 variant 組合逐一輸出
  * combinatorial：展開 component set 宣告的完整笛卡兒積，逐一解析

兩者共用同一套命名順序（原始群組出現順序）與合併規則（先到先贏），
最後都依名稱排序。
"""

import itertools
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .box_model import apply_box_model
from .errors import GroupingError
from .naming_engine import NamingConfig, NamingContext

Transform = Callable[[object], Dict[str, str]]


@dataclass
class Instance:
    """一個產生出來的 class / mixin."""
    name: str
    path: tuple
    variants: Dict[str, str]
    styles: Dict[str, str]
    component_set_id: Optional[str] = None


@dataclass
class RawGroup:
    order: int
    key: str
    path: tuple
    component_id: Optional[str]
    component_set_id: Optional[str]
    variants: Dict[str, str]
    styles: Dict[str, str]


@dataclass
class _Draft:
    order: int
    path: tuple
    component_set_id: Optional[str]
    variants: Dict[str, str]
    styles: Dict[str, str] = field(default_factory=dict)

    def absorb(self, styles: Dict[str, str]) -> None:
        for prop, value in styles.items():
            self.styles.setdefault(prop, value)


def group_by_name(tokens) -> Dict[str, list]:
    groups: Dict[str, list] = {}
    for token in tokens:
        groups.setdefault(token.name, []).append(token)
    return groups


def compute_conflicts(collection, groups: Dict[str, list]) -> Dict[str, List[str]]:
    """同一個 variant 值被多個屬性使用時，記錄這些屬性（命名時要加前綴）."""
    users: Dict[str, List[str]] = {}
    for tokens in groups.values():
        component = collection.components.get(tokens[0].component_id) if tokens[0].component_id else None
        if component is None:
            continue
        for prop, value in component.variant_properties.items():
            props = users.setdefault(value.lower(), [])
            if prop.lower() not in props:
                props.append(prop.lower())
    return {value: props for value, props in users.items() if len(props) > 1}


def resolve_variants(collection, component_id: Optional[str], component_set_id: Optional[str]) -> Dict[str, str]:
    """component 的 variant 值，依 set 宣告順序排列，缺少的屬性補預設值."""
    component = collection.components.get(component_id) if component_id else None
    if component is None:
        return {}
    own = component.variant_properties
    component_set = collection.component_sets.get(component_set_id or component.component_set_id or "")
    if component_set is None:
        return dict(own)

    resolved = {}
    for prop, values in component_set.variant_options.items():
        if prop in own:
            resolved[prop] = own[prop]
        elif values:
            resolved[prop] = values[0]
    for prop, value in own.items():
        resolved.setdefault(prop, value)
    return resolved


def _single(tokens, attr: str) -> Optional[str]:
    first = getattr(tokens[0], attr)
    if not first:
        return None
    if any(getattr(t, attr) != first for t in tokens):
        raise GroupingError("Unexpected component id mismatch")
    return first


def build_raw_groups(collection, groups: Dict[str, list], transform: Transform) -> List[RawGroup]:
    raw = []
    for order, (key, tokens) in enumerate(groups.items()):
        component_id = _single(tokens, "component_id")
        component_set_id = _single(tokens, "component_set_id")
        styles: Dict[str, str] = {}
        for token in tokens:
            for prop, value in transform(token).items():
                styles.setdefault(prop, value)
        if not styles:
            continue
        raw.append(RawGroup(
            order=order,
            key=key,
            path=tokens[0].path,
            component_id=component_id,
            component_set_id=component_set_id,
            variants=resolve_variants(collection, component_id, component_set_id),
            styles=styles,
        ))
    return raw


def _sub_path(path) -> Tuple[str, ...]:
    """component set 成員的子路徑；set 內的 COMPONENT 節點是 variant 組合，不算路徑."""
    return tuple(node.name for node in path if node.type != "COMPONENT")


def _draft(group: RawGroup) -> _Draft:
    return _Draft(group.order, group.path, group.component_set_id, dict(group.variants), dict(group.styles))


def group_template(raw_groups: List[RawGroup], collection=None) -> List[_Draft]:
    """每個 (set, 子路徑, variant 組合) 一份；同組合的群組依出現順序合併.

    缺少的 variant 屬性只由 set 預設值補齊（resolve_variants），
    沒有被觀察到的組合直接略過，不會從預設或相鄰 variant 繼承樣式。
    """
    drafts: Dict[tuple, _Draft] = {}
    for group in raw_groups:
        if group.component_set_id:
            key = ("set", group.component_set_id, _sub_path(group.path), tuple(group.variants.items()))
        else:
            key = ("group", group.order)
        if key in drafts:
            drafts[key].absorb(group.styles)
        else:
            drafts[key] = _draft(group)
    return list(drafts.values())


def group_combinatorial(raw_groups: List[RawGroup], collection) -> List[_Draft]:
    """展開 component set 所有組合，每個組合獨立找出對應的群組."""
    drafts: List[_Draft] = []
    buckets: Dict[tuple, List[RawGroup]] = {}
    for group in raw_groups:
        if group.component_set_id:
            buckets.setdefault((group.component_set_id, _sub_path(group.path)), []).append(group)
        else:
            drafts.append(_draft(group))

    for (set_id, _), members in buckets.items():
        component_set = collection.component_sets.get(set_id)
        options = component_set.variant_options if component_set else {}
        props = [prop for prop, values in options.items() if values]

        matched = set()
        for combination in itertools.product(*(options[prop] for prop in props)):
            wanted = dict(zip(props, combination))
            hits = [g for g in members if g.variants == wanted]
            if not hits:
                continue
            draft = _draft(hits[0])
            for hit in hits[1:]:
                draft.absorb(hit.styles)
            drafts.append(draft)
            matched.update(id(hit) for hit in hits)

        # 不在宣告組合內的 variant 值：各自成為一份
        leftovers: Dict[tuple, _Draft] = {}
        for group in members:
            if id(group) in matched:
                continue
            key = tuple(group.variants.items())
            if key in leftovers:
                leftovers[key].absorb(group.styles)
            else:
                leftovers[key] = _draft(group)
        drafts.extend(leftovers.values())
    return drafts


def _finalize(
    drafts: List[_Draft],
    conflicts: Dict[str, List[str]],
    naming: Optional[NamingConfig],
    box_model: str,
) -> List[Instance]:
    # 每次產生都建立新的命名 context，重名計數不跨呼叫
    context = NamingContext(naming)
    instances = []
    for draft in sorted(drafts, key=lambda d: d.order):
        name = context.create_name(draft.path, conflicts, draft.variants, draft.component_set_id)
        styles = apply_box_model(draft.styles, box_model)
        instances.append(Instance(
            name=name,
            path=draft.path,
            variants=draft.variants,
            styles=styles,
            component_set_id=draft.component_set_id,
        ))
    return sorted(instances, key=lambda inst: inst.name)


def group_instances(
    collection,
    groups: Dict[str, list],
    transform: Transform,
    naming: Optional[NamingConfig] = None,
    combinatorial: bool = False,
    box_model: str = "full",
) -> List[Instance]:
    """分組 → 命名 → box-model 修正，回傳依名稱排序的 instances."""
    conflicts = compute_conflicts(collection, groups)
    raw_groups = build_raw_groups(collection, groups, transform)
    strategy = group_combinatorial if combinatorial else group_template
    return _finalize(strategy(raw_groups, collection), conflicts, naming, box_model)
