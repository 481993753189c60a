"""
命名引擎 — 由節點路徑 + variant 組合產生唯一的 class / mixin 名稱

base path（component set 內略過 COMPONENT 節點）→ variant 片段 → 重名加序號 → 全部小寫
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

_FALSY = ("false", "no")
_TRUTHY = ("true", "yes")
_UNSAFE_CHARS = re.compile(r"[()+&]")


def _default_duplicate(name: str, count: int) -> str:
    return f"{name}{count}"


@dataclass
class NamingConfig:
    """命名規則設定；不同輸出格式使用不同分隔符."""
    path_separator: str = "-"
    after_component_name: str = "-"
    variant_equal_sign: str = "_"
    between_variants: str = "-"
    include_page_in_path: bool = True
    duplicate: Callable[[str, int], str] = field(default=_default_duplicate)


DEFAULT_NAMING = NamingConfig()

TAILWIND_V4_NAMING = NamingConfig(
    path_separator="/",
    after_component_name=".",
    variant_equal_sign="_",
    between_variants="---",
    include_page_in_path=False,
)


def _path_segments(path: Iterable, in_component_set: bool = False) -> List[str]:
    # set 內的 COMPONENT 節點名稱就是 variant 組合；獨立 component 要保留名稱
    return [
        re.sub(r"\s+", "-", node.name)
        for node in path
        if not (in_component_set and node.type == "COMPONENT")
    ]


class NamingContext:
    """一次產生流程專用；重名計數只存在這個物件上."""

    def __init__(self, config: Optional[NamingConfig] = None):
        self.config = config or NamingConfig()
        self._name_counts: Dict[str, int] = {}

    def create_name(
        self,
        path: Iterable,
        conflicts: Optional[Dict[str, List[str]]] = None,
        variants: Optional[Dict[str, str]] = None,
        component_set_id: Optional[str] = None,
    ) -> str:
        path = list(path)
        conflicts = conflicts or {}
        segments = _path_segments(path, bool(component_set_id))
        base = self._base_path(segments)
        parts = self._variant_parts(segments, conflicts, variants or {})

        name = base
        if parts:
            name += self.config.after_component_name + self.config.between_variants.join(parts)

        count = self._name_counts.get(name, 0)
        self._name_counts[name] = count + 1
        if count:
            name = self.config.duplicate(name, count + 1)
        return name.lower()

    def _base_path(self, segments: List[str]) -> str:
        if not self.config.include_page_in_path:
            segments = segments[1:]
        return self.config.path_separator.join(segments)

    def _standardize(self, segments: List[str], variants: Dict[str, str]) -> str:
        combination = "--".join(f"{prop}={value}" for prop, value in variants.items())
        cleaned = _UNSAFE_CHARS.sub("", combination)
        cleaned = re.sub(r"[\s._]", "-", cleaned)

        # variant 裡重複出現的路徑名稱要拿掉
        for segment in segments:
            cleaned = re.sub(rf"\b{re.escape(segment)}\b", "", cleaned)
            cleaned = re.sub(r"^--+|--+$", "", cleaned)
            cleaned = re.sub(r"--+", "--", cleaned)
        return cleaned

    def _variant_parts(self, segments: List[str], conflicts: Dict[str, List[str]], variants: Dict[str, str]) -> List[str]:
        sign = self.config.variant_equal_sign
        conflicted = {prop for props in conflicts.values() for prop in props}
        parts = []
        for piece in self._standardize(segments, variants).split("--"):
            if not piece:
                continue
            if "=" in piece:
                prop, value = piece.split("=")[:2]
                prop = prop.lower().strip()
            else:
                prop, value = None, piece
            value = re.sub(r"\s+", "-", value.strip()).lower()
            if not value or value == "root":
                continue

            if prop:
                if value in _FALSY:
                    parts.append(f"{prop}{sign}{value}")
                    continue
                has_conflict = prop in conflicted
                if value in _TRUTHY and not has_conflict:
                    parts.append(value)
                    continue
                if has_conflict:
                    parts.append(f"{prop}{sign}{value}")
                    continue
            parts.append(value)
        return parts


def preview_names(instances: Iterable) -> str:
    """除錯用：依路徑深度縮排列出產生的名稱."""
    lines = []
    for instance in instances:
        depth = max(len(_path_segments(instance.path, bool(instance.component_set_id))) - 1, 0)
        lines.append(f"{'  ' * depth}├─ {instance.name}")
    return "\n".join(lines)
