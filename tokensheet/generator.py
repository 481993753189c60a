"""
Generator — token collection → stylesheet text.

Dialects: css / scss / tailwind-scss / tailwind-v4.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .box_model import BOX_MODEL_MODES
from .css import css_instances, transform_to_css
from .errors import UnknownBoxModelError, UnsupportedDialectError
from .naming_engine import TAILWIND_V4_NAMING
from .result import GenerationOptions, GenerationResult
from .scss import scss_instances, transform_to_scss
from .tailwind import tailwind_instances, transform_to_tailwind_scss, transform_to_tailwind_v4


@dataclass
class Dialect:
    id: str
    extension: str
    transform: Callable[..., GenerationResult]
    instances: Callable[..., list]


def _v4_instances(collection, combinatorial, options):
    return tailwind_instances(collection, combinatorial, options, TAILWIND_V4_NAMING)


DIALECTS: Dict[str, Dialect] = {
    "css": Dialect("css", ".css", transform_to_css, css_instances),
    "scss": Dialect("scss", ".scss", transform_to_scss, scss_instances),
    "tailwind-scss": Dialect("tailwind-scss", ".scss", transform_to_tailwind_scss, tailwind_instances),
    "tailwind-v4": Dialect("tailwind-v4", ".css", transform_to_tailwind_v4, _v4_instances),
}


def get_dialect(dialect: str) -> Dialect:
    try:
        return DIALECTS[dialect]
    except KeyError:
        known = ", ".join(DIALECTS)
        raise UnsupportedDialectError(f"Unsupported format '{dialect}' (known: {known})") from None


def _checked(options: Optional[GenerationOptions]) -> GenerationOptions:
    options = options or GenerationOptions()
    if options.box_model not in BOX_MODEL_MODES:
        known = ", ".join(BOX_MODEL_MODES)
        raise UnknownBoxModelError(f"Unknown box model mode '{options.box_model}' (known: {known})")
    return options


def generate(
    collection,
    dialect: str,
    combinatorial: bool = False,
    options: Optional[GenerationOptions] = None,
) -> GenerationResult:
    """單一入口：依 dialect 分派到各輸出格式；未知格式拋 UnsupportedDialectError，未知 boxModel 拋 UnknownBoxModelError."""
    return get_dialect(dialect).transform(collection, combinatorial, _checked(options))


def instance_names(
    collection,
    dialect: str,
    combinatorial: bool = False,
    options: Optional[GenerationOptions] = None,
) -> List:
    """該格式會產生的 instances（名稱預覽用）."""
    return get_dialect(dialect).instances(collection, combinatorial, _checked(options))
