"""
tokensheet — 設計 token → 樣式表（CSS / SCSS / Tailwind v3 SCSS / Tailwind v4）

token 集合由擷取端產生（JSON），這裡只負責分組、命名與各格式輸出。
"""

__version__ = "0.1.0"

from .errors import (
    TokensheetError,
    TokenError,
    GroupingError,
    ShorthandError,
    BoxModelConflictError,
    UnsupportedDialectError,
    UnknownBoxModelError,
)
from .tokens import (
    PathNode,
    VariableToken,
    ModeVariableToken,
    StyleToken,
    ComponentSetToken,
    ComponentToken,
    InstanceToken,
    TokenCollection,
    collection_from_dict,
    load_collection,
)
from .naming_engine import NamingConfig, NamingContext, DEFAULT_NAMING, TAILWIND_V4_NAMING, preview_names
from .result import GenerationOptions, GenerationResult
from .generator import DIALECTS, generate, instance_names
from .config import load_config, validate_config, generation_options_from_config

__all__ = [
    "__version__",
    "TokensheetError",
    "TokenError",
    "GroupingError",
    "ShorthandError",
    "BoxModelConflictError",
    "UnsupportedDialectError",
    "UnknownBoxModelError",
    "PathNode",
    "VariableToken",
    "ModeVariableToken",
    "StyleToken",
    "ComponentSetToken",
    "ComponentToken",
    "InstanceToken",
    "TokenCollection",
    "collection_from_dict",
    "load_collection",
    "NamingConfig",
    "NamingContext",
    "DEFAULT_NAMING",
    "TAILWIND_V4_NAMING",
    "preview_names",
    "GenerationOptions",
    "GenerationResult",
    "DIALECTS",
    "generate",
    "instance_names",
    "load_config",
    "validate_config",
    "generation_options_from_config",
]
