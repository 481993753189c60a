"""產生選項與結果型別（各輸出格式共用）."""

from dataclasses import dataclass, field
from typing import List

OUTPUT_MODES = ("variables", "components", "all")


@dataclass
class GenerationOptions:
    output_mode: str = "all"
    include_page_in_path: bool = True
    box_model: str = "full"


@dataclass
class GenerationResult:
    result: str
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def deduplicate_messages(tokens) -> tuple:
    """合併所有 token 的 warnings / errors，保留第一次出現的順序."""
    warnings: dict = {}
    errors: dict = {}
    for token in tokens:
        for message in token.warnings or ():
            warnings.setdefault(message, None)
        for message in token.errors or ():
            errors.setdefault(message, None)
    return list(warnings), list(errors)
