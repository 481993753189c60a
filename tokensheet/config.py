"""設定檔載入與基本驗證."""

import json
from pathlib import Path
from typing import Any

from .box_model import BOX_MODEL_MODES
from .result import OUTPUT_MODES, GenerationOptions

DEFAULT_CONFIG_PATH = "tokensheet.config.json"

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"input", "output", "generation"}

# 各區塊已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "input": {"tokens"},
    "output": {"format", "path", "mode"},
    "generation": {"combinatorial", "boxModel", "includePageInPath"},
}

_VALID_FORMATS = {"css", "scss", "tailwind-scss", "tailwind-v4"}


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    # 頂層未知欄位
    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    # 各區塊欄位
    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"'{section}' 應為 JSON 物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    output = cfg.get("output", {}) if isinstance(cfg.get("output"), dict) else {}
    generation = cfg.get("generation", {}) if isinstance(cfg.get("generation"), dict) else {}

    fmt = output.get("format")
    if fmt and fmt not in _VALID_FORMATS:
        valid = ", ".join(sorted(_VALID_FORMATS))
        _warn(f"output.format '{fmt}' 不在已知值中（{valid}）")

    mode = output.get("mode")
    if mode and mode not in OUTPUT_MODES:
        _warn(f"output.mode '{mode}' 不在已知值中（{', '.join(OUTPUT_MODES)}）")

    box_model = generation.get("boxModel")
    if box_model and box_model not in BOX_MODEL_MODES:
        _warn(f"generation.boxModel '{box_model}' 不在已知值中（{', '.join(BOX_MODEL_MODES)}）")

    # 布林值類型
    for key in ("combinatorial", "includePageInPath"):
        val = generation.get(key)
        if val is not None and not isinstance(val, bool):
            _warn(f"generation.{key} 應為 true/false，目前是 {type(val).__name__}")

    # tokens 檔存在性提示（可能由 --tokens 覆寫）
    tokens = cfg.get("input", {}).get("tokens") if isinstance(cfg.get("input"), dict) else None
    if tokens and not Path(tokens).exists():
        _warn(f"input.tokens '{tokens}' 檔案不存在（可用 --tokens 指定）")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def generation_options_from_config(cfg: dict) -> GenerationOptions:
    output = cfg.get("output") or {}
    generation = cfg.get("generation") or {}
    return GenerationOptions(
        output_mode=output.get("mode", "all"),
        include_page_in_path=generation.get("includePageInPath", True),
        box_model=generation.get("boxModel", "full"),
    )
