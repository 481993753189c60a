"""
設定檔載入與驗證測試（只印警告、不拋例外）
"""
import json

import pytest
from tokensheet.config import generation_options_from_config, load_config, validate_config


def write_config(tmp_path, data):
    path = tmp_path / "tokensheet.config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


# ─── load_config ────────────────────────────────────────────────────────────

def test_missing_config_is_empty(tmp_path):
    assert load_config(str(tmp_path / "nope.json")) == {}


def test_non_object_config(tmp_path, capsys):
    assert load_config(write_config(tmp_path, [1, 2])) == {}
    assert "格式錯誤" in capsys.readouterr().out


def test_valid_config_loaded(tmp_path, capsys):
    tokens = tmp_path / "tokens.json"
    tokens.write_text("{}", encoding="utf-8")
    cfg = {"input": {"tokens": str(tokens)}, "output": {"format": "scss"}}
    assert load_config(write_config(tmp_path, cfg)) == cfg
    assert capsys.readouterr().out == ""


# ─── validate_config ────────────────────────────────────────────────────────

def test_unknown_keys_warn(capsys):
    validate_config({"inputs": {}, "output": {"fromat": "css"}})
    out = capsys.readouterr().out
    assert "未知頂層欄位 'inputs'" in out
    assert "[output] 未知欄位 'fromat'" in out


def test_invalid_values_warn(capsys):
    validate_config({
        "output": {"format": "less", "mode": "everything"},
        "generation": {"boxModel": "half", "combinatorial": "yes"},
    })
    out = capsys.readouterr().out
    assert "output.format 'less'" in out
    assert "output.mode 'everything'" in out
    assert "generation.boxModel 'half'" in out
    assert "generation.combinatorial" in out


def test_missing_tokens_file_warns(capsys, tmp_path):
    validate_config({"input": {"tokens": str(tmp_path / "missing.json")}})
    assert "input.tokens" in capsys.readouterr().out


def test_empty_config_silent(capsys):
    validate_config({})
    assert capsys.readouterr().out == ""


# ─── GenerationOptions ──────────────────────────────────────────────────────

def test_generation_options_defaults():
    options = generation_options_from_config({})
    assert options.output_mode == "all"
    assert options.include_page_in_path is True
    assert options.box_model == "full"


def test_generation_options_from_sections():
    options = generation_options_from_config({
        "output": {"mode": "variables"},
        "generation": {"boxModel": "split", "includePageInPath": False},
    })
    assert options.output_mode == "variables"
    assert options.include_page_in_path is False
    assert options.box_model == "split"
