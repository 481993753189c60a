"""
CLI 測試：generate / names 子命令、config 與參數覆寫
"""
import json

import pytest
from tokensheet.cli import main


TOKENS = {
    "tokens": [
        {
            "type": "style",
            "name": "card",
            "property": "color",
            "value": "#ffffff",
            "rawValue": "#ffffff",
            "path": [{"name": "Page", "type": "SECTION"}, {"name": "Card", "type": "FRAME"}],
            "warnings": ["Unsupported effect"],
        }
    ]
}


@pytest.fixture
def tokens_file(tmp_path):
    path = tmp_path / "tokens.json"
    path.write_text(json.dumps(TOKENS), encoding="utf-8")
    return path


def run(tmp_path, *argv):
    return main(["--config", str(tmp_path / "tokensheet.config.json"), *argv])


# ─── generate ───────────────────────────────────────────────────────────────

def test_generate_to_file_creates_dirs(tmp_path, tokens_file, capsys):
    out = tmp_path / "styles" / "tokens.css"
    assert run(tmp_path, "generate", "--tokens", str(tokens_file), "-o", str(out)) == 0
    assert ".page-card {\n  color: #ffffff;\n}" in out.read_text(encoding="utf-8")
    printed = capsys.readouterr().out
    assert "Unsupported effect" in printed
    assert "✅ Generated css" in printed


def test_generate_to_stdout(tmp_path, tokens_file, capsys):
    assert run(tmp_path, "generate", "--tokens", str(tokens_file), "--format", "tailwind-v4") == 0
    captured = capsys.readouterr()
    assert "@utility card {" in captured.out
    # 訊息走 stderr，stdout 只留樣式表
    assert "Unsupported effect" in captured.err
    assert "Unsupported effect" not in captured.out


def test_config_supplies_defaults_and_flags_override(tmp_path, tokens_file, capsys):
    config = {"input": {"tokens": str(tokens_file)}, "output": {"format": "scss", "mode": "variables"}}
    (tmp_path / "tokensheet.config.json").write_text(json.dumps(config), encoding="utf-8")

    assert run(tmp_path, "generate") == 0
    assert "@mixin" not in capsys.readouterr().out

    assert run(tmp_path, "generate", "--mode", "all") == 0
    assert "@mixin page-card {" in capsys.readouterr().out


def test_missing_tokens_file_exit_code(tmp_path, capsys):
    assert run(tmp_path, "generate", "--tokens", str(tmp_path / "nope.json")) == 1
    assert "❌" in capsys.readouterr().err


def test_invalid_tokens_exit_code(tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"tokens": [{"type": "weird"}]}), encoding="utf-8")
    assert run(tmp_path, "generate", "--tokens", str(bad)) == 1


def test_unknown_format_rejected_by_argparse(tmp_path, tokens_file):
    with pytest.raises(SystemExit):
        run(tmp_path, "generate", "--tokens", str(tokens_file), "--format", "less")


def test_unknown_box_model_in_config_exit_code(tmp_path, tokens_file, capsys):
    config = {"generation": {"boxModel": "bogus"}}
    (tmp_path / "tokensheet.config.json").write_text(json.dumps(config), encoding="utf-8")

    assert run(tmp_path, "generate", "--tokens", str(tokens_file)) == 1
    captured = capsys.readouterr()
    assert "❌ Generate failed: Unknown box model mode 'bogus'" in captured.err
    assert "boxModel" in captured.out


# ─── names / misc ───────────────────────────────────────────────────────────

def test_names_preview(tmp_path, tokens_file, capsys):
    assert run(tmp_path, "names", "--tokens", str(tokens_file)) == 0
    out = capsys.readouterr().out
    assert "├─ page-card" in out
    assert "Total names: 1" in out


def test_no_command_prints_help(tmp_path, capsys):
    assert run(tmp_path) == 1
    assert "generate" in capsys.readouterr().out


def test_version(tmp_path, capsys):
    with pytest.raises(SystemExit):
        run(tmp_path, "--version")
    assert "0.1.0" in capsys.readouterr().out
