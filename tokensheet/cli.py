#!/usr/bin/env python3
"""
tokensheet CLI — design tokens → CSS / SCSS / Tailwind

  python -m tokensheet.cli generate --tokens tokens.json --format scss
  python -m tokensheet.cli names --tokens tokens.json      # 預覽產生的名稱
  python -m tokensheet.cli watch --tokens tokens.json -o styles/tokens.scss
"""

import argparse
import sys
import time
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from tokensheet import __version__

from .box_model import BOX_MODEL_MODES
from .config import DEFAULT_CONFIG_PATH, generation_options_from_config, load_config
from .errors import TokensheetError
from .generator import DIALECTS, generate, instance_names
from .naming_engine import preview_names
from .result import OUTPUT_MODES
from .tokens import load_collection


def _settings(args, config: dict) -> dict:
    """CLI 參數優先，其次 config，最後預設值."""
    input_cfg = config.get("input") or {}
    output_cfg = config.get("output") or {}
    generation_cfg = config.get("generation") or {}

    options = generation_options_from_config(config)
    if getattr(args, "mode", None):
        options.output_mode = args.mode
    if getattr(args, "box_model", None):
        options.box_model = args.box_model

    return {
        "tokens": args.tokens or input_cfg.get("tokens") or "tokens.json",
        "format": args.format or output_cfg.get("format") or "css",
        "output": getattr(args, "output", None) or output_cfg.get("path"),
        "combinatorial": bool(args.combinatorial or generation_cfg.get("combinatorial", False)),
        "options": options,
    }


def run_generation(settings: dict) -> int:
    """產生一次並寫出；回傳 exit code."""
    output = settings["output"]
    # 輸出到 stdout 時，訊息改走 stderr
    report = sys.stdout if output else sys.stderr

    try:
        collection = load_collection(settings["tokens"])
        result = generate(
            collection,
            settings["format"],
            combinatorial=settings["combinatorial"],
            options=settings["options"],
        )
    except FileNotFoundError:
        print(f"❌ 找不到 token 檔案 '{settings['tokens']}'（請用 --tokens 或 config 的 input.tokens 指定）", file=report)
        return 1
    except TokensheetError as e:
        print(f"❌ Generate failed: {e}", file=report)
        return 1

    for message in result.warnings:
        print(f"   ⚠️  {message}", file=report)
    for message in result.errors:
        print(f"   ❌ {message}", file=report)

    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(result.result)
        print(f"✅ Generated {settings['format']} to {path}")
    else:
        sys.stdout.write(result.result)
        if not result.result.endswith("\n"):
            sys.stdout.write("\n")
    return 0


def cmd_generate(args, config: dict) -> int:
    """Generate: 讀 token 檔 → 輸出樣式表."""
    return run_generation(_settings(args, config))


def cmd_names(args, config: dict) -> int:
    """預覽產生的名稱樹."""
    settings = _settings(args, config)
    try:
        collection = load_collection(settings["tokens"])
        instances = instance_names(
            collection,
            settings["format"],
            combinatorial=settings["combinatorial"],
            options=settings["options"],
        )
    except FileNotFoundError:
        print(f"❌ 找不到 token 檔案 '{settings['tokens']}'")
        return 1
    except TokensheetError as e:
        print(f"❌ {e}")
        return 1

    print(f"👁️  Names for {settings['format']}: {settings['tokens']}")
    print(preview_names(instances))
    print(f"\nTotal names: {len(instances)}")
    return 0


_WATCHED_EXTENSIONS = (".json",)


class ChangeHandler(FileSystemEventHandler):
    """檔案變更事件處理器，帶 debounce 防抖。"""

    def __init__(self, callback, debounce: float = 1.0, ignore=()):
        self.callback = callback
        self.last_trigger = 0.0
        self.debounce_seconds = debounce
        # 自己寫出的檔案不觸發（輸出也可能是 .json 目錄下的檔案）
        self.ignore = {str(Path(p).resolve()) for p in ignore}

    def on_modified(self, event):
        if event.is_directory:
            return
        if not event.src_path.endswith(_WATCHED_EXTENSIONS):
            return
        if str(Path(event.src_path).resolve()) in self.ignore:
            return
        current_time = time.time()
        if current_time - self.last_trigger < self.debounce_seconds:
            return
        self.last_trigger = current_time
        print(f"\n🔄 File changed: {event.src_path}")
        self.callback()


def cmd_watch(args, config: dict) -> int:
    """Watch: 監聽 token 檔所在目錄，變更時重新產生."""
    settings = _settings(args, config)
    tokens_dir = str(Path(settings["tokens"]).resolve().parent)
    print(f"👀 Watching for changes in '{tokens_dir}'...")
    print("   Press Ctrl+C to stop.")

    run_generation(settings)

    ignore = [settings["output"]] if settings["output"] else []
    event_handler = ChangeHandler(lambda: run_generation(settings), ignore=ignore)
    observer = Observer()
    observer.schedule(event_handler, path=tokens_dir, recursive=True)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\n👋 Stopping watch...")
        observer.stop()
    finally:
        observer.join()
    return 0


def _add_generation_args(parser, with_output: bool = True):
    parser.add_argument("--tokens", "-t", help="Token collection JSON (default: input.tokens or tokens.json)")
    parser.add_argument("--format", "-f", choices=sorted(DIALECTS), help="Output format (default: output.format or css)")
    if with_output:
        parser.add_argument("--output", "-o", help="Output file (default: output.path, else stdout)")
    parser.add_argument("--mode", choices=OUTPUT_MODES, help="variables | components | all")
    parser.add_argument("--combinatorial", action="store_true", help="Expand every declared variant combination")
    parser.add_argument("--box-model", choices=BOX_MODEL_MODES, help="Box-model patch mode (default: full)")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="tokensheet: Design Tokens → Stylesheets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    gen_p = sub.add_parser("generate", help="Tokens → stylesheet",
        epilog="Examples:\n  tokensheet generate --tokens tokens.json --format scss -o styles/_tokens.scss\n  tokensheet generate --format tailwind-v4 --mode variables",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_generation_args(gen_p)

    names_p = sub.add_parser("names", help="Preview generated names",
        epilog="Examples:\n  tokensheet names --tokens tokens.json\n  tokensheet names --format tailwind-v4 --combinatorial",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_generation_args(names_p, with_output=False)

    watch_p = sub.add_parser("watch", help="Regenerate when token files change",
        epilog="Examples:\n  tokensheet watch --tokens tokens.json -o styles/_tokens.scss --format scss",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_generation_args(watch_p)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    config = load_config(args.config)
    if args.command == "generate":
        return cmd_generate(args, config)
    if args.command == "names":
        return cmd_names(args, config)
    if args.command == "watch":
        return cmd_watch(args, config)
    return 1


if __name__ == "__main__":
    sys.exit(main())
