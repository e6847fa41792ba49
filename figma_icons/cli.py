#!/usr/bin/env python3
"""
figma-icons CLI — Figma icon 元件 → React 元件庫原始碼

  python -m figma_icons.cli generate [--file-key KEY] [--output DIR]
  python -m figma_icons.cli preview [--file-key KEY]      # 只列出 icon 與衍生名稱
"""

import argparse

from figma_icons import __version__

from .config import DEFAULT_CONFIG_PATH, load_config, load_environment, resolve_settings
from .errors import ConfigurationError, FigmaIconsError
from .figma_reader import FigmaAPIClient
from .pipeline import find_icon_records, generate_icons
from .tree_extractor import preview_icon_tree


def _settings_from_args(args, config: dict):
    return resolve_settings(
        config,
        file_key=args.file_key,
        marker=args.marker,
        output_dir=getattr(args, "output", None),
        workers=getattr(args, "workers", None),
        show_progress=False if getattr(args, "no_progress", False) else None,
    )


def cmd_generate(args, config: dict) -> int:
    """Generate: 從 Figma 下載 icon 並產生元件檔與 index."""
    try:
        settings = _settings_from_args(args, config)
    except ConfigurationError as e:
        print(f"❌ {e}")
        return 1

    try:
        report = generate_icons(settings)
    except FigmaIconsError as e:
        print(f"❌ Generate failed: {e}")
        return 1

    print(f"✅ Generated {len(report.emitted)} icons to {settings.output_dir}")
    return 0


def cmd_preview(args, config: dict) -> int:
    """Preview: 只讀取文件結構，列出會產生的檔名與元件名稱."""
    try:
        settings = _settings_from_args(args, config)
    except ConfigurationError as e:
        print(f"❌ {e}")
        return 1

    client = FigmaAPIClient(settings.token)
    try:
        records = find_icon_records(client, settings)
    except FigmaIconsError as e:
        print(f"❌ Preview failed: {e}")
        return 1

    print(preview_icon_tree(records, settings.prefix))
    print(f"\nTotal icons: {len(records)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="figma-icons: Figma icon components → React icon library",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--env-file", default=".env", help="dotenv file providing TOKEN / FILE")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    gen_p = sub.add_parser("generate", help="Figma → icon components",
        epilog="Examples:\n  figma-icons generate\n  figma-icons generate --file-key ABC123 --output ./src --workers 4",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    gen_p.add_argument("--file-key", help="Figma file key (default: $FILE)")
    gen_p.add_argument("--output", help="Output directory (default: src)")
    gen_p.add_argument("--marker", help="Section name marker (default: Icons)")
    gen_p.add_argument("--workers", type=int, help="Concurrent downloads (default: 8)")
    gen_p.add_argument("--no-progress", action="store_true", help="Hide progress bars")

    preview_p = sub.add_parser("preview", help="List icon components without downloading",
        epilog="Examples:\n  figma-icons preview --file-key ABC123",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    preview_p.add_argument("--file-key", help="Figma file key (default: $FILE)")
    preview_p.add_argument("--marker", help="Section name marker (default: Icons)")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    load_environment(args.env_file)
    config = load_config(args.config)

    if args.command == "generate":
        return cmd_generate(args, config)
    if args.command == "preview":
        return cmd_preview(args, config)
    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
