"""Orchestrator: Figma file → icon records → rendered icons → files + index."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .config import IconSettings
from .errors import IconDownloadError, WriteError
from .figma_reader import FigmaAPIClient, fetch_document
from .generator import EmittedIcon, OutputWriter
from .icon_fetcher import IconFetcher, RenderedIcon
from .markup_rewriter import MarkupRewriter
from .tree_extractor import (
    IconRecord,
    extract_icon_nodes,
    locate_icon_root,
    marker_predicate,
    parse_document,
)


@dataclass
class GenerationReport:
    records: List[IconRecord] = field(default_factory=list)
    icons: List[RenderedIcon] = field(default_factory=list)
    emitted: List[EmittedIcon] = field(default_factory=list)
    download_failures: List[IconDownloadError] = field(default_factory=list)
    write_failures: List[WriteError] = field(default_factory=list)
    index_path: Optional[Path] = None


def find_icon_records(client, settings: IconSettings) -> List[IconRecord]:
    """讀取 Figma 檔案並找出 marker 區段內的所有 icon 節點."""
    print(f"   [1/4] Loading Figma file {settings.file_key}...")
    payload = fetch_document(client, settings.file_key)
    document = parse_document(payload)
    print("   ✅ File loaded")

    print("   [2/4] Parsing the file...")
    icon_root = locate_icon_root(document, marker_predicate(settings.marker))
    records = extract_icon_nodes(icon_root)
    print(f"   ✅ Found {len(records)} icon components in '{icon_root.name}'")
    return records


def generate_icons(settings: IconSettings, client=None) -> GenerationReport:
    """
    執行完整流程。文件或批次層級錯誤（DocumentStructureError、
    RenderResolutionError）直接往上拋；單一 icon 的錯誤記錄在 report 中。
    """
    client = client or FigmaAPIClient(settings.token)
    report = GenerationReport()

    print(f"🚀 Generating icons from Figma file: {settings.file_key}")
    report.records = find_icon_records(client, settings)

    print("   [3/4] Downloading icons...")
    fetcher = IconFetcher(
        client,
        settings.file_key,
        rewriter=MarkupRewriter(settings.optimizer),
        max_workers=settings.workers,
        prefix=settings.prefix,
        show_progress=settings.show_progress,
    )
    report.icons = fetcher.fetch_icons(report.records)
    report.download_failures = list(fetcher.failures)
    print(f"   ✅ Downloaded {len(report.icons)}/{len(report.records)} icons")

    print(f"   [4/4] Writing components to {settings.output_dir}...")
    writer = OutputWriter(
        settings.output_dir,
        extension=settings.extension,
        index_name=settings.index_file,
        show_progress=settings.show_progress,
    )
    report.emitted = writer.write(report.icons)
    report.write_failures = list(writer.failures)
    report.index_path = writer.write_index(report.emitted)
    print(f"   ✅ Index file generated: {report.index_path}")

    failures = len(report.download_failures) + len(report.write_failures)
    if failures:
        print(f"   ⚠️  {failures} icons skipped")
    return report
