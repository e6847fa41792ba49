"""
Generator — rendered icons → React 元件檔與 index barrel.

Each icon becomes `<stem><extension>`; the index re-exports every emitted
icon once; the first occurrence of a stem or component name wins.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List

from tqdm import tqdm

from .errors import OutputDirectoryError, WriteError
from .icon_fetcher import RenderedIcon
from .markup_rewriter import PROPS_PLACEHOLDER

COMPONENT_TEMPLATE = (
    "import React from 'react';\n"
    "export const {name} = (props: React.SVGProps<SVGSVGElement>) => ({content});\n"
)


@dataclass
class EmittedIcon:
    icon: RenderedIcon
    output_path: str
    file_path: Path

    @property
    def file_stem(self) -> str:
        return self.icon.file_stem

    @property
    def component_name(self) -> str:
        return self.icon.component_name


def render_component(markup: str, component_name: str) -> str:
    content = markup.replace(PROPS_PLACEHOLDER, "{...props}")
    return COMPONENT_TEMPLATE.format(name=component_name, content=content)


def render_index(emitted: Iterable[EmittedIcon]) -> str:
    lines = []
    seen_stems: set[str] = set()
    seen_components: set[str] = set()
    for item in emitted:
        if item.file_stem in seen_stems or item.component_name in seen_components:
            continue
        seen_stems.add(item.file_stem)
        seen_components.add(item.component_name)
        lines.append(f"export {{{item.component_name}}} from '{item.output_path}';")
    return "\n".join(lines) + "\n" if lines else ""


def reset_output_dir(path: Path) -> Path:
    """建立輸出目錄；已存在則清空其中所有項目，確保不留上一次的檔案."""
    path.mkdir(parents=True, exist_ok=True)
    for entry in path.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
    return path


def _write(path: Path, content: str) -> None:
    path.write_text(content, encoding="utf-8")


class OutputWriter:
    def __init__(
        self,
        output_dir: str,
        extension: str = ".tsx",
        index_name: str = "index.ts",
        show_progress: bool = True,
    ):
        self.output_dir = Path(output_dir)
        self.extension = extension
        self.index_name = index_name
        self.show_progress = show_progress
        self.failures: List[WriteError] = []

    def write(self, icons: List[RenderedIcon]) -> List[EmittedIcon]:
        self.failures = []
        try:
            reset_output_dir(self.output_dir)
        except OSError as e:
            raise OutputDirectoryError(str(self.output_dir), str(e)) from e

        emitted: List[EmittedIcon] = []
        written: set[str] = set()
        exported: Dict[str, str] = {}
        for icon in tqdm(icons, desc="Generating icons", unit=" icons", disable=not self.show_progress):
            if icon.file_stem in written:
                tqdm.write(f"   ⚠️  Duplicate icon '{icon.name}' ({icon.id}) → {icon.file_stem}, keeping the first one")
                continue
            file_path = self.output_dir / f"{icon.file_stem}{self.extension}"
            if icon.component_name in exported:
                error = WriteError(
                    icon.file_stem,
                    str(file_path),
                    f"component {icon.component_name} is already exported from '{exported[icon.component_name]}'",
                )
                self.failures.append(error)
                tqdm.write(f"   ⚠️  Skipped {error}")
                continue
            try:
                _write(file_path, render_component(icon.markup, icon.component_name))
            except OSError as e:
                file_path.unlink(missing_ok=True)
                error = WriteError(icon.file_stem, str(file_path), str(e))
                self.failures.append(error)
                tqdm.write(f"   ⚠️  Failed to write {error}")
                continue
            written.add(icon.file_stem)
            exported[icon.component_name] = icon.file_stem
            emitted.append(EmittedIcon(icon=icon, output_path=f"./{icon.file_stem}", file_path=file_path))
        return emitted

    def write_index(self, emitted: List[EmittedIcon]) -> Path:
        index_path = self.output_dir / self.index_name
        try:
            _write(index_path, render_index(emitted))
        except OSError as e:
            raise OutputDirectoryError(str(index_path), str(e)) from e
        return index_path
