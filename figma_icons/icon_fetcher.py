"""
IconFetcher：節點 id → render 網址 → SVG 下載 → markup 改寫

一次批次呼叫 image-render 端點取得所有網址，再以有上限的 thread pool 並行下載。
單一 icon 失敗只會被記錄並略過；回傳順序永遠與輸入順序一致。
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Dict, List, Optional

import requests
from tqdm import tqdm

from .errors import IconDownloadError, RenderResolutionError
from .markup_rewriter import MarkupRewriter
from .naming_engine import DEFAULT_PREFIX, derive_names
from .tree_extractor import IconRecord


@dataclass
class RenderedIcon:
    id: str
    name: str
    component_name: str
    file_stem: str
    markup: str


class IconFetcher:
    """批次取得 icon SVG 並改寫成元件用 markup."""

    def __init__(
        self,
        client,
        file_key: str,
        rewriter: Optional[MarkupRewriter] = None,
        max_workers: int = 8,
        prefix: str = DEFAULT_PREFIX,
        show_progress: bool = True,
    ):
        self.client = client
        self.file_key = file_key
        self.rewriter = rewriter or MarkupRewriter()
        self.max_workers = max_workers
        self.prefix = prefix
        self.show_progress = show_progress
        self.failures: List[IconDownloadError] = []

    def resolve_urls(self, records: List[IconRecord]) -> Dict[str, Optional[str]]:
        ids = [record.id for record in records]
        try:
            payload = self.client.get_images(self.file_key, ids, format="svg")
        except (requests.RequestException, ValueError) as e:
            raise RenderResolutionError(f"Image render request failed: {e}") from e
        if payload.get("err"):
            raise RenderResolutionError(f"Image render request failed: {payload['err']}")
        images = payload.get("images")
        if not isinstance(images, dict):
            raise RenderResolutionError("Image render response has no 'images' mapping")
        return images

    def fetch_icons(self, records: List[IconRecord]) -> List[RenderedIcon]:
        self.failures = []
        if not records:
            return []
        urls = self.resolve_urls(records)

        results: Dict[int, RenderedIcon] = {}
        with tqdm(
            total=len(records),
            desc="Downloading icons",
            unit=" icons",
            disable=not self.show_progress,
        ) as pbar:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                future_to_index = {
                    executor.submit(self._fetch_one, record, urls.get(record.id)): index
                    for index, record in enumerate(records)
                }
                for future in as_completed(future_to_index):
                    index = future_to_index[future]
                    record = records[index]
                    try:
                        results[index] = future.result()
                    except IconDownloadError as e:
                        self._report(e)
                    except Exception as e:
                        self._report(IconDownloadError(record.id, record.name, str(e)))
                    pbar.update(1)

        return [results[i] for i in sorted(results)]

    def _fetch_one(self, record: IconRecord, url: Optional[str]) -> RenderedIcon:
        if not url:
            raise IconDownloadError(record.id, record.name, "no render URL returned")
        file_stem, component_name = derive_names(record.name, self.prefix)
        raw = self.client.download_svg(url)
        return RenderedIcon(
            id=record.id,
            name=record.name,
            component_name=component_name,
            file_stem=file_stem,
            markup=self.rewriter.rewrite(raw),
        )

    def _report(self, error: IconDownloadError) -> None:
        self.failures.append(error)
        tqdm.write(f"   ⚠️  Skipped icon {error}")
