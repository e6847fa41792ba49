"""
IconFetcher 測試：批次 render 呼叫、單一 icon 失敗隔離、輸出順序。
rewriter 以 stub 取代，scour 相關行為在 test_markup_rewriter 涵蓋。
"""
import threading
import time
from unittest.mock import MagicMock

import pytest
import requests

from figma_icons.errors import IconDownloadError, RenderResolutionError
from figma_icons.icon_fetcher import IconFetcher
from figma_icons.tree_extractor import IconRecord

RECORDS = [IconRecord("1:1", "Arrows/arrow_left"), IconRecord("1:2", "Arrows/arrow_right")]
IMAGES = {"1:1": "https://cdn/1", "1:2": "https://cdn/2"}
SVGS = {"https://cdn/1": "<svg>left</svg>", "https://cdn/2": "<svg>right</svg>"}


def passthrough_rewriter():
    rewriter = MagicMock()
    rewriter.rewrite.side_effect = lambda raw: raw.replace("<svg>", "<svg rewritten>")
    return rewriter


def make_fetcher(client, **kwargs):
    return IconFetcher(client, "FILE123", rewriter=passthrough_rewriter(), show_progress=False, **kwargs)


# ─── 正常流程 ─────────────────────────────────────────────────────────────────

class TestFetchIcons:
    def test_single_batched_render_call(self, fake_client_factory):
        client = fake_client_factory(images=IMAGES, svgs=SVGS)
        make_fetcher(client).fetch_icons(RECORDS)
        assert client.image_calls == [("FILE123", ["1:1", "1:2"], "svg")]

    def test_names_and_markup(self, fake_client_factory):
        client = fake_client_factory(images=IMAGES, svgs=SVGS)
        icons = make_fetcher(client).fetch_icons(RECORDS)
        assert [(i.id, i.file_stem, i.component_name) for i in icons] == [
            ("1:1", "arrow_left", "IconArrowLeft"),
            ("1:2", "arrow_right", "IconArrowRight"),
        ]
        assert icons[0].markup == "<svg rewritten>left</svg>"

    def test_output_order_matches_input_order(self, fake_client_factory):
        records = [IconRecord(f"1:{i}", f"icon_{i}") for i in range(6)]
        images = {r.id: f"https://cdn/{r.id}" for r in records}
        svgs = {url: "<svg></svg>" for url in images.values()}
        client = fake_client_factory(images=images, svgs=svgs)
        real_download = client.download_svg

        def slow_first(url):
            # 讓前面的 icon 最晚完成
            time.sleep(0.01 * (6 - int(url.rsplit(":", 1)[1])))
            return real_download(url)

        client.download_svg = slow_first
        icons = make_fetcher(client, max_workers=6).fetch_icons(records)
        assert [i.id for i in icons] == [r.id for r in records]

    def test_worker_pool_is_bounded(self, fake_client_factory):
        records = [IconRecord(f"1:{i}", f"icon_{i}") for i in range(8)]
        images = {r.id: f"https://cdn/{r.id}" for r in records}
        client = fake_client_factory(images=images)
        lock = threading.Lock()
        active = {"now": 0, "max": 0}

        def tracked(url):
            with lock:
                active["now"] += 1
                active["max"] = max(active["max"], active["now"])
            time.sleep(0.01)
            with lock:
                active["now"] -= 1
            return "<svg></svg>"

        client.download_svg = tracked
        icons = make_fetcher(client, max_workers=2).fetch_icons(records)
        assert len(icons) == 8
        assert active["max"] <= 2

    def test_empty_records_skip_network(self, fake_client_factory):
        client = fake_client_factory()
        assert make_fetcher(client).fetch_icons([]) == []
        assert client.image_calls == []


# ─── 單一 icon 失敗 ───────────────────────────────────────────────────────────

class TestPerIconFailures:
    def test_missing_url_is_skipped(self, fake_client_factory, capsys):
        client = fake_client_factory(images={"1:1": "https://cdn/1"}, svgs=SVGS)
        fetcher = make_fetcher(client)
        icons = fetcher.fetch_icons(RECORDS)
        assert [i.id for i in icons] == ["1:1"]
        assert len(fetcher.failures) == 1
        assert isinstance(fetcher.failures[0], IconDownloadError)
        assert fetcher.failures[0].icon_id == "1:2"
        assert "1:2" in capsys.readouterr().out

    def test_null_url_is_skipped(self, fake_client_factory):
        client = fake_client_factory(images={"1:1": "https://cdn/1", "1:2": None}, svgs=SVGS)
        fetcher = make_fetcher(client)
        assert [i.id for i in fetcher.fetch_icons(RECORDS)] == ["1:1"]

    def test_download_error_is_skipped(self, fake_client_factory):
        svgs = dict(SVGS, **{"https://cdn/1": requests.ConnectionError("reset")})
        client = fake_client_factory(images=IMAGES, svgs=svgs)
        fetcher = make_fetcher(client)
        icons = fetcher.fetch_icons(RECORDS)
        assert [i.id for i in icons] == ["1:2"]
        assert fetcher.failures[0].icon_id == "1:1"
        assert "reset" in fetcher.failures[0].reason

    def test_rewrite_error_is_skipped(self, fake_client_factory):
        client = fake_client_factory(images=IMAGES, svgs=SVGS)
        fetcher = make_fetcher(client)

        def rewrite(raw):
            if "left" in raw:
                raise ValueError("bad svg")
            return raw

        fetcher.rewriter.rewrite.side_effect = rewrite
        icons = fetcher.fetch_icons(RECORDS)
        assert [i.id for i in icons] == ["1:2"]
        assert "bad svg" in fetcher.failures[0].reason

    def test_invalid_name_is_skipped(self, fake_client_factory):
        records = [IconRecord("1:1", "Arrows/ "), RECORDS[1]]
        client = fake_client_factory(images=IMAGES, svgs=SVGS)
        fetcher = make_fetcher(client)
        assert [i.id for i in fetcher.fetch_icons(records)] == ["1:2"]
        assert fetcher.failures[0].icon_id == "1:1"


# ─── 批次呼叫失敗 ─────────────────────────────────────────────────────────────

class TestRenderResolution:
    def test_transport_error_aborts(self, fake_client_factory):
        client = fake_client_factory(image_error=requests.ConnectionError("offline"))
        with pytest.raises(RenderResolutionError, match="offline"):
            make_fetcher(client).fetch_icons(RECORDS)
        assert client.downloads == []

    def test_err_field_aborts(self):
        client = MagicMock()
        client.get_images.return_value = {"err": "Invalid token", "images": None}
        with pytest.raises(RenderResolutionError, match="Invalid token"):
            make_fetcher(client).fetch_icons(RECORDS)

    def test_missing_images_mapping_aborts(self):
        client = MagicMock()
        client.get_images.return_value = {"status": 400}
        with pytest.raises(RenderResolutionError):
            make_fetcher(client).fetch_icons(RECORDS)
