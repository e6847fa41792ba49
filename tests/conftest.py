"""
共用測試 stub：假的 Figma client 與文件資料，全部不需要網路。
"""
import pytest


CIRCLE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none">'
    '<circle cx="12" cy="12" r="10" fill="#FF0000"/>'
    "</svg>"
)


def make_document(*icons, section_name="Icons / Set A", extra_sections=()):
    """document → 區段 → 單一容器 → icon 元件."""
    components = [
        {"id": icon_id, "name": name, "type": "COMPONENT", "children": []}
        for icon_id, name in icons
    ]
    sections = list(extra_sections) + [
        {
            "id": "0:1",
            "name": section_name,
            "type": "CANVAS",
            "children": [
                {"id": "0:2", "name": "Set A", "type": "FRAME", "children": components},
            ],
        }
    ]
    return {"document": {"id": "0:0", "name": "Document", "type": "DOCUMENT", "children": sections}}


class FakeFigmaClient:
    """模擬 FigmaAPIClient 介面，記錄每一次呼叫。"""

    def __init__(self, document=None, images=None, svgs=None, image_error=None, file_error=None):
        self.document = document or {}
        self.images = images or {}
        self.svgs = svgs or {}
        self.image_error = image_error
        self.file_error = file_error
        self.image_calls = []
        self.downloads = []

    def get_file(self, file_key):
        if self.file_error:
            raise self.file_error
        return self.document

    def get_images(self, file_key, node_ids, format="svg"):
        self.image_calls.append((file_key, list(node_ids), format))
        if self.image_error:
            raise self.image_error
        return {"err": None, "images": dict(self.images)}

    def download_svg(self, url):
        self.downloads.append(url)
        svg = self.svgs[url]
        if isinstance(svg, Exception):
            raise svg
        return svg


@pytest.fixture
def fake_client_factory():
    return FakeFigmaClient
