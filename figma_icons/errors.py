"""figma-icons 例外分類.

單一 icon 的錯誤（下載、寫檔）在各階段內被攔截並回報；
文件或批次層級的錯誤則往上拋，由 CLI 轉成非零結束碼。
"""

from typing import Optional


class FigmaIconsError(Exception):
    """所有 figma-icons 例外的基底."""


class ConfigurationError(FigmaIconsError):
    """缺少 TOKEN / FILE 等必要設定，任何網路呼叫前就中止."""


class DocumentFetchError(FigmaIconsError):
    """讀取 Figma 檔案失敗（網路、授權、JSON 解析）."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DocumentStructureError(FigmaIconsError):
    """找不到 icon 區段，或區段內沒有任何子節點."""


class RenderResolutionError(FigmaIconsError):
    """批次 image-render 呼叫整體失敗."""


class IconDownloadError(FigmaIconsError):
    """單一 icon 的下載或 markup 處理失敗；該 icon 被略過."""

    def __init__(self, icon_id: str, icon_name: str, reason: str):
        super().__init__(f"{icon_name} ({icon_id}): {reason}")
        self.icon_id = icon_id
        self.icon_name = icon_name
        self.reason = reason


class WriteError(FigmaIconsError):
    """單一 icon 檔案寫入失敗；該 icon 不會出現在 index."""

    def __init__(self, file_stem: str, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.file_stem = file_stem
        self.path = path
        self.reason = reason


class InvalidNameError(FigmaIconsError, ValueError):
    """節點名稱無法轉成 stem 或識別字."""


class MarkupError(FigmaIconsError):
    """SVG markup 無法解析或改寫."""


class AttributeCollisionError(MarkupError):
    """屬性改名後與同一元素上既有屬性撞名."""

    def __init__(self, tag: str, attribute: str, renamed: str):
        super().__init__(
            f"<{tag}> attribute '{attribute}' would be renamed to '{renamed}', "
            "which already exists on the element"
        )
        self.tag = tag
        self.attribute = attribute
        self.renamed = renamed


class OutputDirectoryError(FigmaIconsError):
    """輸出目錄無法建立或清空，或 index 無法寫入."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
