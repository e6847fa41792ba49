"""
Figma REST API 讀取

讀取 Figma 檔案結構，並透過 image-render 端點取得各節點的 SVG 下載網址。
"""

from typing import Optional

import requests

from .errors import DocumentFetchError


class FigmaAPIClient:
    """Figma REST API 唯讀封裝."""

    BASE_URL = "https://api.figma.com/v1"

    def __init__(self, token: str):
        self.token = token
        self.session = requests.Session()
        self.session.headers.update({
            "X-Figma-Token": token,
            "Content-Type": "application/json",
        })
        # render 後的 SVG 放在外部儲存空間，不帶 Figma token
        self.download_session = requests.Session()

    def get_file(self, file_key: str) -> dict:
        url = f"{self.BASE_URL}/files/{file_key}"
        resp = self.session.get(url)
        resp.raise_for_status()
        return resp.json()

    def get_images(self, file_key: str, node_ids: list, format: str = "svg") -> dict:
        url = f"{self.BASE_URL}/images/{file_key}"
        params = {"ids": ",".join(node_ids), "format": format}
        resp = self.session.get(url, params=params)
        resp.raise_for_status()
        return resp.json()

    def download_svg(self, url: str) -> str:
        resp = self.download_session.get(url)
        resp.raise_for_status()
        return resp.text


def describe_fetch_error(error: Exception, file_key: str) -> DocumentFetchError:
    """把 requests / JSON 例外轉成帶友善訊息的 DocumentFetchError."""
    status: Optional[int] = getattr(getattr(error, "response", None), "status_code", None)
    if status == 403:
        message = "Figma API 403：Token 無效或已過期，請重新產生 TOKEN。"
    elif status == 404:
        message = f"Figma API 404：找不到檔案 '{file_key}'，請確認 file key 是否正確。"
    else:
        message = f"Figma API 錯誤：{error}"
    return DocumentFetchError(message, status_code=status)


def fetch_document(client: FigmaAPIClient, file_key: str) -> dict:
    """讀取 Figma 檔案；失敗時印出錯誤並回傳空 dict，由後續解析步驟判定為結構錯誤."""
    try:
        return client.get_file(file_key)
    except (requests.RequestException, ValueError) as e:
        error = describe_fetch_error(e, file_key)
        print(f"   ❌ {error}")
        return {}
