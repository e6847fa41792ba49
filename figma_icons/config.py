"""設定檔載入、基本驗證與執行設定解析."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError
from .naming_engine import DEFAULT_PREFIX

DEFAULT_CONFIG_PATH = "figma-icons.config.json"

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"figma", "icons", "optimizer"}

# 各區塊已知欄位（用於拼字提示）；optimizer 直接對應 scour 選項，不檢查
_KNOWN_SECTION_KEYS = {
    "figma": {"personalAccessToken", "fileKey"},
    "icons": {"marker", "outputDir", "extension", "indexFile", "prefix", "workers"},
}


@dataclass
class IconSettings:
    """單次執行的完整設定，明確傳遞給 pipeline 各階段."""
    token: str
    file_key: str
    marker: str = "Icons"
    output_dir: str = "src"
    extension: str = ".tsx"
    index_file: str = "index.ts"
    prefix: str = DEFAULT_PREFIX
    workers: int = 8
    optimizer: dict = field(default_factory=dict)
    show_progress: bool = True


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"[{section}] 應為 JSON 物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    icons = cfg.get("icons", {})
    if not isinstance(icons, dict):
        return

    workers = icons.get("workers")
    if workers is not None and (not isinstance(workers, int) or workers < 1):
        _warn(f"icons.workers 應為正整數，目前是 {workers!r}")

    extension = icons.get("extension")
    if extension and not str(extension).startswith("."):
        _warn(f"icons.extension '{extension}' 應以 '.' 開頭（例如 .tsx）")

    optimizer = cfg.get("optimizer")
    if optimizer is not None and not isinstance(optimizer, dict):
        _warn(f"optimizer 應為 JSON 物件，目前是 {type(optimizer).__name__}")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def load_environment(env_file: str = ".env") -> bool:
    """讀取 .env（不覆寫已存在的環境變數），回傳是否有載入檔案."""
    if not Path(env_file).exists():
        return False
    return load_dotenv(dotenv_path=env_file, override=False)


def _section(cfg: dict, name: str) -> dict:
    value = cfg.get(name, {})
    return value if isinstance(value, dict) else {}


def resolve_settings(
    config: dict,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> IconSettings:
    """
    組合最終設定。優先順序：CLI 參數 > config 檔 > 環境變數（TOKEN / FILE）> 預設值。

    缺少 token 或 file key 時拋出 ConfigurationError，此時尚未發出任何網路請求。
    """
    env = os.environ if environ is None else environ
    figma_cfg = _section(config, "figma")
    icons_cfg = _section(config, "icons")
    overrides = {k: v for k, v in overrides.items() if v is not None}

    token = overrides.pop("token", None) or figma_cfg.get("personalAccessToken") or env.get("TOKEN")
    file_key = overrides.pop("file_key", None) or figma_cfg.get("fileKey") or env.get("FILE")

    if not token:
        raise ConfigurationError(
            "The Figma API token is not defined. Set the TOKEN environment variable "
            "(or figma.personalAccessToken in the config file) to run the script."
        )
    if not file_key:
        raise ConfigurationError(
            "The Figma file key is not defined. Set the FILE environment variable, "
            "pass --file-key, or set figma.fileKey in the config file."
        )

    values: dict[str, Any] = {}
    for attr, key in (
        ("marker", "marker"),
        ("output_dir", "outputDir"),
        ("extension", "extension"),
        ("index_file", "indexFile"),
        ("prefix", "prefix"),
        ("workers", "workers"),
    ):
        if key in icons_cfg:
            values[attr] = icons_cfg[key]
    optimizer = config.get("optimizer")
    if isinstance(optimizer, dict):
        values["optimizer"] = dict(optimizer)
    values.update(overrides)

    settings = IconSettings(token=token, file_key=file_key, **values)
    if not isinstance(settings.workers, int) or settings.workers < 1:
        raise ConfigurationError(f"workers must be a positive integer, got {settings.workers!r}")
    return settings
