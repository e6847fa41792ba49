"""
figma-icons — Figma icon 元件 → React icon 元件庫

從 Figma 文件找出 icon 元件、取得 SVG、改寫成可帶 props 的 React 元件並產生 index。
"""

__version__ = "0.1.0"

from .errors import (
    FigmaIconsError,
    ConfigurationError,
    DocumentFetchError,
    DocumentStructureError,
    RenderResolutionError,
    IconDownloadError,
    WriteError,
    InvalidNameError,
    MarkupError,
    AttributeCollisionError,
    OutputDirectoryError,
)
from .naming_engine import normalize_stem, to_component_identifier, derive_names
from .tree_extractor import (
    DocumentNode,
    NodeKind,
    IconRecord,
    parse_document,
    locate_icon_root,
    marker_predicate,
    extract_icon_nodes,
)
from .markup_rewriter import MarkupRewriter
from .figma_reader import FigmaAPIClient, fetch_document
from .icon_fetcher import IconFetcher, RenderedIcon
from .generator import EmittedIcon, OutputWriter, render_component, render_index, reset_output_dir
from .config import IconSettings, load_config, resolve_settings, validate_config
from .pipeline import GenerationReport, generate_icons

__all__ = [
    "__version__",
    "FigmaIconsError",
    "ConfigurationError",
    "DocumentFetchError",
    "DocumentStructureError",
    "RenderResolutionError",
    "IconDownloadError",
    "WriteError",
    "InvalidNameError",
    "MarkupError",
    "AttributeCollisionError",
    "OutputDirectoryError",
    "normalize_stem",
    "to_component_identifier",
    "derive_names",
    "DocumentNode",
    "NodeKind",
    "IconRecord",
    "parse_document",
    "locate_icon_root",
    "marker_predicate",
    "extract_icon_nodes",
    "MarkupRewriter",
    "FigmaAPIClient",
    "fetch_document",
    "IconFetcher",
    "RenderedIcon",
    "EmittedIcon",
    "OutputWriter",
    "render_component",
    "render_index",
    "reset_output_dir",
    "IconSettings",
    "load_config",
    "resolve_settings",
    "validate_config",
    "GenerationReport",
    "generate_icons",
]
