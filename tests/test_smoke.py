"""
Smoke tests：驗證套件可匯入、版本與公開 API 存在。
"""
import pytest


def test_import_package():
    """套件可正常匯入"""
    import figma_icons
    assert figma_icons.__version__ == "0.1.0"


def test_public_api():
    """公開 API 可從 figma_icons 取得"""
    from figma_icons import (
        __version__,
        normalize_stem,
        to_component_identifier,
        extract_icon_nodes,
        locate_icon_root,
        MarkupRewriter,
        IconFetcher,
        OutputWriter,
        render_component,
        generate_icons,
        load_config,
        resolve_settings,
    )
    assert callable(normalize_stem)
    assert callable(to_component_identifier)
    assert callable(extract_icon_nodes)
    assert callable(locate_icon_root)
    assert callable(render_component)
    assert callable(generate_icons)
    assert callable(load_config)
    assert callable(resolve_settings)


def test_error_taxonomy():
    """所有例外共用同一個基底，方便 CLI 統一攔截"""
    from figma_icons import errors

    for name in (
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
    ):
        assert issubclass(getattr(errors, name), errors.FigmaIconsError)
