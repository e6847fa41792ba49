"""
SVG markup 改寫：最佳化、屬性正規化、顏色泛化

處理順序固定：
  1. scour 最佳化（移除 metadata、合併群組、縮短 id）
  2. 屬性改名：kebab-case → camelCase、class → className、xlink:href → xlinkHref
  3. stroke / fill 顏色字面值 → currentcolor
  4. 在根 <svg> 注入 props 佔位屬性，交給元件模板展開
"""

import re
from typing import Optional
from xml.parsers.expat import ExpatError

from lxml import etree
from scour import scour

from .errors import AttributeCollisionError, MarkupError

PROPS_ATTRIBUTE = "props"
PROPS_PLACEHOLDER = 'props="..."'
CURRENT_COLOR = "currentcolor"

COLOR_LITERAL_RE = re.compile(
    r"#[0-9A-Fa-f]{6}"
    r"|#[0-9A-Fa-f]{3}"
    r"|rgb\([0-9., ]+\)"
    r"|rgba\([0-9., ]+\)"
    r"|hsl\([0-9., %]+\)"
)

_COLOR_ATTRIBUTES = ("stroke", "fill")

_XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

# 專案層級的 scour 預設值；config 的 optimizer 區塊可覆寫
DEFAULT_OPTIMIZER_OPTIONS = {
    "strip_xml_prolog": True,
    "remove_metadata": True,
    "remove_descriptive_elements": True,
    "strip_comments": True,
    "strip_ids": True,
    "shorten_ids": True,
    "strip_xml_space_attribute": True,
    "indent_type": "none",
    "newlines": False,
    "quiet": True,
}


def camelize(name: str) -> str:
    """stroke-width → strokeWidth."""
    head, *rest = name.split("-")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def is_color_literal(value: Optional[str]) -> bool:
    return bool(value) and COLOR_LITERAL_RE.fullmatch(value.strip()) is not None


class MarkupRewriter:
    """將 Figma render 出的 SVG 轉成可嵌入 React 元件的 markup."""

    def __init__(self, optimizer_options: Optional[dict] = None):
        options = dict(DEFAULT_OPTIMIZER_OPTIONS)
        options.update(optimizer_options or {})
        self.optimizer_options = options

    def rewrite(self, raw_markup: str) -> str:
        optimized = self.optimize(raw_markup)
        root = self._parse(optimized)
        self.normalize_attributes(root)
        self.genericize_colors(root)
        self.inject_props_placeholder(root)
        return etree.tostring(root, encoding="unicode")

    def optimize(self, raw_markup: str) -> str:
        options = scour.sanitizeOptions()
        for key, value in self.optimizer_options.items():
            setattr(options, key, value)
        try:
            return scour.scourString(raw_markup, options)
        except ExpatError as e:
            raise MarkupError(f"SVG optimizer could not parse markup: {e}") from e

    def _parse(self, markup: str) -> etree._Element:
        parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)
        try:
            root = etree.fromstring(markup.encode("utf-8"), parser)
        except etree.XMLSyntaxError as e:
            raise MarkupError(f"Invalid SVG markup: {e}") from e
        if etree.QName(root).localname != "svg":
            raise MarkupError(f"Root element is <{etree.QName(root).localname}>, expected <svg>")
        return root

    def normalize_attributes(self, root: etree._Element) -> None:
        for el in root.iter():
            if not isinstance(el.tag, str):
                continue
            renamed: dict[str, str] = {}
            for key, value in el.attrib.items():
                new_key = self._attribute_name(el, key)
                if new_key in renamed:
                    raise AttributeCollisionError(etree.QName(el).localname, key, new_key)
                renamed[new_key] = value
            el.attrib.clear()
            for key, value in renamed.items():
                el.set(key, value)
        # xmlns:xlink 等宣告在屬性改名後已無人使用
        etree.cleanup_namespaces(root)

    def genericize_colors(self, root: etree._Element) -> None:
        for el in root.iter():
            if not isinstance(el.tag, str):
                continue
            for name in _COLOR_ATTRIBUTES:
                if is_color_literal(el.get(name)):
                    el.set(name, CURRENT_COLOR)

    def inject_props_placeholder(self, root: etree._Element) -> None:
        # 永遠放在最後一個屬性，模板展開後 {...props} 才能覆寫預設值
        root.attrib.pop(PROPS_ATTRIBUTE, None)
        root.set(PROPS_ATTRIBUTE, "...")

    def _attribute_name(self, el: etree._Element, key: str) -> str:
        if key.startswith("{"):
            qname = etree.QName(key)
            prefix = self._namespace_prefix(el, qname.namespace)
            local = camelize(qname.localname)
            if prefix:
                return prefix + local[:1].upper() + local[1:]
            return local
        if key == "class":
            return "className"
        if "-" in key:
            return camelize(key)
        return key

    @staticmethod
    def _namespace_prefix(el: etree._Element, namespace: str) -> Optional[str]:
        if namespace == _XML_NAMESPACE:
            return "xml"
        for prefix, uri in el.nsmap.items():
            if prefix and uri == namespace:
                return prefix
        return None
