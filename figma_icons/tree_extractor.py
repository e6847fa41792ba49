"""
Figma 文件樹走訪：找出 icon 元件節點

Figma REST API 回傳的是未定型的 JSON 樹；這裡先轉成 DocumentNode，
再以遞迴方式收集 COMPONENT 節點。未知的節點類型不會拋例外，
有子節點就當作容器，沒有就略過。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from .errors import DocumentStructureError, InvalidNameError
from .naming_engine import DEFAULT_PREFIX, derive_names


class NodeKind(str, Enum):
    DOCUMENT = "DOCUMENT"
    CANVAS = "CANVAS"
    SECTION = "SECTION"
    FRAME = "FRAME"
    GROUP = "GROUP"
    COMPONENT_SET = "COMPONENT_SET"
    COMPONENT = "COMPONENT"
    INSTANCE = "INSTANCE"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_type(cls, raw_type: Optional[str]) -> "NodeKind":
        try:
            return cls(raw_type)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class DocumentNode:
    kind: NodeKind
    name: str = ""
    id: str = ""
    raw_type: str = ""
    children: List["DocumentNode"] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "DocumentNode":
        raw_type = data.get("type") or ""
        children = data.get("children") or []
        return cls(
            kind=NodeKind.from_type(raw_type),
            name=data.get("name") or "",
            id=data.get("id") or "",
            raw_type=raw_type,
            children=[cls.from_dict(c) for c in children if isinstance(c, dict)],
        )

    @property
    def is_icon_component(self) -> bool:
        return self.kind is NodeKind.COMPONENT


@dataclass(frozen=True)
class IconRecord:
    id: str
    name: str


def parse_document(payload: Optional[dict]) -> DocumentNode:
    """
    將 GET /files/{key} 的回應（或其 document 節點）轉成 DocumentNode。

    讀檔失敗時上游會回傳空 dict，此處視為結構錯誤。
    """
    if not payload:
        raise DocumentStructureError("The Figma document is empty (was the file fetched?)")
    document = payload.get("document", payload)
    if not isinstance(document, dict) or not document.get("children"):
        raise DocumentStructureError("The Figma document has no top-level sections")
    return DocumentNode.from_dict(document)


def marker_predicate(marker: str) -> Callable[[DocumentNode], bool]:
    """預設的區段選擇條件：名稱包含 marker（區分大小寫）."""
    return lambda node: marker in node.name


def locate_icon_root(
    document: DocumentNode,
    predicate: Callable[[DocumentNode], bool],
) -> DocumentNode:
    """在符合條件的頂層區段中取最後一個，回傳其最後一個子容器."""
    sections = [child for child in document.children if predicate(child)]
    if not sections:
        names = ", ".join(repr(c.name) for c in document.children) or "none"
        raise DocumentStructureError(
            f"No top-level section matches the icon marker (sections: {names})"
        )
    section = sections[-1]
    if not section.children:
        raise DocumentStructureError(f"Icon section {section.name!r} has no child containers")
    return section.children[-1]


def extract_icon_nodes(root: DocumentNode) -> List[IconRecord]:
    """遞迴收集 COMPONENT 節點，保持文件順序."""
    if root.is_icon_component:
        return [IconRecord(id=root.id, name=root.name)]
    records: List[IconRecord] = []
    for child in root.children:
        records.extend(extract_icon_nodes(child))
    return records


def preview_icon_tree(records: List[IconRecord], prefix: str = DEFAULT_PREFIX) -> str:
    """除錯用：列出每個 icon 的 id、原始名稱與衍生的 stem / 識別字."""
    lines = []
    seen: set[str] = set()
    components: set[str] = set()
    for record in records:
        try:
            stem, component = derive_names(record.name, prefix)
        except InvalidNameError as e:
            lines.append(f"├─ {record.name!r}  [{record.id}]  ⚠️  {e}")
            continue
        label = f"├─ {record.name}  [{record.id}]  → {stem}  <{component}>"
        if stem in seen:
            label += "  (duplicate, skipped)"
        elif component in components:
            label += "  (component name taken, skipped)"
        else:
            components.add(component)
        seen.add(stem)
        lines.append(label)
    return "\n".join(lines)
