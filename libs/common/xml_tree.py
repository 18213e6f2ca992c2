from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from xml.dom import Node, minidom

from .results import ErrorKind, Result
from .xml_utils import XMLParseError, parse_xml_document

logger = logging.getLogger(__name__)

ROOT_ID = "root"
ELEMENT_KIND = "element"

_TEXT_NODE_TYPES = (Node.TEXT_NODE, Node.CDATA_SECTION_NODE)


class DuplicateAttributeError(ValueError):
    """Raised when two attributes of one element share a local name."""

    def __init__(self, element: str, attribute: str) -> None:
        super().__init__(f"Element '{element}' has more than one attribute with local name '{attribute}'")
        self.element = element
        self.attribute = attribute


@dataclass(eq=False)
class TreeNode:
    """Element node as rendered by the editor's tree view."""

    id: str
    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[TreeNode] = field(default_factory=list)
    text_content: str = ""
    kind: str = ELEMENT_KIND
    type: int = Node.ELEMENT_NODE
    value: str = ""


def _local_name(node: Node) -> str:
    return node.localName or node.nodeName


def _first_text(element: minidom.Element) -> str:
    # Only the first text run counts; whitespace-only runs are layout, not content
    for child in element.childNodes:
        if child.nodeType in _TEXT_NODE_TYPES and child.data.strip():
            return child.data.strip()
    return ""


def _attributes(element: minidom.Element) -> dict[str, str]:
    attributes: dict[str, str] = {}
    for attr in element.attributes.values():
        name = _local_name(attr)
        if name in attributes:
            raise DuplicateAttributeError(_local_name(element), name)
        attributes[name] = attr.value
    return attributes


def _make_node(element: minidom.Element, path: str) -> TreeNode:
    return TreeNode(
        id=path,
        name=_local_name(element),
        attributes=_attributes(element),
        text_content=_first_text(element),
    )


def build_tree(element: minidom.Element, path: str = ROOT_ID) -> TreeNode:
    """Convert ``element`` and its element descendants into a :class:`TreeNode`.

    The i-th child element of the node with id ``P`` gets the id ``P.i``.
    Raises :class:`DuplicateAttributeError` when attribute local names clash.
    """
    root = _make_node(element, path)
    pending = [(element, root)]
    while pending:
        dom_element, node = pending.pop()
        child_elements = (child for child in dom_element.childNodes if child.nodeType == Node.ELEMENT_NODE)
        for index, child in enumerate(child_elements):
            child_node = _make_node(child, f"{node.id}.{index}")
            node.children.append(child_node)
            pending.append((child, child_node))
    return root


def _node_fields(node: TreeNode) -> str:
    # Every field except children, as the opening of a JSON object
    fields = {
        "id": node.id,
        "name": node.name,
        "kind": node.kind,
        "type": node.type,
        "value": node.value,
        "attributes": node.attributes,
        "textContent": node.text_content,
    }
    return json.dumps(fields, separators=(",", ":"))[:-1]


def tree_to_json(root: TreeNode) -> str:
    """Serialize ``root`` to JSON without recursing, so any depth is accepted."""
    parts: list[str] = []
    pending: list[TreeNode | str] = [root]
    while pending:
        item = pending.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        parts.append(_node_fields(item))
        parts.append(',"children":[')
        pending.append("]}")
        for index in range(len(item.children) - 1, -1, -1):
            pending.append(item.children[index])
            if index:
                pending.append(",")
    return "".join(parts)


def parse_xml_to_tree(xml_text: str) -> Result[TreeNode]:
    try:
        document = parse_xml_document(xml_text)
    except XMLParseError as exc:
        logger.info("XML tree conversion failed: %s", exc.message)
        return Result.failure(ErrorKind.PARSE, exc.message, line=exc.line, column=exc.column)
    try:
        return Result.success(build_tree(document.documentElement))
    except DuplicateAttributeError as exc:
        logger.info("XML tree conversion failed: %s", exc)
        return Result.failure(ErrorKind.VALIDATION, str(exc))


__all__ = [
    "DuplicateAttributeError",
    "ELEMENT_KIND",
    "ROOT_ID",
    "TreeNode",
    "build_tree",
    "parse_xml_to_tree",
    "tree_to_json",
]
