from __future__ import annotations

import logging
from io import StringIO
from xml.dom import Node, minidom
from xml.parsers.expat import ExpatError
from xml.sax.saxutils import escape

from .results import ErrorKind, Result

logger = logging.getLogger(__name__)

INDENT = "  "

_ATTRIBUTE_ENTITIES = {'"': "&quot;"}


class XMLParseError(Exception):
    """Raised when an XML payload is not well-formed."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column


def parse_xml_document(xml_text: str) -> minidom.Document:
    """Parse ``xml_text`` into a namespace-aware DOM document.

    Parsing is strict: any well-formedness problem raises
    :class:`XMLParseError` and no partial document is returned.
    """
    try:
        return minidom.parseString(xml_text)
    except ExpatError as exc:
        # expat columns are 0-based
        column = exc.offset + 1 if exc.offset is not None else None
        raise XMLParseError(str(exc), line=exc.lineno, column=column) from exc
    except ValueError as exc:
        raise XMLParseError(str(exc)) from exc


def _parse_failure(exc: XMLParseError) -> Result:
    return Result.failure(ErrorKind.PARSE, exc.message, line=exc.line, column=exc.column)


def validate_xml(xml_text: str) -> Result[None]:
    """Check that ``xml_text`` is well-formed XML."""
    try:
        parse_xml_document(xml_text)
    except XMLParseError as exc:
        logger.info("XML validation failed: %s", exc.message)
        return _parse_failure(exc)
    return Result.success(None)


def _declaration(document: minidom.Document) -> str | None:
    # expat only reports a version when the input carried an XML declaration
    if not document.version:
        return None
    parts = [f'version="{document.version}"']
    if document.encoding:
        parts.append(f'encoding="{document.encoding}"')
    if document.standalone is not None:
        parts.append(f'standalone="{"yes" if document.standalone else "no"}"')
    return f"<?xml {' '.join(parts)}?>"


def _is_significant(node: Node) -> bool:
    if node.nodeType == Node.TEXT_NODE:
        return bool(node.data.strip())
    return True


def _holds_text(element: minidom.Element) -> bool:
    return any(
        child.nodeType == Node.CDATA_SECTION_NODE
        or (child.nodeType == Node.TEXT_NODE and child.data.strip())
        for child in element.childNodes
    )


def _write_start_tag(writer: StringIO, element: minidom.Element) -> None:
    writer.write(f"<{element.tagName}")
    for name, value in element.attributes.items():
        quoted = escape(value, _ATTRIBUTE_ENTITIES)
        writer.write(f' {name}="{quoted}"')


def _write_element(writer: StringIO, root: minidom.Element) -> None:
    """Write ``root`` one element per line, indented by depth.

    An element holding text is written on a single line with its content
    exactly as parsed. Whitespace-only text between elements is layout and is
    dropped. Uses an explicit stack so nesting depth is unbounded.
    """
    # Items are (node, indent, inline) or a literal string to emit
    stack: list[tuple[Node, str, bool] | str] = [(root, "", False)]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            writer.write(item)
            continue
        node, indent, inline = item
        newl = "" if inline else "\n"
        if node.nodeType != Node.ELEMENT_NODE:
            node.writexml(writer, indent, "", newl)
            continue

        writer.write(indent)
        _write_start_tag(writer, node)
        inline_children = inline or _holds_text(node)
        if inline_children:
            children = list(node.childNodes)
        else:
            children = [child for child in node.childNodes if _is_significant(child)]
        if not children:
            writer.write(f"/>{newl}")
            continue

        writer.write(">" if inline_children else ">\n")
        closing_indent = "" if inline_children else indent
        stack.append(f"{closing_indent}</{node.tagName}>{newl}")
        child_indent = "" if inline_children else indent + INDENT
        for child in reversed(children):
            stack.append((child, child_indent, inline_children))


def serialize_pretty(document: minidom.Document) -> str:
    """Serialize ``document`` with two-space indentation."""
    buffer = StringIO()
    declaration = _declaration(document)
    if declaration:
        buffer.write(declaration + "\n")
    for node in document.childNodes:
        if node.nodeType == Node.ELEMENT_NODE:
            _write_element(buffer, node)
        else:
            node.writexml(buffer, "", "", "\n")
    return buffer.getvalue().rstrip("\n")


def format_xml(xml_text: str) -> Result[str]:
    """Re-serialize ``xml_text`` in the canonical indented layout."""
    try:
        document = parse_xml_document(xml_text)
    except XMLParseError as exc:
        logger.info("XML formatting failed: %s", exc.message)
        return _parse_failure(exc)
    return Result.success(serialize_pretty(document))


__all__ = [
    "XMLParseError",
    "format_xml",
    "parse_xml_document",
    "serialize_pretty",
    "validate_xml",
]
