import pytest

from libs.common import ErrorKind
from libs.common.xml_utils import XMLParseError, format_xml, parse_xml_document, validate_xml


WELL_FORMED = [
    "<root/>",
    "<root><child>value</child></root>",
    '<?xml version="1.0" encoding="UTF-8"?><root a="1"><!-- note --><b/></root>',
    '<p:root xmlns:p="urn:example"><p:item p:key="v">text</p:item></p:root>',
    "<root><![CDATA[<not markup>]]></root>",
    "<a>first<b/>second</a>",
]

MALFORMED = [
    "<a><b></a>",
    "<a>",
    "",
    "<a/><b/>",
    "<a attr=unquoted/>",
    "plain text",
    '<?xml version="1.0"?><?xml version="1.0"?><a/>',
]


@pytest.mark.parametrize("xml_text", WELL_FORMED)
def test_well_formed_documents_validate_and_reformat(xml_text):
    assert validate_xml(xml_text).ok

    formatted = format_xml(xml_text)
    assert formatted.ok
    assert validate_xml(formatted.value).ok


@pytest.mark.parametrize("xml_text", MALFORMED)
def test_malformed_documents_report_parse_errors(xml_text):
    validation = validate_xml(xml_text)
    assert not validation.ok
    assert validation.error.kind is ErrorKind.PARSE
    assert validation.error.message

    formatted = format_xml(xml_text)
    assert not formatted.ok
    assert formatted.error == validation.error


def test_parse_error_carries_position():
    with pytest.raises(XMLParseError) as excinfo:
        parse_xml_document("<a>\n  <b>\n</a>")

    assert "mismatched tag" in excinfo.value.message
    assert excinfo.value.line == 3
    assert excinfo.value.column == 3


def test_empty_input_is_not_a_document():
    result = validate_xml("")
    assert result.error.message.startswith("no element found")


def test_format_indents_nested_elements():
    result = format_xml("<root><child>value</child><empty></empty></root>")

    assert result.value == "<root>\n  <child>value</child>\n  <empty/>\n</root>"


def test_format_drops_existing_layout_whitespace():
    messy = "<root>\n\n      <a>\n   <b x='1'/></a>   </root>"

    assert format_xml(messy).value == '<root>\n  <a>\n    <b x="1"/>\n  </a>\n</root>'


def test_format_is_stable():
    once = format_xml("<r><a><b>t</b></a><c/></r>").value

    assert format_xml(once).value == once


def test_format_keeps_declaration_when_present():
    result = format_xml('<?xml version="1.0" encoding="UTF-8" standalone="yes"?><root/>')

    assert result.value == '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n<root/>'


def test_format_omits_declaration_when_absent():
    assert format_xml("<root/>").value == "<root/>"


def test_format_preserves_comments_and_prefixes():
    xml_text = '<!-- header --><p:root xmlns:p="urn:example"><p:item/></p:root>'

    result = format_xml(xml_text).value

    assert result.startswith("<!-- header -->\n")
    assert '<p:root xmlns:p="urn:example">' in result
    assert "  <p:item/>" in result


def test_format_escapes_text():
    result = format_xml("<a>1 &lt; 2 &amp; 3</a>").value

    assert result == "<a>1 &lt; 2 &amp; 3</a>"


def test_format_keeps_mixed_content_inline():
    xml_text = "<p>Hello <b>world</b>, bye</p>"

    assert format_xml(xml_text).value == xml_text


def test_format_keeps_mixed_content_inside_block_elements():
    xml_text = "<doc>\n    <p>Hello <b>world</b>, <i>again <u>and</u></i> bye</p>\n<note/></doc>"

    result = format_xml(xml_text).value

    assert result == "<doc>\n  <p>Hello <b>world</b>, <i>again <u>and</u></i> bye</p>\n  <note/>\n</doc>"


def test_format_keeps_whitespace_inside_text_elements():
    xml_text = "<r><pre>  a\n   b  </pre></r>"

    assert format_xml(xml_text).value == "<r>\n  <pre>  a\n   b  </pre>\n</r>"


def test_format_handles_deep_nesting():
    depth = 3000
    xml_text = "<d>" * depth + "</d>" * depth

    result = format_xml(xml_text)

    assert result.ok
    lines = result.value.split("\n")
    assert len(lines) == 2 * depth - 1
    assert lines[depth - 1] == "  " * (depth - 1) + "<d/>"
    assert lines[-1] == "</d>"
