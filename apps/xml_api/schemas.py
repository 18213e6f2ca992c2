from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TreeNodeSchema(_CamelModel):
    """OpenAPI description of the tree node written by ``tree_to_json``."""

    id: str
    name: str
    kind: str = "element"
    type: int = 1
    value: str = ""
    attributes: dict[str, str] = Field(default_factory=dict)
    text_content: str = Field(default="", alias="textContent")
    children: list[TreeNodeSchema] = Field(default_factory=list)


class XmlContentRequest(_CamelModel):
    xml_content: str | None = Field(default=None, alias="xmlContent")


class XmlSaveRequest(_CamelModel):
    xml_content: str | None = Field(default=None, alias="xmlContent")
    file_name: str | None = Field(default=None, alias="fileName")


class ValidationResponse(_CamelModel):
    is_valid: bool = Field(alias="isValid")
    message: str


class FormatResponse(_CamelModel):
    success: bool = True
    formatted_xml: str = Field(alias="formattedXml")
    message: str = "XML formatted successfully"


class ParseResponse(_CamelModel):
    success: bool = True
    tree_structure: TreeNodeSchema = Field(alias="treeStructure")
    message: str = "XML parsed successfully"


class SaveResponse(_CamelModel):
    success: bool = True
    message: str
    file_path: str = Field(alias="filePath")


class FileListResponse(BaseModel):
    files: list[str]


class LoadResponse(_CamelModel):
    success: bool = True
    xml_content: str = Field(alias="xmlContent")
    file_name: str = Field(alias="fileName")


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
