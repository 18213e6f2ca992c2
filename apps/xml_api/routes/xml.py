from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Response

from libs.common import ErrorKind, OperationError
from libs.common.storage import XmlFileStore
from libs.common.xml_tree import parse_xml_to_tree, tree_to_json
from libs.common.xml_utils import format_xml, validate_xml

from ..dependencies import get_file_store
from ..exceptions import MissingFieldError, OperationFailedError
from ..schemas import (
    ErrorResponse,
    FileListResponse,
    FormatResponse,
    LoadResponse,
    ParseResponse,
    SaveResponse,
    ValidationResponse,
    XmlContentRequest,
    XmlSaveRequest,
)

router = APIRouter()

logger = logging.getLogger(__name__)

XML_CONTENT_REQUIRED = "XML content is required"
XML_ERROR_PREFIX = "XML Error: "
PARSE_SUCCESS_MESSAGE = "XML parsed successfully"

_ERROR_RESPONSES = {400: {"model": ErrorResponse}}


def _xml_error_message(error: OperationError) -> str:
    return f"{XML_ERROR_PREFIX}{error.message}"


def _xml_error_prefix(error: OperationError) -> str:
    return XML_ERROR_PREFIX if error.kind is ErrorKind.PARSE else "Error: "


@router.post("/validate", response_model=ValidationResponse)
async def validate(payload: XmlContentRequest | None = None) -> ValidationResponse:
    if payload is None or payload.xml_content is None:
        raise MissingFieldError(XML_CONTENT_REQUIRED, result_field="isValid")

    result = validate_xml(payload.xml_content)
    if not result.ok:
        return ValidationResponse(is_valid=False, message=_xml_error_message(result.error))
    return ValidationResponse(is_valid=True, message="XML is valid")


@router.post("/format", response_model=FormatResponse, responses=_ERROR_RESPONSES)
async def format_document(payload: XmlContentRequest | None = None) -> FormatResponse:
    if payload is None or payload.xml_content is None:
        raise MissingFieldError(XML_CONTENT_REQUIRED)

    result = format_xml(payload.xml_content)
    if not result.ok:
        raise OperationFailedError(result.error, prefix=_xml_error_prefix(result.error))
    return FormatResponse(formatted_xml=result.value)


@router.post(
    "/parse",
    response_model=None,
    responses={200: {"model": ParseResponse}, **_ERROR_RESPONSES},
)
async def parse_document(payload: XmlContentRequest | None = None) -> Response:
    if payload is None or payload.xml_content is None:
        raise MissingFieldError(XML_CONTENT_REQUIRED)

    result = parse_xml_to_tree(payload.xml_content)
    if not result.ok:
        raise OperationFailedError(result.error, prefix=_xml_error_prefix(result.error))
    # tree_to_json has no nesting limit; the stock JSON encoders do
    body = (
        '{"success":true,"treeStructure":'
        + tree_to_json(result.value)
        + f',"message":{json.dumps(PARSE_SUCCESS_MESSAGE)}}}'
    )
    return Response(content=body, media_type="application/json")


@router.post("/save", response_model=SaveResponse, responses=_ERROR_RESPONSES)
async def save_document(
    payload: XmlSaveRequest | None = None,
    store: XmlFileStore = Depends(get_file_store),
) -> SaveResponse:
    if payload is None or payload.xml_content is None or not payload.file_name:
        raise MissingFieldError("XML content and filename are required")

    result = await store.save(payload.file_name, payload.xml_content)
    if not result.ok:
        raise OperationFailedError(result.error, prefix="Error saving file: ")
    return SaveResponse(
        message=f"File saved successfully: {payload.file_name}",
        file_path=str(result.value),
    )


@router.get("/files", response_model=FileListResponse, responses=_ERROR_RESPONSES)
async def list_documents(store: XmlFileStore = Depends(get_file_store)) -> FileListResponse:
    result = await store.list_files()
    if not result.ok:
        raise OperationFailedError(result.error, prefix="Error retrieving files: ")
    return FileListResponse(files=result.value)


@router.get(
    "/load/{file_name}",
    response_model=LoadResponse,
    responses={**_ERROR_RESPONSES, 404: {"model": ErrorResponse}},
)
async def load_document(
    file_name: str,
    store: XmlFileStore = Depends(get_file_store),
) -> LoadResponse:
    if not file_name:
        raise MissingFieldError("Filename is required")

    result = await store.load(file_name)
    if not result.ok:
        raise OperationFailedError(result.error, prefix="Error loading file: ")
    logger.debug("Loaded %s (%d chars)", file_name, len(result.value))
    return LoadResponse(xml_content=result.value, file_name=file_name)
