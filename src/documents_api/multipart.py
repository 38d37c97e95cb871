"""
Decode a multipart/form-data upload into one file and the known form fields.

The body is held in memory and pushed through python-multipart's callback
parser in a single pass. Only one file is kept per request: the first file
part wins and later file parts are parsed but not collected.
"""
import logging
from typing import Dict, List, Optional, Tuple

from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from documents_api.errors import MalformedRequest, MissingFilePart, ParseError
from documents_api.schemas import KNOWN_FORM_FIELDS, ExtractedFile, FormFields

logger = logging.getLogger(__name__)

MULTIPART_FORM_DATA = b"multipart/form-data"


class _PartCollector:
    """Accumulates parser events into a file and a field mapping."""

    def __init__(self) -> None:
        self.file: Optional[ExtractedFile] = None
        self.fields: Dict[str, str] = {}
        self.finished = False

        self._header_field = b""
        self._header_value = b""
        self._headers: List[Tuple[bytes, bytes]] = []
        self._chunks: List[bytes] = []
        self._name = ""
        self._filename: Optional[str] = None
        self._content_type = ""

    def callbacks(self) -> dict:
        return {
            "on_part_begin": self.on_part_begin,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
            "on_headers_finished": self.on_headers_finished,
            "on_end": self.on_end,
        }

    def on_part_begin(self) -> None:
        self._headers = []
        self._chunks = []
        self._name = ""
        self._filename = None
        self._content_type = ""

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        self._chunks.append(data[start:end])

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value += data[start:end]

    def on_header_end(self) -> None:
        self._headers.append((self._header_field.lower(), self._header_value))
        self._header_field = b""
        self._header_value = b""

    def on_headers_finished(self) -> None:
        for field, value in self._headers:
            if field == b"content-disposition":
                _, options = parse_options_header(value)
                self._name = _decode(options.get(b"name", b""))
                if b"filename" in options:
                    self._filename = _decode(options[b"filename"])
            elif field == b"content-type":
                self._content_type = _decode(value).strip()

    def on_part_end(self) -> None:
        data = b"".join(self._chunks)
        if self._filename is not None:
            logger.info(f"Found file in form: {self._filename}, type: {self._content_type}")
            if self.file is None:
                self.file = ExtractedFile(
                    field_name=self._name,
                    filename=self._filename,
                    declared_content_type=self._content_type or "application/octet-stream",
                    payload=data,
                )
                logger.info(f"File data collected: {len(data)} bytes")
            return

        if self._name not in KNOWN_FORM_FIELDS:
            logger.debug(f"Ignoring form field: {self._name}")
            return

        value = _decode(data)
        logger.debug(f"Form field: {self._name} = {value}")
        self.fields[self._name] = value

    def on_end(self) -> None:
        self.finished = True


def _decode(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as err:
        raise ParseError(f"Form data is not valid UTF-8: {err}") from err


def extract_boundary(content_type: Optional[str]) -> bytes:
    """
    Pull the multipart boundary out of a content-type header.

    :param content_type: The raw content-type header value, or None.
    :raises MalformedRequest: the header is absent, not multipart/form-data, or has no boundary.
    """
    if not content_type:
        raise MalformedRequest("Missing content-type header")

    media_type, options = parse_options_header(content_type)
    if media_type.lower() != MULTIPART_FORM_DATA:
        logger.info(f"Not a multipart/form-data request: {content_type}")
        raise MalformedRequest("Not a multipart/form-data request")

    boundary = options.get(b"boundary")
    if not boundary:
        raise MalformedRequest("Multipart content-type does not declare a boundary")
    return boundary


def decode_form(content_type: Optional[str], body: bytes) -> Tuple[ExtractedFile, FormFields]:
    """
    Decode a multipart/form-data body into its file and known text fields.

    :param content_type: The request's content-type header (carries the boundary).
    :param body: The raw body, already base64-decoded if the transport encoded it.
    :returns: The first file part and the known form fields.
    :raises MalformedRequest: the content-type is not a usable multipart declaration.
    :raises ParseError: the body violates the multipart grammar.
    :raises MissingFilePart: no file part, or an empty one, was found.
    """
    boundary = extract_boundary(content_type)
    logger.info(f"Processing multipart/form-data with content type: {content_type}")

    collector = _PartCollector()
    parser = MultipartParser(boundary, collector.callbacks())
    try:
        parser.write(body)
        parser.finalize()
    except MultipartParseError as err:
        logger.error(f"Error parsing form data: {err}")
        raise ParseError(f"Malformed multipart body: {err}") from err

    if not collector.finished:
        raise ParseError("Multipart body ended before the closing boundary")

    if collector.file is None or not collector.file.payload:
        raise MissingFilePart("No file found in form data")

    fields = FormFields(
        document_value_code=collector.fields.get("documentValueCode", ""),
        document_value_type_code=collector.fields.get("documentValueTypeCode", ""),
    )
    return collector.file, fields
