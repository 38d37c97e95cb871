####################################
# --- Request/response schemas --- #
####################################

import base64
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DOCUMENT_VALUE_CODE = "documentValueCode"
DOCUMENT_VALUE_TYPE_CODE = "documentValueTypeCode"
KNOWN_FORM_FIELDS = (DOCUMENT_VALUE_CODE, DOCUMENT_VALUE_TYPE_CODE)
MISSING_METADATA_VALUE = "NA"


class CamelModel(BaseModel):
    """Base for models serialized with camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExtractedFile(BaseModel):
    """The single file part pulled out of a multipart body."""

    field_name: str
    filename: str
    declared_content_type: str = "application/octet-stream"
    payload: bytes


class FormFields(CamelModel):
    """The known text fields of an upload form; anything else is dropped."""

    document_value_code: str = ""
    document_value_type_code: str = ""

    def to_metadata(self) -> Dict[str, str]:
        """Object metadata for the store, substituting "NA" for empty values."""
        return {
            DOCUMENT_VALUE_CODE: self.document_value_code or MISSING_METADATA_VALUE,
            DOCUMENT_VALUE_TYPE_CODE: self.document_value_type_code or MISSING_METADATA_VALUE,
        }


class StoredObject(BaseModel):
    """An object as written to or read back from the store."""

    key: str
    payload: bytes
    content_type: str
    metadata: Dict[str, str] = Field(default_factory=dict)


class ObjectDescriptor(BaseModel):
    """One entry of a prefix listing as the store reports it."""

    key: str
    size: int
    last_modified: datetime


class DocumentSummary(CamelModel):
    """Entry of the `listDocuments` response."""

    key: str = Field(json_schema_extra={"example": "documents/1718000000000-report.pdf"})
    file_name: str = Field(json_schema_extra={"example": "1718000000000-report.pdf"})
    size: int = Field(description="The size of the object in bytes.")
    last_modified: datetime = Field(description="The last modified date of the object.")


class ListDocumentsResponse(CamelModel):
    """Response model for `action=listDocuments`."""

    documents: List[DocumentSummary]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "documents": [
                    {
                        "key": "documents/1718000000000-report.pdf",
                        "fileName": "1718000000000-report.pdf",
                        "size": 512,
                        "lastModified": "2024-06-10T06:13:20Z",
                    }
                ]
            }
        }
    )


class UploadFileResponse(CamelModel):
    """Response model for `action=uploadFile`."""

    message: str = "File uploaded successfully"
    key: str
    file_name: str
    document_value_code: str
    document_value_type_code: str


class TextDocumentEnvelope(CamelModel):
    """JSON body returned when downloading a `text/plain` document."""

    file_name: str
    content_type: str
    file_content: str = Field(description="Base64 encoded document bytes.")
    is_base64_encoded: bool = True
    metadata: Dict[str, str] = Field(default_factory=dict)


class DocumentRequest(BaseModel):
    """Transport-neutral view of one inbound request."""

    method: str
    query_params: Dict[str, str] = Field(default_factory=dict)
    headers: Dict[str, str] = Field(default_factory=dict)
    body: bytes = b""
    is_base64_encoded: bool = False

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def raw_body(self) -> bytes:
        """The body bytes, undoing any transport-level base64 encoding."""
        if self.is_base64_encoded:
            return base64.b64decode(self.body)
        return self.body


class DocumentResponse(BaseModel):
    """Uniform response shape produced for every outcome."""

    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
    body: str = ""
    is_base64_encoded: bool = False
