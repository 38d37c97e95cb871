"""Map uploaded filenames onto the content type stored with the object."""
from typing import Dict

from documents_api.errors import UnsupportedFileType

ALLOWED_EXTENSIONS = (".docx", ".pdf", ".jpg", ".png", ".jpeg", ".txt", ".xlsx")

# Canonical types win over whatever the client declared for the part.
CANONICAL_CONTENT_TYPES: Dict[str, str] = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".txt": "text/plain",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}


def file_extension(filename: str) -> str:
    """Lower-cased extension with its leading dot, e.g. "report.PDF" -> ".pdf"."""
    return "." + filename.rsplit(".", 1)[-1].lower()


def supported_types_message() -> str:
    return f"Supported file types: {', '.join(ALLOWED_EXTENSIONS)}"


def resolve_content_type(filename: str, declared_content_type: str) -> str:
    """
    Decide the content type to store for an uploaded file.

    :param filename: The filename from the multipart part.
    :param declared_content_type: The type the client declared for the part.
    :raises UnsupportedFileType: the extension is not allowed.
    """
    extension = file_extension(filename)
    if extension not in ALLOWED_EXTENSIONS:
        raise UnsupportedFileType(supported_types_message())
    return CANONICAL_CONTENT_TYPES.get(extension, declared_content_type)
