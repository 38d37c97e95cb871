"""Helpers for building multipart/form-data bodies by hand."""
from typing import Dict, List, Optional, Tuple

from tests.consts import TEST_BOUNDARY

# (field name, filename, content type, payload)
FilePart = Tuple[str, str, str, bytes]


def multipart_content_type(boundary: str = TEST_BOUNDARY) -> str:
    return f"multipart/form-data; boundary={boundary}"


def build_multipart_body(
    fields: Optional[Dict[str, str]] = None,
    files: Optional[List[FilePart]] = None,
    boundary: str = TEST_BOUNDARY,
) -> bytes:
    """Encode text fields followed by file parts, closed by the final boundary."""
    chunks: List[bytes] = []
    for name, value in (fields or {}).items():
        chunks.append(
            f"--{boundary}\r\n"
            f'Content-Disposition: form-data; name="{name}"\r\n'
            f"\r\n"
            f"{value}\r\n".encode("utf-8")
        )
    for field_name, filename, content_type, payload in files or []:
        chunks.append(
            f"--{boundary}\r\n"
            f'Content-Disposition: form-data; name="{field_name}"; filename="{filename}"\r\n'
            f"Content-Type: {content_type}\r\n"
            f"\r\n".encode("utf-8")
            + payload
            + b"\r\n"
        )
    chunks.append(f"--{boundary}--\r\n".encode("utf-8"))
    return b"".join(chunks)
