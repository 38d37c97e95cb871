import pytest

from documents_api.content_types import (
    ALLOWED_EXTENSIONS,
    file_extension,
    resolve_content_type,
    supported_types_message,
)
from documents_api.errors import UnsupportedFileType


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("report.pdf", "application/pdf"),
        ("letter.docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
        ("budget.xlsx", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
        ("notes.txt", "text/plain"),
        ("photo.jpg", "image/jpeg"),
        ("photo.jpeg", "image/jpeg"),
        ("scan.png", "image/png"),
    ],
)
def test__resolve_content_type__overrides_declared_type(filename, expected):
    assert resolve_content_type(filename, "application/octet-stream") == expected


@pytest.mark.parametrize("filename", ["REPORT.PDF", "Scan.Png", "archive.tar.TXT"])
def test__resolve_content_type__extension_is_case_insensitive(filename):
    resolved = resolve_content_type(filename, "application/octet-stream")

    assert resolved != "application/octet-stream"


@pytest.mark.parametrize("filename", ["script.exe", "page.html", "README", "report.pdf.zip", ""])
def test__resolve_content_type__unsupported_extension(filename):
    with pytest.raises(UnsupportedFileType) as exc_info:
        resolve_content_type(filename, "application/pdf")

    assert str(exc_info.value) == supported_types_message()


def test__file_extension__uses_last_dot():
    assert file_extension("quarterly.report.XLSX") == ".xlsx"
    assert file_extension("README") == ".readme"


def test__supported_types_message__lists_all_extensions():
    assert supported_types_message() == "Supported file types: .docx, .pdf, .jpg, .png, .jpeg, .txt, .xlsx"
    assert len(ALLOWED_EXTENSIONS) == 7
