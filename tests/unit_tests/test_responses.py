import pytest

from documents_api.responses import content_disposition


def test__content_disposition__plain_ascii_name():
    assert content_disposition("1-report.pdf") == 'attachment; filename="1-report.pdf"'


def test__content_disposition__non_ascii_name():
    header = content_disposition("1-报告.pdf")

    assert header == "attachment; filename=\"1-??.pdf\"; filename*=UTF-8''1-%E6%8A%A5%E5%91%8A.pdf"
    header.encode("latin-1")


@pytest.mark.parametrize(
    "file_name, fallback",
    [
        ('say "hi".txt', 'filename="say \\"hi\\".txt"'),
        ("back\\slash.pdf", 'filename="back\\\\slash.pdf"'),
    ],
)
def test__content_disposition__escapes_quotes(file_name, fallback):
    header = content_disposition(file_name)

    assert fallback in header
    assert "filename*=UTF-8''" in header
