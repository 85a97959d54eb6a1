import io

import pytest
from pypdf import PdfReader, PdfWriter

from menubot.config import Config


def _make_pdf(widths, height=50):
    """Blank document whose page i is widths[i] points wide, so pages can be told apart."""
    writer = PdfWriter()
    for width in widths:
        writer.add_blank_page(width=width, height=height)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def _page_widths(pdf_bytes):
    reader = PdfReader(io.BytesIO(pdf_bytes))
    return [float(page.mediabox.width) for page in reader.pages]


@pytest.fixture
def make_pdf():
    return _make_pdf


@pytest.fixture
def page_widths():
    return _page_widths


@pytest.fixture
def four_page_pdf():
    return _make_pdf([100, 101, 102, 103])


@pytest.fixture
def make_config(tmp_path):
    def _make_config(**overrides):
        values = {
            "slack_token": "xoxb-test",
            "slack_channel_id": "C0123",
            "output_dir": str(tmp_path),
        }
        values.update(overrides)
        return Config(**values)

    return _make_config
