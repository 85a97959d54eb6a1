import io
import logging
import os
from contextlib import suppress
from datetime import date
from typing import Sequence

import requests
from pypdf import PdfReader, PdfWriter

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT = 60


def download_pdf(url: str) -> bytes:
    response = requests.get(url, timeout=DOWNLOAD_TIMEOUT)
    response.raise_for_status()
    logger.info("Downloaded %s (%.1f KB)", url, len(response.content) / 1024)
    return response.content


def extract_pages(pdf_bytes: bytes, indices: Sequence[int]) -> bytes:
    """Build a new document holding the given zero-based pages, in the given order."""
    reader = PdfReader(io.BytesIO(pdf_bytes))
    page_count = len(reader.pages)
    writer = PdfWriter()

    for index in indices:
        if not 0 <= index < page_count:
            raise IndexError(f"Page index {index} out of range for a {page_count} page document")
        writer.add_page(reader.pages[index])

    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def menu_file_name(day: date) -> str:
    return f"{day.isoformat()}-menu.pdf"


def save_pdf(pdf_bytes: bytes, output_dir: str, day: date) -> str:
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, menu_file_name(day))
    try:
        with open(path, "wb") as f:
            f.write(pdf_bytes)
    except Exception:
        with suppress(FileNotFoundError):
            os.remove(path)
        raise
    return path
