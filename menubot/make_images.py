import logging
import os
from contextlib import suppress
from typing import List

import fitz  # PyMuPDF
from PIL import Image

from .config import Config

logger = logging.getLogger(__name__)


class ImageConverter:
    def convert(self, pdf_path: str) -> List[str]:
        raise NotImplementedError


class NoImageConverter(ImageConverter):
    """Posts the extracted document as is."""

    def convert(self, pdf_path: str) -> List[str]:
        return [pdf_path]


class PdfImageConverter(ImageConverter):
    def __init__(self, dpi=150, quality=90, background="white"):
        self.dpi = dpi
        self.quality = quality
        self.background = background

    def image_path(self, pdf_path: str, page_number: int) -> str:
        stem = os.path.splitext(pdf_path)[0]
        return f"{stem}.{page_number}.jpg"

    def render_page(self, page) -> Image.Image:
        pix = page.get_pixmap(dpi=self.dpi, alpha=True)
        img = Image.frombytes("RGBA", (pix.width, pix.height), pix.samples)

        # Flatten transparent areas onto the background colour
        flattened = Image.new("RGB", img.size, self.background)
        flattened.paste(img, (0, 0), img)
        return flattened

    def convert(self, pdf_path: str) -> List[str]:
        written = []
        try:
            with fitz.open(pdf_path) as doc:
                for page_number, page in enumerate(doc, start=1):
                    path = self.image_path(pdf_path, page_number)
                    image = self.render_page(page)
                    # a failed save can leave a partial file behind
                    written.append(path)
                    image.save(path, "JPEG", quality=self.quality)
        except Exception:
            for path in written:
                with suppress(FileNotFoundError):
                    os.remove(path)
            raise

        logger.info("Converted %s into %d image(s)", pdf_path, len(written))
        return written


def get_image_converter(config: Config) -> ImageConverter:
    if config.convert_to_image:
        return PdfImageConverter()
    return NoImageConverter()
