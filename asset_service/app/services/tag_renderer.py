import io
import logging
import os

import qrcode
from PIL import Image, ImageDraw, ImageFont

from shared.core.config import settings
from shared.core.exceptions import StorageError

logger = logging.getLogger(__name__)

TAG_DIRECTORY = "batch-tags"


class TagRenderer:
    """Turns a unique code into a printable PNG tag."""

    def render(self, text: str) -> bytes:
        raise NotImplementedError


class QrTagRenderer(TagRenderer):
    """QR code of the unique code with the code printed underneath."""

    def __init__(self, box_size: int = 10, border: int = 2, caption_height: int = 40):
        self.box_size = box_size
        self.border = border
        self.caption_height = caption_height

    def render(self, text: str) -> bytes:
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=self.box_size,
            border=self.border,
        )
        qr.add_data(text)
        qr.make(fit=True)
        qr_image = qr.make_image(
            fill_color="black", back_color="white").get_image().convert("RGB")

        width, height = qr_image.size
        tag = Image.new("RGB", (width, height + self.caption_height), "white")
        tag.paste(qr_image, (0, 0))

        draw = ImageDraw.Draw(tag)
        font = ImageFont.load_default()
        left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
        x = max(0, (width - (right - left)) // 2)
        y = height + max(0, (self.caption_height - (bottom - top)) // 2)
        draw.text((x, y), text, fill="black", font=font)

        buffer = io.BytesIO()
        tag.save(buffer, format="PNG")
        return buffer.getvalue()


def get_tag_renderer() -> TagRenderer:
    return QrTagRenderer()


def tag_file_path(unique_code: str) -> str:
    return f"{TAG_DIRECTORY}/{unique_code}.png"


def absolute_tag_path(file_path: str) -> str:
    return os.path.join(settings.TAG_STORAGE_DIR, *file_path.split("/"))


def write_tag(file_path: str, image: bytes):
    target = absolute_tag_path(file_path)
    try:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        with open(target, "wb") as f:
            f.write(image)
    except OSError as e:
        logger.error("Failed to write tag image %s: %s", target, e)
        raise StorageError("Failed to store tag image")


def read_tag(file_path: str):
    target = absolute_tag_path(file_path)
    if not os.path.isfile(target):
        return None
    with open(target, "rb") as f:
        return f.read()
