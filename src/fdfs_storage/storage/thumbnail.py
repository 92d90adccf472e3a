"""缩略图: PyMuPDF 等比缩放到 width x height 框内, 不放大。"""
from __future__ import annotations
from dataclasses import dataclass

import fitz  # PyMuPDF
import structlog

from fdfs_storage.common.exceptions import ThumbnailError

logger = structlog.get_logger()

PNG_EXTS = {"png"}


@dataclass(frozen=True)
class ThumbImageConfig:
    width: int = 150
    height: int = 150

    @property
    def prefix_name(self) -> str:
        return f"_{self.width}x{self.height}"

    def get_thumb_image_path(self, master_path: str) -> str:
        """a/b.jpg → a/b_150x150.jpg"""
        head, sep, tail = master_path.rpartition("/")
        if "." in tail:
            stem, ext = tail.rsplit(".", 1)
            tail = f"{stem}{self.prefix_name}.{ext}"
        else:
            tail = f"{tail}{self.prefix_name}"
        return f"{head}{sep}{tail}"


def make_thumbnail(data: bytes, ext: str, config: ThumbImageConfig) -> bytes:
    try:
        return _render(data, ext, config)
    except Exception as e:
        # PyMuPDF 解码/缩放/编码错误
        raise ThumbnailError(f"Thumbnail failed: {e}") from e


def _render(data: bytes, ext: str, config: ThumbImageConfig) -> bytes:
    pix = fitz.Pixmap(data)
    scale = min(config.width / pix.width, config.height / pix.height, 1.0)
    width = max(int(pix.width * scale), 1)
    height = max(int(pix.height * scale), 1)
    if (width, height) != (pix.width, pix.height):
        pix = fitz.Pixmap(pix, width, height, None)

    if pix.colorspace is not None and pix.colorspace.n > 3:
        pix = fitz.Pixmap(fitz.csRGB, pix)  # CMYK
    fmt = ext.lower().lstrip(".")
    if fmt in PNG_EXTS:
        out = pix.tobytes("png")
    else:
        if pix.alpha:
            pix = fitz.Pixmap(pix, 0)
        out = pix.tobytes("jpeg")
    logger.debug("thumbnail_created", width=width, height=height, size=len(out))
    return out
