from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from framer.errors import ImageLoadError, ImageSaveError, InputFileNotFound

logger = logging.getLogger(__name__)


def _to_rgba(img: Image.Image) -> np.ndarray:
    rgba = img.convert("RGBA")
    return np.array(rgba, dtype=np.uint8)


def load_rgba(path: str | Path) -> np.ndarray:
    p = Path(path)
    if not p.is_file():
        raise InputFileNotFound(f"input file not found: {p}")
    try:
        with Image.open(p) as img:
            pixels = _to_rgba(img)
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageLoadError(f"failed to load image {p}: {exc}") from exc
    logger.debug("loaded %s: %dx%d", p, pixels.shape[1], pixels.shape[0])
    return pixels


def decode_rgba(data: bytes) -> np.ndarray:
    if not data:
        raise ImageLoadError("image data is empty")
    try:
        with Image.open(io.BytesIO(data)) as img:
            return _to_rgba(img)
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageLoadError(f"failed to decode image: {exc}") from exc


def save_rgba(path: str | Path, image: np.ndarray) -> str:
    destination = Path(path)

    pil = Image.fromarray(image)
    # jpeg and bmp cannot store alpha.
    if destination.suffix.lower() in {".jpg", ".jpeg", ".bmp"}:
        pil = pil.convert("RGB")
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        pil.save(destination)
    except (OSError, ValueError, KeyError) as exc:
        raise ImageSaveError(f"failed to save image {destination}: {exc}") from exc
    logger.debug("saved %s: %dx%d", destination, image.shape[1], image.shape[0])
    return str(destination)


def encode_png(image: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(image).save(buffer, format="PNG")
    return buffer.getvalue()

