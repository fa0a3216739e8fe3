# renderer/image_io.py
import os
import tempfile
from pathlib import Path
from typing import Union
import numpy as np
from PIL import Image

def save_png(pixels: np.ndarray, path: Union[str, os.PathLike]) -> Path:
    """
    Write an (height, width, 3) uint8 buffer as an RGB PNG.

    The image is encoded into a temporary file next to the target and moved
    into place afterwards, so a failed save never leaves a partial file.

    Raises:
        ValueError: If the buffer does not have the expected shape or dtype
        OSError: If the directory or file cannot be written
    """
    if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.dtype != np.uint8:
        raise ValueError(f"Expected a (height, width, 3) uint8 buffer, got {pixels.shape} {pixels.dtype}")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    image = Image.fromarray(pixels)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}-", suffix=".png", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            image.save(f, format="PNG")
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return path

def load_png(path: Union[str, os.PathLike]) -> np.ndarray:
    """
    Read an image back as a (height, width, 3) uint8 buffer.
    """
    with Image.open(path) as img:
        if img.mode != "RGB":
            img = img.convert("RGB")
        return np.asarray(img, dtype=np.uint8).copy()
