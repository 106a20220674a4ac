import sys
from pathlib import Path
from typing import Optional

import cv2
import numpy as np
import pytesseract
from PIL import Image

from . import OcrError

# Sparse text: find as much text as possible, in no particular order
DEFAULT_PSM = 11
DEFAULT_DPI = 96

if sys.platform == "win32":
    DEFAULT_TESSERACT = r"C:\Program Files\Tesseract-OCR\tesseract.exe"
else:
    DEFAULT_TESSERACT = "/usr/bin/tesseract"


def image_dpi(image: Image.Image) -> int:
    """Horizontal resolution of an image, falling back to 96 when it has none."""
    dpi = image.info.get("dpi")
    if not dpi or not dpi[0]:
        return DEFAULT_DPI
    return int(round(float(dpi[0])))


def binarize(image: Image.Image) -> np.ndarray:
    # Otsu threshold makes the overlay text pure black and white
    gray = cv2.cvtColor(np.array(image.convert("RGB")), cv2.COLOR_RGB2GRAY)
    _, high_contrast = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
    return high_contrast


def read_text(
    image_path: Path,
    tesseract_cmd: Optional[str] = None,
    psm: int = DEFAULT_PSM,
    binarize_image: bool = False,
) -> str:
    """
    Run Tesseract on the cropped timestamp strip and return its text output.

    The image's horizontal resolution is passed as the DPI hint; small crops
    are otherwise read at a guessed resolution and recognition suffers.
    """
    if tesseract_cmd:
        pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    try:
        with Image.open(image_path) as image:
            config = f"--dpi {image_dpi(image)} --psm {psm}"
            source = binarize(image) if binarize_image else str(image_path)
    except OSError as exc:
        raise OcrError(f"Could not open {image_path.name}: {exc}") from exc

    try:
        return pytesseract.image_to_string(source, config=config)
    except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError, OSError) as exc:
        raise OcrError(f"Tesseract failed on {image_path.name}: {exc}") from exc
