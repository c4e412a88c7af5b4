"""Encoding pixel buffers to image files and opening them for preview."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import PIL.Image


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def write_image(pixels: np.ndarray, output_path: str | Path) -> Path:
    """Write an RGBA buffer to ``output_path``, inferring the format from its suffix.

    A partially written file is removed if encoding fails.
    """

    output_path = Path(output_path)
    image_format = output_path.suffix.lstrip(".") or "png"
    image = PIL.Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))
    if _pil_format_name(image_format) == "JPEG":
        image = image.convert("RGB")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        image.save(str(output_path), format=_pil_format_name(image_format))
    except (OSError, ValueError, KeyError):
        output_path.unlink(missing_ok=True)
        raise
    return output_path


def preview(artifact: str | Path | None) -> bool:
    """Open ``artifact`` in the platform image viewer.

    Failures are reported and swallowed so a missing file never aborts a run.
    """

    if artifact is None:
        print("Nothing to preview: no artifact was written.")
        return False
    try:
        with PIL.Image.open(str(artifact)) as image:
            image.show(title=Path(artifact).name)
    except OSError as exc:
        print(f"Could not open {artifact}: {exc}")
        return False
    return True
