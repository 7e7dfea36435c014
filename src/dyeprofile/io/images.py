"""Colour image reading and aligned-image writing via tifffile and OpenCV."""

from __future__ import annotations

import logging
from pathlib import Path

import cv2
import numpy as np
import tifffile

from dyeprofile.core.exceptions import ImageFormatError
from dyeprofile.io.transforms import gaussian_blur

logger = logging.getLogger(__name__)

TIFF_EXTENSIONS = {".tif", ".tiff"}
ALIGNED_DIRNAME = "aligned_images"


def _read_with_opencv(path: Path) -> np.ndarray:
    """Read a non-TIFF file unchanged and reorder OpenCV's BGR(A) to RGB(A)."""
    data = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if data is None:
        raise ImageFormatError(str(path), "OpenCV could not decode the file")
    if data.ndim == 3 and data.shape[-1] == 3:
        data = cv2.cvtColor(data, cv2.COLOR_BGR2RGB)
    elif data.ndim == 3 and data.shape[-1] == 4:
        data = cv2.cvtColor(data, cv2.COLOR_BGRA2RGBA)
    return data


def read_image(path: Path) -> np.ndarray:
    """Read a colour image into an (H, W, 3) array in its native dtype.

    TIFF files are read with tifffile, anything else with OpenCV using
    ``IMREAD_UNCHANGED`` so 16-bit samples keep their depth. An alpha
    channel, if present, is dropped. Planar (C, H, W) TIFFs are moved to
    channel-last order.

    Args:
        path: Path to the image file.

    Returns:
        Numpy array with R, G, B along the last axis.

    Raises:
        ImageFormatError: If the file cannot be decoded or holds fewer
            than 3 channels.
    """
    path = Path(path)
    if path.suffix.lower() in TIFF_EXTENSIONS:
        data = np.asarray(tifffile.imread(str(path)))
    else:
        data = _read_with_opencv(path)

    if data.ndim != 3:
        raise ImageFormatError(str(path), f"expected a colour image, got shape {data.shape}")
    if data.shape[-1] not in (3, 4) and data.shape[0] in (3, 4):
        data = np.moveaxis(data, 0, -1)
    if data.shape[-1] < 3:
        raise ImageFormatError(str(path), f"expected at least 3 channels, got shape {data.shape}")

    return data[..., :3]


def aligned_image_name(identifier: str, code: int, index: int, width: int, height: int) -> str:
    """Filename for an aligned replicate, e.g. ``W_100_R1_640x480_aligned.tif``."""
    return f"{identifier}_{code}_R{index}_{width}x{height}_aligned.tif"


def write_aligned_image(path: Path, image: np.ndarray) -> None:
    """Write an image as an uncompressed float32 RGB TIFF.

    Float32 samples survive a read back bit for bit.
    """
    tifffile.imwrite(
        str(path),
        np.ascontiguousarray(image, dtype=np.float32),
        photometric="rgb",
        compression=None,
    )


def load_group(
    folder: Path,
    filenames: list[str] | tuple[str, ...],
    blur_radius: int = 0,
    log: logging.Logger | None = None,
) -> tuple[list[str], list[np.ndarray]]:
    """Load and optionally blur the replicate files of one condition group.

    A file that fails to load is logged and skipped; the caller decides
    whether the remaining images form a usable group.

    Args:
        folder: Folder holding the files.
        filenames: The group's replicate filenames, in processing order.
        blur_radius: Gaussian radius; 0 disables smoothing.
        log: Logger for per-file messages. Defaults to this module's logger.

    Returns:
        (loaded filenames, images) in filename order.
    """
    log = log or logger
    names: list[str] = []
    images: list[np.ndarray] = []

    for name in filenames:
        log.info("Loading image: %s", name)
        try:
            image = read_image(Path(folder) / name)
        except Exception as exc:
            if isinstance(exc, (MemoryError, KeyboardInterrupt, SystemExit)):
                raise
            log.error("Could not load image %s: %s", name, exc)
            continue

        log.info(
            "Original image dimensions: %dx%d (%s)",
            image.shape[0], image.shape[1], image.dtype,
        )
        images.append(gaussian_blur(image, blur_radius))
        names.append(name)

    return names, images
