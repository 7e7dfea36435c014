"""Per-image transforms: Gaussian smoothing and top-left dimension alignment."""

from __future__ import annotations

import cv2
import numpy as np

# Sample types cv2.GaussianBlur accepts; anything else is filtered as float32.
_CV_BLUR_DTYPES = {np.dtype(t) for t in (np.uint8, np.uint16, np.int16, np.float32, np.float64)}


def gaussian_blur(image: np.ndarray, radius: int) -> np.ndarray:
    """Smooth an image with a (2r+1) x (2r+1) Gaussian kernel.

    Sigma is derived from the kernel size. A radius of 0 returns the
    input unchanged.

    Args:
        image: (H, W, C) array.
        radius: Non-negative kernel radius.

    Returns:
        Blurred array, same shape as input.

    Raises:
        ValueError: If radius is negative.
    """
    if radius < 0:
        raise ValueError(f"Blur radius must be non-negative, got {radius}")
    if radius == 0:
        return image

    if image.dtype not in _CV_BLUR_DTYPES:
        image = image.astype(np.float32)
    size = 2 * radius + 1
    return cv2.GaussianBlur(np.ascontiguousarray(image), (size, size), 0)


def align_images(images: list[np.ndarray]) -> list[np.ndarray]:
    """Crop images to their smallest common width and height.

    Crops are anchored at the top-left corner; nothing is resampled.

    Args:
        images: Arrays shaped (H, W, ...).

    Returns:
        New list of views sharing identical (H, W).

    Raises:
        ValueError: If images is empty.
    """
    if not images:
        raise ValueError("No images to align")

    min_height = min(img.shape[0] for img in images)
    min_width = min(img.shape[1] for img in images)
    return [img[:min_height, :min_width] for img in images]
