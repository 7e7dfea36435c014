"""Shared test fixtures for DyeProfile."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import numpy as np
import pytest
import tifffile


def rgb(height: int, width: int, color: tuple[float, float, float], dtype=np.uint8) -> np.ndarray:
    """Uniform (H, W, 3) image filled with one colour."""
    img = np.empty((height, width, 3), dtype=dtype)
    img[...] = color
    return img


@pytest.fixture
def make_rgb() -> Callable[..., np.ndarray]:
    """The uniform-image helper, for test modules."""
    return rgb


@pytest.fixture
def write_dataset(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing replicate TIFFs into tmp_path/images.

    Usage: ``write_dataset({"W_100_R1.tif": array, ...})``
    """

    def _write(layout: dict[str, np.ndarray]) -> Path:
        d = tmp_path / "images"
        d.mkdir(exist_ok=True)
        for name, data in layout.items():
            tifffile.imwrite(str(d / name), data, photometric="rgb")
        return d

    return _write


@pytest.fixture
def two_code_dataset(write_dataset) -> Path:
    """Identifier W, codes 100 and 200, three 2x2 replicates each."""
    layout = {}
    for code in (100, 200):
        for rep in (1, 2, 3):
            layout[f"W_{code}_R{rep}.tif"] = rgb(2, 2, (100, 50, 50))
    return write_dataset(layout)
