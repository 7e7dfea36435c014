"""ChannelProfiler — column-wise normalized channel profiles across replicates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator

import numpy as np
import pandas as pd

from dyeprofile.core.models import REPLICATES_PER_GROUP, Channel, DistanceMapping
from dyeprofile.io.export import column_names

# Accessor signature: (H, W, 3) float image -> (H, W) plane of the chosen channel
ChannelAccessor = Callable[[np.ndarray], np.ndarray]


def channel_accessor(channel: Channel) -> ChannelAccessor:
    """Build the plane selector for ``channel`` once per run."""
    index = channel.index

    def select(image: np.ndarray) -> np.ndarray:
        return image[..., index]

    return select


def _normalize(image: np.ndarray, select: ChannelAccessor) -> np.ndarray:
    data = image.astype(np.float32, copy=False)
    luminance = data[..., :3].sum(axis=-1, dtype=np.float64)
    selected = select(data).astype(np.float64)
    # Pixels with no luminance contribute 0 rather than a division fault.
    return np.divide(
        selected, luminance,
        out=np.zeros_like(luminance),
        where=luminance > 0,
    )


def normalized_channel(image: np.ndarray, channel: Channel) -> np.ndarray:
    """Fraction of each pixel's luminance (r+g+b) carried by ``channel``.

    Args:
        image: (H, W, 3) array in any numeric dtype.
        channel: Channel to extract.

    Returns:
        (H, W) float64 array. Zero where luminance is not positive.
        Values are not clamped.
    """
    return _normalize(image, channel_accessor(channel))


@dataclass(frozen=True)
class ChannelProfile:
    """Per-column profile for one condition group.

    Attributes:
        channel: Channel that was profiled.
        distance: (W,) distance of each column, decreasing.
        replicates: (3, W) per-replicate column averages.
        average: (W,) mean of the replicate values per column.
    """

    channel: Channel
    distance: np.ndarray
    replicates: np.ndarray
    average: np.ndarray

    def __len__(self) -> int:
        return int(self.distance.shape[0])

    def rows(self) -> Iterator[tuple[float, float, float, float, float]]:
        """Yield (distance, rep1, rep2, rep3, average) per column."""
        for x in range(len(self)):
            r1, r2, r3 = (float(v) for v in self.replicates[:, x])
            yield float(self.distance[x]), r1, r2, r3, float(self.average[x])

    def to_frame(self) -> pd.DataFrame:
        """Tabular form with the fixed profile header."""
        names = column_names(self.channel)
        data = {names[0]: self.distance}
        for i in range(REPLICATES_PER_GROUP):
            data[names[i + 1]] = self.replicates[i]
        data[names[-1]] = self.average
        return pd.DataFrame(data, columns=names)


class ChannelProfiler:
    """Reduces three aligned replicate images to a distance profile.

    Args:
        mapping: Column-to-distance mapping.
        channel: Channel to profile. The accessor is chosen here, once.
    """

    def __init__(self, mapping: DistanceMapping, channel: Channel) -> None:
        self.mapping = mapping
        self.channel = channel
        self._select = channel_accessor(channel)

    def column_average(self, image: np.ndarray) -> np.ndarray:
        """Mean normalized channel value of each column, over all rows."""
        return _normalize(image, self._select).mean(axis=0)

    def profile(self, images: list[np.ndarray]) -> ChannelProfile:
        """Compute the profile of an aligned replicate set.

        Args:
            images: Exactly 3 arrays with identical (H, W).

        Returns:
            ChannelProfile with one row per pixel column.

        Raises:
            ValueError: On a wrong image count, mismatched or empty shapes.
        """
        if len(images) != REPLICATES_PER_GROUP:
            raise ValueError(
                f"Expected {REPLICATES_PER_GROUP} images, got {len(images)}"
            )
        shapes = {img.shape[:2] for img in images}
        if len(shapes) != 1:
            raise ValueError(f"Images are not aligned: {sorted(shapes)}")
        height, width = images[0].shape[:2]
        if height == 0 or width == 0:
            raise ValueError("Cannot profile an empty image")

        replicates = np.vstack([self.column_average(img) for img in images])
        average = replicates.mean(axis=0)
        distance = self.mapping.upper - np.arange(width) * self.mapping.pixel_width(width)

        return ChannelProfile(
            channel=self.channel,
            distance=distance,
            replicates=replicates,
            average=average,
        )
