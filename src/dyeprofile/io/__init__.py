"""DyeProfile IO — filename grouping, image reading/writing, CSV export."""

from __future__ import annotations

from dyeprofile.io.export import csv_header, profile_csv_name, write_profile_csv
from dyeprofile.io.images import (
    aligned_image_name,
    load_group,
    read_image,
    write_aligned_image,
)
from dyeprofile.io.scanner import FileScanner, ScanResult
from dyeprofile.io.serialization import config_from_yaml, config_to_yaml
from dyeprofile.io.transforms import align_images, gaussian_blur

__all__ = [
    "FileScanner",
    "ScanResult",
    "align_images",
    "aligned_image_name",
    "config_from_yaml",
    "config_to_yaml",
    "csv_header",
    "gaussian_blur",
    "load_group",
    "profile_csv_name",
    "read_image",
    "write_aligned_image",
    "write_profile_csv",
]
