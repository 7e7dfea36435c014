"""DyeProfile Core — run configuration, shared models, exceptions."""

from dyeprofile.core.exceptions import (
    ConfigError,
    DyeProfileError,
    ImageFormatError,
    OutputDirectoryError,
    ReplicateCountError,
)
from dyeprofile.core.models import (
    REPLICATES_PER_GROUP,
    Channel,
    ConditionGroup,
    DistanceMapping,
    ProfileConfig,
)

__all__ = [
    "REPLICATES_PER_GROUP",
    "Channel",
    "ConditionGroup",
    "DistanceMapping",
    "ProfileConfig",
    "DyeProfileError",
    "ConfigError",
    "ImageFormatError",
    "OutputDirectoryError",
    "ReplicateCountError",
]
