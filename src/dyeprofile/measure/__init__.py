"""DyeProfile Measure — channel profiling, batch runs, solvent-front detection."""

from dyeprofile.measure.batch import BatchResult, ProfileEngine
from dyeprofile.measure.front import (
    FrontAnalysis,
    FrontSummary,
    analyze_fronts,
    detect_front,
    summaries_to_frame,
)
from dyeprofile.measure.profiler import (
    ChannelProfile,
    ChannelProfiler,
    channel_accessor,
    normalized_channel,
)

__all__ = [
    "BatchResult",
    "ChannelProfile",
    "ChannelProfiler",
    "FrontAnalysis",
    "FrontSummary",
    "ProfileEngine",
    "analyze_fronts",
    "channel_accessor",
    "detect_front",
    "normalized_channel",
    "summaries_to_frame",
]
