"""Services package initialization"""
from .clip_store import ClipStore, get_clip_store
from .engagement import EngagementAggregator, EngagementCounts
from .feed import FeedAssembler, get_feed_assembler
from .metadata_extractor import ProviderOptions, VideoMetadataExtractor
from .timecode import format_span, format_time, parse_time
from .video_reference import extract_video_id

__all__ = [
    "ClipStore",
    "get_clip_store",
    "EngagementAggregator",
    "EngagementCounts",
    "FeedAssembler",
    "get_feed_assembler",
    "ProviderOptions",
    "VideoMetadataExtractor",
    "format_span",
    "format_time",
    "parse_time",
    "extract_video_id",
]
