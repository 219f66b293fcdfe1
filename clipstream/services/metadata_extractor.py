"""
YouTube Metadata Extractor
Resolves a YouTube URL and trim window into normalized clip metadata using yt-dlp
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, Optional

import yt_dlp
from yt_dlp.utils import DownloadError

from ..config import get_settings
from ..models.clip import ClipMedia
from ..utils.exceptions import ExtractionFailedError, InvalidReferenceError, ValidationError
from ..utils.logger import get_logger
from ..utils.retry import retry_async
from .timecode import format_span, format_time, parse_time
from .video_reference import extract_video_id

logger = get_logger()

THUMBNAIL_FALLBACK = "https://img.youtube.com/vi/{video_id}/hqdefault.jpg"


@dataclass(frozen=True)
class ProviderOptions:
    """Fixed behaviour requested from the metadata provider"""
    consolidated_output: bool = True
    suppress_warnings: bool = True
    skip_cert_validation: bool = True
    prefer_open_formats: bool = True
    skip_unreliable_manifests: bool = True

    def to_ydl_opts(self) -> dict:
        """Translate into yt-dlp YoutubeDL options"""
        opts = {
            'quiet': True,
            'skip_download': True,
            'extract_flat': False,
            'noplaylist': self.consolidated_output,
            'no_warnings': self.suppress_warnings,
            'nocheckcertificate': self.skip_cert_validation,
            'prefer_free_formats': self.prefer_open_formats,
        }
        if self.skip_unreliable_manifests:
            opts['extractor_args'] = {'youtube': {'skip': ['dash', 'hls']}}
        return opts


MetadataProvider = Callable[[str, ProviderOptions], dict]


def youtube_dl_provider(url: str, options: ProviderOptions) -> dict:
    """Blocking yt-dlp lookup returning title, duration and thumbnail"""
    with yt_dlp.YoutubeDL(options.to_ydl_opts()) as ydl:
        info = ydl.extract_info(url, download=False)

    return {
        'id': info.get('id'),
        'title': info.get('title'),
        'duration': info.get('duration'),
        'thumbnail': info.get('thumbnail'),
    }


class VideoMetadataExtractor:
    """Turns a submitted URL plus trim window into a ClipMedia record"""

    def __init__(
        self,
        provider: Optional[MetadataProvider] = None,
        options: Optional[ProviderOptions] = None,
        timeout_seconds: Optional[float] = None,
        max_retries: Optional[int] = None
    ):
        settings = get_settings()
        self.provider = provider or youtube_dl_provider
        self.options = options or ProviderOptions()
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.metadata_timeout_seconds
        )
        self.max_retries = (
            max_retries if max_retries is not None else settings.metadata_max_retries
        )

    async def extract(
        self,
        url: str,
        start_time: Optional[str] = "0:00",
        end_time: Optional[str] = ""
    ) -> ClipMedia:
        """
        Build normalized metadata for a clip.

        Every failure is logged with its cause and re-raised as
        ExtractionFailedError so provider internals never reach the client.
        """
        try:
            return await asyncio.wait_for(
                self._extract(url, start_time, end_time),
                timeout=self.timeout_seconds
            )
        except Exception as exc:
            logger.exception(f"YouTube extraction error for {url}: {exc!r}")
            raise ExtractionFailedError(url) from exc

    async def _extract(self, url: str, start_time: Optional[str], end_time: Optional[str]) -> ClipMedia:
        video_id = extract_video_id(url)
        if not video_id:
            raise InvalidReferenceError(url)

        # Reject bad time codes before paying for a provider round trip
        start_seconds = parse_time(start_time)
        # An empty or zero end time means "play to the end"
        end_seconds = parse_time(end_time) or None
        if end_seconds is not None and end_seconds <= start_seconds:
            raise ValidationError("End time must be after start time", start=start_time, end=end_time)

        info = await self._fetch_info(url)

        full_duration = format_time(info['duration']) if info.get('duration') else ""
        clip_duration = format_span(start_seconds, end_seconds)

        media = ClipMedia(
            video_id=video_id,
            title=info.get('title') or "",
            thumbnail_url=info.get('thumbnail') or THUMBNAIL_FALLBACK.format(video_id=video_id),
            duration=clip_duration or full_duration,
            start_time_seconds=start_seconds,
            end_time_seconds=end_seconds,
        )
        logger.info(f"Extracted metadata for {video_id}: {media.title!r} ({media.duration})")
        return media

    async def _fetch_info(self, url: str) -> dict:
        logger.info(f"Fetching video info: {url}")
        loop = asyncio.get_event_loop()

        @retry_async(
            max_retries=self.max_retries,
            base_delay=0.5,
            max_delay=2.0,
            retryable_exceptions=(DownloadError,)
        )
        async def call_provider() -> dict:
            return await loop.run_in_executor(None, self.provider, url, self.options)

        return await call_provider()
