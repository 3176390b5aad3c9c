"""
Viewer-facing URLs for a live input or recorded video.

Pure string formatting: no network call and no check that the id exists.
"""

from dataclasses import dataclass
from typing import Optional, Dict

from src.config.env import StreamConfig, STREAM_DOMAIN, load_config

CUSTOMER_CODE_MISSING = "Customer code not configured"

URL_TEMPLATES = {
    'player_url': "https://customer-{code}.{domain}/{input_id}/iframe",
    'hls_url': "https://customer-{code}.{domain}/{input_id}/manifest/video.m3u8",
    'dash_url': "https://customer-{code}.{domain}/{input_id}/manifest/video.mpd",
    'watch_url': "https://customer-{code}.{domain}/{input_id}/watch",
}


@dataclass(frozen=True)
class StreamUrls:
    player_url: Optional[str] = None
    hls_url: Optional[str] = None
    dash_url: Optional[str] = None
    watch_url: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Camel-case form used by the player embeds."""
        result = {
            'playerUrl': self.player_url,
            'hlsUrl': self.hls_url,
            'dashUrl': self.dash_url,
            'watchUrl': self.watch_url,
        }
        if self.error:
            result['error'] = self.error
        return result


def generate_stream_urls(input_id: str, customer_code: Optional[str] = None,
                         config: Optional[StreamConfig] = None) -> StreamUrls:
    """
    Build the iframe player, HLS, DASH and watch-page URLs for an input.

    Args:
        input_id: Live input UID or video UID
        customer_code: Explicit customer code; takes precedence over config
        config: Configuration to fall back on (defaults to the environment)

    Returns:
        StreamUrls with every URL set, or only ``error`` set when no
        customer code is available
    """
    if config is None and not customer_code:
        config = load_config()

    code = customer_code or (config.customer_code if config else "")
    if not code:
        return StreamUrls(error=CUSTOMER_CODE_MISSING)

    domain = config.stream_domain if config else STREAM_DOMAIN
    values = {
        field: template.format(code=code, domain=domain, input_id=input_id)
        for field, template in URL_TEMPLATES.items()
    }
    return StreamUrls(**values)
