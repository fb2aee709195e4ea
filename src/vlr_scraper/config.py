"""Scraper configuration with sensible defaults for vlr.gg."""

from dataclasses import dataclass

VLR_BASE_URL = "https://www.vlr.gg"


@dataclass
class ScraperConfig:
    """Configuration for the vlr.gg client.

    All timing values are in seconds. vlr.gg serves plain HTML without a
    challenge page, so pacing only needs to be polite.
    """

    # Rate limiting: delay between requests
    min_delay: float = 0.25
    max_delay: float = 3.0

    # Adaptive backoff after a failed request
    backoff_factor: float = 2.0

    # Gradual recovery on success (multiply current delay by this)
    recovery_factor: float = 0.85

    # Maximum delay ceiling
    max_backoff: float = 30.0

    # httpx request timeout
    timeout: float = 20.0
    follow_redirects: bool = True

    # User-Agent family for fake-useragent ("Chrome", "Firefox", "Safari")
    browser_family: str = "Chrome"

    # Single-site scraper
    base_url: str = VLR_BASE_URL

    # Optional proxy, e.g. "http://host:port" or "socks5://host:port"
    proxy_url: str | None = None

    # Log files go to {data_dir}/logs/
    data_dir: str = "data"
