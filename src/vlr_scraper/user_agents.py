"""User-Agent selection for the vlr.gg client.

Real browsers do not change User-Agent mid-session, so the client calls
``get_headers()`` once when its session opens and keeps the result.
"""

from fake_useragent import UserAgent

_FAMILIES = ("Chrome", "Firefox", "Safari", "Edge")


class UserAgentRotator:
    """Random desktop User-Agent strings from one browser family."""

    def __init__(self, browser_family: str = "Chrome"):
        self._browser_family = self._normalize_family(browser_family)
        self._ua = UserAgent(
            browsers=[self._browser_family],
            platforms=["desktop"],
            min_version=120.0,
        )

    @property
    def browser_family(self) -> str:
        return self._browser_family

    @staticmethod
    def _normalize_family(family: str) -> str:
        """Map a loose family name ("chrome", "firefox136") to fake-useragent's.

        Defaults to "Chrome" for unknown names.
        """
        lowered = family.lower()
        for name in _FAMILIES:
            if lowered.startswith(name.lower()):
                return name
        return "Chrome"

    def get(self) -> str:
        """Return a random UA string from the configured browser family."""
        return self._ua.random

    def get_headers(self) -> dict[str, str]:
        """Return request headers with User-Agent and, for Chrome, Client Hints."""
        headers: dict[str, str] = {
            "User-Agent": self.get(),
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }
        if self._browser_family in ("Chrome", "Edge"):
            headers["Sec-CH-UA-Platform"] = '"Windows"'
            headers["Sec-CH-UA-Mobile"] = "?0"
        return headers
