import logging
from typing import Any
from urllib.parse import urlencode

import requests

from topartists.errors import DecodingError, LastFMAPIError, TransportError
from topartists.models import Config

logger = logging.getLogger(__name__)

API_ROOT = "https://ws.audioscrobbler.com"
API_VERSION = "2.0"
METHOD = "user.gettopartists"
RESPONSE_FORMAT = "json"
DEFAULT_TIMEOUT = 30


def build_url(config: Config) -> str:
    """Return the user.gettopartists GET URL for `config`. Does not touch the network."""
    query = urlencode(
        [
            ("method", METHOD),
            ("user", config.username),
            ("api_key", config.api_key),
            ("format", RESPONSE_FORMAT),
            ("period", config.period),
            ("limit", config.limit),
        ]
    )
    return f"{API_ROOT}/{API_VERSION}/?{query}"


def redact(url: str, api_key: str) -> str:
    """Hide the API key before a URL goes to the log."""
    return url.replace(urlencode({"api_key": api_key}), "api_key=***")


class LastFMClient:
    def __init__(self, session: requests.Session | None = None, timeout: float = DEFAULT_TIMEOUT):
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch_top_artists(self, url: str) -> Any:
        """
        GET `url` once and return the decoded JSON body.

        Raises TransportError when the request fails or Last.fm answers with an
        error status, LastFMAPIError when the body is a Last.fm error payload and
        DecodingError when the body is not JSON.
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"Could not reach Last.fm: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            if not response.ok:
                raise TransportError(f"Last.fm returned HTTP {response.status_code}.") from exc
            raise DecodingError("Could not convert Last.fm response to JSON.") from exc

        # Last.fm reports bad users / keys as {"error": <code>, "message": ...}, usually with a 4xx.
        if isinstance(data, dict) and "error" in data:
            raise LastFMAPIError(data.get("error"), data.get("message", "Unknown Last.fm error"))

        if not response.ok:
            raise TransportError(f"Last.fm returned HTTP {response.status_code}.")

        logger.debug("Last.fm answered HTTP %d.", response.status_code)
        return data

    def get_top_artists(self, config: Config) -> Any:
        """Fetch the decoded top-artists response for the configured user."""
        url = build_url(config)
        logger.info("Requesting top %d artist(s) for %s (%s).", config.limit, config.username, config.period)
        logger.debug("GET %s", redact(url, config.api_key))
        return self.fetch_top_artists(url)
