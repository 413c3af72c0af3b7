from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import requests

from .contracts import DEFAULT_ACCEPT, DEFAULT_USER_AGENT, FetchedPage, FetchError

logger = logging.getLogger(__name__)


class PageFetcher(ABC):
    """
    Retrieves the HTML for a URL. Non-2xx responses, 3xx included, are
    returned as-is rather than raised or followed; only transport failures
    raise `FetchError`.
    """

    @abstractmethod
    def fetch(self, url: str) -> FetchedPage:
        raise NotImplementedError

    def close(self) -> None:
        return None

    def __enter__(self) -> "PageFetcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class RequestsFetcher(PageFetcher):
    def __init__(self, *, timeout_s: float = 15.0, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self.timeout_s = timeout_s
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent, "Accept": DEFAULT_ACCEPT})

    def fetch(self, url: str) -> FetchedPage:
        try:
            # only the requested host passed validate_url; redirects stay unfollowed
            response = self.session.get(url, timeout=self.timeout_s, allow_redirects=False)
        except requests.exceptions.Timeout as e:
            logger.error("[A11Y] request timeout: GET %s", url)
            raise FetchError("HTTP request timeout") from e
        except requests.exceptions.RequestException as e:
            logger.error("[A11Y] request failed: GET %s: %s", url, e)
            raise FetchError(f"HTTP request failed: {e}") from e

        return FetchedPage(url=url, status_code=response.status_code, html=response.text)

    def close(self) -> None:
        self.session.close()
