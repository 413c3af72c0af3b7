from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlsplit

from .contracts import (
    AccessibilityCheckError,
    CheckConfig,
    CheckError,
    CheckResult,
    CheckSummary,
    FetchError,
    InvalidUrlError,
    NoUrlsError,
    UrlReport,
)
from .fetcher import PageFetcher, RequestsFetcher
from .rules import audit_html

logger = logging.getLogger(__name__)

_BLOCKED_HOSTS = ("localhost", "127.0.0.1")
_PRIVATE_PREFIXES = ("192.168.", "10.", "172.16.", "172.17.", "172.18.", "172.19.", "172.2", "172.3")


def _get_fetcher(config: CheckConfig) -> PageFetcher:
    return RequestsFetcher(timeout_s=config.timeout_s, user_agent=config.user_agent)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def validate_url(raw: str) -> str:
    """
    Normalize a user-supplied URL and refuse local or private targets.

    A missing scheme gets `https://`. Returns the normalized URL.

    Raises:
        InvalidUrlError: too short, unparsable, or pointing at a
            loopback, private-range, or `.local` host.
    """

    if raw is None or len(raw.strip()) < 3:
        raise InvalidUrlError("Invalid URL format")

    url = raw.strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url

    try:
        hostname = urlsplit(url).hostname
    except ValueError as e:
        raise InvalidUrlError(f"Invalid URL format: {e}") from e
    if not hostname:
        raise InvalidUrlError("Invalid URL format: missing host")

    if (
        hostname in _BLOCKED_HOSTS
        or hostname.startswith(_PRIVATE_PREFIXES)
        or hostname.endswith(".local")
    ):
        raise InvalidUrlError("Invalid URL format: Private and localhost URLs are not allowed")
    return url


def check_url(url: str, *, fetcher: PageFetcher) -> UrlReport:
    try:
        page = fetcher.fetch(url)
    except FetchError as e:
        return UrlReport(url=url, status_code=0, score=0, error=str(e), timestamp=_now())

    report = audit_html(page.html)
    logger.info(
        "[A11Y] %s status=%d score=%d issues=%d warnings=%d",
        url,
        page.status_code,
        report.score,
        len(report.issues),
        len(report.warnings),
    )
    return UrlReport(
        url=url,
        status_code=page.status_code,
        score=report.score,
        issues=report.issues,
        warnings=report.warnings,
        info=report.info,
        summary=report.summary,
        timestamp=_now(),
    )


def summarize(reports: list[UrlReport]) -> CheckSummary:
    total = len(reports)
    avg = sum(r.score for r in reports) / total if total else 0.0
    return CheckSummary(
        total=total,
        total_issues=sum(len(r.issues) for r in reports),
        total_warnings=sum(len(r.warnings) for r in reports),
        # round half up
        avg_score=int(avg + 0.5),
    )


def check_urls(urls: list[str] | tuple[str, ...], *, fetcher: PageFetcher) -> list[UrlReport]:
    """
    Validate every URL, then fetch and audit them one after another.

    Validation is all-or-nothing: one bad URL means nothing is fetched.
    A fetch failure only affects that URL's report.

    Raises:
        NoUrlsError: `urls` is empty.
        InvalidUrlError: any URL fails `validate_url`.
    """

    if not urls:
        raise NoUrlsError("Please provide at least one valid URL")

    valid: list[str] = []
    for raw in urls:
        try:
            valid.append(validate_url(raw))
        except InvalidUrlError as e:
            raise InvalidUrlError(f"Please provide a valid URL for {raw}. Error: {e}") from e

    return [check_url(url, fetcher=fetcher) for url in valid]


def run_accessibility_check(
    *, config: CheckConfig, fetcher: Optional[PageFetcher] = None
) -> CheckResult:
    """
    Entrypoint: audit every URL in `config` and summarize.

    When no fetcher is passed a requests-backed one is created and closed
    before returning.
    """

    owned = fetcher is None
    active = _get_fetcher(config) if owned else fetcher
    try:
        reports = check_urls(config.urls, fetcher=active)
    except AccessibilityCheckError as e:
        return CheckResult(
            ok=False,
            results=[],
            summary=None,
            errors=[CheckError(code=e.code, message=str(e), detail={"urls": list(config.urls)})],
        )
    finally:
        if owned:
            active.close()

    return CheckResult(ok=True, results=reports, summary=summarize(reports), errors=[])
