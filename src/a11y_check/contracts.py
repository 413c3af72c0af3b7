from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; toolbox-a11y/0.1)"
DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

ERROR_WEIGHT = 5
WARNING_WEIGHT = 2
MAX_SCORE = 100


class FindingKind(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AccessibilityCheckError(Exception):
    code = "A11Y_CHECK_ERROR"


class NoUrlsError(AccessibilityCheckError):
    code = "NO_URLS"


class InvalidUrlError(AccessibilityCheckError):
    code = "INVALID_URL"


class FetchError(AccessibilityCheckError):
    code = "FETCH_FAILED"


@dataclass(frozen=True, slots=True)
class Finding:
    kind: FindingKind
    severity: Severity
    message: str
    element: str
    guideline: str | None = None
    code: str | None = None  # offending markup, truncated to 100 chars


@dataclass(frozen=True, slots=True)
class AuditSummary:
    total_issues: int
    total_warnings: int
    total_info: int
    images_count: int = 0
    images_with_alt: int = 0
    images_without_alt: int = 0
    headings_count: int = 0
    form_controls_count: int = 0


@dataclass(frozen=True, slots=True)
class AuditReport:
    issues: list[Finding]
    warnings: list[Finding]
    info: list[Finding]
    score: int
    summary: AuditSummary


@dataclass(frozen=True, slots=True)
class FetchedPage:
    url: str
    status_code: int
    html: str


@dataclass(frozen=True, slots=True)
class UrlReport:
    """
    Audit outcome for one URL.

    A URL that could not be fetched has `status_code=0`, `error` set, no
    findings, and a score of 0.
    """

    url: str
    status_code: int
    score: int
    issues: list[Finding] = field(default_factory=list)
    warnings: list[Finding] = field(default_factory=list)
    info: list[Finding] = field(default_factory=list)
    summary: AuditSummary | None = None
    error: str | None = None
    timestamp: str | None = None


@dataclass(frozen=True, slots=True)
class CheckSummary:
    total: int
    total_issues: int
    total_warnings: int
    avg_score: int


@dataclass(frozen=True, slots=True)
class CheckError:
    code: str
    message: str
    detail: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class CheckConfig:
    urls: tuple[str, ...]
    timeout_s: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if not isinstance(self.urls, tuple):
            raise TypeError("urls must be a tuple of strings")
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")


@dataclass(frozen=True, slots=True)
class CheckResult:
    ok: bool
    results: list[UrlReport]
    summary: CheckSummary | None
    errors: list[CheckError]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
