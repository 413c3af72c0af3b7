"""
Static accessibility checks for web pages.

URLs are validated (no loopback or private hosts), fetched with requests,
and audited with pattern-based WCAG rules. Each page gets a 0-100 score.
"""

from .contracts import (
    AuditReport,
    CheckConfig,
    CheckResult,
    Finding,
    InvalidUrlError,
    UrlReport,
)
from .module import check_urls, run_accessibility_check, validate_url
from .rules import audit_html

__all__ = [
    "AuditReport",
    "CheckConfig",
    "CheckResult",
    "Finding",
    "InvalidUrlError",
    "UrlReport",
    "audit_html",
    "check_urls",
    "run_accessibility_check",
    "validate_url",
]
