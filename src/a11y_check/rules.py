from __future__ import annotations

import re

from .contracts import (
    ERROR_WEIGHT,
    MAX_SCORE,
    WARNING_WEIGHT,
    AuditReport,
    AuditSummary,
    Finding,
    FindingKind,
    Severity,
)

_I = re.IGNORECASE

_DOCTYPE_RE = re.compile(r"<!doctype\s+html>", _I)
_TITLE_RE = re.compile(r"<title[^>]*>([^<]*)</title>", _I)
_HTML_TAG_RE = re.compile(r"<html[^>]*>", _I)
_LANG_ATTR_RE = re.compile(r"lang=[\"']", _I)
_LANG_VALUE_RE = re.compile(r"lang=[\"']([^\"']+)[\"']", _I)
_IMG_RE = re.compile(r"<img[^>]+>", _I)
_ALT_ATTR_RE = re.compile(r"alt=[\"']", _I)
_ALT_VALUE_RE = re.compile(r"alt=[\"']([^\"']*)[\"']", _I)
_H1_RE = re.compile(r"<h1[^>]*>", _I)
_H2_RE = re.compile(r"<h2[^>]*>", _I)
_HEADING_RE = re.compile(r"<h[1-6][^>]*>", _I)
_CONTROL_RES = (
    re.compile(r"<input[^>]+>", _I),
    re.compile(r"<textarea[^>]+>", _I),
    re.compile(r"<select[^>]+>", _I),
)
_LABEL_RE = re.compile(r"<label[^>]*>", _I)
_ID_RE = re.compile(r"id=[\"']([^\"']+)[\"']", _I)
_ARIA_LABEL_RE = re.compile(r"aria-label=[\"']([^\"']+)[\"']", _I)
_ARIA_LABELLEDBY_RE = re.compile(r"aria-labelledby=[\"']([^\"']+)[\"']", _I)
_LANDMARK_RE = re.compile(
    r"role=[\"'](?:banner|navigation|main|complementary|contentinfo|search|form)[^\"']*[\"']", _I
)
_SEMANTIC_RE = re.compile(r"<(?:header|nav|main|aside|footer|article|section)[^>]*>", _I)
_SKIP_LINK_RES = (
    re.compile(r"<a[^>]*href=[\"']#[^\"']*[\"'][^>]*>.*skip.*</a>", _I),
    re.compile(r"<a[^>]*>.*skip.*</a>[^<]*href=[\"']#[^\"']*[\"']", _I),
)


def _snippet(tag: str) -> str:
    return tag[:100]


def score_for(issue_count: int, warning_count: int) -> int:
    penalty = issue_count * ERROR_WEIGHT + warning_count * WARNING_WEIGHT
    return max(0, min(MAX_SCORE, MAX_SCORE - penalty))


def audit_html(html: str) -> AuditReport:
    """
    Run static WCAG-oriented checks over raw HTML text.

    Checks are pattern-based, not a DOM walk: document present, DOCTYPE,
    title, `lang`, image alt text, heading structure, form labelling,
    landmarks, and a skip link. Issues cost 5 points, warnings 2.
    """

    issues: list[Finding] = []
    warnings: list[Finding] = []
    info: list[Finding] = []

    if not html or not html.strip():
        issues.append(
            Finding(
                kind=FindingKind.ERROR,
                severity=Severity.HIGH,
                message="No HTML content found",
                element="document",
                guideline="WCAG 2.1 - 4.1.1",
            )
        )
        return AuditReport(
            issues=issues,
            warnings=warnings,
            info=info,
            score=0,
            summary=AuditSummary(total_issues=1, total_warnings=0, total_info=0),
        )

    if not _DOCTYPE_RE.search(html):
        warnings.append(
            Finding(
                kind=FindingKind.WARNING,
                severity=Severity.MEDIUM,
                message="Missing or invalid DOCTYPE declaration",
                element="document",
                guideline="HTML5 Standard",
            )
        )

    title = _TITLE_RE.search(html)
    if title is None or not title.group(1).strip():
        issues.append(
            Finding(
                kind=FindingKind.ERROR,
                severity=Severity.HIGH,
                message="Missing or empty title tag",
                element="title",
                guideline="WCAG 2.1 - 2.4.2",
            )
        )
    else:
        info.append(
            Finding(
                kind=FindingKind.INFO,
                severity=Severity.LOW,
                message=f'Title found: "{title.group(1).strip()}"',
                element="title",
            )
        )

    html_tag = _HTML_TAG_RE.search(html)
    if html_tag is not None:
        if not _LANG_ATTR_RE.search(html_tag.group(0)):
            issues.append(
                Finding(
                    kind=FindingKind.ERROR,
                    severity=Severity.MEDIUM,
                    message="Missing lang attribute on html element",
                    element="html",
                    guideline="WCAG 2.1 - 3.1.1",
                )
            )
        else:
            lang = _LANG_VALUE_RE.search(html_tag.group(0))
            if lang is not None:
                info.append(
                    Finding(
                        kind=FindingKind.INFO,
                        severity=Severity.LOW,
                        message=f"Language attribute found: {lang.group(1)}",
                        element="html",
                    )
                )

    images = _IMG_RE.findall(html)
    with_alt = without_alt = empty_alt = 0
    for index, tag in enumerate(images, start=1):
        if not _ALT_ATTR_RE.search(tag):
            without_alt += 1
            issues.append(
                Finding(
                    kind=FindingKind.ERROR,
                    severity=Severity.HIGH,
                    message="Image missing alt attribute",
                    element=f"img[{index}]",
                    guideline="WCAG 2.1 - 1.1.1",
                    code=_snippet(tag),
                )
            )
            continue
        alt = _ALT_VALUE_RE.search(tag)
        if alt is not None and alt.group(1).strip():
            with_alt += 1
        else:
            empty_alt += 1
            warnings.append(
                Finding(
                    kind=FindingKind.WARNING,
                    severity=Severity.MEDIUM,
                    message="Image with empty alt attribute",
                    element=f"img[{index}]",
                    guideline="WCAG 2.1 - 1.1.1",
                    code=_snippet(tag),
                )
            )
    if images:
        info.append(
            Finding(
                kind=FindingKind.INFO,
                severity=Severity.LOW,
                message=(
                    f"Found {len(images)} image(s): {with_alt} with alt text, "
                    f"{empty_alt} with empty alt, {without_alt} without alt"
                ),
                element="images",
            )
        )

    h1_count = len(_H1_RE.findall(html))
    h2_count = len(_H2_RE.findall(html))
    heading_count = len(_HEADING_RE.findall(html))
    if h1_count == 0:
        warnings.append(
            Finding(
                kind=FindingKind.WARNING,
                severity=Severity.MEDIUM,
                message="No h1 heading found",
                element="headings",
                guideline="WCAG 2.1 - 2.4.6",
            )
        )
    elif h1_count > 1:
        warnings.append(
            Finding(
                kind=FindingKind.WARNING,
                severity=Severity.MEDIUM,
                message=f"Multiple h1 headings found ({h1_count})",
                element="headings",
                guideline="WCAG 2.1 - 2.4.6",
            )
        )
    else:
        info.append(
            Finding(
                kind=FindingKind.INFO,
                severity=Severity.LOW,
                message=(
                    f"Found {h1_count} h1 heading(s), {h2_count} h2 heading(s), "
                    f"{heading_count} total headings"
                ),
                element="headings",
            )
        )

    # inputs first, then textareas, then selects
    controls = [tag for pattern in _CONTROL_RES for tag in pattern.findall(html)]
    if controls:
        info.append(
            Finding(
                kind=FindingKind.INFO,
                severity=Severity.LOW,
                message=f"Found {len(controls)} form control(s) and {len(_LABEL_RE.findall(html))} label(s)",
                element="forms",
            )
        )
    for index, control in enumerate(controls, start=1):
        if _ARIA_LABEL_RE.search(control) or _ARIA_LABELLEDBY_RE.search(control):
            continue
        control_id = _ID_RE.search(control)
        if control_id is None:
            message = "Form control without id, label, or aria-label"
        else:
            label_for = re.compile(
                r"<label[^>]*for=[\"']" + re.escape(control_id.group(1)) + r"[\"']", _I
            )
            if label_for.search(html):
                continue
            message = "Form control without associated label or aria-label"
        warnings.append(
            Finding(
                kind=FindingKind.WARNING,
                severity=Severity.MEDIUM,
                message=message,
                element=f"form-control[{index}]",
                guideline="WCAG 2.1 - 3.3.2",
                code=_snippet(control),
            )
        )

    landmarks = len(_LANDMARK_RE.findall(html))
    semantic = len(_SEMANTIC_RE.findall(html))
    if landmarks or semantic:
        info.append(
            Finding(
                kind=FindingKind.INFO,
                severity=Severity.LOW,
                message=f"Found {landmarks} ARIA landmark(s) and {semantic} semantic element(s)",
                element="structure",
            )
        )
    else:
        warnings.append(
            Finding(
                kind=FindingKind.WARNING,
                severity=Severity.LOW,
                message="No ARIA landmarks or semantic HTML5 elements found",
                element="structure",
                guideline="WCAG 2.1 - 1.3.1",
            )
        )

    if not any(pattern.search(html) for pattern in _SKIP_LINK_RES):
        warnings.append(
            Finding(
                kind=FindingKind.WARNING,
                severity=Severity.LOW,
                message="No skip navigation link found",
                element="navigation",
                guideline="WCAG 2.1 - 2.4.1",
            )
        )

    return AuditReport(
        issues=issues,
        warnings=warnings,
        info=info,
        score=score_for(len(issues), len(warnings)),
        summary=AuditSummary(
            total_issues=len(issues),
            total_warnings=len(warnings),
            total_info=len(info),
            images_count=len(images),
            images_with_alt=with_alt,
            images_without_alt=without_alt,
            headings_count=heading_count,
            form_controls_count=len(controls),
        ),
    )
