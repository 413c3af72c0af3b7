from __future__ import annotations

import unittest
from unittest.mock import MagicMock, patch

import requests

from a11y_check.contracts import (
    CheckConfig,
    FetchedPage,
    FetchError,
    InvalidUrlError,
    NoUrlsError,
)
from a11y_check.fetcher import PageFetcher, RequestsFetcher
from a11y_check.module import check_urls, run_accessibility_check, summarize, validate_url
from a11y_check.rules import audit_html, score_for

GOOD_HTML = (
    '<!DOCTYPE html><html lang="en"><head><title>Home</title></head><body>'
    '<a href="#main">Skip to content</a><header></header><main id="main">'
    '<h1>Hi</h1><img src="a.png" alt="Logo">'
    '<label for="q">Search</label><input id="q" type="text">'
    "</main></body></html>"
)

BAD_HTML = (
    "<html><body><img src='x.png'><img src='y.png' alt=''>"
    "<input type='text'><h1>a</h1><h1>b</h1></body></html>"
)


class _FakeFetcher(PageFetcher):
    def __init__(self, pages: dict[str, str], failing: set[str] | None = None) -> None:
        self.pages = pages
        self.failing = failing or set()
        self.fetched: list[str] = []
        self.closed = False

    def fetch(self, url: str) -> FetchedPage:
        self.fetched.append(url)
        if url in self.failing:
            raise FetchError("HTTP request failed: connection refused")
        return FetchedPage(url=url, status_code=200, html=self.pages.get(url, ""))

    def close(self) -> None:
        self.closed = True


class TestAuditHtml(unittest.TestCase):
    def test_clean_page_scores_full(self) -> None:
        report = audit_html(GOOD_HTML)
        self.assertEqual(report.issues, [])
        self.assertEqual(report.warnings, [])
        self.assertEqual(report.score, 100)
        self.assertEqual(report.summary.images_with_alt, 1)
        self.assertEqual(report.summary.form_controls_count, 1)
        self.assertIn('Title found: "Home"', [f.message for f in report.info])

    def test_problem_page(self) -> None:
        report = audit_html(BAD_HTML)
        self.assertEqual(
            sorted(f.message for f in report.issues),
            [
                "Image missing alt attribute",
                "Missing lang attribute on html element",
                "Missing or empty title tag",
            ],
        )
        self.assertEqual(
            sorted(f.message for f in report.warnings),
            [
                "Form control without id, label, or aria-label",
                "Image with empty alt attribute",
                "Missing or invalid DOCTYPE declaration",
                "Multiple h1 headings found (2)",
                "No ARIA landmarks or semantic HTML5 elements found",
                "No skip navigation link found",
            ],
        )
        self.assertEqual(report.score, 100 - 3 * 5 - 6 * 2)
        missing_alt = [f for f in report.issues if f.element == "img[1]"][0]
        self.assertEqual(missing_alt.code, "<img src='x.png'>")

    def test_empty_document(self) -> None:
        for html in ("", "   \n"):
            report = audit_html(html)
            self.assertEqual(report.score, 0)
            self.assertEqual([f.message for f in report.issues], ["No HTML content found"])

    def test_aria_label_and_unmatched_label(self) -> None:
        html = GOOD_HTML.replace(
            '<input id="q" type="text">',
            '<input id="q" type="text"><input id="other"><select aria-label="Pick"><option>1</option></select>',
        )
        report = audit_html(html)
        self.assertEqual(
            [(f.message, f.element) for f in report.warnings],
            [("Form control without associated label or aria-label", "form-control[2]")],
        )

    def test_score_is_clamped(self) -> None:
        self.assertEqual(score_for(0, 0), 100)
        self.assertEqual(score_for(30, 0), 0)
        html = GOOD_HTML + "<img src='x'>" * 25
        self.assertEqual(audit_html(html).score, 0)


class TestValidateUrl(unittest.TestCase):
    def test_normalizes(self) -> None:
        self.assertEqual(validate_url("example.com"), "https://example.com")
        self.assertEqual(validate_url("  http://example.org/a?b=1 "), "http://example.org/a?b=1")

    def test_rejects(self) -> None:
        for raw in (
            "",
            "ab",
            "https://",
            "localhost:3000",
            "http://127.0.0.1/",
            "192.168.1.1",
            "10.0.0.5",
            "172.16.0.1",
            "https://172.20.1.1",
            "printer.local",
        ):
            with self.assertRaises(InvalidUrlError, msg=raw):
                validate_url(raw)


class TestCheckUrls(unittest.TestCase):
    def test_batch_with_fetch_failure(self) -> None:
        fetcher = _FakeFetcher(
            {"https://good.example": GOOD_HTML, "https://bad.example": BAD_HTML},
            failing={"https://down.example"},
        )
        reports = check_urls(["good.example", "bad.example", "down.example"], fetcher=fetcher)

        self.assertEqual([r.score for r in reports], [100, 73, 0])
        down = reports[2]
        self.assertEqual((down.status_code, down.issues), (0, []))
        self.assertIn("connection refused", down.error or "")

        summary = summarize(reports)
        self.assertEqual(summary.total, 3)
        self.assertEqual(summary.total_issues, 3)
        self.assertEqual(summary.total_warnings, 6)
        self.assertEqual(summary.avg_score, 58)

    def test_invalid_url_stops_before_fetching(self) -> None:
        fetcher = _FakeFetcher({})
        with self.assertRaises(InvalidUrlError):
            check_urls(["good.example", "localhost"], fetcher=fetcher)
        self.assertEqual(fetcher.fetched, [])

    def test_no_urls(self) -> None:
        with self.assertRaises(NoUrlsError):
            check_urls([], fetcher=_FakeFetcher({}))


class TestRunAccessibilityCheck(unittest.TestCase):
    def test_owned_fetcher_is_closed(self) -> None:
        fetcher = _FakeFetcher({"https://good.example": GOOD_HTML})
        with patch("a11y_check.module._get_fetcher", return_value=fetcher):
            result = run_accessibility_check(config=CheckConfig(urls=("good.example",)))
        self.assertTrue(result.ok)
        self.assertTrue(fetcher.closed)
        assert result.summary is not None
        self.assertEqual(result.summary.avg_score, 100)
        self.assertEqual(result.to_dict()["results"][0]["url"], "https://good.example")

    def test_invalid_is_reported(self) -> None:
        fetcher = _FakeFetcher({})
        result = run_accessibility_check(config=CheckConfig(urls=("10.1.1.1",)), fetcher=fetcher)
        self.assertFalse(result.ok)
        self.assertEqual([e.code for e in result.errors], ["INVALID_URL"])
        self.assertFalse(fetcher.closed)

    def test_config_validation(self) -> None:
        with self.assertRaises(TypeError):
            CheckConfig(urls=["a.com"])  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            CheckConfig(urls=("a.com",), timeout_s=0)


class TestRequestsFetcher(unittest.TestCase):
    def test_success_keeps_status(self) -> None:
        fetcher = RequestsFetcher(timeout_s=3.0)
        response = MagicMock(status_code=404, text="<html></html>")
        with patch.object(fetcher.session, "get", return_value=response) as get:
            page = fetcher.fetch("https://example.com")
        get.assert_called_once_with("https://example.com", timeout=3.0, allow_redirects=False)
        self.assertEqual((page.status_code, page.html), (404, "<html></html>"))
        self.assertIn("toolbox-a11y", fetcher.session.headers["User-Agent"])
        fetcher.close()

    def test_redirect_is_returned_not_followed(self) -> None:
        fetcher = RequestsFetcher()
        response = MagicMock(status_code=302, text="", headers={"Location": "http://127.0.0.1/admin"})
        with patch.object(fetcher.session, "get", return_value=response) as get:
            page = fetcher.fetch("https://example.com/start")
        self.assertEqual(get.call_count, 1)
        self.assertFalse(get.call_args.kwargs["allow_redirects"])
        self.assertEqual(page.status_code, 302)
        self.assertEqual(page.url, "https://example.com/start")
        fetcher.close()

    def test_transport_errors_become_fetch_errors(self) -> None:
        fetcher = RequestsFetcher()
        with patch.object(fetcher.session, "get", side_effect=requests.exceptions.Timeout()):
            with self.assertRaises(FetchError) as ctx:
                fetcher.fetch("https://example.com")
        self.assertEqual(str(ctx.exception), "HTTP request timeout")
        with patch.object(
            fetcher.session, "get", side_effect=requests.exceptions.ConnectionError("refused")
        ):
            with self.assertRaises(FetchError):
                fetcher.fetch("https://example.com")
        fetcher.close()


if __name__ == "__main__":
    unittest.main()
