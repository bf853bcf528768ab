"""
Heuristic page checks.

Every check is a pure function over the raw HTML (or the normalized URL) and
classifies the page into exactly one outcome, so each returns a single
AuditIssue. The only exception is `check_image_alts`, which stays silent on a
page with no images.

Matching is done with regular expressions over the text, not a DOM parser.
"""
import re
from typing import List, Optional

from korat.features.audit.schemas.audit import AuditIssue, Severity
from korat.features.audit.utils.scoring import round_half_up

META_DESCRIPTION_MAX_LENGTH = 160
TITLE_MAX_LENGTH = 60
PAGE_SIZE_WARNING_KB = 500
PAGE_SIZE_ERROR_KB = 1000

META_DESCRIPTION_RE = re.compile(
    r"""<meta\s+name=["']description["']\s+content=["']([^"']+)["']""", re.IGNORECASE
)
TITLE_RE = re.compile(r"<title>([^<]+)</title>", re.IGNORECASE)
H1_RE = re.compile(r"<h1[^>]*>.*?</h1>", re.IGNORECASE)
IMG_RE = re.compile(r"<img[^>]+>", re.IGNORECASE)
HTML_LANG_RE = re.compile(r"<html[^>]+lang=", re.IGNORECASE)
CANONICAL_RE = re.compile(r"""<link[^>]+rel=["']canonical["']""", re.IGNORECASE)
VIEWPORT_RE = re.compile(r"""<meta[^>]+name=["']viewport["']""", re.IGNORECASE)


def _issue(
    issue_id: str,
    title: str,
    severity: Severity,
    description: str,
    suggestion: Optional[str] = None,
) -> AuditIssue:
    return AuditIssue(
        id=issue_id,
        title=title,
        severity=severity,
        description=description,
        suggestion=suggestion,
    )


# ─────────────────────────────────────────────────────────────
# SEO
# ─────────────────────────────────────────────────────────────

def check_meta_description(html: str) -> AuditIssue:
    match = META_DESCRIPTION_RE.search(html)
    if not match:
        return _issue(
            "seo-1",
            "Missing meta description",
            Severity.ERROR,
            "Your page is missing a meta description tag.",
            "Add a compelling meta description under 160 characters that includes your target keyword.",
        )

    length = len(match.group(1))
    if length > META_DESCRIPTION_MAX_LENGTH:
        return _issue(
            "seo-2",
            "Meta description too long",
            Severity.WARNING,
            f"Meta description is {length} characters. Google typically displays 150-160.",
            "Shorten your meta description to under 160 characters.",
        )

    return _issue(
        "seo-pass-1",
        "Meta description present",
        Severity.PASS,
        f"Meta description found ({length} characters).",
    )


def check_title(html: str) -> AuditIssue:
    match = TITLE_RE.search(html)
    if not match:
        return _issue(
            "seo-3",
            "Missing title tag",
            Severity.ERROR,
            "Your page is missing a title tag.",
            "Add a descriptive title tag under 60 characters.",
        )

    length = len(match.group(1))
    if length > TITLE_MAX_LENGTH:
        return _issue(
            "seo-4",
            "Title tag is too long",
            Severity.WARNING,
            f"Title is {length} characters. Google typically displays 50-60 characters.",
            "Shorten your title to under 60 characters while keeping the main keyword near the beginning.",
        )

    return _issue(
        "seo-pass-2",
        "Title tag optimal",
        Severity.PASS,
        f"Title tag found ({length} characters).",
    )


def check_h1(html: str) -> AuditIssue:
    count = len(H1_RE.findall(html))
    if count == 0:
        return _issue(
            "seo-5",
            "No H1 tag found",
            Severity.ERROR,
            "Your page is missing an H1 tag.",
            "Add exactly one H1 tag that clearly describes the page content.",
        )

    if count > 1:
        return _issue(
            "seo-6",
            "Multiple H1 tags detected",
            Severity.ERROR,
            f"Found {count} H1 tags on this page. You should have exactly one.",
            "Keep only one H1 tag that clearly describes the page content. Convert others to H2 or H3.",
        )

    return _issue(
        "seo-pass-3",
        "H1 tag present",
        Severity.PASS,
        "One H1 tag found on the page.",
    )


def run_seo_checks(html: str) -> List[AuditIssue]:
    return [check_meta_description(html), check_title(html), check_h1(html)]


# ─────────────────────────────────────────────────────────────
# Accessibility
# ─────────────────────────────────────────────────────────────

def check_image_alts(html: str) -> Optional[AuditIssue]:
    """
    An image counts as having alt text when its tag contains the literal
    `alt=`, whatever the value. Returns None for a page without images.
    """
    images = IMG_RE.findall(html)
    missing = [img for img in images if "alt=" not in img]

    if missing:
        return _issue(
            "a11y-1",
            "Images missing alt attributes",
            Severity.ERROR,
            f"{len(missing)} out of {len(images)} images are missing alt attributes.",
            "Add descriptive alt text to all images for better accessibility and SEO.",
        )

    if images:
        return _issue(
            "a11y-pass-1",
            "Image alt attributes present",
            Severity.PASS,
            f"All {len(images)} images have alt attributes. Great for accessibility and SEO!",
        )

    return None


def check_lang_attribute(html: str) -> AuditIssue:
    if not HTML_LANG_RE.search(html):
        return _issue(
            "a11y-2",
            "Missing lang attribute",
            Severity.WARNING,
            "HTML tag is missing a lang attribute.",
            'Add lang="en" (or appropriate language code) to your HTML tag.',
        )

    return _issue(
        "a11y-pass-2",
        "Language declared",
        Severity.PASS,
        "HTML lang attribute is present.",
    )


def run_accessibility_checks(html: str) -> List[AuditIssue]:
    issues = []
    image_issue = check_image_alts(html)
    if image_issue is not None:
        issues.append(image_issue)
    issues.append(check_lang_attribute(html))
    return issues


# ─────────────────────────────────────────────────────────────
# Technical
# ─────────────────────────────────────────────────────────────

def check_https(url: str) -> AuditIssue:
    if url.startswith("https://"):
        return _issue(
            "tech-pass-1",
            "HTTPS enabled",
            Severity.PASS,
            "Your site uses HTTPS. Secure connections are essential for SEO and user trust.",
        )

    return _issue(
        "tech-1",
        "Not using HTTPS",
        Severity.ERROR,
        "Your site is not using HTTPS.",
        "Enable HTTPS to improve security and SEO rankings.",
    )


def check_canonical(html: str) -> AuditIssue:
    if not CANONICAL_RE.search(html):
        return _issue(
            "tech-2",
            "Missing canonical URL",
            Severity.WARNING,
            "No canonical link element found on the page.",
            "Add a canonical URL to prevent duplicate content issues.",
        )

    return _issue(
        "tech-pass-2",
        "Canonical URL present",
        Severity.PASS,
        "Canonical link tag found.",
    )


def check_viewport(html: str) -> AuditIssue:
    if not VIEWPORT_RE.search(html):
        return _issue(
            "tech-3",
            "Missing viewport meta tag",
            Severity.ERROR,
            "Page is missing a viewport meta tag.",
            'Add <meta name="viewport" content="width=device-width, initial-scale=1.0"> for mobile responsiveness.',
        )

    return _issue(
        "tech-pass-3",
        "Viewport meta tag present",
        Severity.PASS,
        "Mobile viewport is configured.",
    )


def run_technical_checks(url: str, html: str) -> List[AuditIssue]:
    return [check_https(url), check_canonical(html), check_viewport(html)]


# ─────────────────────────────────────────────────────────────
# Performance
# ─────────────────────────────────────────────────────────────

def page_size_kb(html: str) -> float:
    return len(html.encode("utf-8")) / 1024


def check_page_size(html: str) -> AuditIssue:
    size_kb = page_size_kb(html)
    shown = round_half_up(size_kb)

    if size_kb > PAGE_SIZE_ERROR_KB:
        return _issue(
            "perf-1",
            "Large page size",
            Severity.ERROR,
            f"Page size is {shown}KB. Should be under 1000KB.",
            "Optimize images, minify CSS/JS, and enable compression.",
        )

    if size_kb > PAGE_SIZE_WARNING_KB:
        return _issue(
            "perf-2",
            "Page size could be optimized",
            Severity.WARNING,
            f"Page size is {shown}KB.",
            "Consider optimizing images and minifying resources.",
        )

    return _issue(
        "perf-pass-1",
        "Page size is good",
        Severity.PASS,
        f"Page size is {shown}KB.",
    )


def run_performance_checks(html: str) -> List[AuditIssue]:
    return [check_page_size(html)]
