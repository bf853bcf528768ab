import re

from korat.features.audit.schemas.audit import PageStats
from korat.features.audit.utils.page_checks import IMG_RE

ANCHOR_HREF_RE = re.compile(r"""<a[^>]+href=["'][^"']*["']""", re.IGNORECASE)
TAG_RE = re.compile(r"<[^>]+>")
WHITESPACE_RE = re.compile(r"\s+")


def count_links(html: str) -> int:
    # Every anchor with an href, same-origin or not.
    return len(ANCHOR_HREF_RE.findall(html))


def count_words(html: str) -> int:
    # Script and style contents are counted as text.
    text = TAG_RE.sub(" ", html)
    return len([word for word in WHITESPACE_RE.split(text) if word])


def security_grade(url: str) -> str:
    return "A+" if url.startswith("https://") else "F"


def collect_page_stats(url: str, html: str) -> PageStats:
    return PageStats(
        internal_links_count=count_links(html),
        images_count=len(IMG_RE.findall(html)),
        word_count=count_words(html),
        security_grade=security_grade(url),
    )
