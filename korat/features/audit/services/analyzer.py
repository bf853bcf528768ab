import asyncio
import time
from typing import Optional

import httpx

from korat.features.audit.schemas.audit import AnalysisResult
from korat.features.audit.utils.page_checks import (
    run_accessibility_checks,
    run_performance_checks,
    run_seo_checks,
    run_technical_checks,
)
from korat.features.audit.utils.page_stats import collect_page_stats
from korat.features.audit.utils.scoring import calculate_overall_score, calculate_score
from korat.platform.config import settings
from korat.platform.exceptions import AnalysisError
from korat.platform.logger import get_logger

logger = get_logger("analyzer")


def normalize_url(url: str) -> str:
    url = url.strip()
    if not url.startswith("http://") and not url.startswith("https://"):
        return f"https://{url}"
    return url


async def fetch_page(url: str, client: Optional[httpx.AsyncClient] = None) -> str:
    """
    Fetch the page body as text with a single GET.

    Args:
        url: Normalized URL to fetch
        client: Optional client to reuse; a short-lived one is created otherwise

    Returns:
        str: The full response body

    Raises:
        AnalysisError: On timeout, transport failure or a non-2xx response
    """
    headers = {"User-Agent": settings.FETCH_USER_AGENT}
    timeout = httpx.Timeout(settings.FETCH_TIMEOUT_SECONDS)

    async def _get() -> httpx.Response:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                return await own_client.get(url, headers=headers)
        return await client.get(url, headers=headers, timeout=timeout)

    try:
        # httpx timeouts apply per phase; wait_for bounds the whole request
        response = await asyncio.wait_for(_get(), timeout=settings.FETCH_TIMEOUT_SECONDS)
    except (httpx.TimeoutException, asyncio.TimeoutError):
        raise AnalysisError(f"Request timed out after {settings.FETCH_TIMEOUT_SECONDS:g} seconds")
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise AnalysisError(str(e) or e.__class__.__name__)

    if not response.is_success:
        raise AnalysisError(f"HTTP {response.status_code}: {response.reason_phrase}")

    return response.text


def analyze_html(url: str, html: str) -> dict:
    """
    Run the full check battery over already-fetched HTML.

    Returns the issue lists, category scores and page statistics; the scan
    duration is left to the caller.
    """
    seo_issues = run_seo_checks(html)
    accessibility_issues = run_accessibility_checks(html)
    technical_issues = run_technical_checks(url, html)
    performance_issues = run_performance_checks(html)

    performance_score = calculate_score(performance_issues)
    accessibility_score = calculate_score(accessibility_issues)
    seo_score = calculate_score(seo_issues)
    technical_score = calculate_score(technical_issues)

    stats = collect_page_stats(url, html)

    return {
        "overall_score": calculate_overall_score(
            [seo_score, performance_score, accessibility_score, technical_score]
        ),
        "performance_score": performance_score,
        "accessibility_score": accessibility_score,
        "seo_score": seo_score,
        "technical_score": technical_score,
        "performance_issues": performance_issues,
        "seo_issues": seo_issues,
        "accessibility_issues": accessibility_issues,
        "technical_issues": technical_issues,
        **stats.model_dump(),
    }


async def analyze_url(url: str, client: Optional[httpx.AsyncClient] = None) -> AnalysisResult:
    """
    Fetch a page and score it. Either the whole analysis succeeds or an
    AnalysisError is raised; no partial result is returned.
    """
    started = time.monotonic()
    target = normalize_url(url)
    logger.info(f"Starting analysis for URL: {target}")

    try:
        html = await fetch_page(target, client=client)
    except AnalysisError as e:
        logger.warning(f"Fetch failed for {target}: {e.message}")
        raise AnalysisError(f"Failed to analyze URL: {e.message}") from e

    payload = analyze_html(target, html)
    result = AnalysisResult(
        **payload,
        scan_duration_ms=int((time.monotonic() - started) * 1000),
    )

    logger.info(
        f"Analysis complete for {target}: overall={result.overall_score} "
        f"seo={result.seo_score} accessibility={result.accessibility_score} "
        f"technical={result.technical_score} performance={result.performance_score} "
        f"({result.scan_duration_ms}ms)"
    )
    return result
