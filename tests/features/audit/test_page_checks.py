import pytest

from korat.features.audit.schemas.audit import Severity
from korat.features.audit.utils import page_checks
from korat.features.audit.utils.page_checks import (
    check_canonical,
    check_h1,
    check_https,
    check_image_alts,
    check_lang_attribute,
    check_meta_description,
    check_page_size,
    check_title,
    check_viewport,
    run_accessibility_checks,
    run_performance_checks,
    run_seo_checks,
    run_technical_checks,
)


class TestMetaDescription:
    def test_missing(self):
        issue = check_meta_description("<html><head></head></html>")
        assert issue.id == "seo-1"
        assert issue.severity == Severity.ERROR
        assert issue.suggestion

    def test_exactly_160_characters_passes(self):
        html = f'<meta name="description" content="{"a" * 160}">'
        issue = check_meta_description(html)
        assert issue.id == "seo-pass-1"
        assert issue.severity == Severity.PASS
        assert issue.suggestion is None
        assert "160 characters" in issue.description

    def test_161_characters_warns(self):
        html = f'<meta name="description" content="{"a" * 161}">'
        issue = check_meta_description(html)
        assert issue.id == "seo-2"
        assert issue.severity == Severity.WARNING
        assert "161 characters" in issue.description

    def test_tag_match_is_case_insensitive(self):
        html = "<META NAME='description' CONTENT='Hello there'>"
        issue = check_meta_description(html)
        assert issue.severity == Severity.PASS
        assert "11 characters" in issue.description

    def test_content_before_name_is_not_recognised(self):
        html = '<meta content="Hello there" name="description">'
        assert check_meta_description(html).id == "seo-1"


class TestTitle:
    def test_missing(self):
        issue = check_title("<head></head>")
        assert issue.id == "seo-3"
        assert issue.severity == Severity.ERROR

    def test_exactly_60_characters_passes(self):
        issue = check_title(f"<title>{'t' * 60}</title>")
        assert issue.id == "seo-pass-2"
        assert issue.severity == Severity.PASS

    def test_61_characters_warns(self):
        issue = check_title(f"<title>{'t' * 61}</title>")
        assert issue.id == "seo-4"
        assert issue.severity == Severity.WARNING
        assert "61 characters" in issue.description

    def test_title_with_attributes_is_not_matched(self):
        assert check_title('<title id="x">Hello</title>').id == "seo-3"

    def test_empty_title_counts_as_missing(self):
        assert check_title("<title></title>").id == "seo-3"


class TestH1:
    def test_none(self):
        issue = check_h1("<body><h2>Sub</h2></body>")
        assert issue.id == "seo-5"
        assert issue.severity == Severity.ERROR

    def test_exactly_one(self):
        issue = check_h1('<h1 class="hero">Welcome</h1>')
        assert issue.id == "seo-pass-3"
        assert issue.severity == Severity.PASS

    def test_three_h1_tags(self):
        html = "<H1>One</H1><h1>Two</h1><h1 id='x'>Three</h1>"
        issue = check_h1(html)
        assert issue.id == "seo-6"
        assert issue.severity == Severity.ERROR
        assert issue.description.startswith("Found 3 H1 tags on this page.")

    def test_h1_spanning_lines_is_not_counted(self):
        assert check_h1("<h1>Split\nheading</h1>").id == "seo-5"


class TestImageAlts:
    def test_no_images_is_silent(self):
        assert check_image_alts("<p>No pictures</p>") is None

    def test_all_images_have_alt(self):
        html = '<img src="a.png" alt="A"><img src="b.png" alt="">'
        issue = check_image_alts(html)
        assert issue.id == "a11y-pass-1"
        assert "All 2 images" in issue.description

    def test_some_images_missing_alt(self):
        html = '<img src="a.png" alt="A"><img src="b.png"><img src="c.png">'
        issue = check_image_alts(html)
        assert issue.id == "a11y-1"
        assert issue.severity == Severity.ERROR
        assert issue.description == "2 out of 3 images are missing alt attributes."

    def test_alt_substring_in_other_attribute_counts(self):
        html = '<img src="a.png" data-alt="nothing">'
        assert check_image_alts(html).severity == Severity.PASS


class TestLangAttribute:
    def test_present(self):
        assert check_lang_attribute('<html lang="en">').id == "a11y-pass-2"

    def test_missing(self):
        issue = check_lang_attribute("<html><body></body></html>")
        assert issue.id == "a11y-2"
        assert issue.severity == Severity.WARNING


class TestTechnical:
    def test_https(self):
        assert check_https("https://example.com").id == "tech-pass-1"

    def test_plain_http(self):
        issue = check_https("http://example.com")
        assert issue.id == "tech-1"
        assert issue.severity == Severity.ERROR

    @pytest.mark.parametrize(
        "html",
        [
            '<link rel="canonical" href="https://example.com/">',
            "<LINK href='https://example.com/' REL='canonical'>",
        ],
    )
    def test_canonical_present(self, html):
        assert check_canonical(html).id == "tech-pass-2"

    def test_canonical_missing(self):
        issue = check_canonical('<link rel="stylesheet" href="a.css">')
        assert issue.id == "tech-2"
        assert issue.severity == Severity.WARNING

    def test_viewport_present(self):
        html = '<meta charset="utf-8" name="viewport" content="width=device-width">'
        assert check_viewport(html).id == "tech-pass-3"

    def test_viewport_missing(self):
        issue = check_viewport('<meta charset="utf-8">')
        assert issue.id == "tech-3"
        assert issue.severity == Severity.ERROR


class TestPageSize:
    def test_small_page(self):
        issue = check_page_size("x" * 1024)
        assert issue.id == "perf-pass-1"
        assert issue.description == "Page size is 1KB."

    def test_exactly_500_kb_passes(self):
        assert check_page_size("x" * 500 * 1024).id == "perf-pass-1"

    def test_just_over_500_kb_warns(self):
        issue = check_page_size("x" * (500 * 1024 + 1))
        assert issue.id == "perf-2"
        assert issue.severity == Severity.WARNING
        assert issue.description == "Page size is 500KB."

    def test_over_1000_kb_errors(self):
        issue = check_page_size("x" * (1200 * 1024))
        assert issue.id == "perf-1"
        assert issue.severity == Severity.ERROR
        assert "1200KB" in issue.description

    def test_size_is_measured_in_utf8_bytes(self):
        # Each "é" is two bytes in UTF-8.
        assert page_checks.page_size_kb("é" * 512) == 1.0

    def test_size_rounds_half_up(self):
        assert check_page_size("x" * 1536).description == "Page size is 2KB."


class TestCategoryBatteries:
    def test_issue_counts_per_category(self, make_html):
        html = make_html()
        assert len(run_seo_checks(html)) == 3
        assert len(run_accessibility_checks(html)) == 2
        assert len(run_technical_checks("https://example.com", html)) == 3
        assert len(run_performance_checks(html)) == 1

    def test_accessibility_drops_image_check_without_images(self, make_html):
        issues = run_accessibility_checks(make_html(images=()))
        assert [issue.id for issue in issues] == ["a11y-pass-2"]

    def test_order_follows_check_definitions(self):
        ids = [issue.id for issue in run_seo_checks("")]
        assert ids == ["seo-1", "seo-3", "seo-5"]

    def test_checks_are_idempotent(self, make_html):
        html = make_html(h1_count=2, images=('<img src="x.png">',))
        assert run_seo_checks(html) == run_seo_checks(html)
        assert run_accessibility_checks(html) == run_accessibility_checks(html)
