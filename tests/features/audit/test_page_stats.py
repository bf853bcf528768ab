from korat.features.audit.utils.page_stats import (
    collect_page_stats,
    count_links,
    count_words,
    security_grade,
)


def test_count_links_counts_every_anchor_with_href():
    html = (
        '<a href="/about">About</a>'
        "<a href='https://other.example/'>Elsewhere</a>"
        '<a name="top">Top</a>'
        '<a href="">Empty</a>'
    )
    assert count_links(html) == 3


def test_count_words_strips_tags():
    html = "<p>Hello   <b>big</b>\nworld</p>"
    assert count_words(html) == 3


def test_count_words_includes_script_text():
    html = "<p>One two</p><script>var x = 1;</script>"
    assert count_words(html) == 6


def test_count_words_empty_page():
    assert count_words("<html></html>") == 0


def test_security_grade():
    assert security_grade("https://example.com") == "A+"
    assert security_grade("http://example.com") == "F"


def test_collect_page_stats(make_html):
    html = make_html(images=('<img src="a.png" alt="A">', '<img src="b.png">'))
    stats = collect_page_stats("https://example.com", html)
    assert stats.images_count == 2
    assert stats.internal_links_count == 1
    assert stats.security_grade == "A+"
    assert stats.word_count > 0
