"""Tests for same-site link ranking (links-fallback mode)."""

from __future__ import annotations

from bs4 import BeautifulSoup

from mirror.scraper.links import LinkPolicy, LinkScorer

_BASE = "https://www.example.com/news/"

_PAGE = """\
<html><body>
  <main>
    <article>
      <h2><a href="/2024/frogs">Scientists discover a new species of frog</a></h2>
      <p><a href="/2024/rivers">Why the rivers in the north are running dry this year</a></p>
    </article>
  </main>
  <div>
    <a href="https://blog.example.com/post">A rather interesting post about local history</a>
    <a href="https://other.org/story">An external story that should never be listed</a>
    <a href="/short">Too short</a>
    <a href="/subscribe">Subscribe to our newsletter for daily updates</a>
    <a href="/account/login?next=/">Access your personal reading list and settings</a>
    <a href="#top">Back to the top of this very long page</a>
    <a href="mailto:desk@example.com">Write to the news desk with your tips</a>
  </div>
</body></html>
"""


class TestRank:
    def test_filters_and_orders_candidates(self) -> None:
        links = LinkScorer().rank(_PAGE, _BASE)
        urls = [link.url for link in links]

        assert urls == [
            "https://www.example.com/2024/frogs",
            "https://www.example.com/2024/rivers",
            "https://blog.example.com/post",
        ]
        scores = [link.score for link in links]
        assert scores == sorted(scores, reverse=True)

    def test_deduplicates_keeping_best_score(self) -> None:
        html = """\
<body>
  <div><a href="/a#comments">Plain mention of the same long article</a></div>
  <h1><a href="/a">Headline mention of the same long article</a></h1>
</body>
"""
        links = LinkScorer().rank(html, "https://example.com/")

        assert len(links) == 1
        assert links[0].url == "https://example.com/a"
        assert links[0].title == "Headline mention of the same long article"

    def test_caps_result_count(self) -> None:
        anchors = "".join(
            f'<a href="/story/{i}">Story number {i} with a sufficiently long headline</a>'
            for i in range(25)
        )
        links = LinkScorer().rank(f"<body>{anchors}</body>", "https://example.com/")
        assert len(links) == 15

        links = LinkScorer(LinkPolicy(max_links=3)).rank(
            f"<body>{anchors}</body>", "https://example.com/"
        )
        assert len(links) == 3

    def test_no_candidates(self) -> None:
        assert LinkScorer().rank("<body><p>No anchors here.</p></body>", _BASE) == []


class TestScore:
    def _anchor(self, html: str):
        return BeautifulSoup(html, "html.parser").find("a")

    def test_plain_anchor_scores_length_and_title_case(self) -> None:
        title = "Scientists discover a new species of frog"
        anchor = self._anchor(f'<div><a href="/x">{title}</a></div>')
        assert LinkScorer().score(anchor, title) == len(title) + 25

    def test_lowercase_title_gets_no_title_bonus(self) -> None:
        title = "scientists discover a new species of frog"
        anchor = self._anchor(f'<div><a href="/x">{title}</a></div>')
        assert LinkScorer().score(anchor, title) == len(title)

    def test_context_bonuses(self) -> None:
        title = "scientists discover a new species of frog"
        anchor = self._anchor(
            f'<main><article><div id="content"><h3><a href="/x">{title}</a></h3></div></article></main>'
        )
        assert LinkScorer().score(anchor, title) == len(title) + 45 + 35 + 50 + 40

    def test_length_score_is_capped(self) -> None:
        title = "x" * 400
        anchor = self._anchor(f'<a href="/x">{title}</a>')
        assert LinkScorer().score(anchor, title) == 180
