"""Unit tests for ContentScorer."""

from __future__ import annotations

import pytest

from pagelens.config import ScoringConfig
from pagelens.protocols import ContentScore, LayoutProvider, Rect
from pagelens.scoring import ContentScorer

WORDS_20 = " ".join(f"word{i}" for i in range(20))


class FakeLayout:
    """Layout provider returning fixed geometry."""

    def __init__(self, left: float = 0.0, viewport: float = 1000.0, width: str = "auto") -> None:
        self.left = left
        self.viewport = viewport
        self.width = width

    def viewport_width(self) -> float:
        return self.viewport

    def bounding_rect(self, element) -> Rect:
        return Rect(left=self.left, top=0, width=100, height=100)

    def computed_width(self, element) -> str:
        return self.width


class BrokenLayout(FakeLayout):
    """Layout provider for a detached tree: every query fails."""

    def viewport_width(self) -> float:
        raise RuntimeError("no layout engine")

    def bounding_rect(self, element) -> Rect:
        raise RuntimeError("no layout engine")

    def computed_width(self, element) -> str:
        raise RuntimeError("no layout engine")


def _first(make_soup, html, selector="div"):
    return make_soup(html).select_one(selector)


class TestTextSignals:
    """Word count, paragraphs and density penalties."""

    def test_word_count(self, scorer, make_soup):
        element = _first(make_soup, f"<div>{WORDS_20}</div>")
        assert scorer.score(element) == pytest.approx(20)

    def test_empty_element_scores_zero(self, scorer, make_soup):
        assert scorer.score(_first(make_soup, "<div></div>")) == 0

    def test_more_paragraphs_score_higher(self, scorer, make_soup):
        base = _first(make_soup, f"<div><p>{WORDS_20}</p></div>")
        more = _first(make_soup, f"<div><p>{WORDS_20}</p><p></p><p></p></div>")

        assert scorer.score(more) > scorer.score(base)
        assert scorer.score(more) - scorer.score(base) == pytest.approx(20)

    def test_link_density_penalty(self, scorer, make_soup):
        plain = _first(make_soup, f"<div>{WORDS_20}</div>")
        linked = _first(make_soup, "<div>" + " ".join(f"<a href='#'>word{i}</a>" for i in range(20)) + "</div>")

        assert scorer.score(linked) < scorer.score(plain)
        assert scorer.score(plain) - scorer.score(linked) == pytest.approx(5)

    def test_image_density_penalty(self, scorer, make_soup):
        plain = _first(make_soup, f"<div>{WORDS_20}</div>")
        with_images = _first(make_soup, f"<div>{WORDS_20}<img src='a'><img src='b'></div>")

        assert scorer.score(plain) - scorer.score(with_images) == pytest.approx(3 * 2 / 20)

    def test_density_floor_for_wordless_element(self, scorer, make_soup):
        element = _first(make_soup, "<div><a href='#'></a><img src='x'></div>")
        assert scorer.score(element) == pytest.approx(-5 - 3)

    def test_nested_tables_penalised(self, scorer, make_soup):
        plain = _first(make_soup, f"<div>{WORDS_20}</div>")
        tabled = _first(make_soup, f"<div>{WORDS_20}<table></table><table></table></div>")

        assert scorer.score(plain) - scorer.score(tabled) == pytest.approx(10)


class TestContentHints:
    """Fixed bonuses for dates, bylines, classes and footnotes."""

    def test_date_mention(self, scorer, make_soup):
        element = _first(make_soup, "<div>Posted March 3, 2021</div>")
        assert scorer.score(element) == pytest.approx(4 + 10)

    def test_byline(self, scorer, make_soup):
        element = _first(make_soup, "<div>Written by Jane Doe</div>")
        assert scorer.score(element) == pytest.approx(4 + 10)

    @pytest.mark.parametrize("class_name", ["post-body", "Main-Content", "article"])
    def test_content_class(self, scorer, make_soup, class_name):
        element = _first(make_soup, f"<div class='{class_name}'>hello</div>")
        assert scorer.score(element) == pytest.approx(1 + 15)

    def test_unrelated_class(self, scorer, make_soup):
        assert scorer.score(_first(make_soup, "<div class='sidebar'>hello</div>")) == pytest.approx(1)

    def test_footnotes(self, scorer, make_soup):
        element = _first(make_soup, '<div>claim<sup class="reference">1</sup></div>')
        assert scorer.score(element) == pytest.approx(1 + 10)

    def test_footnote_anchor(self, scorer, make_soup):
        element = _first(make_soup, '<div>claim <a href="#fn1">1</a></div>')
        # two words, one link
        assert scorer.score(element) == pytest.approx(2 - 5 * 1 / 2 + 10)


class TestLayoutSignals:
    """Geometry-dependent signals."""

    def test_right_side_bonus(self, make_soup):
        element = _first(make_soup, "<div>hello</div>")
        right = ContentScorer(layout=FakeLayout(left=700, viewport=1000))
        left = ContentScorer(layout=FakeLayout(left=100, viewport=1000))

        assert right.score(element) - left.score(element) == pytest.approx(5)

    def test_missing_geometry_is_skipped(self, make_soup):
        element = _first(make_soup, "<table width='800'><tr><td>a</td><td>b</td><td>c</td></tr></table>", "td:nth-of-type(2)")
        scorer = ContentScorer(layout=BrokenLayout())

        # width attribute still marks the table as a layout table
        assert scorer.score(element) == pytest.approx(1 + 10)

    def test_fake_layout_satisfies_protocol(self):
        assert isinstance(FakeLayout(), LayoutProvider)


class TestTableLayout:
    """Legacy centred-column table layouts."""

    LAYOUT = """
    <table {attrs}>
      <tr><td id="nav">menu</td><td id="main">story text</td><td id="ads">ads</td></tr>
    </table>
    """

    @pytest.mark.parametrize(
        "attrs",
        ['width="760"', 'align="center"', 'class="ArticleTable"', 'style="width: 600px"'],
    )
    def test_center_cell_bonus(self, scorer, make_soup, attrs):
        soup = make_soup(self.LAYOUT.format(attrs=attrs))
        main = soup.select_one("#main")
        assert scorer.score(main) == pytest.approx(2 + 10)

    def test_edge_cells_get_no_bonus(self, scorer, make_soup):
        soup = make_soup(self.LAYOUT.format(attrs='width="760"'))
        assert scorer.score(soup.select_one("#nav")) == pytest.approx(1)
        assert scorer.score(soup.select_one("#ads")) == pytest.approx(1)

    def test_narrow_table_gets_no_bonus(self, scorer, make_soup):
        soup = make_soup(self.LAYOUT.format(attrs='width="300"'))
        assert scorer.score(soup.select_one("#main")) == pytest.approx(2)

    def test_computed_width_from_layout(self, make_soup):
        soup = make_soup(self.LAYOUT.format(attrs=""))
        wide = ContentScorer(layout=FakeLayout(width="640px"))
        relative = ContentScorer(layout=FakeLayout(width="90%"))

        assert wide.score(soup.select_one("#main")) == pytest.approx(2 + 10)
        assert relative.score(soup.select_one("#main")) == pytest.approx(2)

    def test_identical_cells_located_by_identity(self, scorer, make_soup):
        soup = make_soup('<table width="900"><tr><td>same</td><td>same</td><td>same</td></tr></table>')
        first, middle, last = soup.find_all("td")

        assert scorer.score(first) == pytest.approx(1)
        assert scorer.score(middle) == pytest.approx(1 + 10)
        assert scorer.score(last) == pytest.approx(1)

    def test_threshold_is_configurable(self, make_soup):
        soup = make_soup(self.LAYOUT.format(attrs='width="500"'))
        scorer = ContentScorer(ScoringConfig(layout_table_min_width=600))
        assert scorer.score(soup.select_one("#main")) == pytest.approx(2)


class TestSelection:
    """find_best_element and score_candidates."""

    def test_score_candidates_preserves_order(self, scorer, make_soup):
        soup = make_soup("<div id='a'>one</div><div id='b'>one two</div>")
        scores = scorer.score_candidates(soup.find_all("div"))

        assert all(isinstance(item, ContentScore) for item in scores)
        assert [item.element["id"] for item in scores] == ["a", "b"]
        assert [item.score for item in scores] == [1, 2]

    def test_picks_highest(self, scorer, make_soup):
        long_text = " ".join(["word"] * 80)
        soup = make_soup(f"<div id='nav'><a href='#'>Home</a></div><div id='story'><p>{long_text}</p></div>")

        best = scorer.find_best_element(soup.find_all("div"))
        assert best is not None
        assert best["id"] == "story"

    def test_nothing_above_threshold(self, scorer, make_soup):
        soup = make_soup(f"<div>{WORDS_20}</div><div>short</div>")
        assert scorer.find_best_element(soup.find_all("div")) is None

    def test_threshold_is_strict(self, scorer, make_soup):
        soup = make_soup("<div>" + " ".join(["w"] * 50) + "</div>")
        assert scorer.find_best_element(soup.find_all("div")) is None
        assert scorer.find_best_element(soup.find_all("div"), min_score=49) is not None

    def test_first_wins_ties(self, scorer, make_soup):
        text = " ".join(["w"] * 60)
        soup = make_soup(f"<div id='first'>{text}</div><div id='second'>{text}</div>")

        assert scorer.find_best_element(soup.find_all("div"))["id"] == "first"

    def test_empty_candidates(self, scorer):
        assert scorer.find_best_element([]) is None
