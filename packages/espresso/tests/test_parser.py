"""Tests for the front matter parser."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from espresso.core.model import RelatedLink
from espresso.parser import FrontMatterParser, ParseError


def _parse(text: str):
    return FrontMatterParser().parse(text.encode("utf-8"))


class TestFrontMatterParser:
    """Tests for FrontMatterParser.parse()."""

    def test__full_front_matter__parsed(self) -> None:
        article = _parse(
            """+++
title = "Roasting Basics"
description = "How to roast"
date = 2023-03-01
hide = true
author = "Jane"
tags = ["coffee", "roasting"]
related = ["blog/coffee/grinding", "/about"]
+++

# Roasting

Body text.
""",
        )

        assert article.title == "Roasting Basics"
        assert article.description == "How to roast"
        assert article.date == datetime(2023, 3, 1, tzinfo=UTC)
        assert article.hide is True
        assert article.author == "Jane"
        assert article.tags == ["coffee", "roasting"]
        assert article.related == [
            RelatedLink(route_path="blog/coffee", article_id="grinding"),
            RelatedLink(route_path="", article_id="about"),
        ]
        assert article.content == "# Roasting\n\nBody text.\n"
        assert article.id == ""
        assert article.related_pages == []

    def test__minimal_front_matter__defaults(self) -> None:
        article = _parse('+++\ntitle = "Post"\ndate = 2023-01-01\n+++\n')

        assert article.hide is False
        assert article.description == ""
        assert article.related == []
        assert article.content == ""

    def test__datetime_with_offset__kept(self) -> None:
        article = _parse('+++\ntitle = "Post"\ndate = 2023-01-01T10:00:00+02:00\n+++\n')

        assert article.date == datetime(2023, 1, 1, 10, tzinfo=timezone(timedelta(hours=2)))

    def test__string_date__parsed(self) -> None:
        article = _parse('+++\ntitle = "Post"\ndate = "2023-01-01T10:00:00"\n+++\n')

        assert article.date == datetime(2023, 1, 1, 10, tzinfo=UTC)

    def test__missing_front_matter__raises(self) -> None:
        with pytest.raises(ParseError, match="front matter"):
            _parse("# Just markdown\n")

    def test__unclosed_front_matter__raises(self) -> None:
        with pytest.raises(ParseError, match="not closed"):
            _parse('+++\ntitle = "Post"\n')

    def test__invalid_toml__raises(self) -> None:
        with pytest.raises(ParseError, match="Invalid front matter"):
            _parse("+++\ntitle = \n+++\n")

    def test__missing_title__raises(self) -> None:
        with pytest.raises(ParseError, match="title"):
            _parse("+++\ndate = 2023-01-01\n+++\n")

    def test__missing_date__raises(self) -> None:
        with pytest.raises(ParseError, match="date"):
            _parse('+++\ntitle = "Post"\n+++\n')

    def test__malformed_related_link__raises(self) -> None:
        with pytest.raises(ParseError, match="article id"):
            _parse('+++\ntitle = "Post"\ndate = 2023-01-01\nrelated = ["blog/"]\n+++\n')

    def test__invalid_utf8__raises(self) -> None:
        with pytest.raises(ParseError):
            FrontMatterParser().parse(b"\xff\xfe+++")


class TestRelatedLinkParse:
    """Tests for RelatedLink.parse()."""

    def test__splits_on_last_slash(self) -> None:
        link = RelatedLink.parse("blog/coffee/roasting-basics")

        assert link.route_path == "blog/coffee"
        assert link.article_id == "roasting-basics"
        assert str(link) == "blog/coffee/roasting-basics"

    def test__surrounding_slashes__stripped(self) -> None:
        assert RelatedLink.parse("/blog/post-1/") == RelatedLink.parse("blog/post-1")
