"""Front matter parser for content files.

A content file starts with a TOML front matter block between ``+++``
lines, followed by the article body::

    +++
    title = "Roasting Basics"
    date = 2023-03-01
    related = ["blog/coffee/grinding"]
    +++

    Body text, kept as-is.

The body is not rendered here; that is the renderer's job.
"""

import tomllib
from datetime import UTC, date, datetime

from espresso.core.builder import ArticleParser
from espresso.core.model import Article, MalformedLinkError, RelatedLink

FRONT_MATTER_DELIMITER = "+++"

__all__ = ["FRONT_MATTER_DELIMITER", "ArticleParser", "FrontMatterParser", "ParseError"]


class ParseError(ValueError):
    """Content file could not be parsed into an article."""


class FrontMatterParser:
    """Parses TOML front matter into an Article."""

    def parse(self, source: bytes) -> Article:
        """Parse a content file.

        Args:
            source: Raw file contents (UTF-8)

        Returns:
            Article with an empty id; the builder assigns it from the file name

        Raises:
            ParseError: If front matter is missing or invalid
        """
        try:
            text = source.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Content is not valid UTF-8: {e}") from e

        front_matter, body = _split_front_matter(text)

        try:
            data = tomllib.loads(front_matter)
        except tomllib.TOMLDecodeError as e:
            raise ParseError(f"Invalid front matter: {e}") from e

        title = data.get("title")
        if not isinstance(title, str):
            raise ParseError("Front matter field 'title' must be a string")

        return Article(
            title=title,
            date=_parse_date(data.get("date")),
            description=_optional_str(data, "description"),
            hide=_optional_bool(data, "hide"),
            author=_optional_str(data, "author"),
            tags=_str_list(data, "tags"),
            related=_parse_related(_str_list(data, "related")),
            content=body,
        )


def _split_front_matter(text: str) -> tuple[str, str]:
    lines = text.lstrip("\ufeff").splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        raise ParseError(f"Content must start with a {FRONT_MATTER_DELIMITER!r} front matter block")

    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_DELIMITER:
            return "".join(lines[1:i]), "".join(lines[i + 1 :]).lstrip("\n")

    raise ParseError("Front matter block is not closed")


def _parse_date(value: object) -> datetime:
    """Normalize a TOML date, datetime or ISO string to an aware datetime."""
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            result = datetime.fromisoformat(value)
        except ValueError as e:
            raise ParseError(f"Invalid date {value!r}") from e
    else:
        raise ParseError("Front matter field 'date' must be a date")

    # Naive and aware datetimes don't compare, and list pages sort by date
    if result.tzinfo is None:
        result = result.replace(tzinfo=UTC)
    return result


def _optional_str(data: dict[str, object], name: str) -> str:
    value = data.get(name, "")
    if not isinstance(value, str):
        raise ParseError(f"Front matter field {name!r} must be a string")
    return value


def _optional_bool(data: dict[str, object], name: str) -> bool:
    value = data.get(name, False)
    if not isinstance(value, bool):
        raise ParseError(f"Front matter field {name!r} must be a boolean")
    return value


def _str_list(data: dict[str, object], name: str) -> list[str]:
    value = data.get(name, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ParseError(f"Front matter field {name!r} must be a list of strings")
    return list(value)


def _parse_related(raw_links: list[str]) -> list[RelatedLink]:
    try:
        return [RelatedLink.parse(raw) for raw in raw_links]
    except MalformedLinkError as e:
        raise ParseError(str(e)) from e
