"""Line-oriented pagination and literal-text search over setting values.

Values are split on the newline character only; a trailing newline yields a
final empty line, as does an empty value.
"""

import re
from dataclasses import dataclass, field

DEFAULT_CONTEXT_LINES = 3

MATCH_MARKER = ">>> "
CONTEXT_MARKER = "    "


@dataclass
class PaginationResult:
    """A window of lines plus where it sits in the whole value."""

    lines: list[str]
    total_lines: int
    has_more: bool


@dataclass
class SearchMatch:
    """One matching line with its rendered surroundings.

    Attributes:
        line_number: 1-based number of the matching line
        line: The matching line as it appears in the value
        context: Rendered lines around the match, the match itself included
    """

    line_number: int
    line: str
    context: list[str] = field(default_factory=list)


@dataclass
class SearchResult:
    """All matching lines, in ascending line order."""

    matches: list[SearchMatch]
    total_matches: int


def paginate_value(
    value: str,
    limit: int | None = None,
    offset: int | None = None,
) -> PaginationResult:
    """Return a window of ``limit`` lines starting at line index ``offset``.

    With neither argument every line is returned. An offset past the end
    yields no lines and ``has_more=False``; ``limit=0`` yields no lines.
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    if offset is not None and offset < 0:
        raise ValueError(f"offset must be non-negative, got {offset}")

    lines = value.split("\n")
    total_lines = len(lines)

    if limit is None and offset is None:
        return PaginationResult(lines=lines, total_lines=total_lines, has_more=False)

    start = offset or 0
    end = start + limit if limit is not None else total_lines
    return PaginationResult(
        lines=lines[start:end],
        total_lines=total_lines,
        has_more=end < total_lines,
    )


def search_value(
    value: str,
    term: str,
    context_lines: int = DEFAULT_CONTEXT_LINES,
) -> SearchResult:
    """Find lines containing ``term``, case-insensitively.

    ``term`` is always matched as literal text. A line counts once however
    many times the term occurs in it. Callers must not pass the value of an
    encrypted setting.
    """
    if context_lines < 0:
        raise ValueError(f"context_lines must be non-negative, got {context_lines}")

    lines = value.split("\n")
    last_index = len(lines) - 1
    pattern = re.compile(re.escape(term), re.IGNORECASE)
    matches: list[SearchMatch] = []

    for index, line in enumerate(lines):
        if not pattern.search(line):
            continue

        start = max(0, index - context_lines)
        end = min(last_index, index + context_lines)
        context = [
            f"{MATCH_MARKER if i == index else CONTEXT_MARKER}{i + 1}: {lines[i]}"
            for i in range(start, end + 1)
        ]
        matches.append(SearchMatch(line_number=index + 1, line=line, context=context))

    return SearchResult(matches=matches, total_matches=len(matches))
