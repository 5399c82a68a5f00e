#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/recdiff/diff/renderers/unified.py
"""Terminal rendering of ordered diffs.

Lines are colored from their tag, not from their first character, so a
removed line whose text happens to start with ``--`` is not mistaken for a
file header. :func:`colorize_diff` covers the case where only the rendered
text of a diff is available.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator, Sequence

if TYPE_CHECKING:
    from recdiff.diff.positional import PositionalLine
    from recdiff.diff.sequence import UnifiedDiff

RED = "\033[31m"
GREEN = "\033[32m"
CYAN = "\033[36m"
BOLD = "\033[1m"
RESET = "\033[0m"

TAG_COLORS: dict[str, str] = {
    "added": GREEN,
    "removed": RED,
    "context": "",
    "unchanged": "",
}


class UnifiedDiffRenderer:
    """Render unified and positional diffs, optionally with ANSI colors.

    Parameters
    ----------
    use_color : bool, default = True
        Wrap added lines in green, removed lines in red, hunk headers in cyan
        and file headers in bold

    Examples
    --------
        >>> from recdiff.diff.sequence import build_unified_diff
        >>> renderer = UnifiedDiffRenderer(use_color=False)
        >>> list(renderer.render_diff(build_unified_diff(["x"], ["y"])))
        ['--- A', '+++ B', '@@ -1,1 +1,1 @@', '+y', '-x']

    """

    def __init__(self, use_color: bool = True):
        self.use_color = use_color

    def _paint(self, text: str, color: str) -> str:
        if not self.use_color or not color:
            return text
        return f"{color}{text}{RESET}"

    def render_diff(self, diff: UnifiedDiff) -> Iterator[str]:
        """Yield the lines of a unified diff; nothing when it has no hunks."""
        if not diff.hunks:
            return
        for header in diff.header:
            yield self._paint(header, BOLD)
        for hunk in diff.hunks:
            yield self._paint(hunk.header(), CYAN)
            for line in hunk.lines:
                yield self._paint(line.render(), TAG_COLORS[line.tag])

    def render_positional(self, lines: Sequence[PositionalLine]) -> Iterator[str]:
        """Yield the lines of a positional comparison."""
        for line in lines:
            yield self._paint(line.render(), TAG_COLORS[line.tag])


def colorize_diff(diff_lines: Iterable[str], use_color: bool = True) -> Iterator[str]:
    """Colorize already rendered unified diff text by line prefix.

    The first two ``---``/``+++`` lines are treated as file headers; later
    lines are classified by their first character only.

    Parameters
    ----------
    diff_lines : iterable of str
        Lines of unified diff output
    use_color : bool, default = True
        If False, lines are passed through unchanged

    Yields
    ------
    str
        Colorized diff lines

    """
    renderer = UnifiedDiffRenderer(use_color=use_color)
    in_header = True
    for line in diff_lines:
        if in_header and (line.startswith("---") or line.startswith("+++")):
            yield renderer._paint(line, BOLD)
            continue
        in_header = False
        if line.startswith("@@"):
            yield renderer._paint(line, CYAN)
        elif line.startswith("+"):
            yield renderer._paint(line, GREEN)
        elif line.startswith("-"):
            yield renderer._paint(line, RED)
        else:
            yield line
