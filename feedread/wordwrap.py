"""Word wrap for long text in feed dumps."""

import regex

GRAPHEME = regex.compile(r"\X")


def wordwrap(text: str, max_line: int = 72, max_word: int = 20) -> str:
    """Wrap each line of ``text`` to at most ``max_line`` characters.

    Lengths count user-perceived characters (grapheme clusters), so a
    letter is never split from its combining marks. A long line is broken
    at the rightmost space within its last ``max_word`` columns, and that
    space is dropped. Words too long to fit are broken at the margin.
    Existing line breaks are kept.

    Args:
        text: Text to wrap
        max_line: Maximum line length
        max_word: Width of the window searched for a break point

    Returns:
        The wrapped text

    Raises:
        ValueError: If max_word is not smaller than max_line
    """
    if max_word >= max_line:
        raise ValueError(
            f"max_word ({max_word}) must be smaller than max_line ({max_line})"
        )
    return "\n".join(_wrap_line(line, max_line, max_word) for line in text.splitlines())


def _wrap_line(line: str, max_line: int, max_word: int) -> str:
    clusters = GRAPHEME.findall(line)
    pieces = []
    while len(clusters) > max_line:
        space = _rfind_space(clusters, max_line - max_word, max_line)
        if space == -1:
            pieces.append("".join(clusters[:max_line]))
            clusters = clusters[max_line:]
        else:
            pieces.append("".join(clusters[:space]))
            clusters = clusters[space + 1 :]
    pieces.append("".join(clusters))
    return "\n".join(pieces)


def _rfind_space(clusters: list[str], start: int, end: int) -> int:
    for index in range(end - 1, start - 1, -1):
        if clusters[index] == " ":
            return index
    return -1
