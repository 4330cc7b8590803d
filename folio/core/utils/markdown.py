"""Minimal markdown formatting for model answers.

Supported grammar::

    document  := block (BLANK_LINE+ block)*
    block     := paragraph? list?
    paragraph := text lines before the first list item, joined by spaces
    list      := item+ ; an item starts at a line beginning with "* ",
                 later non-item lines continue the last item

Inline emphasis is resolved left to right. At each position strong
(``**x**`` / ``__x__``) is tried before emphasis (``*x*`` / ``_x_``) and the
first opener with a matching closer wins. Openers must be followed by a
non-space character and closers preceded by one; underscores never open or
close inside a word. Markers without a closer are kept as literal text.
"""
import re
from typing import List, Tuple

from markupsafe import Markup, escape

BLOCK_SEPARATOR = re.compile(r"\n\s*\n")
LIST_PREFIX = "* "

# Tried in order at every position.
INLINE_MARKERS = (
    ("**", "strong"),
    ("__", "strong"),
    ("*", "em"),
    ("_", "em"),
)


def split_blocks(text: str) -> List[Tuple[str, List[str]]]:
    """Tokenize text into ("p", [text]) and ("ul", [items]) blocks."""
    blocks = []
    for section in BLOCK_SEPARATOR.split(text.replace("\r\n", "\n")):
        lines = [line.strip() for line in section.split("\n")]
        lines = [line for line in lines if line]
        if not lines:
            continue
        paragraph, items = [], []
        for line in lines:
            if line.startswith(LIST_PREFIX):
                items.append(line[len(LIST_PREFIX):].strip())
            elif items:
                items[-1] = f"{items[-1]} {line}".strip()
            else:
                paragraph.append(line)
        if paragraph:
            blocks.append(("p", [" ".join(paragraph)]))
        if items:
            blocks.append(("ul", items))
    return blocks


def _is_word_char(ch: str) -> bool:
    return ch.isalnum()


def _can_open(text: str, pos: int, marker: str) -> bool:
    end = pos + len(marker)
    if end >= len(text) or text[end].isspace():
        return False
    # a lone "*" directly before another "*" belongs to a strong marker
    if len(marker) == 1 and text[end] == marker:
        return False
    if marker[0] == "_" and pos > 0 and _is_word_char(text[pos - 1]):
        return False
    return True


def _can_close(text: str, pos: int, marker: str) -> bool:
    if text[pos - 1].isspace():
        return False
    end = pos + len(marker)
    if marker[0] == "_" and end < len(text) and _is_word_char(text[end]):
        return False
    return True


def _run_length(text: str, pos: int) -> int:
    end = pos
    while end < len(text) and text[end] == text[pos]:
        end += 1
    return end - pos


def _find_closer(text: str, start: int, marker: str) -> int:
    # A closer takes the last characters of a marker run, so "***" can close
    # an inner "*" and an outer "**" at once.
    pos = start + 1
    while pos < len(text):
        if text[pos] != marker[0]:
            pos += 1
            continue
        run = _run_length(text, pos)
        if run < len(marker) or (len(marker) == 1 and run == 2):
            pos += run
            continue
        close = pos + run - len(marker)
        if _can_close(text, close, marker):
            return close
        pos += run
    return -1


def format_inline(text: str) -> Markup:
    out: List[str] = []
    literal: List[str] = []
    pos = 0
    while pos < len(text):
        for marker, tag in INLINE_MARKERS:
            if not text.startswith(marker, pos) or not _can_open(text, pos, marker):
                continue
            content_start = pos + len(marker)
            close = _find_closer(text, content_start, marker)
            if close == -1:
                continue
            out.append(str(escape("".join(literal))))
            literal = []
            out.append(f"<{tag}>{format_inline(text[content_start:close])}</{tag}>")
            pos = close + len(marker)
            break
        else:
            literal.append(text[pos])
            pos += 1
    out.append(str(escape("".join(literal))))
    return Markup("".join(out))


def markdown_to_html(text: str) -> Markup:
    if not text:
        return Markup("")
    html = []
    for kind, parts in split_blocks(text):
        if kind == "p":
            html.append(f"<p>{format_inline(parts[0])}</p>")
        else:
            items = "".join(f"<li>{format_inline(item)}</li>" for item in parts)
            html.append(f"<ul>{items}</ul>")
    return Markup("".join(html))
