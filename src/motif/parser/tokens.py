"""Token-level helpers shared by the parser and the renderer."""

from __future__ import annotations

import re

# Identifier-shaped: dot paths plus the $-prefixed and @-prefixed names the
# renderer binds ($slots, $content, @index, ...).
IDENT_RE = re.compile(r"[A-Za-z_$@][\w.$@-]*")

INT_RE = re.compile(r"-?\d+")
FLOAT_RE = re.compile(r"-?\d+\.\d+")

# A run of non-space characters in which quoted sections may hold spaces,
# so `"hello world"` and `title="Hello world"` each stay one token.
_TOKEN_RE = re.compile(r"""(?:"[^"]*"|'[^']*'|[^\s"'])+|"[^"]*|'[^']*""")


def tokenize(text: str) -> list[str]:
    """Split helper arguments on whitespace, keeping quoted strings whole.

    Example:
        >>> tokenize('format_date created "MMMM DD, YYYY"')
        ['format_date', 'created', '"MMMM DD, YYYY"']
    """
    return _TOKEN_RE.findall(text)


def is_quoted(token: str) -> bool:
    return len(token) >= 2 and token[0] == token[-1] and token[0] in "\"'"


def unquote(token: str) -> str:
    return token[1:-1] if is_quoted(token) else token


def split_pipes(text: str) -> list[str]:
    """Split ``text`` on ``|`` characters that are outside quotes.

    Example:
        >>> split_pipes('title | truncate 20 "..|.." | upper')
        ['title ', ' truncate 20 "..|.." ', ' upper']
    """
    parts: list[str] = []
    quote: str | None = None
    start = 0
    for i, char in enumerate(text):
        if quote:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "|":
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return parts
