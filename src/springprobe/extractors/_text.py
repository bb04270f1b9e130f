"""Text helpers for template matching over Java sources.

Masking keeps every character offset intact (masked characters become
spaces, newlines survive) so match positions in the masked text are valid
in the original text.
"""

from __future__ import annotations

import re

_LEXEME = re.compile(
    r'"""[\s\S]*?"""'  # text block
    r'|"(?:\\.|[^"\\\n])*"'
    r"|'(?:\\.|[^'\\\n])*'"
    r"|//[^\n]*"
    r"|/\*[\s\S]*?\*/"
)

_NOT_NEWLINE = re.compile(r"[^\n]")


def _blank(s: str) -> str:
    return _NOT_NEWLINE.sub(" ", s)


def mask(text: str, *, strings: bool = True, comments: bool = True) -> str:
    """Blank out the contents of string literals and/or comments.

    String delimiters are kept so ``@Query("...")`` still reads as an
    annotation with an argument.
    """

    def repl(m: re.Match[str]) -> str:
        lexeme = m.group(0)
        if lexeme.startswith(("//", "/*")):
            return _blank(lexeme) if comments else lexeme
        if not strings:
            return lexeme
        quote = '"""' if lexeme.startswith('"""') else lexeme[0]
        inner = lexeme[len(quote) : len(lexeme) - len(quote)]
        return quote + _blank(inner) + quote

    return _LEXEME.sub(repl, text)


def strip_comments(text: str) -> str:
    """Blank out comments, leaving string literals readable."""
    return mask(text, strings=False, comments=True)


def preamble(text: str, start: int) -> str:
    """Text between the previous declaration boundary and ``start``.

    The boundary is the last ``;``, ``{`` or ``}`` before ``start``; what
    lies between is the annotations and modifiers of the declaration that
    begins at ``start``. Expects masked text so braces inside literals do
    not count.
    """
    cut = max(text.rfind(ch, 0, start) for ch in ";{}")
    return text[cut + 1 : start]
