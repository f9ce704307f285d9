"""
Command-line tokenizer.

Splits a raw input line on runs of whitespace. A double quote opens a
quoted run that keeps embedded whitespace until the matching closing quote;
the quotes themselves are dropped:

    >>> tokenize('mkcourse "Go Mastery" intro')
    ['mkcourse', 'Go Mastery', 'intro']

An unterminated quote swallows the rest of the line into one token that
keeps the literal opening quote:

    >>> tokenize('start "Go Basics')
    ['start', '"Go Basics']

A quote in the middle of a word joins the quoted run to that word
(``ab"c d"`` is the single token ``abc d``), and ``""`` is an empty token.
"""

from __future__ import annotations

QUOTE = '"'


def tokenize(raw: str) -> list[str]:
    """Split a command line into tokens.

    Args:
        raw: The line as typed by the user.

    Returns:
        List of tokens. Empty or whitespace-only input yields an empty list.
    """
    tokens: list[str] = []
    current: list[str] = []
    in_token = False
    in_quote = False
    quote_at = 0  # index in `current` where the open quote started

    for ch in raw:
        if in_quote:
            if ch == QUOTE:
                in_quote = False
            else:
                current.append(ch)
        elif ch == QUOTE:
            in_quote = True
            in_token = True
            quote_at = len(current)
        elif ch.isspace():
            if in_token:
                tokens.append("".join(current))
                current = []
                in_token = False
        else:
            current.append(ch)
            in_token = True

    if in_quote:
        current.insert(quote_at, QUOTE)
    if in_token:
        tokens.append("".join(current))

    return tokens


def split_command(raw: str) -> tuple[str, list[str]]:
    """Split a command line into a lower-cased command name and its arguments.

    Returns ("", []) for blank input.
    """
    tokens = tokenize(raw)
    if not tokens:
        return "", []
    return tokens[0].lower(), tokens[1:]
