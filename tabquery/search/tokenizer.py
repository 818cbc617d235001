"""
Tokenizer - Turns a raw query string into an ordered token stream.

Constructs are recognised without requiring delimiters between them, so
`!audio/delete` is a bang followed by a command and `youtube!a` is text
followed by a bang:

  "quoted phrase"   text
  /name             command
  !name             bang
  -!name            exclude (negated bang)
  -/name            skipped prefix, `name` continues as text
  anything else     text, up to the next `"`, `!`, `/`, `,` or `-!`/`-/`
"""

from .types import Position, SearchToken

_TEXT_STOPS = frozenset('"!/,')


def _is_letter(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _letter_at(query: str, i: int) -> bool:
    return i < len(query) and _is_letter(query[i])


def _read_name(query: str, i: int) -> int:
    """Return the end offset of the run of letters starting at i."""
    while i < len(query) and _is_letter(query[i]):
        i += 1
    return i


def tokenize(query: str) -> list[SearchToken]:
    """
    Split a query into text, bang, exclude and command tokens.

    Never raises: characters that cannot start a token of their kind fall
    back to one-character text tokens, and lone commas are dropped.
    """
    tokens: list[SearchToken] = []
    length = len(query)
    i = 0

    while i < length:
        ch = query[i]

        if ch.isspace():
            i += 1
            continue

        if ch == '"':
            start = i
            close = query.find('"', i + 1)
            end = length if close == -1 else close + 1
            literal = query[i + 1:close] if close != -1 else query[i + 1:]
            tokens.append(SearchToken("text", query[start:end], literal, Position(start, end)))
            i = end
            continue

        if ch == "/" and _letter_at(query, i + 1):
            end = _read_name(query, i + 1)
            tokens.append(SearchToken(
                "command", query[i:end], query[i + 1:end].lower(), Position(i, end)
            ))
            i = end
            continue

        if ch == "!" and _letter_at(query, i + 1):
            end = _read_name(query, i + 1)
            tokens.append(SearchToken(
                "bang", query[i:end], query[i + 1:end].lower(), Position(i, end)
            ))
            i = end
            continue

        if ch == "-" and i + 1 < length and query[i + 1] == "!" and _letter_at(query, i + 2):
            end = _read_name(query, i + 2)
            tokens.append(SearchToken(
                "exclude", query[i:end], query[i + 2:end].lower(), Position(i, end)
            ))
            i = end
            continue

        if ch == "-" and i + 1 < length and query[i + 1] == "/":
            # A negated command means nothing
            i += 2
            continue

        start = i
        while i < length:
            c = query[i]
            if c in _TEXT_STOPS:
                break
            if c == "-" and i + 1 < length and query[i + 1] in "!/":
                break
            i += 1

        run = query[start:i]
        text = run.strip()
        if text:
            text_start = start + (len(run) - len(run.lstrip()))
            tokens.append(SearchToken(
                "text", text, text, Position(text_start, text_start + len(text))
            ))
        elif i < length and query[i] == ",":
            i += 1
        elif i < length:
            # Stray delimiter that could not start a token of its own
            tokens.append(SearchToken("text", query[i], query[i], Position(i, i + 1)))
            i += 1

    return tokens
