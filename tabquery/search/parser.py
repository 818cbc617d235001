"""
Query Parser - Builds a ParsedQuery from the token stream.

Parsing is lenient and never fails:
  - unknown bangs degrade to plain text terms
  - unknown commands are dropped
  - a value bang with nothing after it simply has no value

Text-scope (`!title`, `!url`) and value (`!groupname`, `!groupcolor`)
bangs swallow the following text tokens as their value, up to the next
bang or command. Unquoted commas never reach the parser (the tokenizer
drops them), so `!gn work, play` has the value "work play". Only a quoted
value can hold a comma: `!t "news, sports"` ends the value at the comma and
puts "sports" back into the stream as an ordinary text term.
"""

from loguru import logger

from .registry import BANG_REGISTRY, COMMAND_REGISTRY, resolve_bang, resolve_command
from .tokenizer import tokenize
from .types import BangFilter, ParsedQuery, Position, SearchToken, SortType

SORT_DIRECTIVES: dict[str, SortType] = {
    "sort:title": "title",
    "sort:alpha": "title",
    "sort:url": "url",
    "sort:index": "index",
}

_VALUE_KINDS = ("text-scope", "value")


def _split_terms(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _collect_value(tokens: list[SearchToken], start: int) -> tuple[list[str], int]:
    """
    Gather the text tokens following a value bang.

    Returns the collected pieces and the index of the first token not
    consumed. A comma can only appear in a quoted token; the remainder
    after it is spliced into `tokens` right after the token it came from.
    """
    collected: list[str] = []
    j = start

    while j < len(tokens):
        token = tokens[j]
        if token.kind != "text":
            break

        comma = token.value.find(",")
        if comma == -1:
            collected.append(token.value)
            j += 1
            continue

        head = token.value[:comma].strip()
        if head:
            collected.append(head)

        tail = token.value[comma + 1:]
        remainder = tail.lstrip()
        if remainder:
            offset = token.raw.find(token.value)
            remainder_start = (
                token.position.start + max(offset, 0) + comma + 1 + (len(tail) - len(remainder))
            )
            tokens.insert(j + 1, SearchToken(
                "text", remainder, remainder, Position(remainder_start, token.position.end)
            ))
        j += 1
        break

    return collected, j


def parse_query(query: str) -> ParsedQuery:
    """
    Parse a query string into text terms, bang filters, commands and sort.

    Args:
        query: Raw query as typed, e.g. "youtube, music !audio /freeze"

    Returns:
        A new ParsedQuery. `errors` is always empty.
    """
    trimmed = query.strip()
    tokens = list(tokenize(trimmed))

    text_terms: list[str] = []
    bangs: list[BangFilter] = []
    commands = []
    sort: SortType = "index"

    i = 0
    while i < len(tokens):
        token = tokens[i]

        if token.kind == "text":
            text_terms.extend(_split_terms(token.value))
            i += 1
            continue

        if token.kind in ("bang", "exclude"):
            bang_type = resolve_bang(token.value)
            if bang_type is None:
                if token.value:
                    text_terms.append(token.value)
                i += 1
                continue

            value = None
            end = token.position.end
            i += 1
            if BANG_REGISTRY[bang_type].kind in _VALUE_KINDS:
                collected, next_index = _collect_value(tokens, i)
                if collected:
                    value = " ".join(collected)
                    end = tokens[next_index - 1].position.end
                i = next_index

            bangs.append(BangFilter(
                type=bang_type,
                value=value,
                negated=token.kind == "exclude",
                raw=token.raw + (f" {value}" if value else ""),
                position=Position(token.position.start, end),
            ))
            continue

        if token.kind == "command":
            command = resolve_command(token.value)
            if command is not None:
                commands.append(command)
            else:
                logger.debug(f"Dropping unknown command: /{token.value}")
            i += 1
            continue

        i += 1

    for index, term in enumerate(text_terms):
        directive = SORT_DIRECTIVES.get(term.lower())
        if directive is not None:
            sort = directive
            del text_terms[index]
            break

    return ParsedQuery(
        text_terms=tuple(text_terms),
        bangs=tuple(bangs),
        commands=tuple(commands),
        sort=sort,
        errors=(),
        raw=trimmed,
    )


def has_destructive_commands(parsed: ParsedQuery) -> bool:
    """True if any command in the query is marked destructive (e.g. /delete)."""
    return any(COMMAND_REGISTRY[command].destructive for command in parsed.commands)


def to_query_string(parsed: ParsedQuery) -> str:
    """Re-serialise a parsed query in canonical form."""
    parts = []

    if parsed.text_terms:
        parts.append(", ".join(parsed.text_terms))

    for bang in parsed.bangs:
        prefix = "-!" if bang.negated else "!"
        value = f" {bang.value}" if bang.value else ""
        parts.append(f"{prefix}{bang.type}{value}")

    for command in parsed.commands:
        parts.append(f"/{command}")

    return " ".join(parts)
