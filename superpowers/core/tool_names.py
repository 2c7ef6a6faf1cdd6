"""Parsing of tool identifiers declared by superpowers."""

import re
from typing import Any

# Declarations such as `http_call("https://...")` keep only the name part.
_CALL_SYNTAX = re.compile(r'[("]')


def parse_tool_identifier(entry: Any) -> str | None:
    """Normalize a declared tool entry into a tool identifier.

    Non-string entries are coerced to their string representation. Anything
    from the first ``(`` or ``"`` onwards is discarded, so a slightly
    malformed declaration still resolves to the tool it names.

    Args:
        entry: A value from a superpower's ``tools`` list.

    Returns:
        The identifier, or None when nothing usable remains.

    Example:
        >>> parse_tool_identifier('http_call("https://api.example.com")')
        'http_call'
        >>> parse_tool_identifier("  ") is None
        True
    """
    if entry is None:
        return None

    text = entry if isinstance(entry, str) else str(entry)
    identifier = _CALL_SYNTAX.split(text, maxsplit=1)[0].strip()
    return identifier or None


def parse_tool_identifiers(entries: list[Any] | tuple[Any, ...]) -> list[str]:
    """Parse a list of entries, dropping discards and duplicates.

    Order of first appearance is preserved.
    """
    identifiers: list[str] = []
    for entry in entries:
        identifier = parse_tool_identifier(entry)
        if identifier and identifier not in identifiers:
            identifiers.append(identifier)
    return identifiers
