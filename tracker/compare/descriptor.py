"""One-line text form of a parameter change.

A change is stored as ``"<name>: '<old>' → '<new>'"``. Decoding is lenient:
a line that does not follow this shape comes back as a descriptor whose name
is the whole line and whose values are empty.
"""

from __future__ import annotations

from typing import Iterable

from loguru import logger

from tracker.compare.models import ChangeDescriptor

NAME_SEPARATOR = ":"
VALUE_SEPARATOR = "→"
QUOTE = "'"


def encode(descriptor: ChangeDescriptor) -> str:
    return (
        f"{descriptor.field_name}{NAME_SEPARATOR} "
        f"{QUOTE}{descriptor.old_value}{QUOTE} {VALUE_SEPARATOR} "
        f"{QUOTE}{descriptor.new_value}{QUOTE}"
    )


def decode(line: str) -> ChangeDescriptor:
    colon = line.find(NAME_SEPARATOR)
    arrow = line.find(VALUE_SEPARATOR)

    # The name must be non-empty and the arrow must follow the colon
    if colon <= 0 or arrow <= colon:
        logger.debug("Change line not in '<name>: <old> → <new>' form: {!r}", line)
        return ChangeDescriptor(field_name=line, old_value="", new_value="")

    return ChangeDescriptor(
        field_name=line[:colon].strip(),
        old_value=_unquote(line[colon + 1:arrow]),
        new_value=_unquote(line[arrow + 1:]),
    )


def decode_all(lines: Iterable[str]) -> list[ChangeDescriptor]:
    return [decode(line) for line in lines]


def _unquote(text: str) -> str:
    # Exactly one quote layer on each side, no escaping
    value = text.strip()
    if value.startswith(QUOTE):
        value = value[1:]
    if value.endswith(QUOTE):
        value = value[:-1]
    return value


__all__ = ["encode", "decode", "decode_all", "NAME_SEPARATOR", "VALUE_SEPARATOR"]
