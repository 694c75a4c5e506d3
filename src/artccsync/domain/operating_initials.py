"""Allocation of two-letter operating initials."""

from __future__ import annotations

from itertools import product
from string import ascii_uppercase
from typing import TYPE_CHECKING

from artccsync.domain.errors import OperatingInitialsExhaustedError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


def _letters(value: str) -> str:
    return "".join(char for char in value.upper() if char in ascii_uppercase)


def _candidates(first_name: str, last_name: str) -> Iterator[str]:
    first = _letters(first_name)
    last = _letters(last_name)
    if first and last:
        yield first[0] + last[0]
        for letter in last[1:]:
            yield first[0] + letter
        for letter in first[1:]:
            yield letter + last[0]
    for pair in product(ascii_uppercase, repeat=2):
        yield "".join(pair)


def allocate_operating_initials(
    in_use: Iterable[str],
    first_name: str,
    last_name: str,
) -> str:
    """Return the first free pair of initials for the given name.

    Name-derived pairs are tried first (first+last initial, first initial with each
    later letter of the last name, each later letter of the first name with the last
    initial), then every pair from ``AA`` to ``ZZ``.
    """

    taken = {initials.upper() for initials in in_use if initials}
    for candidate in _candidates(first_name, last_name):
        if candidate not in taken:
            return candidate
    raise OperatingInitialsExhaustedError("All 676 operating initials are assigned")
