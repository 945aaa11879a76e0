"""Access card number conventions shared by membership and audit.

Card numbers arrive from several systems with inconsistent zero padding
("00123" from the card system, "123" typed into a customer profile), so
every comparison goes through the canonical form.
"""

from __future__ import annotations


def canonical_card_number(number: str) -> str:
    """Strip surrounding whitespace and leading zeros."""
    return number.strip().lstrip("0")


def parse_card_list(value: str | None) -> tuple[str, ...]:
    """Split a comma separated card list into canonical numbers.

    Empty segments are dropped. Order is preserved and duplicates are
    removed.
    """
    if not value:
        return ()

    cards: list[str] = []
    for raw in value.split(","):
        card = canonical_card_number(raw)
        if card and card not in cards:
            cards.append(card)
    return tuple(cards)
