"""Cards grid projection from the cards ``SectionState``.

Call context:
    The web page refreshes this view model whenever the controller publishes
    a change, then renders one tile per ``CardRow``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from findash.domain.entities import Card
from findash.usecases.load_section import SectionState

from .money_format import status_label

DEFAULT_CARD_COLOR = "#7c3aed"
GRADIENT_END_COLOR = "#0ea5e9"
MASK_PREFIX = "•••• •••• ••••"


@dataclass(frozen=True)
class CardRow:
    """Display-ready fields of one card tile."""
    key: str
    brand: str
    status: str
    masked_number: str
    cardholder: str
    background: str


class CardsVM:
    """Turn card records into tiles and pick the section placeholder."""

    title = "Your Cards"

    def __init__(self) -> None:
        self.state: SectionState[Card] = SectionState()

    def apply(self, state: SectionState[Card]) -> None:
        self.state = state

    def placeholder(self) -> Optional[str]:
        """Return the text shown instead of the grid, or None to show tiles."""
        if self.state.loading:
            return "Loading cards..."
        if not self.state.items:
            return "No cards yet."
        return None

    def rows(self) -> List[CardRow]:
        return [self._to_row(index, card) for index, card in enumerate(self.state.items)]

    @staticmethod
    def gradient(color: Optional[str]) -> str:
        start = (color or "").strip() or DEFAULT_CARD_COLOR
        return f"linear-gradient(135deg, {start} 0%, {GRADIENT_END_COLOR} 100%)"

    def _to_row(self, index: int, card: Card) -> CardRow:
        last4 = card.last4[-4:] if card.last4 else "····"
        return CardRow(
            key=card.id or f"card-{index}",
            brand=card.brand or "Card",
            status=status_label(card.status),
            masked_number=f"{MASK_PREFIX} {last4}",
            cardholder=card.cardholder,
            background=self.gradient(card.color),
        )


__all__ = ["CardRow", "CardsVM"]
