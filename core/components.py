"""Game components for the pursuit game engine.

This module contains the TicketInventory, the per-player count of each
ticket kind. Inventories are immutable: spending or receiving tickets
returns a new inventory.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from .constants import Ticket


class TicketInventory:
    """Immutable mapping from ticket kind to a non-negative count.

    Kinds not present in the mapping count as zero. Also serves as the
    read-only ticket view handed out by the game state.
    """

    __slots__ = ("_counts",)

    def __init__(self, counts: Optional[Mapping[Ticket, int]] = None):
        """Initialize the inventory.

        Args:
            counts: Ticket counts; missing kinds default to zero.

        Raises:
            ValueError: If any count is negative.
        """
        normalized = {ticket: 0 for ticket in Ticket}
        for ticket, count in (counts or {}).items():
            ticket = Ticket(ticket)
            if count < 0:
                raise ValueError(f"Ticket count for {ticket.value} cannot be negative: {count}")
            normalized[ticket] = int(count)
        self._counts = MappingProxyType(normalized)

    def get_count(self, ticket: Ticket) -> int:
        """Return how many tickets of a kind are held."""
        return self._counts[ticket]

    def has(self, ticket: Ticket) -> bool:
        """Check if at least one ticket of a kind is held."""
        return self._counts[ticket] > 0

    def has_at_least(self, ticket: Ticket, amount: int) -> bool:
        """Check if at least ``amount`` tickets of a kind are held."""
        return self._counts[ticket] >= amount

    def spend(self, ticket: Ticket, amount: int = 1) -> TicketInventory:
        """Return a new inventory with tickets removed.

        Raises:
            ValueError: If fewer than ``amount`` tickets are held.
        """
        if not self.has_at_least(ticket, amount):
            raise ValueError(
                f"Cannot spend {amount} {ticket.value} ticket(s), "
                f"only {self._counts[ticket]} held"
            )
        return self._with_count(ticket, self._counts[ticket] - amount)

    def receive(self, ticket: Ticket, amount: int = 1) -> TicketInventory:
        """Return a new inventory with tickets added.

        Raises:
            ValueError: If ``amount`` is negative.
        """
        if amount < 0:
            raise ValueError(f"Cannot receive a negative number of tickets: {amount}")
        return self._with_count(ticket, self._counts[ticket] + amount)

    def _with_count(self, ticket: Ticket, count: int) -> TicketInventory:
        counts = dict(self._counts)
        counts[ticket] = count
        return TicketInventory(counts)

    def total(self) -> int:
        """Return the number of tickets of all kinds."""
        return sum(self._counts.values())

    def to_dict(self) -> dict[Ticket, int]:
        """Return a mutable copy of the counts."""
        return dict(self._counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TicketInventory):
            return NotImplemented
        return dict(self._counts) == dict(other._counts)

    def __hash__(self) -> int:
        return hash(tuple(self._counts[ticket] for ticket in Ticket))

    def __repr__(self) -> str:
        held = ", ".join(
            f"{ticket.value}={count}" for ticket, count in self._counts.items() if count
        )
        return f"TicketInventory({held})"
