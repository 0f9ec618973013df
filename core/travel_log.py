"""Mr X's travel log.

One entry is written per leg Mr X travels. The ticket is always public;
the location is only recorded when the leg falls on a reveal round.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .board import GameSetup, NodeId
from .constants import Ticket
from .moves import Move, legs


@dataclass(frozen=True)
class LogEntry:
    """A single travel log entry.

    Attributes:
        ticket: The ticket Mr X used for the leg.
        location: Where Mr X ended the leg, or None if the round was hidden.
    """

    ticket: Ticket
    location: Optional[NodeId] = None

    @classmethod
    def hidden(cls, ticket: Ticket) -> LogEntry:
        return cls(ticket=ticket)

    @classmethod
    def revealed(cls, ticket: Ticket, location: NodeId) -> LogEntry:
        return cls(ticket=ticket, location=location)

    @property
    def is_revealed(self) -> bool:
        return self.location is not None


def log_entries_for(setup: GameSetup, move: Move, round_index: int) -> tuple[LogEntry, ...]:
    """Build the log entries for Mr X's move starting at ``round_index``.

    Each leg of a double move is checked against its own round.
    """
    entries = []
    for offset, (ticket, destination) in enumerate(legs(move)):
        if setup.is_reveal_round(round_index + offset):
            entries.append(LogEntry.revealed(ticket, destination))
        else:
            entries.append(LogEntry.hidden(ticket))
    return tuple(entries)


def last_known_location(log: tuple[LogEntry, ...]) -> Optional[NodeId]:
    """Return the most recently revealed location, if any."""
    for entry in reversed(log):
        if entry.is_revealed:
            return entry.location
    return None
