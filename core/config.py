"""Configuration for ticket allotments and the reveal schedule.

Defaults follow the standard board game: detectives start with a fixed
set of transport tickets, Mr X with a smaller set plus secret and double
tickets, and the game runs for 24 rounds with five reveal rounds.
"""

from dataclasses import dataclass

from .constants import Ticket


@dataclass(frozen=True)
class TicketConfig:
    """Starting ticket counts for each side."""

    DETECTIVE_TAXI: int = 11
    DETECTIVE_BUS: int = 8
    DETECTIVE_UNDERGROUND: int = 4

    MR_X_TAXI: int = 4
    MR_X_BUS: int = 3
    MR_X_UNDERGROUND: int = 3
    MR_X_DOUBLE: int = 2
    MR_X_SECRET: int = 5

    def detective_tickets(self) -> dict[Ticket, int]:
        """Starting tickets for a single detective."""
        return {
            Ticket.TAXI: self.DETECTIVE_TAXI,
            Ticket.BUS: self.DETECTIVE_BUS,
            Ticket.UNDERGROUND: self.DETECTIVE_UNDERGROUND,
            Ticket.SECRET: 0,
            Ticket.DOUBLE: 0,
        }

    def mr_x_tickets(self) -> dict[Ticket, int]:
        """Starting tickets for Mr X."""
        return {
            Ticket.TAXI: self.MR_X_TAXI,
            Ticket.BUS: self.MR_X_BUS,
            Ticket.UNDERGROUND: self.MR_X_UNDERGROUND,
            Ticket.SECRET: self.MR_X_SECRET,
            Ticket.DOUBLE: self.MR_X_DOUBLE,
        }


@dataclass(frozen=True)
class ScheduleConfig:
    """Round count and reveal rounds (1-indexed, as printed on the board)."""

    TOTAL_ROUNDS: int = 24
    REVEAL_ROUNDS: tuple[int, ...] = (3, 8, 13, 18, 24)

    def rounds(self) -> tuple[bool, ...]:
        """Build the reveal flag for every round, in order.

        Raises:
            ValueError: If a reveal round lies outside the schedule.
        """
        for round_number in self.REVEAL_ROUNDS:
            if not 1 <= round_number <= self.TOTAL_ROUNDS:
                raise ValueError(
                    f"Reveal round {round_number} outside 1..{self.TOTAL_ROUNDS}"
                )
        reveals = set(self.REVEAL_ROUNDS)
        return tuple(i + 1 in reveals for i in range(self.TOTAL_ROUNDS))


DEFAULT_TICKET_CONFIG = TicketConfig()
DEFAULT_SCHEDULE_CONFIG = ScheduleConfig()
