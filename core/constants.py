"""Constants and enums for the pursuit game engine."""

from enum import Enum


class Piece(Enum):
    """Game pieces: Mr X (the evader) and the detective colours (pursuers)."""

    MR_X = "mr_x"
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    WHITE = "white"
    YELLOW = "yellow"

    def is_evader(self) -> bool:
        """Check if this piece is Mr X."""
        return self is Piece.MR_X

    def is_pursuer(self) -> bool:
        """Check if this piece is a detective."""
        return self is not Piece.MR_X


class Ticket(Enum):
    """Ticket kinds held by players."""

    TAXI = "taxi"
    BUS = "bus"
    UNDERGROUND = "underground"
    SECRET = "secret"  # Any edge, transport type hidden
    DOUBLE = "double"  # Two moves in one turn


class Transport(Enum):
    """Transport kinds that can connect two locations."""

    TAXI = "taxi"
    BUS = "bus"
    UNDERGROUND = "underground"
    FERRY = "ferry"

    @property
    def required_ticket(self) -> Ticket:
        """The ticket consumed when travelling by this transport."""
        return _REQUIRED_TICKETS[self]


_REQUIRED_TICKETS = {
    Transport.TAXI: Ticket.TAXI,
    Transport.BUS: Ticket.BUS,
    Transport.UNDERGROUND: Ticket.UNDERGROUND,
    Transport.FERRY: Ticket.SECRET,
}

# Tickets only Mr X may ever hold
EVADER_ONLY_TICKETS = frozenset({Ticket.SECRET, Ticket.DOUBLE})

DETECTIVE_PIECES = (
    Piece.RED,
    Piece.GREEN,
    Piece.BLUE,
    Piece.WHITE,
    Piece.YELLOW,
)

MAX_DETECTIVES = len(DETECTIVE_PIECES)
