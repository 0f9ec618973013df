"""Tests for the core module (constants, config, board, tickets, players, moves)."""

import dataclasses

import networkx as nx
import pytest

from core.constants import (
    Piece,
    Ticket,
    Transport,
    EVADER_ONLY_TICKETS,
    DETECTIVE_PIECES,
    MAX_DETECTIVES,
)
from core.config import (
    TicketConfig,
    ScheduleConfig,
    DEFAULT_TICKET_CONFIG,
    DEFAULT_SCHEDULE_CONFIG,
)
from core.board import make_edge_id, TransportGraph, GameSetup
from core.components import TicketInventory
from core.player import Player, make_mr_x, make_detective
from core.moves import (
    SingleMove,
    DoubleMove,
    legs,
    tickets_used,
    final_destination,
    move_sort_key,
)
from core.travel_log import LogEntry, log_entries_for, last_known_location


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def triangle() -> TransportGraph:
    """Three locations joined by taxi, with a bus between 1 and 2."""
    return TransportGraph.from_edges([
        (1, 2, {Transport.TAXI, Transport.BUS}),
        (2, 3, {Transport.TAXI}),
        (1, 3, {Transport.TAXI}),
    ])


# =============================================================================
# Constants Tests
# =============================================================================

class TestEnums:
    """Test enum definitions."""

    def test_piece_roles(self):
        """Only Mr X is the evader."""
        assert Piece.MR_X.is_evader()
        assert not Piece.MR_X.is_pursuer()
        for piece in DETECTIVE_PIECES:
            assert piece.is_pursuer()
            assert not piece.is_evader()
        assert len(Piece) == MAX_DETECTIVES + 1

    def test_ticket_values(self):
        """All ticket kinds should be defined."""
        assert Ticket.TAXI.value == "taxi"
        assert Ticket.BUS.value == "bus"
        assert Ticket.UNDERGROUND.value == "underground"
        assert Ticket.SECRET.value == "secret"
        assert Ticket.DOUBLE.value == "double"
        assert len(Ticket) == 5

    def test_required_tickets(self):
        """Each transport maps to the ticket it consumes; the ferry needs a secret ticket."""
        assert Transport.TAXI.required_ticket == Ticket.TAXI
        assert Transport.BUS.required_ticket == Ticket.BUS
        assert Transport.UNDERGROUND.required_ticket == Ticket.UNDERGROUND
        assert Transport.FERRY.required_ticket == Ticket.SECRET

    def test_evader_only_tickets(self):
        assert EVADER_ONLY_TICKETS == {Ticket.SECRET, Ticket.DOUBLE}


# =============================================================================
# Config Tests
# =============================================================================

class TestConfig:
    """Test configuration dataclasses."""

    def test_ticket_config_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_TICKET_CONFIG.DETECTIVE_TAXI = 1

    def test_detective_tickets(self):
        """Detectives never start with secret or double tickets."""
        tickets = DEFAULT_TICKET_CONFIG.detective_tickets()
        assert tickets[Ticket.TAXI] == 11
        assert tickets[Ticket.BUS] == 8
        assert tickets[Ticket.UNDERGROUND] == 4
        assert tickets[Ticket.SECRET] == 0
        assert tickets[Ticket.DOUBLE] == 0

    def test_mr_x_tickets(self):
        tickets = DEFAULT_TICKET_CONFIG.mr_x_tickets()
        assert tickets[Ticket.DOUBLE] == 2
        assert tickets[Ticket.SECRET] == 5

    def test_custom_ticket_config(self):
        config = TicketConfig(MR_X_DOUBLE=0)
        assert config.mr_x_tickets()[Ticket.DOUBLE] == 0

    def test_standard_schedule(self):
        """The standard game has 24 rounds with reveals at 3, 8, 13, 18 and 24."""
        rounds = DEFAULT_SCHEDULE_CONFIG.rounds()
        assert len(rounds) == 24
        assert [i + 1 for i, flag in enumerate(rounds) if flag] == [3, 8, 13, 18, 24]

    def test_schedule_rejects_out_of_range_reveal(self):
        with pytest.raises(ValueError):
            ScheduleConfig(TOTAL_ROUNDS=5, REVEAL_ROUNDS=(6,)).rounds()


# =============================================================================
# Board Tests
# =============================================================================

class TestMakeEdgeId:
    """Test edge ID creation."""

    def test_canonical_order(self):
        """Edge IDs should always have smaller node first."""
        assert make_edge_id(1, 5) == (1, 5)
        assert make_edge_id(5, 1) == (1, 5)


class TestTransportGraph:
    """Test TransportGraph queries."""

    def test_adjacent_nodes(self, triangle):
        assert triangle.adjacent_nodes(1) == {2, 3}
        assert triangle.adjacent_nodes(3) == {1, 2}

    def test_adjacent_nodes_unknown(self, triangle):
        assert triangle.adjacent_nodes(99) == frozenset()

    def test_transports_between_is_symmetric(self, triangle):
        assert triangle.transports_between(1, 2) == {Transport.TAXI, Transport.BUS}
        assert triangle.transports_between(2, 1) == {Transport.TAXI, Transport.BUS}

    def test_transports_between_unconnected(self):
        graph = TransportGraph.from_edges([(1, 2, {Transport.TAXI})], nodes=[3])
        assert graph.transports_between(1, 3) == frozenset()
        assert graph.adjacent_nodes(3) == frozenset()

    def test_from_edges_merges_repeated_pairs(self):
        graph = TransportGraph.from_edges([
            (1, 2, {Transport.TAXI}),
            (2, 1, {Transport.UNDERGROUND}),
        ])
        assert graph.number_of_edges() == 1
        assert graph.transports_between(1, 2) == {Transport.TAXI, Transport.UNDERGROUND}

    def test_counts(self, triangle):
        assert triangle.nodes() == {1, 2, 3}
        assert triangle.number_of_edges() == 3
        assert not triangle.is_empty()
        assert triangle.has_node(2)
        assert not triangle.has_node(4)

    def test_empty_graph(self):
        graph = TransportGraph(nx.Graph())
        assert graph.is_empty()
        assert graph.is_connected()

    def test_edges_keyed_canonically(self, triangle):
        edges = triangle.edges()
        assert set(edges) == {(1, 2), (2, 3), (1, 3)}

    def test_graph_is_frozen(self, triangle):
        """The underlying graph cannot be modified."""
        with pytest.raises(nx.NetworkXError):
            triangle.graph.add_edge(1, 4)

    def test_copy_is_independent(self):
        """Mutating the source graph does not affect the transport graph."""
        source = nx.Graph()
        source.add_edge(1, 2, transports={Transport.TAXI})
        graph = TransportGraph(source)
        source.add_edge(2, 3, transports={Transport.BUS})
        assert graph.number_of_edges() == 1

    def test_rejects_directed_graph(self):
        with pytest.raises(ValueError):
            TransportGraph(nx.DiGraph())

    def test_rejects_edge_without_transports(self):
        source = nx.Graph()
        source.add_edge(1, 2)
        with pytest.raises(ValueError):
            TransportGraph(source)

    def test_connectivity(self, triangle):
        assert triangle.is_connected()
        split = TransportGraph.from_edges([
            (1, 2, {Transport.TAXI}),
            (3, 4, {Transport.TAXI}),
        ])
        assert not split.is_connected()


class TestGameSetup:
    """Test GameSetup."""

    def test_rounds_stored_as_tuple(self, triangle):
        setup = GameSetup(graph=triangle, rounds=[False, True])
        assert setup.rounds == (False, True)
        assert setup.total_rounds == 2

    def test_is_reveal_round(self, triangle):
        setup = GameSetup(graph=triangle, rounds=(False, True))
        assert not setup.is_reveal_round(0)
        assert setup.is_reveal_round(1)
        assert not setup.is_reveal_round(2)
        assert not setup.is_reveal_round(-1)

    def test_setup_is_frozen(self, triangle):
        setup = GameSetup(graph=triangle, rounds=(True,))
        with pytest.raises(dataclasses.FrozenInstanceError):
            setup.rounds = ()


# =============================================================================
# TicketInventory Tests
# =============================================================================

class TestTicketInventory:
    """Test TicketInventory."""

    def test_missing_kinds_count_zero(self):
        inventory = TicketInventory({Ticket.TAXI: 2})
        assert inventory.get_count(Ticket.TAXI) == 2
        assert inventory.get_count(Ticket.BUS) == 0
        assert not inventory.has(Ticket.BUS)

    def test_has_at_least(self):
        inventory = TicketInventory({Ticket.BUS: 2})
        assert inventory.has_at_least(Ticket.BUS, 2)
        assert not inventory.has_at_least(Ticket.BUS, 3)

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            TicketInventory({Ticket.TAXI: -1})

    def test_spend_returns_new_inventory(self):
        inventory = TicketInventory({Ticket.TAXI: 2})
        spent = inventory.spend(Ticket.TAXI)
        assert spent.get_count(Ticket.TAXI) == 1
        assert inventory.get_count(Ticket.TAXI) == 2

    def test_spend_unheld_kind(self):
        with pytest.raises(ValueError):
            TicketInventory({Ticket.TAXI: 1}).spend(Ticket.BUS)

    def test_spend_too_many(self):
        with pytest.raises(ValueError):
            TicketInventory({Ticket.TAXI: 1}).spend(Ticket.TAXI, 2)

    def test_receive(self):
        inventory = TicketInventory().receive(Ticket.UNDERGROUND, 3)
        assert inventory.get_count(Ticket.UNDERGROUND) == 3
        assert inventory.total() == 3

    def test_receive_negative(self):
        with pytest.raises(ValueError):
            TicketInventory().receive(Ticket.TAXI, -1)

    def test_equality_and_hash(self):
        a = TicketInventory({Ticket.TAXI: 1})
        b = TicketInventory({Ticket.TAXI: 1, Ticket.BUS: 0})
        assert a == b
        assert hash(a) == hash(b)
        assert a != TicketInventory({Ticket.TAXI: 2})

    def test_to_dict_is_a_copy(self):
        inventory = TicketInventory({Ticket.TAXI: 1})
        counts = inventory.to_dict()
        counts[Ticket.TAXI] = 10
        assert inventory.get_count(Ticket.TAXI) == 1


# =============================================================================
# Player Tests
# =============================================================================

class TestPlayer:
    """Test Player."""

    def test_roles(self):
        assert Player(Piece.MR_X, 1).is_evader()
        assert Player(Piece.RED, 1).is_pursuer()

    def test_move_to_returns_new_player(self):
        player = Player(Piece.RED, 1)
        moved = player.move_to(5)
        assert moved.location == 5
        assert player.location == 1

    def test_spend_and_receive(self):
        player = Player(Piece.RED, 1, TicketInventory({Ticket.TAXI: 1}))
        assert not player.spend(Ticket.TAXI).has(Ticket.TAXI)
        assert player.receive(Ticket.BUS).has(Ticket.BUS)
        assert player.has(Ticket.TAXI)

    def test_spend_unheld(self):
        with pytest.raises(ValueError):
            Player(Piece.RED, 1).spend(Ticket.TAXI)

    def test_make_mr_x_defaults(self):
        mr_x = make_mr_x(10)
        assert mr_x.piece == Piece.MR_X
        assert mr_x.location == 10
        assert mr_x.tickets.get_count(Ticket.DOUBLE) == 2

    def test_make_mr_x_custom_tickets(self):
        mr_x = make_mr_x(10, {Ticket.TAXI: 1})
        assert mr_x.tickets.total() == 1

    def test_make_detective_defaults(self):
        detective = make_detective(Piece.BLUE, 4)
        assert detective.tickets.get_count(Ticket.TAXI) == 11
        assert not detective.has(Ticket.SECRET)

    def test_make_detective_rejects_mr_x(self):
        with pytest.raises(ValueError):
            make_detective(Piece.MR_X, 4)


# =============================================================================
# Move Tests
# =============================================================================

class TestMoves:
    """Test move value types and helpers."""

    def test_moves_compare_by_value(self):
        a = SingleMove(Piece.MR_X, 1, Ticket.TAXI, 2)
        b = SingleMove(Piece.MR_X, 1, Ticket.TAXI, 2)
        assert a == b
        assert len({a, b}) == 1
        assert a != SingleMove(Piece.MR_X, 1, Ticket.BUS, 2)

    def test_single_move_helpers(self):
        move = SingleMove(Piece.RED, 1, Ticket.BUS, 4)
        assert legs(move) == ((Ticket.BUS, 4),)
        assert tickets_used(move) == (Ticket.BUS,)
        assert final_destination(move) == 4

    def test_double_move_helpers(self):
        move = DoubleMove(Piece.MR_X, 1, Ticket.TAXI, 2, Ticket.SECRET, 3)
        assert legs(move) == ((Ticket.TAXI, 2), (Ticket.SECRET, 3))
        assert tickets_used(move) == (Ticket.TAXI, Ticket.SECRET, Ticket.DOUBLE)
        assert final_destination(move) == 3

    def test_helpers_reject_non_moves(self):
        with pytest.raises(TypeError):
            legs("not a move")

    def test_sort_key_orders_singles_first(self):
        double = DoubleMove(Piece.MR_X, 1, Ticket.TAXI, 2, Ticket.TAXI, 3)
        single_far = SingleMove(Piece.MR_X, 1, Ticket.TAXI, 9)
        single_near = SingleMove(Piece.MR_X, 1, Ticket.TAXI, 2)
        ordered = sorted([double, single_far, single_near], key=move_sort_key)
        assert ordered == [single_near, single_far, double]

    def test_str(self):
        assert str(SingleMove(Piece.RED, 1, Ticket.TAXI, 2)) == "red: 1 -[taxi]-> 2"


# =============================================================================
# Travel Log Tests
# =============================================================================

class TestTravelLog:
    """Test log entry creation and reveal policy."""

    @pytest.fixture
    def setup(self, triangle) -> GameSetup:
        return GameSetup(graph=triangle, rounds=(False, True, False))

    def test_hidden_round(self, setup):
        move = SingleMove(Piece.MR_X, 1, Ticket.TAXI, 2)
        assert log_entries_for(setup, move, 0) == (LogEntry.hidden(Ticket.TAXI),)

    def test_reveal_round(self, setup):
        move = SingleMove(Piece.MR_X, 1, Ticket.TAXI, 2)
        entries = log_entries_for(setup, move, 1)
        assert entries == (LogEntry.revealed(Ticket.TAXI, 2),)
        assert entries[0].is_revealed

    def test_double_move_legs_checked_independently(self, setup):
        """The first leg falls on a hidden round, the second on a reveal round."""
        move = DoubleMove(Piece.MR_X, 1, Ticket.TAXI, 2, Ticket.BUS, 1)
        entries = log_entries_for(setup, move, 0)
        assert entries == (
            LogEntry.hidden(Ticket.TAXI),
            LogEntry.revealed(Ticket.BUS, 1),
        )

    def test_last_known_location(self):
        log = (
            LogEntry.revealed(Ticket.TAXI, 4),
            LogEntry.hidden(Ticket.BUS),
        )
        assert last_known_location(log) == 4
        assert last_known_location(()) is None
