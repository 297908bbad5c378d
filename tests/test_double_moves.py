"""Tests for Mister X's double moves.

Critical scenarios tested:
- Double moves need a double ticket and two remaining rounds
- Both legs must be paid for, counting a repeated ticket twice
- Secret legs are combined with plain legs when secret tickets allow
- Applying a double spends both rounds and discloses each leg correctly
"""

from scotland_yard.schemas.game_engine import (
    DoubleMove,
    Ticket,
    TicketMove,
)
from scotland_yard.services.game.engine import get_legal_moves, process_move
from scotland_yard.services.game.engine.events import MoveMade, RoundStarted
from scotland_yard.services.game.graph import TransportGraph

from .conftest import (
    BLACK,
    BLUE,
    create_player,
    create_state,
    create_tickets,
)


def _ticket(ticket: Ticket, destination: int) -> TicketMove:
    return TicketMove(colour=BLACK, ticket=ticket, destination=destination)


def _double(first: TicketMove, second: TicketMove) -> DoubleMove:
    return DoubleMove(colour=BLACK, first_move=first, second_move=second)


def _doubles(moves) -> set[DoubleMove]:
    return {m for m in moves if isinstance(m, DoubleMove)}


def _mrx_state(graph, location, tickets, rounds=None, current_round=0, **updates):
    return create_state(
        [create_player(BLACK, location, tickets), create_player(BLUE, 10)],
        rounds if rounds is not None else [False] * 5,
        graph=graph,
        current_round=current_round,
        **updates,
    )


class TestDoubleMoveGeneration:
    """Test which double moves are offered."""

    def test_plain_doubles(self, taxi_line: TransportGraph):
        """Two taxi tickets allow every two-step taxi route."""
        state = _mrx_state(taxi_line, 2, create_tickets(taxi=2, double=1))

        moves = get_legal_moves(state, taxi_line)

        assert moves == {
            _ticket(Ticket.TAXI, 1),
            _ticket(Ticket.TAXI, 3),
            _double(_ticket(Ticket.TAXI, 1), _ticket(Ticket.TAXI, 2)),
            _double(_ticket(Ticket.TAXI, 3), _ticket(Ticket.TAXI, 2)),
            _double(_ticket(Ticket.TAXI, 3), _ticket(Ticket.TAXI, 4)),
        }

    def test_same_ticket_twice_needs_two(self, taxi_line: TransportGraph):
        """A single taxi ticket cannot pay for two taxi legs."""
        state = _mrx_state(taxi_line, 2, create_tickets(taxi=1, double=1))

        moves = get_legal_moves(state, taxi_line)

        assert _doubles(moves) == set()

    def test_mixed_transport_needs_one_of_each(self):
        """A taxi leg and a bus leg need one ticket of each kind."""
        graph = TransportGraph.from_edges([(1, 2, "taxi"), (2, 3, "bus"), (10, 11, "taxi")])
        state = _mrx_state(graph, 1, create_tickets(taxi=1, bus=1, double=1))

        moves = get_legal_moves(state, graph)

        assert _doubles(moves) == {
            _double(_ticket(Ticket.TAXI, 2), _ticket(Ticket.BUS, 3)),
        }

    def test_no_doubles_without_double_ticket(self, taxi_line: TransportGraph):
        state = _mrx_state(taxi_line, 2, create_tickets(taxi=5, secret=2))

        assert _doubles(get_legal_moves(state, taxi_line)) == set()

    def test_no_doubles_with_one_round_left(self, taxi_line: TransportGraph):
        """A double move needs two rounds still to be played."""
        state = _mrx_state(
            taxi_line, 2, create_tickets(taxi=5, double=2), rounds=[False] * 3, current_round=2
        )

        assert _doubles(get_legal_moves(state, taxi_line)) == set()

    def test_doubles_with_exactly_two_rounds_left(self, taxi_line: TransportGraph):
        state = _mrx_state(
            taxi_line, 2, create_tickets(taxi=5, double=1), rounds=[False] * 3, current_round=1
        )

        assert _doubles(get_legal_moves(state, taxi_line))

    def test_one_secret_mixes_with_plain_legs(self, taxi_line: TransportGraph):
        """One secret and one taxi allow a secret leg on either side, not both."""
        state = _mrx_state(taxi_line, 1, create_tickets(taxi=1, secret=1, double=1))

        doubles = _doubles(get_legal_moves(state, taxi_line))

        assert doubles == {
            _double(_ticket(Ticket.SECRET, 2), _ticket(Ticket.TAXI, 1)),
            _double(_ticket(Ticket.SECRET, 2), _ticket(Ticket.TAXI, 3)),
            _double(_ticket(Ticket.TAXI, 2), _ticket(Ticket.SECRET, 1)),
            _double(_ticket(Ticket.TAXI, 2), _ticket(Ticket.SECRET, 3)),
        }

    def test_two_secrets_allow_secret_on_both_legs(self, taxi_line: TransportGraph):
        state = _mrx_state(taxi_line, 1, create_tickets(secret=2, double=1))

        doubles = _doubles(get_legal_moves(state, taxi_line))

        assert doubles == {
            _double(_ticket(Ticket.SECRET, 2), _ticket(Ticket.SECRET, 1)),
            _double(_ticket(Ticket.SECRET, 2), _ticket(Ticket.SECRET, 3)),
        }

    def test_second_leg_may_end_on_detective(self, taxi_line: TransportGraph):
        """Like single moves, Mister X is not blocked by detectives."""
        state = create_state(
            [
                create_player(BLACK, 1, create_tickets(taxi=2, double=1)),
                create_player(BLUE, 3),
            ],
            [False] * 5,
            graph=taxi_line,
        )

        doubles = _doubles(get_legal_moves(state, taxi_line))

        assert _double(_ticket(Ticket.TAXI, 2), _ticket(Ticket.TAXI, 3)) in doubles


class TestDoubleMoveApplication:
    """Test applying double moves."""

    def test_hidden_then_revealed_leg(self, taxi_line: TransportGraph):
        """First leg on a hidden round shows the last known location, second leg is revealed."""
        state = _mrx_state(
            taxi_line,
            3,
            create_tickets(taxi=2, double=1),
            rounds=[True, False, True, False],
            current_round=1,
            fugitive_revealed=True,
            fugitive_last_known_location=3,
        )
        move = _double(_ticket(Ticket.TAXI, 4), _ticket(Ticket.TAXI, 5))

        result = process_move(state, move, taxi_line)

        assert result.success
        move_events = [e for e in result.events if isinstance(e, MoveMade)]
        assert [e.move for e in move_events] == [
            _double(_ticket(Ticket.TAXI, 3), _ticket(Ticket.TAXI, 5)),
            _ticket(Ticket.TAXI, 3),
            _ticket(Ticket.TAXI, 5),
        ]
        assert result.state.fugitive_location == 5
        assert result.state.fugitive_last_known_location == 5
        assert result.state.current_round == 3

    def test_event_order(self, taxi_line: TransportGraph):
        """Whole double first, then a round start and the leg for each leg."""
        state = _mrx_state(taxi_line, 3, create_tickets(taxi=2, double=1))
        move = _double(_ticket(Ticket.TAXI, 4), _ticket(Ticket.TAXI, 5))

        result = process_move(state, move, taxi_line)

        assert [type(e) for e in result.events] == [
            MoveMade,
            RoundStarted,
            MoveMade,
            RoundStarted,
            MoveMade,
        ]
        assert [e.round_number for e in result.events if isinstance(e, RoundStarted)] == [1, 2]

    def test_never_revealed_shows_sentinel(self, taxi_line: TransportGraph):
        """Before any reveal both legs show location 0."""
        state = _mrx_state(taxi_line, 3, create_tickets(taxi=2, double=1))
        move = _double(_ticket(Ticket.TAXI, 4), _ticket(Ticket.TAXI, 5))

        result = process_move(state, move, taxi_line)

        shown = result.events[0].move
        assert shown.first_move.destination == 0
        assert shown.second_move.destination == 0
        assert result.state.fugitive_revealed is False

    def test_revealed_first_leg_is_known_for_second(self, taxi_line: TransportGraph):
        """A reveal on the first leg becomes the shown location of a hidden second leg."""
        state = _mrx_state(
            taxi_line, 3, create_tickets(taxi=2, double=1), rounds=[True, False, False]
        )
        move = _double(_ticket(Ticket.TAXI, 4), _ticket(Ticket.TAXI, 5))

        result = process_move(state, move, taxi_line)

        shown = result.events[0].move
        assert shown.first_move.destination == 4
        assert shown.second_move.destination == 4
        assert result.state.fugitive_last_known_location == 4

    def test_tickets_spent(self, taxi_line: TransportGraph):
        """One double ticket plus each leg's own ticket; the real tickets are reported."""
        state = _mrx_state(taxi_line, 3, create_tickets(taxi=1, secret=1, double=2))
        move = _double(_ticket(Ticket.SECRET, 4), _ticket(Ticket.TAXI, 5))

        result = process_move(state, move, taxi_line)

        mrx = result.state.fugitive
        assert mrx.tickets[Ticket.DOUBLE] == 1
        assert mrx.tickets[Ticket.SECRET] == 0
        assert mrx.tickets[Ticket.TAXI] == 0
        shown = result.events[0].move
        assert shown.first_move.ticket == Ticket.SECRET
        assert shown.second_move.ticket == Ticket.TAXI

    def test_counts_as_one_turn(self, taxi_line: TransportGraph):
        """The detective acts next, even though two rounds were used."""
        state = _mrx_state(taxi_line, 3, create_tickets(taxi=2, double=1))
        move = _double(_ticket(Ticket.TAXI, 4), _ticket(Ticket.TAXI, 5))

        result = process_move(state, move, taxi_line)

        assert result.state.current_player.colour == BLUE
        assert result.state.current_round == 2
