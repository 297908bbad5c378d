"""Shared fixtures for game engine tests."""

import pytest

from scotland_yard.config import Settings, configure_logging
from scotland_yard.schemas.game_engine import (
    AnyMove,
    Colour,
    GamePhase,
    GameState,
    Player,
    PlayerConfiguration,
    Ticket,
    Transport,
)
from scotland_yard.services.game.engine import get_legal_moves
from scotland_yard.services.game.graph import TransportGraph

BLACK = Colour.BLACK
BLUE = Colour.BLUE
RED = Colour.RED


def create_tickets(
    taxi: int = 0,
    bus: int = 0,
    underground: int = 0,
    double: int = 0,
    secret: int = 0,
) -> dict[Ticket, int]:
    """Helper to create a full ticket allocation."""
    return {
        Ticket.TAXI: taxi,
        Ticket.BUS: bus,
        Ticket.UNDERGROUND: underground,
        Ticket.DOUBLE: double,
        Ticket.SECRET: secret,
    }


def create_player(
    colour: Colour,
    location: int,
    tickets: dict[Ticket, int] | None = None,
    turn_order: int = 0,
) -> Player:
    """Helper to create a player; defaults to a generous plain-ticket allocation."""
    if tickets is None:
        tickets = create_tickets(taxi=10, bus=8, underground=4)
    return Player(
        colour=colour,
        location=location,
        tickets=tickets,
        turn_order=turn_order,
    )


def create_config(
    colour: Colour,
    location: int,
    tickets: dict[Ticket, int] | None = None,
    agent=None,
) -> PlayerConfiguration:
    if tickets is None:
        tickets = create_tickets(taxi=10, bus=8, underground=4)
    return PlayerConfiguration(colour=colour, location=location, tickets=tickets, agent=agent)


def with_legal_moves(state: GameState, graph: TransportGraph) -> GameState:
    """Store the acting player's legal moves, as the engine does after every move."""
    return state.model_copy(update={"legal_moves": list(get_legal_moves(state, graph))})


def create_state(
    players: list[Player],
    rounds: list[bool],
    graph: TransportGraph | None = None,
    current_round: int = 0,
    current_turn_order: int = 0,
    phase: GamePhase = GamePhase.IN_PROGRESS,
    **updates,
) -> GameState:
    """Helper to create a game state; players are given turn orders by position.

    When a graph is supplied the acting player's legal moves are filled in.
    """
    players = [p.model_copy(update={"turn_order": i}) for i, p in enumerate(players)]
    state = GameState(
        phase=phase,
        players=players,
        rounds=rounds,
        current_round=current_round,
        current_turn_order=current_turn_order,
        **updates,
    )
    if graph is not None:
        state = with_legal_moves(state, graph)
    return state


class RecordingSpectator:
    """Spectator that records every callback in order."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def on_round_started(self, round_number: int) -> None:
        self.calls.append(("round_started", round_number))

    def on_move_made(self, move: AnyMove) -> None:
        self.calls.append(("move_made", move))

    def on_rotation_complete(self) -> None:
        self.calls.append(("rotation_complete",))

    def on_game_over(self, winners: set[Colour]) -> None:
        self.calls.append(("game_over", winners))


def _first_move(location, moves):
    return sorted(moves, key=lambda m: m.model_dump_json())[0]


class ChoosingAgent:
    """Agent that answers immediately with the move picked by `chooser`."""

    def __init__(self, chooser=None) -> None:
        self.chooser = chooser or _first_move
        self.requests: list[tuple[int, frozenset]] = []

    def choose_move(self, location, moves, submit) -> None:
        self.requests.append((location, moves))
        submit(self.chooser(location, moves))


class DeferredAgent:
    """Agent that keeps the request and answers later."""

    def __init__(self) -> None:
        self.requests: list[tuple] = []

    def choose_move(self, location, moves, submit) -> None:
        self.requests.append((location, moves, submit))


def pytest_configure(config):
    configure_logging(debug=True)


@pytest.fixture
def settings() -> Settings:
    return Settings(DEBUG=False, CHECK_INVARIANTS=True)


@pytest.fixture
def board() -> TransportGraph:
    """Small board using every transport.

        1 -taxi- 2 -taxi- 3 -taxi- 4
        1 -bus- 3,  1 -underground- 4
        2 -ferry- 5 -taxi- 6
    """
    return TransportGraph.from_edges(
        [
            (1, 2, Transport.TAXI),
            (2, 3, Transport.TAXI),
            (3, 4, Transport.TAXI),
            (1, 3, Transport.BUS),
            (1, 4, Transport.UNDERGROUND),
            (2, 5, Transport.FERRY),
            (5, 6, Transport.TAXI),
        ]
    )


@pytest.fixture
def two_nodes() -> TransportGraph:
    """Locations 1 and 2 joined by taxi."""
    return TransportGraph.from_edges([(1, 2, Transport.TAXI)])


@pytest.fixture
def taxi_line() -> TransportGraph:
    """Locations 1..6 joined in a line by taxi, plus a separate pair 10-11."""
    return TransportGraph.from_edges(
        [(n, n + 1, Transport.TAXI) for n in range(1, 6)] + [(10, 11, Transport.TAXI)]
    )
