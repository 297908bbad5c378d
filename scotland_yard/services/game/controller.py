"""Turn controller - runs rotations by asking agents for moves.

The controller owns the canonical game state along with its agents and spectators.
It is single-threaded: each turn it hands the acting agent the legal moves
together with a one-shot submit callback, and continues when the agent calls
it. Agents may call back synchronously or later.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from scotland_yard.config import Settings, get_settings
from scotland_yard.schemas.game_engine import (
    AnyMove,
    Colour,
    GamePhase,
    GameState,
    PlayerConfiguration,
    Ticket,
)

from .engine import (
    check_invariants,
    get_player_location,
    is_game_over,
    process_move,
    process_start,
)
from .errors import ProtocolViolation
from .graph import GraphProvider
from .spectators import Spectator, SpectatorRegistry
from .start_game import initialize_game

logger = logging.getLogger(__name__)


class Agent(Protocol):
    """Chooses moves for one player.

    Calling `submit` applies the move and, if a detective acts next, asks that
    detective's agent straight away. An agent that answers synchronously is
    therefore called from inside the previous `submit`, and a ProtocolViolation
    raised for a later turn propagates out of that earlier `submit` (and out of
    `start_rotate`) even though the earlier move was accepted. The game state
    reflects every accepted move; the rejected request stays open.
    """

    def choose_move(
        self,
        location: int,
        moves: frozenset[AnyMove],
        submit: Callable[[AnyMove], None],
    ) -> None:
        """Pick one of `moves` and pass it to `submit` exactly once."""
        ...


class ScotlandYardGame:
    """A game of Scotland Yard between Mister X and one or more detectives.

    Usage:
        game = ScotlandYardGame(rounds, graph, mrx_config, blue_config, red_config)
        game.register_spectator(spectator)
        while not game.is_game_over():
            game.start_rotate()
    """

    def __init__(
        self,
        rounds: Sequence[bool],
        graph: GraphProvider,
        mrx: PlayerConfiguration,
        first_detective: PlayerConfiguration,
        *rest_of_the_detectives: PlayerConfiguration,
        settings: Settings | None = None,
    ):
        self._settings = settings or get_settings()
        detectives = [first_detective, *rest_of_the_detectives]

        self._state = initialize_game(rounds, graph, mrx, detectives)
        self._graph = graph
        self._agents = {config.colour: config.agent for config in (mrx, *detectives)}
        self._spectators = SpectatorRegistry()

        # Identifies the outstanding move request; None while no move is awaited
        self._pending_request: int | None = None
        self._request_count = 0

        logger.info(
            "ScotlandYardGame created: players=%s",
            [c.value for c in self.players],
        )

    # ------------------------------------------------------------------
    # Spectators
    # ------------------------------------------------------------------

    def register_spectator(self, spectator: Spectator) -> None:
        self._spectators.register(spectator)

    def unregister_spectator(self, spectator: Spectator) -> None:
        self._spectators.unregister(spectator)

    @property
    def spectators(self) -> tuple[Spectator, ...]:
        return self._spectators.snapshot()

    # ------------------------------------------------------------------
    # Rotation
    # ------------------------------------------------------------------

    def start_rotate(self) -> None:
        """Start a rotation: Mister X moves, then every detective in turn.

        Raises:
            ProtocolViolation: If the game is over or a rotation is still running.
        """
        if is_game_over(self._state):
            raise ProtocolViolation("GAME_OVER", "Game has already finished")
        if self._pending_request is not None:
            raise ProtocolViolation("ROTATION_IN_PROGRESS", "A move is already being awaited")

        if self._state.phase == GamePhase.NOT_STARTED:
            result = process_start(self._state, self._graph)
            if not result.success:
                raise ProtocolViolation(result.error_code, result.error_message)
            self._state = result.state

        logger.info("Rotation started: round=%d", self._state.current_round)
        self._request_move()

    def _request_move(self) -> None:
        if is_game_over(self._state):
            raise ProtocolViolation("GAME_OVER", "Game has already finished")

        player = self._state.current_player
        agent = self._agents.get(player.colour)
        if agent is None:
            raise ProtocolViolation(
                "NO_AGENT", f"No agent configured for {player.colour.value}"
            )

        self._request_count += 1
        request = self._request_count
        self._pending_request = request

        def submit(move: AnyMove) -> None:
            self._accept(request, move)

        moves = frozenset(self._state.legal_moves)
        logger.debug(
            "Requesting move: player=%s, location=%d, options=%d",
            player.colour.value,
            player.location,
            len(moves),
        )
        agent.choose_move(player.location, moves, submit)

    def _accept(self, request: int, move: AnyMove) -> None:
        if self._pending_request != request:
            logger.warning("Rejected move for stale request %d: %s", request, move)
            raise ProtocolViolation(
                "MOVE_ALREADY_SUBMITTED", "A move was already submitted for this request"
            )

        result = process_move(self._state, move, self._graph)
        if not result.success:
            raise ProtocolViolation(result.error_code, result.error_message)

        self._pending_request = None
        self._state = result.state
        if self._settings.CHECK_INVARIANTS:
            check_invariants(self._state)

        self._spectators.notify(result.events)

        if self._state.phase == GamePhase.FINISHED:
            logger.info(
                "Game finished: winners=%s",
                sorted(c.value for c in self._state.winners),
            )
            return
        if not self._state.current_player.is_mrx:
            self._request_move()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def graph(self) -> GraphProvider:
        return self._graph

    @property
    def players(self) -> list[Colour]:
        return [p.colour for p in self._state.players]

    @property
    def current_player(self) -> Colour:
        return self._state.current_player.colour

    @property
    def current_round(self) -> int:
        return self._state.current_round

    @property
    def rounds(self) -> tuple[bool, ...]:
        return tuple(self._state.rounds)

    @property
    def winning_players(self) -> frozenset[Colour]:
        return frozenset(self._state.winners)

    def is_game_over(self) -> bool:
        return is_game_over(self._state)

    def get_player_location(self, colour: Colour) -> int | None:
        """Publicly known location; Mister X's is subject to concealment."""
        return get_player_location(self._state, colour)

    def get_player_tickets(self, colour: Colour, ticket: Ticket) -> int | None:
        player = self._state.get_player(colour)
        if player is None:
            return None
        return player.tickets.get(ticket, 0)
