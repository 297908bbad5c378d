"""Main entry point for move processing.

This module provides the primary interface for advancing a game:
- process_start(): Moves a game from NOT_STARTED to IN_PROGRESS
- process_move(): Validates and applies any move
- Returns ProcessResult with new state and events
"""

import logging

logger = logging.getLogger(__name__)

from scotland_yard.schemas.game_engine import (
    AnyMove,
    DoubleMove,
    GamePhase,
    GameState,
    PassMove,
    TicketMove,
)

from ..graph import GraphProvider
from .events import GameEnded, RotationCompleted
from .legal_moves import get_legal_moves
from .movement import apply_double_move, apply_pass, apply_ticket_move
from .validation import ProcessResult, validate_move
from .win import settle_game_over


def _with_legal_moves(state: GameState, graph: GraphProvider) -> GameState:
    """Store the legal moves of the player whose turn it now is."""
    legal_moves = get_legal_moves(state, graph)
    return state.model_copy(update={"legal_moves": list(legal_moves)})


def process_start(state: GameState, graph: GraphProvider) -> ProcessResult:
    """Transition game from NOT_STARTED to IN_PROGRESS.

    Generates Mister X's first set of legal moves.

    Args:
        state: Current game state (must be NOT_STARTED).
        graph: Transport graph.

    Returns:
        ProcessResult with game in IN_PROGRESS phase.
    """
    if state.phase == GamePhase.IN_PROGRESS:
        logger.warning("Start rejected: GAME_ALREADY_STARTED")
        return ProcessResult.failure("GAME_ALREADY_STARTED", "Game has already started")
    if state.phase == GamePhase.FINISHED:
        logger.warning("Start rejected: GAME_OVER")
        return ProcessResult.failure("GAME_OVER", "Game has already finished")

    logger.info(
        "Starting game: players=%d, rounds=%d",
        len(state.players),
        len(state.rounds),
    )
    new_state = _with_legal_moves(
        state.model_copy(update={"phase": GamePhase.IN_PROGRESS}), graph
    )
    return ProcessResult.ok(new_state, [])


def process_move(
    state: GameState,
    move: AnyMove | None,
    graph: GraphProvider,
) -> ProcessResult:
    """Process a move and return the result.

    This is the main entry point for all moves. It:
    1. Validates the move against the stored legal set
    2. Dispatches to the handler for the move type
    3. Generates legal moves for the next player and checks for game over
    4. Assigns sequence numbers to events

    Args:
        state: Current game state.
        move: The move to process.
        graph: Transport graph.

    Returns:
        ProcessResult containing:
        - success: Whether the move was processed successfully
        - state: The new game state (if successful)
        - events: Events that occurred, in order (with seq numbers)
        - error_code/error_message: Error details (if failed)
    """
    validation = validate_move(state, move)
    if not validation.is_valid:
        return ProcessResult.failure(
            validation.error_code or "VALIDATION_ERROR",
            validation.error_message or "Invalid move",
        )

    move_type = type(move).__name__
    logger.info(
        "Processing move: type=%s, player=%s, round=%d",
        move_type,
        move.colour.value,
        state.current_round,
    )
    logger.debug("Move details: %s", move)

    if isinstance(move, PassMove):
        new_state, events = apply_pass(state, move)

    elif isinstance(move, TicketMove):
        new_state, events = apply_ticket_move(state, move)

    elif isinstance(move, DoubleMove):
        new_state, events = apply_double_move(state, move)

    else:
        logger.error("Unknown move type received: %s", move_type)
        return ProcessResult.failure(
            "UNKNOWN_MOVE",
            f"Unknown move type: {move_type}",
        )

    new_state = _with_legal_moves(new_state, graph)
    new_state = settle_game_over(new_state)

    if new_state.phase == GamePhase.FINISHED:
        events.append(GameEnded(winners=new_state.winners))
        new_state = new_state.model_copy(update={"legal_moves": []})
    elif new_state.current_player.is_mrx:
        events.append(RotationCompleted())

    result = _assign_event_sequences(ProcessResult.ok(new_state, events))
    logger.info(
        "Move processed successfully: type=%s, player=%s, events_generated=%d",
        move_type,
        move.colour.value,
        len(result.events),
    )
    logger.debug("Generated events: %s", [e.event_type for e in result.events])
    return result


def _assign_event_sequences(result: ProcessResult) -> ProcessResult:
    """Assign monotonically increasing sequence numbers to events.

    Updates each event's seq field and increments the state's event_seq counter.
    """
    if result.state is None or not result.events:
        return result

    current_seq = result.state.event_seq
    for event in result.events:
        event.seq = current_seq
        current_seq += 1

    # Update state with new sequence counter
    new_state = result.state.model_copy(update={"event_seq": current_seq})

    return ProcessResult.ok(new_state, result.events)
