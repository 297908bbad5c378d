"""Validation layer for moves and ProcessResult pattern.

Separates validation from processing logic:
- validate_move() checks if a move may be applied given current state
- ProcessResult replaces exceptions for control flow
- check_invariants() guards against internal state corruption
"""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

from scotland_yard.schemas.game_engine import AnyMove, GamePhase, GameState, Ticket

from ..errors import InvariantViolation
from .events import AnyGameEvent


@dataclass
class ProcessResult:
    """Result of processing a move.

    Replaces exceptions for control flow, providing explicit success/failure
    with error codes callers can match on.
    """

    state: GameState | None = None
    events: list[AnyGameEvent] = field(default_factory=list)
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None

    @classmethod
    def ok(
        cls,
        state: GameState,
        events: list[AnyGameEvent] | None = None,
    ) -> "ProcessResult":
        """Create a successful result with new state and events."""
        return cls(
            state=state,
            events=events or [],
            success=True,
        )

    @classmethod
    def failure(cls, code: str, message: str) -> "ProcessResult":
        """Create a failure result with error details."""
        return cls(
            state=None,
            events=[],
            success=False,
            error_code=code,
            error_message=message,
        )


@dataclass
class ValidationResult:
    """Result of validating a move before processing."""

    is_valid: bool = True
    error_code: str | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(is_valid=True)

    @classmethod
    def error(cls, code: str, message: str) -> "ValidationResult":
        """Create a validation failure with error details."""
        return cls(
            is_valid=False,
            error_code=code,
            error_message=message,
        )


def validate_move(state: GameState, move: AnyMove | None) -> ValidationResult:
    """Validate a move before processing.

    Checks:
    - A move was actually supplied
    - Game phase allows moves
    - The move belongs to the player whose turn it is
    - The move is in the most recently generated legal set

    Args:
        state: Current game state.
        move: The move to validate.

    Returns:
        ValidationResult indicating success or failure with error details.
    """
    if move is None:
        logger.warning("Validation failed: NULL_MOVE")
        return ValidationResult.error("NULL_MOVE", "Move is missing")

    logger.debug(
        "Validating move: type=%s, player=%s, phase=%s",
        move.move_type,
        move.colour.value,
        state.phase.value,
    )

    if state.phase == GamePhase.NOT_STARTED:
        logger.warning("Validation failed: GAME_NOT_STARTED")
        return ValidationResult.error(
            "GAME_NOT_STARTED",
            "Game has not started yet",
        )

    if state.phase == GamePhase.FINISHED:
        logger.warning("Validation failed: GAME_OVER")
        return ValidationResult.error(
            "GAME_OVER",
            "Game has already finished",
        )

    current = state.current_player
    if move.colour != current.colour:
        logger.warning(
            "Validation failed: NOT_YOUR_TURN, current=%s, attempted=%s",
            current.colour.value,
            move.colour.value,
        )
        return ValidationResult.error(
            "NOT_YOUR_TURN",
            f"It is {current.colour.value}'s turn",
        )

    if move not in state.legal_moves:
        logger.warning(
            "Validation failed: ILLEGAL_MOVE, requested=%s, legal_moves=%d",
            move,
            len(state.legal_moves),
        )
        return ValidationResult.error(
            "ILLEGAL_MOVE",
            f"{move.move_type} move by {move.colour.value} is not a legal move",
        )

    logger.debug("Move validated successfully: type=%s", move.move_type)
    return ValidationResult.ok()


def check_invariants(state: GameState) -> None:
    """Raise InvariantViolation if the state breaks a rule the engine relies on."""
    mrx_count = sum(1 for p in state.players if p.is_mrx)
    if mrx_count != 1 or not state.players[0].is_mrx:
        raise InvariantViolation("Mister X must be the single first player")

    colours = [p.colour for p in state.players]
    if len(set(colours)) != len(colours):
        raise InvariantViolation(f"Duplicate colours: {colours}")

    for index, player in enumerate(state.players):
        if player.turn_order != index:
            raise InvariantViolation(
                f"Player {player.colour.value} has turn_order {player.turn_order} at index {index}"
            )
        for ticket, count in player.tickets.items():
            if count < 0:
                raise InvariantViolation(
                    f"Player {player.colour.value} has {count} {ticket.value} tickets"
                )
        if player.is_detective and (
            player.tickets.get(Ticket.SECRET, 0) or player.tickets.get(Ticket.DOUBLE, 0)
        ):
            raise InvariantViolation(
                f"Detective {player.colour.value} holds secret or double tickets"
            )

    detective_locations = [p.location for p in state.detectives]
    if len(set(detective_locations)) != len(detective_locations):
        raise InvariantViolation(f"Detectives share a location: {detective_locations}")

    if not 0 <= state.current_round <= len(state.rounds):
        raise InvariantViolation(
            f"Round {state.current_round} outside schedule of {len(state.rounds)}"
        )

    if bool(state.winners) != (state.phase == GamePhase.FINISHED):
        raise InvariantViolation(
            f"Winners {state.winners} inconsistent with phase {state.phase.value}"
        )
