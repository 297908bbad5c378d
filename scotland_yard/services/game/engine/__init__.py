"""Game engine module - pure functional game logic.

This module provides the core game engine with:
- Move types for explicit player choices
- Event types for spectator notification
- ProcessResult pattern for error handling
- Legal move generation, visibility and win detection

Usage:
    from scotland_yard.services.game.engine import (
        process_move,
        ProcessResult,
        TicketMove,
    )

    # Process a move
    result = process_move(state, TicketMove(colour=Colour.BLACK, ticket=Ticket.TAXI, destination=8), graph)

    if result.success:
        new_state = result.state
        events = result.events  # Hand these to spectators
    else:
        # Handle error
        print(f"Error: {result.error_code} - {result.error_message}")
"""

from scotland_yard.schemas.game_engine import (
    AnyMove,
    DoubleMove,
    PassMove,
    TicketMove,
)

# Events - for spectators
from .events import (
    AnyGameEvent,
    GameEnded,
    GameEvent,
    MoveMade,
    RotationCompleted,
    RoundStarted,
)

# Legal moves
from .legal_moves import get_legal_moves, get_legal_moves_for

# Moves - explicit player choices
from .moves import build_move_from_payload, tickets_used

# Main processing
from .process import process_move, process_start

# Result types
from .validation import ProcessResult, ValidationResult, check_invariants, validate_move

# Fog of war
from .visibility import get_player_location, get_reportable_fugitive_location

# Game over
from .win import find_winners, is_game_over, settle_game_over

__all__ = [
    # Moves
    "AnyMove",
    "PassMove",
    "TicketMove",
    "DoubleMove",
    "build_move_from_payload",
    "tickets_used",
    # Events
    "GameEvent",
    "AnyGameEvent",
    "RoundStarted",
    "MoveMade",
    "RotationCompleted",
    "GameEnded",
    # Processing
    "process_start",
    "process_move",
    # Validation
    "ProcessResult",
    "ValidationResult",
    "validate_move",
    "check_invariants",
    # Legal moves
    "get_legal_moves",
    "get_legal_moves_for",
    # Visibility
    "get_player_location",
    "get_reportable_fugitive_location",
    # Game over
    "find_winners",
    "is_game_over",
    "settle_game_over",
]
