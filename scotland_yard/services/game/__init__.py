"""Game service module.

Provides:
- Game initialization (start_game.py)
- Turn controller and spectators (controller.py, spectators.py)
- Game engine processing (engine/)
"""

# Re-export from engine for convenience
from .controller import Agent, ScotlandYardGame
from .engine import (
    AnyMove,
    DoubleMove,
    PassMove,
    ProcessResult,
    TicketMove,
    build_move_from_payload,
    get_legal_moves,
    process_move,
    process_start,
)
from .errors import ConfigurationError, InvariantViolation, ProtocolViolation
from .graph import Edge, GraphProvider, TransportGraph
from .spectators import Spectator, SpectatorRegistry
from .start_game import (
    build_round_schedule,
    default_round_schedule,
    default_tickets,
    initialize_game,
    validate_game_settings,
)

__all__ = [
    # Initialization
    "initialize_game",
    "validate_game_settings",
    "build_round_schedule",
    "default_round_schedule",
    "default_tickets",
    # Controller
    "Agent",
    "ScotlandYardGame",
    "Spectator",
    "SpectatorRegistry",
    # Graph
    "Edge",
    "GraphProvider",
    "TransportGraph",
    # Errors
    "ConfigurationError",
    "ProtocolViolation",
    "InvariantViolation",
    # Engine
    "AnyMove",
    "PassMove",
    "TicketMove",
    "DoubleMove",
    "ProcessResult",
    "process_start",
    "process_move",
    "get_legal_moves",
    "build_move_from_payload",
]
