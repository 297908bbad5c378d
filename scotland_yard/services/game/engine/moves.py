"""Move types - explicit player choices separated from game state."""

from scotland_yard.schemas.game_engine import (
    AnyMove,
    DoubleMove,
    PassMove,
    Ticket,
    TicketMove,
)


def build_move_from_payload(payload: dict) -> AnyMove:
    """Build a typed move from a raw payload dict.

    Args:
        payload: Dict with 'move_type' key and move-specific fields.

    Returns:
        The appropriate move subtype.

    Raises:
        ValueError: If move_type is missing or unknown.
    """
    move_type = payload.get("move_type")

    if move_type == "pass":
        return PassMove.model_validate(payload)
    elif move_type == "ticket":
        return TicketMove.model_validate(payload)
    elif move_type == "double":
        return DoubleMove.model_validate(payload)
    else:
        raise ValueError(f"Unknown move type: {move_type}")


def tickets_used(move: AnyMove) -> list[Ticket]:
    """Every ticket a move consumes, in the order it is paid."""
    if isinstance(move, TicketMove):
        return [move.ticket]
    if isinstance(move, DoubleMove):
        return [Ticket.DOUBLE, move.first_move.ticket, move.second_move.ticket]
    return []
