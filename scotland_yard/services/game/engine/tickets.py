"""Ticket ledger operations.

Players are immutable snapshots, so every operation returns a new Player or
GameState rather than changing counts in place.
"""

import logging
from collections.abc import Mapping

logger = logging.getLogger(__name__)

from scotland_yard.schemas.game_engine import Colour, GameState, Player, Ticket

from ..errors import ConfigurationError, InvariantViolation


def has_tickets(player: Player, ticket: Ticket, count: int = 1) -> bool:
    """True if the player holds at least `count` tickets of the given kind."""
    return player.tickets.get(ticket, 0) >= count


def total_tickets(player: Player) -> int:
    return sum(player.tickets.values())


def remove_ticket(player: Player, ticket: Ticket) -> Player:
    """Debit one ticket, refusing to go below zero."""
    remaining = player.tickets.get(ticket, 0) - 1
    if remaining < 0:
        raise InvariantViolation(
            f"{player.colour.value} has no {ticket.value} ticket to spend"
        )
    return player.model_copy(update={"tickets": {**player.tickets, ticket: remaining}})


def add_ticket(player: Player, ticket: Ticket) -> Player:
    return player.model_copy(
        update={"tickets": {**player.tickets, ticket: player.tickets.get(ticket, 0) + 1}}
    )


def replace_player(state: GameState, player: Player) -> GameState:
    """Return a state with the player of the same colour swapped for `player`."""
    players = [player if p.colour == player.colour else p for p in state.players]
    return state.model_copy(update={"players": players})


def spend_ticket(state: GameState, colour: Colour, ticket: Ticket) -> GameState:
    """Debit a ticket from a player.

    Tickets used by detectives are handed to Mister X.
    """
    player = state.get_player(colour)
    if player is None:
        raise InvariantViolation(f"No player with colour {colour.value}")

    state = replace_player(state, remove_ticket(player, ticket))
    logger.debug(
        "Ticket spent: player=%s, ticket=%s, remaining=%d",
        colour.value,
        ticket.value,
        player.tickets.get(ticket, 0) - 1,
    )

    if player.is_detective:
        state = replace_player(state, add_ticket(state.fugitive, ticket))
        logger.debug(
            "Ticket handed to Mister X: ticket=%s, from=%s",
            ticket.value,
            colour.value,
        )
    return state


def validate_ticket_set(colour: Colour, tickets: Mapping[Ticket, int]) -> None:
    """Check a configured ticket allocation.

    Every player must list all five ticket kinds, no count may be negative, and
    only Mister X may hold secret or double tickets.
    """
    if set(tickets) != set(Ticket):
        missing = sorted(t.value for t in set(Ticket) - set(tickets))
        raise ConfigurationError(
            f"Player {colour.value} must hold exactly the five ticket kinds, missing: {missing}"
        )

    for ticket, count in tickets.items():
        if count < 0:
            raise ConfigurationError(
                f"Player {colour.value} has a negative {ticket.value} ticket count"
            )

    if colour.is_detective:
        for ticket in (Ticket.SECRET, Ticket.DOUBLE):
            if tickets[ticket] != 0:
                raise ConfigurationError(
                    f"Detective {colour.value} may not hold {ticket.value} tickets"
                )
