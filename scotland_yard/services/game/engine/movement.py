"""Applying pass, ticket and double moves to the game state."""

import logging

logger = logging.getLogger(__name__)

from scotland_yard.schemas.game_engine import (
    Colour,
    DoubleMove,
    GameState,
    PassMove,
    Ticket,
    TicketMove,
)

from .events import AnyGameEvent, MoveMade, RoundStarted
from .tickets import replace_player, spend_ticket
from .visibility import (
    get_reportable_fugitive_location,
    plan_double_disclosure,
    reveal_if_due,
)


def get_next_turn_order(current_order: int, num_players: int) -> int:
    """Calculate the next player's turn order (0-indexed, wrapping)."""
    next_order = (current_order + 1) % num_players
    logger.debug(
        "Turn order calculation: current=%d, num_players=%d, next=%d",
        current_order,
        num_players,
        next_order,
    )
    return next_order


def advance_turn(state: GameState) -> GameState:
    return state.model_copy(
        update={
            "current_turn_order": get_next_turn_order(
                state.current_turn_order, len(state.players)
            )
        }
    )


def _move_player(state: GameState, colour: Colour, destination: int) -> GameState:
    player = state.get_player(colour)
    return replace_player(state, player.model_copy(update={"location": destination}))


def _start_round(state: GameState, events: list[AnyGameEvent]) -> GameState:
    """Advance the round counter after Mister X moves and reveal him if due."""
    state = state.model_copy(update={"current_round": state.current_round + 1})
    logger.info("Round started: round=%d/%d", state.current_round, len(state.rounds))
    events.append(RoundStarted(round_number=state.current_round))
    return reveal_if_due(state)


def apply_pass(state: GameState, move: PassMove) -> tuple[GameState, list[AnyGameEvent]]:
    logger.info("Player passes: player=%s", move.colour.value)
    return advance_turn(state), [MoveMade(move=move)]


def apply_ticket_move(
    state: GameState, move: TicketMove
) -> tuple[GameState, list[AnyGameEvent]]:
    """Spend the ticket, move the player and hand the turn on.

    A detective's move is reported as made. Mister X's move starts a new round
    and is reported with the location that may be disclosed for that round.
    """
    events: list[AnyGameEvent] = []

    state = spend_ticket(state, move.colour, move.ticket)
    state = _move_player(state, move.colour, move.destination)
    state = advance_turn(state)

    if move.colour.is_detective:
        logger.info(
            "Detective moved: player=%s, ticket=%s, destination=%d",
            move.colour.value,
            move.ticket.value,
            move.destination,
        )
        events.append(MoveMade(move=move))
        return state, events

    state = _start_round(state, events)
    shown = move.model_copy(update={"destination": get_reportable_fugitive_location(state)})
    logger.info(
        "Mister X moved: ticket=%s, round=%d, shown_destination=%d",
        move.ticket.value,
        state.current_round,
        shown.destination,
    )
    events.append(MoveMade(move=shown))
    return state, events


def apply_double_move(
    state: GameState, move: DoubleMove
) -> tuple[GameState, list[AnyGameEvent]]:
    """Play both legs of a double move as one turn spanning two rounds.

    Emits the whole double (with disclosed locations) first, then a round start
    and the disclosed leg for each of the two legs in order.
    """
    events: list[AnyGameEvent] = []

    state = spend_ticket(state, move.colour, Ticket.DOUBLE)
    state = advance_turn(state)

    first_shown, second_shown = plan_double_disclosure(state, move)
    shown_first_move = move.first_move.model_copy(update={"destination": first_shown})
    shown_second_move = move.second_move.model_copy(update={"destination": second_shown})
    events.append(
        MoveMade(
            move=move.model_copy(
                update={"first_move": shown_first_move, "second_move": shown_second_move}
            )
        )
    )

    for leg, shown_leg in (
        (move.first_move, shown_first_move),
        (move.second_move, shown_second_move),
    ):
        state = spend_ticket(state, move.colour, leg.ticket)
        state = _move_player(state, move.colour, leg.destination)
        state = _start_round(state, events)
        events.append(MoveMade(move=shown_leg))

    logger.info(
        "Mister X made a double move: tickets=(%s, %s), round=%d, shown=(%d, %d)",
        move.first_move.ticket.value,
        move.second_move.ticket.value,
        state.current_round,
        first_shown,
        second_shown,
    )
    return state, events
