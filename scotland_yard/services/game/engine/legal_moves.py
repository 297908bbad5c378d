"""Legal move generation for Mister X and the detectives."""

import logging
from collections import Counter
from collections.abc import Iterable

logger = logging.getLogger(__name__)

from scotland_yard.schemas.game_engine import (
    AnyMove,
    Colour,
    DoubleMove,
    GameState,
    PassMove,
    Player,
    Ticket,
    TicketMove,
)

from ..graph import Edge, GraphProvider
from .moves import tickets_used
from .tickets import has_tickets


def _with_valid_destination(
    state: GameState, mover: Player, edges: Iterable[Edge]
) -> set[Edge]:
    """Drop edges leading onto a square held by another detective.

    Only detectives are blocked: a detective may always move onto Mister X (that
    is how he is caught), and Mister X may step onto a detective.
    """
    if mover.is_mrx:
        return set(edges)

    blocked = {
        p.location
        for p in state.detectives
        if p.colour != mover.colour
    }
    return {edge for edge in edges if edge.destination not in blocked}


def _affordable(player: Player, edges: Iterable[Edge]) -> set[Edge]:
    """Keep edges the player holds a matching ticket for."""
    return {e for e in edges if has_tickets(player, Ticket.from_transport(e.transport))}


def _ticket_move(colour: Colour, edge: Edge, secret: bool = False) -> TicketMove:
    ticket = Ticket.SECRET if secret else Ticket.from_transport(edge.transport)
    return TicketMove(colour=colour, ticket=ticket, destination=edge.destination)


def _can_afford(player: Player, move: AnyMove) -> bool:
    """True if the player can pay every ticket the move uses, counting repeats."""
    needed = Counter(tickets_used(move))
    return all(has_tickets(player, ticket, count) for ticket, count in needed.items())


def _double_moves(
    state: GameState,
    graph: GraphProvider,
    player: Player,
    first_edges: set[Edge],
) -> set[DoubleMove]:
    """All affordable double moves, including those with secret legs.

    Second legs are filtered by destination only; ticket counts are checked once
    per complete double so that two legs on the same ticket need two tickets.
    """
    use_secret = has_tickets(player, Ticket.SECRET)
    moves: set[DoubleMove] = set()

    for first_edge in first_edges:
        second_edges = _with_valid_destination(
            state, player, graph.edges_from(first_edge.destination)
        )
        first_options = {_ticket_move(player.colour, first_edge)}
        if use_secret:
            first_options.add(_ticket_move(player.colour, first_edge, secret=True))

        for second_edge in second_edges:
            second_options = {_ticket_move(player.colour, second_edge)}
            if use_secret:
                second_options.add(_ticket_move(player.colour, second_edge, secret=True))

            for first_move in first_options:
                for second_move in second_options:
                    move = DoubleMove(
                        colour=player.colour,
                        first_move=first_move,
                        second_move=second_move,
                    )
                    if _can_afford(player, move):
                        moves.add(move)

    return moves


def _mrx_moves(
    state: GameState,
    graph: GraphProvider,
    player: Player,
    edges: set[Edge],
) -> set[AnyMove]:
    moves: set[AnyMove] = {
        _ticket_move(player.colour, edge) for edge in _affordable(player, edges)
    }

    if has_tickets(player, Ticket.SECRET):
        moves |= {_ticket_move(player.colour, edge, secret=True) for edge in edges}

    if has_tickets(player, Ticket.DOUBLE) and state.rounds_remaining >= 2:
        doubles = _double_moves(state, graph, player, edges)
        logger.debug("Double moves available for Mister X: %d", len(doubles))
        moves |= doubles

    return moves


def get_legal_moves_for(
    state: GameState, graph: GraphProvider, colour: Colour
) -> set[AnyMove]:
    """Determine every legal move for the given player.

    A detective that cannot move anywhere gets a single PassMove, never an
    empty set. Mister X additionally gets secret and double moves when he holds
    the tickets (and, for doubles, at least two rounds remain).

    Args:
        state: Current game state.
        graph: Transport graph; queried fresh on every call.
        colour: The player to generate moves for.

    Returns:
        Set of legal moves. Callers must not rely on iteration order.
    """
    player = state.get_player(colour)
    if player is None:
        raise ValueError(f"No player with colour {colour.value}")

    edges = _with_valid_destination(state, player, graph.edges_from(player.location))

    if player.is_mrx:
        moves = _mrx_moves(state, graph, player, edges)
    else:
        moves = {_ticket_move(colour, edge) for edge in _affordable(player, edges)}
        if not moves:
            logger.debug("Detective %s is stuck, offering a pass", colour.value)
            moves = {PassMove(colour=colour)}

    logger.debug(
        "Legal moves: player=%s, location=%d, count=%d",
        colour.value,
        player.location,
        len(moves),
    )
    return moves


def get_legal_moves(state: GameState, graph: GraphProvider) -> set[AnyMove]:
    """Legal moves for the player whose turn it is."""
    return get_legal_moves_for(state, graph, state.current_player.colour)
