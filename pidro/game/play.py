"""Trick play: killing excess trumps, playing cards and going cold."""

import logging

from pidro.game.errors import ErrorCode, GameError, invalid_phase
from pidro.game.events import cards_by_seat, record
from pidro.game.scoring import trick_awards
from pidro.game.trump import can_kill_to_six, coerce_card, count_trump, validate_kill_cards
from pidro.models.card import Card, non_point_trumps, non_trump_cards, sort_by_trump_rank, to_notations
from pidro.models.enums import GameEventType, Phase, Position, Suit
from pidro.models.game_state import GameState

logger = logging.getLogger(__name__)


def _require_trump(state: GameState) -> Suit:
    if state.trump_suit is None:
        raise GameError(ErrorCode.TRUMP_NOT_DECLARED, "Trump suit has not been declared")
    return state.trump_suit


def kills_for_hand(hand: list[Card], trump: Suit, hand_size: int) -> list[Card]:
    """Cards a seat must kill to get down to ``hand_size`` trumps.

    The lowest-ranked non-point trumps go first. If the hand does not hold
    enough non-point trumps to cover the excess nothing is killed.
    """
    excess = count_trump(hand, trump) - hand_size
    if excess <= 0 or not can_kill_to_six(hand, trump, hand_size):
        return []
    kills = sort_by_trump_rank(non_point_trumps(hand, trump), trump, descending=False)[:excess]
    validate_kill_cards(hand, kills, trump)
    return kills


def start_play(state: GameState) -> None:
    """Entry work for the playing phase.

    Seats over the hand limit kill their excess, then every seat without a
    trump goes cold.
    """
    if state.phase != Phase.PLAYING:
        raise invalid_phase(Phase.PLAYING, state.phase)
    trump = _require_trump(state)

    killed = {}
    for position in Position:
        player = state.players[position]
        cards = kills_for_hand(player.hand, trump, state.config.final_hand_size)
        if cards:
            killed[position] = cards
        elif player.trump_count(trump) > state.config.final_hand_size:
            logger.info(
                "%s cannot kill down to %s and keeps %s cards",
                position.value,
                state.config.final_hand_size,
                len(player.hand),
            )
    if killed:
        record(state, GameEventType.CARDS_KILLED, killed=cards_by_seat(killed))

    for position in Position:
        player = state.players[position]
        if not player.eliminated and not player.has_trump(trump):
            _go_cold(state, position, trump)


def play_card(state: GameState, position: Position, card: Card | str) -> None:
    """Play a trump card to the current trick.

    Raises:
        GameError: INVALID_PHASE, TRUMP_NOT_DECLARED, INVALID_CARD,
            CARD_NOT_IN_HAND or CANNOT_PLAY_NON_TRUMP

    """
    if state.phase != Phase.PLAYING:
        raise invalid_phase(Phase.PLAYING, state.phase)
    trump = _require_trump(state)
    card = coerce_card(card)
    player = state.players[position]
    if not player.has_card(card):
        raise GameError(ErrorCode.CARD_NOT_IN_HAND, f"Card {card.notation} is not in your hand", card=card)
    if not card.is_trump(trump):
        raise GameError(
            ErrorCode.CANNOT_PLAY_NON_TRUMP,
            f"Cannot play non-trump card {card.notation} (trump is {trump.value})",
            card=card,
            trump=trump,
        )

    record(state, GameEventType.CARD_PLAYED, position, card=card.notation)
    logger.debug("%s plays %s", position.value, card.notation)

    if not player.has_trump(trump):
        _go_cold(state, position, trump)

    if trick_complete(state):
        _finish_trick(state, trump)


def trick_complete(state: GameState) -> bool:
    """A trick is complete once every active seat has played in it."""
    trick = state.current_trick
    if trick is None or not trick.plays:
        return False
    return all(trick.has_played(position) for position in state.active_positions())


def _go_cold(state: GameState, position: Position, trump: Suit) -> None:
    revealed = non_trump_cards(state.players[position].hand, trump)
    record(state, GameEventType.PLAYER_WENT_COLD, position, revealed=to_notations(revealed))
    logger.info("%s went cold (hand %s), revealing %s cards", position.value, state.hand_number, len(revealed))


def _finish_trick(state: GameState, trump: Suit) -> None:
    trick = state.current_trick
    winning = trick.winning_play(trump)
    awarded = trick_awards(trick, trump, state.config.two_of_trump_keeps_point)
    record(
        state,
        GameEventType.TRICK_WON,
        winning.position,
        points=trick.point_total(trump),
        awarded={team.value: points for team, points in awarded.items()},
    )
    logger.debug("Trick %s won by %s with %s", trick.number, winning.position.value, winning.card.notation)


def legal_plays(state: GameState, position: Position) -> list[Card]:
    """Trump cards ``position`` may play now."""
    if state.phase != Phase.PLAYING or state.trump_suit is None:
        return []
    player = state.players[position]
    if player.eliminated:
        return []
    return [card for card in player.hand if card.is_trump(state.trump_suit)]
