"""Trick and hand scoring."""

import logging

from pidro.constants import TWO
from pidro.game.errors import ErrorCode, GameError, invalid_phase
from pidro.game.events import record
from pidro.game.state_machine import threshold_reached
from pidro.models.enums import GameEventType, Phase, Suit, Team
from pidro.models.game_state import GameState
from pidro.models.trick import Trick

logger = logging.getLogger(__name__)


def trick_awards(trick: Trick, trump: Suit, two_keeps_point: bool = False) -> dict[Team, int]:
    """Points each team takes from a completed trick.

    Everything goes to the winner's team, except that with ``two_keeps_point``
    the trump 2 scores for the team of the seat that played it.
    """
    awards = {Team.NORTH_SOUTH: 0, Team.EAST_WEST: 0}
    winning = trick.winning_play(trump)
    if winning is None:
        return awards
    for play in trick.plays:
        team = winning.position.team
        if two_keeps_point and play.card.suit == trump and play.card.rank == TWO:
            team = play.position.team
        awards[team] += play.card.point_value(trump)
    return awards


def hand_points(state: GameState) -> dict[Team, int]:
    """Points captured per team across the completed tricks of this hand."""
    totals = {Team.NORTH_SOUTH: 0, Team.EAST_WEST: 0}
    if state.trump_suit is None:
        return totals
    for trick in state.tricks:
        for team, points in trick_awards(trick, state.trump_suit, state.config.two_of_trump_keeps_point).items():
            totals[team] += points
    return totals


def score_changes(points: dict[Team, int], bidding_team: Team, bid: int) -> tuple[dict[Team, int], bool]:
    """Apply the bid to a hand's points.

    Returns:
        (score change per team, whether the bid was made)

    """
    defending = bidding_team.opponent
    made = points[bidding_team] >= bid
    changes = {
        bidding_team: points[bidding_team] if made else -bid,
        defending: points[defending],
    }
    return changes, made


def determine_winner(scores: dict[Team, int], threshold: int, bidding_team: Team | None) -> Team | None:
    """Team that has won, if any.

    When both teams reach the threshold on the same hand the bidding team wins.
    """
    reached = [team for team in Team if scores[team] >= threshold]
    if not reached:
        return None
    if len(reached) == 2 and bidding_team is not None:
        return bidding_team
    return max(reached, key=lambda team: scores[team])


def score_hand(state: GameState) -> None:
    """Entry work for the scoring phase."""
    if state.phase != Phase.SCORING:
        raise invalid_phase(Phase.SCORING, state.phase)
    if state.bidding_team is None or state.highest_bid is None:
        raise GameError(ErrorCode.INVALID_PHASE, "Cannot score a hand without a winning bid")

    points = hand_points(state)
    bid = state.highest_bid[1]
    changes, made = score_changes(points, state.bidding_team, bid)
    record(
        state,
        GameEventType.HAND_SCORED,
        points={team.value: value for team, value in points.items()},
        scores={team.value: value for team, value in changes.items()},
        bid=bid,
        bidding_team=state.bidding_team.value,
        made_bid=made,
    )
    logger.info(
        "Hand %s scored: bid %s by %s %s, totals %s",
        state.hand_number,
        bid,
        state.bidding_team.value,
        "made" if made else "set",
        {team.value: score for team, score in state.cumulative_scores.items()},
    )

    if threshold_reached(state):
        winner = determine_winner(state.cumulative_scores, state.config.winning_score, state.bidding_team)
        record(state, GameEventType.GAME_WON, team=winner.value, score=state.cumulative_scores[winner])
        logger.info("Game won by %s with %s", winner.value, state.cumulative_scores[winner])
