# -*- coding: utf-8 -*-

from typing import NamedTuple
from enum import Enum

from .core import log, OddsParseError, SubmissionError
from .game import Game, GameResult
from .odds import parse_spread, parse_over_under
from .team import Side, favored_side

############
# PickType #
############

class PickType(Enum):
    SPREAD = 'spread'
    OVER   = 'over'
    UNDER  = 'under'

########
# Pick #
########

class Pick(NamedTuple):
    """Individual pick within a user's parlay; `game` is the snapshot of the game at
    the time the pick was submitted (for reporting), though grading always resolves
    `game_id` against the current game set.
    """
    game_id:   int
    pick_type: PickType
    game:      Game | None = None

    @property
    def key(self) -> str:
        return f"{self.game_id}-{self.pick_type.value}"

def parse_pick_key(key: str) -> tuple[int, PickType]:
    """Parse pick key of the form "<game_id>-<pick_type>" (e.g. "3-over")

    :raises SubmissionError: if key is malformed or pick type is unknown
    """
    game_id, sep, pick_type = str(key).strip().partition('-')
    if not sep or not game_id.isdecimal():
        raise SubmissionError(f"Invalid pick '{key}'")
    try:
        return int(game_id), PickType(pick_type.lower())
    except ValueError:
        raise SubmissionError(f"Unknown pick type '{pick_type}'") from None

#################
# evaluate_pick #
#################

def evaluate_pick(pick: Pick, game: Game | None, result: GameResult | None) -> bool:
    """Return whether the pick is a winner, given the game (for the lines) and its
    matched result.  All inequalities are strict, so a push is a loss.  Missing or
    unparseable inputs always evaluate to False (i.e. never raise).
    """
    if not game or not result or not result.has_scores:
        return False

    try:
        if pick.pick_type == PickType.SPREAD:
            line = parse_spread(game.spread)
            if favored_side(line.team, game) == Side.HOME:
                return result.score_diff > line.magnitude
            return result.score_diff < -line.magnitude

        threshold = parse_over_under(game.over_under)
    except OddsParseError as e:
        log.info(f"Game {game.id} ({game.matchup}): {e}")
        return False

    if pick.pick_type == PickType.OVER:
        return result.total_pts > threshold
    if pick.pick_type == PickType.UNDER:
        return result.total_pts < threshold
    return False

###############
# PickVerdict #
###############

class PickVerdict(NamedTuple):
    pick:    Pick
    game:    Game | None
    result:  GameResult | None
    correct: bool

def grade_pick(pick: Pick, game: Game | None, result: GameResult | None) -> PickVerdict:
    return PickVerdict(pick, game, result, evaluate_pick(pick, game, result))
