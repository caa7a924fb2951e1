# -*- coding: utf-8 -*-

from collections.abc import Iterable
from enum import Enum

import regex as re

from .core import log
from .game import Game, GameResult

###################
# Name processing #
###################

# removed (in this order) after normalization, in order to collapse common
# city name variants
NAME_NOISE = ('saint', 'new', 'los', 'san')

# abbreviation tokens are expected to be short, e.g. "SF", "KC", "NYG"
ABBREV_MIN = 2
ABBREV_MAX = 4

def normalize_team_name(name: str | None) -> str:
    """Lowercase, strip non-alphanumerics, and remove `NAME_NOISE` substrings
    (e.g. "San Francisco 49ers" -> "francisco49ers")
    """
    if not name:
        return ''
    norm = re.sub(r'[^a-z0-9]', '', name.lower())
    for noise in NAME_NOISE:
        norm = norm.replace(noise, '')
    return norm

def name_words(name: str) -> list[str]:
    return [w for w in (re.sub(r'[^a-z0-9]', '', x) for x in name.lower().split()) if w]

def initials(name: str) -> str:
    return ''.join(w[0] for w in name_words(name))

def abbrev_match(short: str, long: str) -> bool:
    """Return True if `short` is `long` with its leading words abbreviated, e.g.
    "SF 49ers" for "San Francisco 49ers" (remainders compared after normalization)
    """
    short_words = short.split()
    if len(short_words) < 2:
        return False
    abbrev = re.sub(r'[^a-z]', '', short_words[0].lower())
    if not ABBREV_MIN <= len(abbrev) <= ABBREV_MAX:
        return False
    long_words = long.split()
    if len(long_words) <= len(abbrev):
        return False
    if initials(' '.join(long_words[:len(abbrev)])) != abbrev:
        return False
    short_rest = normalize_team_name(' '.join(short_words[1:]))
    long_rest = normalize_team_name(' '.join(long_words[len(abbrev):]))
    return bool(short_rest) and short_rest == long_rest

def team_names_match(name1: str | None, name2: str | None) -> bool:
    """Fuzzy comparison of team names: normalized names are substrings of each other
    (in either direction), or one is an abbreviated form of the other.  Note that an
    empty normalized name never matches anything.
    """
    norm1 = normalize_team_name(name1)
    norm2 = normalize_team_name(name2)
    if not norm1 or not norm2:
        return False
    if norm1 in norm2 or norm2 in norm1:
        return True
    return abbrev_match(name1, name2) or abbrev_match(name2, name1)

################
# match_result #
################

def match_result(game: Game, results: Iterable[GameResult]) -> GameResult | None:
    """Find the externally reported result for a game, based on both home and away
    team names.  If multiple results match, the first one wins.

    :param game: game from the current game set
    :param results: results from an external provider
    :return: matching result, or None if not found
    """
    for result in results:
        if (team_names_match(game.home, result.home_team) and
            team_names_match(game.away, result.away_team)):
            return result

    log.debug(f"No result found for game {game.id} ({game.matchup})")
    return None

################
# favored_side #
################

class Side(Enum):
    HOME = 'home'
    AWAY = 'away'

def team_token_matches(token: str, name: str | None) -> bool:
    """Return True if the team token from an odds string (e.g. "KC", "PHI", "Chiefs")
    plausibly identifies the team `name`
    """
    if not name:
        return False
    tok = re.sub(r'[^a-z0-9]', '', token.lower())
    full = re.sub(r'[^a-z0-9]', '', name.lower())
    if not tok:
        return False
    if full.startswith(tok):
        return True
    if len(tok) >= ABBREV_MIN and initials(name).startswith(tok):
        return True
    # guard against short tokens appearing by chance (e.g. "ne" in "tennessee")
    return len(tok) >= ABBREV_MAX and tok in normalize_team_name(name)

def favored_side(token: str, game: Game) -> Side:
    """Determine whether the team token of a spread refers to the home or away team
    of the game.  Exact match of the home team name takes precedence; beyond that,
    the home team is only chosen if the token identifies it unambiguously.
    """
    if token == game.home:
        return Side.HOME
    if token == game.away:
        return Side.AWAY

    home_match = team_token_matches(token, game.home)
    away_match = team_token_matches(token, game.away)
    if home_match and away_match:
        log.info(f"Spread team '{token}' is ambiguous for game {game.id} ({game.matchup})")
    return Side.HOME if home_match and not away_match else Side.AWAY
