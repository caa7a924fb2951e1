# -*- coding: utf-8 -*-

from typing import NamedTuple

import regex as re

from .core import log, OddsParseError

##############
# SpreadLine #
##############

class SpreadLine(NamedTuple):
    """Point spread parsed from free-text odds, e.g. "KC -3.5" -> ("KC", 3.5).  The
    sign in the source string is discarded, since `team` is always the favorite.
    """
    team:      str    # token identifying the favored team (as written)
    magnitude: float  # always >= 0.0, "pick'em" is represented by 0.0

PICKEM = 0.0

# Ordered registry of spread formats, the first pattern yielding a team token
# (containing at least one letter) wins.  Each entry is (pattern, anchored),
# where anchored patterns must match the entire (stripped) string.  A pattern
# without a `line` group represents a pick'em.
SPREAD_PATTERNS = [
    (re.compile(r"(?P<team>.+?)\s+(?:PK|PICK|PICK'?EM|EVEN)", re.IGNORECASE), True),
    (re.compile(r'(?P<team>.+?)\s*(?P<line>[-+]?\d+\.?\d*)'), True),
    (re.compile(r'(?P<team>.+?)\s*(?P<line>[-+]?\d+\.?\d*)'), False)
]

OVER_UNDER_PATTERN = re.compile(r'\d+\.?\d*')

def parse_spread(spread: str | None) -> SpreadLine:
    """Extract the favored team token and the (unsigned) magnitude of the spread

    :raises OddsParseError: if no team token and numeric line can be found
    :param spread: free text spread, e.g. "KC -3.5", "SF +6", "ALA PK"
    :return: parsed spread line
    """
    if not spread or not spread.strip():
        raise OddsParseError("Empty spread value")
    value = spread.strip()

    for pattern, anchored in SPREAD_PATTERNS:
        m = pattern.fullmatch(value) if anchored else pattern.search(value)
        if not m:
            continue
        team = m.group('team').strip()
        if not re.search(r'[^\W\d_]', team):
            continue
        line = m.groupdict().get('line')
        magnitude = abs(float(line)) if line else PICKEM
        return SpreadLine(team, magnitude)

    raise OddsParseError(f"Could not parse spread '{spread}'")

def parse_over_under(over_under: str | None) -> float:
    """Extract the total points threshold (first number found) from an over/under
    string, e.g. "O/U 52.5" -> 52.5

    :raises OddsParseError: if there is no number in the string
    """
    if not over_under:
        raise OddsParseError("Empty over/under value")
    if not (m := OVER_UNDER_PATTERN.search(over_under)):
        raise OddsParseError(f"Could not parse over/under '{over_under}'")
    threshold = float(m.group(0))
    log.debug(f"Parsed over/under '{over_under}' as {threshold}")
    return threshold
