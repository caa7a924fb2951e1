#!/usr/bin/env python
# -*- coding: utf-8 -*-

import sys
import csv
from typing import NamedTuple
from collections.abc import Iterable
from pprint import pformat

from .utils import parse_argv
from .core import log

########
# Game #
########

class Game(NamedTuple):
    """Represents a single game on the weekly odds sheet.  Note that `spread` and
    `over_under` are kept as the free text from the sheet (see `odds.py` for the
    parsing), and any field may be None if the source row was short.
    """
    id:         int         # 1-based, by position on the sheet
    league:     str | None
    home:       str | None
    away:       str | None
    spread:     str | None  # e.g. "KC -3.5"
    over_under: str | None  # e.g. "O/U 52.5"
    time:       str | None  # display only

    @property
    def matchup(self) -> str:
        return f"{self.away} @ {self.home}"

##############
# GameResult #
##############

class GameResult(NamedTuple):
    """Game results as reported by an external provider (see `scores.py`).  Scores
    are None if the provider has not reported any (e.g. game not yet started),
    which is distinct from a reported 0-0.
    """
    id:         str | None  # provider's identifier
    league:     str | None
    home_team:  str
    away_team:  str
    home_score: int | None
    away_score: int | None
    completed:  bool
    status:     str | None = None

    @property
    def has_scores(self) -> bool:
        return self.home_score is not None and self.away_score is not None

    @property
    def score_diff(self) -> int | None:
        """From the home team point of view
        """
        if not self.has_scores:
            return None
        return self.home_score - self.away_score

    @property
    def total_pts(self) -> int | None:
        if not self.has_scores:
            return None
        return self.home_score + self.away_score

################
# Game set I/O #
################

GAME_COLS = ('league', 'home', 'away', 'spread', 'over_under', 'time')

def parse_games(lines: Iterable[str]) -> list[Game]:
    """Parse the weekly odds sheet (CSV text, header row first), with columns in
    the following order: League, Home Team, Away Team, Spread, Over/Under, Time.

    Blank rows are skipped, and ids are assigned sequentially over the remaining
    rows.  Short rows yield None for the missing fields; extra columns are ignored.
    """
    games = []
    reader = csv.reader(lines)
    next(reader, None)  # header
    for row in reader:
        if not any(field.strip() for field in row):
            continue
        values = [field.strip() for field in row[:len(GAME_COLS)]]
        if len(row) != len(GAME_COLS):
            log.info(f"Row {len(games) + 1} has {len(row)} columns (expected {len(GAME_COLS)})")
        values += [None] * (len(GAME_COLS) - len(values))
        games.append(Game(len(games) + 1, *values))

    return games

def load_games(file_path: str) -> list[Game]:
    """Read game set from CSV file (see `parse_games()`)
    """
    with open(file_path, 'r', newline='') as f:
        games = parse_games(f)
    log.debug(f"Loaded {len(games)} games from '{file_path}'")
    return games

########
# Main #
########

def main() -> int:
    """Print the games parsed from a weekly odds sheet

    Usage: game.py <games_csv>
    """
    if len(sys.argv) != 2:
        print(f"Usage: game.py <games_csv>", file=sys.stderr)
        return -1

    args, kwargs = parse_argv(sys.argv[1:])
    games = load_games(str(args[0]))

    pp_params = {'sort_dicts': False}
    for game in games:
        print(pformat(game._asdict(), **pp_params))
    return 0

if __name__ == '__main__':
    sys.exit(main())
