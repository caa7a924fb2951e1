#!/usr/bin/env python
# -*- coding: utf-8 -*-

import sys
from typing import NamedTuple, TextIO
from collections.abc import Iterable, Mapping
from enum import Enum

import yaml

from .utils import parse_argv
from .core import cfg, log, ConfigError, SubmissionError
from .game import Game, GameResult, load_games
from .team import match_result
from .pick import PickType, Pick, PickVerdict, parse_pick_key, grade_pick
from .scores import fetch_results

LEAGUE_KEY = 'league'

league_cfg = cfg.config(LEAGUE_KEY)
if league_cfg is None:
    raise ConfigError(f"'{LEAGUE_KEY}' not found in config file")

# optional in config file (usable defaults here)
LEAGUE_NAME = league_cfg.get('name')           or 'Parlay League'
NUM_PICKS   = league_cfg.get('num_picks')      or 3
DFLT_SOURCE = league_cfg.get('default_source') or 'espn'

# some useful type aliases
PickSet     = tuple[Pick, ...]
Submissions = Mapping[str, PickSet]

###############
# UserVerdict #
###############

class UserVerdict(NamedTuple):
    correct_picks: int
    total_picks:   int
    is_winner:     bool  # only if all picks are correct
    pick_verdicts: tuple[PickVerdict, ...]

#########
# grade #
#########

def grade_user(picks: Iterable[Pick], games: Mapping[int, Game],
               results: list[GameResult]) -> UserVerdict:
    """Grade a single user's picks.  A pick referencing a game not in the current
    game set is skipped (and can therefore never count as correct).
    """
    correct_picks = 0
    total_picks   = 0
    pick_verdicts = []
    for pick in picks:
        total_picks += 1
        game = games.get(pick.game_id)
        if not game:
            log.info(f"Game {pick.game_id} not in current game set, skipping pick '{pick.key}'")
            continue
        verdict = grade_pick(pick, game, match_result(game, results))
        if verdict.correct:
            correct_picks += 1
        pick_verdicts.append(verdict)

    return UserVerdict(correct_picks,
                       total_picks,
                       correct_picks == NUM_PICKS,
                       tuple(pick_verdicts))

def grade(submissions: Submissions, games: Iterable[Game],
          results: Iterable[GameResult]) -> dict[str, UserVerdict]:
    """Grade all user submissions against game results (pure function, the caller
    is responsible for passing in consistent snapshots of games and submissions)

    :param submissions: picks, indexed by user name
    :param games: current game set
    :param results: results from an external provider
    :return: verdicts, indexed by user name
    """
    game_map = {g.id: g for g in games}
    results = list(results)

    verdicts = {}
    for user, picks in submissions.items():
        verdicts[user] = grade_user(picks, game_map, results)
        log.debug(f"User '{user}': {verdicts[user].correct_picks} of "
                  f"{verdicts[user].total_picks} correct")
    return verdicts

def winners(verdicts: Mapping[str, UserVerdict]) -> list[str]:
    """Return users with perfect parlays (in order of `verdicts`)
    """
    return [user for user, verdict in verdicts.items() if verdict.is_winner]

#############
# Reporting #
#############

USER_COL    = "User"
CORRECT_COL = "Correct"
WINNER_COL  = "Winner"
WIN_IND     = '*'

class ReportFmt(Enum):
    TXT = 'txt'
    MD  = 'md'

def pick_str(verdict: PickVerdict) -> str:
    game = verdict.game
    win_ind = WIN_IND if verdict.correct else ''
    if not verdict.result:
        status = " (no result)"
    elif not verdict.result.completed:
        status = " (in progress)"
    else:
        status = ''
    return f"{game.matchup} {verdict.pick.pick_type.value.upper()}{win_ind}{status}"

def report_hdr() -> list[str]:
    picks = [f"Pick {n}" for n in range(1, NUM_PICKS + 1)]
    return [USER_COL] + picks + [CORRECT_COL, WINNER_COL]

def report_iter(verdicts: Mapping[str, UserVerdict]) -> Iterable[dict[str, str]]:
    """Rows for the league report (keyed by `report_hdr()` fields), sorted by number
    of correct picks
    """
    picks_hdr = report_hdr()[1:NUM_PICKS + 1]
    by_correct = sorted(verdicts.items(), key=lambda v: -v[1].correct_picks)
    for user, verdict in by_correct:
        picks = {hdr: pick_str(pv) for hdr, pv in zip(picks_hdr, verdict.pick_verdicts)}
        correct = f"{verdict.correct_picks}/{verdict.total_picks}"
        yield {USER_COL: user} | picks | {CORRECT_COL: correct,
                                          WINNER_COL: 'Yes' if verdict.is_winner else ''}

##########
# League #
##########

class League:
    """Owns the authoritative game set and user submissions for the current week.
    Both are only ever replaced wholesale (new game set, or a user's complete pick
    set), and grading is done against a snapshot of each.
    """
    name:        str
    week:        int
    games:       tuple[Game, ...]
    submissions: dict[str, PickSet]
    locked:      bool

    def __init__(self, name: str = None, week: int = 1, games: Iterable[Game] = None):
        self.name        = name or LEAGUE_NAME
        self.week        = week
        self.games       = tuple(games or ())
        self.submissions = {}
        self.locked      = False

    def load_games(self, games: Iterable[Game], week: int = None) -> None:
        """Replace the game set (e.g. new odds upload); existing submissions are
        kept, though picks for games no longer present will not be graded
        """
        self.games = tuple(games)
        if week is not None:
            self.week = week
        log.info(f"{self.name}: loaded {len(self.games)} games for week {self.week}")

    def get_game(self, game_id: int) -> Game | None:
        return next((g for g in self.games if g.id == game_id), None)

    def lock(self) -> None:
        self.locked = True

    def unlock(self) -> None:
        self.locked = False

    def submit(self, user: str, picks: Iterable[str | tuple[int, PickType]]) -> PickSet:
        """Submit (or resubmit, replacing the previous entry) a user's picks, which
        may be specified as pick keys (e.g. "3-over") or `(game_id, PickType)`
        tuples.  Picks are stored along with a snapshot of the game.

        :raises SubmissionError: if the submission is not valid
        :return: the stored picks
        """
        if self.locked:
            raise SubmissionError("Picks are locked")
        user = (user or '').strip()
        if not user:
            raise SubmissionError("User name must be specified")

        pick_set = []
        seen = set()
        for pick in picks:
            game_id, pick_type = parse_pick_key(pick) if isinstance(pick, str) else pick
            if not isinstance(pick_type, PickType):
                try:
                    pick_type = PickType(pick_type)
                except ValueError:
                    raise SubmissionError(f"Unknown pick type '{pick_type}'") from None
            if (game_id, pick_type) in seen:
                raise SubmissionError(f"Duplicate pick '{game_id}-{pick_type.value}'")
            if not (game := self.get_game(game_id)):
                raise SubmissionError(f"Game {game_id} not in current game set")
            seen.add((game_id, pick_type))
            pick_set.append(Pick(game_id, pick_type, game))
        if len(pick_set) != NUM_PICKS:
            raise SubmissionError(f"Exactly {NUM_PICKS} picks required, got {len(pick_set)}")

        if user in self.submissions:
            log.info(f"Replacing picks for user '{user}'")
        self.submissions[user] = tuple(pick_set)
        return self.submissions[user]

    def grade(self, results: Iterable[GameResult]) -> dict[str, UserVerdict]:
        """Grade against snapshots of the current games and submissions
        """
        games = tuple(self.games)
        submissions = dict(self.submissions)
        return grade(submissions, games, results)

    def print_results(self, verdicts: Mapping[str, UserVerdict], file: TextIO = None) -> None:
        """Print winners and pick breakdown by user
        """
        winner = winners(verdicts)
        title = f"{self.name}: Week {self.week}"
        print(f"{title}\n{'=' * len(title)}", file=file)
        print(f"\nWinners ({NUM_PICKS}/{NUM_PICKS}):", file=file)
        print(', '.join(winner) if winner else "-none-", file=file)

        print("", file=file)
        header = report_hdr()
        print("\t".join(header), file=file)
        for report_data in report_iter(verdicts):
            iter_data = (str(report_data.get(key, '')) for key in header)
            print("\t".join(iter_data), file=file)

    def print_results_md(self, verdicts: Mapping[str, UserVerdict], file: TextIO = None) -> None:
        """Same as `print_results()` except in markdown format
        """
        winner = winners(verdicts)
        print(f"# {self.name}: Week {self.week} #", file=file)
        print(f"\n## Winners ({NUM_PICKS}/{NUM_PICKS}) ##", file=file)
        print(', '.join(winner) if winner else "-none-", file=file)

        print("\n## Picks ##", file=file)
        header = report_hdr()
        print("| ", " | ".join(header), " |", file=file)
        print("| ", " --- |" * len(header), file=file)
        for report_data in report_iter(verdicts):
            iter_data = (str(report_data.get(key, '')) for key in header)
            print("| ", " | ".join(iter_data), " |", file=file)

def load_submissions(file_path: str) -> dict[str, list[str]]:
    """Read picks file (YAML), which maps user names to lists of pick keys, e.g.

      alice: [1-spread, 3-over, 4-under]
    """
    with open(file_path, 'r') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise SubmissionError(f"Picks file '{file_path}' must map user names to picks")
    return {str(user): [str(p) for p in picks or []] for user, picks in data.items()}

########
# Main #
########

def main() -> int:
    """Built-in driver to grade a week of parlays, given the odds sheet and the
    users' picks.  Invalid submissions are reported and skipped.

    Usage: league.py <games_csv> <picks_yml> [source=<name>] [week=<n>] [fmt=<txt|md>]
    """
    if len(sys.argv) < 3:
        print(f"Usage: league.py <games_csv> <picks_yml> [source=<name>] [week=<n>] "
              f"[fmt=<txt|md>]", file=sys.stderr)
        return -1

    args, kwargs = parse_argv(sys.argv[1:])
    if len(args) != 2:
        raise RuntimeError("Incorrect number of arguments")
    games_csv, picks_yml = (str(a) for a in args)
    source = kwargs.pop('source', DFLT_SOURCE)
    week   = kwargs.pop('week', 1)
    fmt    = ReportFmt(kwargs.pop('fmt', ReportFmt.TXT.value))
    if kwargs:
        raise RuntimeError(f"Unknown arguments: {', '.join(kwargs)}")

    league = League(week=week)
    league.load_games(load_games(games_csv))
    for user, picks in load_submissions(picks_yml).items():
        try:
            league.submit(user, picks)
        except SubmissionError as e:
            print(f"Picks for '{user}' rejected: {e}", file=sys.stderr)
    league.lock()

    verdicts = league.grade(fetch_results(source))
    if fmt == ReportFmt.MD:
        league.print_results_md(verdicts)
    else:
        league.print_results(verdicts)
    return 0

if __name__ == '__main__':
    sys.exit(main())
