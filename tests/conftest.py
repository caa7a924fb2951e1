# -*- coding: utf-8 -*-

import pytest

from parlay.game import Game, GameResult

def new_result(home: str, away: str, home_score: int | None, away_score: int | None,
               completed: bool = True) -> GameResult:
    return GameResult(None, None, home, away, home_score, away_score, completed)

@pytest.fixture
def make_result():
    return new_result

@pytest.fixture
def games() -> list[Game]:
    return [Game(1, 'NFL', 'Kansas City Chiefs', 'Buffalo Bills', 'KC -3.5', 'O/U 52.5', 'Sun 1:00 PM'),
            Game(2, 'NFL', 'San Francisco 49ers', 'Dallas Cowboys', 'SF -6', 'O/U 48.5', 'Sun 4:25 PM'),
            Game(3, 'NCAAF', 'Alabama', 'Georgia', 'ALA -2.5', 'O/U 55', 'Sat 7:00 PM'),
            Game(4, 'NFL', 'Philadelphia Eagles', 'New York Giants', 'PHI -10', 'O/U 45', 'Sun 1:00 PM'),
            Game(5, 'NCAAF', 'Michigan', 'Ohio State', 'OSU -3', 'O/U 50.5', 'Sat 12:00 PM')]

@pytest.fixture
def results() -> list[GameResult]:
    """Results as reported by a provider (full team names); game 3 (Alabama vs
    Georgia) has no reported result
    """
    return [new_result('Kansas City Chiefs', 'Buffalo Bills', 27, 20),
            new_result('San Francisco 49ers', 'Dallas Cowboys', 24, 21),
            new_result('Philadelphia Eagles', 'New York Giants', 30, 14),
            new_result('Michigan Wolverines', 'Ohio State Buckeyes', 20, 27)]
