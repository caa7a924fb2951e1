# -*- coding: utf-8 -*-

import pytest
import requests

from parlay.core import ConfigError, FetchError
from parlay import scores
from parlay.scores import ScoreSource, OddsApiSource, EspnSource, parse_score

class FakeResponse:
    def __init__(self, status_code: int = 200, data=None):
        self.status_code = status_code
        self.data = data
        self.content = b'{}'

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self.data is None:
            raise ValueError("No JSON object could be decoded")
        return self.data

class FakeSession:
    """Returns (or raises) the queued responses in order
    """
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp

def espn_event(home: str, away: str, home_score: str, away_score: str,
               state: str = 'post', completed: bool = True) -> dict:
    return {'id': '401547',
            'competitions': [{'competitors': [
                {'homeAway': 'home', 'score': home_score, 'team': {'displayName': home}},
                {'homeAway': 'away', 'score': away_score, 'team': {'displayName': away}}]}],
            'status': {'type': {'state': state, 'completed': completed,
                                'description': 'Final' if completed else 'Scheduled'}}}

def odds_api_game(home: str, away: str, scores: list[dict] | None,
                  completed: bool = True) -> dict:
    return {'id': 'e912304de2b2ce35b473ce2ecd3d1502',
            'sport_key': 'americanfootball_nfl',
            'completed': completed,
            'home_team': home,
            'away_team': away,
            'scores': scores,
            'last_update': '2026-10-18T23:59:01Z'}

@pytest.fixture
def espn() -> EspnSource:
    return ScoreSource('espn', sports={'NFL': 'nfl'}, retry_interval=0)

@pytest.fixture
def odds_api() -> OddsApiSource:
    return ScoreSource('odds_api', sports={'NFL': 'americanfootball_nfl'},
                       api_key='test-key', retry_interval=0)

def test_parse_score():
    assert parse_score('27') == 27
    assert parse_score(0) == 0
    assert parse_score('0') == 0
    assert parse_score(None) is None
    assert parse_score('') is None
    assert parse_score('N/A') is None

def test_source_class(espn, odds_api):
    assert isinstance(espn, EspnSource)
    assert isinstance(odds_api, OddsApiSource)
    with pytest.raises(ConfigError):
        ScoreSource('scoreboard_xyz')

def test_espn_results(espn):
    data = {'events': [espn_event('Kansas City Chiefs', 'Buffalo Bills', '27', '20'),
                       espn_event('Dallas Cowboys', 'New York Giants', '0', '0',
                                  state='pre', completed=False),
                       espn_event('Miami Dolphins', 'New York Jets', '0', '0')]}
    espn.sess = FakeSession(FakeResponse(data=data))
    results = espn.fetch_results()

    assert len(results) == 3
    assert results[0].league == 'NFL'
    assert results[0].home_team == 'Kansas City Chiefs'
    assert (results[0].home_score, results[0].away_score) == (27, 20)
    assert results[0].completed
    assert results[0].status == 'Final'
    # not started: no scores (distinct from a reported 0-0)
    assert results[1].home_score is None and results[1].away_score is None
    assert not results[1].completed
    assert (results[2].home_score, results[2].away_score) == (0, 0)
    assert espn.sess.calls[0][0].endswith('/football/nfl/scoreboard')

def test_espn_skips_malformed_event(espn):
    bad_event = {'id': '1', 'competitions': []}
    data = {'events': [bad_event, espn_event('Alabama', 'Georgia', '24', '21')]}
    espn.sess = FakeSession(FakeResponse(data=data))
    results = espn.fetch_results()
    assert [r.home_team for r in results] == ['Alabama']

def test_espn_bad_payload(espn):
    espn.sess = FakeSession(FakeResponse(data={'leagues': []}))
    with pytest.raises(FetchError):
        espn.fetch_results()

def test_odds_api_results(odds_api):
    data = [odds_api_game('Kansas City Chiefs', 'Buffalo Bills',
                          [{'name': 'Buffalo Bills', 'score': '20'},
                           {'name': 'Kansas City Chiefs', 'score': '27'}]),
            odds_api_game('Philadelphia Eagles', 'New York Giants', None, completed=False)]
    odds_api.sess = FakeSession(FakeResponse(data=data))
    results = odds_api.fetch_results()

    assert len(results) == 2
    assert (results[0].home_score, results[0].away_score) == (27, 20)
    assert results[0].completed
    assert results[1].home_score is None
    assert not results[1].has_scores

    url, kwargs = odds_api.sess.calls[0]
    assert url == 'https://api.the-odds-api.com/v4/sports/americanfootball_nfl/scores/'
    assert kwargs['params']['apiKey'] == 'test-key'

def test_retry_then_success(espn):
    data = {'events': [espn_event('Alabama', 'Georgia', '24', '21')]}
    espn.sess = FakeSession(requests.ConnectionError("connection reset"),
                            FakeResponse(503),
                            FakeResponse(data=data))
    results = espn.fetch_results()
    assert len(results) == 1
    assert len(espn.sess.calls) == 3

def test_retries_exhausted(espn):
    espn.sess = FakeSession(*(requests.Timeout("timed out") for _ in range(espn.max_retries)))
    with pytest.raises(FetchError):
        espn.fetch_results()
    assert len(espn.sess.calls) == espn.max_retries

def test_client_error_not_retried(odds_api):
    odds_api.sess = FakeSession(FakeResponse(401), FakeResponse(401))
    with pytest.raises(FetchError):
        odds_api.fetch_results()
    assert len(odds_api.sess.calls) == 1

def test_bad_json(espn):
    espn.sess = FakeSession(FakeResponse(200, data=None))
    with pytest.raises(FetchError):
        espn.fetch_results()

def test_api_key_from_env(monkeypatch):
    monkeypatch.setenv(scores.API_KEY_ENV, 'env-key')
    assert scores.get_api_key() == 'env-key'
    assert ScoreSource('odds_api').api_key == 'env-key'

def test_api_key_local_setting(monkeypatch, tmp_path):
    monkeypatch.delenv(scores.API_KEY_ENV, raising=False)
    monkeypatch.setattr(scores, 'DataFile', lambda name: str(tmp_path / name))
    assert scores.get_api_key() is None
    with pytest.raises(ConfigError):
        ScoreSource('odds_api')

    assert scores.set_api_key('local-key') == 0
    assert scores.get_api_key() == 'local-key'
