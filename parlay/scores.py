#!/usr/bin/env python
# -*- coding: utf-8 -*-

import sys
from os import environ, makedirs
import os.path
from time import sleep
from pprint import pformat

import requests

from .utils import parse_argv, replace_tokens
from .core import cfg, DataFile, log, ConfigError, DataError, FetchError, LogicError
from .game import GameResult

DATA_SRC_KEY   = 'data_sources'
API_KEY_ENV    = 'PARLAY_ODDS_API_KEY'
DFLT_KEY_FILE  = 'odds_api_key'

data_src = cfg.config(DATA_SRC_KEY)
if not data_src:
    raise ConfigError(f"'{DATA_SRC_KEY}' not found in config file")

# used if not specified in config file
DFLT_HTTP_HEADERS   = {'User-Agent': 'Mozilla/5.0'}
DFLT_TIMEOUT        = 10.0
DFLT_MAX_RETRIES    = 3
DFLT_RETRY_INTERVAL = 2.0

def parse_score(value) -> int | None:
    """Provider scores are generally strings; return None if not usable
    """
    if value is None or value == '':
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        log.info(f"Unexpected score value '{value}'")
        return None

###########
# API key #
###########

def get_api_key() -> str | None:
    """Return API key for the paid odds provider, looking (in order) at the
    environment, the config file, and the locally saved developer setting (see
    `set_api_key()`)
    """
    if api_key := environ.get(API_KEY_ENV):
        return api_key
    odds_api = data_src.get('odds_api') or {}
    if api_key := odds_api.get('api_key'):
        return api_key
    key_file = DataFile(odds_api.get('api_key_file') or DFLT_KEY_FILE)
    try:
        with open(key_file, 'r') as f:
            return f.read().strip() or None
    except FileNotFoundError:
        return None

def set_api_key(key: str) -> int:
    """Save API key locally (developer setting, not meant for deployment)
    """
    odds_api = data_src.get('odds_api') or {}
    key_file = DataFile(odds_api.get('api_key_file') or DFLT_KEY_FILE)
    makedirs(os.path.dirname(key_file), exist_ok=True)
    with open(key_file, 'w') as f:
        f.write(str(key).strip())
    log.info(f"API key saved to '{key_file}'")
    return 0

###############
# ScoreSource #
###############

class ScoreSource:
    """Abstract base class for external providers of game results; instantiating
    `ScoreSource(<name>)` returns the proper subclass, configured from the
    `data_sources` entry of the same name.
    """
    name:           str
    config:         dict
    sports:         dict[str, str]  # league -> provider sport key
    http_headers:   dict
    timeout:        float
    max_retries:    int
    retry_interval: float
    sess:           requests.Session

    @classmethod
    def get_class(cls, name: str) -> type:
        if name not in SOURCE_MAP:
            raise ConfigError(f"Unknown score source '{name}'")
        src_class = SOURCE_MAP[name]
        assert issubclass(src_class, cls)
        return src_class

    def __new__(cls, name: str, **kwargs):
        src_class = cls.get_class(name)
        return super().__new__(src_class)

    def __init__(self, name: str, **kwargs):
        """Config file values may be overridden by `kwargs`
        """
        if name not in data_src:
            raise ConfigError(f"'{name}' not found in '{DATA_SRC_KEY}' config")
        self.name   = name
        self.config = data_src[name] | kwargs

        self.sports         = self.config.get('sports') or {}
        self.http_headers   = self.config.get('http_headers') or DFLT_HTTP_HEADERS
        self.timeout        = self.config.get('timeout') or DFLT_TIMEOUT
        self.max_retries    = self.config.get('max_retries') or DFLT_MAX_RETRIES
        self.retry_interval = self.config.get('retry_interval', DFLT_RETRY_INTERVAL)
        self.sess           = requests.Session()
        if not self.sports:
            raise ConfigError(f"'sports' not specified for score source '{name}'")

    def get_json(self, url: str, params: dict = None) -> dict | list:
        """GET JSON data from provider, with retries for network errors and server-
        side failures

        :raises FetchError: if the data could not be retrieved
        """
        for attempt in range(1, self.max_retries + 1):
            if attempt > 1:
                sleep(self.retry_interval)
            try:
                resp = self.sess.get(url, params=params, headers=self.http_headers,
                                     timeout=self.timeout)
            except requests.RequestException as e:
                log.info(f"GET '{url}' failed (attempt {attempt}): {e}")
                continue
            if resp.ok:
                try:
                    data = resp.json()
                except ValueError as e:
                    raise FetchError(f"Bad JSON from '{url}': {e}") from e
                log.debug(f"Downloaded {len(resp.content)} bytes from '{url}'")
                return data
            log.info(f"GET '{url}' returned status code {resp.status_code} (attempt {attempt})")
            # client errors (other than rate limiting) will not fix themselves
            if 400 <= resp.status_code < 500 and resp.status_code != 429:
                raise FetchError(f"GET '{url}' returned status code {resp.status_code}")

        raise FetchError(f"GET '{url}' failed after {self.max_retries} attempts")

    def fetch_results(self) -> list[GameResult]:
        """Return results for all configured sports (leagues)

        :raises FetchError: if results for any sport could not be retrieved
        """
        results = []
        for league, sport in self.sports.items():
            league_results = self.fetch_sport(league, sport)
            log.debug(f"Fetched {len(league_results)} {league} results from '{self.name}'")
            results.extend(league_results)
        return results

    def fetch_sport(self, league: str, sport: str) -> list[GameResult]:
        raise LogicError("Must be implemented by subclasses")

class OddsApiSource(ScoreSource):
    """The Odds API (https://the-odds-api.com), requires API key; note that the
    free tier is capped on monthly requests (each sport fetched is one request)
    """
    api_key: str

    def __init__(self, name: str, **kwargs):
        super().__init__(name, **kwargs)
        api_key = self.config.get('api_key') or get_api_key()
        if not api_key:
            raise ConfigError(f"API key required for '{name}' (set {API_KEY_ENV})")
        self.api_key = api_key

    def fetch_sport(self, league: str, sport: str) -> list[GameResult]:
        url = replace_tokens(self.config['scores_url'], sport=sport)
        params = {'apiKey': self.api_key, 'daysFrom': self.config.get('days_from') or 3}
        data = self.get_json(url, params)
        if not isinstance(data, list):
            raise FetchError(f"Unexpected payload from '{url}'")

        results = []
        for rec in data:
            try:
                results.append(self.parse_game(league, rec))
            except (KeyError, TypeError, DataError) as e:
                log.warning(f"Skipping malformed {league} record from '{self.name}': {e!r}")
        return results

    @staticmethod
    def parse_game(league: str, rec: dict) -> GameResult:
        home_team = rec['home_team']
        away_team = rec['away_team']
        # `scores` is null for games not yet started
        scores = {s['name']: s.get('score') for s in rec.get('scores') or []}
        return GameResult(id=rec.get('id'),
                          league=league,
                          home_team=home_team,
                          away_team=away_team,
                          home_score=parse_score(scores.get(home_team)),
                          away_score=parse_score(scores.get(away_team)),
                          completed=bool(rec.get('completed')),
                          status=rec.get('last_update'))

class EspnSource(ScoreSource):
    """ESPN public scoreboard (no key needed, but unofficial and subject to change
    without notice)
    """
    ESPN_PRE_STATE = 'pre'

    def fetch_sport(self, league: str, sport: str) -> list[GameResult]:
        url = replace_tokens(self.config['scoreboard_url'], sport=sport)
        data = self.get_json(url)
        if not isinstance(data, dict) or 'events' not in data:
            raise FetchError(f"No 'events' in payload from '{url}'")

        results = []
        for event in data['events']:
            try:
                results.append(self.parse_event(league, event))
            except (KeyError, IndexError, TypeError, DataError) as e:
                log.warning(f"Skipping malformed {league} event from '{self.name}': {e!r}")
        return results

    @classmethod
    def parse_event(cls, league: str, event: dict) -> GameResult:
        competition = event['competitions'][0]
        teams = {c['homeAway']: c for c in competition['competitors']}
        if 'home' not in teams or 'away' not in teams:
            raise DataError(f"Home/away competitors not found for event {event.get('id')}")
        home, away = teams['home'], teams['away']
        status = event['status']['type']
        # ESPN reports "0" before kickoff, which is not a real score
        started = status.get('state') != cls.ESPN_PRE_STATE
        return GameResult(id=event.get('id'),
                          league=league,
                          home_team=home['team']['displayName'],
                          away_team=away['team']['displayName'],
                          home_score=parse_score(home.get('score')) if started else None,
                          away_score=parse_score(away.get('score')) if started else None,
                          completed=bool(status.get('completed')),
                          status=status.get('description'))

SOURCE_MAP = {'odds_api': OddsApiSource,
              'espn':     EspnSource}

#################
# fetch_results #
#################

def fetch_results(source: str = 'espn') -> list[GameResult]:
    """Convenience function for fetching results from the specified source

    :raises FetchError: if results could not be retrieved
    """
    return ScoreSource(source).fetch_results()

########
# Main #
########

def print_results(source: str = 'espn') -> int:
    pp_params = {'sort_dicts': False}
    for result in fetch_results(source):
        print(pformat(result._asdict(), **pp_params))
    return 0

def main() -> int:
    """Built-in driver to invoke various utility functions for the module

    Usage: scores.py <util_func> [<args> ...]

    Functions/usage:
      - print_results [source=<name>]
      - set_api_key key=<api_key>
    """
    if len(sys.argv) < 2:
        print(f"Utility function not specified", file=sys.stderr)
        return -1
    elif sys.argv[1] not in globals():
        print(f"Unknown utility function '{sys.argv[1]}'", file=sys.stderr)
        return -1

    util_func = globals()[sys.argv[1]]
    args, kwargs = parse_argv(sys.argv[2:])

    return util_func(*args, **kwargs)

if __name__ == '__main__':
    sys.exit(main())
