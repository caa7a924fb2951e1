# -*- coding: utf-8 -*-

from parlay.utils import Config, parse_argv, replace_tokens

def test_parse_argv():
    args, kwargs = parse_argv(['week1.csv', 'picks.yml', 'source=odds_api', 'week=7', 'fmt=md'])
    assert args == ['week1.csv', 'picks.yml']
    assert kwargs == {'source': 'odds_api', 'week': 7, 'fmt': 'md'}

def test_parse_argv_typecast():
    args, kwargs = parse_argv(['3', '2.5', 'true', 'none', 'key=a=b'])
    assert args == [3, 2.5, True, None]
    assert kwargs == {'key': 'a=b'}

def test_replace_tokens():
    url = 'https://example.com/{sport}/scores?days={days}'
    assert replace_tokens(url, sport='nfl', days=3) == 'https://example.com/nfl/scores?days=3'
    assert replace_tokens(url, sport='nfl') == 'https://example.com/nfl/scores?days={days}'

def test_config(tmp_path):
    (tmp_path / 'base.yml').write_text("league:\n  name: Base\ndata_sources:\n  espn: {}\n")
    (tmp_path / 'local.yml').write_text("league:\n  name: Local\n")
    cfg = Config('base.yml, local.yml', str(tmp_path))
    assert cfg.config('league') == {'name': 'Local'}
    assert cfg.config('data_sources') == {'espn': {}}
    assert cfg.config('missing') is None
    assert set(cfg.config()) == {'league', 'data_sources'}
