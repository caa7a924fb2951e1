# -*- coding: utf-8 -*-

from collections.abc import Iterable
import os.path

import regex as re
import yaml

##########
# Config #
##########

class Config:
    """Manages YAML config files.  Sections from files loaded later replace (not
    merge with) same-named sections from earlier files.
    """
    config_dir:  str
    config_data: dict

    def __init__(self, files: str | Iterable[str], config_dir: str = None):
        self.config_dir  = config_dir
        self.config_data = {}
        self.load(files)

    def load(self, files: str | Iterable[str]) -> None:
        """Load one or more config files (comma-separated string or list); paths
        are relative to `config_dir`, unless absolute
        """
        if isinstance(files, str):
            files = [f.strip() for f in files.split(',')]
        for file in files:
            path = file
            if self.config_dir and not os.path.isabs(file):
                path = os.path.join(self.config_dir, file)
            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}
            self.config_data.update(data)

    def config(self, section: str = None) -> dict | None:
        """Return specified section of the config data (or all data, if `section`
        is not specified)
        """
        if not section:
            return self.config_data
        return self.config_data.get(section)

##############
# parse_argv #
##############

def typecast(val: str) -> str | int | float | bool | None:
    """Convert string value to bool, None, int, or float, if it looks like one
    """
    if val.lower() in ('true', 't', 'yes', 'y'):
        return True
    if val.lower() in ('false', 'f', 'no', 'n'):
        return False
    if val.lower() in ('null', 'none', 'nil'):
        return None
    if val.isdecimal():
        return int(val)
    if re.fullmatch(r'-?\d+\.\d*', val):
        return float(val)
    return val

def parse_argv(argv: list[str]) -> tuple[list, dict]:
    """Takes a list of arguments (typically a slice of sys.argv), and converts them
    into a list of positional args and a dict of kwargs (for `key=value` args)
    """
    args = []
    kwargs = {}
    for arg in argv:
        if '=' in arg:
            key, val = arg.split('=', 1)
            kwargs[key] = typecast(val)
        else:
            args.append(typecast(arg))
    return args, kwargs

##################
# replace_tokens #
##################

def replace_tokens(fmt: str, **kwargs) -> str:
    """Replace tokens (e.g. "{sport}") in `fmt` with values from `kwargs`; tokens
    without a matching kwarg are left in place
    """
    new_str = fmt
    for key, value in kwargs.items():
        new_str = new_str.replace('{' + key + '}', str(value))
    return new_str
