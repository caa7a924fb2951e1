# -*- coding: utf-8 -*-

from os import environ, makedirs
import os.path
import logging
import logging.handlers

from . import utils

######################
# Config/Environment #
######################

FILE_DIR     = os.path.dirname(os.path.realpath(__file__))
BASE_DIR     = os.path.realpath(os.path.join(FILE_DIR, os.pardir))

CONFIG_DIR   = 'config'
DFLT_CONFIG  = ['config.yml']
CONFIG_FILES = environ.get('PARLAY_CONFIG_FILES') or DFLT_CONFIG
cfg          = utils.Config(CONFIG_FILES, os.path.join(BASE_DIR, CONFIG_DIR))

DEBUG        = int(environ.get('PARLAY_DEBUG') or 0)

########
# Data #
########

DATA_DIR = 'data'

def DataFile(file_name: str, dir: str = DATA_DIR) -> str:
    """Given name of file, return full path name (in DATA_DIR, or specified
    directory)
    """
    return os.path.join(BASE_DIR, dir, file_name)

###########
# Logging #
###########

LOGGER_NAME  = environ.get('PARLAY_LOG_NAME') or 'parlay'
LOG_DIR      = 'log'
LOG_FILE     = LOGGER_NAME + '.log'
LOG_PATH     = os.path.join(BASE_DIR, LOG_DIR, LOG_FILE)
LOG_FMTR     = logging.Formatter('%(asctime)s %(levelname)s [%(filename)s:%(lineno)s]: %(message)s')
LOG_FILE_MAX = 25000000
LOG_FILE_NUM = 50

makedirs(os.path.dirname(LOG_PATH), exist_ok=True)
dflt_hand = logging.handlers.RotatingFileHandler(LOG_PATH, 'a', LOG_FILE_MAX, LOG_FILE_NUM)
dflt_hand.setLevel(logging.DEBUG)
dflt_hand.setFormatter(LOG_FMTR)

dbg_hand = logging.StreamHandler()
dbg_hand.setLevel(logging.DEBUG)
dbg_hand.setFormatter(LOG_FMTR)

log = logging.getLogger(LOGGER_NAME)
log.setLevel(logging.INFO)
log.addHandler(dflt_hand)
if DEBUG:
    log.setLevel(logging.DEBUG)
    if DEBUG > 1:
        log.addHandler(dbg_hand)

##############
# Exceptions #
##############

class DataError(RuntimeError):
    """Thrown if there is a problem with any of the data at runtime, whether
    due to bad external data or errrant internal processing
    """
    pass

class OddsParseError(DataError):
    """Thrown if a spread or over/under string has no extractable line; callers
    grading picks are expected to contain this (pick is graded incorrect)
    """
    pass

class SubmissionError(DataError):
    """Thrown if a user's pick submission is rejected at entry time
    """
    pass

class FetchError(RuntimeError):
    """Thrown if game results cannot be retrieved from an external provider;
    must NOT be treated as "no points scored"
    """
    pass

class ConfigError(RuntimeError):
    """Thrown if there is a problem with a config file entry, or combination
    of entries
    """
    pass

class LogicError(RuntimeError):
    """Basically the same as an assert, but with a `raise` interface
    """
    pass
