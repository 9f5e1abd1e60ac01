import datetime
import json
import logging.config
import os
from logging import addLevelName

# current time
from txchop.config import cfg
from txchop.my_logging.log_context import full_log_context

timestamp = '{:%Y-%m-%d_%H-%M-%S}'.format(datetime.datetime.now())


# shutdown current logger (useful for debugging, ...)
def shutdown(handler_list=None):
    if handler_list is None:
        handler_list = []
    logging.shutdown(handler_list)


##########################
# add log level for DATA #
##########################
# LOG LEVELS
# existing:
# CRITICAL = 50
# ERROR = 40
# WARNING = 30
# INFO = 20
# DEBUG = 10
DATA = 5
addLevelName(DATA, "DATA")


def data(key, value):
    """
    Log (key, value) to log-level DATA
    """
    d = {'key': key, 'value': value, 'context': list(full_log_context)}
    return logging.log(DATA, json.dumps(d))


def get_log_file(parent_dir=None, filename='log', include_timestamp=True):
    """Path prefix for the log files of one run, in cfg.log_dir unless parent_dir is given."""
    if parent_dir is None:
        parent_dir = os.path.realpath(cfg.log_dir)
    os.makedirs(parent_dir, exist_ok=True)

    if include_timestamp:
        filename += '_' + timestamp
    return os.path.join(parent_dir, filename)


def prepare_logger(log_file=None, silent=True):
    """
    (Re-)configure the root logger.

    Warnings always go to the console. If log_file is given, info, debug and data records
    are additionally written to <log_file>_info.log, <log_file>_debug.log and <log_file>_data.log.
    """
    # shutdown previous logger (if one was registered)
    shutdown()

    console_loglevel = 'WARNING'

    if log_file is not None and not silent:
        print(f"Saving logs to {log_file}*...")

    # set default logging settings
    default_logging = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s]: %(message)s',
                'datefmt': '%Y-%m-%d_%H-%M-%S'
            },
            'minimal': {
                'format': '%(message)s'
            },
        },
        'filters': {
            'onlydata': {
                '()': OnlyData
            }
        },
        'handlers': {
            'default': {
                'level': console_loglevel,
                'formatter': 'standard',
                'class': 'logging.StreamHandler',
            },
        },
        'loggers': {
            '': {
                'handlers': ['default'],
                'level': 0
            }
        }
    }

    if log_file is not None:
        default_logging['handlers'].update({
            'fileinfo': {
                'level': 'INFO',
                'formatter': 'standard',
                'filename': log_file + '_info.log',
                'mode': 'w',
                'class': 'logging.FileHandler',
            },
            'filedebug': {
                'level': 'DEBUG',
                'formatter': 'standard',
                'filename': log_file + '_debug.log',
                'mode': 'w',
                'class': 'logging.FileHandler',
            },
            'filedata': {
                'level': 'DATA',
                'formatter': 'minimal',
                'filename': log_file + '_data.log',
                'mode': 'w',
                'class': 'logging.FileHandler',
                'filters': ['onlydata']
            }
        })
        default_logging['loggers']['']['handlers'] += ['fileinfo', 'filedebug', 'filedata']

    logging.config.dictConfig(default_logging)


class OnlyData(logging.Filter):

    def filter(self, record):
        return record.levelno == DATA


# register a default logger (can be overwritten later)
prepare_logger()
