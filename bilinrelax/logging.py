# Copyright 2020 Francesco Ceccon
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""bilinrelax logging."""
"""bilinrelax logging."""

import logging

CRITICAL = logging.CRITICAL
ERROR = logging.ERROR
WARNING = logging.WARNING
INFO = logging.INFO
DEBUG = logging.DEBUG
NOTSET = logging.NOTSET


class LogManager(object):
    """LogManager class for named loggers.

    This object keeps references to the Python logger and its
    handlers, but does not provide any method to write to them.
    Instantiate a child logger for each builder instead.

    Each manager owns a private Python logger, so configuring one
    manager does not change the level or handlers of another.

    Parameters
    ----------
    config : dict-like
        logging configuration
    """
    def __init__(self, config=None):
        self.config = config
        self._loggers = {}
        self._handlers = []
        self._pylogger = logging.Logger(__name__)
        self.apply_config(config)

    def apply_config(self, config):
        """Apply config to logger."""
        if config is None:
            config = {}

        level_name = config.get('level', 'INFO')
        if isinstance(level_name, str):
            level_name = logging.getLevelName(level_name)
        self._update_log_level(level_name)

        # Avoid duplicate handlers when re-applying config
        for handler in self._handlers:
            self._pylogger.removeHandler(handler)
            handler.close()
        self._handlers = []

        self._pylogger.setLevel(self.level)
        if config.get('stdout', False):
            self._add_handler(logging.StreamHandler())

        if config.get('file') is not None:
            self._add_handler(logging.FileHandler(config['file']))

    def get_logger(self, name):
        if name in self._loggers:
            return self._loggers[name]
        else:
            logger = Logger(name, manager=self, level=self.level)
            self._loggers[name] = logger
            return logger

    def _add_handler(self, handler):
        self._pylogger.addHandler(handler)
        self._handlers.append(handler)

    def _update_log_level(self, level):
        self.level = level
        for logger in self._loggers.values():
            logger.level = level

    def _log(self, _logger_name, _lvl, _msg, *args, **kwargs):
        if _lvl < self.level:
            return
        fmt_msg = _msg.format(*args, **kwargs)
        # strip newline because it's added by pylogger
        if fmt_msg and fmt_msg[-1] == '\n':
            fmt_msg = fmt_msg[:-1]
        self._pylogger.log(
            _lvl,
            '[{}] {}'.format(_logger_name, fmt_msg),
        )


class Logger(object):
    def __init__(self, name, manager, level=None):
        self.name = name
        self.manager = manager
        if level is None:
            level = INFO
        self.level = level

    def is_debug(self):
        return self.level <= DEBUG

    def debug(self, _msg, *args, **kwargs):
        """Log msg with DEBUG level."""
        return self.log(DEBUG, _msg, *args, **kwargs)

    def info(self, _msg, *args, **kwargs):
        """Log msg with INFO level."""
        return self.log(INFO, _msg, *args, **kwargs)

    def log(self, _lvl, _msg, *args, **kwargs):
        """Log msg with lvl level.

        Arguments
        ---------
        _lvl: int
            logging level
        _msg: str
            format string
        args: Any
            arguments passed to msg.format
        kwargs: Any
            keyword arguments passed to msg.format
        """
        if _lvl >= self.level:
            self.manager._log(self.name, _lvl, _msg, *args, **kwargs)


_log_manager = LogManager()


def get_logger(name):
    """Return a logger attached to the module level log manager."""
    return _log_manager.get_logger(name)
