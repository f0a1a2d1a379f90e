"""Utility mixin classes"""

__all__ = ['LoggingMixin']

import logging


class LoggingMixin:  # pylint: disable=too-few-public-methods
    """
    Mixin class for logging.

    Loggers are named after the defining module and class (e.g.
    'geodraw.projection.WebMercatorProjector'), so records propagate to the
    package logger and share its handler. Subclasses do not need to call
    an __init__ for the logger to be available.
    """

    WARNED_ONCE: set = set()

    @property
    def logger(self) -> logging.Logger:
        _class = self.__class__
        module_name = _class.__module__
        if module_name == 'builtins':
            return logging.getLogger(_class.__qualname__)

        return logging.getLogger(f'{module_name}.{_class.__qualname__}')

    @classmethod
    def _set_warned_once(cls, msg):
        """Appends message to classvar"""
        cls.WARNED_ONCE.add(msg)

    def warn_once(self, msg, *args, **kwargs):
        """Logs a warning only once per message"""
        if msg in self.WARNED_ONCE:
            return

        self.logger.warning(msg, *args, **kwargs)
        self._set_warned_once(msg)
