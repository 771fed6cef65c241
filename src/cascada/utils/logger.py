"""Namespaced loggers for the cascada modules.

Cascada logs only at DEBUG: the compiler reports which renderer it picked and
the memo cache counters after each call, and the source map modules report
input maps they load and apply. The library attaches no handlers and never
sets a level, so nothing is printed unless the application configures the
``cascada`` logger (or the root logger) itself.

Example:
    >>> logger = get_logger(__name__)
    >>> logger.debug("Compiling %s", "Stylesheet")
    >>> get_logger("cascada.compiler").name
    'cascada.compiler'
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return the stdlib logger for ``name`` under the ``cascada`` hierarchy.

    Module names already inside the package are used as is; anything else
    gets the ``cascada.`` prefix so it inherits the package logger's settings.

    Example:
        >>> get_logger("mymodule").name
        'cascada.mymodule'
    """
    if not (name == "cascada" or name.startswith("cascada.")):
        name = f"cascada.{name}"
    return logging.getLogger(name)
