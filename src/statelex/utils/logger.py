"""Logging for statelex.

Everything is logged at DEBUG under the ``statelex.`` namespace. The
library never installs handlers; configure logging in your application.

Records emitted:
- ``statelex.lexer.core``: scan start (input length) and finish
  (transition and item counts), one line per error item with its
  ``file:line:col`` location, and one line per transition naming the
  state function when ``ScanConfig.trace`` is set.
- ``statelex.threaded``: a worker exiting because the consumer cancelled,
  or forwarding a state function's exception to the consumer.

Example:
    >>> import logging
    >>> logging.getLogger("statelex").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "statelex." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'statelex.mymodule'
    """
    if not (name == "statelex" or name.startswith("statelex.")):
        name = f"statelex.{name}"
    return logging.getLogger(name)
