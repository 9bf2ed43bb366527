"""Logger lookup for mathspan modules.

Everything logs under the ``mathspan`` namespace, so one line silences or
surfaces the whole package::

    logging.getLogger("mathspan").setLevel(logging.WARNING)

Typesetter failures are the main thing logged: DEBUG by default, WARNING
with a traceback when ``throw_on_error`` is set. No handlers are installed
here.
"""

from __future__ import annotations

import logging

_NAMESPACE = "mathspan"


def get_logger(name: str) -> logging.Logger:
    """Logger for name, moved under the mathspan namespace if needed.

    >>> get_logger("renderers").name
    'mathspan.renderers'
    >>> get_logger("mathspan.plugin").name
    'mathspan.plugin'
    """
    if name != _NAMESPACE and not name.startswith(f"{_NAMESPACE}."):
        name = f"{_NAMESPACE}.{name}"
    return logging.getLogger(name)
