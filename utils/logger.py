"""Contains the name for the logger of polyransac modules.

``polyransac`` logs through the
`Logging <https://docs.python.org/3/library/logging.html>`__ standard library:

* ``DEBUG``: skipped degenerate samples and model updates inside the
    sample-consensus loop.
* ``INFO``: number of iterations used by a finished robust estimation.
* ``WARNING``: something unexpected happened that may require attention.

No handlers are installed by the library. Calling applications configure the
format and level of ``utils.logger.polyransac_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.INFO,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""
import logging

logger_name = "polyransac"
polyransac_logger = logging.getLogger(logger_name)
