"""
Vpretty exceptions.
"""


class PrettyWriteError(OSError):
    """
    The output sink rejected a write during rendering.

    Raised by every render entry point when the sink's write() fails with OSError or
    ValueError (e.g. writing to a closed stream). The original exception is chained
    as __cause__. The sink is left holding whatever was written before the failure.
    """
