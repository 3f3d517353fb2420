"""Utility functions for Inkwell.

Import convention: use module-level imports for clarity.

    from inkwell.utils import isodatetime
    timestamp = isodatetime.now()
    exp = isodatetime.now_unix() + 3600
"""

from . import isodatetime

__all__ = ["isodatetime"]
