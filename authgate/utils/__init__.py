"""Utility functions for AuthGate.

Import convention: use module-level imports for clarity.

    from authgate.utils import isodatetime
    timestamp = isodatetime.now()
"""

from . import isodatetime

__all__ = ["isodatetime"]
