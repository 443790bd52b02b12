"""Utility functions for typedwire.

``copying`` and ``files`` build on the codec and are imported from their
submodules; this package namespace only carries the registry lock so that the
registry can import it without pulling in the codec.
"""

from __future__ import annotations

from .lock import RWLock

__all__ = [
    "RWLock",
]
