"""
errors.py — Error Taxonomy
===========================
Two caller-facing errors, both raised *before* a single Step is produced:

    • InvalidInput      – a value is non-finite (NaN / ±inf) or not a number
    • UnknownAlgorithm  – the requested algorithm key is not registered

Out-of-range indices surface as the builtin IndexError.  That one is a
programming error: a correct algorithm never triggers it.
"""

from typing import Iterable


class InvalidInput(ValueError):
    """Input rejected before the run started.  No steps were emitted."""


class UnknownAlgorithm(InvalidInput):
    def __init__(self, key: str, known: Iterable[str] = ()):
        self.key   = key
        self.known = list(known)
        msg = f"Unknown algorithm: {key!r}"
        if self.known:
            msg += f" (expected one of: {', '.join(self.known)})"
        super().__init__(msg)
