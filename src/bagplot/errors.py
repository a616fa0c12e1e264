"""
Error types raised by the bagplot pipeline.

Pure pipeline functions raise these; the BagPlot item catches them at the
cache boundary and reports failure as a boolean.
"""


class BagplotError(Exception):
    """Base class for bagplot input errors."""


class MissingInputError(BagplotError):
    """No table is bound, or a required column (e.g. density) is absent."""


class MalformedInputError(BagplotError, ValueError):
    """Input data has the wrong shape, mismatched lengths or invalid values."""
