"""
Errors raised while building or decoding a chunk manifest.

Queries against a constructed manifest never raise; these are only
produced by construction and decoding.
"""


class ChunkManifestError(Exception):
    """Base exception for chunk manifest errors."""
    pass


class InvalidDimensionError(ChunkManifestError):
    """Map or base chunk dimensions are not strictly positive."""
    pass


class MalformedKeyError(ChunkManifestError):
    """A chunk table key could not be parsed as an integer chunk id."""
    pass


class DecodeError(ChunkManifestError):
    """A manifest record or one of its resource locations could not be decoded."""
    pass
