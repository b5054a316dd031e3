"""Chunk manifest definitions shared by every map streaming host."""

from .chunk_manifest import (
    # Core types
    ChunkDescription,
    ChunkManifest,
    ViewRectangle,
    # Helpers
    parse_resource_location,
)

from .manifest_schema import (
    # Decoded record schemas
    ChunkDescriptionJSON,
    ChunkManifestJSON,
)

from .exceptions import (
    ChunkManifestError,
    InvalidDimensionError,
    MalformedKeyError,
    DecodeError,
)

from .constants import (
    # Chunk Streaming
    PRELOAD_MARGIN_CHUNKS,
    # Display
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
)

__version__ = "1.0.0"
