"""
Chunk management for streamed maps.

Polls the camera once per frame and works out which manifest chunks the
current world view needs. Loading and unloading the chunk assets is left to
the caller.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Set, Union

from common.src.chunk_manifest import ChunkDescription, ChunkManifest, ViewRectangle

from .config import ClientConfig, get_config
from .logging_config import get_logger

logger = get_logger(__name__)


def load_manifest(path: Union[str, Path]) -> ChunkManifest:
    """
    Load a chunk manifest from a local JSON file.

    Raises:
        OSError: If the file cannot be read
        DecodeError, MalformedKeyError, InvalidDimensionError: If the
            manifest is invalid
    """
    manifest = ChunkManifest.from_file(path)
    logger.info(
        "Chunk manifest loaded",
        extra={
            "manifest_path": str(path),
            "map_size": f"{manifest.map_width}x{manifest.map_height}",
            "base_chunk_size": f"{manifest.base_chunk_width}x{manifest.base_chunk_height}",
            "chunks": len(manifest.chunks),
        },
    )
    return manifest


class ChunkManager:
    """Tracks the camera's world view and the chunk ids it needs."""

    def __init__(self, manifest: ChunkManifest, log_updates: bool = False):
        self.manifest = manifest
        self.log_updates = log_updates
        self._last_world_view: Optional[ViewRectangle] = None

    @classmethod
    def from_config(cls, config: Optional[ClientConfig] = None) -> "ChunkManager":
        """Create a manager for the manifest named in the client configuration."""
        config = config or get_config()
        manifest_path = config.streaming.manifest_path
        if not manifest_path:
            raise ValueError("streaming.manifest_path is not configured")
        return cls(load_manifest(manifest_path), log_updates=config.debug.log_chunk_updates)

    @property
    def last_world_view(self) -> Optional[ViewRectangle]:
        """The world view seen by the most recent update."""
        return self._last_world_view

    def update(self, camera: Any) -> Optional[Set[int]]:
        """
        Recompute wanted chunk ids if the camera's world view changed.

        Args:
            camera: Object exposing a ``world_view`` rectangle

        Returns:
            The chunk ids for the new view, or None if the view is unchanged
        """
        world_view = camera.world_view
        # Only update chunks if world view changed
        if world_view == self._last_world_view:
            return None

        self._last_world_view = world_view
        indices = self.manifest.chunk_indices_from_camera(world_view)

        if self.log_updates:
            logger.debug(
                "Chunk set recomputed",
                extra={"world_view": world_view, "chunk_count": len(indices)},
            )

        return indices

    def wanted_chunks(self, camera: Any) -> Dict[int, ChunkDescription]:
        """Descriptions of the chunks needed for the camera's current view."""
        indices = self.manifest.chunk_indices_from_camera(camera)
        return self.manifest.describe(indices)
