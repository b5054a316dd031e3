"""
Main entry point for the chunk streaming client.

Loads the configured manifest, centres a camera on the map and logs the
chunks the first frame needs.
"""

from pathlib import Path
from typing import Dict, Optional

from common.src.chunk_manifest import ChunkDescription

from .chunk_manager import ChunkManager
from .config import ClientConfig, get_config
from .logging_config import get_logger, setup_logging
from .rendering.camera import Camera

logger = get_logger(__name__)


def run(config: ClientConfig) -> Dict[int, ChunkDescription]:
    """
    Resolve the chunks visible from the centre of the configured map.

    Returns:
        Chunk id to description for every described chunk in view
    """
    setup_logging(log_level=config.debug.log_level)

    manager = ChunkManager.from_config(config)
    manifest = manager.manifest

    camera = Camera(
        config.display.width,
        config.display.height,
        follow_speed=config.camera.follow_speed,
    )
    camera.center_on(manifest.map_width / 2, manifest.map_height / 2)

    indices = manager.update(camera)
    wanted = manifest.describe(indices)
    logger.info(
        "Initial chunk set resolved",
        extra={
            "requested": len(indices),
            "described": len(wanted),
            "global_map": str(manifest.global_map_resource_location),
        },
    )
    return wanted


def main(config_path: Optional[Path] = None) -> int:
    config = ClientConfig.from_yaml(config_path) if config_path else get_config()
    run(config)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
