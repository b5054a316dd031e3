"""
Shared test fixtures.

Fast fixtures with no file or network access.
"""

import pytest

from common.src.chunk_manifest import ChunkDescription, ChunkManifest


@pytest.fixture
def sample_manifest_record():
    """A decoded 100x100 manifest of 10x10 chunks with two chunk entries."""
    return {
        "mapWidth": 100,
        "mapHeight": 100,
        "baseChunkWidth": 10,
        "baseChunkHeight": 10,
        "chunkCount": 100,
        "globalMapURL": "https://maps.example.org/world/overview.png",
        "chunks": {
            "0": {
                "relativeURL": "https://maps.example.org/world/chunk_0.png",
                "x": 0,
                "y": 0,
                "width": 10,
                "height": 10,
            },
            "11": {
                "relativeURL": "https://maps.example.org/world/chunk_11.png",
                "x": 10,
                "y": 10,
                "width": 10,
                "height": 10,
            },
        },
    }


@pytest.fixture
def square_manifest():
    """100x100 map of 10x10 chunks, chunks 0, 1 and 10 described."""
    chunks = {
        index: ChunkDescription(f"https://maps.example.org/chunk_{index}.png", x, y, 10, 10)
        for index, x, y in [(0, 0, 0), (1, 10, 0), (10, 0, 10)]
    }
    return ChunkManifest(100, 100, 10, 10, "https://maps.example.org/overview.png", chunks)
