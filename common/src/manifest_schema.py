"""
Manifest file schema.
Using Pydantic models for structure and validation of decoded manifest records.

Both models are strict: integers must arrive as integers, not as booleans,
floats or numeric strings.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ChunkDescriptionJSON(BaseModel):
    """One entry of the manifest's chunk table."""
    model_config = ConfigDict(populate_by_name=True, strict=True)

    relative_url: str = Field(..., alias="relativeURL", description="Chunk asset location")
    x: int  # Top-left x in world units
    y: int  # Top-left y in world units
    width: int
    height: int


class ChunkManifestJSON(BaseModel):
    """Top-level manifest document."""
    model_config = ConfigDict(populate_by_name=True, strict=True)

    map_width: int = Field(..., alias="mapWidth")
    map_height: int = Field(..., alias="mapHeight")
    base_chunk_width: int = Field(..., alias="baseChunkWidth")
    base_chunk_height: int = Field(..., alias="baseChunkHeight")
    chunk_count: Optional[int] = Field(
        default=None, alias="chunkCount", description="Informational only, never checked"
    )
    global_map_url: str = Field(..., alias="globalMapURL", description="Overview map asset location")
    # Keys are chunk ids; JSON object keys arrive as strings. Entries are
    # validated one by one, after their key, by ChunkDescription.from_decoded
    chunks: Dict[Union[int, str], Any] = Field(default_factory=dict)
