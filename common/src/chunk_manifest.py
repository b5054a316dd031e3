"""
Chunk manifest and viewport chunk indexing.

A manifest describes a map split into a grid of base-sized chunks and where
each chunk's asset lives. Given the rectangle a camera currently sees, the
manifest works out which chunk ids should be loaded, including a one chunk
margin around the view so neighbours are ready before they scroll in.

Everything here is immutable and side-effect free; a single manifest can be
queried from any number of callers.
"""

import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Set, Union

from pydantic import AnyUrl, TypeAdapter, ValidationError

from .constants import PRELOAD_MARGIN_CHUNKS
from .exceptions import DecodeError, InvalidDimensionError, MalformedKeyError
from .manifest_schema import ChunkDescriptionJSON, ChunkManifestJSON

_URL_ADAPTER = TypeAdapter(AnyUrl)
_CHUNK_ID_PATTERN = re.compile(r"-?[0-9]+")


def parse_resource_location(value: str) -> AnyUrl:
    """
    Resolve a manifest location string into a URL.

    Raises:
        DecodeError: If the string is not a valid absolute URL
    """
    try:
        return _URL_ADAPTER.validate_python(value)
    except ValidationError as e:
        raise DecodeError(f"Invalid resource location: {value!r}") from e


@dataclass(frozen=True)
class ViewRectangle:
    """Axis-aligned world-space rectangle, e.g. a camera's world view."""
    top: float
    left: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True)
class ChunkDescription:
    """Where a chunk's asset lives and the rectangle it covers on the map."""
    resource_location: Any
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_decoded(
        cls, record: Union[ChunkDescriptionJSON, Mapping[str, Any]]
    ) -> "ChunkDescription":
        """
        Build a description from a decoded chunk table entry.

        Raises:
            DecodeError: If the record is malformed or its location is not a URL
        """
        if not isinstance(record, ChunkDescriptionJSON):
            try:
                record = ChunkDescriptionJSON.model_validate(record)
            except ValidationError as e:
                raise DecodeError(f"Invalid chunk description: {e}") from e

        return cls(
            resource_location=parse_resource_location(record.relative_url),
            x=record.x,
            y=record.y,
            width=record.width,
            height=record.height,
        )


@dataclass(frozen=True)
class ChunkManifest:
    """
    Map geometry plus the chunk id to ChunkDescription table.

    Chunk ids are laid out row by row over a grid of base-sized chunks. Grid
    arithmetic always uses the base chunk size, even for edge chunks whose
    stored size is smaller.

    Raises:
        InvalidDimensionError: If any map or base chunk dimension is <= 0
    """
    map_width: int
    map_height: int
    base_chunk_width: int
    base_chunk_height: int
    global_map_resource_location: Any
    chunks: Mapping[int, ChunkDescription] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if (
            self.map_width <= 0
            or self.map_height <= 0
            or self.base_chunk_width <= 0
            or self.base_chunk_height <= 0
        ):
            raise InvalidDimensionError(
                "Invalid map dimension: "
                f"map={self.map_width}x{self.map_height}, "
                f"base_chunk={self.base_chunk_width}x{self.base_chunk_height}"
            )

        # Private read-only copy, callers keep no handle on it
        object.__setattr__(self, "chunks", MappingProxyType(dict(self.chunks)))

    # --- Decoding ---

    @classmethod
    def from_decoded(
        cls, record: Union[ChunkManifestJSON, Mapping[str, Any]]
    ) -> "ChunkManifest":
        """
        Build a manifest from a decoded manifest document.

        Args:
            record: Either a validated ChunkManifestJSON or the raw mapping
                (camelCase keys, as found in the manifest file)

        Raises:
            DecodeError: If the record or any location in it is malformed
            MalformedKeyError: If a chunk table key is not an integer
            InvalidDimensionError: If the decoded geometry is invalid
        """
        if not isinstance(record, ChunkManifestJSON):
            try:
                record = ChunkManifestJSON.model_validate(record)
            except ValidationError as e:
                raise DecodeError(f"Invalid chunk manifest: {e}") from e

        global_map_location = parse_resource_location(record.global_map_url)

        chunks: Dict[int, ChunkDescription] = {}
        for key, chunk_record in record.chunks.items():
            chunks[_parse_chunk_id(key)] = ChunkDescription.from_decoded(chunk_record)

        return cls(
            map_width=record.map_width,
            map_height=record.map_height,
            base_chunk_width=record.base_chunk_width,
            base_chunk_height=record.base_chunk_height,
            global_map_resource_location=global_map_location,
            chunks=chunks,
        )

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "ChunkManifest":
        """Decode a manifest from a JSON document."""
        try:
            record = ChunkManifestJSON.model_validate_json(text)
        except ValidationError as e:
            raise DecodeError(f"Invalid chunk manifest: {e}") from e
        return cls.from_decoded(record)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ChunkManifest":
        """Decode a manifest from a local JSON file."""
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    # --- Grid geometry ---

    @property
    def horizontal_chunk_count(self) -> int:
        """Number of grid columns, counting a partial last column."""
        return math.ceil(self.map_width / self.base_chunk_width)

    @property
    def vertical_chunk_count(self) -> int:
        """Number of grid rows, counting a partial last row."""
        return math.ceil(self.map_height / self.base_chunk_height)

    @property
    def row_stride(self) -> int:
        """Id distance between consecutive rows in a bounds scan (full columns only)."""
        return self.map_width // self.base_chunk_width

    def chunk_index_at(self, x: int, y: int) -> int:
        """
        Chunk id for a world point.

        Row and column are taken by dividing by the chunk counts, not the
        chunk sizes. Both agree only when count == size (e.g. a 100x100 map
        of 10x10 chunks).
        """
        h_count = self.horizontal_chunk_count
        v_count = self.vertical_chunk_count
        x_index = x // h_count
        y_index = y // v_count
        return y_index * h_count + x_index

    # --- Queries ---

    def chunk_indices_from_camera(self, view: Any) -> Set[int]:
        """
        Chunk ids for a camera or view rectangle.

        Accepts anything with top/left/right/bottom, or an object exposing
        such a rectangle as ``world_view``.
        """
        world_view = getattr(view, "world_view", view)
        return self.chunk_indices_from_bounds(
            world_view.top, world_view.left, world_view.right, world_view.bottom
        )

    def chunk_indices_from_bounds(
        self, top: float, left: float, right: float, bottom: float
    ) -> Set[int]:
        """
        Chunk ids to load for a world-space rectangle.

        The rectangle is grown by one base chunk on every side, then scanned
        one grid row at a time from the top-left chunk. Each row emits the
        same number of consecutive ids, and rows are ``row_stride`` ids
        apart. Negative ids are dropped; ids past the end of the map are not,
        so callers must tolerate ids missing from ``chunks``.

        Args:
            top: Top edge in world units
            left: Left edge in world units
            right: Right edge in world units
            bottom: Bottom edge in world units

        Returns:
            Set of non-negative chunk ids (possibly empty). A view with an
            infinite or NaN edge covers no grid rows and yields an empty set.
        """
        if not all(math.isfinite(edge) for edge in (top, left, right, bottom)):
            return set()

        # Margin so chunks just off screen are loaded ahead of time
        margin_y = self.base_chunk_height * PRELOAD_MARGIN_CHUNKS
        margin_x = self.base_chunk_width * PRELOAD_MARGIN_CHUNKS
        top -= margin_y
        bottom += margin_y
        left -= margin_x
        right += margin_x

        top_left_index = self.chunk_index_at(math.floor(left), math.floor(top))
        top_right_index = self.chunk_index_at(math.floor(right), math.floor(top))
        # Built from the right edge on purpose, it only bounds the row scan
        bottom_left_index = self.chunk_index_at(math.floor(right), math.floor(bottom))

        # Ids per row, minus one
        h_diff = top_right_index - top_left_index
        # A map narrower than one base chunk still advances a row per step
        row_stride = max(self.row_stride, 1)

        indices: Set[int] = set()
        current = top_left_index
        while current <= bottom_left_index:
            indices.update(range(max(current, 0), current + h_diff + 1))
            current += row_stride

        return indices

    def describe(self, indices: Iterable[int]) -> Dict[int, ChunkDescription]:
        """Look up descriptions for chunk ids, skipping ids with no entry."""
        return {
            index: self.chunks[index] for index in indices if index in self.chunks
        }


def _parse_chunk_id(key: Union[int, str]) -> int:
    if isinstance(key, int):
        return key
    # Plain ASCII digits only, as written in a JSON object key
    if not _CHUNK_ID_PATTERN.fullmatch(key):
        raise MalformedKeyError(f"Chunk id is not an integer: {key!r}")
    return int(key)
