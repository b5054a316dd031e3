"""
Unit tests for the viewport to chunk id query.

Tests the pre-load margin, negative id filtering, the row scan and the
camera pass-through of ChunkManifest.chunk_indices_from_bounds.
"""

import math
from unittest.mock import Mock

import pytest

from common.src.chunk_manifest import ChunkManifest, ViewRectangle

FOO_URL = "http://www.example.org/"

# Expected ids for (top=0, left=0, right=20, bottom=20) on a 100x100 map of 10x10 chunks
TWO_CHUNK_VIEW_IDS = (
    set(range(0, 4)) | set(range(9, 14)) | set(range(19, 24)) | set(range(29, 34))
)


@pytest.fixture
def manifest():
    return ChunkManifest(100, 100, 10, 10, FOO_URL, {})


class TestChunkIndicesFromBounds:
    """Tests for ChunkManifest.chunk_indices_from_bounds()"""

    def test_degenerate_rectangle_includes_chunk_zero(self, manifest):
        """Test that the margin turns a zero-sized view into a non-empty set."""
        result = manifest.chunk_indices_from_bounds(0, 0, 0, 0)

        assert 0 in result
        assert result == {0, 1, 9, 10, 11}

    def test_fractional_edges_are_floored(self, manifest):
        """Test that fractional edges land in the same chunks as their floor."""
        assert manifest.chunk_indices_from_bounds(0.5, 0.5, 0.5, 0.5) == {0, 1, 9, 10, 11}

    def test_rows_are_scanned_by_row_stride(self, manifest):
        """Test that each row emits a contiguous run, one row stride apart."""
        result = manifest.chunk_indices_from_bounds(0, 0, 20, 20)

        assert result == TWO_CHUNK_VIEW_IDS

    def test_all_negative_rectangle_is_empty(self, manifest):
        """Test that a view far above and left of the map yields nothing."""
        assert manifest.chunk_indices_from_bounds(-1000, -1000, -900, -900) == set()

    def test_inverted_rectangle_does_not_raise(self, manifest):
        """Test that right < left and bottom < top return a set instead of failing."""
        result = manifest.chunk_indices_from_bounds(50, 50, 0, 0)

        assert isinstance(result, set)
        assert all(index >= 0 for index in result)

    def test_ids_past_map_edge_are_kept(self, manifest):
        """Test that there is no upper clamp on emitted ids."""
        result = manifest.chunk_indices_from_bounds(90, 90, 100, 100)

        assert result == (
            set(range(88, 92)) | set(range(98, 102)) | set(range(108, 112)) | set(range(118, 122))
        )
        assert max(result) > 99

    def test_partial_last_column_uses_floor_row_stride(self):
        """Test that indexing counts the partial column but the row scan does not."""
        manifest = ChunkManifest(105, 100, 10, 10, FOO_URL, {})

        assert manifest.chunk_indices_from_bounds(0, 0, 0, 0) == {8, 9}

    def test_map_narrower_than_a_chunk_terminates(self):
        """Test that a zero row stride still advances through the rows."""
        manifest = ChunkManifest(5, 5, 10, 10, FOO_URL, {})

        assert manifest.row_stride == 0
        assert manifest.chunk_indices_from_bounds(0, 0, 0, 0) == set(range(0, 41))

    @pytest.mark.parametrize(
        "top,left,right,bottom",
        [
            (0, 0, math.inf, 0),
            (-math.inf, 0, 10, 10),
            (0, math.nan, 10, 10),
        ],
    )
    def test_non_finite_edges_yield_empty_set(self, manifest, top, left, right, bottom):
        """Test that infinite or NaN edges return an empty set instead of raising."""
        assert manifest.chunk_indices_from_bounds(top, left, right, bottom) == set()

    @pytest.mark.parametrize(
        "top,left,right,bottom",
        [
            (0, 0, 0, 0),
            (-1, -1, -1, -1),
            (-500, -500, 5, 5),
            (-20, 40, 80, -5),
            (-0.5, -99.9, 3.2, 7.7),
            (250, 250, 400, 400),
        ],
    )
    def test_never_returns_negative_ids(self, manifest, top, left, right, bottom):
        """Test that negative ids are always filtered out."""
        result = manifest.chunk_indices_from_bounds(top, left, right, bottom)

        assert all(index >= 0 for index in result)

    def test_query_is_idempotent(self, manifest):
        """Test that repeated queries return equal sets."""
        first = manifest.chunk_indices_from_bounds(13, 27, 61, 48)
        second = manifest.chunk_indices_from_bounds(13, 27, 61, 48)

        assert first == second

    @pytest.mark.parametrize(
        "smaller,larger",
        [
            ((0, 0, 0, 0), (0, 0, 20, 20)),
            ((0, 0, 0, 0), (-10, -10, 10, 10)),
            ((0, 0, 20, 20), (0, 0, 40, 40)),
        ],
    )
    def test_widening_never_drops_ids(self, manifest, smaller, larger):
        """Test that a larger view keeps every id of a smaller one."""
        assert manifest.chunk_indices_from_bounds(*smaller) <= manifest.chunk_indices_from_bounds(*larger)


class TestChunkIndicesFromCamera:
    """Tests for ChunkManifest.chunk_indices_from_camera()"""

    @pytest.mark.parametrize(
        "view",
        [
            ViewRectangle(top=0, left=0, right=0, bottom=0),
            ViewRectangle(top=0, left=0, right=20, bottom=20),
            ViewRectangle(top=-35.5, left=12.25, right=70, bottom=44),
        ],
    )
    def test_rectangle_is_passed_through(self, manifest, view):
        """Test that the camera query equals the bounds query for the same edges."""
        expected = manifest.chunk_indices_from_bounds(view.top, view.left, view.right, view.bottom)

        assert manifest.chunk_indices_from_camera(view) == expected

    def test_camera_world_view_is_used(self, manifest):
        """Test that an object exposing world_view is queried through it."""
        camera = Mock()
        camera.world_view = ViewRectangle(top=0, left=0, right=20, bottom=20)

        assert manifest.chunk_indices_from_camera(camera) == TWO_CHUNK_VIEW_IDS


class TestDescribe:
    """Tests for ChunkManifest.describe()"""

    def test_missing_ids_are_skipped(self, square_manifest):
        """Test that ids without an entry are treated as having no asset."""
        result = square_manifest.describe({0, 1, 2, 10, 500})

        assert set(result) == {0, 1, 10}
        assert result[10].y == 10

    def test_describe_query_result(self, square_manifest):
        """Test resolving a viewport query against the chunk table."""
        indices = square_manifest.chunk_indices_from_bounds(0, 0, 20, 20)

        assert set(square_manifest.describe(indices)) == {0, 1, 10}
