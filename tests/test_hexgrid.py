import h3
import pytest
from shapely import wkt
from shapely.geometry import GeometryCollection, LineString, MultiPolygon, Point, box

from hexfill.core.errors import InvalidResolutionError, MalformedGeometryError, ResultTooLargeError
from hexfill.core.hexgrid import (
    Containment,
    GeometryKind,
    fill_polygon,
    geometry_kind,
    tile_geometry,
    validate_resolution,
)
from hexfill.core.limits import CellBudget

ATLANTA = box(-84.4, 33.7, -84.3, 33.8)
DECATUR = box(-84.3, 33.75, -84.25, 33.8)


def test_tile_polygon_returns_cells_at_resolution() -> None:
    cells = tile_geometry(ATLANTA, 7)
    assert cells
    assert all(h3.is_valid_cell(cell) for cell in cells)
    assert {h3.get_resolution(cell) for cell in cells} == {7}


def test_finer_resolution_never_yields_fewer_cells() -> None:
    counts = [len(tile_geometry(ATLANTA, res)) for res in range(6, 10)]
    assert counts == sorted(counts)
    assert counts[-1] > counts[0]


def test_multipolygon_is_union_of_members() -> None:
    far = box(-84.0, 34.0, -83.9, 34.1)
    combined = tile_geometry(MultiPolygon([ATLANTA, far]), 7)
    assert combined == tile_geometry(ATLANTA, 7) | tile_geometry(far, 7)


def test_touching_members_are_deduplicated() -> None:
    combined = tile_geometry(GeometryCollection([ATLANTA, DECATUR]), 7)
    separate = tile_geometry(ATLANTA, 7) | tile_geometry(DECATUR, 7)
    assert combined == separate
    assert len(combined) < len(tile_geometry(ATLANTA, 7)) + len(tile_geometry(DECATUR, 7))


def test_points_and_lines_are_ignored() -> None:
    mixed = GeometryCollection([Point(-84.35, 33.75), LineString([(-85, 33), (-84, 34)]), ATLANTA])
    assert tile_geometry(mixed, 7) == tile_geometry(ATLANTA, 7)
    assert tile_geometry(Point(-84.35, 33.75), 7) == set()


def test_nested_collections_are_walked() -> None:
    nested = GeometryCollection([GeometryCollection([MultiPolygon([ATLANTA])])])
    assert tile_geometry(nested, 7) == tile_geometry(ATLANTA, 7)


def test_empty_top_level_geometry_has_no_cells() -> None:
    assert tile_geometry(GeometryCollection(), 7) == set()
    assert tile_geometry(wkt.loads("POLYGON EMPTY"), 7) == set()


def test_empty_member_inside_collection_is_malformed() -> None:
    geom = wkt.loads(
        "GEOMETRYCOLLECTION (POLYGON EMPTY, POLYGON ((-84.4 33.7, -84.3 33.7, -84.3 33.8, -84.4 33.7)))"
    )
    with pytest.raises(MalformedGeometryError, match="null geometry"):
        tile_geometry(geom, 7)


def test_null_geometry_is_malformed() -> None:
    with pytest.raises(MalformedGeometryError):
        tile_geometry(None, 7)


@pytest.mark.parametrize("resolution", [-1, 16, 100, True, 7.0, "7", None])
def test_invalid_resolution(resolution) -> None:
    with pytest.raises(InvalidResolutionError):
        validate_resolution(resolution)
    with pytest.raises(InvalidResolutionError):
        tile_geometry(ATLANTA, resolution)


@pytest.mark.parametrize("resolution", [0, 15])
def test_resolution_range_is_inclusive(resolution) -> None:
    assert validate_resolution(resolution) == resolution


def test_containment_modes_nest() -> None:
    overlap = fill_polygon(ATLANTA, 8, Containment.OVERLAP)
    center = fill_polygon(ATLANTA, 8, Containment.CENTER)
    full = fill_polygon(ATLANTA, 8, Containment.FULL)
    assert full <= center <= overlap
    assert len(full) < len(overlap)


def test_center_containment_matches_polyfill() -> None:
    assert fill_polygon(ATLANTA, 7, Containment.CENTER) == set(h3.geo_to_cells(ATLANTA, 7))


def test_polygon_holes_are_respected() -> None:
    donut = ATLANTA.difference(box(-84.38, 33.72, -84.32, 33.78))
    full_cells = tile_geometry(ATLANTA, 8, Containment.CENTER)
    donut_cells = tile_geometry(donut, 8, Containment.CENTER)
    assert donut_cells < full_cells


def test_budget_aborts_during_walk() -> None:
    budget = CellBudget(max_count=5, name="atlanta", resolution=8)
    with pytest.raises(ResultTooLargeError) as excinfo:
        tile_geometry(MultiPolygon([ATLANTA, box(-84.0, 34.0, -83.9, 34.1)]), 8, budget=budget)
    assert excinfo.value.name == "atlanta"
    assert excinfo.value.limit == 5


def test_geometry_kind_covers_shapely_types() -> None:
    assert geometry_kind(ATLANTA) is GeometryKind.POLYGON
    assert geometry_kind(MultiPolygon([ATLANTA])) is GeometryKind.MULTI_POLYGON
    assert geometry_kind(GeometryCollection()) is GeometryKind.GEOMETRY_COLLECTION
    assert geometry_kind(Point(0, 0)) is GeometryKind.POINT


def test_overlap_containment_is_available() -> None:
    assert hasattr(h3, "h3shape_to_cells_experimental")
    cells = fill_polygon(ATLANTA, 7, Containment.OVERLAP)
    assert cells
    assert cells >= fill_polygon(ATLANTA, 7, Containment.CENTER)
