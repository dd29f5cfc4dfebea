import pytest

ATLANTA_WKT = "POLYGON((-84.4 33.7, -84.3 33.7, -84.3 33.8, -84.4 33.8, -84.4 33.7))"
ATLANTA_GEOJSON = (
    '{"type": "Polygon", "coordinates": '
    "[[[-84.4, 33.7], [-84.3, 33.7], [-84.3, 33.8], [-84.4, 33.8], [-84.4, 33.7]]]}"
)


@pytest.fixture
def atlanta_wkt() -> str:
    return ATLANTA_WKT


@pytest.fixture
def atlanta_geojson() -> str:
    return ATLANTA_GEOJSON
