import pytest


@pytest.fixture
def two_markers():
    return [
        {"id": "1", "latitude": 40.0, "longitude": -74.0, "name": "A"},
        {"id": "2", "latitude": 41.0, "longitude": -73.0, "name": "B"},
    ]


@pytest.fixture
def rich_markers():
    """Markers carrying icons and extra properties."""
    return [
        {
            "id": "m-1",
            "latitude": 51.5074,
            "longitude": -0.1278,
            "name": 'The "Big" Smoke',
            "icon": "star",
            "category": "city",
            "visits": 3,
        },
        {
            "id": "m-2",
            "latitude": 48.8566,
            "longitude": 2.3522,
            "name": "Paris",
            "icon": "circle",
            "category": "city",
            "visits": None,
        },
        {
            "id": "m-3",
            "latitude": -33.8688,
            "longitude": 151.2093,
            "category": "harbour",
            "visits": 1,
        },
    ]


@pytest.fixture
def nan_markers():
    return [
        {"id": "1", "latitude": 40.0, "longitude": -74.0, "name": "A"},
        {"id": "2", "latitude": float("nan"), "longitude": -73.0, "name": "B"},
    ]
