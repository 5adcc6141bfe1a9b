"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from dashcells.api.deps import get_dashboards_store, get_id_generator
from dashcells.main import app
from dashcells.models.dashboard import Axis, Dashboard, DashboardCell, DashboardQuery
from dashcells.services.dashboard_store import InMemoryDashboardsStore
from dashcells.services.id_generator import UUIDGenerator


def make_cell(**overrides) -> DashboardCell:
    fields = dict(
        id="c1",
        w=4,
        h=4,
        name="cpu usage",
        queries=[DashboardQuery(command="SELECT mean(usage_user) FROM cpu", type="influxql")],
        axes={"y": Axis(bounds=["0", "100"], scale="linear", base="10")},
    )
    fields.update(overrides)
    return DashboardCell(**fields)


@pytest.fixture
def store():
    """In-memory store seeded with dashboard 1 holding a single cell."""
    store = InMemoryDashboardsStore()
    store.add(Dashboard(id=1, name="hosts", cells=[make_cell()]))
    return store


@pytest.fixture
def id_generator():
    return UUIDGenerator()


@pytest.fixture
def client(store, id_generator):
    app.dependency_overrides[get_dashboards_store] = lambda: store
    app.dependency_overrides[get_id_generator] = lambda: id_generator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
