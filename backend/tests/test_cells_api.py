"""Tests for the dashboard cell HTTP handlers."""

import pytest

from dashcells.api.deps import get_dashboards_store
from dashcells.exceptions.cell_error import (
    DashboardStoreError,
    IDGenerationError,
    InvalidColorError,
    InvalidLegendError,
)
from dashcells.services.dashboard_store import InMemoryDashboardsStore

BASE = "/chronograf/v1/dashboards"

NEW_CELL = {
    "x": 0,
    "y": 4,
    "w": 0,
    "h": 0,
    "name": "memory",
    "type": "line",
    "queries": [
        {
            "query": "SELECT mean(used_percent) FROM mem",
            "queryConfig": {
                "fields": [{"value": "used_percent", "type": "field"}],
                "shifts": [{"label": "1d", "unit": "d", "quantity": "1"}],
            },
        }
    ],
    "axes": {"y": {"bounds": ["0", "100"], "scale": "linear", "base": "10"}},
    "colors": [{"id": "base", "type": "text", "hex": "#00C9FF", "name": "laser", "value": "0"}],
    "legend": {"type": "static", "orientation": "bottom"},
    "note": "<em>memory</em> used",
}


class FailingIDGenerator:
    def generate(self):
        raise IDGenerationError("entropy exhausted")


class FailingUpdateStore(InMemoryDashboardsStore):
    def update(self, dashboard):
        raise DashboardStoreError("disk full")


def test_list_cells(client):
    resp = client.get(f"{BASE}/1/cells")

    assert resp.status_code == 200
    cells = resp.json()
    assert len(cells) == 1
    cell = cells[0]
    assert cell["i"] == "c1"
    assert set(cell["axes"]) == {"x", "y", "y2"}
    assert cell["axes"]["x"]["bounds"] == ["", ""]
    assert cell["axes"]["y"]["bounds"] == ["0", "100"]
    assert cell["colors"] == []
    assert cell["noteVisibility"] == "default"
    assert cell["links"]["self"] == f"{BASE}/1/cells/c1"


def test_list_cells_unknown_dashboard(client):
    resp = client.get(f"{BASE}/99/cells")

    assert resp.status_code == 404
    assert resp.json()["detail"] == "ID 99 not found"


def test_malformed_dashboard_id(client):
    resp = client.get(f"{BASE}/abc/cells")
    assert resp.status_code == 422


def test_create_cell(client):
    resp = client.post(f"{BASE}/1/cells", json=NEW_CELL)

    assert resp.status_code == 200
    cell = resp.json()
    assert cell["i"]
    assert (cell["w"], cell["h"]) == (4, 4)
    assert cell["queries"][0]["type"] == "influxql"
    assert cell["queries"][0]["shifts"] == [{"label": "1d", "unit": "d", "quantity": "1"}]
    assert cell["note"] == "<em>memory</em> used"
    assert cell["links"]["self"] == f"{BASE}/1/cells/{cell['i']}"


def test_create_then_get(client):
    created = client.post(f"{BASE}/1/cells", json=NEW_CELL).json()

    resp = client.get(f"{BASE}/1/cells/{created['i']}")

    assert resp.status_code == 200
    assert resp.json() == created


def test_create_appends_to_dashboard(client, store):
    created = client.post(f"{BASE}/1/cells", json=NEW_CELL).json()

    ids = [c.id for c in store.get(1).cells]
    assert ids == ["c1", created["i"]]


def test_create_ignores_client_supplied_id(client):
    body = dict(NEW_CELL, i="c1")

    created = client.post(f"{BASE}/1/cells", json=body).json()

    assert created["i"] != "c1"


def test_create_cell_unknown_dashboard(client):
    resp = client.post(f"{BASE}/99/cells", json=NEW_CELL)
    assert resp.status_code == 404


def test_create_cell_invalid_json(client):
    resp = client.post(
        f"{BASE}/1/cells",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Unparsable JSON"


def test_create_cell_wrong_field_type(client):
    resp = client.post(f"{BASE}/1/cells", json={"w": "wide"})
    assert resp.status_code == 400


def test_create_cell_invalid_data(client, store):
    body = dict(NEW_CELL, colors=[{"type": "max", "hex": "#FFF"}])

    resp = client.post(f"{BASE}/1/cells", json=body)

    assert resp.status_code == 422
    assert resp.json()["detail"] == InvalidColorError.message
    assert len(store.get(1).cells) == 1


@pytest.mark.parametrize("id_generator", [FailingIDGenerator()])
def test_create_cell_id_generation_failure(client):
    resp = client.post(f"{BASE}/1/cells", json=NEW_CELL)

    assert resp.status_code == 500
    assert resp.json()["detail"] == "Error creating cell ID of dashboard 1: entropy exhausted"


def test_create_cell_store_failure(client, store):
    failing = FailingUpdateStore()
    failing.add(store.get(1))
    client.app.dependency_overrides[get_dashboards_store] = lambda: failing

    resp = client.post(f"{BASE}/1/cells", json=NEW_CELL)

    assert resp.status_code == 500
    assert resp.json()["detail"].startswith("Error adding cell ")
    assert resp.json()["detail"].endswith("to dashboard 1: disk full")


def test_get_cell(client):
    resp = client.get(f"{BASE}/1/cells/c1")

    assert resp.status_code == 200
    assert resp.json()["name"] == "cpu usage"


def test_get_unknown_cell(client):
    resp = client.get(f"{BASE}/1/cells/nope")

    assert resp.status_code == 404
    assert resp.json()["detail"] == "ID 1 not found"


def test_delete_cell(client, store):
    resp = client.delete(f"{BASE}/1/cells/c1")

    assert resp.status_code == 204
    assert resp.content == b""
    assert store.get(1).cells == []


def test_delete_then_get(client):
    client.delete(f"{BASE}/1/cells/c1")

    resp = client.get(f"{BASE}/1/cells/c1")

    assert resp.status_code == 404


def test_delete_unknown_cell(client):
    resp = client.delete(f"{BASE}/1/cells/nope")
    assert resp.status_code == 404


def test_delete_unknown_dashboard(client):
    resp = client.delete(f"{BASE}/99/cells/c1")
    assert resp.status_code == 404


def test_replace_cell(client, store):
    body = {
        "i": "ignored",
        "w": 0,
        "h": 6,
        "name": "cpu system",
        "queries": [{"query": "SELECT mean(usage_system) FROM cpu", "type": "flux"}],
        "axes": {"y": {"bounds": [], "scale": "log"}},
    }

    resp = client.put(f"{BASE}/1/cells/c1", json=body)

    assert resp.status_code == 200
    cell = resp.json()
    assert cell["i"] == "c1"
    assert (cell["w"], cell["h"]) == (4, 6)
    assert cell["name"] == "cpu system"
    assert cell["queries"][0]["type"] == "flux"
    assert cell["axes"]["y"] == {
        "bounds": ["", ""],
        "label": "",
        "prefix": "",
        "suffix": "",
        "base": "",
        "scale": "log",
    }
    assert cell["links"]["self"] == f"{BASE}/1/cells/c1"

    stored = store.get(1).cells
    assert len(stored) == 1
    assert stored[0].name == "cpu system"
    assert stored[0].axes["y"].bounds == ["", ""]


def test_replace_unknown_cell(client):
    resp = client.put(f"{BASE}/1/cells/nope", json=NEW_CELL)

    assert resp.status_code == 404
    assert resp.json()["detail"] == "ID nope not found"


def test_replace_cell_invalid_data(client, store):
    body = dict(NEW_CELL, legend={"type": "static"})

    resp = client.put(f"{BASE}/1/cells/c1", json=body)

    assert resp.status_code == 422
    assert resp.json()["detail"] == InvalidLegendError.message
    assert store.get(1).cells[0].name == "cpu usage"


def test_replace_cell_invalid_json(client):
    resp = client.put(
        f"{BASE}/1/cells/c1",
        content="[",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400


NULL_FIELDS_CELL = {
    "i": None,
    "w": 2,
    "h": 2,
    "name": None,
    "queries": [
        {
            "query": "SELECT mean(usage_idle) FROM cpu",
            "label": None,
            "queryConfig": {
                "database": None,
                "measurement": "cpu",
                "fields": None,
                "tags": {"host": None},
                "groupBy": {"time": None, "tags": []},
                "areTagsAccepted": None,
                "fill": None,
                "rawText": None,
                "range": None,
                "shifts": None,
            },
            "source": None,
            "type": None,
        }
    ],
    "axes": {"y": {"bounds": None, "scale": "linear"}, "x": None},
    "colors": None,
    "legend": None,
    "tableOptions": None,
    "fieldOptions": None,
    "decimalPlaces": None,
    "note": None,
    "noteVisibility": None,
}


def test_create_cell_with_null_fields(client):
    resp = client.post(f"{BASE}/1/cells", json=NULL_FIELDS_CELL)

    assert resp.status_code == 200
    cell = resp.json()
    assert cell["i"]
    assert cell["name"] == ""
    query = cell["queries"][0]
    assert query["type"] == "influxql"
    assert query["label"] == ""
    assert query["queryConfig"]["groupBy"] == {"time": "", "tags": []}
    assert query["queryConfig"]["fill"] == ""
    assert query["queryConfig"]["fields"] == []
    assert query["queryConfig"]["tags"] == {"host": []}
    assert query["queryConfig"]["rawText"] is None
    assert cell["axes"]["y"]["bounds"] == ["", ""]
    assert cell["axes"]["y"]["scale"] == "linear"
    assert cell["axes"]["x"]["bounds"] == ["", ""]
    assert cell["colors"] == []
    assert cell["legend"] == {"type": "", "orientation": ""}
    assert cell["note"] == ""
    assert cell["noteVisibility"] == "default"


def test_replace_cell_with_null_legend_and_bounds(client, store):
    body = {
        "name": "cpu idle",
        "legend": None,
        "axes": {"y": {"bounds": None}, "y2": {"bounds": [None, "100"]}},
    }

    resp = client.put(f"{BASE}/1/cells/c1", json=body)

    assert resp.status_code == 200
    cell = resp.json()
    assert cell["legend"] == {"type": "", "orientation": ""}
    assert cell["axes"]["y"]["bounds"] == ["", ""]
    assert cell["axes"]["y2"]["bounds"] == ["", "100"]
    assert store.get(1).cells[0].name == "cpu idle"


def test_create_cell_with_empty_nested_objects(client):
    body = {
        "name": "empty parts",
        "queries": [{"query": "SELECT 1", "queryConfig": {}}],
        "axes": {"y": {}},
        "legend": {},
        "tableOptions": {},
        "decimalPlaces": {},
    }

    resp = client.post(f"{BASE}/1/cells", json=body)

    assert resp.status_code == 200
    cell = resp.json()
    assert cell["queries"][0]["queryConfig"]["groupBy"] == {"time": "", "tags": []}
    assert cell["axes"]["y"]["bounds"] == ["", ""]
    assert cell["tableOptions"]["sortBy"]["internalName"] == ""
    assert cell["decimalPlaces"] == {"isEnforced": False, "digits": 0}


def test_create_then_get_with_null_fields(client):
    created = client.post(f"{BASE}/1/cells", json=NULL_FIELDS_CELL).json()

    resp = client.get(f"{BASE}/1/cells/{created['i']}")

    assert resp.json() == created
