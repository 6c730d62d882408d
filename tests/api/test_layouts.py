# tests/api/test_layouts.py
import pytest
from fastapi.testclient import TestClient

from api.main import app

client = TestClient(app)

# Test API key
TEST_API_KEY = "dev_key"


@pytest.fixture
def api_headers():
    """Fixture for API headers with authentication."""
    return {"X-API-Key": TEST_API_KEY}


@pytest.fixture
def layout(api_headers):
    """A freshly created 144 x 108 layout."""
    response = client.post("/layouts", json={}, headers=api_headers)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def empty_layout(api_headers, layout):
    """A 144 x 108 layout with no panels."""
    state = {
        "wallWidth": 144.0,
        "wallHeight": 108.0,
        "jointMin": 0.25,
        "jointMax": 3.0,
        "blocks": [],
    }
    response = client.put(f"/layouts/{layout['layout_id']}/state", json=state, headers=api_headers)
    assert response.status_code == 200
    return response.json()["layout"]


def test_status_endpoints_need_no_auth():
    assert client.get("/").json()["status"] == "online"
    assert client.get("/health").json()["status"] == "healthy"


def test_auth_required():
    """Test that authentication is required for layout endpoints."""
    response = client.post("/layouts", json={})
    assert response.status_code in (401, 422)

    response = client.post("/layouts", json={}, headers={"X-API-Key": "invalid_key"})
    assert response.status_code == 401


class TestLayouts:
    """Create, read, list and delete layouts."""

    def test_create_default(self, layout):
        assert layout["wall_width"] == 144.0
        assert layout["geometry"]["cols"] == 7
        assert layout["geometry"]["col_gap"] == pytest.approx(2.25)
        assert len(layout["blocks"]) == 21
        assert layout["drag"] is None

    def test_create_with_options(self, api_headers):
        response = client.post(
            "/layouts",
            json={"width": 200.0, "height": 90.0, "placement_policy": "reject_overlap"},
            headers=api_headers,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["geometry"]["cols"] == 10
        assert data["geometry"]["rows"] == 5

    def test_create_rejects_inverted_joints(self, api_headers):
        response = client.post(
            "/layouts", json={"joint_min": 3.0, "joint_max": 1.0}, headers=api_headers
        )
        assert response.status_code == 422

    def test_get_and_list(self, api_headers, layout):
        layout_id = layout["layout_id"]
        assert client.get(f"/layouts/{layout_id}", headers=api_headers).json() == layout
        assert client.get("/layouts", headers=api_headers).json() == [layout_id]

    def test_unknown_layout(self, api_headers):
        response = client.get("/layouts/missing", headers=api_headers)
        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "resource_not_found"

    def test_delete(self, api_headers, layout):
        layout_id = layout["layout_id"]
        assert client.delete(f"/layouts/{layout_id}", headers=api_headers).status_code == 200
        assert client.get(f"/layouts/{layout_id}", headers=api_headers).status_code == 404


class TestWallAndJoints:
    def test_resize_wall(self, api_headers, layout):
        response = client.put(
            f"/layouts/{layout['layout_id']}/wall",
            json={"width": 500.0},
            headers=api_headers,
        )
        assert response.status_code == 200
        assert response.json()["layout"]["wall_width"] == 288.0

    def test_resize_needs_a_value(self, api_headers, layout):
        response = client.put(
            f"/layouts/{layout['layout_id']}/wall", json={}, headers=api_headers
        )
        assert response.status_code == 422

    def test_joints(self, api_headers, layout):
        response = client.put(
            f"/layouts/{layout['layout_id']}/joints",
            json={"joint_min": 0.0, "joint_max": 2.0},
            headers=api_headers,
        )
        data = response.json()
        assert data["layout"]["geometry"]["cols"] == 8
        assert len(data["created_ids"]) == 24


class TestDrag:
    """Drag gestures over HTTP."""

    def test_drag_onto_empty_wall(self, api_headers, empty_layout):
        base = f"/layouts/{empty_layout['layout_id']}/drag"

        response = client.post(f"{base}/start", json={"span": {"w": 1, "h": 3}}, headers=api_headers)
        assert response.json()["layout"]["drag"]["span"] == {"w": 1, "h": 3}

        response = client.post(f"{base}/move", json={"x": 45.0, "y": 5.0}, headers=api_headers)
        assert response.json()["changed"]
        assert response.json()["layout"]["drag"]["candidateCell"] == {"col": 2, "row": 0}

        response = client.post(f"{base}/release", headers=api_headers)
        data = response.json()
        assert len(data["created_ids"]) == 1
        blocks = data["layout"]["blocks"]
        assert len(blocks) == 1
        assert blocks[0]["origin"] == {"col": 2, "row": 0}
        assert blocks[0]["span"] == {"w": 1, "h": 3}
        assert data["layout"]["drag"] is None

    def test_cancel(self, api_headers, layout):
        base = f"/layouts/{layout['layout_id']}/drag"
        client.post(f"{base}/start", json={"span": {"w": 1, "h": 3}}, headers=api_headers)
        assert client.post(f"{base}/cancel", headers=api_headers).json()["changed"]
        assert not client.post(f"{base}/cancel", headers=api_headers).json()["changed"]

    def test_release_without_drag_is_noop(self, api_headers, layout):
        response = client.post(f"/layouts/{layout['layout_id']}/drag/release", headers=api_headers)
        assert response.status_code == 200
        assert not response.json()["changed"]

    def test_invalid_span(self, api_headers, layout):
        response = client.post(
            f"/layouts/{layout['layout_id']}/drag/start",
            json={"span": {"w": 0, "h": 3}},
            headers=api_headers,
        )
        assert response.status_code == 422


class TestPlaceCombineSeams:
    def test_place(self, api_headers, empty_layout):
        response = client.post(
            f"/layouts/{empty_layout['layout_id']}/place",
            json={"origin": {"col": 0, "row": 0}, "span": {"w": 2, "h": 2}},
            headers=api_headers,
        )
        data = response.json()
        assert data["changed"]
        assert data["layout"]["blocks"][0]["lockedJoints"] == {"v": [0, 2], "h": [0, 2]}

    def test_place_out_of_bounds_is_noop(self, api_headers, layout):
        response = client.post(
            f"/layouts/{layout['layout_id']}/place",
            json={"origin": {"col": 6, "row": 0}, "span": {"w": 2, "h": 2}},
            headers=api_headers,
        )
        assert response.status_code == 200
        assert not response.json()["changed"]

    def test_combine(self, api_headers, layout):
        layout_id = layout["layout_id"]
        column = [b for b in layout["blocks"] if b["origin"]["col"] == 2][:2]
        client.post(
            f"/layouts/{layout_id}/selection/toggle",
            json={"block_id": column[0]["id"]},
            headers=api_headers,
        )
        client.post(
            f"/layouts/{layout_id}/selection/toggle",
            json={"block_id": column[1]["id"], "multi": True},
            headers=api_headers,
        )

        data = client.post(f"/layouts/{layout_id}/combine", headers=api_headers).json()

        assert data["changed"]
        merged_id = data["created_ids"][0]
        merged = [b for b in data["layout"]["blocks"] if b["id"] == merged_id][0]
        assert merged["origin"] == {"col": 2, "row": 0}
        assert merged["span"] == {"w": 1, "h": 4}
        assert data["layout"]["selection"] == [merged_id]

    def test_combine_without_selection_is_noop(self, api_headers, layout):
        data = client.post(f"/layouts/{layout['layout_id']}/combine", headers=api_headers).json()
        assert not data["changed"]
        assert len(data["layout"]["blocks"]) == 21

    def test_clear_selection(self, api_headers, layout):
        layout_id = layout["layout_id"]
        client.post(
            f"/layouts/{layout_id}/selection/toggle",
            json={"block_id": layout["blocks"][0]["id"]},
            headers=api_headers,
        )
        data = client.delete(f"/layouts/{layout_id}/selection", headers=api_headers).json()
        assert data["changed"]
        assert data["layout"]["selection"] == []

    def test_seam_toggle_and_overlay(self, api_headers, empty_layout):
        layout_id = empty_layout["layout_id"]
        client.post(
            f"/layouts/{layout_id}/place",
            json={"origin": {"col": 0, "row": 0}, "span": {"w": 2, "h": 2}},
            headers=api_headers,
        )

        seams = client.get(f"/layouts/{layout_id}/seams", headers=api_headers).json()
        assert {"kind": "v", "idx": 2} in seams["locked"]
        assert len(seams["lines"]) == 4

        data = client.post(
            f"/layouts/{layout_id}/seams/toggle",
            json={"kind": "v", "idx": 1},
            headers=api_headers,
        ).json()
        assert len(data["created_ids"]) == 2
        assert len(data["layout"]["blocks"]) == 2

    def test_seam_hover_and_select(self, api_headers, layout):
        layout_id = layout["layout_id"]
        # centre of the v4 reveal: 4 * 20.25 + 2.25 / 2
        seams = client.post(
            f"/layouts/{layout_id}/seams/hover",
            json={"x": 82.125, "y": 30.0},
            headers=api_headers,
        ).json()
        assert seams["hovered"] == {"kind": "v", "idx": 4}
        assert len(seams["lines"]) == 1
        assert seams["lines"][0]["hover"]

        seams = client.post(
            f"/layouts/{layout_id}/seams/select",
            json={"kind": "v", "idx": 4},
            headers=api_headers,
        ).json()
        assert seams["changed"]
        assert seams["selected"] == [{"kind": "v", "idx": 4}]
        assert seams["lines"][0]["selected"]

        seams = client.get(f"/layouts/{layout_id}/seams", headers=api_headers).json()
        assert seams["selected"] == [{"kind": "v", "idx": 4}]

        seams = client.delete(f"/layouts/{layout_id}/seams/selection", headers=api_headers).json()
        assert seams["changed"]
        assert seams["selected"] == []

    def test_seam_hover_off_seam_clears(self, api_headers, layout):
        seams = client.post(
            f"/layouts/{layout['layout_id']}/seams/hover",
            json={"x": 10.0, "y": 10.0},
            headers=api_headers,
        ).json()
        assert seams["hovered"] is None
        assert seams["lines"] == []

    def test_select_boundary_seam_is_noop(self, api_headers, layout):
        seams = client.post(
            f"/layouts/{layout['layout_id']}/seams/select",
            json={"kind": "v", "idx": 0},
            headers=api_headers,
        ).json()
        assert not seams["changed"]
        assert seams["selected"] == []

    def test_strict_place_onto_occupied_cell_is_noop(self, api_headers):
        layout = client.post(
            "/layouts", json={"placement_policy": "reject_overlap"}, headers=api_headers
        ).json()
        response = client.post(
            f"/layouts/{layout['layout_id']}/place",
            json={"origin": {"col": 0, "row": 0}, "span": {"w": 2, "h": 2}},
            headers=api_headers,
        )
        assert not response.json()["changed"]
        assert response.json()["layout"]["blocks"] == layout["blocks"]

    def test_seam_toggle_bad_kind(self, api_headers, layout):
        response = client.post(
            f"/layouts/{layout['layout_id']}/seams/toggle",
            json={"kind": "x", "idx": 1},
            headers=api_headers,
        )
        assert response.status_code == 422

    def test_faces(self, api_headers, layout):
        faces = client.get(f"/layouts/{layout['layout_id']}/faces", headers=api_headers).json()
        assert len(faces) == 21
        assert faces[0]["x"] == pytest.approx(2.25)
        assert faces[0]["y"] == pytest.approx(0.25)


class TestState:
    """Loading persisted state."""

    def test_round_trip(self, api_headers, layout):
        layout_id = layout["layout_id"]
        state = {
            "wallWidth": layout["wall_width"],
            "wallHeight": layout["wall_height"],
            "jointMin": layout["joint_min"],
            "jointMax": layout["joint_max"],
            "blocks": layout["blocks"],
        }
        response = client.put(f"/layouts/{layout_id}/state", json=state, headers=api_headers)
        assert response.status_code == 200
        assert response.json()["layout"]["blocks"] == layout["blocks"]

    def test_overlapping_blocks_rejected(self, api_headers, layout):
        layout_id = layout["layout_id"]
        block = {"id": "a", "origin": {"col": 0, "row": 0}, "span": {"w": 2, "h": 2}}
        state = {
            "wallWidth": 144.0,
            "wallHeight": 108.0,
            "jointMin": 0.25,
            "jointMax": 3.0,
            "blocks": [block, dict(block, id="b")],
        }
        response = client.put(f"/layouts/{layout_id}/state", json=state, headers=api_headers)
        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "validation_error"

        unchanged = client.get(f"/layouts/{layout_id}", headers=api_headers).json()
        assert len(unchanged["blocks"]) == 21

    def test_duplicate_ids_rejected(self, api_headers, layout):
        block = {"id": "a", "origin": {"col": 0, "row": 0}, "span": {"w": 1, "h": 2}}
        state = {
            "wallWidth": 144.0,
            "wallHeight": 108.0,
            "jointMin": 0.25,
            "jointMax": 3.0,
            "blocks": [block, dict(block, origin={"col": 1, "row": 0})],
        }
        response = client.put(
            f"/layouts/{layout['layout_id']}/state", json=state, headers=api_headers
        )
        assert response.status_code == 422
