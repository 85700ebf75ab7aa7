"""Tests for API endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from leafcomplex.main import app
from tests.conftest import disk_mask


client = TestClient(app)


def _disk_rows() -> list[list[int]]:
    return disk_mask(41, 15).astype(int).tolist()


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["transforms_registered"] == 17


def test_analyze_disk():
    response = client.post("/api/analyze", json={"mask": _disk_rows()})
    assert response.status_code == 200
    data = response.json()
    assert abs(data["features"]["lmc_shape_index"] - 1.0) < 0.1
    assert data["features"]["area"] == int(disk_mask(41, 15).sum())
    assert data["transforms_completed"] == 17
    assert data["lec_points"] > 0
    assert data["processing_time_ms"] > 0


def test_analyze_with_overrides():
    response = client.post(
        "/api/analyze",
        json={"mask": _disk_rows(), "config": {"opening_kernel_size": 3, "reference_point_choice": "ep"}},
    )
    assert response.status_code == 200
    features = response.json()["features"]
    assert features["pink_kernel_diameter"] == 3
    assert features["pink_opening_percentage"] is None


def test_analyze_empty_mask():
    response = client.post("/api/analyze", json={"mask": [[0] * 10] * 10})
    assert response.status_code == 422


def test_analyze_ragged_mask():
    response = client.post("/api/analyze", json={"mask": [[0, 1, 0], [1, 1]]})
    assert response.status_code == 422


def test_analyze_bad_reference_choice():
    response = client.post(
        "/api/analyze",
        json={"mask": _disk_rows(), "config": {"reference_point_choice": "tip"}},
    )
    assert response.status_code == 422
    assert "reference_point_choice" in response.json()["detail"]


def test_analyze_bad_threshold():
    response = client.post(
        "/api/analyze",
        json={"mask": _disk_rows(), "config": {"pink_threshold_value": -1}},
    )
    assert response.status_code == 422


def test_analyze_mistyped_overrides():
    for override in (
        {"opening_kernel_size": 3.5},
        {"emerge_point": [1, 2, 3]},
        {"thornfiddle_interpolation_points": 100.5},
    ):
        response = client.post("/api/analyze", json={"mask": _disk_rows(), "config": override})
        assert response.status_code == 422
        assert next(iter(override)) in response.json()["detail"]


def test_analyze_emerge_point_reference():
    response = client.post(
        "/api/analyze",
        json={"mask": _disk_rows(), "config": {"reference_point_choice": "EP"}},
    )
    assert response.status_code == 200
    assert response.json()["lec_points"] >= 4
