import sys
from pathlib import Path

# Keep imports predictable in local runs
sys.path.append(str(Path(__file__).resolve().parent.parent))

import pytest
from fastapi.testclient import TestClient

from main import app
from modules.coord_stream import convert_record, format_record
from modules.coord_transform import bd09_to_gcj02, bd09_to_wgs84


def test_health():
    client = TestClient(app)
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_convert_point_defaults_to_bd09_to_wgs84():
    client = TestClient(app)
    resp = client.post("/api/v1/convert", json={"lng": 116.404, "lat": 39.915})
    assert resp.status_code == 200
    data = resp.json()

    expected = bd09_to_wgs84(116.404, 39.915)
    assert data["lng"] == pytest.approx(expected.lng, abs=1e-12)
    assert data["lat"] == pytest.approx(expected.lat, abs=1e-12)
    assert data["from_sys"] == "bd09"
    assert data["to_sys"] == "wgs84"
    assert data["in_china"] is True


def test_convert_point_bd09_to_gcj02():
    client = TestClient(app)
    payload = {"lng": 116.404, "lat": 39.915, "from_sys": "bd09", "to_sys": "gcj02"}
    resp = client.post("/api/v1/convert", json=payload)
    assert resp.status_code == 200
    data = resp.json()

    expected = bd09_to_gcj02(116.404, 39.915)
    assert data["lng"] == pytest.approx(expected.lng, abs=1e-12)
    assert data["lat"] == pytest.approx(expected.lat, abs=1e-12)


def test_convert_point_outside_region_is_identity():
    client = TestClient(app)
    payload = {"lng": -74.006, "lat": 40.7128, "from_sys": "wgs84", "to_sys": "gcj02"}
    resp = client.post("/api/v1/convert", json=payload)
    assert resp.status_code == 200
    data = resp.json()
    assert data["lng"] == -74.006
    assert data["lat"] == 40.7128
    assert data["in_china"] is False


def test_convert_point_rejects_unknown_system():
    client = TestClient(app)
    payload = {"lng": 116.404, "lat": 39.915, "from_sys": "epsg3857", "to_sys": "wgs84"}
    resp = client.post("/api/v1/convert", json=payload)
    assert resp.status_code == 422


def test_convert_text_endpoint():
    client = TestClient(app)
    body = "116.404,39.915\n10.5;20.25\n"
    resp = client.post("/api/v1/convert/text", content=body)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")

    lines = resp.text.splitlines()
    assert lines[0] == format_record(*convert_record(116.404, 39.915), ",")
    assert lines[1] == format_record(*convert_record(10.5, 20.25), ";")


def test_convert_text_endpoint_raw():
    client = TestClient(app)
    resp = client.post(
        "/api/v1/convert/text",
        params={"from_sys": "wgs84", "to_sys": "gcj02", "calibrate": "false"},
        content="10.5,20.25\nbad\n1,2\n",
    )
    assert resp.status_code == 200
    assert resp.text == "10.50000000, 20.25000000\n"


def test_convert_text_endpoint_stops_at_undecodable_line():
    client = TestClient(app)
    resp = client.post("/api/v1/convert/text", content=b"116.404,39.915\n\xff\xfe,1\n10.5,20.25\n")
    assert resp.status_code == 200
    assert resp.text == format_record(*convert_record(116.404, 39.915), ",") + "\n"


if __name__ == "__main__":
    test_health()
    test_convert_point_defaults_to_bd09_to_wgs84()
    test_convert_point_bd09_to_gcj02()
    test_convert_point_outside_region_is_identity()
    test_convert_point_rejects_unknown_system()
    test_convert_text_endpoint()
    test_convert_text_endpoint_raw()
    test_convert_text_endpoint_stops_at_undecodable_line()
    print("Convert API tests passed.")
