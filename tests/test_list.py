"""Tests for the GET /{customer_code}/list endpoint."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.core.database import engine
from app.models.enums import MeasureType
from app.models.reading import Reading
from app.services import reading_store


class TestListReadings:
    """Listing a customer's readings."""

    def test_list_all_readings(self, client: TestClient, make_reading) -> None:
        readings = [
            make_reading(MeasureType.WATER),
            make_reading(MeasureType.GAS),
            make_reading(MeasureType.WATER),
        ]

        response = client.get("/CUST-1/list")

        assert response.status_code == 200
        data = response.json()
        assert data["customer_code"] == "CUST-1"
        assert len(data["measures"]) == 3
        by_uuid = {m["measure_uuid"]: m for m in data["measures"]}
        assert set(by_uuid) == {r.uuid for r in readings}
        for measure_uuid, measure in by_uuid.items():
            assert measure["image_url"] == f"/images/{measure_uuid}.jpeg"
            assert measure["has_confirmed"] is False

    def test_measure_fields(self, client: TestClient, make_reading) -> None:
        reading = make_reading(MeasureType.GAS, measure_datetime=datetime(2024, 3, 1, 8, 30))

        response = client.get("/CUST-1/list")

        measure = response.json()["measures"][0]
        assert set(measure) == {
            "measure_uuid",
            "measure_datetime",
            "measure_type",
            "has_confirmed",
            "image_url",
        }
        assert measure["measure_uuid"] == reading.uuid
        assert measure["measure_type"] == "GAS"
        assert measure["measure_datetime"].startswith("2024-03-01T08:30:00")

    def test_confirmed_flag_is_reported(self, client: TestClient, make_reading) -> None:
        reading = make_reading()
        client.patch("/confirm", json={"measure_uuid": reading.uuid, "confirmed_value": 7})

        response = client.get("/CUST-1/list")

        assert response.json()["measures"][0]["has_confirmed"] is True

    @pytest.mark.parametrize("measure_type", ["WATER", "water", "Water"])
    def test_filter_is_case_insensitive(
        self, client: TestClient, make_reading, measure_type: str
    ) -> None:
        water = make_reading(MeasureType.WATER)
        make_reading(MeasureType.GAS)

        response = client.get("/CUST-1/list", params={"measure_type": measure_type})

        assert response.status_code == 200
        measures = response.json()["measures"]
        assert [m["measure_uuid"] for m in measures] == [water.uuid]
        assert measures[0]["measure_type"] == "WATER"

    def test_empty_filter_lists_everything(self, client: TestClient, make_reading) -> None:
        make_reading(MeasureType.WATER)
        make_reading(MeasureType.GAS)

        response = client.get("/CUST-1/list", params={"measure_type": ""})

        assert response.status_code == 200
        assert len(response.json()["measures"]) == 2

    def test_readings_are_scoped_to_customer(self, client: TestClient, db, make_reading) -> None:
        reading_store.create_customer(db, name="John Roe", address="2 Pipe Lane", customer_code="CUST-2")
        mine = make_reading()
        make_reading(customer_code="CUST-2")

        response = client.get("/CUST-1/list")

        assert [m["measure_uuid"] for m in response.json()["measures"]] == [mine.uuid]


class TestListErrors:
    """Error responses of the listing endpoint."""

    def test_unknown_measure_type(self, client: TestClient, make_reading) -> None:
        make_reading()

        response = client.get("/CUST-1/list", params={"measure_type": "electric"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_DATA"
        assert response.json()["error_description"] == "Invalid measure type"

    def test_unknown_customer(self, client: TestClient) -> None:
        response = client.get("/NOBODY/list")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_customer_without_readings(self, client: TestClient, customer) -> None:
        response = client.get(f"/{customer.customer_code}/list")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_no_readings_of_requested_type(self, client: TestClient, make_reading) -> None:
        make_reading(MeasureType.GAS)

        response = client.get("/CUST-1/list", params={"measure_type": "water"})

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_store_failure_is_reported_as_internal_error(
        self, client: TestClient, make_reading
    ) -> None:
        make_reading()
        Reading.__table__.drop(bind=engine)

        response = client.get("/CUST-1/list")

        assert response.status_code == 500
        assert response.json() == {
            "error_code": "INTERNAL_ERROR",
            "error_description": "Internal server error",
        }
