import json

import pytest
from starlette.requests import Request

from monthly_reports.core.errors import NotFoundError, ValidationError, unhandled_exception_handler


def _request(path: str, method: str = "POST") -> Request:
    return Request({"type": "http", "method": method, "path": path, "headers": [], "query_string": b""})


def test_error_bodies():
    assert NotFoundError("Report not found").to_dict() == {"message": "Report not found"}
    assert ValidationError("bad", envelope=True).to_dict() == {"success": False, "message": "bad"}


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/api/reports/add-day", "/api/reports/add-answers", "/api/reports/add-day/"])
async def test_unexpected_error_on_envelope_routes(path):
    response = await unhandled_exception_handler(_request(path), RuntimeError("boom"))

    assert response.status_code == 500
    assert json.loads(response.body) == {"success": False, "message": "Something went wrong!"}


@pytest.mark.asyncio
async def test_unexpected_error_elsewhere():
    response = await unhandled_exception_handler(_request("/api/reports/qa", "PUT"), RuntimeError("boom"))

    assert response.status_code == 500
    assert json.loads(response.body) == {"message": "Something went wrong!"}
