"""Shared JSON payloads as returned by the Bambu Lab cloud."""

from __future__ import annotations

import base64
import json
from typing import Any

import pytest


def _make_jwt(claims: dict[str, Any], *, alg: str = "RS256") -> str:
    """Build a JWT with a bogus signature (for testing only)."""

    def segment(obj: object) -> str:
        return base64.urlsafe_b64encode(json.dumps(obj).encode()).rstrip(b"=").decode()

    return f"{segment({'alg': alg, 'typ': 'JWT'})}.{segment(claims)}.fakesig"


@pytest.fixture
def jwt() -> str:
    return _make_jwt({"username": "u_1234567", "exp": 1900000000})


@pytest.fixture
def device_payload() -> dict[str, Any]:
    return {
        "name": "P1",
        "online": True,
        "dev_id": "d1",
        "print_status": "ACTIVE",
        "nozzle_diameter": 0.4,
        "dev_model_name": "C11",
        "dev_access_code": "12345678",
        "dev_product_name": "P1P",
    }


@pytest.fixture
def ams_payloads() -> list[dict[str, Any]]:
    return [
        {
            "ams": 2,
            "sourceColor": "FF0000FF",
            "targetColor": "FF0000FF",
            "filamentId": "GFA00",
            "filamentType": "PLA",
            "targetFilamentType": "PLA",
            "weight": 12.5,
        },
        {
            "ams": 0,
            "sourceColor": "000000FF",
            "targetColor": "000000FF",
            "filamentId": "GFB00",
            "filamentType": "PETG",
            "targetFilamentType": "PETG",
            "weight": 3.25,
        },
    ]


@pytest.fixture
def task_payload(ams_payloads: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "id": 71234567,
        "designId": 0,
        "designTitle": "",
        "instanceId": 0,
        "modelId": "US1a2b3c",
        "title": "Benchy",
        "cover": "https://public-cdn.bblmw.com/covers/benchy.png",
        "status": 2,
        "feedbackStatus": 0,
        "startTime": "2024-03-01T10:00:00Z",
        "endTime": "2024-03-01T10:45:30Z",
        "weight": 15.75,
        "length": 5230,
        "costTime": 2730,
        "profileId": 0,
        "plateIndex": 1,
        "plateName": "Plate 1",
        "deviceId": "d1",
        "amsDetailMapping": ams_payloads,
        "mode": "cloud_file",
        "isPublicProfile": False,
        "isPrintable": True,
        "deviceModel": "P1P",
        "deviceName": "P1",
        "bedType": "textured_plate",
    }


@pytest.fixture
def account_payload() -> dict[str, Any]:
    return {
        "uid": 1234567,
        "account": "alice@example.com",
        "name": "alice",
        "avatar": "https://public-cdn.bblmw.com/avatar/alice.png",
        "fanCount": 3,
        "followCount": 1,
        "likeCount": 10,
        "collectionCount": 0,
        "downloadCount": 7,
        "productModels": ["P1P", "X1C"],
        "myLikeCount": 2,
        "favouritesCount": 4,
        "point": 150,
        "personal": {
            "bio": "Prints things.",
            "links": ["https://example.com/alice"],
            "taskWeightSum": 1234.5,
            "taskLengthSum": 410000,
            "taskTimeSum": 360000,
            "backgroundUrl": "https://public-cdn.bblmw.com/bg/alice.png",
        },
    }
