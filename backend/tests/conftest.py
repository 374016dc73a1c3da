"""Shared fixtures: Pillow-generated images, mock image hosts, sample records."""

import base64
import struct
import zlib
from datetime import datetime, timezone
from io import BytesIO

import httpx
import pytest
from PIL import Image

from app.models.schemas import EvaluationRecord
from app.report_engine.context import BuildContext
from app.report_engine.theme import DEFAULT_THEME
from app.services.assets import AssetFetcher

FIXED_TIME = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


# ──────────────────────────────────────────────────────────────
# IMAGES
# ──────────────────────────────────────────────────────────────

def make_png(width: int = 40, height: int = 60, color: str = "white") -> bytes:
    buf = BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def data_uri(data: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(data).decode()


def oversized_png(width: int = 20000, height: int = 20000) -> bytes:
    """A PNG whose header declares more pixels than Pillow will open."""

    def chunk(tag: bytes, body: bytes) -> bytes:
        crc = zlib.crc32(tag + body) & 0xFFFFFFFF
        return struct.pack(">I", len(body)) + tag + body + struct.pack(">I", crc)

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr)
            + chunk(b"IDAT", zlib.compress(b"")) + chunk(b"IEND", b""))


@pytest.fixture
def png_bytes():
    return make_png()


# ──────────────────────────────────────────────────────────────
# MOCK IMAGE HOST
# ──────────────────────────────────────────────────────────────

class ImageHost:
    """httpx MockTransport handler serving PNGs for ``/ok/...`` and 404 otherwise."""

    def __init__(self, png: bytes):
        self.png = png
        self.requests: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(str(request.url))
        if request.url.path.startswith("/ok/"):
            return httpx.Response(200, content=self.png, headers={"content-type": "image/png"})
        if request.url.path.startswith("/html/"):
            return httpx.Response(200, text="<html>login</html>", headers={"content-type": "text/html"})
        return httpx.Response(404)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def image_host(png_bytes):
    return ImageHost(png_bytes)


@pytest.fixture
def make_context(image_host):
    """Factory: payload dict → BuildContext backed by the mock image host."""

    def _make(payload: dict) -> BuildContext:
        record = EvaluationRecord.model_validate(payload)
        return BuildContext(
            record=record,
            theme=DEFAULT_THEME,
            fetcher=AssetFetcher(client=image_host.client()),
            generated_at=FIXED_TIME,
        )

    return _make


# ──────────────────────────────────────────────────────────────
# SAMPLE RECORDS
# ──────────────────────────────────────────────────────────────

@pytest.fixture
def minimal_payload():
    return {
        "claimantData": {"fullName": "Jane Doe"},
        "clientProfileData": {"logo": None},
        "tests": ["hand-strength-standard"],
    }


@pytest.fixture
def full_payload():
    return {
        "claimantData": {
            "firstName": "Keith",
            "lastName": "Adam",
            "claimantID": "65712",
            "dateOfBirth": "1983-12-01",
            "gender": "M",
            "address": "P.O. Box 255",
            "phone": "804-555-0100",
            "height": 71,
            "heightUnit": "in",
            "weight": 200,
            "weightUnit": "lb",
            "currentOccupation": "Selector",
            "employer": "Owens Illinois",
            "dominantHand": "R",
            "evaluationDate": "2011-11-03",
            "injuryHistory": [
                {"date": "2011-06-01", "description": "Lifting strain, lower back."},
            ],
        },
        "clientProfileData": {
            "name": "Ray Gagne",
            "credentials": "EET, CFE",
            "clinicName": "MedSource",
            "address": "490-5A Quarterpath Road, Williamsburg, VA",
            "phone": "757-555-0101",
            "fax": "757-555-0102",
            "logoUrl": "https://img.test/ok/logo.png",
        },
        "tests": [
            "hand-strength-standard",
            "pinch-strength-key",
            "balance",
            "lumbar-spine-flexion-extension",
            "static-lift-low",
        ],
        "testResults": [
            {"testId": "hand-strength-standard", "left": [120, 130, 132], "right": [118, 120, 121]},
            {"testId": "pinch-strength-key", "left": {"trial1": 27, "trial2": 28}, "right": [29, 30]},
            {"testId": "balance", "percentIs": 113.8, "jobDemand": "F", "jobMatch": "Yes"},
            {"testId": "lumbar-spine-flexion-extension", "components": {"F": [48, 49], "E": [28, 29]}},
            {"testId": "static-lift-low", "trials": [92, 93, 93]},
        ],
        "painIllustration": {
            "diagram": "https://img.test/ok/body.png",
            "markers": [
                {"x": 50, "y": 40, "type": "primary-concern", "view": "back"},
                {"x": 45, "y": 70, "type": "numbness"},
            ],
        },
        "referralQuestions": [
            {
                "question": "6a) What are the present limitations?",
                "answer": "Sustained reaching created the most discomfort.",
                "measurements": [
                    {"area": "Lumbar Flexion", "value": "49 deg", "passed": True, "norm": "60 deg"},
                    {"area": "Extension", "value": "28 deg", "passed": True, "norm": "25 deg"},
                ],
                "savedImageData": [
                    {"url": "https://img.test/ok/a.png"},
                    "https://img.test/missing/b.png",
                    {"dataUrl": "https://img.test/ok/c.png"},
                ],
            },
            {
                "question": "6c) What would be the Physical Demand Classification?",
                "answer": "PDC:Medium|In line with full return to duties.",
            },
            {
                "question": "7) Conclusion",
                "answer": "Client may return to full duties.",
            },
        ],
        "conclusions": ["Client was consistent in performance."],
        "digitalLibrary": [
            {"name": f"SDC{n}.JPG", "url": f"https://img.test/ok/{n}.png"} for n in range(1673, 1693)
        ],
    }
