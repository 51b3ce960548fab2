"""Pytest configuration and fixtures for selecta.

Each HTTP test gets a freshly built app (selecta.main.create_app) with its
upload and data directories under tmp_path. The app lifespan is entered
explicitly because ASGITransport does not run it. The database backend
runs against a throwaway SQLite file through aiosqlite.
"""

import json
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from selecta.core.config import Settings
from selecta.main import create_app

# Smallest byte strings carrying the right magic numbers; only the declared
# MIME type and the size are checked.
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64 + b"\xff\xd9"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
PDF_BYTES = b"%PDF-1.4\n%%EOF\n"

SAMPLE_LOCATION = {"lat": -6.2, "lng": 106.816666, "address": "Jl. Sudirman No. 1, Jakarta"}


def make_settings(tmp_path: Path, backend: str = "file", **overrides: object) -> Settings:
    """Settings isolated to tmp_path."""
    values: dict[str, object] = {
        "registration_backend": backend,
        "upload_dir": str(tmp_path / "uploads"),
        "data_dir": str(tmp_path / "data"),
    }
    if backend == "database":
        values["database_url"] = f"sqlite+aiosqlite:///{tmp_path / 'selecta.db'}"
    values.update(overrides)
    return Settings(**values)


def registration_form(
    homepass_id: str = "AB12-CD345-H00001",
    customer_name: str = "Budi Santoso",
    phone_number: str = "081234567890",
    location: dict | str | None = None,
) -> dict[str, str]:
    """Text parts of a registration submission."""
    if location is None:
        location = SAMPLE_LOCATION
    return {
        "homepassId": homepass_id,
        "customerName": customer_name,
        "phoneNumber": phone_number,
        "location": location if isinstance(location, str) else json.dumps(location),
    }


def registration_files(
    ktp: tuple[str, bytes, str] | None = ("ktp.jpg", JPEG_BYTES, "image/jpeg"),
    house: tuple[str, bytes, str] | None = ("rumah.png", PNG_BYTES, "image/png"),
) -> dict[str, tuple[str, bytes, str]]:
    """File parts of a registration submission (None leaves the part out)."""
    files: dict[str, tuple[str, bytes, str]] = {}
    if ktp is not None:
        files["ktpFile"] = ktp
    if house is not None:
        files["housePhotoFile"] = house
    return files


async def _serve(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


@pytest.fixture
def file_settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path, "file")


@pytest.fixture
def db_settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path, "database")


@pytest.fixture
def file_app(file_settings: Settings) -> FastAPI:
    return create_app(file_settings)


@pytest.fixture
def db_app(db_settings: Settings) -> FastAPI:
    return create_app(db_settings)


@pytest.fixture
async def client(file_app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the file-backed app (ASGI)."""
    async for ac in _serve(file_app):
        yield ac


@pytest.fixture
async def db_client(db_app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the database-backed app (SQLite)."""
    async for ac in _serve(db_app):
        yield ac
