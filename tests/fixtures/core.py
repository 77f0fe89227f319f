from __future__ import annotations

import json
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from loguru import logger

from src.ticketing.core.services import BookingService
from src.ticketing.core.storage import InMemoryRecordStore, JsonFileRecordStore
from src.ticketing.entities import TRAIN, VEHICLE, Train, User

_BOOKED_AT = 1_700_000_000


@pytest.fixture(autouse=True)
def reset_loguru() -> Generator[None, None, None]:
    """Drop sinks added by a test so they never outlive its captured streams."""
    yield
    logger.remove()


@pytest.fixture
def booked_at() -> int:
    return _BOOKED_AT


@pytest.fixture
def fixed_clock(booked_at: int) -> Callable[[], float]:
    return lambda: float(booked_at)


@pytest.fixture
def alice() -> User:
    return User(user_id="U1", name="Alice", national_id="1234")


@pytest.fixture
def bob() -> User:
    return User(user_id="U2", name="Bob", national_id="5678")


@pytest.fixture
def carol() -> User:
    return User(user_id="U3", name="Carol", national_id="9012")


@pytest.fixture
def train_path(tmp_path: Path) -> Path:
    return tmp_path / "trains.json"


@pytest.fixture
def train_store(train_path: Path) -> JsonFileRecordStore[Train]:
    return JsonFileRecordStore(TRAIN, train_path)


@pytest.fixture
def vehicle_store(tmp_path: Path) -> JsonFileRecordStore:
    return JsonFileRecordStore(VEHICLE, tmp_path / "vehicles.json")


@pytest.fixture
def memory_train_store() -> InMemoryRecordStore[Train]:
    return InMemoryRecordStore(TRAIN)


@pytest.fixture
def train_service(
    train_store: JsonFileRecordStore[Train], fixed_clock: Callable[[], float]
) -> BookingService[Train]:
    return BookingService(train_store, clock=fixed_clock)


@pytest.fixture
def express(alice: User, bob: User, carol: User, booked_at: int) -> Train:
    """Train T1 seated as [[Alice, Bob], [Carol]]."""
    return Train(
        id="T1",
        name="Express",
        source="A",
        destination="B",
        departure_time=booked_at,
        seats=[[alice, bob], [carol]],
    )


@pytest.fixture
def write_json() -> Callable[[Path, object], None]:
    def _write(path: Path, document: object) -> None:
        path.write_text(json.dumps(document, indent=2), encoding="utf-8")

    return _write
