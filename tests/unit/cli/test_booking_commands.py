"""Tests for the booking CLI commands."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from src.ticketing.cli import app
from src.ticketing.core.storage import JsonFileRecordStore, StoreIOError
from src.ticketing.entities import TRAIN, VEHICLE

runner = CliRunner()


@pytest.fixture
def invoke(tmp_path: Path):
    """Run the CLI against record files in a temporary data directory."""

    def _invoke(*args: str, input: str | None = None):
        return runner.invoke(app, ["--data-dir", str(tmp_path), *args], input=input)

    return _invoke


def book_args(kind: str, entity_id: str, user_id: str = "U1") -> list[str]:
    return [
        kind, "book", entity_id,
        "--name", "Express",
        "--source", "A",
        "--destination", "B",
        "--user-id", user_id,
        "--user-name", "Alice",
        "--national-id", "1234",
    ]


class TestBookCommand:
    """Test the book command."""

    def test_book_train(self, invoke, tmp_path):
        result = invoke(*book_args("train", "T100"))

        assert result.exit_code == 0
        assert "Train booked successfully" in result.output
        document = json.loads((tmp_path / "trains.json").read_text())
        assert document[0]["trainId"] == "T100"
        assert document[0]["seats"] == [[{"userId": "U1", "name": "Alice", "aadharCard": "1234"}]]

    def test_book_vehicle_uses_its_own_file(self, invoke, tmp_path):
        result = invoke(*book_args("vehicle", "V1"))

        assert result.exit_code == 0
        assert "Vehicle booked successfully" in result.output
        assert not (tmp_path / "trains.json").exists()
        assert JsonFileRecordStore(VEHICLE, tmp_path / "vehicles.json").load()[0].id == "V1"

    def test_book_requires_options(self, invoke):
        result = invoke("train", "book", "T1", "--name", "Express")

        assert result.exit_code != 0

    def test_book_reports_store_failure(self, invoke):
        with patch.object(JsonFileRecordStore, "save_all", side_effect=StoreIOError("disk full")):
            result = invoke(*book_args("train", "T1"))

        assert result.exit_code == 1
        assert "Failed to book train T1" in result.output


class TestCancelCommand:
    """Test the cancel command."""

    def test_cancel_existing_booking(self, invoke, tmp_path):
        invoke(*book_args("train", "T100"))

        result = invoke("train", "cancel", "T100", "U1")

        assert result.exit_code == 0
        assert "Cancelled booking for user U1 on train T100" in result.output
        assert JsonFileRecordStore(TRAIN, tmp_path / "trains.json").load()[0].seats == []

    def test_cancel_unknown_user(self, invoke):
        invoke(*book_args("train", "T100"))

        result = invoke("train", "cancel", "T100", "U9")

        assert result.exit_code == 1
        assert "No booking found for user U9 on train T100" in result.output

    def test_cancel_unknown_entity(self, invoke):
        result = invoke("vehicle", "cancel", "V404", "U1")

        assert result.exit_code == 1
        assert "Vehicle with ID V404 not found" in result.output

    def test_cancel_save_failure(self, invoke):
        invoke(*book_args("train", "T100"))

        with patch.object(JsonFileRecordStore, "save_all", side_effect=StoreIOError("read-only")):
            result = invoke("train", "cancel", "T100", "U1")

        assert result.exit_code == 1
        assert "Failed to save updated booking" in result.output


class TestShowCommand:
    """Test the show command."""

    def test_show_found(self, invoke):
        invoke(*book_args("train", "T1"))

        result = invoke("train", "show", "T1", "U1")

        assert result.exit_code == 0
        assert "Express" in result.output
        assert "Alice" in result.output
        assert "1234" in result.output

    def test_show_user_not_found(self, invoke):
        invoke(*book_args("train", "T1"))

        result = invoke("train", "show", "T1", "U9")

        assert result.exit_code == 0
        assert "No booking found for user U9 on train T1" in result.output

    def test_show_entity_not_found(self, invoke):
        result = invoke("train", "show", "T1", "U1")

        assert result.exit_code == 0
        assert "Train with ID T1 not found" in result.output


class TestListCommand:
    """Test the list command."""

    def test_list_empty(self, invoke):
        result = invoke("train", "list")

        assert result.exit_code == 0
        assert "No train bookings found" in result.output

    def test_list_bookings(self, invoke):
        invoke(*book_args("train", "T1"))
        invoke(*book_args("train", "T2", user_id="U2"))

        result = invoke("train", "list")

        assert result.exit_code == 0
        assert "T1" in result.output
        assert "T2" in result.output
        assert "Found 2 train booking(s)" in result.output

    def test_list_corrupt_file_soft(self, invoke, tmp_path):
        (tmp_path / "trains.json").write_text("{oops")

        result = invoke("train", "list")

        assert result.exit_code == 0
        assert "No train bookings found" in result.output

    def test_list_corrupt_file_strict(self, invoke, tmp_path):
        (tmp_path / "trains.json").write_text("{oops")

        result = invoke("train", "list", "--strict")

        assert result.exit_code == 1
        assert "Failed to read" in result.output


class TestGlobalOptions:
    """Test options handled by the root callback."""

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])

        assert "train" in result.output
        assert "vehicle" in result.output

    def test_config_file_option(self, tmp_path):
        data_dir = tmp_path / "data"
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            f"config:\n  storage:\n    data_dir: {data_dir}\n    train_file: rail.json\n"
        )

        result = runner.invoke(app, ["--config", str(config_path), *book_args("train", "T1")])

        assert result.exit_code == 0
        assert (data_dir / "rail.json").exists()

    def test_data_dir_overrides_config_file(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            f"config:\n  storage:\n    data_dir: {tmp_path / 'ignored'}\n    train_file: rail.json\n"
        )
        data_dir = tmp_path / "chosen"

        result = runner.invoke(
            app,
            ["--config", str(config_path), "--data-dir", str(data_dir), *book_args("train", "T1")],
        )

        assert result.exit_code == 0
        assert (data_dir / "rail.json").exists()
        assert not (tmp_path / "ignored").exists()

    def test_invalid_config_file(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("config:\n  logging:\n    format: xml\n")

        result = runner.invoke(app, ["--config", str(config_path), "train", "list"])

        assert result.exit_code == 1
        assert "Failed to load configuration" in result.output
