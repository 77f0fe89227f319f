"""Unit tests for the Train and Vehicle records and their kind descriptors."""

import pytest
from pydantic import Field

from src.ticketing.entities import (
    ENTITY_KINDS,
    TRAIN,
    VEHICLE,
    BookableEntity,
    EntityKind,
    Train,
    User,
    Vehicle,
    get_entity_kind,
)


class TestEntityKinds:
    """Test the registered entity kind descriptors."""

    def test_registry_contains_both_kinds(self):
        assert ENTITY_KINDS == {"train": TRAIN, "vehicle": VEHICLE}

    def test_identity_keys(self):
        assert TRAIN.id_key == "trainId"
        assert VEHICLE.id_key == "vehicleId"
        assert TRAIN.model is Train
        assert VEHICLE.model is Vehicle

    def test_get_entity_kind_is_case_insensitive(self):
        assert get_entity_kind("Train") is TRAIN
        assert get_entity_kind("VEHICLE") is VEHICLE

    def test_get_entity_kind_unknown(self):
        with pytest.raises(KeyError, match="train, vehicle"):
            get_entity_kind("bus")

    def test_label(self):
        assert TRAIN.label == "Train"
        assert VEHICLE.label == "Vehicle"

    def test_mismatched_identity_key_is_rejected(self):
        """A descriptor must use the alias its record class declares."""

        class Bus(BookableEntity):
            id: str = Field(default="", alias="busId")

        with pytest.raises(ValueError, match="busId"):
            EntityKind(name="bus", id_key="coachId", model=Bus, default_file="buses.json")


class TestEncoding:
    """Test the JSON object produced for each kind."""

    def test_train_encoding_key_order(self, express: Train):
        encoded = TRAIN.encode(express)

        assert list(encoded) == ["trainId", "name", "source", "destination", "time", "seats"]
        assert encoded["trainId"] == "T1"
        assert encoded["time"] == express.departure_time
        assert encoded["seats"] == [
            [
                {"userId": "U1", "name": "Alice", "aadharCard": "1234"},
                {"userId": "U2", "name": "Bob", "aadharCard": "5678"},
            ],
            [{"userId": "U3", "name": "Carol", "aadharCard": "9012"}],
        ]

    def test_vehicle_encoding_uses_vehicle_id(self, alice: User):
        vehicle = VEHICLE.create("V1", "Shuttle", "X", "Y", 10, [[alice]])

        encoded = VEHICLE.encode(vehicle)

        assert encoded["vehicleId"] == "V1"
        assert "trainId" not in encoded

    def test_create_builds_the_kind_model(self, alice: User):
        train = TRAIN.create("T9", "Night", "P", "Q", 123, [[alice]])

        assert isinstance(train, Train)
        assert train.id == "T9"
        assert train.departure_time == 123
        assert train.seats == [[alice]]


class TestDecoding:
    """Test lenient decoding of stored objects."""

    def test_decode_full_object(self):
        train = TRAIN.decode(
            {
                "trainId": "T1",
                "name": "Express",
                "source": "A",
                "destination": "B",
                "time": 1700000000,
                "seats": [[{"userId": "U1", "name": "Alice", "aadharCard": "1234"}]],
            }
        )

        assert train.id == "T1"
        assert train.name == "Express"
        assert train.departure_time == 1700000000
        assert train.seats == [[User(user_id="U1", name="Alice", national_id="1234")]]

    def test_missing_fields_decode_to_defaults(self):
        train = TRAIN.decode({})

        assert train.id == ""
        assert train.name == ""
        assert train.source == ""
        assert train.destination == ""
        assert train.departure_time == 0
        assert train.seats == []

    def test_mistyped_fields_decode_to_defaults(self):
        train = TRAIN.decode(
            {"trainId": 7, "name": None, "time": "soon", "seats": "none"}
        )

        assert train.id == ""
        assert train.name == ""
        assert train.departure_time == 0
        assert train.seats == []

    def test_boolean_time_is_not_a_timestamp(self):
        assert TRAIN.decode({"time": True}).departure_time == 0

    def test_malformed_rows_and_users_keep_their_positions(self):
        """Non-list rows read as empty rows, non-object users as blank users."""
        train = TRAIN.decode(
            {"trainId": "T1", "seats": [[{"userId": "U1"}, 5, "x"], "row", [], None]}
        )

        assert train.seats == [[User(user_id="U1"), User(), User()], [], [], []]

    def test_non_list_seats_decode_to_empty_grid(self):
        assert TRAIN.decode({"trainId": "T1", "seats": {"row": []}}).seats == []

    def test_non_object_item_decodes_to_empty_record(self):
        assert TRAIN.decode(["not", "an", "object"]) == Train()

    def test_other_kind_identity_key_is_ignored(self):
        """A vehicle object read as a train has no train identity."""
        train = TRAIN.decode({"vehicleId": "V1", "name": "Shuttle"})

        assert train.id == ""
        assert train.name == "Shuttle"


class TestBookableEntity:
    """Test behaviour shared by both record kinds."""

    def test_occupants_are_listed_row_by_row(self, express: Train, alice, bob, carol):
        assert express.occupants() == [alice, bob, carol]

    def test_records_are_mutable(self, express: Train, carol: User):
        express.seats = [[carol]]
        assert express.seats == [[carol]]
