"""Unit tests for the node protocol, Model, relay ids and collection naming."""
from __future__ import annotations

import base64

import pytest

from node_service.core.database.collections import get_collection_name, suffix_collection
from node_service.core.database.exceptions import RepositoryError
from node_service.core.database.nodes import (
    Model,
    Node,
    marshal_id,
    node_from_document,
    node_to_document,
    typeof,
    unmarshal_id,
)
from tests.utils import Note, Patient


@pytest.mark.unit
class TestNodeProtocol:
    """Node capability checks."""

    def test_model_is_node(self):
        model = Model(name="test")
        assert isinstance(model, Node)
        assert model.is_node()

    def test_dataclass_is_node(self):
        assert isinstance(Note(), Node)

    def test_plain_object_is_not_node(self):
        assert not isinstance(object(), Node)

    def test_set_id(self):
        model = Model()
        model.set_id("abc")
        assert model.get_id() == "abc"


@pytest.mark.unit
class TestModel:
    """Common model fields and document field names."""

    def test_defaults(self):
        model = Model()
        assert model.id == ""
        assert model.deleted is False

    def test_populate_by_alias_and_name(self):
        by_alias = Model.model_validate({"createdByUID": "u1", "updatedByUID": "u2"})
        by_name = Model(created_by_uid="u1", updated_by_uid="u2")
        assert by_alias == by_name

    def test_document_uses_store_field_names(self):
        data = node_to_document(Model(id="1", name="test", created_by_uid="u1"))
        assert data["createdByUID"] == "u1"
        assert data["deleted"] is False
        assert data["id"] == "1"

    def test_unknown_document_fields_are_kept(self):
        model = Model.model_validate({"name": "x", "legacy": 1})
        assert node_to_document(model)["legacy"] == 1


@pytest.mark.unit
class TestMarshalling:
    """Node to document and back."""

    def test_pydantic_round_trip(self):
        patient = Patient(name="Jane", age=42, tags=["a"])
        restored = node_from_document(Patient, node_to_document(patient), "p1")

        assert restored.id == "p1"
        assert restored.age == 42
        assert restored.tags == ["a"]

    def test_dataclass_round_trip_ignores_unknown_fields(self):
        data = {**node_to_document(Note(text="hello")), "extra": True}
        restored = node_from_document(Note, data, "n1")

        assert restored == Note(id="n1", text="hello")

    def test_unsupported_node_type(self):
        class Bare:
            def is_node(self):
                return True

            def get_id(self):
                return ""

            def set_id(self, id):  # noqa: A002
                pass

        with pytest.raises(RepositoryError):
            node_to_document(Bare())
        with pytest.raises(RepositoryError):
            node_from_document(Bare, {}, "1")


@pytest.mark.unit
class TestRelayIds:
    """Opaque ids combining id and type name."""

    def test_typeof(self):
        assert typeof(Model()) == "Model"

    def test_marshal_id(self):
        opaque = marshal_id("1", Model())
        assert base64.b64decode(opaque).decode() == "1|Model"

    def test_unmarshal_id(self):
        assert unmarshal_id(marshal_id("a|b", Patient())) == ("a|b", "Patient")

    @pytest.mark.parametrize("value", ["not base64!", base64.b64encode(b"no separator").decode()])
    def test_unmarshal_invalid(self, value):
        with pytest.raises(RepositoryError):
            unmarshal_id(value)


@pytest.mark.unit
class TestCollectionNames:
    """Environment-suffixed collection names."""

    def test_suffix_collection(self):
        assert suffix_collection("otp", "prod") == "otp_bewell_prod"

    def test_collection_from_instance_and_type(self):
        assert get_collection_name(Model(), "staging") == "model_bewell_staging"
        assert get_collection_name(Patient, "prod") == "patient_bewell_prod"

    def test_default_suffix_from_settings(self, monkeypatch):
        monkeypatch.setenv("ROOT_COLLECTION_SUFFIX", "testing")
        assert get_collection_name(Model()) == "model_bewell_testing"
