"""Node capability and the common base model.

Any persisted entity is a *node*: it exposes a string id through
``get_id()``, accepts a new id through ``set_id()``, and marks itself with
``is_node()``. The repository is written against this protocol only, so no
shared base class is needed. ``Model`` is provided as a convenient one.

Example:
    class Patient(Model):
        phone: str | None = None

    patient = Patient(name="Jane")
    isinstance(patient, Node)  # True
"""

from __future__ import annotations

import base64
import dataclasses
from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from node_service.core.database.exceptions import RepositoryError

# Separator used to build opaque relay IDs
SEP = "|"


@runtime_checkable
class Node(Protocol):
    """A relay node: an entity with a stable string identifier."""

    def is_node(self) -> bool: ...

    def get_id(self) -> str: ...

    def set_id(self, id: str) -> None: ...  # noqa: A002


N = TypeVar("N", bound=Node)


class Model(BaseModel):
    """Common fields for persisted nodes.

    Field names on the wire and in the store follow the collection's
    existing documents (``createdByUID`` rather than ``created_by_uid``).
    Subclasses add their own fields; unknown document fields are kept.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra="allow",
    )

    id: str = Field(default="", description="Document identifier")
    # All models have a name; models that don't need one use a placeholder e.g. "-"
    name: str = Field(default="", description="Display name")
    description: str = Field(default="", description="Optional description")
    # Always persisted, including False
    deleted: bool = Field(default=False, description="Soft-delete marker")
    created_by_uid: str = Field(default="", alias="createdByUID")
    updated_by_uid: str = Field(default="", alias="updatedByUID")

    def is_node(self) -> bool:
        return True

    def get_id(self) -> str:
        return self.id

    def set_id(self, id: str) -> None:  # noqa: A002
        self.id = id


def typeof(value: Any) -> str:
    """Return the type name of value."""
    return type(value).__name__


def marshal_id(id: str, node: Node) -> str:  # noqa: A002
    """Build a re-fetchable opaque ID combining an object's id with its type.

    Example:
        marshal_id("1", Model())  # base64 of "1|Model"
    """
    combined = f"{id}{SEP}{typeof(node)}"
    return base64.b64encode(combined.encode("utf-8")).decode("ascii")


def unmarshal_id(opaque_id: str) -> tuple[str, str]:
    """Split an opaque ID from marshal_id() into (id, type name).

    Raises:
        RepositoryError: If the value is not an opaque node ID
    """
    try:
        combined = base64.b64decode(opaque_id.encode("ascii"), validate=True).decode("utf-8")
    except (ValueError, UnicodeError) as e:
        raise RepositoryError("Invalid node ID", details={"id": opaque_id}) from e
    node_id, sep, type_name = combined.rpartition(SEP)
    if not sep or not type_name:
        raise RepositoryError("Invalid node ID", details={"id": opaque_id})
    return node_id, type_name


def node_to_document(node: Node) -> dict[str, Any]:
    """Marshal a node into a document mapping.

    Raises:
        RepositoryError: If the node is neither a pydantic model nor a dataclass
    """
    if isinstance(node, BaseModel):
        return node.model_dump(mode="python", by_alias=True)
    if dataclasses.is_dataclass(node) and not isinstance(node, type):
        return dataclasses.asdict(node)
    raise RepositoryError(
        "Cannot marshal node; expected a pydantic model or dataclass",
        details={"type": typeof(node)},
    )


def node_from_document(node_type: type[N], data: dict[str, Any], id: str) -> N:  # noqa: A002
    """Unmarshal a document into a new instance of node_type with its id set.

    Raises:
        RepositoryError: If node_type is neither a pydantic model nor a dataclass
    """
    if issubclass(node_type, BaseModel):
        node = node_type.model_validate(data)
    elif dataclasses.is_dataclass(node_type):
        names = {f.name for f in dataclasses.fields(node_type) if f.init}
        node = node_type(**{k: v for k, v in data.items() if k in names})
    else:
        raise RepositoryError(
            "Cannot unmarshal node; expected a pydantic model or dataclass",
            details={"type": node_type.__name__},
        )
    node.set_id(id)
    return node


__all__ = [
    "Model",
    "N",
    "Node",
    "SEP",
    "marshal_id",
    "node_from_document",
    "node_to_document",
    "typeof",
    "unmarshal_id",
]
