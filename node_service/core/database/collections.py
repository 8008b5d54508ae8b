"""Collection naming.

Every node type lives in its own collection, named after the type and
suffixed with the deployment environment so that staging, testing and
production data never share a collection:

    Model     -> "model_bewell_staging"
    Patient   -> "patient_bewell_prod"

The suffix is passed in explicitly; when omitted it is read from
``FirestoreSettings.root_collection_suffix`` (env ``ROOT_COLLECTION_SUFFIX``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from node_service.core.settings.loader import get_firestore_settings

if TYPE_CHECKING:
    from node_service.core.database.nodes import Node

COLLECTION_INFIX = "_bewell_"


def suffix_collection(collection: str, suffix: str | None = None) -> str:
    """Append the environment suffix to a collection name.

    Args:
        collection: Bare collection name, e.g. "otp"
        suffix: Environment suffix; defaults to the configured one

    Returns:
        Suffixed name, e.g. "otp_bewell_staging"
    """
    if suffix is None:
        suffix = get_firestore_settings().root_collection_suffix
    return f"{collection}{COLLECTION_INFIX}{suffix}"


def get_collection_name(node: Node | type, suffix: str | None = None) -> str:
    """Derive the collection for a node (or node type) from its type name.

    Example:
        get_collection_name(Model())       # "model_bewell_staging"
        get_collection_name(Model, "prod") # "model_bewell_prod"
    """
    node_type = node if isinstance(node, type) else type(node)
    return suffix_collection(node_type.__name__.lower(), suffix)


__all__ = ["COLLECTION_INFIX", "get_collection_name", "suffix_collection"]
