"""Gateway package — read-only access to the ArangoDB HTTP API."""

from arangotui.gateway.client import (
    FetchError,
    get_collection_detail,
    get_gae_version,
    get_server_version,
    list_collections,
    list_databases,
    list_graphs,
    load_collection_entries,
    load_database_summaries,
    sample_documents,
)
from arangotui.gateway.models import (
    CollectionDetail,
    EdgeDefinition,
    GaeVersion,
    GraphSummary,
    ServerVersion,
)

__all__ = [
    "FetchError",
    "get_server_version",
    "get_gae_version",
    "list_databases",
    "list_collections",
    "get_collection_detail",
    "list_graphs",
    "sample_documents",
    "load_database_summaries",
    "load_collection_entries",
    "CollectionDetail",
    "EdgeDefinition",
    "GaeVersion",
    "GraphSummary",
    "ServerVersion",
]
