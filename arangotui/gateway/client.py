"""Read-only calls against the ArangoDB HTTP API.

Every public coroutine performs its own round trip with a short-lived
``httpx.AsyncClient`` and returns decoded, typed results.  Transport errors,
error statuses and payloads that do not match the expected schema are all
raised as :class:`FetchError`; callers never need to tell them apart.

The aggregate loaders (:func:`load_database_summaries`,
:func:`load_collection_entries`) issue their per-item requests one after the
other, never concurrently.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar
from urllib.parse import quote

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from arangotui.config import ServerConfig
from arangotui.gateway.models import (
    CollectionDetail,
    CollectionInfo,
    CollectionListResponse,
    CursorResponse,
    DatabaseListResponse,
    GaeVersion,
    GraphListResponse,
    GraphSummary,
    ServerVersion,
)
from arangotui.models import (
    DOCUMENT_COLLECTION,
    EDGE_COLLECTION,
    CollectionEntry,
    DatabaseSummary,
    DocumentSample,
    sort_collections,
)

logger = structlog.get_logger(__name__)

# The only query this client ever runs.
SAMPLE_QUERY = "FOR doc IN @@collection LIMIT @limit RETURN doc"

_M = TypeVar("_M", bound=BaseModel)


class FetchError(Exception):
    """A read failed: unreachable server, error status or unexpected payload."""


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _db_api(database: str, *parts: str) -> str:
    """Build ``/_db/<database>/_api/<parts...>`` with each segment escaped."""
    segments = "/".join(quote(p, safe="") for p in parts)
    return f"/_db/{quote(database, safe='')}/_api/{segments}"


async def _request(
    config: ServerConfig,
    method: str,
    path: str,
    model: type[_M],
    what: str,
    *,
    body: Optional[dict[str, Any]] = None,
    base_url: Optional[str] = None,
    authenticate: bool = True,
) -> _M:
    url = f"{(base_url or config.base_url).rstrip('/')}{path}"
    logger.debug("gateway_request", method=method, url=url)
    try:
        async with httpx.AsyncClient(
            timeout=config.timeout,
            verify=config.verify_tls,
            auth=config.auth if authenticate else None,
        ) as client:
            response = await client.request(method, url, json=body)
            response.raise_for_status()
            payload = response.json()
    except httpx.HTTPError as exc:
        raise FetchError(f"Failed to fetch {what}: {exc}") from exc
    except ValueError as exc:
        raise FetchError(f"Failed to parse {what} response: {exc}") from exc

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise FetchError(f"Failed to parse {what} response: {exc}") from exc


# ---------------------------------------------------------------------------
# Handshake
# ---------------------------------------------------------------------------

async def get_server_version(config: ServerConfig) -> ServerVersion:
    """Return the server's version and license string (``/_api/version``)."""
    return await _request(config, "GET", "/_api/version", ServerVersion, "ArangoDB version")


async def get_gae_version(config: ServerConfig, gae_endpoint: str) -> GaeVersion:
    """Probe the Graph Analytics Engine.  No credentials are sent."""
    return await _request(
        config,
        "GET",
        "/v1/version",
        GaeVersion,
        "GAE version",
        base_url=gae_endpoint,
        authenticate=False,
    )


# ---------------------------------------------------------------------------
# Single reads
# ---------------------------------------------------------------------------

async def list_databases(config: ServerConfig) -> list[str]:
    response = await _request(config, "GET", "/_api/database", DatabaseListResponse, "databases")
    return response.result


async def list_collections(config: ServerConfig, database: str) -> list[CollectionInfo]:
    response = await _request(
        config, "GET", _db_api(database, "collection"), CollectionListResponse, "collections"
    )
    return response.result


async def get_collection_detail(
    config: ServerConfig, database: str, collection: str
) -> CollectionDetail:
    """Fetch the full property set of *collection*, including its document count."""
    return await _request(
        config,
        "GET",
        _db_api(database, "collection", collection, "count"),
        CollectionDetail,
        "collection count",
    )


async def list_graphs(config: ServerConfig, database: str) -> list[GraphSummary]:
    response = await _request(
        config, "GET", _db_api(database, "gharial"), GraphListResponse, "graphs"
    )
    return response.graphs


async def sample_documents(
    config: ServerConfig, database: str, collection: str, limit: int
) -> DocumentSample:
    """Return the first *limit* documents of *collection*.

    No sort key is applied, so the order is whatever the server yields.  If
    the server splits the result into batches the remaining batches are read
    before returning, so the caller always receives the whole bounded sample.
    """
    body = {
        "query": SAMPLE_QUERY,
        "bindVars": {"@collection": collection, "limit": limit},
        "batchSize": max(limit, 1),
        "options": {"stream": False},
    }
    cursor = await _request(
        config, "POST", _db_api(database, "cursor"), CursorResponse, "documents", body=body
    )
    documents = list(cursor.result)
    while cursor.has_more and cursor.id:
        cursor = await _request(
            config,
            "PUT",
            _db_api(database, "cursor", cursor.id),
            CursorResponse,
            "documents",
        )
        documents.extend(cursor.result)

    return DocumentSample(collection=collection, limit=limit, documents=documents)


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

async def summarize_database(config: ServerConfig, database: str) -> DatabaseSummary:
    """Count the collections of *database* by kind.

    A database whose collection listing cannot be read is reported as
    inaccessible instead of raising.
    """
    try:
        collections = await list_collections(config, database)
    except FetchError as exc:
        logger.info("database_inaccessible", database=database, error=str(exc))
        return DatabaseSummary(name=database, accessible=False)

    summary = DatabaseSummary(name=database)
    for coll in collections:
        if coll.is_system:
            summary.system_collections += 1
        elif coll.collection_type == DOCUMENT_COLLECTION:
            summary.doc_collections += 1
        elif coll.collection_type == EDGE_COLLECTION:
            summary.edge_collections += 1
    return summary


async def load_database_summaries(config: ServerConfig) -> list[DatabaseSummary]:
    """List every database with its collection counts.

    Raises:
        FetchError: If the database list itself cannot be read.
    """
    names = await list_databases(config)
    return [await summarize_database(config, name) for name in names]


async def load_collection_entries(config: ServerConfig, database: str) -> list[CollectionEntry]:
    """List the collections of *database* with document counts, sorted.

    A collection whose count cannot be read keeps ``count=None``.

    Raises:
        FetchError: If the collection list itself cannot be read.
    """
    infos = await list_collections(config, database)
    entries: list[CollectionEntry] = []
    for info in infos:
        try:
            count: int | None = (await get_collection_detail(config, database, info.name)).count
        except FetchError as exc:
            logger.debug("collection_count_failed", database=database, collection=info.name, error=str(exc))
            count = None
        entries.append(
            CollectionEntry(
                name=info.name,
                id=info.id,
                globally_unique_id=info.globally_unique_id,
                collection_type=info.collection_type,
                is_system=info.is_system,
                count=count,
            )
        )
    return sort_collections(entries)
