"""Pydantic models for the ArangoDB HTTP API payloads.

Each model pins the part of a response schema the browser relies on.  Models
whose content is shown verbatim (collection properties, graphs) allow extra
fields so the full server property set passes through untouched.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ServerVersion(_Payload):
    server: str
    license: str = ""
    version: str


class GaeVersion(_Payload):
    api_max_version: int = Field(..., alias="apiMaxVersion")
    api_min_version: int = Field(..., alias="apiMinVersion")
    version: str


class DatabaseListResponse(_Payload):
    error: bool = False
    code: int = 200
    result: list[str]


class CollectionInfo(_Payload):
    id: str
    name: str
    status: int = 3
    collection_type: int = Field(..., alias="type")
    is_system: bool = Field(False, alias="isSystem")
    globally_unique_id: str = Field("", alias="globallyUniqueId")


class CollectionListResponse(_Payload):
    error: bool = False
    code: int = 200
    result: list[CollectionInfo]


class CollectionDetail(_Payload):
    """Properties plus document count of one collection (``/count``).

    Only the fields the browser reads are declared; everything else the
    server sends (write concern, sync flags, schema, key options, ...) is
    kept as extra data and shown verbatim.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    collection_type: int = Field(..., alias="type")
    count: int

    def properties(self) -> dict[str, Any]:
        """The server's property bag, minus the response envelope."""
        data = self.model_dump(by_alias=True)
        data.pop("error", None)
        data.pop("code", None)
        return data


class EdgeDefinition(_Payload):
    collection: str
    from_collections: list[str] = Field(default_factory=list, alias="from")
    to_collections: list[str] = Field(default_factory=list, alias="to")


class GraphSummary(_Payload):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    key: str = Field("", alias="_key")
    id: str = Field("", alias="_id")
    rev: str = Field("", alias="_rev")
    edge_definitions: list[EdgeDefinition] = Field(default_factory=list, alias="edgeDefinitions")
    orphan_collections: list[str] = Field(default_factory=list, alias="orphanCollections")
    is_smart: bool = Field(False, alias="isSmart")
    is_disjoint: bool = Field(False, alias="isDisjoint")

    def properties(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class GraphListResponse(_Payload):
    error: bool = False
    code: int = 200
    graphs: list[GraphSummary]


class CursorResponse(_Payload):
    result: list[Any] = Field(default_factory=list)
    has_more: bool = Field(False, alias="hasMore")
    id: Optional[str] = None
