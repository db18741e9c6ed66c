"""Data models for the swiftstore SDK."""

from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class EndpointType(str, Enum):
    """Catalog endpoint interface."""

    PUBLIC = "public"
    INTERNAL = "internal"
    ADMIN = "admin"


class AuthResult(BaseModel):
    """Storage URL and token produced by one authentication exchange."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Base storage endpoint")
    token: str = Field(..., description="Opaque auth token")


class ObjectRecord(BaseModel):
    """One object entry of a container listing."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Object name")
    bytes: int = Field(0, description="Size in bytes")
    hash: Optional[str] = Field(None, description="MD5 of the object content")
    content_type: Optional[str] = Field(None, description="MIME type of the object")
    last_modified: Optional[datetime] = Field(None, description="Last modification instant")

    @property
    def key(self) -> str:
        return self.name


class FolderRecord(BaseModel):
    """A pseudo-directory entry returned when listing with a delimiter."""

    model_config = ConfigDict(populate_by_name=True)

    subdir: str = Field(..., description="Folder name including the trailing delimiter")

    @property
    def key(self) -> str:
        return self.subdir


ListingRecord = Union[ObjectRecord, FolderRecord]


class ContainerRecord(BaseModel):
    """One container entry of an account listing."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Container name")
    count: int = Field(0, description="Number of objects in the container")
    bytes: int = Field(0, description="Total size of all objects in bytes")
    last_modified: Optional[datetime] = Field(None, description="Last modification instant")


class ObjectInfo(BaseModel):
    """Object details read from a HEAD request."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Object name")
    content_length: int = Field(0, description="Size in bytes")
    content_type: Optional[str] = Field(None, description="MIME type of the object")
    hash: Optional[str] = Field(None, description="ETag of the object")
    last_modified: datetime = Field(..., description="Last modification instant")
    metadata: Dict[str, str] = Field(default_factory=dict, description="Custom object metadata")


class PrefixFilter(BaseModel):
    """Restrict a listing to names under a prefix.

    A delimiter is only meaningful together with a prefix; when the prefix is
    set and no delimiter is given, ``/`` is used.
    """

    model_config = ConfigDict(frozen=True)

    prefix: Optional[str] = Field(None, description="Name prefix")
    delimiter: Optional[str] = Field(None, description="Pseudo-directory delimiter")
    limit: Optional[float] = Field(None, description="Maximum number of entries")


class RangeFilter(BaseModel):
    """Restrict a listing to a lexicographic name range."""

    model_config = ConfigDict(frozen=True)

    marker: Optional[str] = Field(None, description="Only names greater than this")
    end_marker: Optional[str] = Field(None, description="Only names less than this")
    reverse: Optional[bool] = Field(None, description="Return entries in reverse order")
    limit: Optional[float] = Field(None, description="Maximum number of entries")


ObjectFilter = Union[PrefixFilter, RangeFilter]


class FolderFilter(BaseModel):
    """Options for listing pseudo-directories."""

    model_config = ConfigDict(frozen=True)

    prefix: Optional[str] = Field(None, description="Name prefix")
    delimiter: str = Field("/", description="Pseudo-directory delimiter")
    marker: Optional[str] = Field(None, description="Only folders greater than this")
    end_marker: Optional[str] = Field(None, description="Only folders less than this")
    limit: Optional[float] = Field(None, description="Maximum number of entries")
