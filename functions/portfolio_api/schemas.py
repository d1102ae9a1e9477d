"""
Pydantic schemas for the portfolio API.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProjectLink(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: str
    icon: Optional[str] = None
    text: Optional[str] = None


class CollaboratorLink(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None
    uri: str
    icon: Optional[str] = None


class Collaborator(BaseModel):
    name: str
    uri: list[CollaboratorLink] = Field(default_factory=list)


class ProjectPayload(BaseModel):
    """Full set of writable project fields (updates replace every column)."""

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    tech: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    links: list[ProjectLink] = Field(default_factory=list)
    collaborators: Optional[list[Collaborator]] = None


class ProjectResponse(BaseModel):
    """Stored project as read back; rows written by other tools pass through as-is."""

    id: Optional[int] = None
    title: str
    description: str
    tech: list[Any] = Field(default_factory=list)
    features: list[Any] = Field(default_factory=list)
    links: list[Any] = Field(default_factory=list)
    collaborators: Optional[list[Any]] = None


class ContactFormRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=256)
    email: str = Field(..., min_length=3, max_length=320)
    message: str = Field(..., min_length=1, max_length=5000)


class ContactFormEntry(BaseModel):
    name: str
    email: str
    message: str


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str


class TokenValidityResponse(BaseModel):
    valid: bool
