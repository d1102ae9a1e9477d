"""
HTTP routes for the portfolio API.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from portfolio_api.auth import require_token
from portfolio_api.db import ContactEntryRecord, DbClient, ProjectRecord
from portfolio_api.dependencies import get_db_client
from portfolio_api.errors import ApiError, ConfigurationError, StorageError
from portfolio_api.schemas import (
    ContactFormEntry,
    ContactFormRequest,
    MessageResponse,
    ProjectPayload,
    ProjectResponse,
    TokenResponse,
    TokenValidityResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@contextmanager
def storage_boundary(action: str) -> Iterator[None]:
    """Turn storage and configuration failures into a 500 for the caller."""
    try:
        yield
    except (StorageError, ConfigurationError) as exc:
        logger.exception("Failed to %s", action)
        raise ApiError(500, f"Failed to {action}", details=str(exc)) from exc


def _project_response(record: ProjectRecord) -> ProjectResponse:
    return ProjectResponse(**record.as_dict())


def _contact_entry(record: ContactEntryRecord) -> ContactFormEntry:
    return ContactFormEntry(**record.as_dict())


def _project_fields(payload: ProjectPayload) -> dict:
    return payload.model_dump(exclude_none=True)


@router.get("/projects", response_model=list[ProjectResponse])
def list_projects(db: DbClient = Depends(get_db_client)):
    with storage_boundary("fetch projects"):
        projects = db.list_projects()
    if not projects:
        raise ApiError(404, "No projects found")
    return [_project_response(project) for project in projects]


@router.get("/projects/{project_id}", response_model=ProjectResponse)
def get_project(project_id: int, db: DbClient = Depends(get_db_client)):
    with storage_boundary("fetch project"):
        project = db.get_project(project_id)
    if not project:
        raise ApiError(404, "Project not found")
    return _project_response(project)


@router.post(
    "/projects",
    response_model=ProjectResponse,
    status_code=201,
    dependencies=[Depends(require_token)],
)
def create_project(payload: ProjectPayload, db: DbClient = Depends(get_db_client)):
    with storage_boundary("add project"):
        project = db.insert_project(_project_fields(payload))
    logger.info("Created project %s", project.id)
    return _project_response(project)


@router.put(
    "/projects/{project_id}",
    response_model=ProjectResponse,
    dependencies=[Depends(require_token)],
)
def update_project(
    project_id: int,
    payload: ProjectPayload,
    db: DbClient = Depends(get_db_client),
):
    with storage_boundary("update project"):
        project = db.update_project(project_id, _project_fields(payload))
    if not project:
        raise ApiError(404, "Project not found")
    return _project_response(project)


@router.delete(
    "/projects/{project_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_token)],
)
def delete_project(project_id: int, db: DbClient = Depends(get_db_client)):
    with storage_boundary("delete project"):
        deleted = db.delete_project(project_id)
    if not deleted:
        raise ApiError(404, "Project not found")
    logger.info("Deleted project %s", project_id)
    return MessageResponse(message="Project deleted successfully")


@router.get("/user-token", response_model=TokenResponse)
def get_user_token(db: DbClient = Depends(get_db_client)):
    """
    Issue a fresh admin token. Anyone may call this; the token is what
    unlocks the project write routes.
    """
    with storage_boundary("fetch user token"):
        token = db.mint_token()
    return TokenResponse(token=token)


@router.get("/auth/is-valid/{token}", response_model=TokenValidityResponse)
def is_token_valid(token: str, db: DbClient = Depends(get_db_client)):
    try:
        valid = db.check_token(token)
    except StorageError:
        logger.exception("Token check failed")
        valid = False
    if not valid:
        return JSONResponse(status_code=401, content={"valid": False})
    return TokenValidityResponse(valid=True)


@router.get("/init", response_model=MessageResponse)
def init_database(db: DbClient = Depends(get_db_client)):
    with storage_boundary("initialize database"):
        created = db.init_schema()
    if not created:
        return MessageResponse(message="Database already initialized")
    return MessageResponse(message="Database initialized successfully")


@router.post("/contact-form", response_model=MessageResponse, status_code=201)
def submit_contact_form(
    payload: ContactFormRequest, db: DbClient = Depends(get_db_client)
):
    with storage_boundary("process contact form"):
        db.add_contact_entry(payload.model_dump())
    return MessageResponse(message="Contact form entry added successfully")


@router.get("/contact-form", response_model=list[ContactFormEntry])
def list_contact_form_entries(db: DbClient = Depends(get_db_client)):
    with storage_boundary("fetch contact form entries"):
        entries = db.list_contact_entries()
    if not entries:
        return JSONResponse(
            status_code=404, content={"message": "No contact form entries found"}
        )
    return [_contact_entry(entry) for entry in entries]
