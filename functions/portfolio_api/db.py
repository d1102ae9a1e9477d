"""
Storage adapter for the portfolio tables.

`SqlDbClient` talks to a real database through SQLAlchemy (Postgres in
production, SQLite locally and in tests). `NullDbClient` is the offline
fallback: every read comes back empty and every write is dropped.
"""

from __future__ import annotations

import json
import logging
import secrets
import string
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Protocol

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    Text,
    create_engine,
    delete,
    func,
    inspect,
    select,
)
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from portfolio_api.errors import ConfigurationError, StorageError

logger = logging.getLogger(__name__)

TOKEN_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "$@!%*?&"
TOKEN_LENGTH = 32


class DbClient(Protocol):
    """Interface for database access."""

    def init_schema(self) -> bool:
        ...

    def list_projects(self) -> Optional[list["ProjectRecord"]]:
        ...

    def get_project(self, project_id: int) -> Optional["ProjectRecord"]:
        ...

    def count_projects(self) -> int:
        ...

    def insert_project(self, fields: dict) -> "ProjectRecord":
        ...

    def insert_projects(self, projects: list[dict]) -> list["ProjectRecord"]:
        ...

    def update_project(
        self, project_id: int, fields: dict
    ) -> Optional["ProjectRecord"]:
        ...

    def delete_project(self, project_id: int) -> bool:
        ...

    def mint_token(self) -> str:
        ...

    def check_token(self, token: Optional[str]) -> bool:
        ...

    def add_contact_entry(self, entry: dict) -> "ContactEntryRecord":
        ...

    def list_contact_entries(self) -> Optional[list["ContactEntryRecord"]]:
        ...


@dataclass
class ProjectRecord:
    id: Optional[int]
    title: str
    description: str
    tech: list = field(default_factory=list)
    features: list = field(default_factory=list)
    links: list = field(default_factory=list)
    collaborators: Optional[list] = None

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "tech": self.tech,
            "features": self.features,
            "links": self.links,
            "collaborators": self.collaborators,
        }


@dataclass
class ContactEntryRecord:
    name: str
    email: str
    message: str

    def as_dict(self) -> dict:
        return {"name": self.name, "email": self.email, "message": self.message}


def generate_token(length: int = TOKEN_LENGTH) -> str:
    """Random admin token drawn from TOKEN_ALPHABET with a CSPRNG."""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def encode_json_column(value: Any) -> str:
    return json.dumps(value)


def decode_json_column(value: Any) -> Any:
    # Rows inserted by other tools may already hold decoded values.
    if isinstance(value, (str, bytes)):
        return json.loads(value)
    return value


def _encode_project_fields(fields: dict) -> dict:
    collaborators = fields.get("collaborators")
    return {
        "title": fields["title"],
        "description": fields["description"],
        "tech": encode_json_column(fields.get("tech") or []),
        "features": encode_json_column(fields.get("features") or []),
        "links": encode_json_column(fields.get("links") or []),
        "collaborators": (
            encode_json_column(collaborators) if collaborators is not None else None
        ),
    }


def _record_from_fields(project_id: Optional[int], fields: dict) -> ProjectRecord:
    return ProjectRecord(
        id=project_id,
        title=fields["title"],
        description=fields["description"],
        tech=list(fields.get("tech") or []),
        features=list(fields.get("features") or []),
        links=list(fields.get("links") or []),
        collaborators=fields.get("collaborators"),
    )


class NullDbClient:
    """Offline fallback used when no database is attached."""

    def init_schema(self) -> bool:
        return False

    def list_projects(self) -> Optional[list[ProjectRecord]]:
        return None

    def get_project(self, project_id: int) -> Optional[ProjectRecord]:
        return None

    def count_projects(self) -> int:
        return 0

    def insert_project(self, fields: dict) -> ProjectRecord:
        return _record_from_fields(None, fields)

    def insert_projects(self, projects: list[dict]) -> list[ProjectRecord]:
        return [_record_from_fields(None, fields) for fields in projects]

    def update_project(
        self, project_id: int, fields: dict
    ) -> Optional[ProjectRecord]:
        return None

    def delete_project(self, project_id: int) -> bool:
        return False

    def mint_token(self) -> str:
        return generate_token()

    def check_token(self, token: Optional[str]) -> bool:
        return False

    def add_contact_entry(self, entry: dict) -> ContactEntryRecord:
        return ContactEntryRecord(
            name=entry["name"], email=entry["email"], message=entry["message"]
        )

    def list_contact_entries(self) -> Optional[list[ContactEntryRecord]]:
        return None


class SqlDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ConfigurationError("DATABASE_URL is required for SqlDbClient")
        try:
            self.engine = create_engine(
                database_url,
                future=True,
                **_engine_options(database_url),
            )
        except (ArgumentError, ImportError) as exc:
            raise ConfigurationError(f"Invalid DATABASE_URL: {exc}") from exc
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        try:
            with self.Session() as session:
                yield session
        except (SQLAlchemyError, json.JSONDecodeError) as exc:
            logger.exception("Error %s", action)
            raise StorageError(f"Error {action}: {exc}") from exc

    def _to_project_record(self, row: "ProjectRow") -> ProjectRecord:
        collaborators = row.collaborators
        return ProjectRecord(
            id=row.id,
            title=row.title,
            description=row.description,
            tech=decode_json_column(row.tech),
            features=decode_json_column(row.features),
            links=decode_json_column(row.links),
            collaborators=(
                decode_json_column(collaborators) if collaborators not in (None, "") else None
            ),
        )

    def init_schema(self) -> bool:
        with self._session("initializing database"):
            existing = set(inspect(self.engine).get_table_names())
            missing = [
                name for name in Base.metadata.tables if name not in existing
            ]
            Base.metadata.create_all(self.engine)
        if missing:
            logger.info("Created tables: %s", ", ".join(sorted(missing)))
        return bool(missing)

    def list_projects(self) -> Optional[list[ProjectRecord]]:
        with self._session("getting projects") as session:
            rows = session.execute(
                select(ProjectRow).order_by(ProjectRow.id.asc())
            ).scalars().all()
            if not rows:
                return None
            return [self._to_project_record(row) for row in rows]

    def get_project(self, project_id: int) -> Optional[ProjectRecord]:
        with self._session("getting project by id") as session:
            row = session.get(ProjectRow, project_id)
            if not row:
                return None
            return self._to_project_record(row)

    def count_projects(self) -> int:
        with self._session("counting projects") as session:
            return session.execute(
                select(func.count()).select_from(ProjectRow)
            ).scalar_one()

    def insert_project(self, fields: dict) -> ProjectRecord:
        with self._session("adding project") as session:
            row = ProjectRow(**_encode_project_fields(fields))
            session.add(row)
            session.commit()
            session.refresh(row)
            return self._to_project_record(row)

    def insert_projects(self, projects: list[dict]) -> list[ProjectRecord]:
        """Insert every project in one transaction; nothing is kept on failure."""
        with self._session("adding projects") as session:
            rows = [ProjectRow(**_encode_project_fields(fields)) for fields in projects]
            session.add_all(rows)
            session.commit()
            return [self._to_project_record(row) for row in rows]

    def update_project(
        self, project_id: int, fields: dict
    ) -> Optional[ProjectRecord]:
        with self._session("updating project") as session:
            row = session.get(ProjectRow, project_id)
            if not row:
                return None
            for column, value in _encode_project_fields(fields).items():
                setattr(row, column, value)
            session.commit()
            session.refresh(row)
            return self._to_project_record(row)

    def delete_project(self, project_id: int) -> bool:
        with self._session("deleting project") as session:
            result = session.execute(
                delete(ProjectRow).where(ProjectRow.id == project_id)
            )
            session.commit()
            return (result.rowcount or 0) > 0

    def mint_token(self) -> str:
        token = generate_token()
        with self._session("getting user token") as session:
            # Tokens may be requested before /api/init has run.
            UserTokenRow.__table__.create(self.engine, checkfirst=True)
            session.merge(UserTokenRow(token=token))
            session.commit()
        logger.info("Issued a new user token")
        return token

    def check_token(self, token: Optional[str]) -> bool:
        if not token:
            return False
        with self._session("checking user token") as session:
            row = session.get(UserTokenRow, token)
            return row is not None and row.token == token

    def add_contact_entry(self, entry: dict) -> ContactEntryRecord:
        with self._session("adding contact form entry") as session:
            row = ContactFormRow(
                name=entry["name"], email=entry["email"], message=entry["message"]
            )
            session.add(row)
            session.commit()
            return ContactEntryRecord(
                name=row.name, email=row.email, message=row.message
            )

    def list_contact_entries(self) -> Optional[list[ContactEntryRecord]]:
        with self._session("getting contact form entries") as session:
            rows = session.execute(
                select(ContactFormRow).order_by(ContactFormRow.id.asc())
            ).scalars().all()
            if not rows:
                return None
            return [
                ContactEntryRecord(
                    name=row.name, email=row.email, message=row.message
                )
                for row in rows
            ]


def _engine_options(database_url: str) -> dict:
    if database_url.startswith("sqlite") and (
        ":memory:" in database_url or database_url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:")
    ):
        # One shared connection, otherwise every session sees an empty database.
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_recycle": 1800}


Base = declarative_base()


class ProjectRow(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    tech = Column(Text, nullable=False)
    features = Column(Text, nullable=False)
    links = Column(Text, nullable=False)
    collaborators = Column(Text, nullable=True)


class ContactFormRow(Base):
    __tablename__ = "contact_form"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())


class UserTokenRow(Base):
    __tablename__ = "user_tokens"

    token = Column(Text, primary_key=True)
