"""SQLAlchemy mapping metadata for the peer inventory."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Final

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    func,
    orm,
)
from sqlalchemy.orm import configure_mappers

from peerhub.domain.model import DEFAULT_GROUP_COLOR, Peer, PeerGroup, PeerStatus

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]

PEER_PUBLIC_KEY_CONSTRAINT: Final[str] = "uq_wireguard_peer_public_key"
PEER_NAME_INDEX: Final[str] = "uq_wireguard_peer_name_lower"
GROUP_NAME_INDEX: Final[str] = "uq_peer_group_name_lower"


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

peer_group_table = Table(
    "peer_group",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("color", String(16), nullable=False, default=DEFAULT_GROUP_COLOR),
    Column("description", String, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
)

wireguard_peer_table = Table(
    "wireguard_peer",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("public_key", String, nullable=False),
    Column("private_key", String, nullable=True),
    Column("allowed_ips", String, nullable=False),
    Column("dns", String, nullable=False),
    Column("persistent_keepalive", Integer, nullable=False),
    Column(
        "group_id",
        UUIDColumnType,
        ForeignKey("peer_group.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "status",
        Enum(
            PeerStatus,
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
    ),
    Column("created_at", UTCDateTime(), nullable=False),
    UniqueConstraint("public_key", name=PEER_PUBLIC_KEY_CONSTRAINT),
)

# Names are unique regardless of case.
Index(PEER_NAME_INDEX, func.lower(wireguard_peer_table.c.name), unique=True)
Index(GROUP_NAME_INDEX, func.lower(peer_group_table.c.name), unique=True)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(PeerGroup, peer_group_table)
    mapper_registry.map_imperatively(Peer, wireguard_peer_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
