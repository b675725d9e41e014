"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError

from peerhub.adapters.sqlalchemy.mappings import peer_group_table, wireguard_peer_table
from peerhub.domain.model import Peer, PeerGroup, name_key
from peerhub.domain.ports import StoreError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import ColumnElement
    from sqlalchemy.orm import Session


class SqlAlchemyPeerRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Peer) -> None:
        self.session.add(entity)

    def list_all(self) -> Sequence[Peer]:
        stmt = select(Peer).order_by(
            func.lower(wireguard_peer_table.c.name), wireguard_peer_table.c.id
        )
        try:
            return self.session.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    def exists(self, *, name: str | None = None, public_key: str | None = None) -> bool:
        if name is None and public_key is None:
            return False
        conditions: list[ColumnElement[bool]] = []
        if name is not None:
            conditions.append(func.lower(wireguard_peer_table.c.name) == name_key(name))
        if public_key is not None:
            conditions.append(wireguard_peer_table.c.public_key == public_key)
        stmt = select(wireguard_peer_table.c.id).where(or_(*conditions))
        try:
            return self.session.execute(stmt.limit(1)).scalar_one_or_none() is not None
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc


class SqlAlchemyPeerGroupRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: PeerGroup) -> None:
        self.session.add(entity)

    def list_all(self) -> Sequence[PeerGroup]:
        stmt = select(PeerGroup).order_by(
            func.lower(peer_group_table.c.name), peer_group_table.c.id
        )
        try:
            return self.session.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    def get_by_name(self, name: str) -> PeerGroup | None:
        stmt = select(PeerGroup).where(func.lower(peer_group_table.c.name) == name_key(name))
        try:
            return self.session.execute(stmt.limit(1)).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc
