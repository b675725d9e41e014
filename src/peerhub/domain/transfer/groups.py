"""Two-way lookup between portable group names and internal group ids."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from peerhub.domain.model import name_key

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from peerhub.domain.model import PeerGroup


@dataclass(frozen=True, slots=True)
class GroupDirectory:
    ids_by_name: dict[str, UUID] = field(default_factory=dict)
    names_by_id: dict[UUID, str] = field(default_factory=dict)

    @classmethod
    def from_groups(cls, groups: Iterable[PeerGroup]) -> GroupDirectory:
        ids_by_name: dict[str, UUID] = {}
        names_by_id: dict[UUID, str] = {}
        for group in groups:
            ids_by_name.setdefault(group.name_key, group.id)
            names_by_id[group.id] = group.name
        return cls(ids_by_name=ids_by_name, names_by_id=names_by_id)

    def resolve(self, group_name: str | None) -> UUID | None:
        """Return the id of the group called ``group_name``, ignoring case.

        Unknown or missing names resolve to ``None``; the peer is imported ungrouped.
        """
        if not group_name:
            return None
        return self.ids_by_name.get(name_key(group_name))

    def name_for(self, group_id: UUID | None) -> str | None:
        if group_id is None:
            return None
        return self.names_by_id.get(group_id)
