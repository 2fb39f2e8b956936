import logging
from collections.abc import Mapping
from typing import Dict, Iterator, List, Tuple

from ..schema.model import ForeignKey, Schema
from .base import BaseBinder

logger = logging.getLogger(__name__)


class AssociationCandidateIndex(Mapping):
    """Read-only map of target entity name -> foreign keys referencing it.

    Foreign keys keep schema encounter order.
    """

    def __init__(self, candidates: Dict[str, List[ForeignKey]]):
        self._candidates: Dict[str, Tuple[ForeignKey, ...]] = {
            name: tuple(fks) for name, fks in candidates.items()
        }

    def __getitem__(self, entity_name: str) -> Tuple[ForeignKey, ...]:
        return self._candidates[entity_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._candidates)

    def __len__(self):
        return len(self._candidates)

    def candidates_for(self, entity_name: str) -> Tuple[ForeignKey, ...]:
        return self._candidates.get(entity_name, ())


class AssociationCandidateCollector(BaseBinder):
    """First pass: index every foreign key of the schema by its target entity.

    Must run before any entity is bound, since a table cannot see the
    foreign keys pointing at it. Foreign keys referencing a table outside
    the schema are left out; the owning side binds their columns as scalars.
    """

    def collect(self, schema: Schema) -> AssociationCandidateIndex:
        candidates: Dict[str, List[ForeignKey]] = {}
        for table in schema:
            for foreign_key in table.foreign_keys:
                if not schema.has_table(foreign_key.referenced_table):
                    logger.debug("Foreign key %s references %s outside the schema, "
                                 "no collection candidate", foreign_key, foreign_key.referenced_table)
                    continue
                target = self.entity_name_for(foreign_key.referenced_table)
                candidates.setdefault(target, []).append(foreign_key)

        logger.debug("Collected one-to-many candidates for %d entities", len(candidates))
        return AssociationCandidateIndex(candidates)
