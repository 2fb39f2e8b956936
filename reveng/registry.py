import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from .mapping import Entity
from .schema.model import TableIdentifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registration:
    """Outcome of EntityRegistry.register.

    `conflict` is the entity already registered under the same name when the
    registration was refused, None when it succeeded.
    """

    entity: Entity
    conflict: Optional[Entity] = None

    @property
    def ok(self) -> bool:
        return self.conflict is None


class EntityRegistry:
    """Bound entities by name, in registration order, plus the import map."""

    def __init__(self):
        self._entities: Dict[str, Entity] = {}
        self._by_table: Dict[TableIdentifier, Entity] = {}
        self.imports: Dict[str, str] = {}

    def register(self, entity: Entity) -> Registration:
        """Add an entity; a name already taken is refused, never overwritten."""
        existing = self._entities.get(entity.name)
        if existing is not None:
            return Registration(entity, conflict=existing)
        self._entities[entity.name] = entity
        self._by_table[entity.table.identifier] = entity
        logger.debug("Registered entity %s for %s", entity.name, entity.table)
        return Registration(entity)

    def add_import(self, name: str, entity_name: str):
        self.imports[name] = entity_name

    def get(self, name: str) -> Optional[Entity]:
        return self._entities.get(name)

    def get_entity_for_table(self, table: TableIdentifier) -> Optional[Entity]:
        return self._by_table.get(table)

    def __contains__(self, name) -> bool:
        return name in self._entities

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities.values())

    def __len__(self):
        return len(self._entities)

    @property
    def entity_names(self) -> List[str]:
        return list(self._entities)

    def to_dict(self) -> Dict:
        """Standardized result for downstream generators."""
        return {
            'entities': [e.to_dict() for e in self._entities.values()],
            'imports': dict(self.imports),
        }
