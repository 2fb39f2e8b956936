import logging
from typing import List

from ..errors import MissingIdentifierError
from ..mapping import Entity, Property, PropertyKind
from ..registry import EntityRegistry
from .base import BaseBinder, is_unique_reference, make_unique
from .collector import AssociationCandidateIndex

logger = logging.getLogger(__name__)


class IncomingAssociationBinder(BaseBinder):
    """Adds one-to-many collections for foreign keys targeting an entity.

    Runs after every table is registered so the owning side's many-to-one
    names are known. Only the entity's property list changes; no columns
    are claimed.
    """

    def bind(self, entity: Entity, candidate_index: AssociationCandidateIndex,
             registry: EntityRegistry) -> List[Property]:
        """Bind the collections for entity.

        Raises:
            MissingIdentifierError: if candidates exist but entity has no identifier.
        """
        candidates = candidate_index.candidates_for(entity.name)
        if not candidates:
            return []
        if not entity.has_identifier():
            raise MissingIdentifierError(entity.name, entity.table.identifier)

        bound = []
        for foreign_key in candidates:
            if self.strategy.exclude_foreign_key_as_collection(foreign_key):
                logger.debug("Foreign key %s excluded as collection", foreign_key)
                continue

            owner = registry.get_entity_for_table(foreign_key.table)
            if owner is None:
                logger.warning("No entity bound for %s, skipping collection for %s",
                               foreign_key.table, foreign_key)
                continue

            many_to_one = owner.many_to_one_for(foreign_key)
            unique = is_unique_reference(foreign_key, owner.table)
            name = make_unique(entity, self.strategy.foreign_key_to_collection_name(foreign_key, unique))

            prop = Property(
                name=name,
                kind=PropertyKind.ONE_TO_MANY,
                columns=foreign_key.columns,
                type_name=owner.name,
                target_entity=owner.name,
                foreign_key=foreign_key,
                inverse_name=many_to_one.name if many_to_one else None,
                inverse=self.strategy.is_foreign_key_collection_inverse(foreign_key),
                lazy=self.strategy.is_foreign_key_collection_lazy(foreign_key),
            )
            entity.add_property(prop)
            bound.append(prop)
            logger.debug("One-to-many %s.%s -> %s (inverse of %s)",
                         entity.name, name, owner.name, prop.inverse_name)

        return bound
