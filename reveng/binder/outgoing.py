import logging
from typing import List, Optional

from ..config import BinderSettings
from ..mapping import Entity, Property, PropertyKind
from ..schema.model import ForeignKey, Schema, Table
from ..strategy.base import BindingStrategy
from .base import BaseBinder, ProcessedColumns, is_unique_reference, make_unique

logger = logging.getLogger(__name__)


class OutgoingAssociationBinder(BaseBinder):
    """Turns the foreign keys a table owns into many-to-one properties.

    A foreign key whose columns are all claimed by the identifier is left to
    the identifier unless basic composite ids are preferred, in which case
    it is bound as an immutable reference.
    """

    def __init__(self, schema: Schema, strategy: BindingStrategy,
                 settings: Optional[BinderSettings] = None):
        super().__init__(strategy, settings)
        self.schema = schema

    def bind(self, table: Table, entity: Entity, processed: ProcessedColumns) -> List[Property]:
        bound = []
        for foreign_key in table.foreign_keys:
            prop = self._bind_foreign_key(foreign_key, table, entity, processed)
            if prop is not None:
                bound.append(prop)
        return bound

    def _bind_foreign_key(self, foreign_key: ForeignKey, table: Table, entity: Entity,
                          processed: ProcessedColumns) -> Optional[Property]:
        if not self.schema.has_table(foreign_key.referenced_table):
            logger.warning("Foreign key %s references %s which is not part of the schema, "
                           "binding its columns as plain properties",
                           foreign_key, foreign_key.referenced_table)
            return None

        if self.strategy.exclude_foreign_key_as_many_to_one(foreign_key):
            logger.debug("Foreign key %s excluded as many-to-one", foreign_key)
            return None

        mutable = True
        if processed.contains_all(foreign_key.columns):
            if not self.settings.prefer_basic_composite_ids:
                logger.debug("Foreign key %s is part of the identifier, skipping", foreign_key)
                return None
            mutable = False

        unique = is_unique_reference(foreign_key, table)
        name = make_unique(entity, self.strategy.foreign_key_to_entity_name(foreign_key, unique))
        target = self.entity_name_for(foreign_key.referenced_table)

        prop = Property(
            name=name,
            kind=PropertyKind.MANY_TO_ONE,
            columns=foreign_key.columns,
            type_name=target,
            nullable=all(c.nullable for c in foreign_key.columns),
            mutable=mutable,
            target_entity=target,
            foreign_key=foreign_key,
        )
        entity.add_property(prop)
        processed.mark_unprocessed(foreign_key.columns)
        logger.debug("Many-to-one %s.%s -> %s (mutable=%s)", entity.name, name, target, mutable)
        return prop
