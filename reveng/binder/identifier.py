import logging
from typing import Dict, List

from ..errors import MultipleBindingError
from ..mapping import Entity, Identifier, IdentifierKind, Property
from ..schema.model import Column, Table
from .base import BaseBinder, ProcessedColumns

logger = logging.getLogger(__name__)

DEFAULT_GENERATOR = 'assigned'
COMPOSITE_ID_PROPERTY_NAME = 'id'


class IdentifierBinder(BaseBinder):
    """Binds the primary key of a table to the entity identifier."""

    def bind(self, table: Table, entity: Entity, processed: ProcessedColumns) -> Identifier:
        """Build the identifier and claim every primary key column.

        A table without primary key yields an IdentifierKind.NONE identifier;
        such an entity is never a one-to-many target.
        """
        if table.primary_key is None:
            logger.warning("No primary key found for %s, entity %s has no identifier",
                           table.identifier, entity.name)
            entity.identifier = Identifier()
            return entity.identifier

        if table.primary_key.is_composite():
            identifier = self._bind_composite(table, entity, processed)
        else:
            identifier = self._bind_simple(table, entity, processed)

        entity.identifier = identifier
        return identifier

    def _bind_simple(self, table: Table, entity: Entity, processed: ProcessedColumns) -> Identifier:
        tid = entity.table_identifier
        column = table.primary_key.columns[0]
        name = (self.strategy.table_to_identifier_property_name(tid)
                or self.column_property_name(tid, column))
        prop = self.make_scalar_property(tid, name, column, identifier=True)
        processed.mark(column)

        generator = self.strategy.table_to_identifier_strategy_name(tid) or DEFAULT_GENERATOR
        logger.debug("Simple identifier %s on %s using %s", name, entity.name, column)
        return Identifier(IdentifierKind.SIMPLE, [prop], name=name, generator=generator)

    def _bind_composite(self, table: Table, entity: Entity, processed: ProcessedColumns) -> Identifier:
        tid = entity.table_identifier
        properties: List[Property] = []
        seen: Dict[str, Column] = {}

        for column in table.primary_key.columns:
            name = self.column_property_name(tid, column)
            if name in seen:
                raise MultipleBindingError(entity.name, table.identifier,
                                           [seen[name].name, column.name], name)
            seen[name] = column
            properties.append(self.make_scalar_property(tid, name, column, identifier=True))
            processed.mark(column)

        if self.settings.prefer_basic_composite_ids:
            logger.debug("Basic composite identifier on %s over %s",
                         entity.name, table.primary_key.column_names)
            return Identifier(IdentifierKind.BASIC_COMPOSITE, properties)

        class_name = self.strategy.table_to_composite_id_name(tid)
        name = self.strategy.table_to_identifier_property_name(tid) or COMPOSITE_ID_PROPERTY_NAME
        logger.debug("Embedded identifier %s (%s) on %s", name, class_name, entity.name)
        return Identifier(IdentifierKind.EMBEDDED, properties, name=name, class_name=class_name)
