import logging
from typing import Optional

from ..mapping import Entity, Property, PropertyKind
from ..schema.model import Column, Table
from .base import BaseBinder, ProcessedColumns, make_unique

logger = logging.getLogger(__name__)

# Logical types usable for optimistic locking: counters and timestamps
VERSION_CAPABLE_TYPES = {
    'byte', 'short', 'integer', 'long', 'big_integer', 'big_decimal', 'timestamp',
}


class VersionPropertyBinder(BaseBinder):
    """Binds at most one optimistic-lock column as the version property.

    The first flagged, unclaimed, version-capable column in table order wins;
    other flagged columns stay ordinary scalars.
    """

    def bind(self, table: Table, entity: Entity, processed: ProcessedColumns) -> Optional[Property]:
        tid = entity.table_identifier

        explicit = self.strategy.table_to_optimistic_lock_column_name(tid)
        if explicit:
            column = table.get_column(explicit)
            if column is None:
                logger.warning("Column %s wanted for version not found in %s", explicit, tid)
                return None
            if column in processed:
                logger.warning("Column %s wanted for version in %s is already bound", explicit, tid)
                return None
            return self._bind_version(tid, column, entity, processed)

        logger.debug("Scanning %s for version columns", tid)
        for column in table.columns:
            if column in processed:
                continue
            if not self.strategy.use_column_for_optimistic_lock(tid, column.name):
                continue
            type_name = self.strategy.column_to_logical_type(tid, column)
            if type_name not in VERSION_CAPABLE_TYPES:
                logger.warning("Column %s in %s has type %s which cannot be used as version",
                               column.name, tid, type_name)
                continue
            return self._bind_version(tid, column, entity, processed)

        logger.debug("No version column found in %s", tid)
        return None

    def _bind_version(self, tid, column: Column, entity: Entity,
                      processed: ProcessedColumns) -> Property:
        name = make_unique(entity, self.column_property_name(tid, column))
        prop = self.make_scalar_property(tid, name, column, kind=PropertyKind.VERSION)
        entity.add_property(prop)
        entity.version = prop
        processed.mark(column)
        return prop
