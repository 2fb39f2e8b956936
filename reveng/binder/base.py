"""
Base class and shared utilities for all binders.

Provides the per-table processed-column working set, the property name
disambiguation rule, and scalar property construction used by the
identifier, version and scalar binders.
"""

import logging
from typing import Dict, Iterable, Optional

from ..config import BinderSettings
from ..errors import MultipleBindingError
from ..mapping import Entity, Property, PropertyKind
from ..schema.model import Column, ForeignKey, Table, TableIdentifier
from ..strategy.base import BindingStrategy

logger = logging.getLogger(__name__)


class ProcessedColumns:
    """Columns already claimed during one table's binding pass.

    A column may be claimed once. Claiming it again means two properties
    would map the same column, which is reported as MultipleBindingError.
    """

    def __init__(self, table: Table, entity_name: str):
        self.table = table
        self.entity_name = entity_name
        self._claimed: Dict[str, Column] = {}

    def __contains__(self, column: Column) -> bool:
        return column.name in self._claimed

    def __len__(self):
        return len(self._claimed)

    def __iter__(self):
        return iter(self._claimed.values())

    def contains_all(self, columns: Iterable[Column]) -> bool:
        return all(c in self for c in columns)

    def contains_any(self, columns: Iterable[Column]) -> bool:
        return any(c in self for c in columns)

    def mark(self, column: Column):
        if column in self:
            raise MultipleBindingError(self.entity_name, self.table.identifier, [column.name])
        self._claimed[column.name] = column

    def mark_unprocessed(self, columns: Iterable[Column]):
        """Claim the given columns, leaving already-claimed ones untouched."""
        for column in columns:
            if column not in self:
                self._claimed[column.name] = column


def make_unique(entity: Entity, property_name: str) -> str:
    """Return property_name, or property_name_1, _2, ... if already used on entity."""
    taken = set(entity.property_names())
    candidate = property_name
    counter = 0
    while candidate in taken:
        counter += 1
        candidate = f'{property_name}_{counter}'
    if candidate != property_name:
        logger.debug("Property %s already exists on %s, using %s",
                     property_name, entity.name, candidate)
    return candidate


def is_unique_reference(foreign_key: ForeignKey, table: Table) -> bool:
    """True when no other foreign key of table references the same table."""
    return not any(
        fk != foreign_key and fk.referenced_table == foreign_key.referenced_table
        for fk in table.foreign_keys
    )


class BaseBinder:
    """Base class for the binders of one run.

    Holds the injected strategy and the run settings; subclasses implement
    `bind` with the signature of their step.
    """

    def __init__(self, strategy: BindingStrategy, settings: Optional[BinderSettings] = None):
        self.strategy = strategy
        self.settings = settings or BinderSettings()

    def normalize(self, table: TableIdentifier) -> TableIdentifier:
        return table.normalized(self.settings.default_catalog, self.settings.default_schema)

    def entity_name_for(self, table: TableIdentifier) -> str:
        """Entity name a table binds to; same rule the entity binder applies."""
        return self.strategy.table_to_class_name(self.normalize(table))

    def column_property_name(self, table: TableIdentifier, column: Column) -> str:
        return self.strategy.column_to_property_name(table, column.name)

    def make_scalar_property(self, table: TableIdentifier, name: str, column: Column,
                             kind: PropertyKind = PropertyKind.SCALAR,
                             identifier: bool = False) -> Property:
        """Build a single-column property typed and annotated by the strategy."""
        return Property(
            name=name,
            kind=kind,
            columns=(column,),
            type_name=self.strategy.column_to_logical_type(table, column, identifier),
            nullable=column.nullable and not identifier,
            identifier=identifier,
            meta_attributes=dict(self.strategy.column_to_meta_attributes(table, column.name) or {}),
        )
