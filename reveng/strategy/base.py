"""
Binding strategy interface.

Binders depend only on BindingStrategy. The abstract methods are the
capabilities every strategy must supply (names, logical types, the version
predicate, metadata); the remaining hooks have neutral defaults so a
strategy only overrides what it customizes.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..schema.model import Column, ForeignKey, TableIdentifier
from .naming import decapitalize, simple_pluralize, to_upper_camel_case, unqualify

MetaAttributes = Dict[str, List[str]]


class BindingStrategy(ABC):
    """Pluggable naming and typing policy used by every binder."""

    @abstractmethod
    def table_to_class_name(self, table: TableIdentifier) -> str:
        """Return the (possibly package-qualified) entity name for a table."""

    @abstractmethod
    def column_to_property_name(self, table: TableIdentifier, column_name: str) -> str:
        """Return the property name for a column."""

    @abstractmethod
    def column_to_logical_type(self, table: TableIdentifier, column: Column,
                               is_identifier: bool = False) -> str:
        """Return the logical type name for a column (e.g. 'long', 'string')."""

    @abstractmethod
    def use_column_for_optimistic_lock(self, table: TableIdentifier, column_name: str) -> bool:
        """Whether the column is a version (optimistic lock) column."""

    @abstractmethod
    def column_to_meta_attributes(self, table: TableIdentifier,
                                  column_name: str) -> Optional[MetaAttributes]:
        """Domain metadata for a column, or None when it holds none."""

    def table_to_meta_attributes(self, table: TableIdentifier) -> Optional[MetaAttributes]:
        return None

    def table_to_optimistic_lock_column_name(self, table: TableIdentifier) -> Optional[str]:
        """Explicitly named version column; None falls back to scanning columns."""
        return None

    def table_to_identifier_property_name(self, table: TableIdentifier) -> Optional[str]:
        return None

    def table_to_identifier_strategy_name(self, table: TableIdentifier) -> Optional[str]:
        return None

    def table_to_composite_id_name(self, table: TableIdentifier) -> str:
        return self.table_to_class_name(table) + 'Id'

    def foreign_key_to_entity_name(self, foreign_key: ForeignKey, unique_reference: bool) -> str:
        """Name of the many-to-one property on the owning side."""
        name = to_upper_camel_case(unqualify(self.table_to_class_name(foreign_key.referenced_table)))
        if not unique_reference:
            name += 'By' + _key_suffix(foreign_key)
        return decapitalize(name)

    def foreign_key_to_collection_name(self, foreign_key: ForeignKey, unique_reference: bool) -> str:
        """Name of the one-to-many collection property on the referenced side."""
        name = unqualify(self.table_to_class_name(foreign_key.table))
        name = simple_pluralize(decapitalize(name))
        if not unique_reference:
            name += 'By' + _key_suffix(foreign_key)
        return name

    def exclude_foreign_key_as_many_to_one(self, foreign_key: ForeignKey) -> bool:
        return False

    def exclude_foreign_key_as_collection(self, foreign_key: ForeignKey) -> bool:
        return False

    def is_foreign_key_collection_inverse(self, foreign_key: ForeignKey) -> bool:
        return True

    def is_foreign_key_collection_lazy(self, foreign_key: ForeignKey) -> bool:
        return True


def _key_suffix(foreign_key: ForeignKey) -> str:
    if len(foreign_key.columns) == 1:
        return to_upper_camel_case(foreign_key.columns[0].name)
    return to_upper_camel_case(foreign_key.name or '_'.join(foreign_key.column_names))


class DelegatingBindingStrategy(BindingStrategy):
    """Forwards every call to another strategy.

    Subclass and override single methods to customize an existing strategy.
    """

    def __init__(self, delegate: BindingStrategy):
        self.delegate = delegate

    def table_to_class_name(self, table):
        return self.delegate.table_to_class_name(table)

    def column_to_property_name(self, table, column_name):
        return self.delegate.column_to_property_name(table, column_name)

    def column_to_logical_type(self, table, column, is_identifier=False):
        return self.delegate.column_to_logical_type(table, column, is_identifier)

    def use_column_for_optimistic_lock(self, table, column_name):
        return self.delegate.use_column_for_optimistic_lock(table, column_name)

    def column_to_meta_attributes(self, table, column_name):
        return self.delegate.column_to_meta_attributes(table, column_name)

    def table_to_meta_attributes(self, table):
        return self.delegate.table_to_meta_attributes(table)

    def table_to_optimistic_lock_column_name(self, table):
        return self.delegate.table_to_optimistic_lock_column_name(table)

    def table_to_identifier_property_name(self, table):
        return self.delegate.table_to_identifier_property_name(table)

    def table_to_identifier_strategy_name(self, table):
        return self.delegate.table_to_identifier_strategy_name(table)

    def table_to_composite_id_name(self, table):
        return self.delegate.table_to_composite_id_name(table)

    def foreign_key_to_entity_name(self, foreign_key, unique_reference):
        return self.delegate.foreign_key_to_entity_name(foreign_key, unique_reference)

    def foreign_key_to_collection_name(self, foreign_key, unique_reference):
        return self.delegate.foreign_key_to_collection_name(foreign_key, unique_reference)

    def exclude_foreign_key_as_many_to_one(self, foreign_key):
        return self.delegate.exclude_foreign_key_as_many_to_one(foreign_key)

    def exclude_foreign_key_as_collection(self, foreign_key):
        return self.delegate.exclude_foreign_key_as_collection(foreign_key)

    def is_foreign_key_collection_inverse(self, foreign_key):
        return self.delegate.is_foreign_key_collection_inverse(foreign_key)

    def is_foreign_key_collection_lazy(self, foreign_key):
        return self.delegate.is_foreign_key_collection_lazy(foreign_key)
