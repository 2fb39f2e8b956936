"""
Exceptions raised while building a schema model or binding it to entities.

Fatal binding errors (duplicate entity names, multiple binding of a column)
abort the whole run. MissingIdentifierError is raised by the incoming
association binder and handled by the entity binder, which only degrades
the affected entity.
"""

from typing import Optional, Sequence


class BindingError(Exception):
    """Base class for all binder errors."""
    pass


class SchemaDefinitionError(BindingError, ValueError):
    """Raised when schema metadata violates a structural invariant."""
    pass


class IntrospectionError(BindingError):
    """Raised when database metadata cannot be read."""
    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class DuplicateEntityNameError(BindingError):
    """Raised when two tables resolve to the same entity name."""
    def __init__(self, entity_name: str, table, existing_table):
        super().__init__(
            f"Duplicate class name '{entity_name}' generated for '{table}'. "
            f"Same name where generated for '{existing_table}'")
        self.entity_name = entity_name
        self.table = table
        self.existing_table = existing_table


class MultipleBindingError(BindingError):
    """Raised when a column would be bound twice, or two columns collide on one property name."""
    def __init__(self, entity_name: str, table, column_names: Sequence[str],
                 property_name: Optional[str] = None):
        columns = ', '.join(f"'{c}'" for c in column_names)
        if property_name is not None:
            message = (f"Columns {columns} of '{table}' both map to property "
                       f"'{property_name}' on entity '{entity_name}'")
        else:
            message = (f"Column {columns} of '{table}' is bound more than once "
                       f"on entity '{entity_name}'")
        super().__init__(message)
        self.entity_name = entity_name
        self.table = table
        self.column_names = tuple(column_names)
        self.property_name = property_name


class MissingIdentifierError(BindingError):
    """Raised when a one-to-many is bound into an entity without identifier."""
    def __init__(self, entity_name: str, table):
        super().__init__(
            f"Entity '{entity_name}' ({table}) has no primary key and cannot "
            f"be the target of a one-to-many association")
        self.entity_name = entity_name
        self.table = table


class BindingStateError(BindingError):
    """Raised when an entity binding step runs out of order."""
    pass
