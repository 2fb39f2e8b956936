"""
reveng - binds introspected relational schemas to a logical entity model.

Typical use::

    from reveng import bind_schema, introspect_database

    registry = bind_schema(introspect_database('sqlite:///shop.db'))
    for entity in registry:
        ...
"""

from .binder import SchemaBinder, bind_schema
from .config import BinderSettings, Config
from .errors import (
    BindingError,
    BindingStateError,
    DuplicateEntityNameError,
    IntrospectionError,
    MissingIdentifierError,
    MultipleBindingError,
    SchemaDefinitionError,
)
from .mapping import Entity, Identifier, IdentifierKind, Property, PropertyKind
from .registry import EntityRegistry, Registration
from .schema import (
    Column,
    ForeignKey,
    PrimaryKey,
    Schema,
    SchemaIntrospector,
    Table,
    TableIdentifier,
    introspect_database,
    schema_from_dict,
)
from .strategy import BindingStrategy, DefaultBindingStrategy, DelegatingBindingStrategy

__all__ = [
    'SchemaBinder', 'bind_schema',
    'BinderSettings', 'Config',
    'BindingError', 'BindingStateError', 'DuplicateEntityNameError',
    'IntrospectionError', 'MissingIdentifierError', 'MultipleBindingError',
    'SchemaDefinitionError',
    'Entity', 'Identifier', 'IdentifierKind', 'Property', 'PropertyKind',
    'EntityRegistry', 'Registration',
    'Column', 'ForeignKey', 'PrimaryKey', 'Schema', 'SchemaIntrospector',
    'Table', 'TableIdentifier', 'introspect_database', 'schema_from_dict',
    'BindingStrategy', 'DefaultBindingStrategy', 'DelegatingBindingStrategy',
]
