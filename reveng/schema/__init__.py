from .model import Column, ForeignKey, PrimaryKey, Schema, Table, TableIdentifier
from .loader import schema_from_dict
from .introspector import SchemaIntrospector, find_database_file, introspect_database

__all__ = [
    'Column',
    'ForeignKey',
    'PrimaryKey',
    'Schema',
    'Table',
    'TableIdentifier',
    'schema_from_dict',
    'SchemaIntrospector',
    'find_database_file',
    'introspect_database',
]
