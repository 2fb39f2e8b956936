"""
Default binding strategy: conventional reverse-engineering names and types.
"""

from typing import Optional

from ..schema.model import Column, ForeignKey, TableIdentifier
from .base import BindingStrategy, MetaAttributes
from .naming import qualify, split_words, to_lower_camel_case, to_upper_camel_case

# ---------------------------------------------------------------------------
# SQL type to logical type mapping
# ---------------------------------------------------------------------------

_SQL_TO_LOGICAL = {
    'BIGINT': 'long',
    'INTEGER': 'integer',
    'INT': 'integer',
    'MEDIUMINT': 'integer',
    'SMALLINT': 'short',
    'TINYINT': 'byte',
    'BIT': 'boolean',
    'BOOLEAN': 'boolean',
    'BOOL': 'boolean',
    'REAL': 'float',
    'FLOAT': 'double',
    'DOUBLE': 'double',
    'DOUBLE_PRECISION': 'double',
    'DECIMAL': 'big_decimal',
    'NUMERIC': 'big_decimal',
    'NUMBER': 'big_decimal',
    'CHAR': 'string',
    'NCHAR': 'string',
    'VARCHAR': 'string',
    'NVARCHAR': 'string',
    'VARCHAR2': 'string',
    'TEXT': 'text',
    'CLOB': 'clob',
    'NCLOB': 'clob',
    'DATE': 'date',
    'TIME': 'time',
    'DATETIME': 'timestamp',
    'TIMESTAMP': 'timestamp',
    'BLOB': 'blob',
    'BINARY': 'binary',
    'VARBINARY': 'binary',
    'UUID': 'uuid',
}

_FALLBACK_TYPE = 'serializable'

_VERSION_COLUMN_NAMES = {'version', 'timestamp'}


def _base_sql_type(sql_type: str) -> str:
    """'VARCHAR(20)' -> 'VARCHAR', 'double precision' -> 'DOUBLE_PRECISION'."""
    base = (sql_type or '').split('(', 1)[0].strip().upper()
    return base.replace(' ', '_')


class DefaultBindingStrategy(BindingStrategy):
    """Upper camel case entities, lower camel case properties, JDBC-style types.

    Args:
        package_name: Optional package prefixed to every entity name.
    """

    def __init__(self, package_name: str = ''):
        self.package_name = package_name

    def table_to_class_name(self, table: TableIdentifier) -> str:
        return qualify(self.package_name, to_upper_camel_case(table.name))

    def column_to_property_name(self, table: TableIdentifier, column_name: str) -> str:
        return to_lower_camel_case(column_name)

    def column_to_logical_type(self, table: TableIdentifier, column: Column,
                               is_identifier: bool = False) -> str:
        base = _base_sql_type(column.sql_type)
        if base in ('NUMERIC', 'DECIMAL', 'NUMBER') and column.scale == 0 and column.precision:
            if column.precision < 10:
                return 'integer'
            if column.precision < 19:
                return 'long'
            return 'big_integer'
        if base == 'CHAR' and column.length == 1:
            return 'character'
        return _SQL_TO_LOGICAL.get(base, _FALLBACK_TYPE)

    def use_column_for_optimistic_lock(self, table: TableIdentifier, column_name: str) -> bool:
        return column_name.lower() in _VERSION_COLUMN_NAMES

    def column_to_meta_attributes(self, table: TableIdentifier,
                                  column_name: str) -> Optional[MetaAttributes]:
        return None

    def foreign_key_to_entity_name(self, foreign_key: ForeignKey, unique_reference: bool) -> str:
        """Single '<name>_id' columns name the association after <name>.

        Everything else, and any key sharing its referenced table with another
        key of the same table, uses the referenced entity name with the
        By<Column> suffix rule.
        """
        if unique_reference and len(foreign_key.columns) == 1:
            words = split_words(foreign_key.columns[0].name)
            if len(words) > 1 and words[-1].lower() == 'id':
                return to_lower_camel_case('_'.join(words[:-1]))
        return super().foreign_key_to_entity_name(foreign_key, unique_reference)
