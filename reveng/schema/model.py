"""
Immutable representation of introspected database metadata.

A Schema is produced once by an introspector (or loaded from a parser
result) and is read-only input to the binder. Structural invariants are
checked at construction time and reported as SchemaDefinitionError.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple

from ..errors import SchemaDefinitionError


@dataclass(frozen=True)
class TableIdentifier:
    """Identity of a table: (catalog, schema, name)."""

    name: str
    schema: Optional[str] = None
    catalog: Optional[str] = None

    def __str__(self):
        return '.'.join(p for p in (self.catalog, self.schema, self.name) if p)

    def normalized(self, default_catalog: Optional[str],
                   default_schema: Optional[str]) -> 'TableIdentifier':
        """Drop catalog/schema when they equal the run's defaults."""
        catalog = None if self.catalog is not None and self.catalog == default_catalog else self.catalog
        schema = None if self.schema is not None and self.schema == default_schema else self.schema
        return TableIdentifier(self.name, schema=schema, catalog=catalog)


@dataclass(frozen=True)
class Column:
    name: str
    sql_type: str = 'VARCHAR'
    nullable: bool = True
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class PrimaryKey:
    columns: Tuple[Column, ...]
    name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'columns', tuple(self.columns))
        if not self.columns:
            raise SchemaDefinitionError('A primary key needs at least one column')

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    def is_composite(self) -> bool:
        return len(self.columns) > 1


@dataclass(frozen=True)
class ForeignKey:
    """A foreign key owned by `table` referencing `referenced_table`.

    `referenced_column_names` may be empty, meaning the referenced table's
    primary key in order; otherwise it pairs one-to-one with `columns`.
    """

    table: TableIdentifier
    referenced_table: TableIdentifier
    columns: Tuple[Column, ...]
    referenced_column_names: Tuple[str, ...] = ()
    name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'columns', tuple(self.columns))
        object.__setattr__(self, 'referenced_column_names', tuple(self.referenced_column_names))
        if not self.columns:
            raise SchemaDefinitionError(
                f"Foreign key {self.name or ''} on '{self.table}' has no columns")
        if self.referenced_column_names and len(self.referenced_column_names) != len(self.columns):
            raise SchemaDefinitionError(
                f"Foreign key {self.name or ''} on '{self.table}' pairs "
                f"{len(self.columns)} columns with {len(self.referenced_column_names)} "
                f"referenced columns")

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    def column_pairs(self, referenced: Optional['Table'] = None) -> Tuple[Tuple[str, Optional[str]], ...]:
        """Return (local, referenced) column name pairs.

        When referenced columns were not recorded, they are taken from the
        referenced table's primary key if `referenced` is given.
        """
        ref_names = self.referenced_column_names
        if not ref_names and referenced is not None and referenced.primary_key is not None:
            ref_names = referenced.primary_key.column_names
        if len(ref_names) != len(self.columns):
            ref_names = (None,) * len(self.columns)
        return tuple(zip(self.column_names, ref_names))

    def __str__(self):
        label = self.name or '_'.join(self.column_names)
        return f'{self.table}.{label} -> {self.referenced_table}'


@dataclass(frozen=True)
class Table:
    name: str
    columns: Tuple[Column, ...] = ()
    primary_key: Optional[PrimaryKey] = None
    foreign_keys: Tuple[ForeignKey, ...] = ()
    schema: Optional[str] = None
    catalog: Optional[str] = None
    comment: Optional[str] = None
    _columns_by_name: Dict[str, Column] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'columns', tuple(self.columns))
        object.__setattr__(self, 'foreign_keys', tuple(self.foreign_keys))

        by_name: Dict[str, Column] = {}
        for column in self.columns:
            if column.name in by_name:
                raise SchemaDefinitionError(
                    f"Column '{column.name}' defined twice in '{self.identifier}'")
            by_name[column.name] = column
        object.__setattr__(self, '_columns_by_name', by_name)

        if self.primary_key is not None:
            for column in self.primary_key.columns:
                if by_name.get(column.name) != column:
                    raise SchemaDefinitionError(
                        f"Primary key column '{column.name}' does not belong to '{self.identifier}'")

        for fk in self.foreign_keys:
            if fk.table != self.identifier:
                raise SchemaDefinitionError(
                    f"Foreign key {fk} is owned by '{fk.table}', not '{self.identifier}'")
            for column in fk.columns:
                if by_name.get(column.name) != column:
                    raise SchemaDefinitionError(
                        f"Foreign key column '{column.name}' does not belong to '{self.identifier}'")

    @property
    def identifier(self) -> TableIdentifier:
        return TableIdentifier(self.name, schema=self.schema, catalog=self.catalog)

    def get_column(self, name: str) -> Optional[Column]:
        return self._columns_by_name.get(name)

    def has_primary_key(self) -> bool:
        return self.primary_key is not None

    def is_primary_key_column(self, column: Column) -> bool:
        return self.primary_key is not None and column.name in self.primary_key.column_names

    def __str__(self):
        return str(self.identifier)


@dataclass(frozen=True)
class Schema:
    """Ordered collection of tables. Table order drives binding order."""

    tables: Tuple[Table, ...] = ()
    _tables_by_id: Dict[TableIdentifier, Table] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'tables', tuple(self.tables))
        by_id: Dict[TableIdentifier, Table] = {}
        for table in self.tables:
            if table.identifier in by_id:
                raise SchemaDefinitionError(f"Table '{table.identifier}' defined twice")
            by_id[table.identifier] = table
        object.__setattr__(self, '_tables_by_id', by_id)

        for table in self.tables:
            for fk in table.foreign_keys:
                referenced = by_id.get(fk.referenced_table)
                if referenced is None:
                    continue
                for ref_name in fk.referenced_column_names:
                    if referenced.get_column(ref_name) is None:
                        raise SchemaDefinitionError(
                            f"Foreign key {fk} references unknown column '{ref_name}'")

    def __iter__(self) -> Iterator[Table]:
        return iter(self.tables)

    def __len__(self):
        return len(self.tables)

    def get_table(self, identifier: TableIdentifier) -> Optional[Table]:
        return self._tables_by_id.get(identifier)

    def has_table(self, identifier: TableIdentifier) -> bool:
        return identifier in self._tables_by_id

    def foreign_keys(self) -> Iterator[ForeignKey]:
        for table in self.tables:
            yield from table.foreign_keys
