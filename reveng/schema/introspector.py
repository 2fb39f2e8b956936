import logging
import os
from typing import Iterable, Optional

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..errors import IntrospectionError
from .model import Column, ForeignKey, PrimaryKey, Schema, Table, TableIdentifier

logger = logging.getLogger(__name__)


SKIP_DIRS = {
    '__pycache__', '.git', '.venv', 'venv', 'env', 'node_modules',
    '.pytest_cache', '.tox', 'dist', 'build', '.eggs', 'vendor',
    'bin', 'obj', 'target', 'out', '.idea', '.vscode',
}

DATABASE_FILE_EXTENSIONS = ('.db', '.sqlite', '.sqlite3')


class SchemaIntrospector:
    """Reads tables, columns and keys from a live database through SQLAlchemy.

    The resulting Schema lists tables in the order the dialect reports them.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def introspect(self, schema: Optional[str] = None,
                   table_names: Optional[Iterable[str]] = None) -> Schema:
        """Read the given schema (or the default one) into a Schema model.

        Args:
            schema: Database schema to read. None uses the connection default.
            table_names: Optional subset of tables to read, in this order.

        Returns:
            Immutable Schema.

        Raises:
            IntrospectionError: if the database metadata cannot be read.
        """
        try:
            inspector = inspect(self.engine)
            names = list(table_names) if table_names is not None else inspector.get_table_names(schema=schema)
            tables = [self._read_table(inspector, name, schema) for name in names]
        except SQLAlchemyError as e:
            raise IntrospectionError(
                f'Failed to read database metadata: {e}',
                url=self.engine.url.render_as_string(hide_password=True)) from e

        logger.info("Introspected %d tables from %s", len(tables),
                    self.engine.url.render_as_string(hide_password=True))
        return Schema(tuple(tables))

    def _read_table(self, inspector, table_name: str, schema: Optional[str]) -> Table:
        identifier = TableIdentifier(table_name, schema=schema)

        columns = [self._make_column(info) for info in inspector.get_columns(table_name, schema=schema)]
        by_name = {c.name: c for c in columns}

        primary_key = None
        pk_info = inspector.get_pk_constraint(table_name, schema=schema) or {}
        pk_names = [n for n in pk_info.get('constrained_columns') or [] if n in by_name]
        if pk_names:
            primary_key = PrimaryKey(tuple(by_name[n] for n in pk_names), name=pk_info.get('name'))

        foreign_keys = []
        for fk_info in inspector.get_foreign_keys(table_name, schema=schema):
            local = fk_info.get('constrained_columns') or []
            if not local or any(n not in by_name for n in local):
                logger.warning("Skipping unreadable foreign key %s on %s",
                               fk_info.get('name'), identifier)
                continue
            referred = [n for n in fk_info.get('referred_columns') or [] if n]
            foreign_keys.append(ForeignKey(
                table=identifier,
                referenced_table=TableIdentifier(
                    fk_info['referred_table'],
                    schema=fk_info.get('referred_schema') or schema),
                columns=tuple(by_name[n] for n in local),
                referenced_column_names=tuple(referred) if len(referred) == len(local) else (),
                name=fk_info.get('name'),
            ))

        comment = None
        try:
            comment = (inspector.get_table_comment(table_name, schema=schema) or {}).get('text')
        except NotImplementedError:
            pass

        return Table(
            name=table_name,
            schema=schema,
            columns=tuple(columns),
            primary_key=primary_key,
            foreign_keys=tuple(foreign_keys),
            comment=comment,
        )

    @staticmethod
    def _make_column(info) -> Column:
        col_type = info['type']
        return Column(
            name=info['name'],
            sql_type=str(getattr(col_type, '__visit_name__', 'varchar')).upper(),
            nullable=bool(info.get('nullable', True)),
            length=getattr(col_type, 'length', None),
            precision=getattr(col_type, 'precision', None),
            scale=getattr(col_type, 'scale', None),
        )


def find_database_file(path: str) -> Optional[str]:
    """Find the first SQLite database file, skipping vendor directories."""
    for root, dirs, files in os.walk(path):
        dirs[:] = sorted(d for d in dirs if d not in SKIP_DIRS)
        for fname in sorted(files):
            if fname.endswith(DATABASE_FILE_EXTENSIONS):
                return os.path.join(root, fname)
    return None


def introspect_database(target: str, schema: Optional[str] = None) -> Schema:
    """Introspect a database URL, a SQLite file, or a directory holding one."""
    if '://' in target:
        url = target
    else:
        db_file = find_database_file(target) if os.path.isdir(target) else target
        if not db_file or not os.path.isfile(db_file):
            raise IntrospectionError(f'No database file found in {target}')
        url = f'sqlite:///{db_file}'

    engine = create_engine(url)
    try:
        return SchemaIntrospector(engine).introspect(schema=schema)
    finally:
        engine.dispose()
