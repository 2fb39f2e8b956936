"""
Build a Schema from the standardized schema dict emitted by source-code
schema parsers.

Accepted shape::

    {
        'tables': [
            {'name': 'orders', 'schema': None,
             'columns': [{'name': 'id', 'type': 'INTEGER', 'nullable': False,
                          'primary_key': True}, ...],
             'foreign_keys': [{'column': 'customer_id',
                               'references_table': 'customers',
                               'references_column': 'id'}]},
        ],
        'relationships': [...],   # optional, used when tables carry no foreign_keys
    }

Foreign key rows that share a constraint `name` are grouped into a single
multi-column foreign key; unnamed rows each become their own key.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..errors import SchemaDefinitionError
from .model import Column, ForeignKey, PrimaryKey, Schema, Table, TableIdentifier

logger = logging.getLogger(__name__)


def schema_from_dict(result: Dict) -> Schema:
    """Convert a parser result dict into an immutable Schema."""
    raw_tables = result.get('tables', [])
    fk_rows_by_table = _foreign_key_rows(raw_tables, result.get('relationships') or [])

    tables = []
    for raw in raw_tables:
        identifier = TableIdentifier(raw['name'], schema=raw.get('schema'),
                                     catalog=raw.get('catalog'))
        columns = [_make_column(c) for c in raw.get('columns', [])]
        by_name = {c.name: c for c in columns}

        primary_key = _make_primary_key(raw, by_name)

        foreign_keys = []
        for name, rows in _group_rows(fk_rows_by_table.get(raw['name'], [])):
            fk_columns = []
            for row in rows:
                column = by_name.get(row['column'])
                if column is None:
                    logger.warning("Skipping foreign key %s on %s: unknown column %s",
                                   name or '', identifier, row['column'])
                    break
                fk_columns.append(column)
            else:
                referenced = TableIdentifier(
                    rows[0]['references_table'],
                    schema=rows[0].get('references_schema', identifier.schema),
                    catalog=rows[0].get('references_catalog', identifier.catalog),
                )
                ref_names = tuple(r.get('references_column') or '' for r in rows)
                foreign_keys.append(ForeignKey(
                    table=identifier,
                    referenced_table=referenced,
                    columns=tuple(fk_columns),
                    referenced_column_names=ref_names if all(ref_names) else (),
                    name=name,
                ))

        tables.append(Table(
            name=identifier.name,
            schema=identifier.schema,
            catalog=identifier.catalog,
            columns=tuple(columns),
            primary_key=primary_key,
            foreign_keys=tuple(foreign_keys),
            comment=raw.get('description'),
        ))

    return Schema(tuple(tables))


def _make_column(raw: Dict) -> Column:
    return Column(
        name=raw['name'],
        sql_type=(raw.get('type') or 'VARCHAR').upper(),
        nullable=raw.get('nullable', True),
        length=raw.get('length'),
        precision=raw.get('precision'),
        scale=raw.get('scale'),
    )


def _make_primary_key(raw: Dict, by_name: Dict[str, Column]) -> Optional[PrimaryKey]:
    """Explicit 'primary_key' list wins over per-column primary_key flags."""
    explicit = raw.get('primary_key')
    if isinstance(explicit, (list, tuple)) and explicit:
        names = list(explicit)
    else:
        names = [c['name'] for c in raw.get('columns', []) if c.get('primary_key')]
    if not names:
        return None
    missing = [n for n in names if n not in by_name]
    if missing:
        raise SchemaDefinitionError(
            f"Primary key of {raw['name']} names unknown columns: {', '.join(missing)}")
    return PrimaryKey(tuple(by_name[n] for n in names))


def _foreign_key_rows(raw_tables: List[Dict], relationships: List[Dict]) -> Dict[str, List[Dict]]:
    """Collect per-table foreign key rows.

    Falls back to the canonical relationship list (from_table/to_table/
    from_column/to_column) when no table declares foreign keys.
    """
    rows: Dict[str, List[Dict]] = {}
    for raw in raw_tables:
        for fk in raw.get('foreign_keys', []):
            rows.setdefault(raw['name'], []).append(fk)
    if rows:
        return rows

    for rel in relationships:
        if rel.get('type', 'many-to-one') != 'many-to-one':
            continue
        from_table = rel.get('from_table') or rel.get('from', '')
        if not from_table or not rel.get('from_column'):
            continue
        rows.setdefault(from_table, []).append({
            'column': rel['from_column'],
            'references_table': rel.get('to_table') or rel.get('to', ''),
            'references_column': rel.get('to_column', ''),
        })
    return rows


def _group_rows(rows: List[Dict]) -> List[Tuple[Optional[str], List[Dict]]]:
    """Group rows by constraint name, preserving first-seen order."""
    groups: List[Tuple[Optional[str], List[Dict]]] = []
    named: Dict[str, List[Dict]] = {}
    for row in rows:
        name = row.get('name')
        if not name:
            groups.append((None, [row]))
        elif name in named:
            named[name].append(row)
        else:
            named[name] = [row]
            groups.append((name, named[name]))
    return groups
