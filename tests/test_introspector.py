import os

import pytest
from sqlalchemy import create_engine, text

from reveng import bind_schema
from reveng.errors import IntrospectionError
from reveng.schema.introspector import SchemaIntrospector, find_database_file, introspect_database
from reveng.schema.model import TableIdentifier

SHOP_DDL = [
    """CREATE TABLE customers (
        id INTEGER NOT NULL PRIMARY KEY,
        name VARCHAR(100)
    )""",
    """CREATE TABLE orders (
        id INTEGER NOT NULL PRIMARY KEY,
        customer_id INTEGER REFERENCES customers(id),
        total NUMERIC(10, 2),
        version INTEGER
    )""",
]


def _create_database(path):
    engine = create_engine(f'sqlite:///{path}')
    try:
        with engine.begin() as conn:
            for statement in SHOP_DDL:
                conn.execute(text(statement))
    finally:
        engine.dispose()
    return path


@pytest.fixture
def shop_db(tmp_path):
    """SQLite file holding customers and orders"""
    return _create_database(str(tmp_path / 'shop.db'))


def test_introspect_tables_and_keys(shop_db):
    """Test reading columns, primary and foreign keys through the inspector"""
    engine = create_engine(f'sqlite:///{shop_db}')
    try:
        schema = SchemaIntrospector(engine).introspect()
    finally:
        engine.dispose()

    assert [t.name for t in schema] == ['customers', 'orders']

    customers = schema.get_table(TableIdentifier('customers'))
    assert customers.primary_key.column_names == ('id',)
    assert customers.get_column('name').sql_type == 'VARCHAR'
    assert customers.get_column('name').length == 100

    orders = schema.get_table(TableIdentifier('orders'))
    assert orders.get_column('total').precision == 10
    assert orders.get_column('total').scale == 2
    fk = orders.foreign_keys[0]
    assert fk.column_names == ('customer_id',)
    assert fk.referenced_table == TableIdentifier('customers')
    assert fk.referenced_column_names == ('id',)


def test_introspect_table_subset(shop_db):
    engine = create_engine(f'sqlite:///{shop_db}')
    try:
        schema = SchemaIntrospector(engine).introspect(table_names=['customers'])
    finally:
        engine.dispose()

    assert [t.name for t in schema] == ['customers']


def test_introspect_missing_table_raises(shop_db):
    engine = create_engine(f'sqlite:///{shop_db}')
    try:
        with pytest.raises(IntrospectionError) as exc:
            SchemaIntrospector(engine).introspect(table_names=['missing'])
    finally:
        engine.dispose()

    assert exc.value.url.startswith('sqlite:///')


def test_find_database_file_skips_vendor_dirs(tmp_path):
    vendored = tmp_path / 'node_modules'
    vendored.mkdir()
    (vendored / 'cache.db').write_bytes(b'')
    nested = tmp_path / 'data'
    nested.mkdir()
    (nested / 'app.sqlite3').write_bytes(b'')

    assert find_database_file(str(tmp_path)) == os.path.join(str(nested), 'app.sqlite3')


def test_find_database_file_none(tmp_path):
    assert find_database_file(str(tmp_path)) is None


def test_introspect_database_from_directory(tmp_path, shop_db):
    """Test binding a database found in a project directory"""
    schema = introspect_database(str(tmp_path))
    registry = bind_schema(schema)

    orders = registry.get('Orders')
    assert orders.get_property('customer').target_entity == 'Customers'
    assert orders.version.name == 'version'
    assert orders.get_property('total').type_name == 'big_decimal'
    assert registry.get('Customers').get_property('orderses').inverse_name == 'customer'


def test_introspect_database_from_url(shop_db):
    schema = introspect_database(f'sqlite:///{shop_db}')
    assert len(schema) == 2


def test_introspect_database_without_file(tmp_path):
    with pytest.raises(IntrospectionError):
        introspect_database(str(tmp_path))
