import pytest

from reveng.config import BinderSettings
from reveng.schema.model import Column, ForeignKey, PrimaryKey, Schema, Table, TableIdentifier
from reveng.strategy.default import DefaultBindingStrategy


def build_table(name, columns, primary_key=(), foreign_keys=(), schema=None, catalog=None):
    """Build a Table from compact specs.

    columns: names or Column instances.
    foreign_keys: (local column names, referenced table name, referenced column names)
    tuples, optionally with a fourth element for the constraint name.
    """
    cols = tuple(c if isinstance(c, Column) else Column(c) for c in columns)
    by_name = {c.name: c for c in cols}
    identifier = TableIdentifier(name, schema=schema, catalog=catalog)

    pk = PrimaryKey(tuple(by_name[n] for n in primary_key)) if primary_key else None
    fks = []
    for spec in foreign_keys:
        local, ref_table, ref_columns = spec[:3]
        fks.append(ForeignKey(
            table=identifier,
            referenced_table=TableIdentifier(ref_table, schema=schema, catalog=catalog),
            columns=tuple(by_name[n] for n in local),
            referenced_column_names=tuple(ref_columns),
            name=spec[3] if len(spec) > 3 else None,
        ))
    return Table(name=name, columns=cols, primary_key=pk, foreign_keys=tuple(fks),
                 schema=schema, catalog=catalog)


@pytest.fixture
def make_table():
    """Factory fixture building tables from compact specs"""
    return build_table


@pytest.fixture
def strategy():
    return DefaultBindingStrategy()


@pytest.fixture
def settings():
    return BinderSettings()


@pytest.fixture
def basic_settings():
    """Settings preferring basic composite ids"""
    return BinderSettings(prefer_basic_composite_ids=True)


@pytest.fixture
def person_schema():
    """PERSON(ID pk, NAME)"""
    return Schema((
        build_table('PERSON', [Column('ID', 'INTEGER', nullable=False), Column('NAME', 'VARCHAR', length=100)],
                    primary_key=['ID']),
    ))


@pytest.fixture
def shop_schema():
    """CUSTOMERS(ID pk), ORDERS(ID pk, CUSTOMER_ID fk), PRODUCT(ID pk, NAME),
    ORDER_ITEM(ORDER_ID pk/fk, PRODUCT_ID pk/fk, QUANTITY)"""
    customers = build_table('CUSTOMERS', [Column('ID', 'BIGINT', nullable=False)], primary_key=['ID'])
    orders = build_table(
        'ORDERS',
        [Column('ID', 'BIGINT', nullable=False), Column('CUSTOMER_ID', 'BIGINT')],
        primary_key=['ID'],
        foreign_keys=[(['CUSTOMER_ID'], 'CUSTOMERS', ['ID'], 'FK_ORDERS_CUSTOMER')],
    )
    product = build_table(
        'PRODUCT',
        [Column('ID', 'BIGINT', nullable=False), Column('NAME', 'VARCHAR', length=80)],
        primary_key=['ID'],
    )
    order_item = build_table(
        'ORDER_ITEM',
        [Column('ORDER_ID', 'BIGINT', nullable=False), Column('PRODUCT_ID', 'BIGINT', nullable=False),
         Column('QUANTITY', 'INTEGER')],
        primary_key=['ORDER_ID', 'PRODUCT_ID'],
        foreign_keys=[
            (['ORDER_ID'], 'ORDERS', ['ID'], 'FK_ITEM_ORDER'),
            (['PRODUCT_ID'], 'PRODUCT', ['ID'], 'FK_ITEM_PRODUCT'),
        ],
    )
    return Schema((customers, orders, product, order_item))
