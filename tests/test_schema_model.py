"""
Tests for the immutable schema model and its structural invariants.
"""
import pytest

from reveng.errors import SchemaDefinitionError
from reveng.schema.model import Column, ForeignKey, PrimaryKey, Schema, Table, TableIdentifier


class TestTableIdentifier:

    def test_str_joins_present_parts(self):
        assert str(TableIdentifier('ORDERS')) == 'ORDERS'
        assert str(TableIdentifier('ORDERS', schema='SHOP', catalog='DB')) == 'DB.SHOP.ORDERS'

    def test_normalized_strips_defaults_only(self):
        tid = TableIdentifier('ORDERS', schema='SHOP', catalog='DB')
        assert tid.normalized('DB', 'SHOP') == TableIdentifier('ORDERS')
        assert tid.normalized('OTHER', 'SHOP') == TableIdentifier('ORDERS', catalog='DB')
        assert tid.normalized(None, None) == tid


class TestTableInvariants:

    def test_duplicate_column_rejected(self):
        with pytest.raises(SchemaDefinitionError):
            Table('T', columns=(Column('A'), Column('A')))

    def test_primary_key_must_use_table_columns(self):
        with pytest.raises(SchemaDefinitionError):
            Table('T', columns=(Column('A'),), primary_key=PrimaryKey((Column('B'),)))

    def test_empty_primary_key_rejected(self):
        with pytest.raises(SchemaDefinitionError):
            PrimaryKey(())

    def test_foreign_key_needs_columns(self):
        with pytest.raises(SchemaDefinitionError):
            ForeignKey(TableIdentifier('A'), TableIdentifier('B'), columns=())

    def test_foreign_key_pair_count_must_match(self):
        with pytest.raises(SchemaDefinitionError):
            ForeignKey(TableIdentifier('A'), TableIdentifier('B'),
                       columns=(Column('X'), Column('Y')), referenced_column_names=('ID',))

    def test_foreign_key_must_be_owned_by_table(self):
        column = Column('B_ID')
        fk = ForeignKey(TableIdentifier('OTHER'), TableIdentifier('B'), columns=(column,))
        with pytest.raises(SchemaDefinitionError):
            Table('A', columns=(column,), foreign_keys=(fk,))

    def test_foreign_key_columns_must_belong_to_table(self):
        fk = ForeignKey(TableIdentifier('A'), TableIdentifier('B'), columns=(Column('B_ID'),))
        with pytest.raises(SchemaDefinitionError):
            Table('A', columns=(Column('ID'),), foreign_keys=(fk,))

    def test_lookup_helpers(self, make_table):
        table = make_table('T', ['ID', 'NAME'], primary_key=['ID'])
        assert table.get_column('NAME') == Column('NAME')
        assert table.get_column('MISSING') is None
        assert table.is_primary_key_column(Column('ID'))
        assert not table.is_primary_key_column(Column('NAME'))


class TestSchema:

    def test_duplicate_table_rejected(self, make_table):
        with pytest.raises(SchemaDefinitionError):
            Schema((make_table('T', ['ID']), make_table('T', ['ID'])))

    def test_same_name_in_other_schema_allowed(self, make_table):
        schema = Schema((make_table('T', ['ID'], schema='A'), make_table('T', ['ID'], schema='B')))
        assert len(schema) == 2

    def test_unknown_referenced_column_rejected(self, make_table):
        parent = make_table('P', ['ID'], primary_key=['ID'])
        child = make_table('C', ['ID', 'P_ID'], foreign_keys=[(['P_ID'], 'P', ['NOPE'])])
        with pytest.raises(SchemaDefinitionError):
            Schema((parent, child))

    def test_column_pairs_default_to_referenced_primary_key(self, make_table):
        parent = make_table('P', ['ID'], primary_key=['ID'])
        child = make_table('C', ['ID', 'P_ID'], foreign_keys=[(['P_ID'], 'P', [])])
        fk = child.foreign_keys[0]
        assert fk.column_pairs(parent) == (('P_ID', 'ID'),)
        assert fk.column_pairs() == (('P_ID', None),)

    def test_table_order_preserved(self, shop_schema):
        assert [t.name for t in shop_schema] == ['CUSTOMERS', 'ORDERS', 'PRODUCT', 'ORDER_ITEM']
        assert len(list(shop_schema.foreign_keys())) == 3
