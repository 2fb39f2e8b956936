import pytest

from reveng.errors import SchemaDefinitionError
from reveng.schema.loader import schema_from_dict
from reveng.schema.model import TableIdentifier


def _blog_result():
    return {
        'tables': [
            {
                'name': 'users',
                'columns': [
                    {'name': 'id', 'type': 'Integer', 'primary_key': True, 'nullable': False},
                    {'name': 'username', 'type': 'varchar', 'length': 80},
                ],
                'foreign_keys': [],
            },
            {
                'name': 'posts',
                'description': 'Blog posts',
                'columns': [
                    {'name': 'id', 'type': 'Integer', 'primary_key': True, 'nullable': False},
                    {'name': 'author_id', 'type': 'Integer'},
                ],
                'foreign_keys': [
                    {'column': 'author_id', 'references_table': 'users', 'references_column': 'id'},
                ],
            },
        ],
    }


def test_tables_columns_and_keys():
    """Test reading tables, columns and foreign keys from a parser result"""
    schema = schema_from_dict(_blog_result())

    assert [t.name for t in schema] == ['users', 'posts']

    users = schema.get_table(TableIdentifier('users'))
    assert users.primary_key.column_names == ('id',)
    assert users.get_column('id').sql_type == 'INTEGER'
    assert users.get_column('id').nullable is False
    assert users.get_column('username').length == 80

    posts = schema.get_table(TableIdentifier('posts'))
    assert posts.comment == 'Blog posts'
    assert len(posts.foreign_keys) == 1
    fk = posts.foreign_keys[0]
    assert fk.column_names == ('author_id',)
    assert fk.referenced_table == TableIdentifier('users')
    assert fk.referenced_column_names == ('id',)


def test_rows_sharing_constraint_name_form_one_key():
    """Test multi-column foreign keys are grouped by constraint name"""
    result = {
        'tables': [
            {'name': 'orders', 'primary_key': ['region', 'number'],
             'columns': [{'name': 'region'}, {'name': 'number', 'type': 'INTEGER'}]},
            {'name': 'order_line',
             'columns': [{'name': 'id', 'primary_key': True},
                         {'name': 'order_region'}, {'name': 'order_number', 'type': 'INTEGER'}],
             'foreign_keys': [
                 {'name': 'fk_line_order', 'column': 'order_region',
                  'references_table': 'orders', 'references_column': 'region'},
                 {'name': 'fk_line_order', 'column': 'order_number',
                  'references_table': 'orders', 'references_column': 'number'},
             ]},
        ],
    }

    schema = schema_from_dict(result)

    orders = schema.get_table(TableIdentifier('orders'))
    assert orders.primary_key.column_names == ('region', 'number')

    line = schema.get_table(TableIdentifier('order_line'))
    assert len(line.foreign_keys) == 1
    fk = line.foreign_keys[0]
    assert fk.name == 'fk_line_order'
    assert fk.column_pairs() == (('order_region', 'region'), ('order_number', 'number'))


def test_relationships_used_when_tables_have_no_foreign_keys():
    """Test the relationship list is the fallback source of foreign keys"""
    result = _blog_result()
    result['tables'][1]['foreign_keys'] = []
    result['relationships'] = [
        {'from_table': 'posts', 'to_table': 'users', 'from_column': 'author_id',
         'to_column': 'id', 'type': 'many-to-one'},
        {'from_table': 'users', 'to_table': 'posts', 'type': 'one-to-many'},
    ]

    schema = schema_from_dict(result)

    posts = schema.get_table(TableIdentifier('posts'))
    assert [fk.column_names for fk in posts.foreign_keys] == [('author_id',)]
    assert schema.get_table(TableIdentifier('users')).foreign_keys == ()


def test_unknown_foreign_key_column_skipped(caplog):
    result = _blog_result()
    result['tables'][1]['foreign_keys'][0]['column'] = 'writer_id'

    schema = schema_from_dict(result)

    assert schema.get_table(TableIdentifier('posts')).foreign_keys == ()
    assert 'unknown column writer_id' in caplog.text


def test_referenced_table_inherits_owner_schema():
    result = _blog_result()
    for table in result['tables']:
        table['schema'] = 'blog'

    schema = schema_from_dict(result)

    posts = schema.get_table(TableIdentifier('posts', schema='blog'))
    assert posts.foreign_keys[0].referenced_table == TableIdentifier('users', schema='blog')


def test_bad_reference_rejected():
    result = _blog_result()
    result['tables'][1]['foreign_keys'][0]['references_column'] = 'uuid'

    with pytest.raises(SchemaDefinitionError):
        schema_from_dict(result)


def test_primary_key_naming_unknown_column_rejected():
    """Test an explicit primary key never silently loses columns"""
    result = _blog_result()
    result['tables'][0]['primary_key'] = ['id', 'tenant_id']

    with pytest.raises(SchemaDefinitionError) as exc:
        schema_from_dict(result)

    assert 'tenant_id' in str(exc.value)
