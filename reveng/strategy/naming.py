"""
Identifier-to-name conversions shared by binding strategies.
"""

import re

# Runs of letters and digits in any script
_TOKEN_RE = re.compile(r'[^\W_]+')

_ES_ENDINGS = ('s', 'x', 'z', 'ch', 'sh')
_VOWELS = set('aeiou')


def _is_case_boundary(token: str, i: int) -> bool:
    prev, cur = token[i - 1], token[i]
    if prev.isdigit() != cur.isdigit():
        return True
    if prev.islower() and cur.isupper():
        return True
    # last capital of an acronym starts the next word: 'XMLDocument'
    return prev.isupper() and cur.isupper() and i + 1 < len(token) and token[i + 1].islower()


def split_words(name: str):
    """Split a raw database identifier into words.

    Underscores, spaces, dashes, letter/digit changes and lower-to-upper case
    changes are word boundaries: 'ORDER_ITEM' -> ['ORDER', 'ITEM'],
    'orderItem' -> ['order', 'Item']. Letters of any script count, so
    'prénom' and '顧客' stay single words.
    """
    words = []
    for token in _TOKEN_RE.findall(name or ''):
        start = 0
        for i in range(1, len(token)):
            if _is_case_boundary(token, i):
                words.append(token[start:i])
                start = i
        words.append(token[start:])
    return words


def to_upper_camel_case(name: str) -> str:
    """'ORDER_ITEM' -> 'OrderItem', 'customers' -> 'Customers'.

    An identifier without any letter or digit is returned unchanged.
    """
    return ''.join(w[:1].upper() + w[1:].lower() for w in split_words(name)) or name


def to_lower_camel_case(name: str) -> str:
    """'CUSTOMER_ID' -> 'customerId', 'A_ID' -> 'aId'."""
    upper = to_upper_camel_case(name)
    return upper[:1].lower() + upper[1:]


def decapitalize(name: str) -> str:
    """Lower-case the first character unless the first two are both upper case."""
    if not name:
        return name
    if len(name) > 1 and name[0].isupper() and name[1].isupper():
        return name
    return name[0].lower() + name[1:]


def simple_pluralize(singular: str) -> str:
    """Naive English plural: 'order' -> 'orders', 'orders' -> 'orderses', 'category' -> 'categories'."""
    if not singular:
        return singular
    lower = singular.lower()
    if lower.endswith(_ES_ENDINGS):
        return singular + 'es'
    if lower.endswith('y') and len(lower) > 1 and lower[-2] not in _VOWELS:
        return singular[:-1] + 'ies'
    return singular + 's'


def unqualify(qualified_name: str) -> str:
    """'com.acme.Orders' -> 'Orders'."""
    return qualified_name.rsplit('.', 1)[-1]


def qualify(package: str, name: str) -> str:
    if not package:
        return name
    return f'{package}.{name}'
