"""
Logical entity model produced by the binder.

An Entity is built incrementally during its table's binding pass and then
sealed when it is registered. After sealing, only one-to-many collection
properties (the incoming-association pass) may still be appended.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import BindingStateError
from .schema.model import Column, ForeignKey, Table, TableIdentifier


class PropertyKind(str, Enum):
    SCALAR = 'scalar'
    VERSION = 'version'
    MANY_TO_ONE = 'many-to-one'
    ONE_TO_MANY = 'one-to-many'


class IdentifierKind(str, Enum):
    NONE = 'none'
    SIMPLE = 'simple'
    EMBEDDED = 'embedded'
    BASIC_COMPOSITE = 'basic-composite'


@dataclass
class Property:
    """A property of an entity.

    Scalar and version properties carry a logical `type_name`. Associations
    carry `target_entity` and the `foreign_key` they were derived from;
    one-to-many collections also carry the `inverse_name` of the owning
    side's many-to-one (None when the owning side has none).
    """

    name: str
    kind: PropertyKind
    columns: Tuple[Column, ...] = ()
    type_name: Optional[str] = None
    nullable: bool = True
    mutable: bool = True
    identifier: bool = False
    target_entity: Optional[str] = None
    foreign_key: Optional[ForeignKey] = None
    inverse_name: Optional[str] = None
    inverse: bool = False
    lazy: bool = True
    meta_attributes: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    def is_association(self) -> bool:
        return self.kind in (PropertyKind.MANY_TO_ONE, PropertyKind.ONE_TO_MANY)

    def to_dict(self) -> Dict:
        result = {
            'name': self.name,
            'kind': self.kind.value,
            'columns': list(self.column_names),
            'mutable': self.mutable,
            'nullable': self.nullable,
        }
        if self.type_name is not None:
            result['type'] = self.type_name
        if self.identifier:
            result['identifier'] = True
        if self.is_association():
            result['target_entity'] = self.target_entity
            result['lazy'] = self.lazy
        if self.kind is PropertyKind.ONE_TO_MANY:
            result['inverse_name'] = self.inverse_name
            result['inverse'] = self.inverse
        if self.meta_attributes:
            result['meta'] = {k: list(v) for k, v in self.meta_attributes.items()}
        return result


@dataclass
class Identifier:
    """Identifier of an entity.

    SIMPLE holds one property; EMBEDDED holds the key properties of a
    synthetic `class_name` component exposed as property `name`;
    BASIC_COMPOSITE holds ordinary key properties flagged as identifier.
    NONE means the backing table has no primary key.
    """

    kind: IdentifierKind = IdentifierKind.NONE
    properties: List[Property] = field(default_factory=list)
    name: Optional[str] = None
    class_name: Optional[str] = None
    generator: str = 'assigned'

    @property
    def columns(self) -> Tuple[Column, ...]:
        return tuple(c for p in self.properties for c in p.columns)

    @property
    def property_names(self) -> List[str]:
        if self.kind in (IdentifierKind.SIMPLE, IdentifierKind.EMBEDDED):
            return [self.name]
        return [p.name for p in self.properties]

    def is_composite(self) -> bool:
        return self.kind in (IdentifierKind.EMBEDDED, IdentifierKind.BASIC_COMPOSITE)

    def to_dict(self) -> Dict:
        return {
            'kind': self.kind.value,
            'name': self.name,
            'class_name': self.class_name,
            'generator': self.generator,
            'properties': [p.to_dict() for p in self.properties],
        }


@dataclass
class Entity:
    name: str
    jpa_entity_name: str
    table: Table
    table_identifier: TableIdentifier
    identifier: Identifier = field(default_factory=Identifier)
    properties: List[Property] = field(default_factory=list)
    discriminator_value: Optional[str] = None
    version: Optional[Property] = None
    meta_attributes: Dict[str, List[str]] = field(default_factory=dict)
    _sealed: bool = field(default=False, repr=False, compare=False)

    def has_identifier(self) -> bool:
        return self.identifier.kind is not IdentifierKind.NONE

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self):
        self._sealed = True

    def add_property(self, prop: Property):
        if self._sealed and prop.kind is not PropertyKind.ONE_TO_MANY:
            raise BindingStateError(
                f"Entity '{self.name}' is registered; cannot add {prop.kind.value} "
                f"property '{prop.name}'")
        if prop.name in self.property_names():
            raise BindingStateError(
                f"Entity '{self.name}' already has a property named '{prop.name}'")
        self.properties.append(prop)

    def property_names(self) -> List[str]:
        """All names in use on the entity, identifier included."""
        names = list(self.identifier.property_names) if self.has_identifier() else []
        names.extend(p.name for p in self.properties)
        return names

    def get_property(self, name: str) -> Optional[Property]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        for prop in self.identifier.properties:
            if prop.name == name:
                return prop
        return None

    def iter_properties(self, *kinds: PropertyKind) -> Iterator[Property]:
        for prop in self.properties:
            if not kinds or prop.kind in kinds:
                yield prop

    def scalar_properties(self) -> List[Property]:
        return list(self.iter_properties(PropertyKind.SCALAR))

    def associations(self) -> List[Property]:
        return list(self.iter_properties(PropertyKind.MANY_TO_ONE, PropertyKind.ONE_TO_MANY))

    def many_to_one_for(self, foreign_key: ForeignKey) -> Optional[Property]:
        for prop in self.iter_properties(PropertyKind.MANY_TO_ONE):
            if prop.foreign_key == foreign_key:
                return prop
        return None

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'jpa_entity_name': self.jpa_entity_name,
            'table': str(self.table.identifier),
            'discriminator_value': self.discriminator_value,
            'identifier': self.identifier.to_dict(),
            'version': self.version.name if self.version else None,
            'properties': [p.to_dict() for p in self.properties],
            'meta': {k: list(v) for k, v in self.meta_attributes.items()},
        }
