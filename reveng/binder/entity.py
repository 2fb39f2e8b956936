"""
Entity binder: takes one table through the fixed sequence of binding steps.

    Init -> CatalogSchemaNormalized -> IdentifierBound -> VersionBound
         -> OutgoingAssociationsBound -> ScalarsBound -> Registered
         -> IncomingAssociationsBound

Every table reaches Registered in the first pass. The incoming-association
step runs in a second pass, once the candidate index is complete and every
entity is registered.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..config import BinderSettings
from ..errors import BindingStateError, DuplicateEntityNameError, MissingIdentifierError
from ..mapping import Entity, Property
from ..registry import EntityRegistry
from ..schema.model import Schema, Table, TableIdentifier
from ..strategy.base import BindingStrategy
from ..strategy.naming import unqualify
from .base import BaseBinder, ProcessedColumns
from .collector import AssociationCandidateIndex
from .identifier import IdentifierBinder
from .incoming import IncomingAssociationBinder
from .outgoing import OutgoingAssociationBinder
from .scalar import ScalarPropertyBinder
from .version import VersionPropertyBinder

logger = logging.getLogger(__name__)


class BindingState(Enum):
    INIT = 'init'
    CATALOG_SCHEMA_NORMALIZED = 'catalog-schema-normalized'
    IDENTIFIER_BOUND = 'identifier-bound'
    VERSION_BOUND = 'version-bound'
    OUTGOING_ASSOCIATIONS_BOUND = 'outgoing-associations-bound'
    SCALARS_BOUND = 'scalars-bound'
    REGISTERED = 'registered'
    INCOMING_ASSOCIATIONS_BOUND = 'incoming-associations-bound'


_STATE_ORDER = list(BindingState)


@dataclass
class TableBinding:
    """Progress of one table through the binding states."""

    table: Table
    state: BindingState = BindingState.INIT
    table_identifier: Optional[TableIdentifier] = None
    entity: Optional[Entity] = None
    processed: Optional[ProcessedColumns] = None

    def advance(self, state: BindingState):
        index = _STATE_ORDER.index(self.state)
        expected = _STATE_ORDER[index + 1] if index + 1 < len(_STATE_ORDER) else None
        if state is not expected:
            raise BindingStateError(
                f"Cannot move {self.table.identifier} from {self.state.value} to {state.value}")
        self.state = state


class EntityBinder(BaseBinder):
    """Produces one Entity per table and registers it."""

    def __init__(self, schema: Schema, strategy: BindingStrategy,
                 registry: EntityRegistry, settings: Optional[BinderSettings] = None):
        super().__init__(strategy, settings)
        self.schema = schema
        self.registry = registry
        self.identifier_binder = IdentifierBinder(strategy, self.settings)
        self.version_binder = VersionPropertyBinder(strategy, self.settings)
        self.outgoing_binder = OutgoingAssociationBinder(schema, strategy, self.settings)
        self.scalar_binder = ScalarPropertyBinder(strategy, self.settings)
        self.incoming_binder = IncomingAssociationBinder(strategy, self.settings)

    def bind(self, table: Table) -> TableBinding:
        """Take table from Init to Registered.

        Raises:
            DuplicateEntityNameError: if the entity name is already registered.
            MultipleBindingError: if two columns collide on a property name.
        """
        binding = TableBinding(table)

        binding.table_identifier = self.normalize(table.identifier)
        binding.advance(BindingState.CATALOG_SCHEMA_NORMALIZED)

        entity = self._create_entity(table, binding.table_identifier)
        binding.entity = entity
        binding.processed = ProcessedColumns(table, entity.name)

        self.identifier_binder.bind(table, entity, binding.processed)
        binding.advance(BindingState.IDENTIFIER_BOUND)

        self.version_binder.bind(table, entity, binding.processed)
        binding.advance(BindingState.VERSION_BOUND)

        self.outgoing_binder.bind(table, entity, binding.processed)
        binding.advance(BindingState.OUTGOING_ASSOCIATIONS_BOUND)

        self.scalar_binder.bind(table, entity, binding.processed)
        binding.advance(BindingState.SCALARS_BOUND)

        self._register(entity)
        binding.processed = None
        binding.advance(BindingState.REGISTERED)
        return binding

    def bind_incoming(self, binding: TableBinding,
                      candidate_index: AssociationCandidateIndex) -> List[Property]:
        """Second pass for a registered table: add its one-to-many collections."""
        if binding.state is not BindingState.REGISTERED:
            raise BindingStateError(
                f"{binding.table.identifier} must be registered before incoming "
                f"associations are bound (state: {binding.state.value})")

        try:
            bound = self.incoming_binder.bind(binding.entity, candidate_index, self.registry)
        except MissingIdentifierError as e:
            logger.warning("%s; skipping its one-to-many associations", e)
            bound = []

        binding.advance(BindingState.INCOMING_ASSOCIATIONS_BOUND)
        return bound

    def _create_entity(self, table: Table, tid: TableIdentifier) -> Entity:
        class_name = self.strategy.table_to_class_name(tid)
        logger.info("Building entity %s based on %s", class_name, tid)
        return Entity(
            name=class_name,
            jpa_entity_name=unqualify(class_name),
            table=table,
            table_identifier=tid,
            discriminator_value=class_name,
            meta_attributes=dict(self.strategy.table_to_meta_attributes(tid) or {}),
        )

    def _register(self, entity: Entity):
        registration = self.registry.register(entity)
        if not registration.ok:
            raise DuplicateEntityNameError(entity.name, entity.table.identifier,
                                           registration.conflict.table.identifier)
        self.registry.add_import(entity.name, entity.name)
        entity.seal()
