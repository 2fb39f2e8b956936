import logging
from typing import Optional

from ..config import BinderSettings, Config
from ..registry import EntityRegistry
from ..schema.model import Schema
from ..strategy.base import BindingStrategy
from ..strategy.default import DefaultBindingStrategy
from .collector import AssociationCandidateCollector
from .entity import EntityBinder

logger = logging.getLogger(__name__)


class SchemaBinder:
    """Runs the binder over a whole schema.

    Collects association candidates, binds and registers every table in
    schema order, then binds incoming associations for every entity. The
    registry is only handed back when the whole run succeeds.
    """

    def __init__(self, strategy: Optional[BindingStrategy] = None,
                 settings: Optional[BinderSettings] = None):
        self.strategy = strategy or DefaultBindingStrategy(Config.PACKAGE_NAME)
        self.settings = settings or BinderSettings.from_config()

    def bind(self, schema: Schema) -> EntityRegistry:
        registry = EntityRegistry()

        candidate_index = AssociationCandidateCollector(self.strategy, self.settings).collect(schema)

        binder = EntityBinder(schema, self.strategy, registry, self.settings)
        bindings = [binder.bind(table) for table in schema]

        for binding in bindings:
            binder.bind_incoming(binding, candidate_index)

        logger.info("Bound %d entities from %d tables", len(registry), len(schema))
        return registry


def bind_schema(schema: Schema, strategy: Optional[BindingStrategy] = None,
                settings: Optional[BinderSettings] = None) -> EntityRegistry:
    """Bind schema with strategy and settings; see SchemaBinder."""
    return SchemaBinder(strategy, settings).bind(schema)
