import logging
from typing import Dict, List

from ..errors import MultipleBindingError
from ..mapping import Entity, Property
from ..schema.model import Column, Table
from .base import BaseBinder, ProcessedColumns, make_unique

logger = logging.getLogger(__name__)


class ScalarPropertyBinder(BaseBinder):
    """Binds every column not claimed by earlier steps as a scalar property.

    Two scalar columns deriving the same property name is a fatal collision.
    A clash with an identifier, version or association property is resolved
    with make_unique.
    """

    def bind(self, table: Table, entity: Entity, processed: ProcessedColumns) -> List[Property]:
        tid = entity.table_identifier
        bound = []
        derived_names: Dict[str, Column] = {}

        for column in table.columns:
            if column in processed:
                continue

            derived = self.column_property_name(tid, column)
            previous = derived_names.get(derived)
            if previous is not None:
                raise MultipleBindingError(entity.name, table.identifier,
                                           [previous.name, column.name], derived)
            derived_names[derived] = column

            prop = self.make_scalar_property(tid, make_unique(entity, derived), column)
            entity.add_property(prop)
            processed.mark(column)
            bound.append(prop)

        return bound
