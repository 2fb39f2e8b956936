from .base import BaseBinder, ProcessedColumns, make_unique
from .collector import AssociationCandidateCollector, AssociationCandidateIndex
from .identifier import IdentifierBinder
from .version import VersionPropertyBinder
from .outgoing import OutgoingAssociationBinder
from .scalar import ScalarPropertyBinder
from .incoming import IncomingAssociationBinder
from .entity import BindingState, EntityBinder, TableBinding
from .run import SchemaBinder, bind_schema

__all__ = [
    'BaseBinder',
    'ProcessedColumns',
    'make_unique',
    'AssociationCandidateCollector',
    'AssociationCandidateIndex',
    'IdentifierBinder',
    'VersionPropertyBinder',
    'OutgoingAssociationBinder',
    'ScalarPropertyBinder',
    'IncomingAssociationBinder',
    'BindingState',
    'EntityBinder',
    'TableBinding',
    'SchemaBinder',
    'bind_schema',
]
