from .base import BindingStrategy, DelegatingBindingStrategy
from .default import DefaultBindingStrategy

__all__ = [
    'BindingStrategy',
    'DelegatingBindingStrategy',
    'DefaultBindingStrategy',
]
