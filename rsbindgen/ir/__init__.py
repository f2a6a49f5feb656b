"""Intermediate representation for rsbindgen

Modules:
- annotations: Directive scanner and the Annotations record
- item: Type and field descriptors holding scanned annotations
"""

from rsbindgen.ir.annotations import (
    Annotations, FieldAccessorKind, parse_accessor, is_directive_marker
)
from rsbindgen.ir.item import TypeDescriptor, FieldDescriptor, collect_items

__all__ = [
    'Annotations',
    'FieldAccessorKind',
    'parse_accessor',
    'is_directive_marker',
    'TypeDescriptor',
    'FieldDescriptor',
    'collect_items',
]
