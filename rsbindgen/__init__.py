"""rsbindgen - directive annotations for foreign-language bindings

Scans documentation comments of types and fields for
``<div rustbindgen ...></div>`` markers and records what they ask for.
"""

from rsbindgen.ir.annotations import Annotations, FieldAccessorKind, parse_accessor

__version__ = "0.1.0"

__all__ = [
    'Annotations',
    'FieldAccessorKind',
    'parse_accessor',
]
