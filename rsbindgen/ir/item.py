"""Type and field descriptors

Descriptors are what code generation works from. Each one owns the
annotations scanned from its own comment; nothing is inherited from the
enclosing type.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from rsbindgen.core.cursor import Cursor, CursorKind
from rsbindgen.core.directive_logger import DirectiveLogger
from rsbindgen.ir.annotations import Annotations, FieldAccessorKind


@dataclass
class FieldDescriptor:
    """A field of a record type"""
    name: str
    annotations: Optional[Annotations] = None

    @classmethod
    def from_cursor(cls, cursor: Cursor, logger: Optional[DirectiveLogger] = None,
                    owner: Optional[str] = None) -> "FieldDescriptor":
        if logger is not None:
            logger.set_item(f"{owner}.{cursor.spelling}" if owner else cursor.spelling)
        return cls(cursor.spelling, Annotations.new(cursor, logger))

    @property
    def is_private(self) -> Optional[bool]:
        """Field's own visibility override, None if unset"""
        if self.annotations is None:
            return None
        return self.annotations.private_fields

    @property
    def accessor_kind(self) -> Optional[FieldAccessorKind]:
        """Field's own accessor override, None if unset"""
        if self.annotations is None:
            return None
        return self.annotations.accessor_kind


@dataclass
class TypeDescriptor:
    """A type declaration and its fields"""
    name: str
    kind: CursorKind
    annotations: Optional[Annotations] = None
    fields: List[FieldDescriptor] = field(default_factory=list)

    @classmethod
    def from_cursor(cls, cursor: Cursor, logger: Optional[DirectiveLogger] = None) -> "TypeDescriptor":
        """Build a descriptor from a type cursor and its field children

        Args:
            cursor: Type declaration cursor
            logger: Optional directive logger

        Returns:
            TypeDescriptor with annotations scanned for the type and each field

        Raises:
            ValueError: If the cursor is a field rather than a type
        """
        if not cursor.kind.is_type:
            raise ValueError(f"Expected a type cursor, got {cursor!r}")

        if logger is not None:
            logger.set_item(cursor.spelling)
        annotations = Annotations.new(cursor, logger)

        fields = [
            FieldDescriptor.from_cursor(child, logger, owner=cursor.spelling)
            for child in cursor.fields()
        ]

        if logger is not None:
            logger.set_item(None)
        return cls(cursor.spelling, cursor.kind, annotations, fields)

    @property
    def is_opaque(self) -> bool:
        return self.annotations is not None and self.annotations.opaque

    @property
    def is_hidden(self) -> bool:
        return self.annotations is not None and self.annotations.hide

    @property
    def replaces(self) -> Optional[str]:
        """Name of the type this one is substituted for"""
        if self.annotations is None:
            return None
        return self.annotations.use_instead_of

    @property
    def disallow_copy(self) -> bool:
        return self.annotations is not None and self.annotations.disallow_copy

    @property
    def is_annotated(self) -> bool:
        """True if the type or any of its fields carries annotations"""
        if self.annotations is not None:
            return True
        return any(f.annotations is not None for f in self.fields)


def collect_items(cursors: Iterable[Cursor], logger: Optional[DirectiveLogger] = None) -> List[TypeDescriptor]:
    """Build a descriptor for every type cursor, in order

    Args:
        cursors: Top-level cursors of a translation unit
        logger: Optional directive logger

    Returns:
        List of TypeDescriptor; stray field cursors are skipped
    """
    items = []
    for cursor in cursors:
        if not cursor.kind.is_type:
            if logger is not None:
                logger.log_warning(f"Ignoring top-level field '{cursor.spelling}'")
            continue
        items.append(TypeDescriptor.from_cursor(cursor, logger))
    return items
