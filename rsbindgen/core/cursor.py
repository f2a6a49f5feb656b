"""Construct handles for rsbindgen

A Cursor stands for one declaration of the foreign translation unit (a type
or a field) together with the documentation comment attached to it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from rsbindgen.core.comment import Comment


class CursorKind(Enum):
    """Declaration kinds a cursor can describe"""
    STRUCT = "struct"
    UNION = "union"
    CLASS = "class"
    ENUM = "enum"
    TYPEDEF = "typedef"
    FIELD = "field"

    @property
    def is_type(self) -> bool:
        return self is not CursorKind.FIELD


@dataclass
class Cursor:
    """A declaration with its parsed comment tree

    Attributes:
        spelling: Declared name
        kind: Declaration kind
        raw_comment: Root of the attached comment tree, None if uncommented
        children: Nested declarations (fields of a record type)
    """
    spelling: str
    kind: CursorKind
    raw_comment: Optional[Comment] = None
    children: List["Cursor"] = field(default_factory=list)

    def comment(self) -> Comment:
        """Get the comment tree root

        Returns:
            The attached comment, or a null comment node when there is none
        """
        if self.raw_comment is None:
            return Comment.null()
        return self.raw_comment

    def fields(self) -> List["Cursor"]:
        """Get field children in declaration order"""
        return [c for c in self.children if c.kind is CursorKind.FIELD]

    def __repr__(self) -> str:
        return f"Cursor({self.kind.value} {self.spelling})"
