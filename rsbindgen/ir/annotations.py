"""Directive annotations for types and fields

Items and fields can carry directives inside their documentation comment,
written as an HTML ``div`` whose first attribute is ``rustbindgen``::

    /** <div rustbindgen opaque nocopy></div> */
    struct Foo { int x; };

Scanning a comment tree yields an ``Annotations`` record, or None when the
tree holds no directive marker at all.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional

from rsbindgen.core.comment import CommentKind
from rsbindgen.core.directive_logger import DirectiveLogger, SkipReason


SENTINEL = "rustbindgen"
MARKER_TAG = "div"


class FieldAccessorKind(Enum):
    """How accessors are generated for a field"""
    NONE = "none"
    REGULAR = "regular"
    UNSAFE = "unsafe"
    IMMUTABLE = "immutable"


def parse_accessor(value: str) -> FieldAccessorKind:
    """Map an ``accessor="..."`` payload to an accessor kind

    Anything unrecognized, including an empty value, means a regular accessor.
    """
    if value == "false":
        return FieldAccessorKind.NONE
    if value == "unsafe":
        return FieldAccessorKind.UNSAFE
    if value == "immutable":
        return FieldAccessorKind.IMMUTABLE
    return FieldAccessorKind.REGULAR


@dataclass(frozen=True)
class Annotations:
    """Annotations for a given item, or a field.

    Attributes:
        opaque: Generate the type as an opaque blob. Only applies to types.
        hide: Omit the item from the output. Only applies to types.
        use_instead_of: Canonical name of the type this one replaces. Code
            for the annotated type is emitted under the replaced type's name.
        disallow_copy: Do not derive copy/clone. Only applies to struct or
            union types.
        private_fields: Whether fields are private. Can be set on a record
            type (all fields) or on an individual field.
        accessor_kind: Kind of accessor a field gets. Can also be set on a
            record type so its fields share it by default.
    """
    opaque: bool = False
    hide: bool = False
    use_instead_of: Optional[str] = None
    disallow_copy: bool = False
    private_fields: Optional[bool] = None
    accessor_kind: Optional[FieldAccessorKind] = None

    @classmethod
    def new(cls, cursor, logger: Optional[DirectiveLogger] = None) -> Optional["Annotations"]:
        """Scan the comment attached to a construct

        Args:
            cursor: Construct handle exposing ``comment()``
            logger: Optional logger for applied and skipped directives

        Returns:
            Annotations if at least one directive marker matched, None otherwise
        """
        return cls.from_comment(cursor.comment(), logger)

    @classmethod
    def from_comment(cls, comment, logger: Optional[DirectiveLogger] = None) -> Optional["Annotations"]:
        """Scan a bare comment tree

        Args:
            comment: Root node exposing ``kind``, ``tag_name``, ``attributes``
                and ``children``
            logger: Optional logger for applied and skipped directives

        Returns:
            Annotations if at least one directive marker matched, None otherwise
        """
        acc = _Accumulator()
        if not _scan(comment, acc, logger):
            return None
        return acc.freeze()

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping of all fields, enums as their string values"""
        data = asdict(self)
        if self.accessor_kind is not None:
            data["accessor_kind"] = self.accessor_kind.value
        return data


class _Accumulator:
    """Mutable record filled in while one tree is scanned"""

    __slots__ = ("opaque", "hide", "use_instead_of", "disallow_copy",
                 "private_fields", "accessor_kind")

    def __init__(self) -> None:
        self.opaque = False
        self.hide = False
        self.use_instead_of: Optional[str] = None
        self.disallow_copy = False
        self.private_fields: Optional[bool] = None
        self.accessor_kind: Optional[FieldAccessorKind] = None

    def apply(self, name: str, value: str) -> bool:
        """Apply one directive attribute

        Returns:
            True if the name is a recognized directive
        """
        if name == "opaque":
            self.opaque = True
        elif name == "hide":
            self.hide = True
        elif name == "nocopy":
            self.disallow_copy = True
        elif name == "replaces":
            self.use_instead_of = value
        elif name == "private":
            self.private_fields = value != "false"
        elif name == "accessor":
            self.accessor_kind = parse_accessor(value)
        else:
            return False
        return True

    def freeze(self) -> Annotations:
        return Annotations(
            opaque=self.opaque,
            hide=self.hide,
            use_instead_of=self.use_instead_of,
            disallow_copy=self.disallow_copy,
            private_fields=self.private_fields,
            accessor_kind=self.accessor_kind,
        )


def is_directive_marker(comment) -> bool:
    """Check whether a node is a ``<div rustbindgen ...>`` with directives

    A marker holding only the sentinel does not count.
    """
    attributes = comment.attributes
    return (comment.kind == CommentKind.HTML_START_TAG and
            comment.tag_name == MARKER_TAG and
            len(attributes) > 1 and
            attributes[0].name == SENTINEL)


def _scan(comment, acc: _Accumulator, logger: Optional[DirectiveLogger]) -> bool:
    """Walk a tree pre-order, applying every marker to the accumulator

    Returns:
        True if this node or any descendant was a directive marker
    """
    matched = False
    if is_directive_marker(comment):
        matched = True
        for attribute in comment.attributes:
            name, value = attribute.name, attribute.value
            if acc.apply(name, value):
                if logger is not None:
                    logger.log_directive(name, value)
            elif logger is not None and name != SENTINEL:
                logger.log_skipped(SkipReason.UNKNOWN_DIRECTIVE, name)
    elif logger is not None:
        _log_near_miss(comment, logger)

    for child in comment.children:
        if _scan(child, acc, logger):
            matched = True
    return matched


def _log_near_miss(comment, logger: DirectiveLogger) -> None:
    if comment.kind != CommentKind.HTML_START_TAG or comment.tag_name != MARKER_TAG:
        return
    names = [a.name for a in comment.attributes]
    if names == [SENTINEL]:
        logger.log_skipped(SkipReason.EMPTY_MARKER, f"<{MARKER_TAG} {SENTINEL}>")
    elif SENTINEL in names[1:]:
        logger.log_skipped(SkipReason.SENTINEL_NOT_FIRST, " ".join(names))
