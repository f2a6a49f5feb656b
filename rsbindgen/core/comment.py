"""Comment tree model for rsbindgen

Documentation comments arrive already parsed into a tree of nodes, the same
shape libclang exposes through its CXComment API. Only the parts the directive
scanner reads are modelled here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class CommentKind(Enum):
    """Classification of a comment node (mirrors CXComment_* kinds)"""
    NULL = "null"
    TEXT = "text"
    INLINE_COMMAND = "inline_command"
    HTML_START_TAG = "html_start_tag"
    HTML_END_TAG = "html_end_tag"
    PARAGRAPH = "paragraph"
    BLOCK_COMMAND = "block_command"
    PARAM_COMMAND = "param_command"
    TPARAM_COMMAND = "tparam_command"
    VERBATIM_BLOCK_COMMAND = "verbatim_block_command"
    VERBATIM_BLOCK_LINE = "verbatim_block_line"
    VERBATIM_LINE = "verbatim_line"
    FULL_COMMENT = "full_comment"


@dataclass(frozen=True)
class HTMLAttribute:
    """A single name/value attribute of an HTML start tag

    Attributes written without a value (``<div hide>``) carry an empty string.
    """
    name: str
    value: str = ""


@dataclass(frozen=True)
class Comment:
    """Immutable comment node

    Attributes:
        kind: Node classification
        tag_name: Tag name, only meaningful for HTML tag nodes
        attributes: Ordered tag attributes
        children: Ordered child nodes
        text: Text payload for text-like nodes
    """
    kind: CommentKind
    tag_name: str = ""
    attributes: Tuple[HTMLAttribute, ...] = ()
    children: Tuple["Comment", ...] = ()
    text: str = ""

    @classmethod
    def null(cls) -> "Comment":
        """Node used for constructs with no attached comment"""
        return cls(CommentKind.NULL)

    @property
    def is_null(self) -> bool:
        return self.kind is CommentKind.NULL

    def __repr__(self) -> str:
        if self.kind is CommentKind.HTML_START_TAG:
            attrs = " ".join(
                f'{a.name}="{a.value}"' if a.value else a.name
                for a in self.attributes
            )
            return f"Comment(<{self.tag_name} {attrs}>)" if attrs else f"Comment(<{self.tag_name}>)"
        if self.text:
            return f"Comment({self.kind.value}, {self.text!r})"
        return f"Comment({self.kind.value}, children={len(self.children)})"
