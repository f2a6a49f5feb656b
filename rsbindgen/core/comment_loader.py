"""Load comment trees and cursors from YAML dumps

The front end that parses headers and their documentation markup lives
outside this package. It hands over a YAML dump of the declarations it found:

    items:
      - name: Foo
        kind: struct
        comment:
          - kind: paragraph
            children:
              - kind: html_start_tag
                tag: div
                attributes: [rustbindgen, opaque, [replaces, Bar]]
        fields:
          - name: x
            comment: ...
"""

from pathlib import Path
from typing import Any, List

import yaml

from rsbindgen.core.comment import Comment, CommentKind, HTMLAttribute
from rsbindgen.core.cursor import Cursor, CursorKind


_COMMENT_KINDS = {kind.value: kind for kind in CommentKind}
_TYPE_KINDS = {kind.value: kind for kind in CursorKind if kind.is_type}


def _attribute_value(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"Tag attribute value must be a string, got {value!r}")
    return value


def attribute_from_yaml(data: Any) -> HTMLAttribute:
    """Build an attribute from a bare name, a [name, value] pair or a mapping

    Raises:
        ValueError: If the shape is not recognized or a value is not a string
    """
    if isinstance(data, str):
        return HTMLAttribute(data)
    if isinstance(data, (list, tuple)) and len(data) == 2:
        name, value = data
        return HTMLAttribute(str(name), _attribute_value(value))
    if isinstance(data, dict) and "name" in data:
        return HTMLAttribute(str(data["name"]), _attribute_value(data.get("value")))
    raise ValueError(f"Invalid tag attribute: {data!r}")


def comment_from_dict(data: Any) -> Comment:
    """Build a comment tree

    Args:
        data: Mapping with ``kind``, ``tag``, ``attributes``, ``children`` and
            ``text`` keys, a list (children of a full comment), or None

    Returns:
        Root Comment node

    Raises:
        ValueError: If a node is malformed or has an unknown kind
    """
    if data is None:
        return Comment.null()
    if isinstance(data, list):
        return Comment(
            CommentKind.FULL_COMMENT,
            children=tuple(comment_from_dict(child) for child in data)
        )
    if not isinstance(data, dict):
        raise ValueError(f"Comment node must be a mapping or a list, got {data!r}")

    kind_name = data.get("kind", "full_comment")
    if kind_name not in _COMMENT_KINDS:
        raise ValueError(f"Unknown comment kind: {kind_name!r}")

    attributes = data.get("attributes") or []
    if not isinstance(attributes, list):
        raise ValueError(f"Attributes must be a list, got {attributes!r}")
    children = data.get("children") or []
    if not isinstance(children, list):
        raise ValueError(f"Children must be a list, got {children!r}")

    return Comment(
        kind=_COMMENT_KINDS[kind_name],
        tag_name=str(data.get("tag") or ""),
        attributes=tuple(attribute_from_yaml(a) for a in attributes),
        children=tuple(comment_from_dict(child) for child in children),
        text=str(data.get("text") or ""),
    )


def cursor_from_dict(data: Any) -> Cursor:
    """Build a type cursor with its field children

    Raises:
        ValueError: If the item is malformed
    """
    if not isinstance(data, dict):
        raise ValueError(f"Item must be a mapping, got {data!r}")
    if not data.get("name"):
        raise ValueError(f"Item is missing a name: {data!r}")

    kind_name = data.get("kind", "struct")
    if kind_name not in _TYPE_KINDS:
        raise ValueError(f"Unknown item kind for '{data['name']}': {kind_name!r}")

    fields = []
    for field_data in data.get("fields") or []:
        if not isinstance(field_data, dict) or not field_data.get("name"):
            raise ValueError(f"Invalid field in '{data['name']}': {field_data!r}")
        fields.append(Cursor(
            spelling=str(field_data["name"]),
            kind=CursorKind.FIELD,
            raw_comment=_optional_comment(field_data.get("comment")),
        ))

    return Cursor(
        spelling=str(data["name"]),
        kind=_TYPE_KINDS[kind_name],
        raw_comment=_optional_comment(data.get("comment")),
        children=fields,
    )


def _optional_comment(data: Any):
    # an empty "comment:" key loads as ""
    if data is None or data == "":
        return None
    return comment_from_dict(data)


def parse_translation_unit(text: str) -> List[Cursor]:
    """Parse a YAML dump into top-level cursors

    Raises:
        ValueError: If the document structure is invalid
        yaml.YAMLError: If the text is not valid YAML
    """
    # BaseLoader keeps every scalar a string, so directive values such as
    # off, no or 0x10 reach the scanner exactly as written
    document = yaml.load(text, Loader=yaml.BaseLoader)
    if document is None:
        return []
    if not isinstance(document, dict) or "items" not in document:
        raise ValueError("Translation unit must be a mapping with an 'items' list")

    items = document["items"] or []
    if not isinstance(items, list):
        raise ValueError("'items' must be a list")
    return [cursor_from_dict(item) for item in items]


def load_translation_unit(path: Path) -> List[Cursor]:
    """Load a YAML dump from disk

    Args:
        path: Path to the dump

    Returns:
        Top-level cursors in file order

    Raises:
        FileNotFoundError: If path doesn't exist
        ValueError: If the document structure is invalid
        yaml.YAMLError: If the file is not valid YAML
    """
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        text = f.read()

    try:
        return parse_translation_unit(text)
    except ValueError as e:
        raise ValueError(f"Invalid translation unit {path}: {e}")
