"""Tests for directive scanning"""

import dataclasses

import pytest

from rsbindgen.core.comment import Comment, CommentKind, HTMLAttribute
from rsbindgen.core.cursor import Cursor, CursorKind
from rsbindgen.core.directive_logger import DirectiveLogger, SkipReason
from rsbindgen.ir.annotations import (
    Annotations, FieldAccessorKind, parse_accessor, is_directive_marker
)


def div(*attrs, children=()):
    """Build a <div> start tag; attrs are names or (name, value) pairs"""
    attributes = tuple(
        HTMLAttribute(*a) if isinstance(a, tuple) else HTMLAttribute(a)
        for a in attrs
    )
    return Comment(CommentKind.HTML_START_TAG, tag_name="div",
                   attributes=attributes, children=tuple(children))


def full(*children):
    """Wrap nodes in a full comment with one paragraph"""
    paragraph = Comment(CommentKind.PARAGRAPH, children=tuple(children))
    return Comment(CommentKind.FULL_COMMENT, children=(paragraph,))


def text(value):
    return Comment(CommentKind.TEXT, text=value)


class TestParseAccessor:
    """Test suite for parse_accessor"""

    def test_false_is_none(self):
        assert parse_accessor("false") is FieldAccessorKind.NONE

    def test_unsafe(self):
        assert parse_accessor("unsafe") is FieldAccessorKind.UNSAFE

    def test_immutable(self):
        assert parse_accessor("immutable") is FieldAccessorKind.IMMUTABLE

    @pytest.mark.parametrize("value", ["", "true", "bogus", "Unsafe", "FALSE"])
    def test_anything_else_is_regular(self, value):
        """Unrecognized values fall back to a regular accessor"""
        assert parse_accessor(value) is FieldAccessorKind.REGULAR


class TestMarkerPredicate:
    """Test suite for is_directive_marker"""

    def test_sentinel_with_directive(self):
        assert is_directive_marker(div("rustbindgen", "opaque"))

    def test_sentinel_alone_is_not_marker(self):
        assert not is_directive_marker(div("rustbindgen"))

    def test_sentinel_must_be_first(self):
        assert not is_directive_marker(div("opaque", "rustbindgen"))

    def test_tag_must_be_div(self):
        node = Comment(CommentKind.HTML_START_TAG, tag_name="span",
                       attributes=(HTMLAttribute("rustbindgen"), HTMLAttribute("opaque")))
        assert not is_directive_marker(node)

    def test_end_tag_is_not_marker(self):
        node = Comment(CommentKind.HTML_END_TAG, tag_name="div",
                       attributes=(HTMLAttribute("rustbindgen"), HTMLAttribute("opaque")))
        assert not is_directive_marker(node)


class TestAnnotationsScan:
    """Test suite for Annotations.from_comment"""

    def test_no_div_yields_none(self):
        """A comment without any div start tag has no annotations"""
        comment = full(text("Just a plain doc comment."))
        assert Annotations.from_comment(comment) is None

    def test_null_comment_yields_none(self):
        assert Annotations.from_comment(Comment.null()) is None

    def test_sentinel_only_yields_none(self):
        """<div rustbindgen></div> must not produce a record"""
        assert Annotations.from_comment(full(div("rustbindgen"))) is None

    def test_foreign_div_yields_none(self):
        comment = full(div(("class", "note"), ("id", "x")))
        assert Annotations.from_comment(comment) is None

    def test_opaque(self):
        anno = Annotations.from_comment(full(div("rustbindgen", "opaque")))

        assert anno is not None
        assert anno.opaque is True
        assert anno == Annotations(opaque=True)

    def test_hide(self):
        anno = Annotations.from_comment(full(div("rustbindgen", "hide")))
        assert anno == Annotations(hide=True)

    def test_nocopy(self):
        anno = Annotations.from_comment(full(div("rustbindgen", "nocopy")))
        assert anno.disallow_copy is True
        assert anno.opaque is False

    def test_replaces(self):
        anno = Annotations.from_comment(full(div("rustbindgen", ("replaces", "Bar"))))
        assert anno.use_instead_of == "Bar"

    def test_private_false(self):
        anno = Annotations.from_comment(full(div("rustbindgen", ("private", "false"))))
        assert anno.private_fields is False

    def test_private_without_value(self):
        anno = Annotations.from_comment(full(div("rustbindgen", "private")))
        assert anno.private_fields is True

    def test_private_other_value_is_true(self):
        anno = Annotations.from_comment(full(div("rustbindgen", ("private", "no"))))
        assert anno.private_fields is True

    def test_accessor_unsafe(self):
        anno = Annotations.from_comment(full(div("rustbindgen", ("accessor", "unsafe"))))
        assert anno.accessor_kind is FieldAccessorKind.UNSAFE

    def test_accessor_bogus_is_regular(self):
        anno = Annotations.from_comment(full(div("rustbindgen", ("accessor", "bogus"))))
        assert anno.accessor_kind is FieldAccessorKind.REGULAR

    def test_accessor_false_is_none_kind(self):
        anno = Annotations.from_comment(full(div("rustbindgen", ("accessor", "false"))))
        assert anno.accessor_kind is FieldAccessorKind.NONE

    def test_several_directives_in_one_marker(self):
        comment = full(div("rustbindgen", "opaque", "nocopy", ("replaces", "Baz"),
                           ("accessor", "immutable")))
        anno = Annotations.from_comment(comment)

        assert anno == Annotations(opaque=True, disallow_copy=True,
                                   use_instead_of="Baz",
                                   accessor_kind=FieldAccessorKind.IMMUTABLE)

    def test_unknown_directive_still_matches(self):
        """A marker with only unknown names yields an all-default record"""
        anno = Annotations.from_comment(full(div("rustbindgen", "frobnicate")))
        assert anno == Annotations()

    def test_unknown_directive_ignored_next_to_known(self):
        anno = Annotations.from_comment(full(div("rustbindgen", "frobnicate", "hide")))
        assert anno == Annotations(hide=True)

    def test_nested_marker_is_found(self):
        """Markers are found at any depth"""
        nested = Comment(CommentKind.BLOCK_COMMAND, children=(
            Comment(CommentKind.PARAGRAPH, children=(
                Comment(CommentKind.PARAGRAPH, children=(
                    text("deep"),
                    div("rustbindgen", "opaque"),
                )),
            )),
        ))
        anno = Annotations.from_comment(full(text("intro"), nested))

        assert anno is not None
        assert anno.opaque is True

    def test_marker_as_root(self):
        anno = Annotations.from_comment(div("rustbindgen", "hide"))
        assert anno.hide is True

    def test_marker_children_are_scanned(self):
        comment = div("rustbindgen", "opaque", children=[div("rustbindgen", "hide")])
        anno = Annotations.from_comment(comment)
        assert anno == Annotations(opaque=True, hide=True)

    def test_flags_or_and_scalars_last_write_wins(self):
        """Booleans accumulate, scalars take the last marker's value"""
        comment = full(
            div("rustbindgen", "opaque", ("replaces", "First")),
            text("between"),
            div("rustbindgen", "hide", ("replaces", "X")),
        )
        anno = Annotations.from_comment(comment)

        assert anno.opaque is True
        assert anno.hide is True
        assert anno.use_instead_of == "X"

    def test_later_marker_overrides_private(self):
        comment = full(
            div("rustbindgen", "private"),
            div("rustbindgen", ("private", "false")),
        )
        assert Annotations.from_comment(comment).private_fields is False

    def test_sentinel_only_marker_does_not_clear_earlier_match(self):
        comment = full(div("rustbindgen", "nocopy"), div("rustbindgen"))
        assert Annotations.from_comment(comment) == Annotations(disallow_copy=True)

    def test_scans_are_independent(self):
        first = Annotations.from_comment(full(div("rustbindgen", "opaque")))
        second = Annotations.from_comment(full(div("rustbindgen", "hide")))

        assert first == Annotations(opaque=True)
        assert second == Annotations(hide=True)


class TestAnnotationsNew:
    """Test suite for Annotations.new on construct handles"""

    def test_cursor_with_marker(self):
        cursor = Cursor("Foo", CursorKind.STRUCT, full(div("rustbindgen", ("replaces", "Bar"))))
        anno = Annotations.new(cursor)
        assert anno.use_instead_of == "Bar"

    def test_cursor_without_comment(self):
        assert Annotations.new(Cursor("Foo", CursorKind.STRUCT)) is None

    def test_duck_typed_nodes(self):
        """Any object exposing the node attributes can be scanned"""

        class Attr:
            def __init__(self, name, value=""):
                self.name = name
                self.value = value

        class Node:
            def __init__(self, kind, tag_name="", attributes=(), children=()):
                self.kind = kind
                self.tag_name = tag_name
                self.attributes = list(attributes)
                self.children = list(children)

        class Construct:
            def comment(self):
                return Node(CommentKind.FULL_COMMENT, children=[
                    Node(CommentKind.HTML_START_TAG, "div",
                         [Attr("rustbindgen"), Attr("accessor", "unsafe")]),
                ])

        anno = Annotations.new(Construct())
        assert anno.accessor_kind is FieldAccessorKind.UNSAFE


class TestAnnotationsRecord:
    """Test suite for the Annotations record itself"""

    def test_defaults(self):
        anno = Annotations()
        assert anno.opaque is False
        assert anno.hide is False
        assert anno.use_instead_of is None
        assert anno.disallow_copy is False
        assert anno.private_fields is None
        assert anno.accessor_kind is None

    def test_is_immutable(self):
        anno = Annotations(opaque=True)
        with pytest.raises(dataclasses.FrozenInstanceError):
            anno.opaque = False

    def test_to_dict(self):
        anno = Annotations(hide=True, accessor_kind=FieldAccessorKind.UNSAFE)
        assert anno.to_dict() == {
            "opaque": False,
            "hide": True,
            "use_instead_of": None,
            "disallow_copy": False,
            "private_fields": None,
            "accessor_kind": "unsafe",
        }


class TestScanLogging:
    """Test suite for logger integration"""

    def test_applied_directives_are_logged(self):
        logger = DirectiveLogger()
        logger.set_item("Foo")
        Annotations.from_comment(full(div("rustbindgen", "opaque", ("replaces", "Bar"))), logger)

        assert [(r.item, r.directive, r.value) for r in logger.applied] == [
            ("Foo", "opaque", ""),
            ("Foo", "replaces", "Bar"),
        ]
        assert logger.skipped == []

    def test_unknown_directive_is_logged_not_sentinel(self):
        logger = DirectiveLogger()
        Annotations.from_comment(full(div("rustbindgen", "frobnicate")), logger)

        assert len(logger.skipped) == 1
        assert logger.skipped[0].reason is SkipReason.UNKNOWN_DIRECTIVE
        assert logger.skipped[0].detail == "frobnicate"

    def test_empty_marker_is_logged(self):
        logger = DirectiveLogger()
        result = Annotations.from_comment(full(div("rustbindgen")), logger)

        assert result is None
        assert [s.reason for s in logger.skipped] == [SkipReason.EMPTY_MARKER]

    def test_misplaced_sentinel_is_logged(self):
        logger = DirectiveLogger()
        result = Annotations.from_comment(full(div("opaque", "rustbindgen")), logger)

        assert result is None
        assert [s.reason for s in logger.skipped] == [SkipReason.SENTINEL_NOT_FIRST]

    def test_logging_does_not_change_result(self):
        comment = full(div("rustbindgen", "hide", "weird"), div("rustbindgen"))
        assert Annotations.from_comment(comment, DirectiveLogger()) == Annotations.from_comment(comment)
