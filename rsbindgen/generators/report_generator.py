"""Annotation report generator for rsbindgen

Renders scanned descriptors as a text listing or a YAML document.
"""

from typing import Any, Dict, List, Optional

import yaml

from rsbindgen.core.options import OutputFormat, ReportOptions
from rsbindgen.ir.annotations import Annotations
from rsbindgen.ir.item import TypeDescriptor


def format_annotations(annotations: Optional[Annotations]) -> str:
    """Format the set fields of a record as space separated directives

    Args:
        annotations: Record to format, or None

    Returns:
        String like ``opaque replaces=Bar accessor=unsafe``; ``-`` if None

    Output example:
        opaque nocopy private=false
    """
    if annotations is None:
        return "-"

    parts = []
    if annotations.opaque:
        parts.append("opaque")
    if annotations.hide:
        parts.append("hide")
    if annotations.disallow_copy:
        parts.append("nocopy")
    if annotations.use_instead_of is not None:
        parts.append(f"replaces={annotations.use_instead_of}")
    if annotations.private_fields is not None:
        parts.append(f"private={str(annotations.private_fields).lower()}")
    if annotations.accessor_kind is not None:
        parts.append(f"accessor={annotations.accessor_kind.value}")
    # A marker whose only directives were unrecognized still yields a record
    return " ".join(parts) if parts else "(empty)"


class ReportGenerator:
    """Generates annotation reports from type descriptors"""

    def __init__(self, options: Optional[ReportOptions] = None) -> None:
        self.options = options or ReportOptions()

    def _selected(self, items: List[TypeDescriptor]) -> List[TypeDescriptor]:
        if self.options.include_unannotated:
            return list(items)
        return [item for item in items if item.is_annotated]

    def generate(self, items: List[TypeDescriptor]) -> str:
        """Render a report in the configured format

        Args:
            items: Descriptors in translation-unit order

        Returns:
            Report content as string
        """
        if self.options.output_format is OutputFormat.YAML:
            return self.generate_yaml(items)
        return self.generate_text(items)

    def generate_text(self, items: List[TypeDescriptor]) -> str:
        """Render one line per type, fields indented below it

        Output example:
            struct Foo: opaque replaces=Bar
              field x: accessor=unsafe
        """
        lines = []
        for item in self._selected(items):
            lines.append(f"{item.kind.value} {item.name}: {format_annotations(item.annotations)}")
            if not self.options.show_fields:
                continue
            for field in item.fields:
                if field.annotations is None and not self.options.include_unannotated:
                    continue
                lines.append(f"  field {field.name}: {format_annotations(field.annotations)}")
        return "\n".join(lines)

    def generate_yaml(self, items: List[TypeDescriptor]) -> str:
        entries = [self._item_to_dict(item) for item in self._selected(items)]
        return yaml.safe_dump({"items": entries}, sort_keys=False)

    def _item_to_dict(self, item: TypeDescriptor) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            "name": item.name,
            "kind": item.kind.value,
            "annotations": item.annotations.to_dict() if item.annotations else None,
        }
        if self.options.show_fields:
            fields = []
            for field in item.fields:
                if field.annotations is None and not self.options.include_unannotated:
                    continue
                fields.append({
                    "name": field.name,
                    "annotations": field.annotations.to_dict() if field.annotations else None,
                })
            entry["fields"] = fields
        return entry
