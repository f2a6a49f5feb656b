"""Directive logger for rsbindgen

Tracks which directives were applied while scanning comment trees, which
attributes were skipped, and provides summary statistics.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass
from enum import Enum


class SkipReason(Enum):
    """Why an attribute or marker was not applied"""
    UNKNOWN_DIRECTIVE = "unknown_directive"
    EMPTY_MARKER = "empty_marker"
    SENTINEL_NOT_FIRST = "sentinel_not_first"


@dataclass
class DirectiveRecord:
    """Record of a single applied directive"""
    item: Optional[str]
    directive: str
    value: str


@dataclass
class SkipRecord:
    """Record of a skipped attribute or marker"""
    reason: SkipReason
    item: Optional[str]
    detail: str


class DirectiveLogger:
    """Logs directive decisions and provides summaries"""

    def __init__(self) -> None:
        self.applied: List[DirectiveRecord] = []
        self.skipped: List[SkipRecord] = []
        self.warnings: List[str] = []
        self._current_item: Optional[str] = None

    def set_item(self, name: Optional[str]) -> None:
        """Set the construct name attached to subsequent records

        Args:
            name: Construct name, or None to clear
        """
        self._current_item = name

    @property
    def current_item(self) -> Optional[str]:
        return self._current_item

    def log_directive(self, directive: str, value: str) -> None:
        """Log an applied directive

        Args:
            directive: Directive name (e.g. "opaque")
            value: Raw attribute value
        """
        self.applied.append(DirectiveRecord(
            item=self._current_item,
            directive=directive,
            value=value
        ))

    def log_skipped(self, reason: SkipReason, detail: str) -> None:
        """Log a skipped attribute or marker

        Args:
            reason: Why it was skipped
            detail: Attribute name or marker description
        """
        self.skipped.append(SkipRecord(
            reason=reason,
            item=self._current_item,
            detail=detail
        ))

    def log_warning(self, message: str) -> None:
        self.warnings.append(message)

    def get_summary(self) -> Dict:
        """Get summary statistics

        Returns:
            Dictionary with directive statistics
        """
        applied_by_directive: Dict[str, int] = {}
        for record in self.applied:
            applied_by_directive[record.directive] = applied_by_directive.get(record.directive, 0) + 1

        skipped_by_reason: Dict[SkipReason, int] = {}
        for skip in self.skipped:
            skipped_by_reason[skip.reason] = skipped_by_reason.get(skip.reason, 0) + 1

        return {
            "total_applied": len(self.applied),
            "applied_by_directive": applied_by_directive,
            "annotated_items": len(self.get_annotated_items()),
            "total_skipped": len(self.skipped),
            "skipped_by_reason": skipped_by_reason,
            "total_warnings": len(self.warnings)
        }

    def print_summary(self) -> str:
        """Generate formatted summary string

        Returns:
            Formatted summary as string
        """
        summary = self.get_summary()
        lines = []

        lines.append("=== Directive Summary ===")
        lines.append(f"Applied directives: {summary['total_applied']}")
        lines.append(f"Annotated items: {summary['annotated_items']}")
        lines.append("")

        if summary['applied_by_directive']:
            lines.append("Applied by directive:")
            for directive, count in sorted(summary['applied_by_directive'].items()):
                lines.append(f"  {directive}: {count}")
            lines.append("")

        lines.append(f"Skipped: {summary['total_skipped']}")

        if summary['skipped_by_reason']:
            lines.append("Skipped by reason:")
            for reason, count in summary['skipped_by_reason'].items():
                lines.append(f"  {reason.value}: {count}")
            lines.append("")

        if self.skipped:
            lines.append("Skipped details (top 10):")
            for skip in self.skipped[:10]:
                item_part = f"'{skip.item}': " if skip.item else ""
                lines.append(f"  {skip.reason.value} - {item_part}{skip.detail}")
            lines.append("")

        lines.append(f"Warnings: {summary['total_warnings']}")

        if self.warnings:
            lines.append("Warning details:")
            for warning in self.warnings:
                lines.append(f"  {warning}")

        return "\n".join(lines)

    def get_annotated_items(self) -> List[str]:
        """Get names of items that received at least one directive, in order"""
        seen: List[str] = []
        for record in self.applied:
            if record.item and record.item not in seen:
                seen.append(record.item)
        return seen

    def clear(self) -> None:
        """Clear all logged records"""
        self.applied.clear()
        self.skipped.clear()
        self.warnings.clear()
        self._current_item = None
