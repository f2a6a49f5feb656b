"""Report options for rsbindgen

Options come from a YAML config file and from ``KEY=VALUE`` command line
specs; command line values are applied last and win.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, List

import yaml


class OutputFormat(Enum):
    """Report output format"""
    TEXT = "text"
    YAML = "yaml"


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: Any):
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return None


@dataclass
class ReportOptions:
    """Options controlling the annotation report

    Attributes:
        output_format: Text listing or YAML document
        include_unannotated: Also list items without any directive
        show_fields: List field annotations under their type
    """
    output_format: OutputFormat = OutputFormat.TEXT
    include_unannotated: bool = False
    show_fields: bool = True

    def set(self, key: str, value: Any) -> bool:
        """Set one option from a raw value

        Args:
            key: Option name (``format`` is accepted for ``output_format``)
            value: Raw value from YAML or the command line

        Returns:
            True if the option was recognized and the value parsed
        """
        key = key.strip().replace("-", "_")
        if key in ("format", "output_format"):
            formats = {f.value: f for f in OutputFormat}
            text = str(value).strip().lower()
            if text not in formats:
                return False
            self.output_format = formats[text]
            return True
        if key in ("include_unannotated", "show_fields"):
            parsed = _parse_bool(value)
            if parsed is None:
                return False
            setattr(self, key, parsed)
            return True
        return False

    def load_from_cli(self, specs: List[str]) -> None:
        """Load options from CLI argument specs.

        Parses specs like: ["format=yaml", "include_unannotated=true"]

        Args:
            specs: List of "key=value" strings
        """
        for spec in specs:
            if '=' not in spec:
                continue
            key, value = spec.split('=', 1)
            self.set(key, value)

    def load_from_yaml(self, path: Path) -> None:
        """Load options from the ``report`` section of a YAML config file.

        Args:
            path: Path to YAML config file
        """
        if not path.exists():
            return

        with open(path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)

        if not config or not isinstance(config, dict) or 'report' not in config:
            return

        for key, value in (config.get('report') or {}).items():
            self.set(str(key), value)
