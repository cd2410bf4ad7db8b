"""
Used-key side file.

Writes a JSON list describing every theme variable the last generation pass
used, for tooling that wants to show or edit theme values.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from theme_preset.specs.theme import DEFAULT_THEME, UsedKeyRecord, VariableBinding

logger = logging.getLogger(__name__)


def build_key_records(bindings: Iterable[VariableBinding], prefix: str) -> list[UsedKeyRecord]:
    """
    Describe used bindings, one record per (category, name) in first-seen order.

    ``--un-preset-theme-colors-primary-100`` splits into category ``colors``
    and name ``primary-100``.
    """
    records: dict[tuple[str, str], UsedKeyRecord] = {}
    for binding in bindings:
        category, _, name = binding.name[len(prefix) + 1 :].partition("-")
        key = (category, name)
        if key in records:
            continue
        records[key] = UsedKeyRecord(
            category=category,
            name=name,
            variable_name=binding.name,
            default_value=binding.values.get(DEFAULT_THEME),
        )
    return list(records.values())


def write_key_file(bindings: Iterable[VariableBinding], prefix: str, output_path: Path) -> Path | None:
    """
    Write the used-key records to ``output_path``.

    Failures are logged and swallowed; generation never depends on this file.

    Returns:
        Path to the written file, or None on failure
    """
    records = build_key_records(bindings, prefix)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps([record.model_dump(by_alias=True) for record in records], indent=2),
            encoding="utf-8",
        )
    except OSError as e:
        logger.error("Failed to write theme key file %s: %s", output_path, e)
        return None

    logger.debug("Wrote %d theme key(s) to %s", len(records), output_path)
    return output_path
