"""YAML I/O for attribute definition files.

File layout:

    attributes:
      - name: id
        type: uuid
        primary_key: true
        allow_nil: false
        default: {module: uuid, function: uuid4}
      - name: tags
        type: [array, string]
        constraints: {max_length: 5, items: {max_length: 20}}
    create_timestamps: [inserted_at]
    update_timestamps:
      - updated_at
      - {name: touched_at, description: Last touch}

Timestamp entries are either a bare name or a mapping of overrides, and are
built from the matching preset schema table.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .core.models.attribute import PRESETS
from .errors import AttributeDefinitionError
from .transformer import TransformResult, compile_attribute


logger = logging.getLogger(__name__)

_SECTIONS = {
    "attributes": "attribute",
    "create_timestamps": "create_timestamp",
    "update_timestamps": "update_timestamp",
}


@dataclass
class RawDefinition:
    """One attribute definition as read from a file."""

    data: dict[str, Any]
    preset: str = "attribute"
    index: int = 0
    section: str = "attributes"

    @property
    def name(self) -> str | None:
        name = self.data.get("name")
        return name if isinstance(name, str) else None

    @property
    def location(self) -> str:
        return f"{self.section}[{self.index}]"


@dataclass
class CompileReport:
    """Per-attribute results for a definition file."""

    path: Path
    results: list[TransformResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.results)

    @property
    def errors(self) -> list[AttributeDefinitionError]:
        return [r.error for r in self.results if r.error is not None]

    @property
    def attributes(self) -> list:
        return [r.attribute for r in self.results if r.attribute is not None]


def parse_definitions(data: Any) -> list[RawDefinition]:
    """Split loaded YAML data into raw definitions tagged with their preset.

    Raises:
        ValueError: If the document is not a mapping of known sections, or a
            section is not a list of mappings (names for timestamp sections).
    """
    if data is None:
        return []
    if not isinstance(data, dict):
        raise ValueError("Definition file must be a mapping with an 'attributes' list")

    unknown = set(data) - set(_SECTIONS)
    if unknown:
        raise ValueError(
            f"Unknown section(s): {', '.join(sorted(unknown))}. "
            f"Expected: {', '.join(_SECTIONS)}"
        )

    definitions: list[RawDefinition] = []
    for section, preset in _SECTIONS.items():
        entries = data.get(section) or []
        if not isinstance(entries, list):
            raise ValueError(f"'{section}' must be a list")
        for i, entry in enumerate(entries):
            if isinstance(entry, str) and preset != "attribute":
                entry = {"name": entry}
            if not isinstance(entry, dict):
                raise ValueError(f"{section}[{i}] must be a mapping, got {entry!r}")
            definitions.append(
                RawDefinition(data=entry, preset=preset, index=i, section=section)
            )
    return definitions


def load_definitions(path: Path | str) -> list[RawDefinition]:
    """Load raw attribute definitions from a YAML file."""
    path = Path(path)

    with open(path) as f:
        data = yaml.safe_load(f)

    definitions = parse_definitions(data)
    logger.debug("Loaded %d definition(s) from %s", len(definitions), path)
    return definitions


def compile_definitions(definitions: list[RawDefinition], registry=None) -> list[TransformResult]:
    """Compile each raw definition independently, collecting every outcome."""
    results = []
    for raw in definitions:
        try:
            attribute = compile_attribute(raw.data, registry, PRESETS[raw.preset])
            results.append(TransformResult(raw.name, attribute=attribute))
        except AttributeDefinitionError as e:
            results.append(TransformResult(raw.name or raw.location, error=e))
    return results


def compile_file(path: Path | str, registry=None) -> CompileReport:
    """Load and compile every definition in a YAML file."""
    path = Path(path)
    results = compile_definitions(load_definitions(path), registry)
    failed = sum(1 for r in results if not r.ok)
    if failed:
        logger.info("%s: %d of %d attribute(s) invalid", path, failed, len(results))
    return CompileReport(path=path, results=results)
