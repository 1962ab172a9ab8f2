"""Model definitions and schema loading."""

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from modelseed.exceptions import DescriptorError, SchemaLoadError
from modelseed.models import AttributeDescriptor

logger = logging.getLogger(__name__)


@dataclass
class ModelDefinition:
    """
    Model metadata as registered by the host.

    Attributes:
        name: Model name
        attributes: Raw attribute definitions (name -> descriptor)
        junction_table: Whether the model only links two others
        table: Store table name (defaults to the model name)
    """

    name: str
    attributes: dict[str, Any] = field(default_factory=dict)
    junction_table: bool = False
    table: str | None = None

    @property
    def table_name(self) -> str:
        return self.table or self.name

    @property
    def descriptors(self) -> list[AttributeDescriptor]:
        """Normalized descriptors, in definition order."""
        return [AttributeDescriptor.parse(name, raw) for name, raw in self.attributes.items()]

    @property
    def relations(self) -> list[AttributeDescriptor]:
        """Descriptors of to-one and to-many relation attributes."""
        return [d for d in self.descriptors if d.is_relation]

    @property
    def primary_key(self) -> str:
        """
        Get primary key attribute name.

        Returns:
            First attribute flagged primaryKey, otherwise 'id'
        """
        for descriptor in self.descriptors:
            if descriptor.primary_key:
                return descriptor.name
        return "id"

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "ModelDefinition":
        """
        Build a model from its schema-file entry.

        Accepts `junction_table`, `junctionTable` or `meta.junctionTable`.
        """
        if not isinstance(data, Mapping):
            raise SchemaLoadError(f"model '{name}'", "model entry must be a mapping")

        attributes = data.get("attributes", {})
        if not isinstance(attributes, Mapping):
            raise SchemaLoadError(f"model '{name}'", "'attributes' must be a mapping")

        meta = data.get("meta") or {}
        if not isinstance(meta, Mapping):
            raise SchemaLoadError(f"model '{name}'", "'meta' must be a mapping")

        junction = bool(
            data.get("junction_table")
            or data.get("junctionTable")
            or meta.get("junctionTable")
            or meta.get("junction_table")
        )
        return cls(
            name=name,
            attributes=dict(attributes),
            junction_table=junction,
            table=data.get("table"),
        )


class Schema:
    """
    Registry of models to seed, in declaration order.

    Example:
        >>> schema = Schema.from_dict({"models": {"User": {"attributes": {"name": "string"}}}})
        >>> [m.name for m in schema]
        ['User']
    """

    def __init__(self, models: list[ModelDefinition] | None = None):
        self._models: dict[str, ModelDefinition] = {}
        for model in models or []:
            self.add(model)

    def add(self, model: ModelDefinition) -> None:
        self._models[model.name] = model

    def get(self, name: str) -> ModelDefinition | None:
        return self._models.get(name)

    def __getitem__(self, name: str) -> ModelDefinition:
        return self._models[name]

    def __contains__(self, name: object) -> bool:
        return name in self._models

    def __iter__(self) -> Iterator[ModelDefinition]:
        return iter(self._models.values())

    def __len__(self) -> int:
        return len(self._models)

    @property
    def names(self) -> list[str]:
        return list(self._models)

    def seedable(self) -> list[ModelDefinition]:
        """Models that receive generated records (junction tables excluded)."""
        return [model for model in self if not model.junction_table]

    def validate(self) -> None:
        """
        Parse every descriptor once so malformed entries fail before a run.

        Raises:
            SchemaLoadError: If any descriptor cannot be interpreted
        """
        for model in self:
            try:
                model.descriptors
            except DescriptorError as e:
                raise SchemaLoadError(f"model '{model.name}'", str(e)) from e

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], source: str = "mapping") -> "Schema":
        """
        Build a schema from a `{"models": {name: entry}}` mapping.

        Args:
            data: Parsed schema document
            source: Description of where data came from (for errors)

        Returns:
            Schema instance

        Raises:
            SchemaLoadError: If the document does not have the expected shape
        """
        if not isinstance(data, Mapping) or not isinstance(data.get("models"), Mapping):
            raise SchemaLoadError(source, "expected a top-level 'models' mapping")

        schema = cls(
            [ModelDefinition.from_dict(name, entry) for name, entry in data["models"].items()]
        )
        schema.validate()
        logger.debug(f"Loaded {len(schema)} models from {source}")
        return schema

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Schema":
        """
        Load schema from YAML file.

        Example:
            >>> schema = Schema.from_yaml("db/schema.yaml")
        """
        path = Path(path)
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SchemaLoadError(str(path), f"invalid YAML: {e}") from e
        return cls.from_dict(data, source=str(path))

    @classmethod
    def from_json(cls, path: str | Path) -> "Schema":
        """
        Load schema from JSON file.

        Example:
            >>> schema = Schema.from_json("db/schema.json")
        """
        path = Path(path)
        try:
            with open(path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SchemaLoadError(str(path), f"invalid JSON: {e}") from e
        return cls.from_dict(data, source=str(path))

    @classmethod
    def from_file(cls, path: str | Path) -> "Schema":
        """
        Load schema from a YAML or JSON file, chosen by suffix.

        Raises:
            FileNotFoundError: If the file doesn't exist
            SchemaLoadError: If the suffix is unsupported or content is malformed
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Schema file not found: {path}")

        suffix = path.suffix.lower()
        if suffix in (".yaml", ".yml"):
            return cls.from_yaml(path)
        if suffix == ".json":
            return cls.from_json(path)
        raise SchemaLoadError(str(path), f"unsupported file type '{suffix}'")
