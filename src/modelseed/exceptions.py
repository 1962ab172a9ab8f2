"""Custom exceptions with helpful error messages."""


class ModelSeedError(Exception):
    """Base exception for modelseed errors."""

    pass


class DescriptorError(ModelSeedError):
    """Attribute descriptor cannot be interpreted."""

    def __init__(self, attribute: str, reason: str):
        self.attribute = attribute
        self.reason = reason
        super().__init__(
            f"Invalid descriptor for attribute '{attribute}': {reason}\n\n"
            f"Suggestions:\n"
            f"1. Use a bare type name, e.g. '{attribute}': 'string'\n"
            f"2. Or a mapping, e.g. '{attribute}': {{'type': 'integer', 'min': 0}}\n"
            f"3. Check that numeric bounds satisfy min <= max"
        )


class SchemaLoadError(ModelSeedError):
    """Schema file or mapping could not be loaded."""

    def __init__(self, source: str, reason: str):
        self.source = source
        super().__init__(
            f"Could not load schema from {source}: {reason}\n\n"
            f"Suggestions:\n"
            f"1. The top-level key must be 'models'\n"
            f"2. Each model needs an 'attributes' mapping\n"
            f"3. Supported formats: .yaml, .yml, .json"
        )


class PersistenceError(ModelSeedError):
    """Bulk create for a model failed; the seeding run was aborted."""

    def __init__(self, model: str, cause: BaseException):
        self.model = model
        self.cause = cause
        super().__init__(
            f"Creating seed records for model '{model}' failed: {cause}\n\n"
            f"Records already created for other models were left in place."
        )


class AssociationError(ModelSeedError):
    """Relation could not be resolved to a created peer record."""

    def __init__(self, model: str, attribute: str, target: str):
        self.model = model
        self.attribute = attribute
        self.target = target
        super().__init__(
            f"Could not resolve relation '{model}.{attribute}' -> '{target}': "
            f"no created '{target}' records.\n\n"
            f"Suggestions:\n"
            f"1. Check that '{target}' is declared in the schema\n"
            f"2. Junction tables are never seeded and cannot be relation targets"
        )


class RecordNotFoundError(ModelSeedError):
    """Update selector matched no stored record."""

    def __init__(self, model: str, selector: dict):
        self.model = model
        self.selector = selector
        super().__init__(f"No '{model}' record matches {selector!r}")


class CapabilityNotFoundError(ModelSeedError):
    """Requested capability is not registered with the host."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        listed = ", ".join(sorted(available)) or "none"
        super().__init__(
            f"Capability '{name}' is not registered (available: {listed})"
        )


class SignalError(ModelSeedError):
    """Single-fire signal was subscribed more than once."""

    pass


class MissingPrimaryKeyError(ModelSeedError):
    """Created record came back from the store without its primary key."""

    def __init__(self, model: str, primary_key: str):
        self.model = model
        self.primary_key = primary_key
        super().__init__(
            f"Created '{model}' record has no '{primary_key}' value, "
            f"so its relations cannot be set.\n\n"
            f"Suggestions:\n"
            f"1. Make the backend return the assigned primary key from create()\n"
            f"2. Flag the key attribute with primaryKey if it is not named 'id'"
        )
