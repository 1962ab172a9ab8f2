"""
Configuration management for modelseed.

Loads and validates configuration from modelseed.toml files and
MODELSEED_* environment variables using Pydantic.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILENAME = "modelseed.toml"


class DatabaseConfig(BaseSettings):
    """Target database for DirectBackend runs."""

    model_config = SettingsConfigDict(env_prefix="MODELSEED_DATABASE_")

    url: str = Field(
        default="postgresql://localhost/myproject_dev",
        description="PostgreSQL connection URL",
    )
    schema_name: str = Field(default="public", description="Schema holding the seeded tables")
    batch_size: int = Field(default=100, ge=1, description="Rows per INSERT statement")


class SeedConfig(BaseSettings):
    """Seeding run configuration."""

    model_config = SettingsConfigDict(env_prefix="MODELSEED_")

    environment: Optional[str] = Field(
        default=None,
        description="Current environment; seeding runs only when it matches required_environment",
    )
    required_environment: str = Field(
        default="development", description="Environment in which seeding is allowed"
    )
    iterations: int = Field(default=20, ge=1, description="Records generated per model")
    collection_size: int = Field(
        default=3, ge=1, description="Peer identifiers picked per to-many relation"
    )
    max_workers: Optional[int] = Field(
        default=None, ge=1, description="Worker threads for creates and updates"
    )

    def is_enabled(self) -> bool:
        """Whether the environment flag allows seeding (case-insensitive)."""
        if not self.environment:
            return False
        return self.environment.lower() == self.required_environment.lower()


class Config(BaseSettings):
    """Main configuration for modelseed."""

    model_config = SettingsConfigDict(env_prefix="MODELSEED_")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    seed: SeedConfig = Field(default_factory=SeedConfig)

    @classmethod
    def from_toml(cls, path: Path | str) -> Config:
        """
        Read [database] and [seed] sections from a TOML file.

        Args:
            path: Path to a modelseed.toml file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If path does not exist
            ValueError: If the TOML is malformed or a value fails validation
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        # File values win; keys a section omits still come from the environment
        return cls(
            database=DatabaseConfig(**data.get("database", {})),
            seed=SeedConfig(**data.get("seed", {})),
        )

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> Config:
        """
        Load the nearest modelseed.toml.

        The first match wins, checking start_dir and then each of its
        ancestors up to the filesystem root.

        Args:
            start_dir: Where the search begins (current directory if omitted)

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If no directory on the way up has the file
        """
        if start_dir is None:
            start_dir = Path.cwd()

        base = Path(start_dir).resolve()
        for directory in (base, *base.parents):
            candidate = directory / CONFIG_FILENAME
            if candidate.is_file():
                return cls.from_toml(candidate)

        raise FileNotFoundError(
            f"No {CONFIG_FILENAME} found in {start_dir} or parent directories."
        )

    def to_toml(self, path: Path | str) -> None:
        """
        Save settings as a modelseed.toml file.

        The environment flag is not written; it is read from
        MODELSEED_ENVIRONMENT at run time.

        Args:
            path: Path to write modelseed.toml
        """
        config_path = Path(path)

        max_workers = (
            f"max_workers = {self.seed.max_workers}\n" if self.seed.max_workers else ""
        )

        toml_content = f"""# modelseed configuration

[database]
url = "{self.database.url}"
schema_name = "{self.database.schema_name}"
batch_size = {self.database.batch_size}

[seed]
required_environment = "{self.seed.required_environment}"
iterations = {self.seed.iterations}
collection_size = {self.seed.collection_size}
{max_workers}"""

        config_path.write_text(toml_content)


def load_config(path: Path | str | None = None) -> Config:
    """
    Load configuration from path, or search for modelseed.toml.

    Falls back to defaults (plus environment variables) when no file exists.
    """
    if path is not None:
        return Config.from_toml(path)
    try:
        return Config.find_and_load()
    except FileNotFoundError:
        return Config()
