from typing import FrozenSet, Optional
from pathlib import Path
import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from .exceptions import ConfigurationError

class CatalogConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    connection_string: Optional[str] = None  # e.g. hive://hiveserver:10000/default
    # HiveServer2 discovery, used instead of connection_string when set
    zookeeper_quorum: Optional[str] = None  # e.g. zk1:2181,zk2:2181,zk3:2181
    zookeeper_namespace: str = "hiveserver2"
    database: str = "default"
    username: Optional[str] = None
    password: Optional[str] = None
    # PyHive auth mechanism (NONE, LDAP, CUSTOM, KERBEROS)
    auth: Optional[str] = None

    @model_validator(mode="after")
    def _has_endpoint(self) -> "CatalogConfig":
        if not self.connection_string and not self.zookeeper_quorum:
            raise ValueError("catalog needs either connection_string or zookeeper_quorum")
        return self

class FilesystemConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    config_dir: Optional[Path] = None
    username: Optional[str] = None
    # WebHDFS URL(s), semicolon separated; overrides config_dir discovery
    url: Optional[str] = None
    timeout: float = 30.0

class PersistenceConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    connection_string: str
    table_name: str = "hive"

class CollectionConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    blacklist: FrozenSet[str] = frozenset()
    max_workers: int = Field(default=1, ge=1)
    # Defaults to max_workers when unset
    catalog_concurrency: Optional[int] = Field(default=None, ge=1)
    filesystem_concurrency: Optional[int] = Field(default=None, ge=1)

class RetryConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=1, ge=1)
    base_delay: float = Field(default=1.0, ge=0)
    max_delay: float = Field(default=30.0, ge=0)

class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="TABLECENSUS_",
        env_nested_delimiter="__",
    )

    catalog: CatalogConfig
    filesystem: FilesystemConfig = FilesystemConfig()
    persistence: Optional[PersistenceConfig] = None
    collection: CollectionConfig = CollectionConfig()
    retry: RetryConfig = RetryConfig()

    @classmethod
    def from_yaml(cls, config_path: Path) -> "AppConfig":
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                raw_config = yaml.safe_load(f) or {}
            return cls(**raw_config)
        except (ValidationError, yaml.YAMLError, TypeError) as e:
            raise ConfigurationError(f"Invalid configuration format: {e}")

    def require_persistence(self) -> PersistenceConfig:
        if self.persistence is None:
            raise ConfigurationError("'persistence' section is required to write snapshots")
        return self.persistence
