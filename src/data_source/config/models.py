from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class FileRotationSettings(BaseModel):
    """
    Date-based rotation settings (daily).

    This maps cleanly to Python's standard library TimedRotatingFileHandler behavior.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    backup_count: int = 7


class FileLoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = ""
    rotation: FileRotationSettings = FileRotationSettings()


class LoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    level: str = "INFO"
    file: FileLoggingSettings = FileLoggingSettings()


class InlineSourceSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["inline"]
    text: str


class FileSourceSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["file"]
    path: str


class RemoteSourceSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["remote"]
    url: str
    proxy: Optional[str] = None
    # Ordered name/value pairs; a name may repeat.
    headers: List[Tuple[str, str]] = Field(default_factory=list)
    use_proxy_by_default: bool = False
    size_limit: Optional[int] = Field(default=None, ge=0)
    timeout_seconds: float = Field(default=30.0, gt=0)

    refresh_interval_seconds: Optional[float] = Field(default=None, ge=0)
    cache_file: Optional[str] = None


SingleSourceSettings = Annotated[
    Union[InlineSourceSettings, FileSourceSettings, RemoteSourceSettings],
    Field(discriminator="type"),
]


class PlainFileSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["plain_file"]


class FoldersSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["folders"]
    directories: List[str] = Field(default_factory=list)
    include_cwd: bool = False


class ArchiveSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["archive"]
    # Tar file loaded fully into memory when the resolver is built.
    path: str


class NameMapSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["name_map"]
    sources: Dict[str, SingleSourceSettings] = Field(default_factory=dict)


DataSourceSettings = Annotated[
    Union[PlainFileSettings, FoldersSettings, ArchiveSettings, NameMapSettings],
    Field(discriminator="kind"),
]


class AppConfig(BaseModel):
    """Effective runtime configuration after applying all precedence rules."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    logging: LoggingSettings = LoggingSettings()
    data_source: DataSourceSettings


@dataclass(frozen=True, slots=True)
class ConfigLoadRequest:
    """
    Optional inputs for a configuration loader.

    Implementations may use these to control where configuration is read from.
    """

    yaml_path: str = "data/config/config.yaml"
    env_prefix: str = "DATA_SOURCE__"
    dotenv_path: Optional[str] = "data/.env"
