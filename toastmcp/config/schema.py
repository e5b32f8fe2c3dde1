"""Configuration schema using Pydantic.

Single data model for runtime settings, persisted to ~/.toastmcp/config.json
and overridable through TOASTMCP_* environment variables.
"""

from pathlib import Path

from pydantic import BaseModel, Field, ConfigDict
from pydantic_settings import BaseSettings

from toastmcp.utils.helpers import get_bundled_dir, get_program_dir


class AssetsConfig(BaseModel):
    """Where icons/ and sounds/ are looked up."""
    # Empty means: program directory first, then the bundled source root.
    search_dirs: list[str] = Field(default_factory=list)


class AudioConfig(BaseModel):
    """Audio normalization settings."""
    volume: float = 0.7  # Attenuation applied to sound files before playback
    cache_dir: str | None = None  # Defaults to <program dir>/cache


class ServerConfig(BaseModel):
    """Identity reported by initialize."""
    name: str = "toastmcp"
    protocol_version: str = "2024-11-05"  # Used when the client does not send one


class LoggingConfig(BaseModel):
    """Loguru sinks. stdout is reserved for the protocol."""
    level: str = "INFO"
    file: bool = True  # Rotating file under ~/.toastmcp/logs


class Config(BaseSettings):
    """Root configuration for toastmcp."""
    assets: AssetsConfig = Field(default_factory=AssetsConfig)
    audio: AudioConfig = Field(default_factory=AudioConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def asset_search_dirs(self) -> list[Path]:
        """Resolved asset search directories, in lookup order."""
        if self.assets.search_dirs:
            return [Path(p).expanduser() for p in self.assets.search_dirs]
        return [get_program_dir(), get_bundled_dir()]

    @property
    def audio_cache_dir(self) -> Path:
        """Directory for derived (volume-scaled) audio files."""
        if self.audio.cache_dir:
            return Path(self.audio.cache_dir).expanduser()
        return get_program_dir() / "cache"

    model_config = ConfigDict(
        env_prefix="TOASTMCP_",
        env_nested_delimiter="__"
    )
