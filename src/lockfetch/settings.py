"""
Configuration for lockfetch paths, concurrency and transports.
"""

from pathlib import Path
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings using Pydantic for validation
    and environment variable support.

    Instances are frozen; use :meth:`with_overrides` to derive a new value.
    """

    # Working directory holding the lock file and the vendor tree
    root_dir: Path = Field(default_factory=Path.cwd)

    vendor_dir: Optional[Path] = Field(default=None, validate_default=True)
    lock_file: Optional[Path] = Field(default=None, validate_default=True)

    # Fetch settings
    max_workers: int = Field(
        default=4, ge=1, description="Maximum number of concurrent fetch units"
    )

    request_timeout: Optional[float] = Field(
        default=None, description="HTTP timeout in seconds, None waits forever"
    )

    archive_api_url: str = Field(
        default="https://api.github.com",
        description="Base URL of the per-revision tarball API",
    )

    git_binary: str = Field(default="git", description="git executable")

    # General settings
    verbose: bool = Field(default=False, description="Log every written path")

    log_level: str = Field(default="INFO", description="Logging level")

    model_config = {
        "env_prefix": "LOCKFETCH_",
        "case_sensitive": False,
        "frozen": True,
    }

    @field_validator("vendor_dir")
    @classmethod
    def set_vendor_dir(cls, v, info):
        return v or info.data.get("root_dir", Path.cwd()) / "vendor"

    @field_validator("lock_file")
    @classmethod
    def set_lock_file(cls, v, info):
        return v or info.data.get("root_dir", Path.cwd()) / "Gopkg.lock"

    @field_validator("archive_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def with_overrides(self, **overrides: Any) -> "Settings":
        """
        Return a copy with the given non-None fields replaced.

        Paths derived from ``root_dir`` are recomputed unless they were set
        explicitly.
        """
        data = {name: getattr(self, name) for name in self.model_fields_set}
        data.update({k: v for k, v in overrides.items() if v is not None})
        return type(self)(**data)
