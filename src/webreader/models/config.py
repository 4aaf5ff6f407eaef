"""Pydantic configuration models for webreader."""

import re
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


_SIZE_UNITS = {"": 1, "b": 1, "kb": 1024, "mb": 1024**2, "gb": 1024**3}
_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([kmg]?b)?\s*$", re.IGNORECASE)


class ByteSize(int):
    """
    Response size limit, in bytes.

    Config files may write it as a plain number or with a unit:

        network:
          max_content_size: 5mb
    """

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> Any:
        from pydantic_core import core_schema

        return core_schema.no_info_plain_validator_function(cls._parse)

    @classmethod
    def _parse(cls, v: Any) -> int:
        match = _SIZE_PATTERN.match(v) if isinstance(v, str) else None
        if isinstance(v, int) and not isinstance(v, bool):
            size = v
        elif match:
            number, unit = match.groups()
            size = int(float(number) * _SIZE_UNITS[(unit or "").lower()])
        else:
            raise ValueError(f"Invalid size {v!r}: use bytes or a value like '512kb' or '50mb'")

        if size < 0:
            raise ValueError(f"Size must not be negative: {v!r}")
        return size


class NetworkConfig(BaseModel):
    """
    Configuration for the HTTP transport.

    Certificate validation is off by default so that self-signed and
    internal sites can be read. This is a compatibility setting, not a
    security measure.
    """

    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header sent with every request")
    accept: str = Field(DEFAULT_ACCEPT, description="Accept header sent with every request")
    timeout: float = Field(10.0, gt=0, description="Total request timeout in seconds")
    verify_ssl: bool = Field(False, description="Validate TLS certificates")
    max_content_size: ByteSize = Field(
        ByteSize(50 * 1024 * 1024),
        description="Maximum response size (e.g., '5mb')",
    )

    model_config = {"extra": "forbid"}


class ReaderConfig(BaseModel):
    """
    Root configuration model for webreader.

    Example:
        config = ReaderConfig(network=NetworkConfig(timeout=5))

    YAML format:
        network:
          timeout: 5
          user_agent: my-bot/1.0
        log_level: DEBUG
    """

    network: NetworkConfig = Field(default_factory=NetworkConfig)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "WARNING",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ReaderConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ReaderConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
