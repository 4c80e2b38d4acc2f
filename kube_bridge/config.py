"""Static configuration for node ownership arbitration and annotation encoding."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from kube_bridge.constants import MAX_ANNOTATIONS_BYTES
from kube_bridge.exceptions import ConfigurationError
from kube_bridge.logging_config import get_logger

logger = get_logger(__name__)


class BridgeConfig(BaseModel):
    """Process-lifetime configuration.

    Attributes:
        farzones: Ordered zone ids reserved for the native Kubernetes scheduler
        tolerated_taint_keys: Taint keys the legacy scheduler may ignore, besides
            the scheduler selector taint
        include_job_descriptor: Whether to write the job descriptor annotation
        max_annotations_bytes: Size budget of a pod's annotation map
    """

    model_config = ConfigDict(frozen=True)

    farzones: tuple[str, ...] = ()
    tolerated_taint_keys: frozenset[str] = frozenset()
    include_job_descriptor: bool = True
    max_annotations_bytes: int = Field(default=MAX_ANNOTATIONS_BYTES, gt=0)

    @field_validator("farzones")
    @classmethod
    def validate_farzones(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Validate farzone ids are not blank."""
        for zone in v:
            if not zone.strip():
                raise ValueError("farzone ids cannot be blank")
        return v

    @field_validator("tolerated_taint_keys")
    @classmethod
    def validate_tolerated_taint_keys(cls, v: frozenset[str]) -> frozenset[str]:
        """Validate tolerated taint keys are not empty."""
        if any(not key for key in v):
            raise ValueError("tolerated taint keys cannot be empty")
        return v

    def to_dict(self) -> dict:
        """Convert to the YAML file layout."""
        return {
            "farzones": list(self.farzones),
            "tolerated_taint_keys": sorted(self.tolerated_taint_keys),
            "include_job_descriptor": self.include_job_descriptor,
            "max_annotations_bytes": self.max_annotations_bytes,
        }

    def save(self, path: str | Path) -> None:
        """Save configuration to YAML file."""
        with open(path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False)

    @classmethod
    def load(cls, path: str | Path) -> "BridgeConfig":
        """Load configuration from YAML file.

        Raises:
            ConfigurationError: If the file is missing, empty or invalid
        """
        path = Path(path)
        logger.debug(f"Loading configuration from {path}")

        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {path}",
                f"Expected location: {path.absolute()}",
            )

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse configuration file: {path}", str(e))

        if data is None:
            raise ConfigurationError(
                f"Configuration file is empty: {path}",
                "Set at least 'farzones' and 'tolerated_taint_keys'",
            )
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {path}",
                f"Got {type(data).__name__}",
            )

        try:
            config = cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {path}", str(e))

        logger.info(
            f"Loaded configuration: {len(config.farzones)} farzones, "
            f"{len(config.tolerated_taint_keys)} tolerated taint keys"
        )
        return config
