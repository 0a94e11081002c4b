"""Configuration management for foilmesh.

Provides validated settings with environment variable support. Settings are
only read at the application boundary and turned into an immutable
:class:`~foilmesh.pipeline.GenerationRequest`; the geometry core never looks
at configuration.
"""

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic.types import PositiveFloat, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError, UnsupportedDescriptorError
from .geometry.descriptor import parse_descriptor
from .geometry.naca import SamplingSpec, Spacing, TrailingEdge
from .mesh.extrude import AnchorPolicy, ExtrusionSpec
from .pipeline import GenerationRequest


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="FOILMESH_LOG_")

    level: str = "INFO"
    format: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    file_path: Optional[Path] = None
    rotation: str = "10 MB"
    retention: str = "30 days"

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class GenerationConfig(BaseSettings):
    """Airfoil coordinate generation settings."""

    model_config = SettingsConfigDict(env_prefix="FOILMESH_GENERATION_", coerce_numbers_to_str=True)

    naca: str = "2412"
    points: int = Field(default=48, ge=2)
    spacing: Spacing = Spacing.COSINE
    chord: PositiveFloat = 1.0
    alpha: float = 0.0
    closed_trailing_edge: bool = False

    @field_validator("naca")
    @classmethod
    def validate_naca(cls, v):
        try:
            parse_descriptor(v)
        except UnsupportedDescriptorError as e:
            raise ValueError(str(e)) from e
        return v.strip()

    def to_sampling_spec(self) -> SamplingSpec:
        return SamplingSpec(
            points=self.points,
            spacing=self.spacing,
            chord=self.chord,
            alpha=self.alpha,
            trailing_edge=TrailingEdge.CLOSED if self.closed_trailing_edge else TrailingEdge.OPEN,
        )


class ExtrusionConfig(BaseSettings):
    """Extrusion settings."""

    model_config = SettingsConfigDict(env_prefix="FOILMESH_EXTRUSION_")

    span: float = Field(default=0.2, ge=0.0)
    twist_enabled: bool = True
    twist: float = 0.0
    scale_enabled: bool = False
    root_scale: PositiveFloat = 1.0
    tip_scale: PositiveFloat = 1.0
    sections: PositiveInt = 48
    angle_of_attack: float = 0.0
    anchor: AnchorPolicy = AnchorPolicy.CORNER

    def to_extrusion_spec(self) -> ExtrusionSpec:
        return ExtrusionSpec(
            span=self.span,
            twist_enabled=self.twist_enabled,
            twist=self.twist,
            scale_enabled=self.scale_enabled,
            root_scale=self.root_scale,
            tip_scale=self.tip_scale,
            sections=self.sections,
            angle_of_attack=self.angle_of_attack,
            anchor=self.anchor,
        )


class FoilMeshConfig(BaseSettings):
    """Main configuration combining all sections."""

    model_config = SettingsConfigDict(
        env_prefix="FOILMESH_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    extrusion: ExtrusionConfig = Field(default_factory=ExtrusionConfig)

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "FoilMeshConfig":
        """Load configuration from YAML file."""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise ConfigurationError(f"Configuration file not found: {yaml_path}")

        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                config_dict = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse {yaml_path}: {e}") from e

        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                details={"path": str(yaml_path), "type": type(config_dict).__name__}
            )

        try:
            return cls(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration in {yaml_path}",
                details={"errors": e.error_count()}
            ) from e

    def to_yaml(self, yaml_path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        with open(yaml_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)

    def to_request(self) -> GenerationRequest:
        """Build the immutable request this configuration describes."""
        return GenerationRequest(
            descriptor=self.generation.naca,
            sampling=self.generation.to_sampling_spec(),
            extrusion=self.extrusion.to_extrusion_spec(),
        )


def load_config(path: Optional[Union[str, Path]] = None) -> FoilMeshConfig:
    """Load configuration from ``path`` (YAML) or from the environment."""
    if path is not None:
        return FoilMeshConfig.from_yaml(path)
    return FoilMeshConfig()
