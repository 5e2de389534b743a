"""Configuration settings for svgextruder."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class FlattenConfig(BaseModel):
    """Configuration for curve flattening."""

    default_resolution: int = Field(
        default=64,
        ge=1,
        le=4096,
        description="Samples per curved command when no detail level is chosen",
    )


class DetailConfig(BaseModel):
    """Tunable constants for detail level planning.

    The defaults were chosen empirically. They bound tessellation so that
    adversarial input (thousands of tiny curves) cannot blow up vertex counts.
    """

    curve_weight: int = Field(
        default=10,
        ge=1,
        description="Complexity weight of one curve command relative to a vertex",
    )
    resolution_divisor: float = Field(default=5.0, gt=0.0)
    min_resolution: int = Field(default=32, ge=1)
    max_resolution: int = Field(default=128, ge=1)
    resolution_ceiling: int = Field(
        default=512,
        ge=1,
        le=4096,
        description="Global cap applied to every ladder rung",
    )
    depth_divisor: float = Field(default=20.0, gt=0.0)
    min_extrude_depth: float = Field(default=0.5, gt=0.0)
    max_extrude_depth: float = Field(default=5.0, gt=0.0)
    bevel_curve_threshold: int = Field(
        default=5,
        ge=0,
        description="Bevel only shapes with more curve commands than this",
    )
    heavy_bevel_curve_threshold: int = Field(default=10, ge=0)
    light_bevel_thickness: float = Field(default=0.1, ge=0.0)
    heavy_bevel_thickness: float = Field(default=0.3, ge=0.0)
    light_bevel_size: float = Field(default=0.05, ge=0.0)
    heavy_bevel_size: float = Field(default=0.2, ge=0.0)
    min_bevel_segments: int = Field(default=2, ge=1)
    max_bevel_segments: int = Field(default=8, ge=1)
    steps_divisor: float = Field(default=50.0, gt=0.0)
    min_depth_steps: int = Field(default=1, ge=1)
    max_depth_steps: int = Field(default=4, ge=1)
    default_vertex_budget: int = Field(
        default=200_000,
        ge=1,
        description="Vertex budget used when the caller does not give one",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "DetailConfig":
        if self.min_resolution > self.max_resolution:
            raise ValueError("min_resolution must not exceed max_resolution")
        if self.max_resolution > self.resolution_ceiling:
            raise ValueError("max_resolution must not exceed resolution_ceiling")
        if self.min_extrude_depth > self.max_extrude_depth:
            raise ValueError("min_extrude_depth must not exceed max_extrude_depth")
        if self.min_bevel_segments > self.max_bevel_segments:
            raise ValueError("min_bevel_segments must not exceed max_bevel_segments")
        if self.min_depth_steps > self.max_depth_steps:
            raise ValueError("min_depth_steps must not exceed max_depth_steps")
        return self


class ProcessingConfig(BaseModel):
    """Configuration for batch path processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto, 1 = inline)",
    )
    build_ladders: bool = Field(
        default=True,
        description="Compute the full Low..Ultra ladder for every outline",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class ExtruderSettings(BaseModel):
    """Main application settings."""

    flatten: FlattenConfig = Field(default_factory=FlattenConfig)
    detail: DetailConfig = Field(default_factory=DetailConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ExtruderSettings:
    """Get default application settings."""
    return ExtruderSettings()
