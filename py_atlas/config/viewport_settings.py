"""
Configuration for interactive map viewports.

The world canvas size and zoom limits are explicit values handed to each
viewport controller, so independent viewports can use different world sizes.
"""

from pydantic import BaseModel, Field, model_validator

from .config import Settings, settings as default_settings


class WorldCanvas(BaseModel):
    """Fixed logical size of the world drawing area."""

    width: float = Field(default=1000, gt=0, description="World width in world units")
    height: float = Field(default=600, gt=0, description="World height in world units")


class ViewportConfig(BaseModel):
    """Zoom limits and step factors for a viewport controller."""

    world: WorldCanvas = Field(default_factory=WorldCanvas)
    min_dim: float = Field(default=200, gt=0, description="Smallest visible width/height")
    max_dim_multiplier: float = Field(default=3, gt=0, description="Largest visible size as a multiple of world width")
    wheel_zoom_out_factor: float = Field(default=1.1, gt=1, description="Wheel step zooming out")
    wheel_zoom_in_factor: float = Field(default=0.9, gt=0, lt=1, description="Wheel step zooming in")
    button_zoom_in_factor: float = Field(default=0.8, gt=0, lt=1, description="Zoom-in control factor")
    button_zoom_out_factor: float = Field(default=1.25, gt=1, description="Zoom-out control factor")

    @property
    def max_dim(self) -> float:
        """Largest visible width/height in world units."""
        return self.world.width * self.max_dim_multiplier

    @model_validator(mode="after")
    def check_limits(self) -> "ViewportConfig":
        if self.min_dim > self.max_dim:
            raise ValueError("min_dim must not exceed max_dim")
        return self

    @classmethod
    def from_settings(cls, source: Settings = None, **overrides) -> "ViewportConfig":
        """Build a config from application settings, with optional field overrides."""
        source = source or default_settings
        values = dict(
            world=WorldCanvas(width=source.world_width, height=source.world_height),
            min_dim=source.min_viewport_dim,
            max_dim_multiplier=source.max_viewport_multiplier,
            wheel_zoom_out_factor=source.wheel_zoom_out_factor,
            wheel_zoom_in_factor=source.wheel_zoom_in_factor,
            button_zoom_in_factor=source.button_zoom_in_factor,
            button_zoom_out_factor=source.button_zoom_out_factor,
        )
        values.update(overrides)
        return cls(**values)
