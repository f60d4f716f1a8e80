"""
Pydantic configuration schema for promptduel.

This module defines the application configuration models with validation.
Model connection settings and prompts live in the settings store, not here.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Orchestrator Configuration
# =============================================================================


class OrchestratorConfig(BaseModel):
    """Tool-calling loop and streaming configuration."""

    model_config = ConfigDict(extra="allow")

    max_iterations: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum model round-trips per orchestration run",
    )
    chunk_count: int = Field(
        default=15,
        ge=1,
        le=500,
        description="Target number of chunks for simulated streaming",
    )
    chunk_delay: float = Field(
        default=0.03,
        ge=0.0,
        le=5.0,
        description="Delay in seconds before each streamed chunk",
    )
    request_timeout: Optional[float] = Field(
        default=60.0,
        gt=0.0,
        le=600.0,
        description="Timeout in seconds for one completion request (None = no limit)",
    )


# =============================================================================
# Event Bus Configuration
# =============================================================================


class EventsConfig(BaseModel):
    """Status event bus configuration."""

    model_config = ConfigDict(extra="allow")

    max_events: int = Field(default=50, ge=1, le=10000)


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    show_path: bool = False


# =============================================================================
# Root Configuration Model
# =============================================================================


class Config(BaseModel):
    """
    Root configuration model for promptduel.

    Loaded from defaults, the YAML config file and PROMPTDUEL_* environment
    variables, merged in that order.
    """

    model_config = ConfigDict(extra="allow")

    orchestrator: OrchestratorConfig = Field(default_factory=OrchestratorConfig)
    events: EventsConfig = Field(default_factory=EventsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
