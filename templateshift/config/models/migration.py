"""Template migration configuration models."""

from pydantic import BaseModel, Field

DEFAULT_ALIAS_RULES = [
    "hero_to_header",
    "header_to_hero",
    "projects_to_work",
    "work_to_projects",
]


class MigrationLoggingConfig(BaseModel):
    """Per-section migration logging."""

    log_mapped_sections: bool = Field(
        default=False, description="Log every directly mapped section"
    )
    log_skipped_sections: bool = Field(
        default=True, description="Log sections dropped by a migration"
    )
    log_alias_applications: bool = Field(
        default=True, description="Log alias rule applications"
    )


class TemplateMigrationConfig(BaseModel):
    """Root template migration configuration."""

    enabled_alias_rules: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ALIAS_RULES),
        description="Alias rules to evaluate, by name; table order is preserved",
    )
    detect_shape_mismatches: bool = Field(
        default=False,
        description="Downgrade mappable sections whose content shape differs",
    )
    analysis_delay_ms: int = Field(
        default=0, ge=0, description="Simulated latency of the local analyzer"
    )
    logging: MigrationLoggingConfig = Field(
        default_factory=MigrationLoggingConfig, description="Logging settings"
    )
