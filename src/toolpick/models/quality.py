"""Quality tracking models.

QualityRecord holds the running execution statistics of a single tool. The
success rate is always derived from the counts so it can never drift from
them, even after a reload from disk.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

DEFAULT_DESCRIPTION_QUALITY = 0.5


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QualityRecord(BaseModel):
    """Execution statistics for a single tool.

    Attributes:
        name: Tool name the statistics belong to.
        call_count: Number of recorded executions.
        success_count: Number of successful executions.
        description_quality: Estimated description quality in [0, 1].
        last_updated: UTC timestamp of the last change.
    """

    # success_rate is serialized for readability but recomputed on load
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    name: str = Field(..., min_length=1, description="Tool name")
    call_count: int = Field(default=0, ge=0, description="Recorded executions")
    success_count: int = Field(default=0, ge=0, description="Successful executions")
    description_quality: float = Field(
        default=DEFAULT_DESCRIPTION_QUALITY,
        ge=0.0,
        le=1.0,
        description="Description quality score (0.0-1.0)",
    )
    last_updated: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def validate_counts(self) -> "QualityRecord":
        """Validate success_count never exceeds call_count."""
        if self.success_count > self.call_count:
            raise ValueError("success_count cannot exceed call_count")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success_rate(self) -> float:
        """Fraction of successful executions, 0 when never called."""
        if self.call_count == 0:
            return 0.0
        return self.success_count / self.call_count
