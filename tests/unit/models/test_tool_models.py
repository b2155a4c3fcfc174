"""Tests for tool, selection and quality models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from toolpick.models.quality import QualityRecord
from toolpick.models.selection import SelectionCacheEntry, SelectionResult
from toolpick.models.tool import (
    DEFAULT_GROUP,
    ScoredTool,
    ToolResponse,
    ToolSchema,
    tool_group,
)


class TestToolGroup:
    """Tests for group derivation from tool names."""

    @pytest.mark.parametrize(
        ("name", "group"),
        [
            ("weather_get", "weather"),
            ("github_create_issue", "github"),
            ("calculator", DEFAULT_GROUP),
            ("_private", DEFAULT_GROUP),
        ],
    )
    def test_group(self, name: str, group: str) -> None:
        """Test the prefix before the first underscore is the group."""
        assert tool_group(name) == group


class TestToolSchema:
    """Tests for ToolSchema."""

    def test_valid_schema(self) -> None:
        """Test creating a schema with all fields."""
        schema = ToolSchema(
            name="weather_get",
            description="Get weather",
            parameters={"type": "object", "properties": {"city": {"type": "string"}}},
        )
        assert schema.group == "weather"
        assert schema.searchable_text() == "weather_get: Get weather"

    def test_defaults(self) -> None:
        """Test optional fields default to empty."""
        schema = ToolSchema(name="ping")
        assert schema.description == ""
        assert schema.parameters == {}

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, name: str) -> None:
        """Test that names must be non-empty."""
        with pytest.raises(ValidationError):
            ToolSchema(name=name)

    def test_extra_fields_forbidden(self) -> None:
        """Test that unknown fields are rejected."""
        with pytest.raises(ValidationError):
            ToolSchema(name="a", handler="x")  # type: ignore[call-arg]

    def test_frozen(self) -> None:
        """Test that schemas are immutable."""
        schema = ToolSchema(name="a")
        with pytest.raises(ValidationError):
            schema.name = "b"  # type: ignore[misc]


class TestToolResponse:
    """Tests for ToolResponse."""

    def test_success(self) -> None:
        """Test a successful response."""
        response = ToolResponse(content={"temp": 21})
        assert not response.is_error

    def test_error(self) -> None:
        """Test a response carrying an error."""
        assert ToolResponse(error="city not found").is_error

    def test_empty_error_is_success(self) -> None:
        """Test that an empty error string is not an error."""
        assert not ToolResponse(content="ok", error="").is_error


class TestScoredTool:
    """Tests for ScoredTool."""

    @pytest.mark.parametrize("score", [-0.01, 1.01])
    def test_score_bounds(self, score: float) -> None:
        """Test that scores must lie in [0, 1]."""
        with pytest.raises(ValidationError):
            ScoredTool(tool=ToolSchema(name="a"), score=score)

    def test_name(self) -> None:
        """Test that name proxies the tool name."""
        assert ScoredTool(tool=ToolSchema(name="calc_add"), score=0.5).name == "calc_add"


class TestSelectionModels:
    """Tests for selection result models."""

    def test_result_defaults(self) -> None:
        """Test an empty selection result."""
        result = SelectionResult()
        assert result.tools == []
        assert result.tool_names == []
        assert not result.from_cache

    def test_tool_names(self) -> None:
        """Test that tool_names keeps ranked order."""
        result = SelectionResult(
            tools=[ToolSchema(name="b"), ToolSchema(name="a")], strategy="semantic"
        )
        assert result.tool_names == ["b", "a"]

    def test_cache_entry_timestamp_defaults_to_now(self) -> None:
        """Test that cache entries are stamped in UTC."""
        before = datetime.now(timezone.utc)
        entry = SelectionCacheEntry(tool_names=["a"])
        assert entry.timestamp >= before
        assert entry.timestamp.tzinfo is not None


class TestQualityRecord:
    """Tests for QualityRecord."""

    def test_defaults(self) -> None:
        """Test a new record."""
        record = QualityRecord(name="a")
        assert record.call_count == 0
        assert record.success_count == 0
        assert record.description_quality == 0.5
        assert record.success_rate == 0.0

    def test_success_rate(self) -> None:
        """Test that success_rate is derived from the counts."""
        record = QualityRecord(name="a", call_count=4, success_count=3)
        assert record.success_rate == 0.75

    def test_success_cannot_exceed_calls(self) -> None:
        """Test the count invariant."""
        with pytest.raises(ValidationError):
            QualityRecord(name="a", call_count=1, success_count=2)

    def test_description_quality_bounds(self) -> None:
        """Test that description quality must lie in [0, 1]."""
        with pytest.raises(ValidationError):
            QualityRecord(name="a", description_quality=1.5)

    def test_assignment_is_validated(self) -> None:
        """Test that assignments are checked against the invariants."""
        record = QualityRecord(name="a")
        with pytest.raises(ValidationError):
            record.success_count = 1

    def test_serialized_success_rate_is_ignored_on_load(self) -> None:
        """Test that a stale stored success_rate is recomputed."""
        record = QualityRecord.model_validate(
            {"name": "a", "call_count": 2, "success_count": 1, "success_rate": 0.99}
        )
        assert record.success_rate == 0.5
        assert record.model_dump()["success_rate"] == 0.5
