"""Quality-aware ranking of selected tools.

QualityManager keeps per-tool execution statistics and blends a quality
score into the relevance scores produced by the selectors:

    quality = 0.6 * success_rate
            + 0.3 * description_quality
            + 0.1 * log10(call_count + 1) / 10

    final = score * (1 - quality_weight) + quality * quality_weight

Recording an execution only touches memory; ``save`` is a separate call.
"""

from __future__ import annotations

import math
import threading
import time
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from toolpick.lib.errors import PersistenceError
from toolpick.lib.logging_config import get_logger
from toolpick.lib.persistence import atomic_write_json, read_json_file
from toolpick.models.quality import QualityRecord
from toolpick.models.tool import ScoredTool

logger = get_logger(__name__)

QUALITY_FILENAME = "quality.json"
QUALITY_VERSION = "1.0"

SUCCESS_WEIGHT = 0.6
DESCRIPTION_WEIGHT = 0.3
VOLUME_WEIGHT = 0.1


class _QualityFile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    version: str = QUALITY_VERSION
    records: dict[str, QualityRecord] = Field(default_factory=dict)


def quality_score(record: QualityRecord) -> float:
    """Compute the blended quality score of a record.

    Success history dominates, description quality is a secondary signal, and
    the log term gives a small saturating boost for operational history.

    Args:
        record: Tool quality record.

    Returns:
        Quality score (at most 1.0 for any realistic call count).
    """
    volume = math.log10(record.call_count + 1) / 10.0
    return (
        SUCCESS_WEIGHT * record.success_rate
        + DESCRIPTION_WEIGHT * record.description_quality
        + VOLUME_WEIGHT * volume
    )


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


class QualityManager:
    """Tracks tool execution quality and adjusts rankings.

    Attributes:
        path: JSON file used by ``save``/``load``; None keeps records in
            memory only.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize an empty manager.

        Args:
            path: Optional file for persistence.
        """
        self.path = path
        self._records: dict[str, QualityRecord] = {}
        self._lock = threading.Lock()
        self._dirty = False

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    @property
    def dirty(self) -> bool:
        """Whether there are unsaved changes."""
        return self._dirty

    def _get_or_create(self, tool_name: str) -> QualityRecord:
        record = self._records.get(tool_name)
        if record is None:
            record = QualityRecord(name=tool_name)
            self._records[tool_name] = record
        return record

    def record_execution(
        self, tool_name: str, success: bool, duration: float = 0.0
    ) -> None:
        """Record the outcome of a tool execution.

        Args:
            tool_name: Name of the executed tool.
            success: Whether the execution succeeded.
            duration: Execution time in seconds (logged only).
        """
        with self._lock:
            record = self._get_or_create(tool_name)
            record.call_count += 1
            if success:
                record.success_count += 1
            record.last_updated = datetime.now(timezone.utc)
            self._dirty = True

        logger.debug(
            f"Recorded {tool_name} execution: success={success}, "
            f"duration={duration * 1000:.1f}ms"
        )

    def update_description_quality(self, tool_name: str, quality: float) -> None:
        """Set the description quality of a tool.

        Args:
            tool_name: Tool name.
            quality: Quality score in [0, 1].

        Raises:
            ValueError: If quality is outside [0, 1].
        """
        if not 0.0 <= quality <= 1.0:
            raise ValueError(f"quality must be between 0 and 1, got {quality}")

        with self._lock:
            record = self._get_or_create(tool_name)
            record.description_quality = quality
            record.last_updated = datetime.now(timezone.utc)
            self._dirty = True

    def get_record(self, tool_name: str) -> QualityRecord | None:
        """Return a copy of the record for a tool, if any."""
        with self._lock:
            record = self._records.get(tool_name)
            return record.model_copy() if record else None

    def report(self) -> dict[str, QualityRecord]:
        """Return copies of all records keyed by tool name."""
        with self._lock:
            return {name: rec.model_copy() for name, rec in self._records.items()}

    def adjust_ranking(
        self,
        scored_tools: Iterable[ScoredTool],
        quality_weight: float,
        catalog_order: Sequence[str] | None = None,
    ) -> list[ScoredTool]:
        """Blend quality scores into relevance scores and re-sort.

        Tools without history keep their original score.

        Args:
            scored_tools: Tools ranked by a selector.
            quality_weight: Weight of the quality score in [0, 1].
            catalog_order: Tool names in catalog order, used to break ties.
                Ties keep input order when omitted or for unlisted names.

        Returns:
            New list sorted by adjusted score.
        """
        tools = list(scored_tools)
        if quality_weight <= 0:
            return tools
        weight = min(quality_weight, 1.0)

        with self._lock:
            scores = {
                st.name: quality_score(self._records[st.name])
                for st in tools
                if st.name in self._records
            }

        adjusted: list[ScoredTool] = []
        for st in tools:
            if st.name not in scores:
                adjusted.append(st)
                continue
            final = st.score * (1 - weight) + scores[st.name] * weight
            adjusted.append(
                st.model_copy(
                    update={
                        "score": _clamp(final),
                        "reason": f"{st.reason} (quality adjusted)",
                    }
                )
            )

        position = {name: index for index, name in enumerate(catalog_order or ())}
        unlisted = len(position)
        adjusted.sort(key=lambda st: (-st.score, position.get(st.name, unlisted)))
        return adjusted

    def save(self) -> bool:
        """Persist records if anything changed since the last save.

        Returns:
            True if a file was written.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        if self.path is None:
            return False

        with self._lock:
            if not self._dirty:
                return False
            payload = _QualityFile(records=dict(self._records)).model_dump(mode="json")
            self._dirty = False

        start = time.perf_counter()
        try:
            atomic_write_json(self.path, payload)
        except (OSError, TypeError) as exc:
            with self._lock:
                self._dirty = True
            raise PersistenceError("quality", str(self.path), str(exc)) from exc

        logger.debug(
            f"Saved {len(payload['records'])} quality records to {self.path} "
            f"in {(time.perf_counter() - start) * 1000:.1f}ms"
        )
        return True

    def load(self) -> bool:
        """Load records from disk, replacing records with the same name.

        A missing, unreadable or invalid file is treated as "no prior data".

        Returns:
            True if records were loaded.
        """
        if self.path is None:
            return False

        try:
            raw = read_json_file(self.path)
            if raw is None:
                return False
            data = _QualityFile.model_validate(raw)
        except (OSError, ValueError, PydanticValidationError) as exc:
            logger.warning(f"Ignoring unreadable quality data {self.path}: {exc}")
            return False

        with self._lock:
            self._records.update(data.records)

        logger.debug(f"Loaded {len(data.records)} quality records from {self.path}")
        return True
