"""Quality-aware ranking."""

from toolpick.lib.ranking.quality import QUALITY_FILENAME, QualityManager, quality_score

__all__ = ["QUALITY_FILENAME", "QualityManager", "quality_score"]
