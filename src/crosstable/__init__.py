"""Chess tournament crosstable ingestion."""

from crosstable.pipeline import CrosstableResult, PipelineReport, run_pipeline, run_pipeline_from_path

__all__ = ["CrosstableResult", "PipelineReport", "run_pipeline", "run_pipeline_from_path"]
