"""Fatal errors and recoverable diagnostics raised while ingesting a report."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional


logger = logging.getLogger(__name__)


class CrosstableError(ValueError):
    """Base class for conditions that abort a pipeline run."""

    def __init__(self, message: str, *, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MalformedReportError(CrosstableError):
    """Raised when the report structure drifts from the column template."""


class UnpairedRowError(CrosstableError):
    """Raised when content rows cannot be grouped into player pairs."""


@dataclass(frozen=True)
class PipelineWarning:
    line_number: Optional[int]
    message: str

    @property
    def kind(self) -> str:
        return type(self).__name__

    def as_dict(self) -> dict:
        return {"kind": self.kind, "line_number": self.line_number, "message": self.message}


@dataclass(frozen=True)
class FieldExtractionWarning(PipelineWarning):
    field_name: str = ""
    raw_value: str = ""

    def as_dict(self) -> dict:
        payload = super().as_dict()
        payload.update(field_name=self.field_name, raw_value=self.raw_value)
        return payload


@dataclass(frozen=True)
class UnresolvedOpponentWarning(PipelineWarning):
    player_number: int = 0
    round_number: int = 0
    opponent_number: int = 0

    def as_dict(self) -> dict:
        payload = super().as_dict()
        payload.update(
            player_number=self.player_number,
            round_number=self.round_number,
            opponent_number=self.opponent_number,
        )
        return payload


@dataclass
class Diagnostics:
    """Collects recoverable warnings raised during a single run."""

    warnings: List[PipelineWarning] = field(default_factory=list)

    def add(self, warning: PipelineWarning) -> None:
        logger.warning("%s: %s", warning.kind, warning.message)
        self.warnings.append(warning)

    def field_failed(
        self,
        field_name: str,
        raw_value: str,
        message: str,
        *,
        line_number: Optional[int] = None,
    ) -> None:
        self.add(
            FieldExtractionWarning(
                line_number=line_number,
                message=message,
                field_name=field_name,
                raw_value=raw_value,
            )
        )

    def of_kind(self, kind: type[PipelineWarning]) -> List[PipelineWarning]:
        return [warning for warning in self.warnings if isinstance(warning, kind)]

    def __len__(self) -> int:
        return len(self.warnings)
