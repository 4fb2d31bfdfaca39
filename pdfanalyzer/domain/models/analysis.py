"""Domain models specific to PDF analysis requests and their outcomes."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .common import AnswerText, FileReference, FilePath, Instruction, ModelId


@dataclass(frozen=True)
class AnalysisRequest:
    """One tool invocation's worth of input."""
    file_reference: FileReference
    instruction: Instruction
    model_id: ModelId


@dataclass(frozen=True)
class ResolvedDocument:
    """A file reference turned into a local path, with access facts."""
    absolute_path: FilePath
    exists: bool
    readable: bool

    @property
    def accessible(self) -> bool:
        return self.exists and self.readable


@dataclass(frozen=True)
class AttemptRecord:
    """What happened on one remote attempt (multimodal or chat)."""
    strategy: str
    succeeded: bool
    error_kind: Optional[str] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class AnalysisOutcome:
    """Terminal value of the pipeline, returned toward the protocol layer."""
    answer_text: AnswerText
    is_error: bool
    attempts: Tuple[AttemptRecord, ...] = field(default_factory=tuple)
    model_id: Optional[ModelId] = None

    @property
    def used_fallback(self) -> bool:
        return len(self.attempts) > 1

    @property
    def direct_failure(self) -> Optional[AttemptRecord]:
        """The failed first attempt, when the answer came from the fallback."""
        if self.attempts and not self.attempts[0].succeeded and len(self.attempts) > 1:
            return self.attempts[0]
        return None


@dataclass(frozen=True)
class ToolResult:
    """Protocol-facing reply: text plus an error flag."""
    text: str
    is_error: bool = False

    @classmethod
    def from_outcome(cls, outcome: AnalysisOutcome) -> "ToolResult":
        return cls(text=outcome.answer_text, is_error=outcome.is_error)
