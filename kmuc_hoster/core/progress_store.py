"""Single-slot checkpoint persistence for the init workflow."""
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kmuc_hoster.core.logger import get_logger
from kmuc_hoster.core.steps import InitStep

logger = get_logger(__name__)


class WorkflowState(BaseModel):
    """Persisted record of how far the init workflow has progressed."""

    model_config = ConfigDict(populate_by_name=True)

    answers: Dict[str, Any] = Field(default_factory=dict)
    current_step: InitStep = Field(alias="currentStep")
    project_path: str = Field(alias="projectPath")
    timestamp: str = ""

    @property
    def project_name(self) -> str:
        return str(self.answers.get("projectName", ""))

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ProgressStore:
    """Durable single-slot checkpoint for the init workflow.

    The slot is global per user account rather than per project: the tool
    assumes one in-flight initialization at a time. Concurrent invocations
    race on the file; no locking is attempted.
    """

    def __init__(self, progress_file: Optional[Path] = None):
        """Initialize progress store.

        Args:
            progress_file: Path to the checkpoint. Defaults to ~/.kmuc/.kmuc-progress.json
        """
        if progress_file is None:
            from kmuc_hoster.core.config import get_config
            progress_file = get_config().progress_file

        self.progress_file = Path(progress_file)
        # Outcome of the most recent save; None until one is attempted.
        self.last_save_ok: Optional[bool] = None

    def save(
        self,
        answers: Dict[str, Any],
        current_step: InitStep,
        project_path: Union[str, Path],
    ) -> bool:
        """Overwrite the checkpoint with ``answers`` and the step to resume at.

        Returns:
            True if saved successfully. Write failures are logged, not raised;
            the workflow keeps going but will not be resumable.
        """
        state = WorkflowState(
            answers=dict(answers),
            current_step=current_step,
            project_path=str(project_path),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

        try:
            self.progress_file.parent.mkdir(parents=True, exist_ok=True)

            temp_file = self.progress_file.with_suffix(".tmp")
            with open(temp_file, "w") as f:
                json.dump(state.to_document(), f, indent=2)

            temp_file.replace(self.progress_file)
            logger.debug(f"Saved progress at step {current_step.value} to {self.progress_file}")
            self.last_save_ok = True
            return True

        except OSError as e:
            logger.warning(f"Could not save progress: {e}")
            self.last_save_ok = False
            return False

    def load(self) -> Optional[WorkflowState]:
        """Read the checkpoint.

        Returns:
            WorkflowState, or None when missing, unreadable or malformed
        """
        try:
            with open(self.progress_file, "r") as f:
                document = json.load(f)
            return WorkflowState.model_validate(document)
        except FileNotFoundError:
            return None
        except (OSError, ValueError, ValidationError) as e:
            logger.debug(f"Ignoring unusable progress file {self.progress_file}: {e}")
            return None

    @property
    def resumable(self) -> bool:
        """True when a checkpoint exists and no later save has failed."""
        return self.last_save_ok is not False and self.exists()

    def exists(self) -> bool:
        try:
            return self.progress_file.is_file()
        except OSError:
            return False

    def clear(self) -> None:
        """Delete the checkpoint. Safe to call when none exists."""
        try:
            self.progress_file.unlink()
            logger.debug(f"Cleared progress {self.progress_file}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.debug(f"Could not clear progress file: {e}")
