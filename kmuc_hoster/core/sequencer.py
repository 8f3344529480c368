"""Checkpointed, resumable execution of the init generation steps."""
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

from rich.console import Console

from kmuc_hoster.core.errors import StepError
from kmuc_hoster.core.logger import get_logger
from kmuc_hoster.core.progress_store import ProgressStore
from kmuc_hoster.core.steps import InitStep, next_step
from kmuc_hoster.models.answers import ProjectAnswers
from kmuc_hoster.scaffold import (
    GeneratedFile,
    generate_docker_compose,
    generate_dockerfile,
    generate_dockerignore,
    generate_env_example,
    generate_project_readme,
    render_deploy_files,
)

logger = get_logger(__name__)

StepOutput = Tuple[ProjectAnswers, Dict[str, GeneratedFile]]


def _dockerfile(answers: ProjectAnswers) -> StepOutput:
    return answers, {"Dockerfile": GeneratedFile(generate_dockerfile(answers))}


def _docker_compose(answers: ProjectAnswers) -> StepOutput:
    return answers, {"docker-compose.yml": GeneratedFile(generate_docker_compose(answers))}


def _dockerignore(answers: ProjectAnswers) -> StepOutput:
    return answers, {".dockerignore": GeneratedFile(generate_dockerignore())}


def _deploy_scripts(answers: ProjectAnswers) -> StepOutput:
    # Local-only projects write nothing here; the checkpoint still advances.
    if not answers.deploys_remotely:
        return answers, {}
    answers = answers.with_deploy_flags()
    return answers, render_deploy_files(answers)


def _env_file(answers: ProjectAnswers) -> StepOutput:
    return answers, {".env.example": GeneratedFile(generate_env_example(answers))}


def _readme(answers: ProjectAnswers) -> StepOutput:
    return answers, {"README.md": GeneratedFile(generate_project_readme(answers))}


STEP_HANDLERS: Dict[InitStep, Callable[[ProjectAnswers], StepOutput]] = {
    InitStep.DOCKERFILE: _dockerfile,
    InitStep.DOCKER_COMPOSE: _docker_compose,
    InitStep.DOCKERIGNORE: _dockerignore,
    InitStep.DEPLOY_SCRIPTS: _deploy_scripts,
    InitStep.ENV_FILE: _env_file,
    InitStep.README: _readme,
}

STEP_LABELS: Dict[InitStep, str] = {
    InitStep.DOCKERFILE: "Dockerfile",
    InitStep.DOCKER_COMPOSE: "docker-compose.yml",
    InitStep.DOCKERIGNORE: ".dockerignore",
    InitStep.DEPLOY_SCRIPTS: "deploy scripts",
    InitStep.ENV_FILE: ".env.example",
    InitStep.README: "README.md",
}


class InitSequencer:
    """Run the generation steps in order, checkpointing after each.

    The checkpoint saved after a step always names the step to run next, so
    a crash mid-step redoes that step. Generation overwrites existing files,
    which keeps every step safe to repeat.
    """

    def __init__(
        self,
        project_path: Union[str, Path],
        store: ProgressStore,
        console: Optional[Console] = None,
    ):
        self.project_path = Path(project_path)
        self.store = store
        self.console = console

    def run(self, answers: ProjectAnswers, start: InitStep = InitStep.DOCKERFILE) -> List[Path]:
        """Execute ``start`` and every step after it.

        Args:
            answers: Project configuration (not mutated)
            start: Step to resume at; ADDITIONAL_QUESTIONS means from the beginning

        Returns:
            Paths written during this run, in order

        Raises:
            StepError: If a step cannot write its output. The checkpoint is
                left pointing at the failed step.
        """
        answers = answers.model_copy()
        written: List[Path] = []

        for step in InitStep.generation_steps(start):
            answers, paths = self.run_step(step, answers)
            written.extend(paths)

            successor = next_step(step)
            if successor is None:
                self.store.clear()
            else:
                self.store.save(answers.to_answers(), successor, self.project_path)

        return written

    def run_step(self, step: InitStep, answers: ProjectAnswers) -> Tuple[ProjectAnswers, List[Path]]:
        """Render and write a single step. Returns the possibly updated answers."""
        handler = STEP_HANDLERS[step]
        label = STEP_LABELS[step]
        logger.debug(f"Running step {step.value}")

        try:
            if self.console is not None:
                with self.console.status(f"Generating {label}..."):
                    answers, files = handler(answers)
                    paths = self._write(files)
            else:
                answers, files = handler(answers)
                paths = self._write(files)
        except OSError as e:
            raise StepError(step.value, e) from e

        if self.console is not None:
            if paths:
                self.console.print(f"[green]✓[/green] {label} created")
            else:
                self.console.print(f"[dim]– {label} skipped (local deployment)[/dim]")
        return answers, paths

    def _write(self, files: Dict[str, GeneratedFile]) -> List[Path]:
        paths = []
        for relative, generated in files.items():
            target = self.project_path / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(generated.content, encoding="utf-8")
            target.chmod(generated.mode)
            logger.debug(f"Wrote {target}")
            paths.append(target)
        return paths
