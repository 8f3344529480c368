"""Checkpoints of the init workflow as a finite, totally ordered enum."""
from enum import Enum
from typing import List, Optional


class InitStep(str, Enum):
    """Where the init workflow resumes.

    ``ADDITIONAL_QUESTIONS`` is the only pre-generation checkpoint: the primary
    question group is answered, the deployment-target group is not. Every
    other member is a generation step.
    """

    ADDITIONAL_QUESTIONS = "additional-questions"
    DOCKERFILE = "dockerfile"
    DOCKER_COMPOSE = "docker-compose"
    DOCKERIGNORE = "dockerignore"
    DEPLOY_SCRIPTS = "deploy-scripts"
    ENV_FILE = "env-file"
    README = "readme"

    @classmethod
    def ordered(cls) -> List["InitStep"]:
        return list(cls)

    @classmethod
    def generation_steps(cls, start: Optional["InitStep"] = None) -> List["InitStep"]:
        """Generation steps from ``start`` (inclusive) to the end.

        Starting from ``ADDITIONAL_QUESTIONS`` (or None) yields all of them.
        """
        steps = [step for step in cls if step.is_generation]
        if start is None or not start.is_generation:
            return steps
        return steps[steps.index(start):]

    @property
    def is_generation(self) -> bool:
        return self is not InitStep.ADDITIONAL_QUESTIONS

    @property
    def needs_target_questions(self) -> bool:
        """True while the deployment-target question group is still unanswered."""
        return self is InitStep.ADDITIONAL_QUESTIONS


def next_step(step: InitStep) -> Optional[InitStep]:
    """Return the successor of ``step``, or None after the last step."""
    ordered = InitStep.ordered()
    index = ordered.index(step)
    if index + 1 < len(ordered):
        return ordered[index + 1]
    return None
