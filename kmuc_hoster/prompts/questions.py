"""Question catalogue for ``kmuc-hoster init``."""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from kmuc_hoster.models.answers import default_port_for

Answers = Dict[str, Any]


class QuestionKind(str, Enum):
    TEXT = "text"
    SELECT = "select"
    MULTISELECT = "multiselect"
    CONFIRM = "confirm"
    PASSWORD = "password"


@dataclass(frozen=True)
class Choice:
    value: str
    label: str


@dataclass
class Question:
    """One interactive prompt.

    ``message`` and ``default`` may be callables of the answers gathered so
    far. ``validate`` returns None when the raw input is acceptable, else a
    human-readable rejection. ``when`` returning False skips the question and
    leaves its key out of the answers.
    """

    key: str
    kind: QuestionKind
    message: Union[str, Callable[[Answers], str]]
    default: Any = None
    choices: List[Choice] = field(default_factory=list)
    validate: Optional[Callable[[Any], Optional[str]]] = None
    when: Optional[Callable[[Answers], bool]] = None
    filter: Optional[Callable[[Any], Any]] = None

    def applies(self, answers: Answers) -> bool:
        return self.when is None or bool(self.when(answers))

    def render_message(self, answers: Answers) -> str:
        return self.message(answers) if callable(self.message) else self.message

    def resolve_default(self, answers: Answers) -> Any:
        return self.default(answers) if callable(self.default) else self.default

    @property
    def choice_values(self) -> List[str]:
        return [choice.value for choice in self.choices]


# Validators

def validate_project_name(value: Any) -> Optional[str]:
    if re.match(r"^[a-z0-9-]+$", str(value)):
        return None
    return "Project name may only contain lowercase letters, digits and hyphens"


def validate_port(value: Any) -> Optional[str]:
    try:
        port = int(str(value).strip())
    except ValueError:
        port = 0
    if 0 < port < 65536:
        return None
    return "Port must be between 1 and 65535"


def validate_domain(value: Any) -> Optional[str]:
    if re.match(r"^[a-z0-9.-]+\.[a-z]{2,}$", str(value)):
        return None
    return "Please enter a valid domain"


def validate_ip(value: Any) -> Optional[str]:
    if re.match(r"^(?:[0-9]{1,3}\.){3}[0-9]{1,3}$", str(value)):
        return None
    return "Please enter a valid IP address"


def _default_port_message(answers: Answers) -> str:
    return f"Use default port {default_port_for(answers.get('projectType'))}?"


PROJECT_QUESTIONS: List[Question] = [
    Question(
        key="projectName",
        kind=QuestionKind.TEXT,
        message="Project name",
        default="my-app",
        validate=validate_project_name,
    ),
    Question(
        key="projectType",
        kind=QuestionKind.SELECT,
        message="What kind of project?",
        choices=[
            Choice("express", "Node.js Express API"),
            Choice("nextjs", "Next.js (React)"),
            Choice("react-vite", "React SPA (Vite)"),
            Choice("node-basic", "Node.js basic"),
            Choice("static", "Static website (nginx)"),
        ],
        default="express",
    ),
    Question(
        key="useDefaultPort",
        kind=QuestionKind.CONFIRM,
        message=_default_port_message,
        default=True,
    ),
    Question(
        key="port",
        kind=QuestionKind.TEXT,
        message="Which port?",
        when=lambda answers: not answers.get("useDefaultPort"),
        default=lambda answers: default_port_for(answers.get("projectType")),
        validate=validate_port,
        filter=lambda value: str(value).strip(),
    ),
    Question(
        key="database",
        kind=QuestionKind.SELECT,
        message="Database?",
        choices=[
            Choice("none", "No database"),
            Choice("postgres", "PostgreSQL"),
            Choice("mongodb", "MongoDB"),
            Choice("redis", "Redis (cache)"),
            Choice("mysql", "MySQL"),
        ],
        default="none",
    ),
    Question(
        key="deploymentTarget",
        kind=QuestionKind.SELECT,
        message="Deployment target?",
        choices=[
            Choice("local", "Local development only"),
            Choice("vps", "VPS / own server"),
            Choice("cloud", "Cloud (DigitalOcean, Hetzner, ...)"),
        ],
        default="local",
    ),
    Question(
        key="needsDomain",
        kind=QuestionKind.CONFIRM,
        message="Set up domain & SSL?",
        default=False,
        when=lambda answers: answers.get("deploymentTarget") != "local",
    ),
    Question(
        key="domain",
        kind=QuestionKind.TEXT,
        message="Domain (e.g. example.com)",
        when=lambda answers: bool(answers.get("needsDomain")),
        validate=validate_domain,
    ),
]

VPS_QUESTIONS: List[Question] = [
    Question(
        key="serverIP",
        kind=QuestionKind.TEXT,
        message="Server IP address",
        validate=validate_ip,
    ),
    Question(
        key="serverUser",
        kind=QuestionKind.TEXT,
        message="SSH user",
        default="root",
    ),
    Question(
        key="serverPort",
        kind=QuestionKind.TEXT,
        message="SSH port",
        default="22",
        validate=validate_port,
        filter=lambda value: str(value).strip(),
    ),
]

CLOUD_QUESTIONS: List[Question] = [
    Question(
        key="cloudProvider",
        kind=QuestionKind.SELECT,
        message="Which cloud provider?",
        choices=[
            Choice("digitalocean", "DigitalOcean"),
            Choice("hetzner", "Hetzner Cloud"),
            Choice("aws", "AWS EC2"),
            Choice("generic", "Generic (own setup)"),
        ],
        default="generic",
    ),
]


def target_questions(answers: Answers) -> List[Question]:
    """Questions specific to the chosen deployment target."""
    target = answers.get("deploymentTarget")
    if target == "vps":
        return VPS_QUESTIONS
    if target == "cloud":
        return CLOUD_QUESTIONS
    return []


def finalize_primary(answers: Answers) -> Answers:
    """Apply derived defaults after the primary group: port and needsDatabase."""
    if not answers.get("port"):
        answers["port"] = default_port_for(answers.get("projectType"))
    answers["needsDatabase"] = bool(answers.get("database")) and answers["database"] != "none"
    return answers
