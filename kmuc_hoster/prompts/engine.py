"""Sequential question engine with conditional skipping and re-prompting."""
from typing import Any, Dict, Iterable, Optional, Protocol

from rich.console import Console
from rich.prompt import Confirm, Prompt

from kmuc_hoster.core.logger import get_logger
from kmuc_hoster.prompts.questions import Answers, Question, QuestionKind

logger = get_logger(__name__)

TRUTHY = {"y", "yes", "true", "1", "j", "ja"}
FALSY = {"n", "no", "false", "0", "nein"}


class Prompter(Protocol):
    """Source of raw replies for a question."""

    def ask(self, question: Question, message: str, default: Any) -> Any:
        ...


class ConsolePrompter:
    """Ask questions on the terminal with rich.prompt."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def ask(self, question: Question, message: str, default: Any) -> Any:
        kind = question.kind

        if kind == QuestionKind.CONFIRM:
            return Confirm.ask(message, default=bool(default), console=self.console)

        if kind in (QuestionKind.SELECT, QuestionKind.MULTISELECT):
            for index, choice in enumerate(question.choices, start=1):
                self.console.print(f"  [cyan]{index}[/cyan]) {choice.label} [dim]({choice.value})[/dim]")
            if kind == QuestionKind.MULTISELECT:
                message = f"{message} [dim](comma-separated)[/dim]"
                if isinstance(default, (list, tuple)):
                    default = ",".join(default)

        kwargs: Dict[str, Any] = {"console": self.console}
        if default is not None:
            kwargs["default"] = str(default)
        if kind == QuestionKind.PASSWORD:
            kwargs["password"] = True
        return Prompt.ask(message, **kwargs)


class QuestionFlow:
    """Collect answers by asking questions strictly in declaration order."""

    def __init__(self, prompter: Optional[Prompter] = None, console: Optional[Console] = None):
        self.console = console or Console()
        self.prompter = prompter or ConsolePrompter(self.console)

    def ask(self, questions: Iterable[Question], answers: Optional[Answers] = None) -> Answers:
        """Ask every applicable question, adding replies to ``answers``.

        Skipped questions leave no key behind. Invalid input re-prompts the
        same question; it never aborts the flow.
        """
        answers = answers if answers is not None else {}

        for question in questions:
            if not question.applies(answers):
                logger.debug(f"Skipping question {question.key}")
                continue
            answers[question.key] = self._ask_until_valid(question, answers)

        return answers

    def _ask_until_valid(self, question: Question, answers: Answers) -> Any:
        message = question.render_message(answers)
        default = question.resolve_default(answers)

        while True:
            raw = self.prompter.ask(question, message, default)
            value, error = self._coerce(question, raw, default)

            if error is None and question.validate is not None:
                error = question.validate(value)

            if error is None:
                return question.filter(value) if question.filter else value

            self.console.print(f"[red]✗[/red] {error}")

    def _coerce(self, question: Question, raw: Any, default: Any):
        """Turn a raw reply into the stored value; returns (value, error)."""
        kind = question.kind

        if kind == QuestionKind.CONFIRM:
            if isinstance(raw, bool):
                return raw, None
            text = str(raw if raw is not None else "").strip().lower()
            if not text and default is not None:
                return bool(default), None
            if text in TRUTHY:
                return True, None
            if text in FALSY:
                return False, None
            return None, "Please answer yes or no"

        if kind == QuestionKind.SELECT:
            value = self._match_choice(question, raw if raw not in (None, "") else default)
            if value is None:
                return None, f"Please choose one of: {', '.join(question.choice_values)}"
            return value, None

        if kind == QuestionKind.MULTISELECT:
            if raw in (None, ""):
                raw = default if default is not None else []
            items = raw if isinstance(raw, (list, tuple)) else str(raw).split(",")
            selected = []
            for item in items:
                if not str(item).strip():
                    continue
                value = self._match_choice(question, item)
                if value is None:
                    return None, f"Unknown choice '{str(item).strip()}'"
                if value not in selected:
                    selected.append(value)
            return selected, None

        text = "" if raw is None else str(raw)
        if not text and default is not None:
            text = str(default)
        return text, None

    @staticmethod
    def _match_choice(question: Question, raw: Any) -> Optional[str]:
        if raw is None:
            return None
        text = str(raw).strip()
        if text in question.choice_values:
            return text
        if text.isdigit():
            index = int(text) - 1
            if 0 <= index < len(question.choices):
                return question.choices[index].value
        return None
