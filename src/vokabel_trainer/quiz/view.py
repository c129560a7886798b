"""Rich-powered console loop driving a :class:`QuizSession`.

The loop renders the current question, reads one command per prompt and
forwards it to the session. All scoring stays in the session; this module
only formats state and parses input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .errors import SessionStateError
from .models import Question, QuestionType, SessionState, SessionSummary
from .session import QuizSession

InputProvider = Callable[[], str]
FinishHook = Callable[[QuizSession], None]
ExitAction = Literal["finished", "quit", "empty"]
CommandType = Literal[
    "next", "prev", "finish", "restart", "quit", "choose", "answer"
]


@dataclass(frozen=True)
class SessionCommand:
    """Normalized user command parsed from console input."""

    type: CommandType
    value: Optional[str] = None


@dataclass(frozen=True)
class QuizRunResult:
    """Return value from ``run_quiz_session``."""

    summary: Optional[SessionSummary]
    exit_action: ExitAction
    sessions_finished: int = 0


_KEYWORDS: dict[str, CommandType] = {
    "n": "next",
    "next": "next",
    "p": "prev",
    "prev": "prev",
    "previous": "prev",
    "f": "finish",
    "finish": "finish",
    "submit": "finish",
    "r": "restart",
    "restart": "restart",
    "q": "quit",
    "quit": "quit",
    "exit": "quit",
}


def parse_session_command(raw: str | None) -> SessionCommand | None:
    """Turn a line of input into a command.

    Keywords navigate; a bare number picks a multiple-choice option;
    ``a <text>`` (or any other text) is a typed answer.
    """

    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    lowered = text.lower()
    if lowered in _KEYWORDS:
        return SessionCommand(_KEYWORDS[lowered])
    if text.isdecimal():
        return SessionCommand("choose", text)
    if lowered.startswith("a "):
        return SessionCommand("answer", text[2:].strip())
    return SessionCommand("answer", text)


class QuizConsoleView:
    """Keeps the cursor position and renders a session to ``console``."""

    def __init__(self, session: QuizSession, console: Console) -> None:
        self.session = session
        self.console = console
        self.index = 0

    @property
    def current(self) -> Question:
        return self.session.questions[self.index]

    def next(self) -> None:
        if self.index + 1 < self.session.total_questions:
            self.index += 1

    def previous(self) -> None:
        if self.index > 0:
            self.index -= 1

    def apply(self, command: SessionCommand) -> Optional[str]:
        """Apply ``command``; return ``"finish"``, ``"quit"`` or ``None``."""

        if command.type == "next":
            self.next()
        elif command.type == "prev":
            self.previous()
        elif command.type == "choose":
            self._choose(command.value or "")
        elif command.type == "answer":
            self._answer(command.value or "")
        elif command.type == "finish":
            return "finish"
        elif command.type == "quit":
            self.console.print(
                "\n[bold yellow]Ending session without scoring.[/]"
            )
            return "quit"
        elif command.type == "restart":
            self.console.print("[red]Finish the quiz before restarting.[/red]")
        return None

    def _choose(self, raw: str) -> None:
        question = self.current
        if question.type is not QuestionType.MULTIPLE or not question.options:
            self._answer(raw)
            return
        try:
            position = int(raw)
        except ValueError:
            position = 0
        if not 1 <= position <= len(question.options):
            self.console.print(
                Text(
                    f"'{raw}' is not a valid option for this question.",
                    style="red",
                )
            )
            return
        self._answer(question.options[position - 1])

    def _answer(self, text: str) -> None:
        self.session.answer(self.index, text)
        self.console.print(Text.assemble("Answer saved: ", (text, "bold")))
        self.next()

    def render_question(self) -> None:
        question = self.current
        total = self.session.total_questions
        self.console.print()
        self.console.rule(
            Text.assemble(
                (f"Question {self.index + 1}", "bold cyan"),
                (f" / {total}", "dim"),
                (f"  {self.session.mode.value.upper()}", "magenta"),
            )
        )
        self.console.print(Text(question.question, style="bold"))

        given = self.session.answer_for(self.index)
        if question.type is QuestionType.MULTIPLE and question.options:
            table = Table(show_header=False, box=box.SIMPLE, expand=True)
            table.add_column("#", justify="right", style="cyan")
            table.add_column("Option")
            for position, option in enumerate(question.options, start=1):
                label = Text(option)
                marker = " "
                if given is not None and given == option:
                    marker = "•"
                    label.stylize("bold green")
                table.add_row(str(position), Text(marker + " ") + label)
            self.console.print(table)
            hint = "number to choose"
        else:
            current = given if given else "—"
            self.console.print(Text(f"Your answer: {current}", style="dim"))
            hint = "type your answer"

        self.console.print(
            Text(
                f"Answered {self.session.answered_count}/{total} | "
                f"Commands: {hint}, n (next), p (prev), finish, quit",
                style="dim",
            )
        )

    def render_summary(self, summary: SessionSummary) -> None:
        self.console.print()
        self.console.rule(Text("Quiz Summary", style="bold magenta"))

        overview = Table(show_header=False, box=box.MINIMAL_DOUBLE_HEAD)
        overview.add_column("Metric", style="bold")
        overview.add_column("Value", justify="right")
        overview.add_row("Total questions", str(summary.total_questions))
        overview.add_row("Answered", str(summary.answered_count))
        overview.add_row("Correct", str(summary.correct_count))
        overview.add_row("Score", f"%{summary.score}")
        self.console.print(overview)

        responses = Table(title="Responses", box=box.SIMPLE, expand=True)
        responses.add_column("#", justify="right")
        responses.add_column("Question", overflow="fold")
        responses.add_column("Your answer")
        responses.add_column("Correct answer")
        responses.add_column("Result", justify="center")
        for index, question in enumerate(self.session.questions):
            ok = self.session.is_correct(index)
            responses.add_row(
                str(index + 1),
                Text(question.question),
                Text(self.session.answer_for(index) or "—"),
                Text(question.correct_answer),
                "✅" if ok else "❌",
            )
        self.console.print(responses)
        self.console.print(Text("Commands: restart, quit", style="dim"))


def run_quiz_session(
    session: QuizSession,
    console: Console,
    input_provider: InputProvider,
    *,
    on_finish: FinishHook | None = None,
) -> QuizRunResult:
    """Drive ``session`` interactively until the user quits.

    ``session`` must already be started. ``on_finish`` runs after every
    completed round (including rounds started with ``restart``).
    """

    if session.state is SessionState.EMPTY:
        console.print(
            Panel(
                "No eligible words for this mode and source.",
                title="Quiz Session",
                border_style="yellow",
            )
        )
        return QuizRunResult(None, "empty")

    view = QuizConsoleView(session, console)
    finished = 0
    while True:
        if session.completed:
            command = _read_command(console, input_provider)
            if command is None or command.type == "quit":
                return QuizRunResult(session.summary, "finished", finished)
            if command.type != "restart":
                console.print("[red]Quiz finished. Use restart or quit.[/red]")
                continue
            if not session.restart():
                console.print("[red]No eligible words left to restart.[/red]")
                return QuizRunResult(session.summary, "finished", finished)
            view.index = 0
            continue

        view.render_question()
        command = _read_command(console, input_provider)
        if command is None:
            return QuizRunResult(None, "quit", finished)
        try:
            outcome = view.apply(command)
        except SessionStateError as exc:
            console.print(f"[red]{exc}[/red]")
            continue
        if outcome == "quit":
            return QuizRunResult(None, "quit", finished)
        if outcome == "finish":
            summary = session.finish()
            finished += 1
            view.render_summary(summary)
            if on_finish is not None:
                on_finish(session)


def _read_command(
    console: Console, input_provider: InputProvider
) -> SessionCommand | None:
    """Read commands until one parses; ``None`` means input ended."""

    while True:
        try:
            raw = input_provider()
        except (EOFError, KeyboardInterrupt, StopIteration):
            console.print("\n[bold yellow]Session interrupted.[/]")
            return None
        command = parse_session_command(raw)
        if command is not None:
            return command
        console.print("[red]Unrecognized command. Try again.[/red]")
