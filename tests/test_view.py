from __future__ import annotations

import random

from rich.console import Console

from fixtures import make_word, make_words
from vokabel_trainer.quiz.models import SessionState, TestMode, TestType
from vokabel_trainer.quiz.session import QuizSession
from vokabel_trainer.quiz.view import (
    QuizConsoleView,
    SessionCommand,
    parse_session_command,
    run_quiz_session,
)


def make_provider(commands: list[str]):
    iterator = iter(commands)

    def _provider() -> str:
        return next(iterator)

    return _provider


def _console() -> Console:
    return Console(record=True, width=100, force_terminal=False)


def _session(mode=TestMode.DE_TR, test_type=TestType.FILL, count=2, pool=None):
    session = QuizSession(mode, test_type, count, rng=random.Random(8))
    session.start(make_words(4) if pool is None else pool)
    return session


def test_parse_session_command_variants() -> None:
    assert parse_session_command("  Next ") == SessionCommand("next")
    assert parse_session_command("p") == SessionCommand("prev")
    assert parse_session_command("submit") == SessionCommand("finish")
    assert parse_session_command("R") == SessionCommand("restart")
    assert parse_session_command("exit") == SessionCommand("quit")
    assert parse_session_command("2") == SessionCommand("choose", "2")
    assert parse_session_command("a  zu Hause ") == SessionCommand(
        "answer", "zu Hause"
    )
    assert parse_session_command("Die Katze") == SessionCommand(
        "answer", "Die Katze"
    )
    assert parse_session_command(None) is None
    assert parse_session_command("   ") is None


def test_fill_session_answers_and_finishes() -> None:
    session = _session()
    answers = [q.correct_answer.lower() for q in session.questions]
    finished = []
    console = _console()

    result = run_quiz_session(
        session,
        console,
        make_provider([f"a {answers[0]}", answers[1], "finish", "quit"]),
        on_finish=finished.append,
    )

    assert result.exit_action == "finished"
    assert result.sessions_finished == 1
    assert result.summary.score == 100
    assert finished == [session]
    output = console.export_text()
    assert "Question 1 / 2" in output
    assert "Answer saved" in output
    assert "Quiz Summary" in output
    assert "%100" in output


def test_multiple_choice_picks_option_by_number() -> None:
    session = _session(
        mode=TestMode.ARTIKEL,
        test_type=TestType.MULTIPLE,
        count=1,
        pool=[make_word(1), make_word(2)],
    )
    question = session.questions[0]
    position = question.options.index(question.correct_answer) + 1
    console = _console()

    result = run_quiz_session(
        session, console, make_provider(["9", str(position), "f", "q"])
    )

    assert result.summary.correct_count == 1
    output = console.export_text()
    assert "'9' is not a valid option" in output
    assert "Der" in output and "Die" in output and "Das" in output


def test_non_ascii_digits_do_not_end_the_session() -> None:
    assert parse_session_command("²") == SessionCommand("answer", "²")
    assert parse_session_command("٣") == SessionCommand("choose", "٣")
    session = _session(test_type=TestType.MULTIPLE, count=2)
    console = _console()

    result = run_quiz_session(session, console, make_provider(["²", "quit"]))

    assert result.exit_action == "quit"
    assert session.answer_for(0) == "²"


def test_unparseable_choice_is_an_invalid_option() -> None:
    session = _session(test_type=TestType.MULTIPLE, count=1)
    console = _console()
    view = QuizConsoleView(session, console)

    assert view.apply(SessionCommand("choose", "²")) is None

    assert session.answer_for(0) is None
    assert "'²' is not a valid option" in console.export_text()


def test_quit_before_finish_skips_scoring() -> None:
    session = _session()
    finished = []
    console = _console()

    result = run_quiz_session(
        session, console, make_provider(["r", "quit"]), on_finish=finished.append
    )

    assert result.exit_action == "quit"
    assert result.summary is None
    assert finished == []
    assert session.state is SessionState.READY
    output = console.export_text()
    assert "Finish the quiz before restarting." in output
    assert "Ending session without scoring." in output


def test_blank_input_is_rejected_then_input_ends() -> None:
    console = _console()

    result = run_quiz_session(_session(), console, make_provider([""]))

    assert result.exit_action == "quit"
    output = console.export_text()
    assert "Unrecognized command. Try again." in output
    assert "Session interrupted." in output


def test_restart_runs_another_round() -> None:
    session = _session(count=2, pool=make_words(6))
    finished = []
    console = _console()

    result = run_quiz_session(
        session,
        console,
        make_provider(["finish", "n", "restart", "x", "finish", "quit"]),
        on_finish=finished.append,
    )

    assert result.exit_action == "finished"
    assert result.sessions_finished == 2
    assert len(finished) == 2
    assert session.completed
    assert session.answers == {0: "x"}
    assert "Quiz finished. Use restart or quit." in console.export_text()


def test_empty_session_is_reported() -> None:
    session = QuizSession(TestMode.PLURAL, TestType.FILL, 3)
    session.start([make_word(1, plural=None)])
    console = _console()

    result = run_quiz_session(session, console, make_provider([]))

    assert result.exit_action == "empty"
    assert "No eligible words for this mode and source." in console.export_text()


def test_view_navigation_stays_in_bounds() -> None:
    view = QuizConsoleView(_session(count=2), _console())

    view.apply(SessionCommand("prev"))
    assert view.index == 0
    view.apply(SessionCommand("next"))
    view.apply(SessionCommand("next"))
    assert view.index == 1
    assert view.apply(SessionCommand("finish")) == "finish"


def test_render_question_marks_chosen_option() -> None:
    session = _session(
        mode=TestMode.ARTIKEL,
        test_type=TestType.MULTIPLE,
        count=1,
        pool=[make_word(3)],
    )
    console = _console()
    view = QuizConsoleView(session, console)
    session.answer(0, "Das")

    view.render_question()

    output = console.export_text()
    assert '"Buch" kelimesinin artikeli nedir?' in output
    assert "• Das" in output
    assert "Answered 1/1" in output
