"""Interactive input providers.

The workflow never reads the console directly; it asks a Prompter. The
console implementation uses rich prompts, the scripted one replays fixed
answers for non-interactive runs and tests.
"""

from collections.abc import Iterable
from typing import Protocol

from rich.console import Console
from rich.prompt import Prompt

from registry_publish.exceptions import AbortedError


class Prompter(Protocol):
    """Source of interactive answers."""

    def ask(self, message: str) -> str:
        """Read one echoed line. Empty string means no answer."""
        ...

    def ask_password(self, message: str) -> str:
        """Read one masked line. Empty string means no answer."""
        ...


class ConsolePrompter:
    """Prompter backed by the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def _read(self, message: str, password: bool) -> str:
        try:
            answer = Prompt.ask(
                message.rstrip(),
                console=self.console,
                password=password,
                default="",
                show_default=False,
            )
        except EOFError:
            return ""
        return answer

    def ask(self, message: str) -> str:
        return self._read(message, password=False).strip()

    def ask_password(self, message: str) -> str:
        return self._read(message, password=True)


class ScriptedPrompter:
    """Prompter that replays a fixed list of answers.

    Every question is recorded in ``asked``. Once the answers run out each
    further question gets an empty answer, which makes required prompts abort.
    """

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self.answers = list(answers)
        self.asked: list[str] = []

    def _next(self, message: str) -> str:
        self.asked.append(message)
        if not self.answers:
            return ""
        return self.answers.pop(0)

    def ask(self, message: str) -> str:
        return self._next(message)

    def ask_password(self, message: str) -> str:
        return self._next(message)


def ask_required(prompter: Prompter, message: str, password: bool = False) -> str:
    """Ask for a value that must not be empty.

    Raises:
        AbortedError: If the answer is empty
    """
    answer = prompter.ask_password(message) if password else prompter.ask(message)
    if not answer:
        raise AbortedError()
    return answer
