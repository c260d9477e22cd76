"""
Interactive console input.

Everything that asks the user a question goes through an object with an
``ask(message) -> str`` method so tests can script the answers.
"""
from typing import List, Sequence

from .errors import SelectionError


class ConsolePrompt:
    def ask(self, message: str) -> str:
        if message:
            print(message)
        try:
            return input().strip()
        except EOFError as e:
            raise SelectionError("No input available") from e

    def wait_for_enter(self, message: str = "Press enter to exit...") -> None:
        try:
            self.ask(message)
        except SelectionError:
            pass


def choose_index(prompt, title: str, options: Sequence[str]) -> int:
    """Show a numbered list and return the chosen index. Re-asks on bad input."""
    lines: List[str] = [title]
    lines.extend(f"{i}: {option}" for i, option in enumerate(options))
    message = "\n".join(lines)
    while True:
        answer = prompt.ask(message)
        if answer.isdecimal() and int(answer) < len(options):
            return int(answer)
        message = f"Please enter a number between 0 and {len(options) - 1}:"


def confirm(prompt, question: str, default: bool = True) -> bool:
    answer = prompt.ask(question).lower()
    if not answer:
        return default
    return answer in ("y", "yes")
