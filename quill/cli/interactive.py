"""Interactive prompts: confirm, select, text and edit."""

from dataclasses import dataclass
from typing import Callable

from quill.cli.utils import edit_text
from quill.errors import OperationCancelled
from quill.output import bold, dim, info, print_warning


@dataclass(frozen=True)
class Choice:
    value: str
    label: str
    hint: str | None = None


class Prompter:
    """Asks questions on the terminal.

    Ctrl-C or EOF at any prompt raises OperationCancelled, which aborts the
    running command.
    """

    def __init__(self, input_fn: Callable[[str], str] = input):
        self._input = input_fn

    def _ask(self, prompt: str) -> str:
        try:
            return self._input(prompt).strip()
        except (KeyboardInterrupt, EOFError):
            print()
            raise OperationCancelled()

    def confirm(self, message: str, default: bool = True) -> bool:
        suffix = dim("[Y/n]" if default else "[y/N]")
        while True:
            answer = self._ask(f"{bold(message)} {suffix} ").lower()
            if not answer:
                return default
            if answer in ('y', 'yes'):
                return True
            if answer in ('n', 'no'):
                return False
            print(dim("  Please answer y or n."))

    def select(self, message: str, choices: list[Choice]) -> str:
        print(bold(message))
        for i, choice in enumerate(choices, 1):
            hint = f" {dim(f'({choice.hint})')}" if choice.hint else ""
            print(f"  {info(f'[{i}]')} {choice.label}{hint}")
        while True:
            answer = self._ask(f"Select [1-{len(choices)}] or (q)uit: ").lower()
            if answer == 'q':
                raise OperationCancelled()
            if answer.isdigit() and 1 <= int(answer) <= len(choices):
                return choices[int(answer) - 1].value
            print(dim(f"  Enter 1-{len(choices)} or q"))

    def text(self, message: str, placeholder: str | None = None) -> str:
        hint = f" {dim(f'(e.g. {placeholder})')}" if placeholder else ""
        while True:
            answer = self._ask(f"{bold(message)}{hint} ")
            if answer:
                return answer
            print(dim("  A value is required."))

    def edit(self, text: str) -> str:
        """Edit text in $EDITOR. Keeps the original if the edit is empty or fails."""
        edited = edit_text(text, suffix='.gitcommit')
        if edited is None:
            print_warning("Edit aborted, keeping the previous message.")
            return text
        return edited
