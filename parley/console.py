from __future__ import annotations
import sys
from typing import Optional, TextIO

DEFAULT_OPTION_FORMAT = "[ {label} ]"
DEFAULT_INVALID_NOTICE = "Invalid selection: '{input}'"


class InputExhausted(EOFError):
    """Raised when the input stream ends while a selection is awaited."""


class Console:
    """
    Line-oriented text boundary shared by every node of a Dialogue.

    Output is one line per write; input is one line per read. Formatting of
    option rows and invalid-selection notices lives here so nodes only deal
    with plain labels and raw input.
    """

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        *,
        option_format: str = DEFAULT_OPTION_FORMAT,
        invalid_notice: str = DEFAULT_INVALID_NOTICE,
    ) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.option_format = option_format
        self.invalid_notice = invalid_notice

    # --- output -------------------------------------------------------------
    def write_line(self, text: str) -> None:
        self.stdout.write(f"{text}\n")
        self.stdout.flush()

    def write_option(self, label: str) -> None:
        self.write_line(self.option_format.format(label=label))

    def write_invalid(self, raw: str) -> None:
        self.write_line(self.invalid_notice.format(input=raw))

    # --- input --------------------------------------------------------------
    def read_line(self) -> str:
        """
        Block for one line of input and return it with its line ending.
        An empty read means the stream is closed; an undecodable or failing
        stream is treated the same way.
        """
        try:
            line = self.stdin.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise InputExhausted(f"input stream failed while awaiting a selection: {e}") from e
        if line == "":
            raise InputExhausted("input stream closed while awaiting a selection")
        return line
