from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol

from parley.console import Console
from parley.narrative.ids import END_ID, START_ID, NodeId, check_id
from parley.narrative.options import ChoiceOption, OptionTable

logger = logging.getLogger(__name__)


class SelectionAttemptsExceeded(RuntimeError):
    """A ChoiceNode with an attempt cap received too many invalid inputs."""

    def __init__(self, prompt: str, attempts: int) -> None:
        super().__init__(f"No valid selection for {prompt!r} after {attempts} attempts")
        self.prompt = prompt
        self.attempts = attempts


class Node(Protocol):
    """Polymorphic dialogue unit, no inheritance burden."""
    def emit(self, console: Console) -> NodeId: ...
    def connect(self, node_id: NodeId) -> None: ...


@dataclass(eq=False)
class LineNode:
    text: str
    next_id: NodeId = END_ID

    def __post_init__(self) -> None:
        check_id(self.next_id)

    def emit(self, console: Console) -> NodeId:
        console.write_line(self.text)
        return self.next_id

    def connect(self, node_id: NodeId) -> None:
        self.next_id = check_id(node_id)


@dataclass(eq=False)
class ChoiceNode:
    prompt: str
    fallback_id: NodeId = END_ID            # Only used while there are no options
    max_attempts: Optional[int] = None      # None = retry forever
    options: OptionTable = field(default_factory=OptionTable)
    resolved_id: Optional[NodeId] = field(default=None, init=False)  # Overwritten every visit

    def __post_init__(self) -> None:
        check_id(self.fallback_id)
        if self.max_attempts is not None:
            if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, int):
                raise ValueError(f"max_attempts must be an int or None, got {self.max_attempts!r}")
            if self.max_attempts < 1:
                raise ValueError("max_attempts must be >= 1 or None")

    def insert_option(self, label: str, destination: NodeId) -> ChoiceOption:
        return self.options.insert(label, destination)

    def connect(self, node_id: NodeId) -> None:
        self.fallback_id = check_id(node_id)

    def emit(self, console: Console) -> NodeId:
        """
        Show the prompt and options, then block until the (trimmed) input
        exactly matches one label. Invalid input is reported and read again;
        the option list is not re-printed.
        """
        self.resolved_id = None
        console.write_line(self.prompt)
        if not len(self.options):
            # Nothing could ever match; fall through to the connected successor
            return self.fallback_id

        for opt in self.options:
            console.write_option(opt.label)

        attempts = 0
        while True:
            raw = console.read_line().strip()
            chosen = self.options.lookup(raw)
            if chosen is not None:
                self.resolved_id = chosen.destination
                return chosen.destination

            attempts += 1
            logger.debug("Rejected selection %r for %r (attempt %d)", raw, self.prompt, attempts)
            console.write_invalid(raw)
            if self.max_attempts is not None and attempts >= self.max_attempts:
                raise SelectionAttemptsExceeded(self.prompt, attempts)
