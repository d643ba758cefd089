from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from parley.console import Console, InputExhausted
from parley.narrative.dialogue import Dialogue
from parley.narrative.types import SelectionAttemptsExceeded
from parley.settings import AppCfg

from demo.scenes.prologue import build_prologue

logger = logging.getLogger(__name__)


class DialogueApp:
    """
    Minimal console shell around a Dialogue. It keeps global concerns
    (logging, banners, exit codes) out of the narrative engine.
    """

    def __init__(self, cfg: AppCfg, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.cfg = cfg
        self.console = Console(
            stdin,
            stdout,
            option_format=cfg.console.option_format,
            invalid_notice=cfg.console.invalid_notice,
        )
        self.dialogue = build_prologue(Dialogue(self.console), max_attempts=cfg.choice.max_attempts)

    @staticmethod
    def configure_logging(cfg: AppCfg) -> None:
        # stderr only, stdout carries the conversation
        logging.basicConfig(level=cfg.logging.level_no, format=cfg.logging.format, stream=sys.stderr)

    # ------------------------------------------------------------------ #
    # Main entry
    # ------------------------------------------------------------------ #
    def run(self) -> int:
        """Play the conversation once. Returns a process exit code."""
        if self.cfg.banner.start:
            self.console.write_line(self.cfg.banner.start)
        try:
            visits = self.dialogue.talk()
        except InputExhausted:
            logger.warning("Input closed before a selection was made")
            self.console.write_line("(input closed, conversation aborted)")
            return 1
        except SelectionAttemptsExceeded as e:
            logger.warning("%s", e)
            self.console.write_line("(too many invalid selections, conversation aborted)")
            return 1
        logger.info("Conversation finished after %d nodes", visits)
        if self.cfg.banner.end:
            self.console.write_line(self.cfg.banner.end)
        return 0
