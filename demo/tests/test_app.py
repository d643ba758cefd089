# test_app.py
import io
import tempfile
import unittest
from pathlib import Path

from parley.app import DialogueApp
from parley.console import Console, InputExhausted
from parley.settings import AppCfg, load_settings


def _write_yaml(text: str) -> Path:
    tmp = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False, encoding="utf-8")
    with tmp:
        tmp.write(text)
    return Path(tmp.name)


class TestSettings(unittest.TestCase):
    def test_missing_file_gives_defaults(self):
        cfg = load_settings("does/not/exist.yaml")
        self.assertEqual(cfg.console.option_format, "[ {label} ]")
        self.assertIsNone(cfg.choice.max_attempts)
        self.assertEqual(cfg.logging.level, "WARNING")

    def test_bundled_defaults_load(self):
        cfg = load_settings()
        self.assertIsNone(cfg.choice.max_attempts)
        self.assertTrue(cfg.banner.start)

    def test_overrides(self):
        p = _write_yaml(
            "console:\n"
            "  option_format: '- {label}'\n"
            "choice:\n"
            "  max_attempts: 3\n"
            "logging:\n"
            "  level: debug\n"
        )
        cfg = load_settings(p)
        self.assertEqual(cfg.console.option_format, "- {label}")
        self.assertEqual(cfg.console.invalid_notice, "Invalid selection: '{input}'")
        self.assertEqual(cfg.choice.max_attempts, 3)
        self.assertEqual(cfg.logging.level, "DEBUG")
        self.assertEqual(cfg.logging.level_no, 10)

    def test_bad_values(self):
        for body in ("choice:\n  max_attempts: 0\n",
                     "choice:\n  max_attempts: many\n",
                     "logging:\n  level: LOUD\n",
                     "console:\n  option_format: '[ {name} ]'\n",
                     "console:\n  option_format: '[ {0} ]'\n",
                     "console:\n  invalid_notice: 'bad {input'\n",
                     "console:\n  invalid_notice: 'bad {label}'\n",
                     "- just\n- a list\n"):
            with self.subTest(body=body):
                with self.assertRaises(ValueError):
                    load_settings(_write_yaml(body))


class TestConsole(unittest.TestCase):
    def test_read_line_keeps_line_ending(self):
        con = Console(io.StringIO("abc\n"), io.StringIO())
        self.assertEqual(con.read_line(), "abc\n")
        with self.assertRaises(InputExhausted):
            con.read_line()

    def test_undecodable_input_counts_as_exhausted(self):
        stdin = io.TextIOWrapper(io.BytesIO(b"\xff\n"), encoding="utf-8")
        con = Console(stdin, io.StringIO())
        with self.assertRaises(InputExhausted) as ctx:
            con.read_line()
        self.assertIsInstance(ctx.exception.__cause__, UnicodeDecodeError)

    def test_custom_formats(self):
        out = io.StringIO()
        con = Console(io.StringIO(), out, option_format="<{label}>", invalid_notice="no: {input}")
        con.write_option("Yes")
        con.write_invalid("maybe")
        self.assertEqual(out.getvalue(), "<Yes>\nno: maybe\n")


class TestDialogueApp(unittest.TestCase):
    def _run(self, feed: str, cfg: AppCfg = None):
        out = io.StringIO()
        app = DialogueApp(cfg or AppCfg(), stdin=io.StringIO(feed), stdout=out)
        return app.run(), out.getvalue().splitlines()

    def test_yes_branch(self):
        code, lines = self._run("Yes\n")
        self.assertEqual(code, 0)
        self.assertEqual(lines, [
            "First dialogue line!",
            "This is the second dialogue line, terminated by a newline.",
            "This is the third dialogue line! Very cool!",
            "Do you want to hear one more line?",
            "[ Yes ]",
            "[ No ]",
            "Here it is: the last line of the demo.",
            "Thanks for listening!",
        ])

    def test_no_branch_after_invalid_input(self):
        code, lines = self._run("nope\n No \n")
        self.assertEqual(code, 0)
        self.assertEqual(lines[-2:], ["Invalid selection: 'nope'", "Alright, maybe next time."])

    def test_banners(self):
        cfg = AppCfg()
        cfg.banner.start = "BEGIN"
        cfg.banner.end = "END"
        code, lines = self._run("No\n", cfg)
        self.assertEqual(code, 0)
        self.assertEqual(lines[0], "BEGIN")
        self.assertEqual(lines[-1], "END")

    def test_input_closed(self):
        with self.assertLogs("parley.app", level="WARNING"):
            code, lines = self._run("")
        self.assertEqual(code, 1)
        self.assertEqual(lines[-1], "(input closed, conversation aborted)")

    def test_undecodable_input_aborts_cleanly(self):
        out = io.StringIO()
        stdin = io.TextIOWrapper(io.BytesIO(b"\xff\xfe\n"), encoding="utf-8")
        app = DialogueApp(AppCfg(), stdin=stdin, stdout=out)
        with self.assertLogs("parley.app", level="WARNING"):
            code = app.run()
        self.assertEqual(code, 1)
        self.assertEqual(out.getvalue().splitlines()[-1], "(input closed, conversation aborted)")

    def test_attempt_cap_from_settings(self):
        cfg = AppCfg()
        cfg.choice.max_attempts = 1
        with self.assertLogs("parley.app", level="WARNING"):
            code, lines = self._run("maybe\nYes\n", cfg)
        self.assertEqual(code, 1)
        self.assertEqual(lines[-1], "(too many invalid selections, conversation aborted)")


if __name__ == "__main__":
    unittest.main()
