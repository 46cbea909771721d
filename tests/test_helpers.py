# -*- coding: utf-8 -*-
import unittest

from tasknest import helpers
from tasknest.util import ShellException


class TestHelpers(unittest.TestCase):

    def test_sh(self):
        action = helpers.sh("echo hello")
        with self.assertLogs("tasknest.helpers", level="INFO") as cm:
            action("there")
        self.assertEqual(cm.output, [
            "INFO:tasknest.helpers:"+helpers.SHELL_COMMAND+"echo hello there",
            "INFO:tasknest.helpers:hello there",
        ])

    def test_sh_quiet_command(self):
        action = helpers.sh("echo out; echo err >&2", log_command=False)
        with self.assertLogs("tasknest.helpers", level="INFO") as cm:
            action()
        self.assertEqual([r.getMessage() for r in cm.records], ["out", "err"])

    def test_sh_fails(self):
        with self.assertRaises(ShellException):
            helpers.sh("false")()


if __name__ == "__main__":
    unittest.main()
