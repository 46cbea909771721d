# -*- coding: utf-8 -*-
import io
import logging
import unittest

from tasknest import reporters
from tasknest.engine import Engine
from tasknest.namespace import Namespace, GLOBAL_NAME

from tests.util import add, RecordingReporter


class TestConsoleReporter(unittest.TestCase):

    def setUp(self):
        self.root = Namespace(GLOBAL_NAME)
        self.out = io.StringIO()
        self.console = reporters.ConsoleReporter(self.out)
        self.logger = logging.getLogger("tasknest.tests.console")
        self.handler = logging.StreamHandler(self.out)
        self.handler.setFormatter(reporters.IndentFormatter(self.console))
        self.logger.addHandler(self.handler)
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False


    def tearDown(self):
        self.logger.removeHandler(self.handler)


    def test_indented_output(self):
        db = self.root.get_or_create_child("db")
        add(self.root, "clean", action=lambda: self.logger.info("removing build/"))
        add(db, "migrate", ["global:clean"],
            action=lambda: self.logger.info("one\ntwo"))
        Engine(self.console).invoke(self.root.resolve("db:migrate"))
        self.assertEqual(self.out.getvalue(), "\n".join([
            "clean:",
            "    removing build/",
            "db:migrate:",
            "    one",
            "    two",
            ""]))

    def test_failure_summary(self):
        def boom():
            raise ValueError("no good\nat all")
        t = add(self.root, "bad", action=boom)
        with self.assertRaises(ValueError):
            Engine(self.console).invoke(t)
        self.assertEqual(self.out.getvalue(), "\n".join([
            "bad:",
            "Task bad failed",
            "  no good",
            "  at all",
            ""]))
        self.assertEqual(self.console.indent, 0)

    def test_quiet(self):
        self.console.quiet = True
        Engine(self.console).invoke(add(self.root, "t"))
        self.assertEqual(self.out.getvalue(), "")


class TestReporterGroup(unittest.TestCase):

    def test_fan_out(self):
        root = Namespace(GLOBAL_NAME)
        a, b = RecordingReporter(), RecordingReporter()
        add(root, "dep")
        t = add(root, "top", ["dep"])
        engine = Engine(reporters.ReporterGroup([a, b]))
        engine.invoke(t)
        engine.invoke(t)
        self.assertEqual(a.events, b.events)
        self.assertIn(("task_skipped", "top"), a.events)
        self.assertEqual(a.events[-1], ("finished", "top", False))


class TestLoggerReporter(unittest.TestCase):

    def test_messages(self):
        root = Namespace(GLOBAL_NAME)
        t = add(root, "build")
        with self.assertLogs("LoggerReporter", level="INFO") as cm:
            Engine(reporters.LoggerReporter()).invoke(t)
        self.assertEqual(cm.output, [
            "INFO:LoggerReporter:Beginning invocation of global:build",
            "INFO:LoggerReporter:Executing task global:build",
            "INFO:LoggerReporter:Completed task global:build",
            "INFO:LoggerReporter:Invocation of global:build finished",
        ])

    def test_failure(self):
        def boom():
            raise RuntimeError("boom")
        t = add(Namespace(GLOBAL_NAME), "bad", action=boom)
        with self.assertLogs("LoggerReporter", level="ERROR") as cm:
            with self.assertRaises(RuntimeError):
                Engine(reporters.LoggerReporter()).invoke(t)
        self.assertEqual(cm.output, [
            "ERROR:LoggerReporter:Task global:bad failed: boom",
            "ERROR:LoggerReporter:Invocation of global:bad failed",
        ])


if __name__ == "__main__":
    unittest.main()
