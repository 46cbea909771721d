# -*- coding: utf-8 -*-
import unittest

from tasknest import graph
from tasknest.chain import CircularDependencyError
from tasknest.engine import Engine, TaskNotFoundError
from tasknest.namespace import Namespace, GLOBAL_NAME

from tests.util import add, Recorder, RecordingReporter


class TestGraph(unittest.TestCase):

    def setUp(self):
        self.root = Namespace(GLOBAL_NAME)
        self.rec = Recorder()

    def task(self, name, deps=None, ns=None):
        return add(ns or self.root, name, deps, self.rec.action(name))


    def test_prerequisites(self):
        db = self.root.get_or_create_child("db")
        connect = self.task("connect", ns=db)
        clean = self.task("clean")
        migrate = self.task("migrate", ["connect", "global:clean"], ns=db)
        self.assertEqual(graph.prerequisites(migrate), [connect, clean])

    def test_prerequisites_missing(self):
        t = self.task("t", ["nope"])
        with self.assertRaises(TaskNotFoundError):
            graph.prerequisites(t)

    def test_dependency_graph(self):
        self.task("clean")
        build = self.task("build", ["clean"])
        db = self.root.get_or_create_child("db")
        self.task("migrate", ["global:build"], ns=db)
        dag = graph.dependency_graph(self.root)
        self.assertEqual(len(dag), 3)
        self.assertEqual([str(t) for t in dag.successors(build)], ["global:clean"])

    def test_reachable_graph(self):
        self.task("unrelated")
        self.task("clean")
        build = self.task("build", ["clean"])
        dag = graph.reachable_graph(build)
        self.assertEqual(sorted(str(t) for t in dag), ["global:build", "global:clean"])

    def test_execution_order_matches_engine(self):
        self.task("D")
        self.task("C", ["D"])
        self.task("B", ["D", "C"])
        a = self.task("A", ["B", "C"])
        order = [t.name for t in graph.execution_order(a)]
        Engine(RecordingReporter()).invoke(a)
        self.assertEqual(order, ["D", "C", "B", "A"])
        self.assertEqual(order, self.rec.order)
        self.assertEqual(self.rec.order, ["D", "C", "B", "A"])

    def test_execution_order_cycle(self):
        top = self.task("top", ["X"])
        x = self.task("X", ["Y"])
        self.task("Y", ["X"])
        with self.assertRaises(CircularDependencyError) as cm:
            graph.execution_order(top)
        self.assertEqual([t.name for t in cm.exception.chain], ["top", "X", "Y"])
        self.assertIs(cm.exception.task, x)
        self.assertEqual(self.rec.order, [])


if __name__ == "__main__":
    unittest.main()
