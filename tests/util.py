# -*- coding: utf-8 -*-
import tasknest
from tasknest.reporters import BaseReporter


def add(ns, name, deps=None, action=None, asynchronous=False):
    return ns.register(tasknest.Task(name, dependencies=deps, action=action,
                                     asynchronous=asynchronous))


class Recorder(object):
    """Makes task actions that record when they run"""

    def __init__(self):
        self.order = list()
        self.args = dict()
        self.handles = dict()

    def action(self, name):
        def act(*args):
            self.order.append(name)
            self.args[name] = args
        return act

    def async_action(self, name):
        def act(*args, **kwargs):
            self.order.append(name)
            self.args[name] = args
            self.handles[name] = kwargs["done"]
        return act


class RecordingReporter(BaseReporter):

    def __init__(self):
        self.events = list()

    def started(self, task, args):
        self.events.append(("started", task.name))

    def task_started(self, task, args):
        self.events.append(("task_started", task.name, args))

    def task_skipped(self, task):
        self.events.append(("task_skipped", task.name))

    def task_completed(self, task):
        self.events.append(("task_completed", task.name))

    def task_failed(self, task, error):
        self.events.append(("task_failed", task.name, str(error)))

    def finished(self, task, error=None):
        self.events.append(("finished", task.name, error is not None))
