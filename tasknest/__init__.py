# -*- coding: utf-8 -*-
from .namespace import Namespace, DuplicateNameError, GLOBAL_NAME, SEPARATOR
from .util import sugar_list

__version__ = "0.3.1"


class Task(object):
    """A unit of work.

    :param name: The task name; must be unique to all tasks within its
      namespace.
    :type name: str

    :keyword namespace: The namespace that owns the task. Usually left
      as None and set when the task is registered with
      :meth:`tasknest.namespace.Namespace.register`.
    :type namespace: :class:`tasknest.namespace.Namespace`

    :keyword description: A human readable description, shown in task
      listings.
    :type description: str

    :keyword dependencies: The names of the tasks that must be invoked
      before this one. Names are resolved relative to the task's
      namespace.
    :type dependencies: str or list of str

    :keyword action: The work to do. Called with the task arguments.
    :type action: callable

    :keyword asynchronous: If True, the action is also given a
      ``done`` keyword argument and the task isn't finished until the
      action calls it, or calls ``done.fail(error)`` to report a
      failure.
    :type asynchronous: bool

    """

    def __init__(self, name, namespace=None, description="", dependencies=None,
                 action=None, asynchronous=False):
        if not isinstance(name, str) or not name:
            raise ValueError("Task name must be a non-empty string")
        if action is not None and not callable(action):
            raise TypeError("Task action for `{}' is not callable".format(name))

        self.name = name
        self._namespace = None
        if namespace is not None:
            self.namespace = namespace
        self.description = description or ""
        self.dependencies = sugar_list(dependencies) if dependencies else []
        self.action = action
        self.asynchronous = asynchronous is True


    @property
    def namespace(self):
        return self._namespace

    @namespace.setter
    def namespace(self, ns):
        if self._namespace is not None and self._namespace is not ns:
            raise DuplicateNameError(
                "The task `{}' is already registered in "
                "another namespace".format(self))
        self._namespace = ns


    @property
    def qualified_name(self):
        if self._namespace is None:
            return self.name
        return self._namespace.qualified_name + SEPARATOR + self.name


    @property
    def display_name(self):
        """The qualified name without the root namespace prefix"""
        prefix = GLOBAL_NAME + SEPARATOR
        name = self.qualified_name
        if name.startswith(prefix):
            return name[len(prefix):]
        return name


    def is_needed(self):
        """Whether the action has to run at all. Task types that know
        when their work is already done can override this."""
        return True


    def execute(self, args, done):
        """Run the action with ``args``. Call ``done`` when finished:
        right after the action returns for synchronous tasks, or leave
        it to the action for asynchronous ones."""
        if self.action is None:
            done()
        elif self.asynchronous:
            self.action(*args, done=done)
        else:
            self.action(*args)
            done()


    def __str__(self):
        return self.qualified_name

    def __repr__(self):
        return "Task('{}')".format(self.qualified_name)


from .chain import InvocationChain, CircularDependencyError
from .engine import Engine, Completion, TaskNotFoundError
from .context import Context

Context # pyflakes
