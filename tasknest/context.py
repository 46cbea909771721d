# -*- coding: utf-8 -*-
import os
import logging
import importlib

from . import Task
from . import helpers
from . import settings as _settings
from .namespace import Namespace, GLOBAL_NAME, SEPARATOR
from .engine import Engine, TaskNotFoundError
from .taskcontainer import TaskContainer
from .util import expand_path
from .util.filespec import FileList

logger = logging.getLogger(__name__)

#: Files with this extension are loaded when a directory is included.
INCLUDE_EXTENSION = ".nest"

_missing = object()


class Scope(object):
    """A view of a :class:`tasknest.context.Context` bound to one
    namespace. Tasks declared through a scope are registered in its
    namespace, and namespaces opened through it are nested under it.

    Scopes are handed out by :meth:`tasknest.context.Context.namespace`
    and work as context managers:

    .. code:: python

        with namespace("db") as db:
            db.desc("Apply pending migrations")
            db.task("migrate", ["connect"], migrate)
            with db.namespace("tools") as tools:
                tools.task("dump", ["db:migrate"], dump)

    """

    def __init__(self, context, ns):
        self.context = context
        self.ns = ns


    def task(self, name, dependencies=None, action=None, asynchronous=False):
        return self.context.task(name, dependencies, action,
                                 asynchronous=asynchronous, namespace=self.ns)

    def desc(self, text):
        self.context.desc(text)

    def namespace(self, name, body=None):
        return self.context.namespace(name, body, parent=self.ns)

    def call(self, name, args=(), on_complete=None):
        return self.context.call(name, args, on_complete, namespace=self.ns)


    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        return False

    def __repr__(self):
        return "Scope('{}')".format(self.ns)


class Context(object):
    """Where build scripts are executed and tasks are declared and
    invoked.

    A root context owns the global namespace, the
    :class:`tasknest.engine.Engine`, the index of declared tasks and the
    user properties. Contexts created by
    :meth:`tasknest.context.Context.include` share all of those with
    their parent.

    :keyword path: A build script to load right away.
    :type path: str

    :keyword encoding: The build script encoding.
    :type encoding: str

    :keyword parent: The including context.
    :type parent: :class:`tasknest.context.Context`

    :keyword settings: The settings store. Defaults to
      :func:`tasknest.settings.default`.
    :type settings: :class:`tasknest.settings.Settings`

    :keyword reporter: Receives the engine's task events.
    :type reporter: :class:`tasknest.reporters.BaseReporter`

    """

    def __init__(self, path=None, encoding="utf-8", parent=None,
                 settings=None, reporter=None):
        self.parent = parent
        if parent is not None:
            self.global_namespace = parent.global_namespace
            self.engine = parent.engine
            self.tasks = parent.tasks
            self.properties = parent.properties
            self.settings = parent.settings
        else:
            self.global_namespace = Namespace(GLOBAL_NAME)
            self.engine = Engine(reporter)
            #: every declared task, in declaration order
            self.tasks = TaskContainer()
            self.properties = dict()
            self.settings = settings or _settings.default()

        self.encoding = encoding
        self.path = None
        self._description = ""
        self.scope = Scope(self, self.global_namespace)

        if path is not None:
            self.load(path)


    def _open(self, name, parent):
        if name == GLOBAL_NAME:
            return self.global_namespace
        if name.startswith(GLOBAL_NAME + SEPARATOR):
            parent = self.global_namespace
            name = name[len(GLOBAL_NAME + SEPARATOR):]
        return parent.get_or_create_child(name)


    def desc(self, text):
        """Set the description of the next declared task"""
        self._description = str(text or "")


    def task(self, name, dependencies=None, action=None, asynchronous=False,
             namespace=None):
        """Declare a task.

        :param name: The task name. If it contains ``:``, the part before
          the last ``:`` is a namespace path, created if needed.
        :type name: str

        :keyword dependencies: Names of the tasks to invoke first. A
          callable here is taken as the action of a task without
          dependencies.
        :type dependencies: str or list of str or callable

        :keyword action: The task action.
        :type action: callable

        :keyword asynchronous: The action gets a ``done`` keyword argument
          and has to call it to finish the task.
        :type asynchronous: bool

        :keyword namespace: Where to register the task. Defaults to the
          global namespace.
        :type namespace: :class:`tasknest.namespace.Namespace`

        :returns: The new :class:`tasknest.Task`

        """
        if callable(dependencies) and action is None:
            action, dependencies = dependencies, None

        description, self._description = self._description, ""

        ns = namespace or self.global_namespace
        if SEPARATOR in name:
            prefix, name = name.rsplit(SEPARATOR, 1)
            ns = self._open(prefix, ns)

        t = Task(name, description=description, dependencies=dependencies,
                 action=action, asynchronous=asynchronous)
        ns.register(t)
        self.tasks.append(t)
        return t


    def namespace(self, name, body=None, parent=None):
        """Open a namespace, creating it if needed.

        :param name: The namespace path, relative to ``parent``. A leading
          ``global:`` makes it relative to the global namespace.
        :type name: str

        :keyword body: Called with the namespace's
          :class:`tasknest.context.Scope`.
        :type body: callable

        :keyword parent: Defaults to the global namespace.

        :returns: The namespace's :class:`tasknest.context.Scope`

        """
        ns = self._open(name, parent or self.global_namespace)
        scope = Scope(self, ns)
        if body is not None:
            body(scope)
        return scope


    def call(self, name, args=(), on_complete=None, namespace=None):
        """Invoke a task by name.

        :param name: The task reference, resolved against ``namespace``
          (the global namespace by default).
        :keyword args: Arguments for the task action.
        :keyword on_complete: Called once the task has finished.

        :raises TaskNotFoundError: if the name doesn't resolve

        :returns: The task's :class:`tasknest.engine.Completion`

        """
        ns = namespace or self.global_namespace
        task = ns.resolve(name)
        if task is None:
            raise TaskNotFoundError(name, namespace)
        return self.engine.invoke(task, args, on_complete)


    def prop(self, name, value=_missing):
        """Get a user property, or set it if ``value`` is given. Properties
        are shared by all contexts of a build."""
        if value is _missing:
            return self.properties.get(name)
        self.properties[name] = value


    def _sandbox(self):
        sandbox = {
            "__name__": "__nestfile__",
            "__file__": self.path,
            "task": self.task,
            "desc": self.desc,
            "namespace": self.namespace,
            "include": self.include,
            "call": self.call,
            "prop": self.prop,
            "sh": helpers.sh,
            "FileList": FileList,
            "log": logging.getLogger("tasknest.script"),
            "settings": self.settings,
        }
        for name, module in self.settings.get("context.imports", {}).items():
            sandbox[name] = importlib.import_module(module)
        return sandbox


    def load(self, path):
        """Execute a build script in a fresh sandbox.

        :raises OSError: if the file doesn't exist
        """
        path = os.path.abspath(path)
        if not os.path.isfile(path):
            raise OSError("File not found: " + path)
        self.path = path

        logger.debug("Loading file: %s", path)
        with open(path, encoding=self.encoding) as f:
            source = f.read()
        if source.startswith("\ufeff"):
            source = source[1:]
        exec(compile(source, path, "exec"), self._sandbox())

        if self.parent is None:
            for include in self.settings.get("context.include", []):
                try:
                    self.include(include)
                except OSError as e:
                    logger.warning("Unable to include: %s", include)
                    logger.warning(str(e))
        return self


    def include(self, p, encoding=None):
        """Load another build script, or every ``.nest`` script below a
        directory, into this build. Relative paths are relative to the
        current script's directory; environment variables are expanded.

        :raises OSError: if the path doesn't exist
        """
        base = os.path.dirname(self.path) if self.path else os.getcwd()
        p = expand_path(p, base)
        if not os.path.exists(p):
            raise OSError("File not found: " + p)

        if os.path.isfile(p):
            return Context(p, encoding or self.encoding, parent=self)

        logger.debug("Loading directory: %s", p)
        for name in sorted(os.listdir(p)):
            f = os.path.join(p, name)
            if os.path.isdir(f) or f.endswith(INCLUDE_EXTENSION):
                self.include(f, encoding)
