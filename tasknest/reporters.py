# -*- coding: utf-8 -*-
import os
import sys
import logging

from .util import mkdirp

INDENT_WIDTH = 4


class BaseReporter(object):

    """The base reporter defines the hooks the
    :class:`tasknest.engine.Engine` calls while invoking tasks.

    Tasks are passed as :class:`tasknest.Task` objects; use
    ``task.qualified_name`` or ``task.display_name`` to name them.
    """

    def started(self, task, args):
        """Executed when a top-level invocation begins, before any of
        the dependencies of ``task`` are invoked.

        :param task: The task requested by the caller.
        :param args: The arguments for the task action.
        :type args: tuple

        """
        raise NotImplementedError()

    def task_started(self, task, args):
        """Executed right before a task's action runs. All of the task's
        dependencies have completed at this point.

        :param task: The task about to run.
        :param args: The arguments the action is called with.
        :type args: tuple

        """
        raise NotImplementedError()

    def task_skipped(self, task):
        """Executed when the engine determines a task needn't run: it was
        already invoked, or it says it isn't needed."""
        raise NotImplementedError()

    def task_completed(self, task):
        """Executed when a task's action has finished. For asynchronous
        tasks, that's when the action signals completion."""
        raise NotImplementedError()

    def task_failed(self, task, error):
        """Executed when a task's action raises an exception. The
        exception still propagates to the caller after this hook.

        :param error: The exception raised by the action.

        """
        raise NotImplementedError()

    def finished(self, task, error=None):
        """Executed when a top-level invocation finishes, successfully or
        not.

        :param task: The task requested by the caller.
        :keyword error: The exception that aborted the invocation, if
          any.

        """
        raise NotImplementedError()


class ReporterGroup(BaseReporter):
    """Sometimes you want to use multiple reporters. For that, there is
    ReporterGroup. Here's an example usage:

    .. code:: python

      from tasknest.reporters import ReporterGroup
      my_grouped_reporter = ReporterGroup([custom_reporter_a,
                                           custom_reporter_b])
      ...
      ctx = Context(reporter=my_grouped_reporter)

    """

    def __init__(self, other_reporters):
        self.reps = other_reporters


    def started(self, task, args):
        for r in self.reps:
            r.started(task, args)

    def task_started(self, task, args):
        for r in self.reps:
            r.task_started(task, args)

    def task_skipped(self, task):
        for r in self.reps:
            r.task_skipped(task)

    def task_completed(self, task):
        for r in self.reps:
            r.task_completed(task)

    def task_failed(self, task, error):
        for r in self.reps:
            r.task_failed(task, error)

    def finished(self, task, error=None):
        for r in self.reps:
            r.finished(task, error)


class ConsoleReporter(BaseReporter):
    """Prints the name of every task as it runs. Output logged while a
    task runs is indented under its name when it's formatted with
    :class:`tasknest.reporters.IndentFormatter`:

    ::

      clean:
          removing build/
      build:
          compiling 12 files

    :keyword stream: Where to write. Defaults to stdout.

    :keyword quiet: Write nothing. The indentation is still tracked.
    :type quiet: bool

    """

    def __init__(self, stream=None, quiet=False):
        self.stream = stream
        self.quiet = quiet
        self.indent = 0
        self.failed = list()


    def _write(self, s):
        if self.quiet:
            return
        stream = self.stream or sys.stdout
        stream.write(" "*self.indent + s + "\n")
        stream.flush()


    def started(self, task, args):
        self.indent = 0
        self.failed = list()

    def task_started(self, task, args):
        self._write(task.display_name + ":")
        self.indent += INDENT_WIDTH

    def task_skipped(self, task):
        pass

    def task_completed(self, task):
        self.indent = max(0, self.indent - INDENT_WIDTH)

    def task_failed(self, task, error):
        self.indent = max(0, self.indent - INDENT_WIDTH)
        self.failed.append((task, error))

    def finished(self, task, error=None):
        self.indent = 0
        for failed_task, failed_error in self.failed:
            self._write("Task {} failed".format(failed_task.display_name))
            for line in str(failed_error).split("\n"):
                self._write("  " + line)
        self.failed = list()


class IndentFormatter(logging.Formatter):
    """Indent each log line by the current depth of a
    :class:`tasknest.reporters.ConsoleReporter`"""

    def __init__(self, reporter, fmt=None):
        super(IndentFormatter, self).__init__(fmt or "%(message)s")
        self.reporter = reporter

    def format(self, record):
        s = super(IndentFormatter, self).format(record)
        pad = " " * self.reporter.indent
        return "\n".join(pad + line for line in s.split("\n"))


class LoggerReporter(BaseReporter):
    """A reporter that uses :mod:`logging`.

    :param loglevel_str: The logging level. Valid levels: debug, info,
      warning, error, critical. If given, the root logger is configured
      with :func:`logging.basicConfig`.
    :type loglevel_str: str

    :param logfile: The file to log to. Defaults to stderr.
    :type logfile: str or file-like

    :param fmt_str: The log format. See :mod:`logging` for more
      information
    :type fmt_str: str

    """

    FORMAT = "%(asctime)s\t%(name)s\t%(funcName)s\t%(levelname)s: %(message)s"

    def __init__(self, loglevel_str=None, logfile=None,
                 fmt_str=None, *args, **kwargs):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.any_failed = False
        if not (loglevel_str or logfile):
            return

        # create the log file folder if needed
        if logfile and isinstance(logfile, str):
            mkdirp(os.path.dirname(os.path.abspath(logfile)))
        self.loglevel_str = (loglevel_str or "WARNING").upper()
        loglevel = getattr(logging, self.loglevel_str)
        logkwds = {"format": fmt_str or self.FORMAT,
                   "level":  loglevel }
        if logfile and hasattr(logfile, "write"):
            logkwds['stream'] = logfile
        elif logfile:
            logkwds['filename'] = logfile
        logging.basicConfig(**logkwds)


    def started(self, task, args):
        self.any_failed = False
        self.logger.info("Beginning invocation of %s", task)

    def task_started(self, task, args):
        self.logger.info("Executing task %s", task)
        self.logger.debug("  with arguments: %r", args)

    def task_skipped(self, task):
        self.logger.debug("Skipped task %s", task)

    def task_completed(self, task):
        self.logger.info("Completed task %s", task)

    def task_failed(self, task, error):
        self.any_failed = True
        self.logger.error("Task %s failed: %s", task, error)

    def finished(self, task, error=None):
        if error is not None or self.any_failed:
            self.logger.error("Invocation of %s failed", task)
        else:
            self.logger.info("Invocation of %s finished", task)
