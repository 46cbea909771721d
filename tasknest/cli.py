# -*- coding: utf-8 -*-
import os
import sys
import time
import logging
import argparse
import collections

from . import __version__
from . import graph
from . import reporters
from . import settings as _settings
from .context import Context
from .engine import TaskNotFoundError
from .util.matcher import closest_names

logger = logging.getLogger(__name__)

DEFAULT_TASK = "default"

#: command line option -> settings key
SETTINGS_MAP = collections.OrderedDict([
    ("buildfile", "app.buildfile"),
    ("encoding", "app.encoding"),
    ("search", "app.search"),
    ("include", "context.include"),
    ("quiet", "output.quiet"),
    ("level", "output.level"),
    ("log", "output.logfile"),
])


class BuildfileNotFoundError(OSError):
    pass


class Configuration(object):
    """The Configuration class makes objects that get user input via a
    command line interface and store the user input for easy access.

    Typical usage is as follows:

    .. code:: python

        from tasknest.cli import Configuration

        conf = Configuration().ask_user(["-f", "build/Nestfile", "test"])

        conf.buildfile # "build/Nestfile"
        conf.task # "test"


    :keyword description: Set the description shown to the user when
      the help flag is given
    :type description: str

    :keyword version: Set the version shown to the user when the
      version flag is given
    :type version: str

    """

    def __init__(self, description=None, version=None):
        self.description = description or "Invoke tasks declared in a build script."
        self.version = version
        self._user_asked = False

        self.parser = argparse.ArgumentParser(
            prog="tasknest",
            usage="%(prog)s [options] [task] [args ...]",
            description=self.description,
            formatter_class=argparse.RawTextHelpFormatter)

        for _, arg_values in self.get_default_options():
            flags = [f for f in (arg_values.short, arg_values.long) if f]
            self.parser.add_argument(*flags, **arg_values.keywords)
        self.parser.add_argument("task", nargs="?", default=None,
            help="The task to invoke \n[default: {}]".format(DEFAULT_TASK))
        self.parser.add_argument("args", nargs=argparse.REMAINDER,
            help="Arguments passed to the task")

        if self.version:
            self.parser.add_argument("-V", "--version", action="version",
                                     version="%(prog)s v"+self.version)


    @staticmethod
    class Argument(object):
        def __init__(self, short, long, default=None, type=None, action=None,
                     choices=None, help=None, dest=None, nargs=None,
                     const=None, metavar=None):
            self.short=short
            self.long=long

            # argparse keywords, only the ones given
            keywords={"default":default, "type":type, "action":action, "choices":choices,
                      "help":help, "dest":dest, "nargs":nargs, "const":const,
                      "metavar":metavar}
            self.keywords = {key:value for key, value in keywords.items() if value is not None}

    @classmethod
    def get_default_options(cls):
        return [
            ("buildfile", cls.Argument("-f", "--buildfile", metavar="FILE",
                help="Read FILE as the build script")),
            ("encoding", cls.Argument("-e", "--encoding", metavar="ENC",
                help="The build script encoding \n[default: utf-8]")),
            ("search", cls.Argument("-N", "--no-search", action="store_false", dest="search",
                default=argparse.SUPPRESS, help="Do not search parent directories for a build script")),
            ("tasks", cls.Argument("-T", "--tasks", nargs="?", const="", metavar="REGEX",
                help="Display the tasks (matching optional regular expression)")),
            ("prereqs", cls.Argument("-P", "--prereqs", action="store_true",
                help="Display the tasks and their prerequisites")),
            ("dry_run", cls.Argument("-n", "--dry-run", action="store_true",
                help="Print the tasks in execution order but don't run them")),
            ("include", cls.Argument("-I", "--include", action="append", metavar="FILE",
                help="Include FILE as a build script. Add multiple times to append.")),
            ("quiet", cls.Argument("-q", "--quiet", action="store_true", default=argparse.SUPPRESS,
                help="Do not display any messages")),
            ("level", cls.Argument(None, "--level", type=str.upper,
                choices=["DEBUG","INFO","WARNING","ERROR","CRITICAL"],
                help="Set the level of output \n[default: INFO]")),
            ("verbose", cls.Argument("-v", None, action="store_const", dest="level",
                const="DEBUG", help="Same as --level DEBUG")),
            ("log", cls.Argument(None, "--log", metavar="FILE",
                help="Also log the run to FILE")),
        ]

    def get(self, name, default=None):
        """Get a stored option value from the Configuration object.

        :param name: The name of the value to get
        """
        if not self._user_asked:
            self.ask_user()

        return getattr(self, name, default)

    __getitem__ = get

    def ask_user(self, argv=None, override=False):
        """Parse the command line and store the values in the
        Configuration object. The values are cached; if this method is
        called again, it does nothing and returns the current
        Configuration object.

        :keyword argv: The command line arguments to parse. Defaults
          to sys.argv[1:].
        :type argv: list of str

        :keyword override: Override the caching behavior.
        :type override: bool

        :returns: self (the current Configuration object)

        """
        if self._user_asked and not override:
            return self

        opts = self.parser.parse_args(args=argv)
        for name, val in vars(opts).items():
            logger.debug("Command line argument `%s' = `%s'", name, val)
            setattr(self, name, val)
        self._user_asked = True
        return self

    def apply(self, settings):
        """Copy the options given on the command line into ``settings``.
        Options left unset keep the current setting; included files are
        appended to the configured ones."""
        for option, key in SETTINGS_MAP.items():
            value = self.get(option)
            if value is None:
                continue
            if isinstance(value, list):
                value = list(settings.get(key) or []) + value
            settings.set(key, value)
        return settings


def find_buildfile(settings, cwd=None):
    """Locate the build script: the ``app.buildfile`` setting if set,
    otherwise the first of the ``config.buildfiles`` names found in
    ``cwd`` or, unless ``app.search`` is False, in any parent directory.

    :raises BuildfileNotFoundError: if nothing is found
    """
    names = settings.get("config.buildfiles", ["Nestfile"])
    buildfile = settings.get("app.buildfile")

    if buildfile is None:
        search = settings.get("app.search") is not False
        d = os.path.abspath(cwd or os.getcwd())
        while buildfile is None:
            for name in names:
                candidate = os.path.join(d, name)
                if os.path.isfile(candidate):
                    buildfile = candidate
                    break
            parent = os.path.dirname(d)
            if not search or parent == d:
                break
            d = parent

    if buildfile is None or not os.path.isfile(buildfile):
        raise BuildfileNotFoundError(
            "Build script not found (looking for: {})".format(", ".join(names)))
    return os.path.abspath(buildfile)


def show_tasks(ctx, pattern=None, stream=None):
    stream = stream or sys.stdout
    for task in ctx.tasks.search(pattern or ""):
        stream.write("{:<30}# {}\n".format(task.display_name, task.description))


def show_prereqs(ctx, stream=None):
    stream = stream or sys.stdout
    dag = graph.dependency_graph(ctx.global_namespace)
    for task in ctx.tasks:
        stream.write(task.display_name + "\n")
        for dep in dag.successors(task):
            stream.write("    " + dep.display_name + "\n")


def show_execution_order(task, stream=None):
    stream = stream or sys.stdout
    for t in graph.execution_order(task):
        stream.write(t.display_name + "\n")


def _log_level(settings):
    if settings.get("output.quiet"):
        return logging.CRITICAL + 1
    return getattr(logging, str(settings.get("output.level", "INFO")).upper(), logging.INFO)


def main(argv=None):
    """Command line entry point.

    :returns: The exit status: 0 on success, 2 on any error.
    """
    settings = _settings.default()
    conf = Configuration(version=__version__).ask_user(argv=argv)
    conf.apply(settings)

    console = reporters.ConsoleReporter(sys.stdout)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(reporters.IndentFormatter(console))
    package_logger = logging.getLogger("tasknest")
    package_logger.addHandler(handler)

    def configure(key, value):
        console.quiet = bool(settings.get("output.quiet"))
        package_logger.setLevel(_log_level(settings))

    configure(None, None)
    settings.connect(configure)

    ctx = None
    try:
        reporter = console
        if settings.get("output.logfile"):
            reporter = reporters.ReporterGroup([
                reporters.LoggerReporter(settings.get("output.level", "INFO"),
                                         settings.get("output.logfile")),
                console])

        ctx = Context(encoding=settings.get("app.encoding", "utf-8"),
                      settings=settings, reporter=reporter)
        ctx.load(find_buildfile(settings))

        if conf.get("tasks") is not None:
            show_tasks(ctx, conf.get("tasks"))
            return 0
        if conf.get("prereqs"):
            show_prereqs(ctx)
            return 0

        task_name = conf.get("task") or DEFAULT_TASK
        if conf.get("dry_run"):
            task = ctx.global_namespace.resolve(task_name)
            if task is None:
                raise TaskNotFoundError(task_name)
            show_execution_order(task)
            return 0

        start_time = time.time()
        completion = ctx.call(task_name, conf.get("args") or [], on_complete=lambda:
            logger.info("Completed successfully in %.0f seconds",
                        time.time() - start_time))
        completion.wait()
        return 0
    except TaskNotFoundError as e:
        logger.error(str(e))
        if ctx is not None:
            known = [t.display_name for t in ctx.tasks]
            similar = closest_names(e.reference, known, max_distance=len(e.reference))
            if similar:
                logger.error("Did you mean: %s", ", ".join(similar))
        return 2
    except Exception as e:
        logger.error("%s: %s", e.__class__.__name__, e)
        logger.debug("Traceback:", exc_info=True)
        return 2
    finally:
        settings.disconnect(configure)
        package_logger.removeHandler(handler)


if __name__ == "__main__":
    sys.exit(main())
