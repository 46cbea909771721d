# -*- coding: utf-8 -*-
import logging
import threading

from . import reporters
from .chain import InvocationChain

logger = logging.getLogger(__name__)


class TaskNotFoundError(LookupError):
    """Raised when a task reference doesn't resolve to a registered
    task.

    :ivar reference: The task reference that didn't resolve.
    :ivar namespace: The namespace the reference was resolved against.
    """

    def __init__(self, reference, namespace=None):
        self.reference = reference
        self.namespace = namespace
        if namespace is None:
            msg = "Task not found: " + reference
        else:
            msg = "Task `{}' not found in namespace `{}'".format(
                reference, namespace)
        super(TaskNotFoundError, self).__init__(msg)


class Completion(object):
    """A one-shot signal that a task has finished, successfully or not.

    Synchronous and asynchronous tasks share this contract: whoever
    finishes the work calls the completion object, or calls
    :meth:`tasknest.engine.Completion.fail` with the exception that
    stopped it. Everything waiting on it runs right then, in
    registration order: callbacks registered with
    :meth:`tasknest.engine.Completion.add_done_callback` on success,
    those registered with
    :meth:`tasknest.engine.Completion.add_error_callback` on failure.

    :keyword task: The task this completion belongs to. Only used for
      messages.

    :ivar done: True once signaled either way.
    :ivar error: The exception the completion failed with, or None.

    """

    def __init__(self, task=None):
        self.task = task
        self.done = False
        self.error = None
        self._callbacks = list()
        self._errbacks = list()
        self._lock = threading.Lock()
        self._event = threading.Event()


    def add_done_callback(self, fn):
        """Call ``fn()`` on success. Runs right away if already
        succeeded; never runs if the completion failed."""
        with self._lock:
            pending = not self.done
            if pending:
                self._callbacks.append(fn)
        if not pending and self.error is None:
            fn()
        return self


    def add_error_callback(self, fn):
        """Call ``fn(error)`` on failure. Runs right away if already
        failed; never runs if the completion succeeded."""
        with self._lock:
            pending = not self.done
            if pending:
                self._errbacks.append(fn)
        if not pending and self.error is not None:
            fn(self.error)
        return self


    def _settle(self, error):
        with self._lock:
            if self.done:
                logger.warning("Completion of task %s signaled more than once",
                               self.task)
                return None
            self.done = True
            self.error = error
            callbacks, errbacks = self._callbacks, self._errbacks
            self._callbacks, self._errbacks = list(), list()
        return errbacks if error is not None else callbacks


    def __call__(self):
        callbacks = self._settle(None)
        if callbacks is None:
            return
        try:
            for fn in callbacks:
                fn()
        finally:
            self._event.set()


    def fail(self, error):
        errbacks = self._settle(error)
        if errbacks is None:
            return
        try:
            for fn in errbacks:
                fn(error)
        finally:
            self._event.set()


    def wait(self, timeout=None):
        """Block the calling thread until signaled. Only useful when the
        completion is signaled from another thread.

        :returns: True if signaled, False on timeout
        :raises: the exception the completion failed with
        """
        signaled = self._event.wait(timeout)
        if signaled and self.error is not None:
            raise self.error
        return signaled


    def __repr__(self):
        if not self.done:
            state = "pending"
        elif self.error is not None:
            state = "failed"
        else:
            state = "done"
        return "<Completion {} {}>".format(self.task, state)


class Engine(object):
    """Invokes tasks: dependencies first, in declaration order, each
    fully completed before the next starts, then the task's own
    action.

    Every task is run at most once per engine. The engine keeps a
    ledger of the tasks it has invoked; asking for a task again hands
    back the completion from the first invocation. A task that failed
    keeps its failed completion, so asking for it, or for anything that
    depends on it, raises the same error again. Call
    :meth:`tasknest.engine.Engine.reset` to forget the ledger.

    :keyword reporter: Receives an event for every started, skipped,
      completed and failed task. Defaults to
      :class:`tasknest.reporters.LoggerReporter`.
    :type reporter: :class:`tasknest.reporters.BaseReporter`

    """

    def __init__(self, reporter=None):
        self.reporter = reporter or reporters.LoggerReporter()
        self._ledger = dict()


    def already_invoked(self, task):
        return task in self._ledger


    def reset(self):
        logger.debug("Forgetting %d invoked tasks", len(self._ledger))
        self._ledger.clear()


    def invoke(self, task, args=(), on_complete=None, chain=None):
        """Invoke a task and all of its dependencies.

        :param task: The task to invoke.
        :type task: :class:`tasknest.Task`

        :keyword args: Positional arguments for the task action.
          Dependencies are always invoked without arguments.

        :keyword on_complete: Called without arguments once the task
          has finished successfully.
        :type on_complete: callable

        :keyword chain: The invocation chain to use. A fresh chain is
          created when not given; this is a top-level invocation.
        :type chain: :class:`tasknest.chain.InvocationChain`

        :raises: Whatever stopped the invocation before this method
          returned: an action's exception, a
          :class:`tasknest.chain.CircularDependencyError` or a
          :class:`tasknest.engine.TaskNotFoundError`. Failures that
          happen later, after an asynchronous action signals, are
          recorded on the returned completion instead.

        :returns: The task's :class:`tasknest.engine.Completion`. It may
          still be pending if an asynchronous action hasn't signaled
          yet.

        """
        top_level = chain is None
        if top_level:
            chain = InvocationChain()
        args = tuple(args)

        if top_level:
            self.reporter.started(task, args)
        try:
            completion = self._invoke(task, args, chain)
        except Exception as e:
            if top_level:
                self.reporter.finished(task, e)
            raise

        if top_level:
            completion.add_done_callback(lambda: self.reporter.finished(task))
            completion.add_error_callback(lambda e: self.reporter.finished(task, e))
        if on_complete is not None:
            completion.add_done_callback(on_complete)
        if completion.error is not None:
            raise completion.error
        return completion


    def _invoke(self, task, args, chain):
        logger.debug("Invoking task: %s", task)
        logger.debug("  with arguments: %r", args)

        if task not in chain and task in self._ledger:
            logger.debug("Omitting task %s. Already invoked.", task)
            self.reporter.task_skipped(task)
            return self._ledger[task]

        chain.append(task)
        completion = self._ledger[task] = Completion(task)

        def finish():
            chain.remove(task)
            completion()

        def abort(error):
            chain.remove(task)
            completion.fail(error)

        def run():
            try:
                needed = task.is_needed()
            except Exception as e:
                abort(e)
                return
            if not needed:
                logger.debug("Omitting task %s. Not needed.", task)
                self.reporter.task_skipped(task)
                finish()
                return

            self.reporter.task_started(task, args)
            handle = Completion(task)
            handle.add_done_callback(lambda: self.reporter.task_completed(task))
            handle.add_done_callback(finish)
            handle.add_error_callback(lambda e: self.reporter.task_failed(task, e))
            handle.add_error_callback(abort)
            try:
                task.execute(args, handle)
            except Exception as e:
                # errors raised after the handle fired belong to whatever
                # ran in its callbacks, not to this task
                if handle.done:
                    raise
                handle.fail(e)

        self._invoke_dependencies(task, chain, run, abort)
        return completion


    def _invoke_dependencies(self, task, chain, then, abort):
        dependencies = iter(task.dependencies)

        def resume():
            # one frame per dependency that finishes later; the ones that
            # finish right away are handled by this loop
            for reference in dependencies:
                try:
                    dep = None
                    if task.namespace is not None:
                        dep = task.namespace.resolve(reference)
                    if dep is None:
                        raise TaskNotFoundError(reference, task.namespace)
                    dep_completion = self._invoke(dep, (), chain)
                except Exception as e:
                    abort(e)
                    return
                if dep_completion.error is not None:
                    abort(dep_completion.error)
                    return
                if not dep_completion.done:
                    dep_completion.add_done_callback(resume)
                    dep_completion.add_error_callback(abort)
                    return
            then()

        resume()
