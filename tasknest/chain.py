# -*- coding: utf-8 -*-


class CircularDependencyError(RuntimeError):
    """Raised when a task is invoked while it's still on the active
    invocation path.

    :ivar chain: The tasks on the active path, outermost first.
    :ivar task: The task that closed the cycle.
    """

    def __init__(self, chain, task):
        self.chain = list(chain)
        self.task = task
        names = [str(t) for t in self.chain] + [str(task)]
        super(CircularDependencyError, self).__init__(
            "Circular dependency detected: " + " => ".join(names))


class InvocationChain(object):
    """The tasks currently being invoked within one top-level call, in
    invocation order. Membership is by identity, not by name."""

    def __init__(self):
        self._tasks = list()


    def contains(self, task):
        return any(t is task for t in self._tasks)

    __contains__ = contains


    def append(self, task):
        if self.contains(task):
            raise CircularDependencyError(self._tasks, task)
        self._tasks.append(task)


    def remove(self, task):
        """Take a finished task off the active path"""
        for i in range(len(self._tasks)-1, -1, -1):
            if self._tasks[i] is task:
                del self._tasks[i]
                return


    def __len__(self):
        return len(self._tasks)

    def __iter__(self):
        return iter(list(self._tasks))

    def __str__(self):
        return " => ".join(str(t) for t in self._tasks)
