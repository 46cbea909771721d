# -*- coding: utf-8 -*-
"""Static views of the task graph, for listing and dry runs. Nothing
here invokes a task."""

import logging

import networkx as nx

from .chain import CircularDependencyError
from .engine import TaskNotFoundError

logger = logging.getLogger(__name__)


def prerequisites(task):
    """The tasks ``task`` depends on directly, resolved through its
    namespace, in declaration order.

    :raises TaskNotFoundError: for a dependency that doesn't resolve
    """
    deps = list()
    for reference in task.dependencies:
        dep = task.namespace.resolve(reference) if task.namespace else None
        if dep is None:
            raise TaskNotFoundError(reference, task.namespace)
        deps.append(dep)
    return deps


def _add_task(dag, task):
    dag.add_node(task)
    for dep in prerequisites(task):
        dag.add_edge(task, dep)


def dependency_graph(namespace):
    """Build a directed graph of every task under ``namespace``. Edges
    point from a task to each of its dependencies; the successors of a
    node are in declaration order.

    :type namespace: :class:`tasknest.namespace.Namespace`
    :rtype: :class:`networkx.DiGraph`
    """
    dag = nx.DiGraph()
    for task in namespace.walk():
        _add_task(dag, task)
    return dag


def reachable_graph(task):
    """Like :func:`dependency_graph`, but only with ``task`` and the
    tasks reachable from it."""
    dag = nx.DiGraph()
    seen = set()
    todo = [task]
    while todo:
        t = todo.pop()
        if t in seen:
            continue
        seen.add(t)
        _add_task(dag, t)
        todo.extend(dag.successors(t))
    return dag


def execution_order(task):
    """The order :meth:`tasknest.engine.Engine.invoke` would run the
    actions of ``task`` and its dependencies, on a fresh engine.

    :raises CircularDependencyError: if a cycle is reachable from
      ``task``
    """
    dag = reachable_graph(task)
    try:
        cycle = nx.find_cycle(dag, source=task)
    except nx.NetworkXNoCycle:
        cycle = None
    if cycle:
        # the edges of the cycle, starting at the task that closes it
        raise CircularDependencyError(_path_to(dag, task, cycle[0][0])
                                      + [u for u, _ in cycle][1:],
                                      cycle[0][0])
    order = list(nx.dfs_postorder_nodes(dag, source=task))
    logger.debug("Execution order for %s: %s", task,
                 ", ".join(str(t) for t in order))
    return order


def _path_to(dag, source, target):
    return nx.shortest_path(dag, source, target)
