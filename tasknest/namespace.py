# -*- coding: utf-8 -*-
import logging

logger = logging.getLogger(__name__)

#: The name of the root namespace. Used as the first segment of a
#: fully qualified task reference, e.g. ``global:db:migrate``.
GLOBAL_NAME = "global"

#: Separates namespace segments from each other and from the task name.
SEPARATOR = ":"


class DuplicateNameError(ValueError):
    pass


class Namespace(object):
    """A named scope holding tasks and child namespaces.

    :param name: The namespace name; must be unique among its siblings.
    :type name: str

    :keyword parent: The enclosing namespace. ``None`` for the root
      namespace. The new namespace registers itself with the parent.
    :type parent: :class:`tasknest.namespace.Namespace` or None

    """

    def __init__(self, name, parent=None):
        if not isinstance(name, str) or not name:
            raise ValueError("Namespace name must be a non-empty string")
        if SEPARATOR in name:
            raise ValueError("Namespace name `{}' may not contain `{}'".format(
                name, SEPARATOR))

        self.name = name
        self.parent = parent
        #: child namespaces by name, in creation order
        self.children = dict()
        #: tasks by name, in registration order
        self.tasks = dict()

        if parent is not None:
            if name in parent.tasks:
                raise DuplicateNameError(
                    "Duplicated names. There is a task with name `{}' "
                    "in namespace `{}'".format(name, parent))
            parent.children[name] = self


    @property
    def qualified_name(self):
        if self.parent is None:
            return self.name
        return self.parent.qualified_name + SEPARATOR + self.name


    @property
    def root(self):
        ns = self
        while ns.parent is not None:
            ns = ns.parent
        return ns


    def register(self, task):
        """Attach a task to this namespace.

        :param task: The task to register. If the task has no namespace
          yet, it's set to this namespace.
        :type task: :class:`tasknest.Task`

        :raises DuplicateNameError: if the task already belongs to a
          different namespace, or if this namespace already has a task or
          child namespace with the same name.

        """
        if task.namespace is None:
            task.namespace = self
        elif task.namespace is not self:
            raise DuplicateNameError(
                "The task `{}' is already registered in "
                "another namespace".format(task))

        if task.name in self.tasks:
            raise DuplicateNameError(
                "There is another task with the name `{}' in "
                "namespace `{}'".format(task.name, self))
        if task.name in self.children:
            raise DuplicateNameError(
                "Duplicated names. There is a namespace with name `{}' "
                "in namespace `{}'".format(task.name, self))

        self.tasks[task.name] = task
        logger.debug("Registered task %s", task)
        return task


    def resolve(self, reference):
        """Find a task by name, relative to this namespace.

        A reference without separators is looked up among this
        namespace's own tasks. Otherwise the first segment selects where
        to continue: the root namespace (``global``), this namespace
        itself, or a child namespace.

        :param reference: The task reference, e.g. ``build`` or
          ``db:migrate`` or ``global:db:migrate``
        :type reference: str

        :returns: The task or None if nothing matches.

        """
        if SEPARATOR not in reference:
            return self.tasks.get(reference)

        base, rest = reference.split(SEPARATOR, 1)

        # fully qualified reference from below the root
        if base == GLOBAL_NAME and self.parent is not None:
            return self.parent.resolve(reference)

        # redundant self-qualification
        if base == self.name:
            return self.resolve(rest)

        child = self.children.get(base)
        if child is None:
            return None
        return child.resolve(rest)


    def get_or_create_child(self, path):
        """Return the namespace at ``path`` below this namespace, creating
        any missing namespaces along the way.

        :param path: Separator-delimited namespace path, e.g. ``db:tools``
        :type path: str

        :raises DuplicateNameError: if a path segment is already used
          by a task at that level.

        """
        ns = self
        for segment in path.split(SEPARATOR):
            child = ns.children.get(segment)
            if child is None:
                if segment in ns.tasks:
                    raise DuplicateNameError(
                        "Duplicated names. There is a task with name `{}' "
                        "in namespace `{}'".format(segment, ns))
                child = Namespace(segment, ns)
                logger.debug("Created namespace %s", child)
            ns = child
        return ns


    def walk(self):
        """Yield every task in this namespace, then every task of each
        child namespace (recursively)."""
        for task in list(self.tasks.values()):
            yield task
        for child in list(self.children.values()):
            for task in child.walk():
                yield task


    def __str__(self):
        return self.qualified_name

    def __repr__(self):
        return "Namespace('{}')".format(self.qualified_name)
