# -*- coding: utf-8 -*-
import re
import fnmatch
import itertools

from .namespace import GLOBAL_NAME, SEPARATOR

_GLOBAL_PREFIX = GLOBAL_NAME + SEPARATOR


def _qualify(name):
    if name.startswith(_GLOBAL_PREFIX):
        return name
    return _GLOBAL_PREFIX + name


class TaskContainer(list):
    """Contains tasks in declaration order. Tasks can be accessed by
    position or by qualified name; the ``global:`` prefix is optional.
    Names with ``*`` are glob patterns."""

    def __init__(self, *args, **kwargs):
        self.by_name = dict()
        super(TaskContainer, self).__init__(*args, **kwargs)
        for task in self:
            self._update(task)


    def _update(self, task):
        self.by_name[task.qualified_name] = task


    def _get_or_search(self, key):
        if '*' in key:
            return self.search(fnmatch.translate(_qualify(key)), qualified=True)
        return self.by_name[_qualify(key)]


    def search(self, q, qualified=False):
        """Iterate over the tasks whose display name (or qualified name,
        if ``qualified``) matches the regular expression ``q``"""
        if qualified:
            return iter(t for t in self if re.search(q, t.qualified_name))
        return iter(t for t in self if re.search(q, t.display_name))


    def append(self, task):
        self._update(task)
        return super(TaskContainer, self).append(task)


    def extend(self, iterable):
        a, b = itertools.tee(iterable)
        for task in a:
            self._update(task)
        return super(TaskContainer, self).extend(b)


    def __getitem__(self, key):
        if isinstance(key, str):
            return self._get_or_search(key)
        return super(TaskContainer, self).__getitem__(key)


    def __contains__(self, item):
        if isinstance(item, str):
            if '*' in item:
                try:
                    next(self._get_or_search(item))
                    return True
                except StopIteration:
                    return False
            else:
                return _qualify(item) in self.by_name

        return any(t is item for t in self)
