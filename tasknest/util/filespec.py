# -*- coding: utf-8 -*-
import os
import glob
import logging

logger = logging.getLogger(__name__)

INCLUDE = "include"
EXCLUDE = "exclude"


class FileList(object):
    """A list of files built from glob patterns. Patterns are applied
    in the order they were added; forced patterns are applied after all
    of the regular ones, so a forced include wins over any exclude.

    .. code:: python

        sources = FileList("src")
        sources.include("**/*.py")
        sources.exclude("**/test_*.py")
        sources.include("tests/test_main.py", force=True)
        sources.files  # ['a.py', 'pkg/b.py', 'tests/test_main.py']

    :keyword base_path: Patterns and the returned paths are relative to
      this directory.
    :type base_path: str

    """

    def __init__(self, base_path="."):
        self.base_path = base_path
        self._operations = list()
        self._files = None


    def include(self, pattern, force=False):
        self._operations.append((INCLUDE, pattern, force is True))
        self._files = None
        return self


    def exclude(self, pattern, force=False):
        self._operations.append((EXCLUDE, pattern, force is True))
        self._files = None
        return self


    def _glob(self, pattern):
        base = os.path.abspath(self.base_path)
        for match in sorted(glob.glob(os.path.join(base, pattern), recursive=True)):
            rel = os.path.relpath(match, base)
            if os.path.isdir(match):
                rel += os.sep
            yield rel


    @property
    def files(self):
        if self._files is not None:
            return self._files

        files = list()
        ops = [op for op in self._operations if not op[2]] \
            + [op for op in self._operations if op[2]]
        for kind, pattern, _ in ops:
            for f in self._glob(pattern):
                if kind == INCLUDE and f not in files:
                    files.append(f)
                elif kind == EXCLUDE and f in files:
                    files.remove(f)
        logger.debug("File list in %s matched %d files", self.base_path, len(files))
        self._files = files
        return files


    def __iter__(self):
        return iter(self.files)

    def __len__(self):
        return len(self.files)

    def __repr__(self):
        return "FileList('{}', {} patterns)".format(self.base_path,
                                                   len(self._operations))
