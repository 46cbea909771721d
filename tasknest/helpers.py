# -*- coding: utf-8 -*-
"""Contains functions that help create task actions. The functions
herein don't immediately do what they say; they return functions that,
when called, do what they say (they're closures).

Using closures lets you declare tasks like this:

.. code:: python

  task("build", ["clean"], sh("make all"))

Instead of this:

.. code:: python

  from tasknest.util import sh  # <--- note the different import

  task("build", ["clean"], lambda: sh("make all", shell=True))

"""

import logging

from .util import sh as _sh

SHELL_COMMAND = "Executing with shell: "


def sh(s, log_command=True, **kwargs):
    """Execute a shell command. All further keywords are passed to
    :class:`subprocess.Popen`. Task arguments are appended to the
    command, separated by spaces.

    :param s: The command to execute. Passed directly to a shell, so
      be careful about doing things like ``sh('df -h > data; rm -rf
      /')``; both commands are executed and bad things will happen.
    :type s: str

    :keyword log_command: Log the command before running it.
    :type log_command: bool

    """
    def actually_sh(*args):
        logger = logging.getLogger(__name__)
        cmd = " ".join([s] + [str(a) for a in args])
        if log_command:
            logger.info(SHELL_COMMAND+cmd)
        kwargs['shell'] = True
        out, err = _sh(cmd, **kwargs)
        for line in (out or "").splitlines() + (err or "").splitlines():
            if line:
                logger.info(line)
    return actually_sh
