# -*- coding: utf-8 -*-
import os
import errno
import logging
import subprocess

logger = logging.getLogger(__name__)


def mkdirp(path):
    try:
        return os.makedirs(path)
    except OSError as e:
        if e.errno == errno.EEXIST and os.path.isdir(path):
            pass
        else:
            raise


def sugar_list(x):
    """Turns just a single thing into a list containing that single thing.

    """

    if not hasattr(x, "__iter__") or isinstance(x, (str, bytes)):
        return [x]
    else:
        return list(x)


class ShellException(OSError):
    pass


def sh(cmd, **kwargs):
    """Run ``cmd`` with :class:`subprocess.Popen`, wait for it and return
    a 2-tuple of its standard output and standard error. All keywords
    are passed to Popen.

    :raises ShellException: if the command exits non-zero
    """
    kwargs['stdout'] = kwargs.get('stdout', subprocess.PIPE)
    kwargs['stderr'] = kwargs.get('stderr', subprocess.PIPE)
    kwargs.setdefault('universal_newlines', True)
    logger.debug("Running command: %s", cmd)
    proc = subprocess.Popen(cmd, **kwargs)
    ret = proc.communicate()
    if proc.returncode:
        msg = "Command `{}' failed. \nOut: {}\nErr: {}"
        raise ShellException(proc.returncode, msg.format(cmd, ret[0], ret[1]))
    return ret


def expand_path(p, base_dir=None):
    """Expand ``$VAR``, ``${VAR}`` and ``~`` in ``p`` and make it absolute,
    relative to ``base_dir`` if given."""
    p = os.path.expanduser(os.path.expandvars(p))
    if base_dir and not os.path.isabs(p):
        p = os.path.join(base_dir, p)
    return os.path.abspath(p)
