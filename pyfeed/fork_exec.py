"""low-level module for spawning and waiting for processes with os.fork and os.execv

It only contains two functions, spawn() and wait()

>>> from pyfeed.pipe import DuplexChannel
>>> from pyfeed.command import Command
>>> channel = DuplexChannel()
>>> pid = spawn(Command('/bin/cat'), channel)
>>> channel.write('hello world\\n')
True
>>> channel.close_output()
>>> channel.read_line()
'hello world'
>>> wait(pid)
ExitStatus(returncode=0)
>>> channel.close()

A program that can't be run shows up only in the exit status:

>>> channel = DuplexChannel()
>>> pid = spawn(Command('/no/such/program'), channel)
>>> channel.close()
>>> wait(pid).code == EXEC_FAILURE
True
"""

__all__ = 'spawn', 'wait', 'EXEC_FAILURE', 'set_parent_death_signal'

import os
import signal
import sys
from .posix_wait import wait

EXEC_FAILURE = 127

_PR_SET_PDEATHSIG = 1


def _load_prctl():
    if not sys.platform.startswith('linux'):
        return None
    import ctypes
    try:
        libc = ctypes.CDLL(None, use_errno=True)
        return libc.prctl
    except (OSError, AttributeError):
        return None


# resolved before any fork so the child only has to make the call
_prctl = _load_prctl()


def set_parent_death_signal(sig=signal.SIGTERM):
    """ask the kernel to send sig to this process when its parent dies

    Returns False where that's not supported.
    """
    if _prctl is None:
        return False
    return _prctl(_PR_SET_PDEATHSIG, int(sig)) == 0


def reset_signals():
    for name in 'SIGPIPE', 'SIGXFZ', 'SIGXFSZ':
        sig = getattr(signal, name, None)
        if sig is None:
            continue
        signal.signal(sig, signal.SIG_DFL)


def _exec_child(command, channel, parent):
    try:
        channel.set_as_child_end()
        set_parent_death_signal()
        # the parent may have died before the request was in place
        if os.getppid() != parent:
            os._exit(EXEC_FAILURE)
        reset_signals()
        os.execv(command.path, command.argv)
    finally:
        os._exit(EXEC_FAILURE)


def spawn(command, channel):
    """fork, wire channel to the child's stdin/stdout and exec command

    Returns the child's pid. If exec fails, the child exits with
    EXEC_FAILURE, which is all the parent ever learns about it.
    """
    parent = os.getpid()
    pid = os.fork()
    if pid == 0:
        _exec_child(command, channel, parent)
    channel.set_as_parent_end()
    return pid
