"""low-level module for spawning and waiting for processes with subprocess.Popen

It only contains two functions, spawn() and wait()

>>> from pyfeed.pipe import DuplexChannel
>>> from pyfeed.command import Command
>>> channel = DuplexChannel()
>>> pid = spawn(Command('/bin/sh', ('-c', 'cat; exit 4')), channel)
>>> channel.write('hello world\\n')
True
>>> channel.close_output()
>>> channel.read_line()
'hello world'
>>> wait(pid)
ExitStatus(returncode=4)
>>> channel.close()

Popen reports a failed exec right away, but it's still turned into an exit
status, same as with fork_exec:

>>> channel = DuplexChannel()
>>> pid = spawn(Command('/no/such/program'), channel)
>>> pid < 0, channel.read_line(), channel.good
(True, '', False)
>>> channel.close()
>>> wait(pid).code == EXEC_FAILURE
True
"""

__all__ = 'spawn', 'wait'

from itertools import count
from subprocess import Popen
from .fork_exec import EXEC_FAILURE, set_parent_death_signal
from .posix_wait import ExitStatus

spawned = {}

# stand-in pids for children that never got past exec; never valid for kill()
_failed_pids = count(-1, -1)


class FailedExec:
    """what's left of a child whose exec failed: only its exit code"""
    def __init__(self, error):
        self.error = error

    def wait(self):
        return EXEC_FAILURE


def spawn(command, channel):
    stdin, stdout = channel.child_fds
    try:
        popen = Popen(
            command.argv, executable=command.path,
            stdin=stdin.fileno(), stdout=stdout.fileno(),
            preexec_fn=set_parent_death_signal,
        )
    except OSError as e:
        # only errors from exec itself carry the executable's name
        if e.filename != command.path:
            raise
        pid = next(_failed_pids)
        spawned[pid] = FailedExec(e)
    else:
        pid = popen.pid
        spawned[pid] = popen
    channel.set_as_parent_end()
    return pid


def wait(pid):
    if pid in spawned:
        return ExitStatus.from_returncode(spawned.pop(pid).wait())
    from .posix_wait import wait
    return wait(pid)
