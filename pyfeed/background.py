r"""run execute() in the background

>>> output = []
>>> future = spawn_async('/bin/cat', ['a\n', 'b\n'], output.append)
>>> future.result(), output
(ExitStatus(returncode=0), ['a', 'b'])
"""

__all__ = 'spawn_async',

from collections import deque
from functools import partial

from .command import Command
from .driver import execute
from .thread import Thread


def spawn_async(argv, lines=(), on_line=print, **execute_kwargs):
    """start execute(argv, lines, on_line) on a new thread

    The command and the input queue are copied before the thread starts, so
    the caller is free to change or drop them. on_line is shared, and is
    called on the new thread.

    Returns the Thread, which acts as a future: result() (or join()) waits
    for the exit status, done() checks for it, and result(timeout) raises
    TimeoutError if the child takes too long. The last on_line call
    happens before the status becomes available. SpawnError is raised by
    result(), not here.

    >>> lines, output = ['x\\n'], []
    >>> future = spawn_async('/bin/cat', lines, output.append); lines.clear()
    >>> future.result().code, output
    (0, ['x'])
    """
    command = Command.of(argv)
    command = Command(command.path, tuple(command.args))
    return Thread(partial(execute, command, deque(lines), on_line, **execute_kwargs)).start()
