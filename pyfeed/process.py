__all__ = (
    'ChildProcess', 'spawn', 'SpawnError',
    'Result', 'ResultError', 'EXEC_FAILURE',
    'get_backend', 'change_default_backend',
)

import logging
import os
from signal import Signals, SIGKILL, SIGTERM
from sys import platform

from .command import Command
from .fork_exec import EXEC_FAILURE
from .pipe import DuplexChannel, ENCODING, ERRORS

logger = logging.getLogger(__name__)


class SpawnError(OSError):
    """the child could not be created or wired to its pipes"""


def get_signal(sig: Signals | int | str) -> Signals:
    if isinstance(sig, str):
        sig = sig.upper()
        return Signals[sig if sig.startswith('SIG') else f'SIG{sig}']
    return Signals(sig)


def get_backend(name=None):
    if name == 'subprocess':
        from . import subprocess as backend
        return backend
    if name == 'fork_exec':
        from . import fork_exec as backend
        return backend
    if name == 'default' or name is None:
        return get_backend.default
    raise ValueError(f'unknown backend: {name}')


if 'PYFEED_BACKEND' in os.environ:
    get_backend.default = get_backend(os.environ['PYFEED_BACKEND'])
elif platform == 'win32' or not hasattr(os, 'fork'):
    get_backend.default = get_backend('subprocess')
else:
    get_backend.default = get_backend('fork_exec')


def change_default_backend(name_or_namespace):
    if isinstance(name_or_namespace, str):
        get_backend.default = get_backend(name_or_namespace)
    else:
        name_or_namespace.spawn
        name_or_namespace.wait
        get_backend.default = name_or_namespace
    return get_backend.default


class ChildProcess:
    r"""a spawned child and the channel to its stdin and stdout

    The handle owns both: wait() closes whatever is left of the channel and
    reaps the child exactly once; later calls return the same status.

    >>> child = spawn('/bin/cat')
    >>> child.channel.write('abc\n')
    True
    >>> child.channel.close_output()
    >>> child.channel.read_line()
    'abc'
    >>> child.wait()
    ExitStatus(returncode=0)
    >>> child.wait() is child.status
    True
    """
    def __init__(self, command, pid, channel, backend):
        self.command = command
        self.pid = pid
        self.channel = channel
        self.backend = backend
        self.status = None
        # True once every input line was written, False if the child stopped reading
        self.input_complete = None

    @property
    def reaped(self):
        return self.status is not None

    def wait(self):
        """close the channel, reap the child and return its ExitStatus

        Any output not read yet is discarded, which also keeps a child that
        is still writing from blocking forever.
        """
        if self.status is None:
            self.channel.close()
            self.status = self.backend.wait(self.pid)
            logger.debug('reaped %d (%s): %r', self.pid, self.command, self.status)
        return self.status

    def kill(self, sig: Signals | int | str = SIGTERM, dead_okay: bool | None = None):
        r"""convenience for os.kill(self.pid, signal)

        sig can be an integer or the signal name, case insensitive, with or
        without the 'SIG' prefix

        dead_okay=False raises ProcessLookupError if the process is dead; by
        default dead_okay=True for SIGTERM and SIGKILL and False otherwise

        >>> child = spawn('/bin/sleep 10'); child.kill(); child.wait()
        ExitStatus(returncode=-15)
        >>> child = spawn('/bin/sleep 10'); child.kill('kill'); child.wait()
        ExitStatus(returncode=-9)
        """
        sig = get_signal(sig)
        if dead_okay is None:
            dead_okay = sig == SIGTERM or sig == SIGKILL
        if self.reaped or self.pid < 0:
            if not dead_okay:
                raise ProcessLookupError(f'{self.pid} is not running')
            return
        try:
            os.kill(self.pid, sig)
        except ProcessLookupError:
            if not dead_okay:
                raise

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        self.wait()

    def __repr__(self):
        return f'{type(self).__name__}({str(self.command)!r}, pid={self.pid})'


def spawn(argv, *, backend='default', encoding=ENCODING, errors=ERRORS):
    """start argv with its stdin and stdout connected to a new DuplexChannel

    argv: a Command, a command line (split like a shell would) or a sequence
    backend: 'default', 'fork_exec', 'subprocess' or a namespace with
             spawn(command, channel) and wait(pid)

    Raises SpawnError if the pipes or the process can't be created.

    >>> with spawn('/bin/sh -c "exit 7"') as child: pass
    ...
    >>> child.status.code
    7
    """
    command = Command.of(argv)
    backend = get_backend(backend) if isinstance(backend, str) else backend
    try:
        channel = DuplexChannel(encoding, errors)
    except OSError as e:
        raise SpawnError(e.errno, f'could not create pipes for {command}: {e.strerror}') from e
    try:
        pid = backend.spawn(command, channel)
    except OSError as e:
        channel.close()
        raise SpawnError(e.errno, f'could not spawn {command}: {e.strerror}') from e
    logger.debug('spawned %d: %s', pid, command)
    return ChildProcess(command, pid, channel, backend)


class ResultBase:
    def __init__(self, argv, status, stdout=None, input_complete=None):
        self.argv = argv
        self.status = status
        self.stdout = stdout
        self._input_complete = input_complete

    def _fields(self):
        return {n: a for n, a in vars(self).items() if not n.startswith('_')}

    def __repr__(self):
        param_str = ', '.join(
            f'{n}={repr(a)}'
            for n, a in self._fields().items()
            if a is not None
        )
        return f'{type(self).__name__}({param_str})'

    def __str__(self):
        return repr(self)

    def __iter__(self):
        return iter(self._fields().values())


class Result(ResultBase):
    """the outcome of feeding a process: its command, status and output lines"""
    @property
    def returncode(self):
        return self.status.returncode

    @property
    def input_complete(self):
        """False if the child stopped reading before all input was written"""
        return self._input_complete

    def check(self):
        """raise an error if the process didn't exit with 0"""
        if self.returncode != 0:
            raise ResultError(*self)
        return self

    def die(self):
        """exit with the process's returncode unless it is 0"""
        from sys import exit
        if self.returncode == 0:
            return self
        exit(self.returncode if self.returncode > 0 else 128 - self.returncode)


class ResultError(ResultBase, Exception):
    """the result as an error, raised by Result.check()"""
