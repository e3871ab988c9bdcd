r"""pull lines out of a process one at a time

A ProcessStream feeds its input to the child as soon as it's created, then
hands out the output lazily. It's a plain iterable:

>>> with ProcessStream('/bin/cat', ['a\n', '\n', 'b\n']) as stream:
...     for line in stream: print(repr(line))
...
'a'
''
'b'
>>> stream.status
ExitStatus(returncode=0)

or, with explicit cursors:

>>> stream = ProcessStream('/usr/bin/tr a-z A-Z', ['abc\n', 'xyz\n'])
>>> cursor, end = stream.begin(), stream.end()
>>> cursor.value
'ABC'
>>> cursor.advance() == end, cursor.value
(False, 'XYZ')
>>> cursor.advance() == end
True
>>> stream.close()
ExitStatus(returncode=0)

Either way, it's a single pass: lines that have been read are gone.
"""

__all__ = 'ProcessStream', 'Cursor', 'State'

import logging
from enum import Enum

from .driver import pump_input
from .process import spawn

logger = logging.getLogger(__name__)


class State(Enum):
    PRIMING = 'priming'
    READY = 'ready'
    ITERATING = 'iterating'
    EXHAUSTED = 'exhausted'
    REAPED = 'reaped'


class Cursor:
    """position in a ProcessStream's output

    A cursor holds the line it last read. Once the output is exhausted, it
    compares equal to every other exhausted cursor, whichever stream it
    came from. Live cursors are equal to any live cursor on the same stream,
    which is a single pass anyway.
    """
    def __init__(self, stream, exhausted=False):
        self.stream = stream
        self.exhausted = exhausted
        self.line = None
        if not exhausted:
            self.advance()

    @property
    def value(self):
        if self.exhausted:
            raise ValueError('cursor is past the last line')
        return self.line

    def advance(self):
        """read the next line, or become exhausted"""
        if not self.exhausted:
            self.line = self.stream.read_line()
            if self.line is None:
                self.exhausted = True
        return self

    def __eq__(self, other):
        if not isinstance(other, Cursor):
            return NotImplemented
        if self.exhausted or other.exhausted:
            return self.exhausted == other.exhausted
        return self.stream is other.stream

    def __hash__(self):
        return hash(self.exhausted) if self.exhausted else id(self.stream)

    def __repr__(self):
        state = 'exhausted' if self.exhausted else repr(self.line)
        return f'{type(self).__name__}({state})'


class ProcessStream:
    r"""spawn argv, feed it lines and iterate over its output lines

    The whole input queue is written and the child's stdin is closed before
    the constructor returns. The child is reaped by close(), on leaving a
    with block or, failing that, when the stream is garbage collected. Output
    left unread at that point is thrown away.

    >>> stream = ProcessStream('/bin/sh -c "exit 5"', ['never read\n'])
    >>> stream.begin() == stream.end()
    True
    >>> stream.close().code
    5
    >>> stream.state
    <State.REAPED: 'reaped'>
    """
    def __init__(self, argv, lines=(), **spawn_kwargs):
        self.state = State.PRIMING
        self.child = None
        self.child = spawn(argv, **spawn_kwargs)
        self.child.input_complete = pump_input(self.child.channel, lines)
        self.state = State.READY

    @property
    def status(self):
        return None if self.child is None else self.child.status

    @property
    def input_complete(self):
        return None if self.child is None else self.child.input_complete

    def read_line(self):
        """the next output line, or None once the output is exhausted"""
        if self.state in (State.EXHAUSTED, State.REAPED):
            return None
        channel = self.child.channel
        line = channel.read_line()
        if not channel.good:
            self.state = State.EXHAUSTED
            logger.debug('end of output from %r', self.child)
            return None
        self.state = State.ITERATING
        return line

    def begin(self):
        """a cursor on the next unread line"""
        return Cursor(self)

    def end(self):
        """the end marker"""
        return Cursor(self, exhausted=True)

    def __iter__(self):
        cursor, end = self.begin(), self.end()
        while cursor != end:
            yield cursor.value
            cursor.advance()

    def close(self):
        """reap the child and return its ExitStatus"""
        if self.child is None:
            return None
        if self.state not in (State.EXHAUSTED, State.REAPED):
            logger.warning('closing %r before the end of its output', self.child)
        status = self.child.wait()
        self.state = State.REAPED
        return status

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        self.close()

    def __del__(self):
        if self.state is not State.REAPED:
            self.close()

    def __repr__(self):
        return f'{type(self).__name__}({self.child!r}, state={self.state.name})'
