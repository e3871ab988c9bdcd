"""pipes between this process and a child

A DuplexChannel is two Pipes: one carries lines into the child's stdin, the
other carries the child's stdout back. The parent writes everything, closes
its input end, then reads lines until the child closes its output.
"""

__all__ = 'Pipe', 'DuplexChannel', 'ENCODING', 'ERRORS'

import logging
import os

from .fd import FD

logger = logging.getLogger(__name__)

ENCODING = 'utf-8'
ERRORS = 'surrogateescape'


class Pipe:
    """wrapper around os.pipe

    Both descriptors are created non-inheritable, so a concurrently spawned
    child never holds on to them past its exec.

    >>> p = Pipe()
    >>> p.write(b'hello')
    5
    >>> p.read()
    b'hello'
    """
    def __init__(self):
        self.fds = tuple(FD(fd, f'{rw}b') for fd, rw in zip(os.pipe(), 'rw'))

    @property
    def read_fd(self):
        return self.fds[0]

    @property
    def write_fd(self):
        return self.fds[1]

    def close(self, invalid_ok=True):
        for fd in self.fds:
            fd.close(invalid_ok)

    def write(self, data):
        """open the write FD, feed it some data and close it"""
        with self.write_fd.open() as file:
            return file.write(data)

    def read(self):
        """open the read FD, read until EOF and close it"""
        with self.read_fd.open() as file:
            return file.read()

    def __repr__(self):
        return f'{type(self).__name__}()<{self.read_fd}, {self.write_fd}>'


class DuplexChannel:
    r"""two pipes forming a line-oriented link to a child process

    The parent side writes into `to_child` and reads from `from_child`. The
    child side gets the other two ends as its stdin and stdout.

    The spawner calls set_as_child_end() in the child and set_as_parent_end()
    in the parent. After that, the parent protocol is: write() every line,
    close_output() once, then read_line() while `good` holds.

    Looping a channel back on itself shows the read side:

    >>> channel = DuplexChannel()
    >>> channel.from_child.write(b'one\n\ntwo')
    8
    >>> channel.set_as_parent_end()
    >>> channel.read_line(), channel.good
    ('one', True)
    >>> channel.read_line(), channel.good
    ('', True)
    >>> channel.read_line(), channel.good
    ('two', True)
    >>> channel.read_line(), channel.good
    ('', False)
    >>> channel.close()
    """
    def __init__(self, encoding=ENCODING, errors=ERRORS):
        self.encoding = encoding
        self.errors = errors
        self.to_child = Pipe()
        try:
            self.from_child = Pipe()
        except OSError:
            self.to_child.close()
            raise
        self.good = True
        self._writer = None
        self._reader = None

    @property
    def child_fds(self):
        """(stdin, stdout) as seen by the child"""
        return self.to_child.read_fd, self.from_child.write_fd

    @property
    def parent_fds(self):
        return self.to_child.write_fd, self.from_child.read_fd

    def set_as_child_end(self):
        """make the child ends this process's stdin and stdout

        Only call this in a freshly forked child, before exec. The parent
        ends are closed so the child never keeps its own stdin open.
        """
        stdin, stdout = self.child_fds
        if stdout.fd == 0:
            stdout = FD(os.dup(stdout.fd), stdout.mode)
        for fd in self.parent_fds:
            fd.close()
        stdin.dup2(0)
        stdout.dup2(1)

    def set_as_parent_end(self):
        """close the child ends and open the parent ends as files"""
        for fd in self.child_fds:
            fd.close()
        write_fd, read_fd = self.parent_fds
        if not write_fd.closed:
            self._writer = write_fd.open()
        if not read_fd.closed:
            self._reader = read_fd.open()

    def write(self, line):
        """write one line to the child's stdin

        No newline is added. Blocks while the pipe is full. Returns False if
        the child has closed its stdin, in which case nothing more should
        be written.
        """
        if self._writer is None:
            raise ValueError('input to child is already closed')
        data = line.encode(self.encoding, self.errors) if isinstance(line, str) else line
        try:
            self._writer.write(data)
            self._writer.flush()
        except BrokenPipeError:
            return False
        return True

    def close_output(self):
        """half-close: send EOF to the child's stdin"""
        writer, self._writer = self._writer, None
        if writer is None:
            return
        try:
            writer.close()
        except BrokenPipeError:
            pass
        logger.debug('closed input of child on %r', self)

    @property
    def output_closed(self):
        return self._writer is None

    def read_line(self):
        """read one line from the child's stdout, without its newline

        Blocks until a full line or EOF is available. At EOF, returns ''
        and sets `good` to False. A last line lacking a newline is still
        returned as a line.
        """
        if not self.good:
            return ''
        try:
            data = self._reader.readline()
        except (OSError, ValueError) as e:
            logger.warning('reading from child failed: %s', e)
            data = b''
        if not data:
            self.good = False
            return ''
        if data.endswith(b'\n'):
            data = data[:-1]
        return data.decode(self.encoding, self.errors)

    def close_input(self):
        """stop reading; unread output is discarded"""
        reader, self._reader = self._reader, None
        self.good = False
        if reader is not None:
            reader.close()

    def close(self):
        """close every end that is still open"""
        self.close_output()
        self.close_input()
        self.to_child.close()
        self.from_child.close()

    def __repr__(self):
        return f'{type(self).__name__}({self.to_child!r}, {self.from_child!r})'
