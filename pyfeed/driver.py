r"""feed lines to a process and collect the lines it prints

The basic protocol is always the same: spawn, write every input line, close
the child's stdin, read lines until the child closes its stdout, reap.

>>> execute('/bin/cat', ['a\n', 'b\n'], print)
a
b
ExitStatus(returncode=0)
>>> check_output('/usr/bin/tr a-z A-Z', ['abc\n', 'xyz'])
(['ABC', 'XYZ'], ExitStatus(returncode=0))
>>> run(['/bin/sh', '-c', 'cat; exit 3'], ['abc\n'])
Result(argv=Command(path='/bin/sh', args=('-c', 'cat; exit 3')), status=ExitStatus(returncode=3), stdout=['abc'])

The input queue is consumed as it's written:

>>> from collections import deque
>>> lines = deque(['1\n', '2\n'])
>>> check_output('/bin/cat', lines)[0], lines
(['1', '2'], deque([]))
"""

__all__ = 'execute', 'check_output', 'run', 'feed', 'drain', 'pump_input', 'read_lines'

import logging
from collections.abc import MutableSequence
from functools import partial

from .command import Command
from .process import Result, spawn
from .thread import Thread

logger = logging.getLogger(__name__)


def drain(lines):
    """yield lines front to back, removing each one once the next is asked for

    Mutable sequences (lists, deques) are consumed; anything else (tuples,
    generators, ...) is just iterated over. A line that was yielded but not
    followed up on stays at the front of the queue. Lists are trimmed in one
    go when the generator finishes or is closed.

    >>> queue = ['a', 'b']; list(drain(queue)), queue
    (['a', 'b'], [])
    >>> queue = ['a', 'b']; next(drain(queue)), queue
    ('a', ['a', 'b'])
    >>> list(drain(('a', 'b')))
    ['a', 'b']
    """
    if isinstance(lines, list):
        taken = 0
        try:
            for line in lines:
                yield line
                taken += 1
        finally:
            del lines[:taken]
        return
    if not isinstance(lines, MutableSequence):
        yield from lines
        return
    while lines:
        yield lines[0]
        del lines[0]


def pump_input(channel, lines):
    """write every line into the channel, then close the child's stdin

    If the child stops reading, pumping stops: unwritten lines stay in the
    queue and False is returned. The channel's input is closed either way.
    """
    written = 0
    pending = drain(lines)
    try:
        for line in pending:
            if not channel.write(line):
                break
            written += 1
        else:
            return True
    finally:
        pending.close()
        channel.close_output()
    logger.warning(
        'child closed its input after %d line(s); %s line(s) not written',
        written, len(lines) if hasattr(lines, '__len__') else 'remaining',
    )
    return False


def read_lines(channel, on_line):
    """call on_line with every line the child prints, in order, until EOF"""
    line = channel.read_line()
    while channel.good:
        on_line(line)
        line = channel.read_line()
    logger.debug('end of output on %r', channel)


def execute(argv, lines=(), on_line=print, *, concurrent=False, **spawn_kwargs):
    r"""run argv, feeding it lines and calling on_line with each output line

    argv: a Command, a command line or an argv sequence; the executable path
          is used as is
    lines: the input queue; each item is written as is (so it should
           usually end in '\n') and removed from the queue once written
    on_line: called on this thread with every output line, newline stripped
    concurrent: if True, write the input on another thread while reading
                the output, so a child that prints a lot before it's done
                reading can't deadlock against us
    spawn_kwargs: backend, encoding and errors, passed on to spawn()

    Returns the child's ExitStatus. Apart from SpawnError and whatever
    on_line raises, nothing is raised: a child that dies early just ends
    the output and shows up in the status.

    >>> execute('/bin/sh -c "exit 7"', ['ignored\n'] * 3, print).code
    7
    >>> execute('/bin/true', ['ignored\n'], print).code
    0
    """
    return feed(argv, lines, on_line, concurrent=concurrent, **spawn_kwargs).status


def feed(argv, lines, on_line, *, concurrent=False, **spawn_kwargs):
    """the body of execute(): returns the reaped ChildProcess

    Its input_complete tells whether every input line was written.
    """
    with spawn(argv, **spawn_kwargs) as child:
        if concurrent:
            writer = Thread(partial(pump_input, child.channel, lines)).start()
            try:
                read_lines(child.channel, on_line)
            finally:
                # unblocks a child stuck writing, and thus our writer
                child.channel.close_input()
                child.input_complete = writer.join()
        else:
            child.input_complete = pump_input(child.channel, lines)
            read_lines(child.channel, on_line)
    return child


def run(argv, lines=(), *, concurrent=False, **spawn_kwargs):
    r"""execute() argv and collect the output in a Result

    >>> run('/bin/cat', ['x\n']).check().stdout
    ['x']
    """
    command = Command.of(argv)
    output = []
    child = feed(command, lines, output.append, concurrent=concurrent, **spawn_kwargs)
    return Result(command, child.status, output, child.input_complete)


def check_output(argv, lines=(), *, concurrent=False, **spawn_kwargs):
    """execute() argv and return (output lines, ExitStatus)"""
    result = run(argv, lines, concurrent=concurrent, **spawn_kwargs)
    return result.stdout, result.status
