r"""shell-like helpers built on funcpipes

Every helper is a funcpipes Pipe, so `x | f` calls f(x) and `f[a]` is a
partial call f(a, ...). The input lines are the piped value:

>>> ['abc\n'] | run['/usr/bin/tr a-z A-Z'] | check | get.stdout
['ABC']
>>> ('a', 'b') | terminated | run['/bin/cat'] | get.stdout
['a', 'b']
>>> capitalize = terminated & run['/usr/bin/tr a-z A-Z'] & check & get.stdout
>>> ['x', 'y'] | capitalize
['X', 'Y']

A stream can be consumed lazily and reaped at once:

>>> ['1\n', '2\n'] | pull['/bin/cat'] | collect
(['1', '2'], ExitStatus(returncode=0))
"""

__all__ = (
    'to', 'now', 'get', 'Arguments',
    'execute', 'run', 'check_output', 'spawn_async', 'pull',
    'terminated', 'collect', 'check', 'die',
)

from funcpipes import Pipe, to, now, get, Arguments

from . import driver, background
from .stream import ProcessStream


@Pipe
def terminated(lines, end='\n'):
    """append end to every line that doesn't have it yet"""
    return [line if line.endswith(end) else line + end for line in lines]


@Pipe
def execute(argv, lines=(), on_line=print, **kwargs):
    """see pyfeed.driver.execute"""
    return driver.execute(argv, lines, on_line, **kwargs)


@Pipe
def run(argv, lines=(), **kwargs):
    """see pyfeed.driver.run"""
    return driver.run(argv, lines, **kwargs)


@Pipe
def check_output(argv, lines=(), **kwargs):
    """see pyfeed.driver.check_output"""
    return driver.check_output(argv, lines, **kwargs)


@Pipe
def spawn_async(argv, lines=(), on_line=print, **kwargs):
    """see pyfeed.background.spawn_async"""
    return background.spawn_async(argv, lines, on_line, **kwargs)


@Pipe
def pull(argv, lines=(), **kwargs):
    """creates a ProcessStream, see help(ProcessStream)"""
    return ProcessStream(argv, lines, **kwargs)


@Pipe
def collect(process_stream):
    """read a ProcessStream to the end and reap it: (lines, status)"""
    with process_stream:
        lines = list(process_stream)
    return lines, process_stream.status


check = to.check
die = to.die
