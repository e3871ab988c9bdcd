r"""pyfeed - treat a child process as a line filter

Push lines into a program's stdin, get its stdout back line by line and end
up with its exit status. Paths are used as is; nothing searches $PATH.

The blocking way calls a function with every line as soon as it's read:

>>> execute('/usr/bin/tr a-z A-Z', ['abc\n', 'xyz\n'], print)
ABC
XYZ
ExitStatus(returncode=0)

If all that's wanted is the output:

>>> check_output('/bin/cat', ['abc\n'])
(['abc'], ExitStatus(returncode=0))
>>> run('/bin/cat', ['abc\n']).check()
Result(argv=Command(path='/bin/cat', args=()), status=ExitStatus(returncode=0), stdout=['abc'])

The input queue is written in full before any output is read, and it is
consumed along the way:

>>> lines = ['1\n', '2\n', '3\n']
>>> execute('/bin/cat', lines, print).code, lines
1
2
3
(0, [])

The status is the raw wait status, with the usual decodings:

>>> status = execute('/bin/sh -c "kill $$"', (), print)
>>> status.signaled, status.signal, status.returncode
(True, 15, -15)

A filter need not print one line per input line; reading just goes on until
the child closes its output:

>>> check_output('/bin/grep b', ['abc\n', 'xyz\n', 'bcd\n'])
(['abc', 'bcd'], ExitStatus(returncode=0))

In the background, the same thing runs on another thread and a future
is returned:

>>> output = []
>>> future = spawn_async('/bin/cat', ['abc\n'], output.append)
>>> future.result(), output
(ExitStatus(returncode=0), ['abc'])

And lazily, ProcessStream hands out lines as they're asked for:

>>> with ProcessStream('/bin/cat', ['a\n', 'b\n']) as stream:
...     for line in stream: print(line)
...
a
b
>>> stream.status
ExitStatus(returncode=0)

Every one of these is also available through funcpipes (see pyfeed.util):

>>> ['abc\n'] | run['/usr/bin/tr a-z A-Z'] | check | get.stdout
['ABC']

Which backend creates the child is picked with the PYFEED_BACKEND
environment variable or change_default_backend(); it's either 'fork_exec'
(the default on POSIX) or 'subprocess'.
"""

from .command import Command  # noqa: F401
from .fd import FD  # noqa: F401
from .pipe import Pipe, DuplexChannel  # noqa: F401
from .posix_wait import ExitStatus  # noqa: F401
from .process import *  # noqa: F401 F403
from .stream import ProcessStream, Cursor, State  # noqa: F401
from .thread import Thread  # noqa: F401
from .util import *  # noqa: F401 F403
