__all__ = 'Command',

from shlex import split
from typing import NamedTuple, Tuple


class Command(NamedTuple):
    """what to run: a path to an executable and its arguments

    The path is used as is; nothing searches $PATH for it.

    >>> Command.of('/bin/tr a-z A-Z')
    Command(path='/bin/tr', args=('a-z', 'A-Z'))
    >>> Command.of(['/bin/cat'])
    Command(path='/bin/cat', args=())
    >>> Command.of('/bin/cat').argv
    ('/bin/cat',)
    """
    path: str
    args: Tuple[str, ...] = ()

    @classmethod
    def of(cls, argv):
        """make a Command out of a Command, a command line or an argv sequence"""
        if isinstance(argv, cls):
            return argv
        if isinstance(argv, (str, bytes)):
            argv = split(argv.decode() if isinstance(argv, bytes) else argv)
        argv = tuple(argv)
        if not argv:
            raise ValueError('empty command')
        return cls(argv[0], argv[1:])

    @property
    def argv(self):
        """argument vector for exec, the path doubling as argv[0]"""
        return (self.path, *self.args)

    def __str__(self):
        return ' '.join(self.argv)
