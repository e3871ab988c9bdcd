__all__ = 'FD',

import os
from errno import EBADF


class FD:
    """file descriptor wrapper

    A glorified integer with a close() method that only ever closes once.

    >>> from os import pipe
    >>> r, w = pipe()
    >>> rfd, wfd = FD(r, 'rb'), FD(w, 'wb')
    >>> with wfd.open() as file: file.write(b'test')
    ...
    4
    >>> wfd.closed
    True
    >>> with rfd.open() as file: file.read()
    ...
    b'test'
    >>> rfd.close(); rfd.closed
    True
    """
    def __init__(self, fd, mode='rb'):
        self.fd = int(fd)
        self.mode = mode
        self._closed = False

    def fileno(self):
        if self._closed:
            raise ValueError(f'{self!r} is closed')
        return self.fd

    def open(self, **kwargs):
        """wrap the descriptor in a file object

        The file object takes over the descriptor, so closing the file
        closes the descriptor and this FD is marked as closed right away.
        """
        file = open(self.fileno(), self.mode, **kwargs)
        self._closed = True
        return file

    def close(self, invalid_ok=True):
        """close the descriptor if it hasn't been closed yet"""
        if self._closed:
            return
        self._closed = True
        try:
            os.close(self.fd)
        except OSError as e:
            if not invalid_ok or e.errno != EBADF:
                raise

    @property
    def closed(self):
        return self._closed

    def dup2(self, target):
        """duplicate onto target (e.g., 0 for stdin) and close the original

        If the descriptor already is the target, it's left alone. The
        duplicate is inheritable, unlike descriptors from os.pipe().
        """
        if self.fd != target:
            os.dup2(self.fd, target)
            self.close()
        else:
            os.set_inheritable(self.fd, True)
            self._closed = True
        return target

    def __repr__(self):
        return f'{type(self).__name__}({self.fd}, {repr(self.mode)})'

    def __int__(self):
        return self.fd
