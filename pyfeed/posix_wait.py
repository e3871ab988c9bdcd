__all__ = 'ExitStatus', 'wait'

import os


class ExitStatus(int):
    """raw wait status of a child, as returned by os.waitpid()

    It is still an int, so os.WIFEXITED() and friends work on it, but the
    common decodings are available as properties:

    >>> status = ExitStatus(7 << 8)
    >>> status.exited, status.code, status.returncode
    (True, 7, 7)
    >>> status = ExitStatus(15)
    >>> status.signaled, status.signal, status.returncode
    (True, 15, -15)
    >>> ExitStatus.from_returncode(-9).signal
    9
    >>> ExitStatus.from_returncode(3).code
    3
    """
    @classmethod
    def from_returncode(cls, returncode):
        """inverse of .returncode, for backends that only report that"""
        return cls(-returncode if returncode < 0 else returncode << 8)

    @property
    def exited(self):
        return os.WIFEXITED(self)

    @property
    def code(self):
        """exit code, or None if the child didn't exit normally"""
        return os.WEXITSTATUS(self) if self.exited else None

    @property
    def signaled(self):
        return os.WIFSIGNALED(self)

    @property
    def signal(self):
        """terminating signal, or None if the child wasn't killed"""
        return os.WTERMSIG(self) if self.signaled else None

    @property
    def returncode(self):
        """subprocess-style code: exit code, or minus the signal number"""
        if self.signaled:
            return -os.WTERMSIG(self)
        if self.exited:
            return os.WEXITSTATUS(self)
        if os.WIFSTOPPED(self):
            return -os.WSTOPSIG(self)
        raise RuntimeError(f'weird exit status: {hex(self)}')

    def __repr__(self):
        return f'{type(self).__name__}(returncode={self.returncode})'


def wait(pid):
    """wait on a pid to complete and return its ExitStatus"""
    pid_, status = os.waitpid(pid, 0)
    if pid_ != pid:
        raise RuntimeError(f'pid is {pid_}, expected {pid}')
    return ExitStatus(status)
