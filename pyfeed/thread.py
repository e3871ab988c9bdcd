__all__ = 'Thread',

import threading


class Thread(threading.Thread):
    """no-frills thread with a return value, usable as a future

    >>> Thread(lambda: 1 + 2).start().join()
    3
    >>> with Thread(lambda: 1 + 2) as thread: thread.join()
    ...
    3
    >>> with Thread(lambda: print('hello')) as thread: pass
    ...
    hello

    An exception in the target is raised again by join() and result():

    >>> Thread(lambda: 1 / 0).start().result()
    Traceback (most recent call last):
    ...
    ZeroDivisionError: division by zero
    """
    def __init__(self, target):
        """initilialize the thread

        target: callable which takes no arguments
        """
        self.value = None
        self.error = None

        def closure():
            try:
                self.value = target()
            except BaseException as e:
                self.error = e

        super().__init__(target=closure, name=Thread.get_name(target))

    def start(self):
        """start the thread"""
        super().start()
        return self

    def join(self, timeout=None):
        """join the thread and return what the target returned

        Returns None if the thread is still running after timeout.
        """
        super().join(timeout)
        if self.is_alive():
            return None
        if self.error is not None:
            raise self.error
        return self.value

    def done(self):
        """check if the target has finished"""
        return self.ident is not None and not self.is_alive()

    def result(self, timeout=None):
        """like join(), but raises TimeoutError if the thread is still running"""
        value = self.join(timeout)
        if self.is_alive():
            raise TimeoutError(f'{self.name} still running after {timeout} s')
        return value

    @staticmethod
    def get_name(func):
        """give a decent name to the thread"""
        if hasattr(func, 'func') and func.func is not func:
            return Thread.get_name(func.func)
        return repr(func)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        super().join()
