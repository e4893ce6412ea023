import threading


class _Singleton(type):
    """
    A metaclass that creates a Singleton base class when called.
    The instance is identified by the class and the arguments passed to it.
    @reference: https://stackoverflow.com/questions/6760685/what-is-the-best-way-of-implementing-singleton-in-python
    """

    _instances = {}
    _lock = threading.RLock()

    def __call__(clazz, *args, **kwargs):
        args_hash = hash(args + tuple(sorted(kwargs.items())))
        with _Singleton._lock:
            instances = _Singleton._instances.setdefault(clazz, {})
            if args_hash not in instances:
                instances[args_hash] = super(_Singleton, clazz).__call__(*args, **kwargs)
            return instances[args_hash]


class Singleton(_Singleton('SingletonMeta', (object,), {})):
    pass
