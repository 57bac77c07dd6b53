"""Singleton metaclass shared by process-wide readers"""

import threading


class SingletonMeta(type):
    """Thread-safe metaclass returning one instance per class

    Instance creation is serialized by a single re-entrant lock; lookups of an
    already created instance skip it.
    """

    _instances: dict[type, object] = {}
    _lock = threading.RLock()

    def __call__(cls, *args, **kwargs):
        instance = cls._instances.get(cls)
        if instance is not None:
            return instance

        with cls._lock:
            if cls not in cls._instances:
                cls._instances[cls] = super().__call__(*args, **kwargs)
            return cls._instances[cls]

    @classmethod
    def reset_instance(mcs, cls):
        """Drop the cached instance of ``cls`` so the next call builds a new one.

        Intended for tests that load different configuration files.
        """
        with mcs._lock:
            mcs._instances.pop(cls, None)
