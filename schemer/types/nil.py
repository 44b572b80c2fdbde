from __future__ import annotations


class NilType:
    """The empty list. There is exactly one instance, compared by identity."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "Nil"
    def __str__(self): return "()"
    def __bool__(self): return False

    def __copy__(self): return self
    def __deepcopy__(self, memo): return self


Nil = NilType()
