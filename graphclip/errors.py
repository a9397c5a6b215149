from __future__ import annotations


class GraphClipError(ValueError):
    pass


class InvalidRangeError(GraphClipError):
    pass


class InvalidFunctionError(GraphClipError):
    pass


class EmptyInputError(GraphClipError):
    pass
