# core/errors.py
from typing import Optional


class DeltaError(Exception):
    """Base for every failure raised by the delta pipeline."""


class ConfigurationError(DeltaError, ValueError):
    pass


class LoadError(DeltaError):
    def __init__(self, message: str, source=None, step: Optional[int] = None):
        self.source = source
        self.step = step
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        where = []
        if self.step is not None:
            where.append(f"step {self.step}")
        if self.source is not None:
            where.append(str(self.source))
        return f"{msg} ({', '.join(where)})" if where else msg


class ClassificationAnomaly(DeltaError):
    def __init__(self, message: str, element_id: int):
        self.element_id = element_id
        super().__init__(f"element {element_id}: {message}")
