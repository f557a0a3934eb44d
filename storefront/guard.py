"""Submission guard: one in-flight form submission at a time."""
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from storefront.errors import SubmissionInProgress


class SubmissionGuard:
    """
    Boolean "submitting" flag with scoped acquisition.

    The flag is released on every exit path, including exceptions, so a
    failed request never leaves the form disabled.

    Usage:
        with guard.hold():
            await api.submit_order(payload)
    """

    def __init__(self, on_change: Optional[Callable[[bool], None]] = None):
        self.on_change = on_change
        self._submitting = False

    @property
    def submitting(self) -> bool:
        return self._submitting

    @contextmanager
    def hold(self) -> Iterator[None]:
        if self._submitting:
            raise SubmissionInProgress("A submission is already in progress")
        self._set(True)
        try:
            yield
        finally:
            self._set(False)

    def _set(self, value: bool) -> None:
        self._submitting = value
        if self.on_change is not None:
            self.on_change(value)
