"""Exception types raised by stores and redline lookups."""


class RedlineError(Exception):
    """Base class for errors reported back to tool callers."""


class RecordNotFoundError(RedlineError, LookupError):
    """A requirement or test case ID does not exist."""


class VersionNotFoundError(RedlineError, LookupError):
    """One or both requested version snapshots do not exist."""

    def __init__(self, kind: str, missing: list[int]):
        self.kind = kind
        self.missing = missing
        ids = ", ".join(str(m) for m in missing)
        super().__init__(f"{kind} version(s) not found: {ids}")


class InvalidComparisonError(RedlineError, ValueError):
    """Two snapshots from different entities were submitted for comparison."""
