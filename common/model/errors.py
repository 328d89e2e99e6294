"""
Failures raised while collecting a benchmark run.

Every class derives from CollectError and from the closest builtin, so a
caller may catch either.
"""


class CollectError(Exception):
    pass


class ConfigurationError(CollectError, ValueError):
    """Bad arguments, unusable input directory or pre-existing output."""


class MissingArtifact(CollectError, FileNotFoundError):
    """A required file of the run directory is absent."""


class MalformedSnapshot(CollectError, ValueError):
    """A stats snapshot row is missing or does not match its grammar."""


class MalformedPlanFile(CollectError, ValueError):
    pass


class MalformedResultsLine(CollectError, ValueError):
    """Raised only when strict results parsing is enabled."""


class DivisionByZero(CollectError, ZeroDivisionError):
    """Hit ratio requested for a run without any block activity."""


class IncompleteAggregate(CollectError, ValueError):
    """A field required by the record schema is missing from the aggregate."""
