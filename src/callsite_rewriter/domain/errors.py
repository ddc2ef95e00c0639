"""Internal-invariant faults. These mean a rule's own logic is broken, not the user's code."""


class EngineInvariantError(AssertionError):
    """Base for engine defects. Aborts one evaluation and propagates to the driver."""


class ClassificationError(EngineInvariantError):
    """Screen passed but classification found zero or several argument families."""


class OverlappingEditsError(EngineInvariantError):
    """Two edits of one fix plan touch the same source range."""


class SpanOutOfRangeError(EngineInvariantError):
    """An edit points past the end of the source it is applied to."""
