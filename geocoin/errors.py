"""Exception types for persisted game data.

Invalid *input* (non-finite coordinates, bad configuration, unknown actions)
is reported with plain ``ValueError`` at the point of use. The classes here
cover data read back from durable storage, which callers usually want to
catch separately so a single bad record can be skipped.
"""


class MalformedMementoError(ValueError):
    """A cache memento is not a JSON list of coin id strings."""


class UnsupportedSchemaError(ValueError):
    """Persisted state was written by a newer, unknown schema version."""
