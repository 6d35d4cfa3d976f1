class ConfigurationError(RuntimeError):
    """Missing credentials or assistant configuration; raised before any network call."""


class LLMError(RuntimeError):
    """The language model call failed or returned unusable output."""


class PersistenceError(RuntimeError):
    """A document store read or write failed."""
