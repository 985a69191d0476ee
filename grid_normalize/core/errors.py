"""Exception types raised by the normalization pipeline."""


class NormalizeError(Exception):
    """Base class for all normalization failures."""


class ConfigError(NormalizeError, ValueError):
    """Invalid options. Raised before any grid is loaded."""


class LoadError(NormalizeError, OSError):
    """A source or target grid could not be loaded."""


class SaveError(NormalizeError, OSError):
    """The normalized grid could not be written.

    The grid has already been rewritten in memory at this point, but the
    output file must not be assumed to have changed.
    """


class EmptyPoolError(NormalizeError):
    """No valid (non-sentinel) values are available to derive a bound from."""
