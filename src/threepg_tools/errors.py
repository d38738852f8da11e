"""
Exceptions raised while preparing 3-PG input tables.

All errors derive from InputError, itself a ValueError, so callers that
already catch ValueError for bad input keep working.
"""


class InputError(ValueError):
    """
    Base class for input preparation failures.

    Attributes:
        table: Input table the problem was found in (e.g. "site", "climate")
        field: Column or setting name involved, if any
        value: Offending value (species name, parameter name, month, ...)
    """

    def __init__(self, message: str, table=None, field=None, value=None):
        super().__init__(message)
        self.table = table
        self.field = field
        self.value = value


class MissingFieldError(InputError):
    """A required column or value is absent."""


class MissingConditionalColumnError(MissingFieldError):
    """A column required by the current settings is absent or incomplete."""


class DuplicateSpeciesError(InputError):
    """The species table lists the same species id more than once."""


class UnknownSpeciesError(InputError):
    """A table references a species that is not in the species table."""


class UnknownSpeciesColumnError(UnknownSpeciesError):
    """A parameter override table has a column for an unknown species."""


class UnknownParameterNameError(InputError):
    """A parameter override row names a parameter the model does not know."""


class UnknownSettingError(InputError):
    """A settings key is not recognized (strict mode only)."""


class RangeError(InputError):
    """A value lies outside its permitted range."""


class CoverageError(InputError):
    """The climate series does not cover the simulation period exactly."""


class MissingRequiredInputError(InputError):
    """An optional table is required by the current settings but missing."""


class InvalidValueError(InputError):
    """A value has the wrong type or shape (non-numeric, unparsable, ...)."""
