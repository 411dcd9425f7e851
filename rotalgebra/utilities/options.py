"""
This module provides the :class:`UserOptions` abstract dataclass used to bundle the default settings of a configurable
class.

An options dataclass lists the settings as annotated fields with their defaults.  The configured class inherits from
the options dataclass (so that the settings show up as attributes with documentation) and applies an instance of it to
itself on initialization, typically through the :class:`.UserOptionConfigured` mixin.

Example:
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class ExampleOptions(UserOptions):
    ...     tolerance: float = 1e-12
    >>> class Example:
    ...     def __init__(self, options=None):
    ...         if options is None:
    ...             options = ExampleOptions()
    ...         options.apply_options(self)
    >>> Example().tolerance
    1e-12
"""

from abc import ABCMeta

from dataclasses import dataclass, fields

from typing import Any


__all__ = ['UserOptions']


@dataclass
class UserOptions(metaclass=ABCMeta):
    """
    Abstract base for the options dataclasses.

    Subclasses must be decorated with ``@dataclass`` and follow the naming scheme ``<ClassName>Options``.
    """

    def override_options(self) -> None:
        """
        Hook called before the options are applied, for subclasses that need to adjust some options based on others.
        """

    def validate(self) -> None:
        """
        Hook called before the options are applied to check that they are consistent.

        Subclasses should raise a ``ValueError`` describing the problem.
        """

    def apply_options(self, target: object) -> None:
        """
        Sets every option as an attribute of `target`.

        :param target: the instance to update
        :raises ValueError: if the options do not pass :meth:`validate`
        """

        target.__dict__.update(self.options_dict)

    @property
    def options_dict(self) -> dict[str, Any]:
        """
        The options as a dictionary of field name to value, after :meth:`override_options` and :meth:`validate`.
        """

        self.override_options()
        self.validate()

        return {field.name: getattr(self, field.name) for field in fields(self)}
