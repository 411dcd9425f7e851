"""
This module provides the :class:`UserOptionConfigured` mixin class that configures a class from a :class:`.UserOptions`
dataclass while remembering the initial configuration so it can be restored.

Example:
    Basic usage::

        from dataclasses import dataclass

        from rotalgebra.utilities.options import UserOptions
        from rotalgebra.utilities.mixin_classes import UserOptionConfigured

        @dataclass
        class MyOptions(UserOptions):
            epsilon: float = 1e-12

        class MyClass(UserOptionConfigured[MyOptions], MyOptions):
            def __init__(self, options: MyOptions | None = None):
                super().__init__(MyOptions, options=options)

        inst = MyClass()
        inst.epsilon = 1e-6
        inst.reset_settings()  # epsilon is 1e-12 again

.. Note::
    :class:`UserOptionConfigured` must come first in the bases so that its ``__init__`` is the one called.
"""

from copy import deepcopy

from typing import Generic, TypeVar

from rotalgebra.utilities.options import UserOptions


OptionsT = TypeVar("OptionsT", bound=UserOptions)
"""
Type variable bound to UserOptions
"""


class UserOptionConfigured(Generic[OptionsT]):
    """
    Mixin class providing :class:`.UserOptions` based configuration with reset capability.

    The options given at initialization (or the defaults of `options_type` when none are given) are applied to the
    instance and a copy of them is kept in :attr:`original_options` so that :meth:`reset_settings` can undo any later
    changes.
    """

    def __init__(self, options_type: type[OptionsT], *args, options: OptionsT | None = None, **kwargs) -> None:
        """
        :param options_type: The type of the :class:`.UserOptions` to use
        :param options: An optional preconfigured instance of `options_type`
        """

        super().__init__(*args, **kwargs)

        if options is None:
            options = options_type()

        options.apply_options(self)

        self._original_options: OptionsT = deepcopy(options)
        """
        The original configuration for this class
        """

    def reset_settings(self) -> None:
        """
        Resets the instance to the options it was initialized with.
        """

        self._original_options.apply_options(self)

    @property
    def original_options(self) -> OptionsT:
        """
        The options used during initialization.

        .. Warning::
            Modifying the returned object changes what :meth:`reset_settings` restores.
        """

        return self._original_options

    @original_options.setter
    def original_options(self, value: OptionsT) -> None:
        self._original_options = value
