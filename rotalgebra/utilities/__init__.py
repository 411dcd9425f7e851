"""
This package provides the configuration helpers used by rotalgebra.

* :mod:`.options` provides the :class:`.UserOptions` dataclass base used to declare defaults, and
* :mod:`.mixin_classes` provides the :class:`.UserOptionConfigured` mixin that applies and resets them.
"""
