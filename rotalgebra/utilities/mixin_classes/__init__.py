"""
This package contains the mixin classes used throughout rotalgebra.
"""

from rotalgebra.utilities.mixin_classes.user_option_configured import UserOptionConfigured

__all__ = ["UserOptionConfigured"]
