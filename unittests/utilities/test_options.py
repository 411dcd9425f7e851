"""
test_options
============

Tests the UserOptions dataclass base and the UserOptionConfigured mixin.

Test Cases
__________
"""

from unittest import TestCase

from dataclasses import dataclass, field

from rotalgebra.utilities.options import UserOptions
from rotalgebra.utilities.mixin_classes import UserOptionConfigured


@dataclass
class ExampleOptions(UserOptions):

    tolerance: float = 1e-12

    names: list[str] = field(default_factory=lambda: ['yaw', 'pitch'])

    strict: bool = False

    def override_options(self) -> None:
        if self.strict:
            self.tolerance = min(self.tolerance, 1e-15)

    def validate(self) -> None:
        if self.tolerance < 0:
            raise ValueError('tolerance must be non-negative')


class Example(UserOptionConfigured[ExampleOptions], ExampleOptions):

    def __init__(self, options: ExampleOptions | None = None) -> None:
        super().__init__(ExampleOptions, options=options)


class TestUserOptions(TestCase):

    def test_options_dict(self):

        options = ExampleOptions(tolerance=0.5)

        self.assertEqual(options.options_dict, {'tolerance': 0.5, 'names': ['yaw', 'pitch'], 'strict': False})

    def test_override(self):

        options = ExampleOptions(tolerance=0.5, strict=True)

        self.assertEqual(options.options_dict['tolerance'], 1e-15)

    def test_apply_options(self):

        class Target:
            pass

        target = Target()

        ExampleOptions(names=['roll']).apply_options(target)

        self.assertEqual(target.tolerance, 1e-12)
        self.assertEqual(target.names, ['roll'])
        self.assertFalse(target.strict)

    def test_validate(self):

        with self.assertRaises(ValueError):
            ExampleOptions(tolerance=-1).apply_options(object.__new__(Example))


class TestUserOptionConfigured(TestCase):

    def test_defaults(self):

        example = Example()

        self.assertEqual(example.tolerance, 1e-12)
        self.assertEqual(example.names, ['yaw', 'pitch'])
        self.assertIsInstance(example.original_options, ExampleOptions)

    def test_reset_settings(self):

        example = Example(ExampleOptions(tolerance=1e-3))

        example.tolerance = 2.0
        example.names.append('roll')

        example.reset_settings()

        self.assertEqual(example.tolerance, 1e-3)
        self.assertEqual(example.names, ['yaw', 'pitch'])

    def test_original_options_copied(self):

        options = ExampleOptions()

        example = Example(options)

        options.tolerance = 3.0

        self.assertEqual(example.original_options.tolerance, 1e-12)

        example.original_options = ExampleOptions(tolerance=4.0)

        example.reset_settings()

        self.assertEqual(example.tolerance, 4.0)
