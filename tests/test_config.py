"""
Test suite for basso's compatibility configuration.

This module tests:
- Default option values
- configure / reset_config / override
- The effect of each option on the operations it controls
"""

import unittest

from basso import (
    CompatConfig,
    configure,
    find_where,
    get_config,
    override,
    reduce,
    reduce_right,
    reset_config,
    where,
)


class TestConfigApi(unittest.TestCase):
    """Test reading and changing the active configuration."""

    def tearDown(self):
        reset_config()

    def test_defaults(self):
        config = get_config()
        self.assertEqual(config, CompatConfig())
        self.assertEqual(
            config.to_dict(),
            {
                "coalesce_falsy_seed": True,
                "reduce_right_by_value": True,
                "match_falsy_values": False,
            },
        )

    def test_configure_returns_new_config(self):
        config = configure(match_falsy_values=True)
        self.assertTrue(config.match_falsy_values)
        self.assertIs(get_config(), config)

    def test_configure_keeps_other_options(self):
        configure(coalesce_falsy_seed=False)
        configure(reduce_right_by_value=False)
        config = get_config()
        self.assertFalse(config.coalesce_falsy_seed)
        self.assertFalse(config.reduce_right_by_value)

    def test_unknown_option(self):
        with self.assertRaises(TypeError):
            configure(no_such_option=True)

    def test_non_bool_value(self):
        with self.assertRaises(ValueError):
            configure(match_falsy_values="yes")

    def test_config_is_frozen(self):
        with self.assertRaises(Exception):
            get_config().match_falsy_values = True

    def test_override_restores(self):
        before = get_config()
        with override(coalesce_falsy_seed=False) as config:
            self.assertFalse(config.coalesce_falsy_seed)
            self.assertIs(get_config(), config)
        self.assertIs(get_config(), before)

    def test_override_restores_on_error(self):
        before = get_config()
        with self.assertRaises(RuntimeError):
            with override(match_falsy_values=True):
                raise RuntimeError("boom")
        self.assertIs(get_config(), before)

    def test_reset(self):
        configure(match_falsy_values=True)
        self.assertEqual(reset_config(), CompatConfig())


class TestConfigEffects(unittest.TestCase):
    """Test that each option changes the behaviour it names."""

    def tearDown(self):
        reset_config()

    def test_explicit_falsy_seed_kept(self):
        with override(coalesce_falsy_seed=False):
            self.assertEqual(reduce(["a", "b"], lambda a, b: a + b, ""), "ab")
            self.assertEqual(
                reduce([1, 2], lambda acc, x: acc + [x], []), [1, 2]
            )
            # A missing seed still starts from zero
            self.assertEqual(reduce([1, 2], lambda a, b: a + b), 3)

    def test_positional_reduce_right(self):
        with override(reduce_right_by_value=False):
            result = reduce_right([3, 1, 2], lambda a, b: f"{a},{b}", "")
        self.assertEqual(result, "0,2,1,3")

    def test_positional_reduce_right_with_kept_seed(self):
        with override(reduce_right_by_value=False, coalesce_falsy_seed=False):
            result = reduce_right(["a", "b", "c"], lambda a, b: a + b, "")
        self.assertEqual(result, "cba")

    def test_match_falsy_values(self):
        rows = [{"n": 0}, {"n": ""}, {"n": False}, {"n": 1}]
        with override(match_falsy_values=True):
            self.assertEqual(where(rows, {"n": 0}), [{"n": 0}])
            self.assertEqual(where(rows, {"n": ""}), [{"n": ""}])
            self.assertEqual(find_where(rows, {"n": False}), {"n": False})
            # Missing properties still never match
            self.assertEqual(where([{}], {"n": None}), [])


if __name__ == "__main__":
    unittest.main()
