"""
Tests for Firefly Configuration and Validation
==============================================

Run with: python -m pytest tests/test_config.py -v
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

import dataclasses
import unittest

import numpy as np

from firefly_opt.config import (
    ConfigErrorKind,
    ConfigurationError,
    ExperimentConfig,
    FireflyConfig,
    check_config,
)


# =============================================================================
# check_config
# =============================================================================

class TestCheckConfig(unittest.TestCase):
    """Non-raising range checks."""

    def test_valid_values(self):
        self.assertIsNone(check_config(generations=10, alpha=0.01, beta=1.0, gamma=0.01))

    def test_boundaries_accepted(self):
        self.assertIsNone(check_config(generations=0, alpha=0.0, beta=0.0, gamma=0.0))
        self.assertIsNone(check_config(generations=1, alpha=1.0, beta=1.0, gamma=1.0))

    def test_each_kind(self):
        self.assertEqual(
            check_config(generations=-1, alpha=0.5, beta=0.5, gamma=0.5),
            ConfigErrorKind.NEGATIVE_GENERATIONS,
        )
        self.assertEqual(
            check_config(generations=1, alpha=-0.1, beta=0.5, gamma=0.5),
            ConfigErrorKind.ALPHA_OUT_OF_RANGE,
        )
        self.assertEqual(
            check_config(generations=1, alpha=0.5, beta=1.7, gamma=0.5),
            ConfigErrorKind.BETA_OUT_OF_RANGE,
        )
        self.assertEqual(
            check_config(generations=1, alpha=0.5, beta=0.5, gamma=2.0),
            ConfigErrorKind.GAMMA_OUT_OF_RANGE,
        )

    def test_first_violation_reported(self):
        kind = check_config(generations=-5, alpha=3.0, beta=3.0, gamma=3.0)
        self.assertEqual(kind, ConfigErrorKind.NEGATIVE_GENERATIONS)

        kind = check_config(generations=5, alpha=0.5, beta=3.0, gamma=3.0)
        self.assertEqual(kind, ConfigErrorKind.BETA_OUT_OF_RANGE)

    def test_generations_must_be_integer(self):
        for bad in (2.5, 3.0, True, '3'):
            with self.subTest(generations=bad):
                self.assertEqual(
                    check_config(generations=bad, alpha=0.5, beta=0.5, gamma=0.5),
                    ConfigErrorKind.GENERATIONS_NOT_INTEGER,
                )
        self.assertIsNone(check_config(generations=np.int64(4), alpha=0.5, beta=0.5, gamma=0.5))

    def test_nan_rejected(self):
        kind = check_config(generations=1, alpha=float('nan'), beta=0.5, gamma=0.5)
        self.assertEqual(kind, ConfigErrorKind.ALPHA_OUT_OF_RANGE)

    def test_messages(self):
        self.assertEqual(ConfigErrorKind.NEGATIVE_GENERATIONS.value,
                         "number of iterations must be nonnegative")
        self.assertEqual(ConfigErrorKind.GAMMA_OUT_OF_RANGE.value,
                         "gamma should be in [0,1] interval")


# =============================================================================
# FireflyConfig
# =============================================================================

class TestFireflyConfig(unittest.TestCase):
    """Validated, immutable algorithm configuration."""

    def test_defaults(self):
        cfg = FireflyConfig()
        self.assertEqual(cfg.generations, 10)
        self.assertEqual(cfg.alpha, 0.01)
        self.assertEqual(cfg.beta, 1.0)
        self.assertEqual(cfg.gamma, 0.01)

    def test_invalid_raises_with_kind(self):
        with self.assertRaises(ConfigurationError) as ctx:
            FireflyConfig(beta=1.7)
        self.assertEqual(ctx.exception.kind, ConfigErrorKind.BETA_OUT_OF_RANGE)
        self.assertEqual(str(ctx.exception), "beta should be in [0,1]")

    def test_is_value_error(self):
        with self.assertRaises(ValueError):
            FireflyConfig(generations=-1)

    def test_fractional_generations_rejected(self):
        with self.assertRaises(ConfigurationError) as ctx:
            FireflyConfig(generations=2.5)
        self.assertEqual(ctx.exception.kind, ConfigErrorKind.GENERATIONS_NOT_INTEGER)

    def test_frozen(self):
        cfg = FireflyConfig()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            cfg.alpha = 0.5

    def test_to_dict(self):
        d = FireflyConfig(generations=3, alpha=0.2, beta=0.3, gamma=0.4).to_dict()
        self.assertEqual(d, {'generations': 3, 'alpha': 0.2, 'beta': 0.3, 'gamma': 0.4})


# =============================================================================
# ExperimentConfig
# =============================================================================

class TestExperimentConfig(unittest.TestCase):
    """Benchmark harness settings."""

    def test_algorithm_config(self):
        cfg = ExperimentConfig(generations=7, alpha=0.1, beta=0.9, gamma=0.2)
        algo = cfg.algorithm_config()
        self.assertIsInstance(algo, FireflyConfig)
        self.assertEqual(algo.generations, 7)

    def test_algorithm_config_validates(self):
        cfg = ExperimentConfig(gamma=5.0)
        with self.assertRaises(ConfigurationError):
            cfg.algorithm_config()

    def test_to_dict_paths_and_extra(self):
        cfg = ExperimentConfig(output_root=Path('out'), dims=(2,))
        d = cfg.to_dict(extra={'run_stamp': 'now'})
        self.assertEqual(d['output_root'], 'out')
        self.assertEqual(d['run_stamp'], 'now')
        self.assertEqual(d['alg_name'], 'firefly')


# =============================================================================
# Main
# =============================================================================

if __name__ == '__main__':
    unittest.main(verbosity=2)
