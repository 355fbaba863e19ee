"""
Tests for Benchmarks, Utilities, Experiment Harness and CLI
===========================================================

Run with: python -m pytest tests/test_experiment.py -v
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

import contextlib
import io
import json
import tempfile
import unittest

import numpy as np
import pandas as pd

from firefly_opt.benchmarks import BENCHMARKS, get_benchmark, make_benchmark
from firefly_opt.cli import main
from firefly_opt.config import ConfigurationError, ExperimentConfig
from firefly_opt.experiment import DualLogger, compare_configs, run_benchmark_experiments
from firefly_opt.logger import banner, fmt_duration, fmt_sci
from firefly_opt.utils import (
    format_sci,
    parse_int_set,
    parse_name_list,
    seed_for_run,
    write_json,
    zero_small,
)


# =============================================================================
# Benchmarks
# =============================================================================

class TestBenchmarks(unittest.TestCase):
    """Benchmark functions and problem factory."""

    OPTIMA = {
        'sphere': 0.0,
        'rastrigin': 0.0,
        'rosenbrock': 1.0,
        'ackley': 0.0,
        'griewank': 0.0,
        'schwefel': 420.9687463,
        'levy': 1.0,
        'zakharov': 0.0,
    }

    def test_known_optima(self):
        for name, x_opt in self.OPTIMA.items():
            with self.subTest(name=name):
                bench = BENCHMARKS[name]
                x = np.full((1, 5), x_opt)
                self.assertAlmostEqual(float(bench.func(x)[0]), bench.f_opt, places=4)

    def test_vectorized(self):
        X = np.random.default_rng(0).uniform(-1, 1, (7, 4))
        for name, bench in BENCHMARKS.items():
            with self.subTest(name=name):
                self.assertEqual(bench.func(X).shape, (7,))

    def test_make_benchmark(self):
        prob = make_benchmark('Rastrigin', 4)
        self.assertEqual(prob.dimension, 4)
        np.testing.assert_array_equal(prob.lb, [-5.12] * 4)
        np.testing.assert_array_equal(prob.ub, [5.12] * 4)
        self.assertAlmostEqual(prob.objfun(np.zeros(4))[0], 0.0)
        self.assertEqual(prob.name, 'rastrigin-4D')

    def test_make_benchmark_custom_bounds(self):
        prob = make_benchmark('sphere', 2, bounds=(-1.0, 3.0))
        np.testing.assert_array_equal(prob.lb, [-1.0, -1.0])
        np.testing.assert_array_equal(prob.ub, [3.0, 3.0])

    def test_make_benchmark_maximize(self):
        prob = make_benchmark('sphere', 2, sense='max')
        self.assertEqual(prob.objfun([1.0, 1.0])[0], -2.0)
        self.assertTrue(prob.compare_fitness([-1.0], [-2.0]))

    def test_maximize_reports_negated_fitness(self):
        self.assertEqual(make_benchmark('schwefel', 2).sense, 'min')
        prob = make_benchmark('schwefel', 2, sense='max')
        x_opt = np.full(2, self.OPTIMA['schwefel'])
        self.assertAlmostEqual(prob.objfun(x_opt)[0], -BENCHMARKS['schwefel'].f_opt, places=4)
        self.assertLess(prob.objfun(np.zeros(2))[0], prob.objfun(x_opt)[0])

    def test_unknown_and_invalid(self):
        with self.assertRaises(ValueError):
            get_benchmark('nope')
        with self.assertRaises(ValueError):
            make_benchmark('sphere', 0)
        with self.assertRaises(ValueError):
            make_benchmark('rosenbrock', 1)


# =============================================================================
# Utilities
# =============================================================================

class TestUtils(unittest.TestCase):
    """Formatting, parsing and seeding helpers."""

    def test_zero_small(self):
        self.assertEqual(zero_small(1e-8), 0.0)
        self.assertEqual(zero_small(1e-6), 1e-6)
        self.assertEqual(zero_small(-1e-9), 0.0)

    def test_format_sci(self):
        self.assertEqual(format_sci(30.6), '3.06E+01')
        self.assertEqual(format_sci(1e-9), '0.00E+00')
        self.assertEqual(format_sci(0.00123), '1.23E-03')

    def test_parse_int_set(self):
        self.assertEqual(parse_int_set('2,10'), {2, 10})
        self.assertEqual(parse_int_set('5-3,8'), {3, 4, 5, 8})
        with self.assertRaises(ValueError):
            parse_int_set('  ')

    def test_parse_name_list(self):
        self.assertEqual(parse_name_list('sphere, Ackley,sphere'), ('sphere', 'ackley'))
        with self.assertRaises(ValueError):
            parse_name_list(',')

    def test_seed_for_run(self):
        self.assertEqual(seed_for_run(base_seed=123456, stride_run=9973, func_idx=1, run_id=1), 133429)
        self.assertEqual(seed_for_run(base_seed=123456, stride_run=9973, func_idx=2, run_id=1), 143402)

    def test_write_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'a' / 'b.json'
            write_json(path, {'z': 1, 'p': Path('x')})
            self.assertEqual(json.loads(path.read_text()), {'p': 'x', 'z': 1})

    def test_logger_formatting(self):
        self.assertEqual(fmt_sci(0.0), '0.0000e+00')
        self.assertEqual(fmt_sci(1e-15), '0.0000e+00')
        self.assertEqual(fmt_duration(1.5), '1.50s')
        self.assertEqual(fmt_duration(187.5), '3m 07.5s')
        self.assertEqual(len(banner('X', 20)), 20)


# =============================================================================
# Experiment Harness
# =============================================================================

class TestExperiment(unittest.TestCase):
    """End-to-end benchmark runs in a temporary directory."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def make_cfg(self, **kwargs):
        base = dict(
            output_root=self.root,
            runs=2,
            dims=(2,),
            funcs=('sphere', 'ackley'),
            pop_size=5,
            generations=3,
            verbose=False,
        )
        base.update(kwargs)
        return ExperimentConfig(**base)

    def test_outputs(self):
        df = run_benchmark_experiments(self.make_cfg())

        self.assertEqual(len(df), 4)
        self.assertEqual(list(df['func'].unique()), ['sphere', 'ackley'])
        self.assertTrue((df['error'] >= 0).all())

        out = self.root / 'firefly'
        summary = pd.read_csv(out / 'summary' / 'Summary_All_Results_D2.csv')
        self.assertEqual(list(summary.columns), ['Function', 'Best', 'Median', 'Mean', 'Worst', 'SD'])
        self.assertEqual(list(summary['Function']), ['sphere', 'ackley'])

        self.assertTrue((out / 'summary' / 'environment.json').exists())
        self.assertTrue((out / 'summary' / 'run_config.json').exists())
        self.assertTrue((out / 'summary' / 'All_Runs.csv').exists())
        self.assertEqual(len(list((out / 'summary').glob('firefly_D02_log_*.txt'))), 1)

        runs = pd.read_csv(out / 'runs' / 'RunErrors_firefly_sphere_D2.csv')
        self.assertEqual(list(runs['Run']), [1, 2])

    def test_seeds_distinct_and_reproducible(self):
        df1 = run_benchmark_experiments(self.make_cfg())
        df2 = run_benchmark_experiments(self.make_cfg())
        self.assertEqual(df1['seed'].nunique(), 4)
        np.testing.assert_array_equal(df1['best_f'].values, df2['best_f'].values)

    def test_invalid_config(self):
        with self.assertRaises(ConfigurationError):
            run_benchmark_experiments(self.make_cfg(alpha=2.0))
        with self.assertRaises(ValueError):
            run_benchmark_experiments(self.make_cfg(pop_size=1))
        with self.assertRaises(ValueError):
            run_benchmark_experiments(self.make_cfg(funcs=('nope',)))

    def test_dual_logger(self):
        path = self.root / 'logs' / 'x.txt'
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            with DualLogger(path) as log:
                log.info('to both')
                log.debug('file only')
        self.assertEqual(path.read_text(encoding='utf-8'), 'to both\nfile only\n')
        self.assertEqual(buf.getvalue(), 'to both\n')


class TestCompareConfigs(unittest.TestCase):
    """Wilcoxon comparison of paired error samples."""

    def test_identical(self):
        a = [1.0, 2.0, 3.0, 4.0]
        res = compare_configs(a, a)
        self.assertFalse(res['significant'])
        self.assertEqual(res['better'], 'tie')

    def test_clear_difference(self):
        a = np.arange(1, 11, dtype=float)
        res = compare_configs(a, a + 10.0)
        self.assertTrue(res['significant'])
        self.assertEqual(res['better'], 'first')

    def test_length_mismatch(self):
        with self.assertRaises(ValueError):
            compare_configs([1.0, 2.0], [1.0])


# =============================================================================
# Command Line
# =============================================================================

class TestCLI(unittest.TestCase):
    """argparse entry point."""

    def run_main(self, argv):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            code = main(argv)
        return code, buf.getvalue()

    def test_no_command(self):
        code, out = self.run_main([])
        self.assertEqual(code, 0)
        self.assertIn('demo', out)

    def test_demo(self):
        code, out = self.run_main([
            'demo', '--func', 'sphere', '--dim', '2', '--generations', '3',
            '--pop-size', '4', '--verbosity', '1', '--no-color',
        ])
        self.assertEqual(code, 0)
        self.assertIn('sphere-2D', out)

    def test_demo_invalid_parameter(self):
        code, out = self.run_main(['demo', '--alpha', '2', '--no-color'])
        self.assertEqual(code, 2)
        self.assertIn('ALPHA_OUT_OF_RANGE', out)

    def test_benchmark(self):
        with tempfile.TemporaryDirectory() as tmp:
            code, _ = self.run_main([
                'benchmark', '--dims', '2', '--funcs', 'sphere', '--runs', '2',
                '--generations', '2', '--pop-size', '4', '--output', tmp, '--quiet',
            ])
            self.assertEqual(code, 0)
            self.assertTrue((Path(tmp) / 'firefly' / 'summary' / 'Summary_All_Results_D2.csv').exists())

    def test_compare(self):
        code, out = self.run_main([
            'compare', '--func', 'sphere', '--dim', '2', '--runs', '3',
            '--generations', '2', '--pop-size', '4',
            '--config-a', '0.01', '1', '0.01', '--config-b', '0.5', '1', '0.5',
        ])
        self.assertEqual(code, 0)
        self.assertIn('Wilcoxon', out)


# =============================================================================
# Main
# =============================================================================

if __name__ == '__main__':
    unittest.main(verbosity=2)
