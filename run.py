#!/usr/bin/env python3
"""
Firefly Main Runner
===================

Unified interface for running Firefly optimizations and experiments.

Commands:
    demo        Single logged run on a benchmark function
    benchmark   Seeded runs over benchmark functions and dimensions
    compare     Wilcoxon comparison of two parameter settings

Examples:
    python run.py demo
    python run.py demo --func ackley --dim 5 --generations 100 --verbosity 3
    python run.py benchmark --dims 2 10 --runs 25 --output results
    python run.py compare --config-a 0.01 1 0.01 --config-b 0.2 1 0.5
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from firefly_opt.cli import main


if __name__ == '__main__':
    sys.exit(main())
