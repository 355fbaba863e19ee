"""
firefly_opt: Firefly Algorithm for Box-Constrained Optimization
===============================================================

Installation:
    pip install -e .

Or with development tools:
    pip install -e ".[dev]"
"""
from setuptools import setup, find_packages

setup(
    name="firefly_opt",
    version="1.0.0",
    description="Firefly metaheuristic for single-objective box-constrained optimization",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "scipy>=1.7.0",
        "pandas>=1.3.0",
    ],
    extras_require={
        "dev": ["pytest", "pytest-cov", "black", "flake8", "mypy"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    entry_points={
        "console_scripts": [
            "firefly-opt=firefly_opt.cli:main",
        ],
    },
)
