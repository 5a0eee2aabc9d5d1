# setup.py
from setuptools import setup, find_packages

setup(
    name="lispi",
    version="0.3.0",
    description="Parser and tree-walking evaluator for a small Lisp with modules",
    packages=find_packages(include=["lispi", "lispi.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
