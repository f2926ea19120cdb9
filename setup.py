# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="pebble",
    version="0.3.0",
    description="A small Lisp interpreter with closures over environment snapshots",
    python_requires=">=3.10",
    # Sub-packages without __init__.py are namespace packages
    packages=find_namespace_packages(include=["pebble", "pebble.*"]),
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["pebble=pebble.interpreter.repl:main"],
    },
    zip_safe=False,
)
