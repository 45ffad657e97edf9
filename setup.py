#!/usr/bin/env python

import os
import re
from setuptools import setup, find_packages, Command


class LintCommand(Command):
    """Run pylint on implementation and test code"""

    description = "Run pylint on implementation and test code"
    user_options = []

    _pylint_options = [
        "--max-line-length 80",
        "--ignore-imports yes"
    ]

    _lint_paths = [
        "intel_flash/*.py",
        "intel_flash/*/*.py",
        "tests/*.py",
        "scripts/*.py",
    ]

    def initialize_options(self):
        """Set default values for options."""
        pass

    def finalize_options(self):
        """Post-process options."""
        pass

    def run(self):
        """Run the command"""
        os.system("pylint %s %s" % (
            " ".join(self._pylint_options),
            " ".join(self._lint_paths),
        ))

with open('README.rst') as f:
    README = f.read()

with open("intel_flash/__init__.py", "r") as f:
    __INIT__ = f.read()

VERSION = re.search(r'^__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
                    __INIT__, re.MULTILINE).group(1)
AUTHOR = re.search(r'^__author__\s*=\s*[\'"]([^\'"]*)[\'"]',
                   __INIT__, re.MULTILINE).group(1)

setup(
    name='intel_flash',
    version=VERSION,
    description='Data structures and parsing tools for Intel flash images.',
    long_description=README,
    author=AUTHOR,
    license='BSD',
    packages=find_packages(exclude=('tests', 'docs')),
    test_suite="tests",
    cmdclass={
        "lint": LintCommand,
    },
    scripts=[
        'scripts/flash_parser.py',
    ],
    python_requires='>=3.6',

    classifiers=[
        # https://pypi.python.org/pypi?%3Aaction=list_classifiers
        'Development Status :: 4 - Beta',
        'Intended Audience :: System Administrators',
        'Topic :: Security',
        'License :: OSI Approved :: BSD License',
        'Programming Language :: Python :: 3',
    ],
    keywords="security intel flash descriptor firmware parsing bios",
)
