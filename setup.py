#!/usr/bin/env python
import sys

from setuptools import setup, Command
from unittest import TextTestRunner, TestLoader

PYTHON_PACKAGES = [
    'cidrmatch',
    'cidrmatch.util',
    'cidrmatch.tests',
]


class RunTests(Command):
    description = "run test suite"
    user_options = []
    initialize_options = finalize_options = lambda self: None

    def run(self):
        tests = TestLoader().discover('cidrmatch.tests')
        result = TextTestRunner(verbosity=1).run(tests)
        sys.exit(not result.wasSuccessful())


setup(name='cidrmatch',
      version='0.1.0',
      description='Check whether IPv4 and IPv6 addresses are within CIDR'
                  ' network ranges',
      python_requires='>=3.7',
      scripts=['cidrmatchctl'],
      packages=PYTHON_PACKAGES,
      cmdclass={'test': RunTests},
      license='Apache-2.0')
