from setuptools import setup, find_packages

__package_name__ = "rbnforge"
__description__ = "This package provides methods to construct and simulate random Boolean networks (Kauffman NK networks) under synchronous updating, with pluggable randomness for reproducible experiments."

__version__ = open("rbnforge/_version.py", "rt").read().split('\'')[1]

setup(
      name = __package_name__,
      version = __version__,
      description = __description__,
      long_description = __description__,

      license = "MIT",

      packages = find_packages(include=["rbnforge", "rbnforge.*"]),

      python_requires = ">=3.10",

      classifiers = [
          "Programming Language :: Python :: 3",
      ],

      install_requires = [
          "numpy",
          "networkx",
          "pandas"
      ],

      extras_require = {
          "test": [
              "pytest"
          ],
      }
)
