"""
phpmatrix version information.

Single source of truth for the package version. It is read by the build
backend (``[tool.setuptools.dynamic]``), the ``--version`` option and the
HTTP User-Agent.
"""

__version__ = "0.3.0"
