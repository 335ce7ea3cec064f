"""depspec version information.

Single source for the package version, read by ``depspec --version`` and
by the startup error report in ``__main__``.
"""

__version__ = "0.1.0.dev0"
