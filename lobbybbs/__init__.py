"""Building blocks and a minimal telnet listener for a small multi-user BBS."""

__version__ = "0.101.0"