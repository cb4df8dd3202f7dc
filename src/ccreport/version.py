"""Version information for :mod:`ccreport`."""

VERSION = "0.1.0"
