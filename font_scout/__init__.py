"""
FontScout package initializer.
Defines package version; the CLI lives in :mod:`font_scout.cli`.
"""
__version__ = "0.1.0"
