"""Correctly rounded parsing of decimal text into IEEE-754 binary floating point, with policy and benchmark helpers."""

__version__ = "0.1.0"