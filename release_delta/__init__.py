"""
Release Delta — HTTP service reporting artifact size deltas between releases.

Fetches release metadata for a GitHub repository, keeps releases with a strict
MAJOR.MINOR.PATCH tag and a matching source archive, and reports the size
difference between each pair of adjacent releases in a requested range.
"""

__version__ = "0.1.0"
