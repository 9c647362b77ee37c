"""
Folder Sift - a CLI tool for sifting files and folders into a sieve.

This package provides functionality to:
- Parse sieve folder names into ranked, negatable word groups
- Match item names against the word groups, most complex group first
- Move, hardlink or copy matched items into their sieve folders
- Report items that match no sieve folder
- Write CSV or Excel reports of a run
"""

__version__ = "0.1.0"
__author__ = "Folder Sift Team"
