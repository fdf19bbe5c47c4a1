"""Installed-state scanners for Homebrew and the Mac App Store.

This module exports the scanner classes for querying installed items.
"""

from brewaudit.scanners.applications import ApplicationScanner
from brewaudit.scanners.base import Scanner
from brewaudit.scanners.brew import BrewCaskScanner, BrewFormulaScanner, BrewProber
from brewaudit.scanners.mas import MasScanner

__all__ = [
    "ApplicationScanner",
    "BrewCaskScanner",
    "BrewFormulaScanner",
    "BrewProber",
    "MasScanner",
    "Scanner",
]
