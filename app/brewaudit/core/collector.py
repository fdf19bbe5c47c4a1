"""Installed-state collection.

Runs the Homebrew and mas scanners and folds their output into a
single sorted InstalledState snapshot.
"""

import logging

from brewaudit.models.installed import InstalledState
from brewaudit.scanners.brew import BrewCaskScanner, BrewFormulaScanner
from brewaudit.scanners.mas import MasScanner

logger = logging.getLogger(__name__)


def collect_installed_state(
    formula_scanner: BrewFormulaScanner | None = None,
    cask_scanner: BrewCaskScanner | None = None,
    mas_scanner: MasScanner | None = None,
    timeout: float = 60.0,
) -> InstalledState:
    """Query what is currently installed.

    Homebrew is a hard requirement: a failing formula or cask listing
    propagates. A missing mas, or a failing ``mas list``, only clears
    ``mas_available`` so the store category can be skipped downstream.

    Args:
        formula_scanner: Scanner for explicit formulae (default: BrewFormulaScanner).
        cask_scanner: Scanner for casks (default: BrewCaskScanner).
        mas_scanner: Scanner for store apps (default: MasScanner).
        timeout: Seconds allowed per listing when building default scanners.

    Returns:
        InstalledState with every collection sorted.

    Raises:
        RuntimeError: If the formula or cask listing fails.
    """
    formula_scanner = formula_scanner or BrewFormulaScanner(timeout=timeout)
    cask_scanner = cask_scanner or BrewCaskScanner(timeout=timeout)
    mas_scanner = mas_scanner or MasScanner(timeout=timeout)

    formulae = tuple(formula_scanner.names())
    logger.debug("Collected %d installed formulae", len(formulae))

    casks = tuple(cask_scanner.names())
    logger.debug("Collected %d installed casks", len(casks))

    if not mas_scanner.is_available():
        logger.debug("mas not available, skipping store apps")
        return InstalledState(formulae=formulae, casks=casks, mas_available=False)

    try:
        mas_apps = mas_scanner.apps()
    except RuntimeError as e:
        logger.warning("Skipping store apps: %s", e)
        return InstalledState(formulae=formulae, casks=casks, mas_available=False)
    logger.debug("Collected %d store apps", len(mas_apps))

    return InstalledState(formulae=formulae, casks=casks, mas_apps=mas_apps)
