"""Installed-state model.

Snapshot of what Homebrew and mas report as installed, collected fresh
on every run.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class InstalledState:
    """Everything currently installed, sorted for deterministic comparison.

    Attributes:
        formulae: Explicitly installed formulae (``brew leaves``).
        casks: Installed casks (``brew list --cask``).
        mas_apps: Store id -> display name (``mas list``).
        mas_available: False when mas is missing and the store category
            must be skipped.
    """

    formulae: tuple[str, ...] = field(default=())
    casks: tuple[str, ...] = field(default=())
    mas_apps: dict[str, str] = field(default_factory=lambda: {})
    mas_available: bool = True

    @property
    def total(self) -> int:
        """Number of installed items across all categories."""
        return len(self.formulae) + len(self.casks) + len(self.mas_apps)
