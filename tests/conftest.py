"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Iterator
from pathlib import Path

import pytest
from brewaudit.core.classifier import ClassificationResult
from brewaudit.core.manifest import parse_manifest
from brewaudit.models.installed import InstalledState
from brewaudit.models.manifest import Manifest
from brewaudit.models.package import PackageKind, ProbeResult
from brewaudit.utils import tempfiles

SAMPLE_MANIFEST = """\
#!/usr/bin/env bash
# Install everything this machine needs

set -euo pipefail

packages=(
    "git"
    "tree"  # file tree
    "obsidian"

)

for pkg in "${packages[@]}"; do
    brew install "$pkg"
done

apps=(
    "google-chrome"
    "ripgrep"
)

app_store=(
    "497799835" # Xcode
    "1333542190" # 1Password 7
 )

mas install "${app_store[@]}"
echo "done"
"""


class FakeProber:
    """Prober answering from fixed formula and cask sets."""

    def __init__(
        self,
        formulae: set[str] | None = None,
        casks: set[str] | None = None,
        errors: set[str] | None = None,
    ) -> None:
        self.formulae = formulae or set()
        self.casks = casks or set()
        self.errors = errors or set()
        self.calls: list[tuple[str, PackageKind]] = []

    def probe(self, name: str, kind: PackageKind) -> ProbeResult:
        self.calls.append((name, kind))
        if name in self.errors:
            return ProbeResult.ERROR
        known = self.formulae if kind is PackageKind.FORMULA else self.casks
        return ProbeResult.FOUND if name in known else ProbeResult.NOT_FOUND


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture(autouse=True)
def clean_temp_registry() -> Iterator[None]:
    """Start and end every test with an empty temp-file registry."""
    tempfiles.cleanup_temp_files()
    yield
    tempfiles.cleanup_temp_files()


@pytest.fixture
def sample_text() -> str:
    """Full text of a realistic brew.sh."""
    return SAMPLE_MANIFEST


@pytest.fixture
def sample_manifest() -> Manifest:
    """Parsed sample brew.sh."""
    return parse_manifest(SAMPLE_MANIFEST)


@pytest.fixture
def manifest_file(tmp_path: Path) -> Path:
    """Sample brew.sh written into a temporary repository directory."""
    repo = tmp_path / "dotfiles"
    repo.mkdir()
    path = repo / "brew.sh"
    path.write_text(SAMPLE_MANIFEST, encoding="utf-8")
    path.chmod(0o755)
    return path


@pytest.fixture
def fake_prober() -> FakeProber:
    """Prober that knows the sample entries."""
    return FakeProber(
        formulae={"git", "tree", "jq", "ripgrep"},
        casks={"google-chrome", "obsidian", "firefox"},
    )


@pytest.fixture
def make_prober() -> type[FakeProber]:
    """Factory for probers with custom answers."""
    return FakeProber


@pytest.fixture
def empty_classification() -> ClassificationResult:
    """Classification with no entries."""
    return ClassificationResult(packages={}, apps={})


@pytest.fixture
def sample_installed() -> InstalledState:
    """Installed state roughly matching the sample manifest."""
    return InstalledState(
        formulae=("git", "jq", "ripgrep"),
        casks=("firefox", "google-chrome", "obsidian"),
        mas_apps={"441258766": "Magnet", "497799835": "Xcode"},
    )
