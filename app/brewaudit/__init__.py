"""brewaudit - keep a brew.sh manifest in sync with Homebrew and the Mac App Store."""

__version__ = "0.1.0"
