"""vscode-helper - find the active VS Code workspace and drive it from the terminal."""

__version__ = "1.0.0"
