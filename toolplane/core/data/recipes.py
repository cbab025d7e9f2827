"""
Install recipes — human-readable install commands per package manager.

Pure data. Keys are tool names from ``REQUIRED_TOOLS``. A tool with no
entry here (e.g. ``bash``) gets no install advice.
"""

from __future__ import annotations

# Used when the detected manager has no entry for a tool, or when no
# manager was detected at all.
FALLBACK_MANAGER = "npm"

_GO_SHFMT = "GO111MODULE=on go install mvdan.cc/sh/v3/cmd/shfmt@latest"

INSTALL_RECIPES: dict[str, dict] = {
    "shellcheck": {
        "label": "ShellCheck (shell linter)",
        "install": {
            "brew": "brew install shellcheck",
            "apt": "sudo apt install shellcheck",
            "dnf": "sudo dnf install ShellCheck",
        },
    },
    "shfmt": {
        "label": "shfmt (shell formatter)",
        "install": {
            "brew": "brew install shfmt",
            "apt": _GO_SHFMT,
            "dnf": _GO_SHFMT,
        },
    },
    "bash-language-server": {
        "label": "bash-language-server",
        "install": {
            "npm": "npm install -g bash-language-server",
        },
    },
}
