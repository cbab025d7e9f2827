"""toolplane — availability and configuration of shell-script tooling."""

__version__ = "0.1.0"
