"""dep-linker: link locally checked-out packages in dependency order."""

__version__ = "0.1.0"
