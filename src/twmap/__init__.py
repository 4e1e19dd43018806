"""twmap: extract utility-class strings, rename them, emit an apply stylesheet."""

__version__ = "1.0.5"
