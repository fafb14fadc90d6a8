"""sh-server: shell scripts over HTTP for ``curl | sh``."""

__version__ = "0.3.0"
