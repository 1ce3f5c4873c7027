"""Watch starred GitHub repositories for new releases and summarize them."""

__version__ = "0.1.0"
