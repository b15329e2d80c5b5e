"""Building blocks of a small shell: checks, tokenizing, expansion, redirections, pipes and builtins."""

__version__ = "0.1.0"

__all__ = ["__version__"]