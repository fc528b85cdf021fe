"""Value model, indexing, paths, comparison, regex, math and time functions for a jq-style query language."""

__version__ = "0.1.0"