"""findash: async data orchestration for a personal finance dashboard."""

__version__ = "0.1.0"
