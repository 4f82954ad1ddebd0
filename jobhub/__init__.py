"""Taiwan Job Hub: AI-sourced job search with saved / applied bookkeeping."""

__version__ = "0.1.0"
