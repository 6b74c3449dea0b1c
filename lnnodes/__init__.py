"""Mirror Lightning Network node rankings into SQLite and serve them as JSON over HTTP."""

__version__ = "0.1.0"