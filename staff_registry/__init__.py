"""Records management core for employees, external employees and customers."""

__version__ = "1.0.0"
