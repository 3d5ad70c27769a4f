"""In-memory mind-map editing core: graph store, history, selection and clipboard."""

__version__ = "0.1.0"
