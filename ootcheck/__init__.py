"""ootcheck — decide whether a kernel compatibility shim must be built."""

__version__ = "0.1.0"
