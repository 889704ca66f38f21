"""Santa Rush - hold-to-fly endless runner."""

__version__ = "0.1.0"
