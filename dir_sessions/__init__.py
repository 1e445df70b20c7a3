"""dir-sessions - session-aware project directory picker."""

__version__ = "0.1.0"
