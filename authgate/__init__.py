"""AuthGate: user registration, password login and bearer-token guards."""

__version__ = "0.1.0"
