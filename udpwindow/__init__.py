"""Sliding-window file transfer over UDP with simulated packet loss."""

__version__ = "0.1.0"
__all__ = ["client", "protocol", "server"]