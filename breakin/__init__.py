"""Break-in detection for sshd authentication logs."""

__version__ = "0.1.0"
