"""Radio Calico: live radio backend with anonymous song ratings."""

__version__ = "1.0.0"
