"""rsa-manager: generate RSA key pairs and keep ~/.ssh/config in sync."""

__version__ = "0.1.0"
