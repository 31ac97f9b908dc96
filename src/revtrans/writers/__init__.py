"""Output writers for recovered entries."""

from .secrets_csv import HEADER, SecretsCsvWriter, SecretsRow

__all__ = [
    "HEADER",
    "SecretsCsvWriter",
    "SecretsRow",
]
