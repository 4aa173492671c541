class ConfigurationError(ValueError):
    """Generic error thrown if there was an error while reading the service configuration."""


class ServiceConfigurationError(ConfigurationError):
    """An option of the service configuration file is missing or invalid."""


class KeystoreError(ConfigurationError):
    """The configured keystore could not be read or decrypted."""
