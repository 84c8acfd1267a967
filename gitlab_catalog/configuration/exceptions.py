class ConfigurationError(RuntimeError):
    """ General configuration error """


class InvalidExistingConfigurationError(ConfigurationError):
    """ Raised when the existing configuration file cannot be parsed """


class UnsupportedModelVersionError(ConfigurationError):
    """ Raised when the configuration file is written for an unknown model version """
