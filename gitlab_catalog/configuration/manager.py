import os
import shutil

import yaml
from imagination.decorator import service, EnvironmentVariable
from pydantic import ValidationError

from gitlab_catalog.common.logger import get_logger
from gitlab_catalog.configuration.exceptions import InvalidExistingConfigurationError, UnsupportedModelVersionError
from gitlab_catalog.configuration.models import Configuration
from gitlab_catalog.constants import LOCAL_STORAGE_DIRECTORY


@service.registered(
    params=[
        EnvironmentVariable('GITLAB_CATALOG_CONFIG_FILE',
                            default=os.path.join(LOCAL_STORAGE_DIRECTORY, 'config.yaml'),
                            allow_default=True)
    ]
)
class ConfigurationManager:
    def __init__(self, file_path: str):
        self.__logger = get_logger(f'{type(self).__name__}')
        self.__file_path = file_path
        self.__swap_file_path = f'{self.__file_path}.swp'

    @property
    def file_path(self) -> str:
        return self.__file_path

    def load_raw(self) -> str:
        """ Load the raw configuration content """
        if not os.path.exists(self.__file_path):
            return ''
        with open(self.__file_path, 'r') as f:
            return f.read()

    def load(self) -> Configuration:
        """ Load the configuration object """
        self.__logger.debug(f'Reading the configuration from {self.__file_path}...')
        raw_config = self.load_raw()
        if not raw_config.strip():
            return Configuration()
        try:
            config = Configuration(**(yaml.load(raw_config, Loader=yaml.SafeLoader) or dict()))
        except (ValidationError, TypeError, yaml.YAMLError) as e:
            raise InvalidExistingConfigurationError(
                f'The existing configuration file at {self.__file_path} is invalid.'
            ) from e

        if config.version != 1:
            raise UnsupportedModelVersionError(f'{type(config).__name__}/{config.version}')

        return config

    def save(self, configuration: Configuration):
        """ Save the configuration object

            The content is written to a swap file first, then copied over the actual file.
        """
        self.__logger.debug(f'Saving the configuration to {self.__file_path}...')

        host_count_map = dict()
        for integration in configuration.integrations.gitlab:
            host_count_map[integration.host] = host_count_map.get(integration.host, 0) + 1
        duplicate_hosts = sorted([host for host, count in host_count_map.items() if count > 1])
        assert len(duplicate_hosts) == 0, \
            f'Detected at least two GitLab integrations with the same host ({", ".join(duplicate_hosts)})'

        new_content = yaml.dump(configuration.model_dump(exclude_none=True), Dumper=yaml.SafeDumper)
        os.makedirs(os.path.dirname(os.path.abspath(self.__swap_file_path)), exist_ok=True)
        with open(self.__swap_file_path, 'w') as f:
            f.write(new_content)
        shutil.copyfile(self.__swap_file_path, self.__file_path)
        os.unlink(self.__swap_file_path)
