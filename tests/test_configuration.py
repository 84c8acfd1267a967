import os
import tempfile
from unittest import TestCase

import yaml

from gitlab_catalog.configuration.exceptions import InvalidExistingConfigurationError, UnsupportedModelVersionError
from gitlab_catalog.configuration.manager import ConfigurationManager
from gitlab_catalog.configuration.models import GitLabIntegrationConfig, get_gitlab_request_options


class TestGitLabIntegrationConfig(TestCase):
    def test_default_urls(self):
        config = GitLabIntegrationConfig(host='gitlab.com')

        self.assertEqual('https://gitlab.com', config.base_url)
        self.assertEqual('https://gitlab.com/api/v4', config.api_base_url)

    def test_api_base_url_follows_base_url(self):
        config = GitLabIntegrationConfig(host='example.org', base_url='https://example.org/gitlab/')

        self.assertEqual('https://example.org/gitlab', config.base_url)
        self.assertEqual('https://example.org/gitlab/api/v4', config.api_base_url)

    def test_explicit_api_base_url(self):
        config = GitLabIntegrationConfig(host='example.org', api_base_url='https://api.example.org/v4/')

        self.assertEqual('https://api.example.org/v4', config.api_base_url)

    def test_host_in_lower_case(self):
        config = GitLabIntegrationConfig(host=' GitLab.Example.com ')

        self.assertEqual('gitlab.example.com', config.host)
        self.assertEqual('https://gitlab.example.com/api/v4', config.api_base_url)

    def test_request_options(self):
        self.assertEqual(dict(headers={'PRIVATE-TOKEN': 'secret'}),
                         get_gitlab_request_options(GitLabIntegrationConfig(token='secret')))
        self.assertEqual(dict(headers=dict()), get_gitlab_request_options(GitLabIntegrationConfig()))


class TestConfigurationManager(TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.file_path = os.path.join(self.temp_dir.name, 'nested', 'config.yaml')
        self.manager = ConfigurationManager(self.file_path)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def _write(self, content: str):
        os.makedirs(os.path.dirname(self.file_path), exist_ok=True)
        with open(self.file_path, 'w') as f:
            f.write(content)

    def test_missing_file(self):
        self.assertEqual([], self.manager.load().integrations.gitlab)

    def test_save_and_load(self):
        config = self.manager.load()
        config.integrations.gitlab.append(GitLabIntegrationConfig(host='gitlab.example.com', token='secret'))

        self.manager.save(config)

        self.assertTrue(os.path.exists(self.file_path))
        self.assertFalse(os.path.exists(f'{self.file_path}.swp'))

        with open(self.file_path) as f:
            self.assertEqual(['integrations', 'version'], sorted(yaml.safe_load(f).keys()))

        reloaded = ConfigurationManager(self.file_path).load()
        self.assertEqual('gitlab.example.com', reloaded.integrations.gitlab[0].host)
        self.assertEqual('secret', reloaded.integrations.gitlab[0].token)
        self.assertEqual('https://gitlab.example.com/api/v4', reloaded.integrations.gitlab[0].api_base_url)

    def test_load_handwritten_file(self):
        self._write('\n'.join([
            'integrations:',
            '  gitlab:',
            '    - host: gitlab.com',
            '      token: abc',
            '    - host: example.org',
            '      base_url: https://example.org/gitlab',
        ]))

        integrations = self.manager.load().integrations.gitlab

        self.assertEqual(['gitlab.com', 'example.org'], [i.host for i in integrations])
        self.assertEqual('https://example.org/gitlab/api/v4', integrations[1].api_base_url)

    def test_duplicate_hosts(self):
        config = self.manager.load()
        config.integrations.gitlab.extend([GitLabIntegrationConfig(host='gitlab.com'),
                                           GitLabIntegrationConfig(host='gitlab.com')])

        with self.assertRaises(AssertionError):
            self.manager.save(config)

    def test_invalid_file(self):
        self._write('integrations:\n  gitlab: 123\n')

        with self.assertRaises(InvalidExistingConfigurationError):
            self.manager.load()

    def test_unsupported_version(self):
        self._write('version: 9\n')

        with self.assertRaises(UnsupportedModelVersionError):
            self.manager.load()
