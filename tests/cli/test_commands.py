import json
import os
import tempfile
from unittest import TestCase
from unittest.mock import MagicMock, patch

import yaml
from click.testing import CliRunner
from imagination import container

from gitlab_catalog.__main__ import gitlab_catalog as cli_app
from gitlab_catalog.cli.helpers.client_factory import ConfigurationBasedClientFactory
from gitlab_catalog.client.factory import IntegrationRegistry
from gitlab_catalog.configuration.manager import ConfigurationManager
from tests.exam_helper import BaseTestCase, make_page, make_response


class TestListingCommands(BaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.runner = CliRunner()
        self.client_patcher = patch('gitlab_catalog.cli.commands._get_client', return_value=self.client)
        self.client_patcher.start()

    def tearDown(self) -> None:
        self.client_patcher.stop()

    def test_projects_as_json(self):
        self.respond_with(make_page([dict(id=1, name='api')], next_page=2),
                          make_page([dict(id=2, name='cli')]))

        result = self.runner.invoke(cli_app, ['projects', 'https://gitlab.com/acme'])

        self.assertEqual(0, result.exit_code, result.output)
        self.assertEqual([dict(id=1, name='api'), dict(id=2, name='cli')], json.loads(result.stdout))

    def test_projects_with_limit(self):
        self.respond_with(make_page([dict(id=1), dict(id=2)], next_page=2),
                          make_page([dict(id=3)]))

        result = self.runner.invoke(cli_app, ['projects', 'https://gitlab.com/acme', '--limit', '2'])

        self.assertEqual(0, result.exit_code, result.output)
        self.assertEqual([1, 2], [p['id'] for p in json.loads(result.stdout)])
        # The second page is never requested.
        self.assertEqual(1, self.session_mock.get.call_count)

    def test_groups_as_yaml(self):
        self.respond_with(make_page([dict(id=10, full_path='acme'), dict(id=11, full_path='acme/platform')]))

        result = self.runner.invoke(cli_app, ['groups', 'https://gitlab.com', '-o', 'yaml'])

        self.assertEqual(0, result.exit_code, result.output)
        self.assertEqual(['acme', 'acme/platform'], [g['full_path'] for g in yaml.safe_load(result.stdout)])

    def test_users_options(self):
        self.respond_with(make_page([]))

        result = self.runner.invoke(cli_app, ['users', 'https://gitlab.com/acme', '--no-inherited', '--blocked'])

        self.assertEqual(0, result.exit_code, result.output)
        self.assertEqual([], json.loads(result.stdout))
        self.assertEqual(['https://gitlab.com/api/v4/groups/acme/members?per_page=100&blocked=true'],
                         self.requested_urls())

    def test_unsupported_operation(self):
        result = self.runner.invoke(cli_app, ['users', 'https://gitlab.example.com'])

        self.assertEqual(1, result.exit_code)
        self.assertIn('UnsupportedOperationError', result.output)
        self.session_mock.get.assert_not_called()

    def test_request_failure(self):
        self.respond_with(make_response(status_code=401, reason='Unauthorized'))

        result = self.runner.invoke(cli_app, ['projects', 'https://gitlab.com/acme'])

        self.assertEqual(1, result.exit_code)
        self.assertIn('RequestFailedError', result.output)
        self.assertIn('401', result.output)

    def test_request_failure_after_first_page(self):
        self.respond_with(make_page([dict(id=1, name='api')], next_page=2),
                          make_response(status_code=500, reason='Internal Server Error'))

        result = self.runner.invoke(cli_app, ['projects', 'https://gitlab.com/acme'])

        self.assertEqual(1, result.exit_code)
        self.assertIn('RequestFailedError', result.output)
        # The items printed before the failure form a complete JSON array.
        printed_items, _ = json.JSONDecoder().raw_decode(result.stdout)
        self.assertEqual([dict(id=1, name='api')], printed_items)


class TestConfigCommands(TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.manager = ConfigurationManager(os.path.join(self.temp_dir.name, 'config.yaml'))

        container_mock = MagicMock()
        container_mock.get.return_value = self.manager
        self.container_patcher = patch('gitlab_catalog.cli.config.container', container_mock)
        self.container_patcher.start()

    def tearDown(self) -> None:
        self.container_patcher.stop()
        self.temp_dir.cleanup()

    def test_add_list_and_remove(self):
        result = self.runner.invoke(cli_app, ['config', 'integrations', 'add', 'gitlab.example.com',
                                              '--token', 'secret'])
        self.assertEqual(0, result.exit_code, result.output)
        self.assertIn('https://gitlab.example.com/api/v4', result.stdout)

        integrations = self.manager.load().integrations.gitlab
        self.assertEqual(['gitlab.example.com'], [i.host for i in integrations])
        self.assertEqual('secret', integrations[0].token)

        result = self.runner.invoke(cli_app, ['config', 'integrations', 'list'])
        self.assertEqual(0, result.exit_code, result.output)
        listed = yaml.safe_load(result.stdout)
        self.assertEqual('gitlab.example.com', listed[0]['host'])
        self.assertNotIn('secret', result.stdout)

        result = self.runner.invoke(cli_app, ['config', 'integrations', 'remove', 'gitlab.example.com'])
        self.assertEqual(0, result.exit_code, result.output)
        self.assertEqual([], self.manager.load().integrations.gitlab)

    def test_add_replaces_existing_host(self):
        self.runner.invoke(cli_app, ['config', 'integrations', 'add', 'gitlab.com', '--token', 'old'])
        self.runner.invoke(cli_app, ['config', 'integrations', 'add', 'gitlab.com', '--token', 'new'])

        integrations = self.manager.load().integrations.gitlab
        self.assertEqual(1, len(integrations))
        self.assertEqual('new', integrations[0].token)

    def test_remove_unknown_host(self):
        result = self.runner.invoke(cli_app, ['config', 'integrations', 'remove', 'gitlab.com'])

        self.assertEqual(1, result.exit_code)
        self.assertIn('No GitLab integration for gitlab.com', result.output)


class TestServiceContainer(TestCase):
    def test_client_factory(self):
        factory: ConfigurationBasedClientFactory = container.get(ConfigurationBasedClientFactory)

        self.assertIsInstance(factory.get_registry(), IntegrationRegistry)
