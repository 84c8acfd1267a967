import os
import tempfile

# The CLI resolves the configuration manager through the service container. Make sure that the tests never touch the
# configuration file of the current user.
_temp_dir = tempfile.mkdtemp(prefix='gitlab-catalog-test-')
os.environ['GITLAB_CATALOG_CONFIG_FILE'] = os.path.join(_temp_dir, 'config.yaml')
