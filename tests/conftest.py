import os, sys, pytest
# Ensure project root is on path so 'sortable_link' can be imported without installing
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from flask import Flask
from sortable_link import SortableLink
from sortable_link.config.sortablelink import SortableLinkConfig
from sortable_link.utils.query import QueryContext


def create_test_app(config=None, env_file=None):
    app = Flask(__name__)
    app.config['TESTING'] = True
    if config:
        # allow tests to override default config values
        app.config.update(config)
    SortableLink(app, env_file=env_file)
    return app


@pytest.fixture(scope='session', autouse=True)
def app_instance():
    yield create_test_app()


@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()


@pytest.fixture()
def make_app():
    """Fresh app per call so tests can vary SORTABLELINK_* options and routes."""
    def _make(env_file=None, **config):
        return create_test_app(config, env_file=env_file)
    return _make


@pytest.fixture()
def ctx():
    def _ctx(path='/items', **args):
        return QueryContext(path, args)
    return _ctx


@pytest.fixture()
def cfg():
    def _cfg(**options):
        return SortableLinkConfig.from_mapping(options)
    return _cfg
