import os
import tempfile

import pytest

os.environ.setdefault('APP_SECRET_KEY', 'test-secret-key')
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='distribusi-logs-'))
os.environ['USE_REDIS'] = '0'

from factory import create_app  # noqa: E402


@pytest.fixture
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'DATABASE_URL': f"sqlite:///{tmp_path / 'distribusi_test.db'}",
        'USE_REDIS': False,
    })
    yield app
    app.db_manager.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(user_code, roles):
        with client.session_transaction() as sess:
            sess['logged_in'] = True
            sess['user_code'] = user_code
            sess['user_roles'] = list(roles)
        return client
    return _login
