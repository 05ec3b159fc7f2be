"""Tests for the API key management script."""

import pytest

import manage_api_keys
from analytics_api.models.user import ApiKey, User
from analytics_api.services.auth_service import get_user_by_api_key


@pytest.fixture
def script_db(session_factory, monkeypatch):
    """Point the script at the in-memory database."""
    monkeypatch.setattr(manage_api_keys, 'SessionLocal', session_factory)
    return session_factory


def printed_key(output):
    for line in output.splitlines():
        if line.startswith('API Key:'):
            return line.split(':', 1)[1].strip()
    return None


class TestGenerate:
    """Tests for the generate command."""

    def test_creates_user_and_key(self, script_db, capsys):
        """Test a new user gets a working key, printed once."""
        assert manage_api_keys.main(['manage_api_keys.py', 'generate', 'erin', 'CI', 'runner']) == 0

        api_key = printed_key(capsys.readouterr().out)
        assert api_key

        with script_db() as db:
            user = get_user_by_api_key(db, api_key)
            assert user.username == 'erin'
            stored = db.query(ApiKey).filter(ApiKey.user_id == user.id).one()
            assert stored.name == 'CI runner'

    def test_reuses_existing_user(self, script_db, capsys):
        """Test a second key for the same user does not duplicate the user."""
        manage_api_keys.main(['manage_api_keys.py', 'generate', 'erin'])
        manage_api_keys.main(['manage_api_keys.py', 'generate', 'erin'])

        with script_db() as db:
            assert db.query(User).filter(User.username == 'erin').count() == 1
            assert db.query(ApiKey).count() == 2

    def test_requires_username(self, script_db, capsys):
        """Test generate without a username fails."""
        assert manage_api_keys.main(['manage_api_keys.py', 'generate']) == 1
        assert 'Please provide a username' in capsys.readouterr().out


class TestList:
    """Tests for the list command."""

    def test_lists_without_secrets(self, script_db, capsys):
        """Test keys are listed by user and name, never the secret."""
        manage_api_keys.main(['manage_api_keys.py', 'generate', 'erin', 'CI'])
        api_key = printed_key(capsys.readouterr().out)

        assert manage_api_keys.main(['manage_api_keys.py', 'list']) == 0

        output = capsys.readouterr().out
        assert 'erin' in output
        assert 'CI' in output
        assert api_key not in output

    def test_empty(self, script_db, capsys):
        """Test listing with no keys."""
        manage_api_keys.main(['manage_api_keys.py', 'list'])

        assert 'No API keys found.' in capsys.readouterr().out


class TestUsage:
    """Tests for usage errors."""

    def test_no_command(self, capsys):
        """Test usage is printed without a command."""
        assert manage_api_keys.main(['manage_api_keys.py']) == 1
        assert 'Usage' in capsys.readouterr().out

    def test_unknown_command(self, script_db, capsys):
        """Test unknown commands are rejected."""
        assert manage_api_keys.main(['manage_api_keys.py', 'rotate']) == 1
        assert 'Unknown command' in capsys.readouterr().out
