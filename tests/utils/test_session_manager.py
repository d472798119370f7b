"""Tests for SessionManager."""
import json
import stat
import pytest

from deep_todo.utils.session_manager import SessionManager


@pytest.fixture
def session(tmp_path):
    return SessionManager(tmp_path / "data")


class TestSessionManager:
    """Test cases for SessionManager."""

    def test_no_token_initially(self, session):
        """Test a fresh session is logged out."""
        assert session.get_token() is None
        assert not session.is_authenticated

    def test_set_and_get_token(self, session):
        """Test storing a token."""
        session.set_token("  abc123 \n")

        assert session.get_token() == "abc123"
        assert session.is_authenticated
        assert json.loads(session.session_file.read_text()) == {"token": "abc123"}

    def test_token_file_private(self, session):
        """Test that only the owner can read the token file."""
        session.set_token("abc123")
        mode = stat.S_IMODE(session.session_file.stat().st_mode)
        assert mode == 0o600

    def test_token_survives_new_manager(self, session):
        """Test that the token persists across runs."""
        session.set_token("abc123")
        assert SessionManager(session.data_dir).get_token() == "abc123"

    def test_set_empty_token(self, session):
        """Test that blank tokens are rejected."""
        with pytest.raises(ValueError):
            session.set_token("   ")
        assert not session.session_file.exists()

    def test_clear(self, session):
        """Test logging out, twice."""
        session.set_token("abc123")
        session.clear()
        session.clear()
        assert session.get_token() is None

    @pytest.mark.parametrize("content", ["{broken", "[]", '{"token": ""}', '{"token": 5}'])
    def test_unusable_file(self, session, content):
        """Test that unusable session files count as logged out."""
        session.data_dir.mkdir(parents=True)
        session.session_file.write_text(content)
        assert session.get_token() is None
