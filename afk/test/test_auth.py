"""Tests for finding the Slack API token."""

import pytest

from afk import auth, exceptions


# pylint: disable=redefined-outer-name


@pytest.fixture
def token_path(tmp_path):
    return str(tmp_path / '.afk-slack.yml')


def write_token_file(path, text):
    with open(path, 'w') as f:
        f.write(text)


def test_token_from_environment(token_path):
    write_token_file(token_path, 'token: from-file\n')
    environ = {auth.TOKEN_ENV_VAR: 'from-env'}
    assert auth.get_token(environ, token_path) == 'from-env'


def test_token_from_file(token_path):
    write_token_file(token_path, '# afk\nuser: jane\ntoken:  xoxp-1234 \n')
    assert auth.get_token({}, token_path) == 'xoxp-1234'


def test_empty_environment_variable_uses_file(token_path):
    write_token_file(token_path, 'token: from-file\n')
    environ = {auth.TOKEN_ENV_VAR: ''}
    assert auth.get_token(environ, token_path) == 'from-file'


def test_missing_file(token_path):
    with pytest.raises(exceptions.ConfigError) as excinfo:
        auth.get_token({}, token_path)
    message = str(excinfo.value)
    assert auth.TOKEN_ENV_VAR in message
    assert token_path in message


@pytest.mark.parametrize('text', [
    '',
    'user: jane\n',
    'token:\n',
    'tokens: xoxp-1234\n',
])
def test_file_without_token(token_path, text):
    write_token_file(token_path, text)
    assert auth.TokenFile(token_path).get() is None
    with pytest.raises(exceptions.ConfigError):
        auth.get_token({}, token_path)


def test_unreadable_file(tmp_path):
    # A directory can't be opened as a file.
    with pytest.raises(exceptions.ConfigError):
        auth.TokenFile(str(tmp_path)).get()
