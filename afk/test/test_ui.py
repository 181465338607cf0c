"""Tests for the command line interface."""

import asyncio
import datetime
import io

import pytest

import afk
import afk.ui.__main__ as ui_main
from afk.ui import utils

from helpers import coroutine_test


EXPIRATION = datetime.datetime(2020, 3, 14, 12, 0,
                               tzinfo=datetime.timezone.utc)
ORIGINAL_STATUS = afk.Status('', '', None)


# pylint: disable=redefined-outer-name


class FakeClient:

    def __init__(self):
        self.calls = []
        self.closed = False

    async def get_status(self):
        self.calls.append('get_status')
        return ORIGINAL_STATUS

    async def set_status(self, new_status):
        self.calls.append('set_status')
        return new_status

    async def set_snooze(self, minutes):
        self.calls.append('set_snooze')

    async def end_snooze(self):
        self.calls.append('end_snooze')

    async def close(self):
        self.closed = True


class InterruptingInputListener:
    """Input listener that raises KeyboardInterrupt, as Ctrl-C would."""

    def __init__(self, stream=None):
        pass

    def start(self, deliver):
        def interrupt():
            raise KeyboardInterrupt
        asyncio.get_event_loop().call_soon(interrupt)


@pytest.fixture
def cli_args(tmp_path):
    """Arguments that keep the CLI away from the user's files."""
    return [
        '--log', str(tmp_path / 'afk.log'),
        '--token-path', str(tmp_path / '.afk-slack.yml'),
    ]


def test_format_status():
    now = EXPIRATION - datetime.timedelta(hours=2, minutes=30)
    text = utils.format_status(afk.Status(':salad:', 'Lunch!', EXPIRATION),
                               time_format='%Y', now=now)
    assert text == (
        'Emoji: :salad:\nText: Lunch!\nExpires: 2020 (2 hours from now)'
    )


def test_format_status_empty():
    assert utils.format_status(ORIGINAL_STATUS) == (
        'Emoji: <none>\nText: <none>\nExpires: <none>'
    )


def test_format_heading():
    assert utils.format_heading('New Status') == '=== New Status ==='


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        ui_main.main(['--version'])
    assert excinfo.value.code == 0
    assert 'afk {}'.format(afk.__version__) in capsys.readouterr().out


def test_defaults(cli_args):
    args = ui_main.get_parser().parse_args(cli_args)
    assert args.message == ui_main.DEFAULT_MESSAGE
    assert args.emoji == ui_main.DEFAULT_EMOJI
    assert args.duration == datetime.timedelta(hours=1)
    assert not args.dnd


def test_status_options(cli_args):
    args = ui_main.get_parser().parse_args(cli_args + [
        '--message', 'Lunch!', '--emoji', ':salad:', '--duration', '1h30m',
        '--dnd',
    ])
    assert args.message == 'Lunch!'
    assert args.emoji == ':salad:'
    assert args.duration == datetime.timedelta(hours=1, minutes=30)
    assert args.dnd


def test_config_file(tmp_path, cli_args):
    config_path = tmp_path / 'afk.conf'
    config_path.write_text('emoji = :coffee:\nduration = 15m\n')
    args = ui_main.get_parser().parse_args(
        cli_args + ['--config', str(config_path)]
    )
    assert args.emoji == ':coffee:'
    assert args.duration == datetime.timedelta(minutes=15)


def test_invalid_duration(cli_args):
    with pytest.raises(SystemExit) as excinfo:
        ui_main.get_parser().parse_args(cli_args + ['--duration', 'soon'])
    assert excinfo.value.code == 2


def test_duration_too_long(cli_args):
    with pytest.raises(SystemExit) as excinfo:
        ui_main.get_parser().parse_args(
            cli_args + ['--duration', '99999999999h']
        )
    assert excinfo.value.code == 2


def test_missing_token_exits(monkeypatch, cli_args):
    monkeypatch.delenv(afk.auth.TOKEN_ENV_VAR, raising=False)
    with pytest.raises(SystemExit) as excinfo:
        ui_main.main(cli_args)
    assert 'Could not find a Slack API token' in str(excinfo.value.code)


def test_run_session_keep(capsys):
    @coroutine_test
    async def run():
        client = FakeClient()
        config = afk.SessionConfig(':salad:', 'Lunch!',
                                   datetime.timedelta(hours=1), True)
        listener = afk.TerminalInputListener(io.StringIO('e\n'))
        outcome = await ui_main.run_session(client, config,
                                            input_listener=listener)
        assert outcome == afk.Outcome.KEEP_NEW_STATUS
        assert client.calls == ['get_status', 'set_status', 'set_snooze']
        assert client.closed
        out = capsys.readouterr().out
        assert '=== Current Status ===\nEmoji: <none>' in out
        assert '=== New Status ===\nEmoji: :salad:\nText: Lunch!' in out
        assert 'Do Not Disturb is on for 1 hour' in out
        assert 'Keeping new status' in out
    run()


def test_run_session_resume(capsys):
    @coroutine_test
    async def run():
        client = FakeClient()
        config = afk.SessionConfig(':salad:', 'Lunch!', datetime.timedelta(0),
                                   False)
        # Input never arrives, so the deadline decides.
        listener = afk.TerminalInputListener(io.StringIO(''))
        outcome = await ui_main.run_session(client, config,
                                            input_listener=listener)
        assert outcome == afk.Outcome.RESUME_ORIGINAL_STATUS
        assert client.calls == ['get_status', 'set_status', 'set_status']
        assert '=== Restored Status ===' in capsys.readouterr().out
    run()


@coroutine_test
async def test_run_session_user_error():
    client = FakeClient()
    config = afk.SessionConfig(':salad:', 'Lunch!',
                               datetime.timedelta(hours=1), False)
    listener = afk.TerminalInputListener(io.StringIO('what\n'))
    with pytest.raises(afk.UserInputError):
        await ui_main.run_session(client, config, input_listener=listener)
    assert client.calls == ['get_status', 'set_status']
    assert client.closed


def test_main_user_error_exits_nonzero(monkeypatch, cli_args):
    monkeypatch.setenv(afk.auth.TOKEN_ENV_VAR, 'xoxp-1234')
    monkeypatch.setattr(afk, 'Client', lambda token, base_url: FakeClient())
    monkeypatch.setattr('sys.stdin', io.StringIO('nope\n'))
    with pytest.raises(SystemExit) as excinfo:
        ui_main.main(cli_args)
    assert excinfo.value.code != 0
    assert 'nope' in str(excinfo.value.code)


def test_main_keep_exits_normally(monkeypatch, cli_args):
    monkeypatch.setenv(afk.auth.TOKEN_ENV_VAR, 'xoxp-1234')
    monkeypatch.setattr(afk, 'Client', lambda token, base_url: FakeClient())
    monkeypatch.setattr('sys.stdin', io.StringIO('e\n'))
    ui_main.main(cli_args)


def test_main_interrupt_closes_client(monkeypatch, cli_args):
    client = FakeClient()
    monkeypatch.setenv(afk.auth.TOKEN_ENV_VAR, 'xoxp-1234')
    monkeypatch.setattr(afk, 'Client', lambda token, base_url: client)
    monkeypatch.setattr(afk.producers, 'TerminalInputListener',
                        InterruptingInputListener)
    with pytest.raises(SystemExit) as excinfo:
        ui_main.main(cli_args)
    assert 'KeyboardInterrupt' in str(excinfo.value.code)
    assert client.calls == ['get_status', 'set_status']
    assert client.closed
