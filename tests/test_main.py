import logging
from datetime import timedelta
from unittest.mock import patch

import pytest

from sslcertcheck import constants
from sslcertcheck.__main__ import LOGGERS, main, make_parser
from sslcertcheck.config import from_args, has_sources
from sslcertcheck.upgrade import UpgradeError

from .certs import make_certificate


@pytest.fixture(autouse=True)
def reset_loggers():
    yield
    for name in LOGGERS:
        logging.getLogger(name).handlers.clear()


def fake_fetch(domain, port, timeout):
    if domain.startswith('down.'):
        raise ConnectionRefusedError(111, 'Connection refused')
    if domain.startswith('expiring.'):
        return make_certificate(subject_cn=domain, expires_in=timedelta(days=-1))
    return make_certificate(subject_cn=domain, expires_in=timedelta(days=36500))


class TestConfig:

    def test_defaults(self):
        config = from_args(make_parser().parse_args(['example.com']))
        assert config.domain == 'example.com'
        assert config.expires == 30
        assert config.mode is constants.ReportMode.table
        assert config.port == 443
        assert config.timeout is None
        assert config.verbosity is constants.LogLevel.warn
        assert has_sources(config)

    def test_modes(self):
        parser = make_parser()
        assert from_args(parser.parse_args(['-r'])).mode is constants.ReportMode.renew
        assert from_args(parser.parse_args(['-p'])).mode is constants.ReportMode.problems
        config = from_args(parser.parse_args(['-c', 'renew.sh']))
        assert config.mode is constants.ReportMode.command
        assert config.command == 'renew.sh'

    def test_mode_precedence(self):
        parser = make_parser()
        assert from_args(parser.parse_args(['-p', '-r'])).mode is constants.ReportMode.renew
        config = from_args(parser.parse_args(['-r', '-p', '-c', 'renew.sh']))
        assert config.mode is constants.ReportMode.command

    def test_debug_overrides_verbosity(self):
        config = from_args(make_parser().parse_args(['-d', '-v', 'error']))
        assert config.verbosity is constants.LogLevel.debug

    def test_no_sources(self):
        assert not has_sources(from_args(make_parser().parse_args(['-e', '10'])))

    def test_config_is_immutable(self):
        config = from_args(make_parser().parse_args([]))
        with pytest.raises(AttributeError):
            config.expires = 10


class TestMain:

    def test_help_without_sources(self, capsys):
        main([])
        assert 'usage:' in capsys.readouterr().out

    def test_unknown_flag(self):
        with pytest.raises(SystemExit) as exc_info:
            main(['-x'])
        assert exc_info.value.code != 0

    @patch('sslcertcheck.scanner.fetch_certificate', side_effect=fake_fetch)
    def test_renew_wins_over_problems(self, mock_fetch, capsys):
        main(['-r', '-p', 'expiring.example.com'])
        assert capsys.readouterr().out == 'expiring.example.com\n'

    @patch('sslcertcheck.report.subprocess.call', return_value=0)
    @patch('sslcertcheck.scanner.fetch_certificate', side_effect=fake_fetch)
    def test_command_wins_over_renew(self, mock_fetch, mock_call, capsys):
        main(['-r', '-c', 'renew-cert', 'expiring.example.com'])
        mock_call.assert_called_once_with(['renew-cert', 'expiring.example.com'])
        assert capsys.readouterr().out == ''

    def test_negative_expires(self):
        with pytest.raises(SystemExit) as exc_info:
            main(['-e', '-5', 'example.com'])
        assert exc_info.value.code != 0

    def test_unknown_server_type(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(['-s', 'plesk'])
        assert exc_info.value.code == 1
        assert 'unknown server type' in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(['-f', str(tmp_path / 'missing.txt')])
        assert exc_info.value.code == 1

    @patch('sslcertcheck.scanner.fetch_certificate', side_effect=fake_fetch)
    def test_default_table(self, mock_fetch, capsys):
        main(['ok.test'])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith('Domain')
        assert lines[1].split()[:2] == ['ok.test', 'ok.test']

    @patch('sslcertcheck.scanner.fetch_certificate', side_effect=fake_fetch)
    def test_renewal_list(self, mock_fetch, capsys, tmp_path):
        path = tmp_path / 'domains.txt'
        path.write_text('expiring.b.test\nok.test\n\ndown.test\nexpiring.a.test\n')
        main(['-r', '-f', str(path)])
        assert capsys.readouterr().out == 'expiring.b.test\nexpiring.a.test\n'

    @patch('sslcertcheck.scanner.fetch_certificate', side_effect=fake_fetch)
    def test_problems_list(self, mock_fetch, capsys, tmp_path):
        path = tmp_path / 'domains.txt'
        path.write_text('ok.test\ndown.test\n')
        main(['-p', '-f', str(path)])
        out = capsys.readouterr().out.splitlines()
        assert len(out) == 2
        assert out[1].startswith('down.test')
        assert out[1].endswith('no certificate found')

    @patch('sslcertcheck.scanner.fetch_certificate', side_effect=fake_fetch)
    def test_problems_list_empty(self, mock_fetch, capsys):
        main(['-p', 'ok.test'])
        assert capsys.readouterr().out == ''

    @patch('sslcertcheck.report.subprocess.call', return_value=0)
    @patch('sslcertcheck.scanner.fetch_certificate', side_effect=fake_fetch)
    def test_command_mode(self, mock_fetch, mock_call, tmp_path):
        for name in ('expiring.example.com', 'ok.example.com'):
            (tmp_path / name).mkdir()
        main(['-c', 'renew-cert', '-l', str(tmp_path)])
        mock_call.assert_called_once_with(['renew-cert', 'expiring.example.com'])

    @patch('sslcertcheck.__main__.check_upgrade')
    def test_upgrade_only(self, mock_check, capsys):
        main(['-u'])
        mock_check.assert_called_once_with(url=constants.VERSION_URL)
        assert 'usage:' not in capsys.readouterr().out

    @patch('sslcertcheck.__main__.check_upgrade')
    def test_upgrade_url(self, mock_check):
        main(['-u', '--upgrade-url', 'https://releases.example.org/sslcertcheck.json'])
        mock_check.assert_called_once_with(url='https://releases.example.org/sslcertcheck.json')

    @patch('sslcertcheck.__main__.check_upgrade', side_effect=UpgradeError('offline'))
    def test_upgrade_failure(self, mock_check):
        with pytest.raises(SystemExit) as exc_info:
            main(['-u'])
        assert exc_info.value.code == 1
