"""
Тесты для модуля main.py
"""

import logging
import os
import pytest
from datetime import datetime
from unittest.mock import Mock, patch

from prepend_filedate.main import (
    RenamerCLI,
    UsageError,
    USAGE,
    check_arguments,
    create_parser,
    main,
)
from prepend_filedate.logger import LOGGER_NAME
from prepend_filedate.renamer import DirectoryAccessError


@pytest.fixture(autouse=True)
def cleanup_handlers():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)


@pytest.fixture
def report_dir(tmp_path):
    """Каталог с файлом report.txt, измененным 2004-12-18."""
    report = tmp_path / "report.txt"
    report.write_text("report")
    ts = datetime(2004, 12, 18, 12, 0).timestamp()
    os.utime(report, (ts, ts))
    return tmp_path


class TestArguments:
    """Тесты разбора аргументов."""

    def test_check_arguments(self):
        assert check_arguments(["docs"]) == "docs"

    @pytest.mark.parametrize("start_dirs", [[], ["a", "b"], ["a", "b", "c"]])
    def test_wrong_argument_count(self, start_dirs):
        with pytest.raises(UsageError) as exc_info:
            check_arguments(start_dirs)

        assert str(exc_info.value) == USAGE

    def test_parser_options(self):
        args = create_parser().parse_args(["-c", "settings.ini", "-v", "docs"])

        assert args.start_dirs == ["docs"]
        assert args.config == "settings.ini"
        assert args.verbose is True

    def test_parser_defaults(self):
        args = create_parser().parse_args([])

        assert args.start_dirs == []
        assert args.config is None
        assert args.verbose is False

    def test_parser_error_raises_usage(self):
        with pytest.raises(UsageError) as exc_info:
            create_parser().parse_args(["--config"])

        assert str(exc_info.value) == USAGE


class TestMain:
    """Сквозные тесты CLI."""

    def test_rename_report(self, report_dir, capsys):
        exit_code = main([str(report_dir)])

        captured = capsys.readouterr()
        assert exit_code == 0
        assert captured.out == f" rename {report_dir / 'report.txt'} => 20041218_report.txt\n"
        assert (report_dir / "20041218_report.txt").exists()
        assert not (report_dir / "report.txt").exists()

    def test_empty_directory(self, tmp_path, capsys):
        exit_code = main([str(tmp_path)])

        assert exit_code == 0
        assert capsys.readouterr().out == ""

    @pytest.mark.parametrize("argv", [[], ["first", "second"]])
    def test_usage(self, argv, capsys):
        with patch('prepend_filedate.main.RenamerCLI') as mock_cli:
            exit_code = main(argv)

        assert exit_code != 0
        assert capsys.readouterr().out == USAGE + "\n"
        mock_cli.assert_not_called()

    @pytest.mark.parametrize("extra", [["-x"], ["--unknown"], ["-foo", "bar"]])
    def test_usage_with_option_like_extra_argument(self, report_dir, extra, capsys):
        """Лишний аргумент, похожий на опцию, тоже приводит к выводу Usage."""
        exit_code = main([str(report_dir)] + extra)

        captured = capsys.readouterr()
        assert exit_code != 0
        assert captured.out == USAGE + "\n"
        assert captured.err == ""
        assert (report_dir / "report.txt").exists()

    def test_usage_when_option_value_missing(self, capsys):
        exit_code = main(["--config"])

        assert exit_code != 0
        assert capsys.readouterr().out == USAGE + "\n"

    def test_directory_name_starting_with_dash(self, tmp_path, monkeypatch, capsys):
        """Каталог с именем, начинающимся с "-", принимается как единственный аргумент."""
        dash_dir = tmp_path / "-data"
        dash_dir.mkdir()
        report = dash_dir / "report.txt"
        report.write_text("report")
        ts = datetime(2004, 12, 18, 12, 0).timestamp()
        os.utime(report, (ts, ts))
        monkeypatch.chdir(tmp_path)

        exit_code = main(["-data"])

        assert exit_code == 0
        assert capsys.readouterr().out == " rename -data/report.txt => 20041218_report.txt\n"
        assert (dash_dir / "20041218_report.txt").exists()

    def test_usage_does_not_touch_files(self, report_dir, capsys):
        exit_code = main([str(report_dir), str(report_dir)])

        assert exit_code == 1
        assert (report_dir / "report.txt").exists()

    def test_missing_directory(self, tmp_path, capsys):
        exit_code = main([str(tmp_path / "missing")])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "Каталог не найден" in captured.out

    def test_with_config_file(self, report_dir, tmp_path_factory, capsys):
        config_dir = tmp_path_factory.mktemp("config")
        log_file = config_dir / "renamer.log"
        config_path = config_dir / "settings.ini"
        config_path.write_text(f"[renamer]\ninclude_hidden = true\n\n[logging]\nlevel = DEBUG\nlog_file = {log_file}\n")
        hidden = report_dir / ".hidden"
        hidden.write_text("h")
        ts = datetime(2010, 5, 5, 12, 0).timestamp()
        os.utime(hidden, (ts, ts))

        exit_code = main(["--config", str(config_path), str(report_dir)])

        assert exit_code == 0
        assert sorted(p.name for p in report_dir.iterdir()) == ["20041218_report.txt", "20100505_.hidden"]
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()
        assert "Файл переименован" in log_file.read_text(encoding='utf-8')

    def test_missing_config_file(self, report_dir, tmp_path_factory, capsys):
        missing = tmp_path_factory.mktemp("config") / "missing.ini"

        exit_code = main(["--config", str(missing), str(report_dir)])

        assert exit_code == 1
        assert "Ошибка инициализации" in capsys.readouterr().out
        assert (report_dir / "report.txt").exists()

    def test_unexpected_error(self, report_dir, capsys):
        with patch.object(RenamerCLI, 'cmd_rename', side_effect=RuntimeError("boom")):
            exit_code = main([str(report_dir)])

        assert exit_code == 1
        assert "Неожиданная ошибка: boom" in capsys.readouterr().out

    def test_keyboard_interrupt(self, report_dir, capsys):
        with patch.object(RenamerCLI, 'cmd_rename', side_effect=KeyboardInterrupt):
            exit_code = main([str(report_dir)])

        assert exit_code == 1
        assert "прервана" in capsys.readouterr().out


class TestRenamerCLI:
    """Тесты для класса RenamerCLI."""

    def test_setup_defaults(self):
        cli = RenamerCLI()

        assert cli.setup() is True
        assert cli.config.logging.level == 'INFO'
        assert cli.renamer is not None

    def test_setup_verbose(self):
        cli = RenamerCLI()
        cli.setup(verbose=True)

        assert cli.config.logging.level == 'DEBUG'
        assert cli.logger.logger.level == logging.DEBUG

    @patch('prepend_filedate.main.load_config')
    def test_setup_failure(self, mock_load_config, capsys):
        mock_load_config.side_effect = ValueError("Config error")

        cli = RenamerCLI()
        result = cli.setup("broken.ini")

        assert result is False
        assert cli.renamer is None
        assert "Config error" in capsys.readouterr().out

    def test_cmd_rename_error(self, capsys):
        cli = RenamerCLI()
        cli.logger = Mock()
        cli.renamer = Mock()
        cli.renamer.apply_to_all.side_effect = DirectoryAccessError("Каталог не найден: x")

        assert cli.cmd_rename("x") == 1
        cli.logger.log_critical_error.assert_called_once()
        assert "Каталог не найден: x" in capsys.readouterr().out

    def test_cmd_rename_success(self):
        cli = RenamerCLI()
        cli.logger = Mock()
        cli.renamer = Mock()

        assert cli.cmd_rename("docs") == 0
        cli.renamer.apply_to_all.assert_called_once_with("docs")
