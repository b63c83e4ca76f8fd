import pytest
import typer

from cosmos2xlsx.commands.logs import show_logs, log_info


def test_show_logs_no_log_file(mocker):
    log_path = mocker.Mock()
    log_path.exists.return_value = False
    mocker.patch("cosmos2xlsx.commands.logs.get_log_file_path", return_value=log_path)
    warning = mocker.patch("cosmos2xlsx.commands.logs.warning")

    show_logs(lines=10, follow=False, level=None)

    warning.assert_called_once()


def test_show_logs_with_lines(mocker, tmp_path):
    log_file = tmp_path / "cosmos2xlsx.log"
    log_file.write_text("INFO one\nERROR two\nDEBUG three\n", encoding="utf-8")
    mocker.patch("cosmos2xlsx.commands.logs.get_log_file_path", return_value=log_file)
    syntax = mocker.patch("cosmos2xlsx.commands.logs.Syntax")
    console = mocker.patch("cosmos2xlsx.commands.logs.console")

    show_logs(lines=2, follow=False, level=None)

    console.print.assert_called_once()
    assert syntax.call_args[0][0] == "ERROR two\nDEBUG three\n"


def test_show_logs_with_level_filter(mocker, tmp_path):
    log_file = tmp_path / "cosmos2xlsx.log"
    log_file.write_text("INFO one\nERROR two\nERROR three\n", encoding="utf-8")
    mocker.patch("cosmos2xlsx.commands.logs.get_log_file_path", return_value=log_file)
    syntax = mocker.patch("cosmos2xlsx.commands.logs.Syntax")
    mocker.patch("cosmos2xlsx.commands.logs.console")

    show_logs(lines=10, follow=False, level="error")

    assert syntax.call_args[0][0] == "ERROR two\nERROR three\n"


def test_show_logs_no_matching_lines(mocker, tmp_path):
    log_file = tmp_path / "cosmos2xlsx.log"
    log_file.write_text("INFO one\nDEBUG two\n", encoding="utf-8")
    mocker.patch("cosmos2xlsx.commands.logs.get_log_file_path", return_value=log_file)
    info = mocker.patch("cosmos2xlsx.commands.logs.info")

    show_logs(lines=10, follow=False, level="ERROR")

    info.assert_called_once()


def test_show_logs_os_error(mocker):
    mocker.patch(
        "cosmos2xlsx.commands.logs.get_log_file_path",
        side_effect=OSError("boom"),
    )
    error = mocker.patch("cosmos2xlsx.commands.logs.error")

    with pytest.raises(typer.Exit):
        show_logs(lines=10, follow=False, level=None)

    error.assert_called_once()


def test_log_info_prints_table(mocker, tmp_path):
    log_file = tmp_path / "cosmos2xlsx.log"
    log_file.write_text("x", encoding="utf-8")
    mocker.patch("cosmos2xlsx.commands.logs.get_log_file_path", return_value=log_file)
    mocker.patch("cosmos2xlsx.commands.logs.get_log_directory", return_value=tmp_path)
    console = mocker.patch("cosmos2xlsx.commands.logs.console")

    log_info()

    console.print.assert_called_once()
