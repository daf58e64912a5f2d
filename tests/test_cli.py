import glob
import os
import sys

import pytest

from gitstat.cli import _build_parser, main, positive_int
from gitstat.logging import remove_all_handlers


@pytest.fixture(autouse=True)
def clean_handlers():
    yield
    remove_all_handlers()


class TestParser:
    def test_defaults(self):
        args = _build_parser().parse_args([])

        assert args.dir == "."
        assert args.batch == 5
        assert args.output_dir is None
        assert args.log_level == "INFO"
        assert args.log_file is None

    def test_log_level_is_case_insensitive(self):
        assert _build_parser().parse_args(["--log-level", "debug"]).log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["0", "-2", "three"])
    def test_batch_must_be_positive_int(self, value, capsys):
        with pytest.raises(SystemExit) as excinfo:
            _build_parser().parse_args(["--batch", value])

        assert excinfo.value.code == 2
        assert "--batch" in capsys.readouterr().err

    def test_positive_int(self):
        assert positive_int("12") == 12


class TestMain:
    def test_scan_writes_reports_into_base_dir(self, scenario_repos):
        assert main(["--dir", str(scenario_repos), "--batch", "1"]) == 0

        (detail,) = glob.glob(os.path.join(str(scenario_repos), "commit_info_*.csv"))
        (daily,) = glob.glob(os.path.join(str(scenario_repos), "commit_summary_*.csv"))
        (yearly,) = glob.glob(os.path.join(str(scenario_repos), "yearly_summary_*.csv"))

        with open(daily) as f:
            assert f.read().splitlines() == ["Date,CommitCount", "2024-01-01,3", "2024-01-02,1"]
        with open(yearly) as f:
            assert f.read().splitlines() == ["Year,CommitCount", "2024,4"]
        with open(detail) as f:
            assert len(f.read().splitlines()) == 4

    def test_output_dir_and_log_file(self, scenario_repos, tmp_path):
        out = tmp_path / "out"
        out.mkdir()
        log_file = tmp_path / "scan.log"

        assert main(["--dir", str(scenario_repos), "--output-dir", str(out), "--log-file", str(log_file)]) == 0

        assert len(os.listdir(out)) == 3
        assert "Scan completed successfully" in log_file.read_text()

    def test_invalid_repository_does_not_change_exit_status(self, scenario_repos, tmp_path):
        broken = scenario_repos / "broken.git"
        broken.mkdir()
        (broken / "config").write_text("")
        (broken / "HEAD").write_text("")
        out = tmp_path / "out"
        out.mkdir()

        assert main(["--dir", str(scenario_repos), "--output-dir", str(out)]) == 0
        (daily,) = glob.glob(os.path.join(str(out), "commit_summary_*.csv"))
        with open(daily) as f:
            assert f.read().splitlines() == ["Date,CommitCount", "2024-01-01,3", "2024-01-02,1"]

    def test_missing_base_dir_exits_non_zero(self, tmp_path):
        assert main(["--dir", str(tmp_path / "missing")]) == 1

    def test_unwritable_output_exits_non_zero(self, scenario_repos, tmp_path):
        assert main(["--dir", str(scenario_repos), "--output-dir", str(tmp_path / "missing")]) == 1

    def test_batch_zero_is_usage_error(self, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            main(["--dir", str(tmp_path), "--batch", "0"])
        assert excinfo.value.code == 2

    def test_unopenable_log_file_exits_non_zero(self, scenario_repos, tmp_path):
        log_file = tmp_path / "missing" / "scan.log"

        assert main(["--dir", str(scenario_repos), "--log-file", str(log_file)]) == 1
        assert glob.glob(os.path.join(str(scenario_repos), "commit_info_*.csv")) == []

    @pytest.mark.skipif(sys.platform == "win32", reason="the working directory cannot be removed on Windows")
    def test_deleted_working_directory_exits_non_zero(self, tmp_path, monkeypatch):
        gone = tmp_path / "gone"
        gone.mkdir()
        monkeypatch.chdir(gone)
        gone.rmdir()

        assert main(["--dir", "."]) == 1
