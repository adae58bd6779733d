"""Tests for the command line front end."""

import logging

import pytest

from cli import build_parser, main
from simconfig import SimulationConfig
from refstring import InvalidParameter

ARGS = ["-P", "50", "-e", "5", "-m", "20", "-t", "0.2", "--length", "2000", "--seed", "3"]


class TestSimulationConfig:
    """Configuration defaults and derived values."""

    def test_defaults(self) -> None:
        """Seven frames and a million references by default."""
        config = SimulationConfig()
        assert config.frame_count == 7
        assert config.length == 1_000_000

    def test_lookahead_from_window_and_dwell(self) -> None:
        """The Optimal horizon is e * m scaled by the factor."""
        assert SimulationConfig().lookahead_limit(10, 100) == 1000
        assert SimulationConfig(lookahead_factor=0.5).lookahead_limit(10, 100) == 500
        assert SimulationConfig(lookahead_factor=0.0).lookahead_limit(10, 100) == 0

    @pytest.mark.parametrize("kwargs", [{"frame_count": 0}, {"length": 0},
                                        {"lookahead_factor": -1.0}])
    def test_validate_rejects(self, kwargs) -> None:
        """Non-positive sizes and negative factors are rejected."""
        with pytest.raises(InvalidParameter):
            SimulationConfig(**kwargs).validate()


class TestMain:
    """End-to-end runs through main()."""

    def test_reports_four_policies(self, capsys) -> None:
        """The report lists every policy in order."""
        assert main(ARGS) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "Page faults:"
        names = [line.split(":")[0] for line in lines[1:5]]
        assert names == ["Optimal", "FIFO", "LRU", "Second Chance"]
        assert all(int(line.split(":")[1]) >= 0 for line in lines[1:5])

    def test_same_seed_same_report(self, capsys) -> None:
        """Seeded runs are reproducible."""
        main(ARGS)
        first = capsys.readouterr().out
        main(ARGS)
        assert capsys.readouterr().out == first

    def test_invalid_window_exit_status(self, capsys) -> None:
        """A window wider than the address space exits with status 1."""
        assert main(["-P", "5", "-e", "9", "-m", "2", "-t", "0.1", "--length", "10"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_zero_frames_exit_status(self, capsys) -> None:
        """Zero frames is rejected before generating anything."""
        assert main(ARGS + ["--frames", "0"]) == 1

    def test_missing_argument_usage(self, capsys) -> None:
        """Missing parameters print usage and exit with status 2."""
        with pytest.raises(SystemExit) as exc:
            main(["-P", "10", "-e", "3"])
        assert exc.value.code == 2
        assert "usage" in capsys.readouterr().err

    def test_unparsable_number(self) -> None:
        """Non-numeric parameters are a usage error."""
        with pytest.raises(SystemExit) as exc:
            main(["-P", "ten", "-e", "3", "-m", "2", "-t", "0.1"])
        assert exc.value.code == 2

    def test_sweep_table(self, capsys) -> None:
        """--sweep adds one row per frame count."""
        assert main(ARGS + ["--sweep", "3"]) == 0
        out = capsys.readouterr().out
        assert "Frames" in out
        rows = [line for line in out.splitlines() if line[:1].isdigit()]
        assert len(rows) == 3

    def test_save_and_replay_trace(self, tmp_path, capsys) -> None:
        """A saved trace replays to the same report."""
        path = tmp_path / "trace.npy"
        main(ARGS + ["--save-trace", str(path)])
        first = capsys.readouterr().out
        assert path.exists()
        main(["-P", "50", "-e", "5", "-m", "20", "-t", "0.2", "--load-trace", str(path)])
        assert capsys.readouterr().out == first

    def test_missing_trace_file_exit_status(self, tmp_path, capsys) -> None:
        """A trace file that cannot be read exits with status 1 and a message."""
        path = tmp_path / "nope.npy"
        assert main(["-P", "50", "-e", "5", "-m", "20", "-t", "0.2", "--load-trace", str(path)]) == 1
        assert "Error" in capsys.readouterr().err

    def test_replay_outside_address_space(self, tmp_path, capsys) -> None:
        """A replayed trace with pages beyond -P exits with status 1."""
        path = tmp_path / "trace.npy"
        main(ARGS + ["--save-trace", str(path)])
        capsys.readouterr()
        assert main(["-P", "3", "-e", "2", "-m", "20", "-t", "0.2", "--load-trace", str(path)]) == 1

    def test_replay_warns_about_ignored_options(self, tmp_path, caplog) -> None:
        """--seed and --length have no effect on a replayed trace."""
        path = tmp_path / "trace.npy"
        main(ARGS + ["--save-trace", str(path)])
        with caplog.at_level(logging.WARNING, logger="cli"):
            assert main(ARGS + ["--load-trace", str(path)]) == 0
        assert "ignored" in caplog.text

    def test_plot_written(self, tmp_path) -> None:
        """--plot saves a bar chart."""
        path = tmp_path / "faults.png"
        assert main(ARGS + ["--plot", str(path)]) == 0
        assert path.stat().st_size > 0

    def test_sweep_plot_written(self, tmp_path) -> None:
        """--plot with --sweep saves a line chart."""
        path = tmp_path / "sweep.png"
        assert main(ARGS + ["--sweep", "4", "--plot", str(path)]) == 0
        assert path.stat().st_size > 0

    def test_parser_defaults(self) -> None:
        """Frame count and length default to the reference configuration."""
        args = build_parser().parse_args(["-P", "10", "-e", "3", "-m", "2", "-t", "0.1"])
        assert args.frames == 7
        assert args.length == 1_000_000
        assert args.lookahead_factor == 1.0
