"""Tests for input loading, checkpoint files, configuration, and the CLI."""

import sys
from array import array

import pytest

from bytemerge import InputUnavailableError, StopReason, TrainerConfig, train_file
from bytemerge.cli import main
from bytemerge.errors import CheckpointWriteError, ConfigError
from bytemerge.storage import (
    FileCheckpointer,
    checkpoint_path,
    load_bytes,
    load_tokens,
    save_tokens,
)


# Storage
# ---------------------------------------------------------------------------


def test_load_bytes_missing_file(tmp_path):
    """A missing input is reported before any training happens."""
    missing = tmp_path / "nope.bin"
    with pytest.raises(InputUnavailableError) as exc:
        load_bytes(missing)
    assert exc.value.path == missing


def test_checkpoint_path_appends_suffix(tmp_path):
    """The suffix is appended to the full filename."""
    assert checkpoint_path(tmp_path / "enw3.txt", ".ptok") == tmp_path / "enw3.txt.ptok"


def test_save_tokens_native_uint16(tmp_path):
    """Tokens are stored as headerless native-endian 16-bit integers."""
    path = tmp_path / "out.ptok"
    save_tokens(path, [0, 97, 256, 65535])
    raw = path.read_bytes()
    assert raw == array("H", [0, 97, 256, 65535]).tobytes()
    assert len(raw) == 8
    assert load_tokens(path) == [0, 97, 256, 65535]


def test_save_tokens_overwrites(tmp_path):
    """Each checkpoint replaces the previous file contents."""
    path = tmp_path / "out.ptok"
    save_tokens(path, [1, 2, 3, 4])
    save_tokens(path, [9])
    assert load_tokens(path) == [9]


def test_save_tokens_unwritable(tmp_path):
    """Write failures surface as CheckpointWriteError."""
    with pytest.raises(CheckpointWriteError):
        save_tokens(tmp_path / "no-such-dir" / "out.ptok", [1])


def test_save_tokens_symbol_too_large(tmp_path):
    """Symbols beyond 16 bits cannot be stored."""
    with pytest.raises(CheckpointWriteError):
        save_tokens(tmp_path / "out.ptok", [70_000])


def test_file_checkpointer(tmp_path):
    """The file checkpointer writes the sequence it is given."""
    path = tmp_path / "x.ptok"
    FileCheckpointer(path)([5, 6])
    assert load_tokens(path) == [5, 6]


# Configuration
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"max_merges": -1}, "max_merges"),
        ({"max_merges": 70_000}, "max_merges"),
        ({"checkpoint_interval": 0}, "checkpoint_interval"),
        ({"report_interval": -5}, "report_interval"),
        ({"compaction_threshold": 0.0}, "compaction_threshold"),
        ({"compaction_threshold": 1.5}, "compaction_threshold"),
        ({"output_suffix": ""}, "output_suffix"),
    ],
)
def test_config_rejects_bad_values(kwargs, field):
    """Out-of-range settings raise ConfigError naming the field."""
    with pytest.raises(ConfigError) as exc:
        TrainerConfig(**kwargs)
    assert exc.value.field == field


def test_config_defaults():
    """Defaults follow the documented constants."""
    config = TrainerConfig()
    assert config.max_merges == 65_000
    assert config.checkpoint_interval == 1_000
    assert config.report_interval == 100
    assert config.compaction_threshold == pytest.approx(0.7071, abs=1e-4)
    assert config.output_suffix == ".ptok"


# End to end
# ---------------------------------------------------------------------------


def test_train_file_writes_final_tokens(tmp_path):
    """Training a file leaves the final tokens next to it."""
    src = tmp_path / "corpus.bin"
    src.write_bytes(bytes([97, 98, 97, 98, 97, 98]))

    result = train_file(src)

    assert result.stop_reason is StopReason.EXHAUSTED
    assert load_tokens(tmp_path / "corpus.bin.ptok") == [257, 256]


def test_train_file_missing_input(tmp_path):
    """No checkpoint is written when the input cannot be read."""
    with pytest.raises(InputUnavailableError):
        train_file(tmp_path / "missing")
    assert not (tmp_path / "missing.ptok").exists()


def test_cli_success(tmp_path):
    """The CLI trains the named file and exits with status 0."""
    src = tmp_path / "corpus.txt"
    src.write_bytes(b"hello hello hello world")

    status = main([str(src), "--suffix", ".tok", "--max-merges", "10"])

    assert status == 0
    tokens = load_tokens(tmp_path / "corpus.txt.tok")
    assert 0 < len(tokens) < len(b"hello hello hello world")


def test_cli_missing_input(tmp_path):
    """A missing input file gives exit status 1."""
    assert main([str(tmp_path / "missing")]) == 1


def test_cli_bad_config(tmp_path):
    """Invalid settings give exit status 1."""
    src = tmp_path / "corpus.txt"
    src.write_bytes(b"abab")
    assert main([str(src), "--report-interval", "0"]) == 1


def test_module_entry_point(tmp_path, monkeypatch):
    """``python -m bytemerge`` exits through the CLI status."""
    import runpy

    src = tmp_path / "corpus.txt"
    src.write_bytes(b"abababab")
    monkeypatch.setattr(sys, "argv", ["bytemerge", str(src)])
    with pytest.raises(SystemExit) as exc:
        runpy.run_module("bytemerge", run_name="__main__")
    assert exc.value.code == 0


def test_package_version():
    """The package exposes a version string whether installed or not."""
    import bytemerge

    assert isinstance(bytemerge.__version__, str)
    assert bytemerge.__version__
