"""
Tests for the upd7759-encode and upd7759-inspect command-line tools
"""

import io
import sys

import numpy as np

from upd7759 import encode
from upd7759.cli import encode_cli, inspect_cli
from tests.utils import generate_test_signal, write_test_wav


def test_encode_file_to_file(tmp_path, capsys):
    samples = generate_test_signal(num_samples=1500, sample_rate=8000)
    wav_path = write_test_wav(tmp_path / "speech.wav", samples, 8000)
    out_path = tmp_path / "speech.upd"

    status = encode_cli(["-i", str(wav_path), "-o", str(out_path)])

    assert status == 0
    assert out_path.read_bytes() == encode(samples, 8000)
    assert capsys.readouterr().out == ""


def test_encode_verbose(tmp_path, capsys):
    samples = generate_test_signal(num_samples=600, sample_rate=5000)
    wav_path = write_test_wav(tmp_path / "speech.wav", samples, 5000)

    status = encode_cli(["-i", str(wav_path), "-o", str(tmp_path / "out.upd"), "-v"])

    captured = capsys.readouterr()
    assert status == 0
    assert captured.out == ""
    assert "Sample Rate:    5000" in captured.err
    assert "Compression ratio" in captured.err


def test_encode_stdin_to_stdout(tmp_path, monkeypatch):
    samples = generate_test_signal(num_samples=257, sample_rate=6000)
    wav_bytes = write_test_wav(tmp_path / "speech.wav", samples, 6000).read_bytes()

    stdin = io.TextIOWrapper(io.BytesIO(wav_bytes))
    stdout = io.TextIOWrapper(io.BytesIO())
    monkeypatch.setattr(sys, "stdin", stdin)
    monkeypatch.setattr(sys, "stdout", stdout)

    status = encode_cli([])

    assert status == 0
    assert stdout.buffer.getvalue() == encode(samples, 6000)


def test_encode_npy_input(tmp_path):
    samples = generate_test_signal(num_samples=100)
    npy_path = tmp_path / "samples.npy"
    np.save(npy_path, samples)
    out_path = tmp_path / "out.upd"

    status = encode_cli(["-i", str(npy_path), "-o", str(out_path), "--sample-rate", "8000"])

    assert status == 0
    assert out_path.read_bytes() == encode(samples, 8000)


def test_invalid_input_produces_no_output(tmp_path, capsys):
    wav_path = write_test_wav(tmp_path / "cd.wav", generate_test_signal(100), 11025)
    out_path = tmp_path / "out.upd"

    status = encode_cli(["-i", str(wav_path), "-o", str(out_path)])

    assert status == 1
    assert not out_path.exists()
    assert "Sorry :(" in capsys.readouterr().err


def test_missing_input(tmp_path, capsys):
    status = encode_cli(["-i", str(tmp_path / "missing.wav"), "-o", str(tmp_path / "out.upd")])
    assert status == 1
    assert "Sorry :(" in capsys.readouterr().err


def test_legacy_block_unit(tmp_path):
    samples = np.zeros(512, dtype=np.int16)
    wav_path = write_test_wav(tmp_path / "silence.wav", samples, 8000)
    out_path = tmp_path / "out.upd"

    status = encode_cli(["-i", str(wav_path), "-o", str(out_path), "--block-unit", "samples"])

    data = out_path.read_bytes()
    assert status == 0
    assert len(data) == 259
    assert data[129] == 0x53


def test_inspect(tmp_path, capsys):
    stream_path = tmp_path / "speech.upd"
    stream_path.write_bytes(encode(np.zeros(1200, dtype=np.int16), 5000))

    status = inspect_cli([str(stream_path)])

    out = capsys.readouterr().out
    assert status == 0
    assert "0x5F (5000 Hz)" in out
    assert "Blocks: 3" in out
    assert "Packed bytes: 600" in out


def test_inspect_rejects_garbage(tmp_path, capsys):
    stream_path = tmp_path / "junk.upd"
    stream_path.write_bytes(b"\x00\x01\x02")

    assert inspect_cli([str(stream_path)]) == 1
    assert "Unknown frequency marker" in capsys.readouterr().err


def test_odd_sample_block_size_rejected(tmp_path, capsys):
    wav_path = write_test_wav(tmp_path / "speech.wav", generate_test_signal(100), 8000)
    out_path = tmp_path / "out.upd"

    status = encode_cli(["-i", str(wav_path), "-o", str(out_path),
                         "--block-unit", "samples", "--block-size", "255"])

    assert status == 1
    assert not out_path.exists()
    assert "even number of samples" in capsys.readouterr().err


def test_scalar_npy_rejected(tmp_path, capsys):
    npy_path = tmp_path / "scalar.npy"
    np.save(npy_path, np.int16(5))

    status = encode_cli(["-i", str(npy_path), "-o", str(tmp_path / "out.upd"),
                         "--sample-rate", "8000"])

    assert status == 1
    assert "single channel" in capsys.readouterr().err


def test_inspect_rejects_bad_block_size(tmp_path, capsys):
    stream_path = tmp_path / "speech.upd"
    stream_path.write_bytes(encode(np.zeros(100, dtype=np.int16), 8000))

    assert inspect_cli([str(stream_path), "--block-size", "0"]) == 1
    assert inspect_cli([str(stream_path), "--block-unit", "samples", "--block-size", "1"]) == 1
    assert "Invalid block size" in capsys.readouterr().err
