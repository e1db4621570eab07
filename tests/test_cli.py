import pytest
from caesarfile.cli import main


@pytest.fixture
def plain(tmp_path):
    p = tmp_path / "plain.txt"
    p.write_bytes(b"Attack at dawn\x00\xff")
    return p

def test_encrypt_then_decrypt(tmp_path, plain, capsys):
    enc, dec = tmp_path / "plain.enc", tmp_path / "plain.dec"
    assert main(["-e", str(plain), str(enc), "42"]) == 0
    out = capsys.readouterr().out
    assert "Mode: Encryption" in out
    assert "Processed 16 bytes." in out
    assert "Operation completed successfully!" in out

    assert main(["--decrypt", str(enc), str(dec), "42"]) == 0
    assert "Mode: Decryption" in capsys.readouterr().out
    assert dec.read_bytes() == plain.read_bytes()

def test_negative_key(tmp_path, plain):
    enc, dec = tmp_path / "a", tmp_path / "b"
    assert main(["--encrypt", str(plain), str(enc), "-50"]) == 0
    assert main(["-d", str(enc), str(dec), "206"]) == 0
    assert dec.read_bytes() == plain.read_bytes()

def test_help_exits_zero(capsys):
    with pytest.raises(SystemExit) as ei:
        main(["--help"])
    assert ei.value.code == 0
    out = capsys.readouterr().out
    assert "--encrypt" in out and "--decrypt" in out
    assert "normalized automatically" in out

@pytest.mark.parametrize("argv", [
    [],
    ["-e"],
    ["-e", "in", "out"],
    ["-e", "in", "out", "1", "extra"],
    ["-x", "in", "out", "1"],
    ["-e", "-d", "in", "out", "1"],
    ["in", "out", "1"],
    ["--enc", "in", "out", "1"],
    ["--dec", "in", "out", "1"],
    ["in", "out", "1", "-e"],
    ["-e", "in", "out", "1", "-d"],
    ["-e", "in", "out", "1", "--encrypt"],
])
def test_usage_errors_exit_one(argv):
    with pytest.raises(SystemExit) as ei:
        main(argv)
    assert ei.value.code == 1

@pytest.mark.parametrize("key", ["abc", "1.5", "+5", "", "12a", "--"])
def test_non_integer_key(tmp_path, plain, key, capsys):
    with pytest.raises(SystemExit) as ei:
        main(["-e", str(plain), str(tmp_path / "out"), key])
    assert ei.value.code == 1
    assert not (tmp_path / "out").exists()

def test_empty_filenames(tmp_path, plain):
    with pytest.raises(SystemExit) as ei:
        main(["-e", "", str(tmp_path / "out"), "1"])
    assert ei.value.code == 1
    with pytest.raises(SystemExit) as ei:
        main(["-e", str(plain), "", "1"])
    assert ei.value.code == 1

def test_same_input_and_output(plain, capsys):
    original = plain.read_bytes()
    with pytest.raises(SystemExit) as ei:
        main(["-e", str(plain), str(plain), "1"])
    assert ei.value.code == 1
    assert "cannot be the same" in capsys.readouterr().err
    assert plain.read_bytes() == original

def test_same_file_through_different_path(plain):
    alias = f"{plain.parent}/./{plain.name}"
    with pytest.raises(SystemExit) as ei:
        main(["-e", str(plain), alias, "1"])
    assert ei.value.code == 1

def test_missing_input_file(tmp_path, capsys):
    out = tmp_path / "out"
    assert main(["-e", str(tmp_path / "missing"), str(out), "5"]) == 1
    err = capsys.readouterr().err
    assert "could not open input file" in err
    assert "Operation failed." in err
    assert not out.exists()

def test_unwritable_output(tmp_path, plain, capsys):
    assert main(["-e", str(plain), str(tmp_path / "nope" / "out"), "5"]) == 1
    assert "could not open output file" in capsys.readouterr().err

@pytest.mark.parametrize("shape", [
    lambda src, dst: ["--enc", src, dst, "1"],
    lambda src, dst: [src, dst, "1", "-e"],
    lambda src, dst: [src, "-d", dst, "1"],
])
def test_misplaced_or_abbreviated_mode_never_runs(tmp_path, plain, shape, capsys):
    out = tmp_path / "out"
    with pytest.raises(SystemExit) as ei:
        main(shape(str(plain), str(out)))
    assert ei.value.code == 1
    assert not out.exists()
    assert "Mode:" not in capsys.readouterr().out
