import hashlib
import io

from sha512 import SHA384
from sha512.__main__ import hash_stream, main


def test_hash_stream():
    data = b"x" * 200000
    assert hash_stream(io.BytesIO(data)) == hashlib.sha512(data).hexdigest()
    assert hash_stream(io.BytesIO(data), SHA384) == hashlib.sha384(data).hexdigest()


def test_hash_files(tmp_path, capsys):
    path = tmp_path / "data.bin"
    path.write_bytes(b"abc")
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out == f"{hashlib.sha512(b'abc').hexdigest()}  {path}\n"


def test_hash_files_sha384(tmp_path, capsys):
    path = tmp_path / "data.bin"
    path.write_bytes(b"abc")
    assert main(["--bits", "384", str(path)]) == 0
    assert capsys.readouterr().out.startswith(hashlib.sha384(b"abc").hexdigest())


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.bin")]) == 1
    assert capsys.readouterr().out == ""


def test_self_test_flag():
    assert main(["--self-test"]) == 0
