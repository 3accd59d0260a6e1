from __future__ import annotations

import os
import random

import pytest

from rsasig.errors import ContainerFormatError, KeyFormatError
from rsasig.protocol import files, service
from rsasig.protocol.container import SignedContainer


@pytest.fixture(scope="module")
def keys_2048():
    return service.generate_key_pair(2048, rng=random.Random(2048))


def test_hello_world_end_to_end(keys_2048):
    pub, priv = keys_2048
    assert pub.n == priv.n
    assert pub.n.bit_length() in (2047, 2048)
    assert pub.e == 65537

    text = service.sign_file(b"hello world", priv)
    assert service.verify_container(text, pub)

    other_pub, _ = service.generate_key_pair(2048, rng=random.Random(8402))
    assert not service.verify_container(text, other_pub)


def test_extract_message(keypair, rng):
    text = service.sign_file(b"hello world", keypair.private, rng=rng)
    assert service.extract_message(text) == b"hello world"


def test_tampered_container_message(keypair, rng):
    text = service.sign_file(b"hello world", keypair.private, rng=rng)
    container = SignedContainer.parse(text)
    forged = SignedContainer(message=b"hello there", signature=container.signature).to_text()
    assert not service.verify_container(forged, keypair.public)


def test_malformed_container_raises(keypair):
    with pytest.raises(ContainerFormatError):
        service.verify_container("just some text", keypair.public)


def test_key_files_round_trip(tmp_path, keypair):
    pub_path, priv_path = files.save_keypair(
        keypair.public, keypair.private, tmp_path / "pub.txt", tmp_path / "priv.txt"
    )
    assert files.load_public_key(pub_path) == keypair.public
    assert files.load_private_key(priv_path) == keypair.private
    assert pub_path.read_text() == f"{keypair.n:x}\n{keypair.e:x}"


def test_sign_verify_extract_paths(tmp_path, keypair):
    files.save_keypair(keypair.public, keypair.private, tmp_path / "pub.txt", tmp_path / "priv.txt")
    doc = tmp_path / "doc.txt"
    doc.write_bytes(b"line one\nline two\n")

    signed = files.sign_path(doc, tmp_path / "priv.txt")
    assert signed == tmp_path / "doc.txt.signed"
    assert files.verify_path(signed, tmp_path / "pub.txt")

    out = tmp_path / "recovered.txt"
    assert files.extract_path(signed, out) == b"line one\nline two\n"
    assert out.read_bytes() == b"line one\nline two\n"


def test_missing_files(tmp_path, keypair):
    with pytest.raises(FileNotFoundError):
        files.load_public_key(tmp_path / "absent.txt")
    files.save_keypair(keypair.public, keypair.private, tmp_path / "pub.txt", tmp_path / "priv.txt")
    with pytest.raises(FileNotFoundError):
        files.sign_path(tmp_path / "absent.bin", tmp_path / "priv.txt")


def test_write_atomic_leaves_no_temp_files(tmp_path):
    target = files.write_atomic(tmp_path / "out.bin", b"payload")
    assert target.read_bytes() == b"payload"
    assert os.listdir(tmp_path) == ["out.bin"]


def test_failed_write_keeps_previous_content(tmp_path, monkeypatch):
    target = tmp_path / "out.bin"
    target.write_bytes(b"old")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(files.os, "replace", broken_replace)
    with pytest.raises(OSError):
        files.write_atomic(target, b"new")
    assert target.read_bytes() == b"old"
    assert os.listdir(tmp_path) == ["out.bin"]


def test_key_file_with_bom_is_key_format_error(tmp_path):
    path = tmp_path / "pub.txt"
    path.write_bytes(b"\xef\xbb\xbfc5\n10001")
    with pytest.raises(KeyFormatError):
        files.load_public_key(path)


def test_container_with_non_ascii_preamble(tmp_path, keypair):
    files.save_keypair(keypair.public, keypair.private, tmp_path / "pub.txt", tmp_path / "priv.txt")
    doc = tmp_path / "note.txt"
    doc.write_bytes(b"hello world")
    signed = files.sign_path(doc, tmp_path / "priv.txt")
    signed.write_bytes("café\n".encode("utf-8") + signed.read_bytes())

    assert files.verify_path(signed, tmp_path / "pub.txt")
    assert files.extract_path(signed) == b"hello world"


def test_container_that_is_not_utf8(tmp_path, keypair):
    files.save_keypair(keypair.public, keypair.private, tmp_path / "pub.txt", tmp_path / "priv.txt")
    signed = tmp_path / "bad.signed"
    signed.write_bytes(b"\xff\xfe" + service.sign_file(b"hello world", keypair.private).encode("ascii"))
    with pytest.raises(ContainerFormatError):
        files.verify_path(signed, tmp_path / "pub.txt")
    with pytest.raises(ContainerFormatError):
        files.extract_path(signed)
