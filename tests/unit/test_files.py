"""Unit tests for save_any()/load_any()."""

from __future__ import annotations

from pathlib import Path

import pytest

from typedwire import (
    CountMismatchError,
    DeserializerRegistry,
    Slot,
    UnregisteredTypeError,
    UnsupportedTypeError,
    encode_any,
    load_any,
    save_any,
)


def test_save_load_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "values.bin"

    save_any(path, "hello", 42, [0.5, 1.5])
    text, number, weights = Slot(str), Slot(int), Slot(list)
    load_any(path, text, number, weights)

    assert text.value == "hello"
    assert number.value == 42
    assert weights.value == [0.5, 1.5]


def test_file_contents_match_encode_any(tmp_path: Path) -> None:
    path = tmp_path / "values.bin"

    save_any(str(path), True, b"raw")

    assert path.read_bytes() == encode_any(True, b"raw")


def test_save_nothing_written_on_error(tmp_path: Path) -> None:
    path = tmp_path / "values.bin"

    with pytest.raises(UnsupportedTypeError, match="save .*values.bin"):
        save_any(path, "ok", None)

    assert not path.exists()


def test_save_truncates(tmp_path: Path) -> None:
    path = tmp_path / "values.bin"
    path.write_bytes(b"x" * 100)

    save_any(path, 1)

    assert path.read_bytes() == encode_any(1)


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_any(tmp_path / "missing.bin", Slot(int))


def test_load_error_names_path(tmp_path: Path) -> None:
    path = tmp_path / "values.bin"
    save_any(path, 1, 2)

    with pytest.raises(CountMismatchError, match="load .*values.bin: decode any"):
        load_any(path, Slot(int))


def test_load_with_registry(tmp_path: Path, empty_registry: DeserializerRegistry) -> None:
    path = tmp_path / "values.bin"
    save_any(path, 1)

    with pytest.raises(UnregisteredTypeError):
        load_any(path, Slot(int), registry=empty_registry)
