"""Tests for reading the hosts file into a document."""

import pytest

from hostile import reader
from hostile.models import Entry, OpaqueLine
from hostile.writer import render

from conftest import SAMPLE_HOSTS


def test_round_trip_preserves_content(hosts_file, logger):
    doc = reader.read_document(hosts_file, True, logger)
    assert render(doc, "\n") == SAMPLE_HOSTS


def test_classified_lines_in_source_order(hosts_file, logger):
    doc = reader.read_document(hosts_file, logger=logger)
    assert doc.lines == [
        OpaqueLine("# Static table lookup for hostnames."),
        Entry("127.0.0.1", "localhost"),
        Entry("::1", "localhost ip6-localhost"),
        OpaqueLine(""),
        Entry("10.0.0.5", "foo.test", "dev box"),
        OpaqueLine("this line is not an entry!"),
        OpaqueLine(""),
    ]


def test_without_preserve_formatting_only_entries_remain(hosts_file, logger):
    doc = reader.read_document(hosts_file, False, logger)
    assert all(isinstance(line, Entry) for line in doc)
    assert len(doc) == 3


def test_crlf_content_is_normalized(tmp_path, logger):
    path = tmp_path / "hosts"
    path.write_bytes(b"# win\r\n127.0.0.1 localhost\r\n")
    doc = reader.read_document(path, logger=logger)
    assert render(doc, "\n") == "# win\n127.0.0.1 localhost\n"


def test_missing_file_raises(tmp_path, logger):
    with pytest.raises(FileNotFoundError):
        reader.read_document(tmp_path / "nope", logger=logger)


@pytest.mark.asyncio
@pytest.mark.parametrize("chunk_size", [1, 3, 7, 64 * 1024])
async def test_async_read_matches_sync(tmp_path, logger, monkeypatch, chunk_size):
    path = tmp_path / "hosts"
    path.write_bytes(SAMPLE_HOSTS.replace("\n", "\r\n").encode("utf-8"))
    monkeypatch.setattr(reader, "CHUNK_SIZE", chunk_size)

    for preserve in (True, False):
        expected = reader.read_document(path, preserve, logger)
        assert await reader.read_document_async(path, preserve, logger=logger) == expected


@pytest.mark.asyncio
async def test_async_read_callback_fires_once(hosts_file, logger):
    calls = []
    doc = await reader.read_document_async(
        hosts_file, callback=lambda err, result: calls.append((err, result)), logger=logger
    )
    assert calls == [(None, doc)]


@pytest.mark.asyncio
async def test_async_read_missing_file(tmp_path, logger):
    calls = []
    with pytest.raises(FileNotFoundError):
        await reader.read_document_async(
            tmp_path / "nope", callback=lambda err, result: calls.append(err), logger=logger
        )
    assert len(calls) == 1
    assert isinstance(calls[0], FileNotFoundError)


def test_non_utf8_bytes_round_trip(tmp_path, logger):
    raw = b"# caf\xe9\n127.0.0.1 localhost\n"
    path = tmp_path / "hosts"
    path.write_bytes(raw)

    doc = reader.read_document(path, logger=logger)
    assert doc.entries() == [Entry("127.0.0.1", "localhost")]
    assert render(doc, "\n").encode(reader.ENCODING, reader.ENCODING_ERRORS) == raw


@pytest.mark.asyncio
async def test_async_read_non_utf8_matches_sync(tmp_path, logger):
    path = tmp_path / "hosts"
    path.write_bytes(b"\xff\xfe junk\n10.0.0.1 a.test # \xe9t\xe9\n")
    assert await reader.read_document_async(path, logger=logger) == reader.read_document(path, logger=logger)


@pytest.mark.asyncio
async def test_async_read_unexpected_error_delivered_once(hosts_file, logger, monkeypatch):
    calls = []

    def fail(raw_line, preserve_formatting=True):
        raise ValueError("broken line")

    monkeypatch.setattr(reader, "classify", fail)
    with pytest.raises(ValueError, match="broken line"):
        await reader.read_document_async(
            hosts_file, callback=lambda err, result: calls.append(err), logger=logger
        )
    assert len(calls) == 1
    assert isinstance(calls[0], ValueError)
