"""
Unit tests for the body stream adapter.
"""

import io

import pytest

from httpmessage.errors import StreamError
from httpmessage.http.stream import Stream, StreamInterface


class NonSeekable(io.RawIOBase):
    """Readable raw stream that cannot seek, like a socket file."""

    def __init__(self, data: bytes):
        super().__init__()
        self._data = io.BytesIO(data)

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        chunk = self._data.read(len(buffer))
        buffer[:len(chunk)] = chunk
        return len(chunk)


class TestStream:
    """Tests for Stream over in-memory buffers."""

    def test_is_stream_interface(self):
        """Test that Stream implements the body capability."""
        assert isinstance(Stream(), StreamInterface)

    def test_read_and_cursor(self):
        """Test bounded reads move the cursor."""
        stream = Stream.from_bytes(b"hello world")

        assert stream.read(5) == b"hello"
        assert stream.tell() == 5
        assert stream.eof() is False
        assert stream.get_contents() == b" world"
        assert stream.eof() is True

    def test_size(self):
        """Test that size does not move the cursor."""
        stream = Stream.from_bytes(b"12345")
        stream.read(2)

        assert stream.size == 5
        assert stream.tell() == 2

    def test_write_then_rewind(self):
        """Test writing to an empty stream and reading back."""
        stream = Stream()

        assert stream.write(b"abc") == 3
        assert stream.write(b"def") == 3
        stream.rewind()
        assert stream.read(-1) == b"abcdef"

    def test_seek_whence(self):
        """Test seeking relative to the end."""
        stream = Stream.from_bytes(b"0123456789")

        assert stream.seek(-3, io.SEEK_END) == 7
        assert stream.read(-1) == b"789"

    def test_bytes_rewinds(self):
        """Test that bytes() returns the whole content."""
        stream = Stream.from_string("héllo")
        stream.read(3)

        assert bytes(stream) == "héllo".encode("utf-8")

    def test_capabilities(self):
        """Test the capability queries on an open buffer."""
        stream = Stream()

        assert stream.readable() is True
        assert stream.writable() is True
        assert stream.seekable() is True
        assert stream.closed is False

    def test_metadata(self):
        """Test metadata lookup."""
        stream = Stream()

        assert stream.get_metadata("seekable") is True
        assert stream.get_metadata("missing") is None
        assert set(stream.get_metadata()) >= {"mode", "name", "seekable", "readable", "writable"}


class TestLifecycle:
    """Tests for closing and detaching."""

    def test_close(self):
        """Test that close closes the underlying resource."""
        resource = io.BytesIO(b"x")
        stream = Stream(resource)
        stream.close()

        assert stream.closed is True
        assert resource.closed is True
        assert stream.size is None
        assert stream.readable() is False

    def test_detach(self):
        """Test that detach hands back the resource, still open."""
        resource = io.BytesIO(b"x")
        stream = Stream(resource)

        assert stream.detach() is resource
        assert resource.closed is False
        assert stream.closed is True
        assert stream.detach() is None
        assert repr(stream) == "Stream(detached)"

    def test_detached_operations_fail(self):
        """Test that a detached stream refuses I/O."""
        stream = Stream.from_bytes(b"x")
        stream.detach()

        with pytest.raises(StreamError):
            stream.read(1)
        with pytest.raises(StreamError):
            stream.write(b"y")
        with pytest.raises(StreamError):
            stream.tell()
        assert stream.get_metadata() == {}
        assert stream.get_metadata("mode") is None

    def test_closed_underlying_resource(self):
        """Test a stream whose resource was closed elsewhere."""
        resource = io.BytesIO(b"x")
        stream = Stream(resource)
        resource.close()

        assert stream.closed is True
        with pytest.raises(StreamError):
            stream.seek(0)


class TestRestrictedResources:
    """Tests for read-only and non-seekable resources."""

    def test_read_only(self, tmp_path):
        """Test that writing to a read-only file fails."""
        path = tmp_path / "body.bin"
        path.write_bytes(b"payload")

        with open(path, "rb") as fh:
            stream = Stream(fh)

            assert stream.writable() is False
            assert stream.get_metadata("mode") == "rb"
            with pytest.raises(StreamError):
                stream.write(b"more")
            assert stream.read(-1) == b"payload"

    def test_write_only(self, tmp_path):
        """Test that reading from a write-only file fails."""
        with open(tmp_path / "out.bin", "wb") as fh:
            stream = Stream(fh)

            assert stream.readable() is False
            with pytest.raises(StreamError):
                stream.read(1)

    def test_non_seekable(self):
        """Test a stream that can only be read forward."""
        stream = Stream(io.BufferedReader(NonSeekable(b"abc")))

        assert stream.seekable() is False
        assert stream.size is None
        assert stream.eof() is False
        with pytest.raises(StreamError):
            stream.rewind()

        assert stream.read(10) == b"abc"
        assert stream.eof() is True
        assert bytes(stream) == b""
