"""Byte channels connecting the Grass machine's In and Out primitives to the outside world."""

import sys
from abc import ABC, abstractmethod
from io import BytesIO


class Channel(ABC):
    """A byte source and sink."""

    @abstractmethod
    def read_byte(self):
        """This method should return the next input byte as an int, or None at end of input or on a failed read."""

    @abstractmethod
    def write_byte(self, byte):
        """This method should write byte (an int in range(256)) to the output."""

    def flush(self):
        """Flushes any pending output. Called when a run ends."""


class StdioChannel(Channel):
    """Reads from stdin and writes to stdout as raw bytes."""

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer

    def read_byte(self):
        try:
            data = self.stdin.read(1)
        except OSError:
            return None
        return data[0] if data else None

    def write_byte(self, byte):
        self.stdout.write(bytes([byte]))
        self.stdout.flush()

    def flush(self):
        self.stdout.flush()


class BufferChannel(Channel):
    """In-memory channel: input comes from a fixed bytes object and output is collected."""

    def __init__(self, data=b""):
        self.input = BytesIO(data)
        self.output = bytearray()

    def read_byte(self):
        data = self.input.read(1)
        return data[0] if data else None

    def write_byte(self, byte):
        self.output.append(byte)

    @property
    def consumed(self):
        """Number of input bytes read so far."""
        return self.input.tell()
