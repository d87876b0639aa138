"""File archiver with plain or LZ77-compressed members and a directory at the end of the archive."""

__version__ = "0.1.0"