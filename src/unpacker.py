"""
Extension Archive Reader
Opens .zip / .crx packages in memory and exposes their entries as text
"""

import io
import zipfile
import zlib
from contextlib import contextmanager

from exceptions import ArchiveLoadError

CRX_MAGIC = b'Cr24'


def strip_crx_header(data):
    """
    Return the ZIP payload of a CRX package

    CRX3 format:
    - Magic number: "Cr24"
    - Version: 3
    - Header size + protobuf header
    - ZIP archive

    CRX2 format:
    - Magic number: "Cr24"
    - Version: 2
    - Public key length, signature length, key, signature
    - ZIP archive
    """
    if data[:4] != CRX_MAGIC:
        raise ArchiveLoadError("Not a ZIP file and no CRX header found")

    version = int.from_bytes(data[4:8], 'little')

    if version == 3:
        header_size = int.from_bytes(data[8:12], 'little')
        offset = 12 + header_size
    elif version == 2:
        pubkey_len = int.from_bytes(data[8:12], 'little')
        sig_len = int.from_bytes(data[12:16], 'little')
        offset = 16 + pubkey_len + sig_len
    else:
        raise ArchiveLoadError(f"Unsupported CRX version: {version}")

    if offset >= len(data):
        raise ArchiveLoadError("CRX header is truncated")

    return data[offset:]


class ExtensionArchive:
    """Read-only view over the entries of an extension package"""

    def __init__(self, zip_file):
        self._zip = zip_file
        self._infos = zip_file.infolist()

    @classmethod
    @contextmanager
    def open(cls, data):
        """
        Open archive bytes, closing the underlying ZIP on every exit path

        Args:
            data (bytes): Raw .zip or .crx content

        Raises:
            ArchiveLoadError: content is neither a ZIP nor a CRX-wrapped ZIP
        """
        zip_file = cls._open_zip(data)
        try:
            yield cls(zip_file)
        finally:
            zip_file.close()

    @staticmethod
    def _open_zip(data):
        try:
            return zipfile.ZipFile(io.BytesIO(data), 'r')
        except zipfile.BadZipFile as e:
            if data[:4] != CRX_MAGIC:
                raise ArchiveLoadError(str(e)) from e

        payload = strip_crx_header(data)
        try:
            return zipfile.ZipFile(io.BytesIO(payload), 'r')
        except zipfile.BadZipFile as e:
            raise ArchiveLoadError(f"CRX payload is not a ZIP archive: {e}") from e

    @property
    def total_files(self):
        """Count of all entries, directories included"""
        return len(self._infos)

    @property
    def entry_names(self):
        return [info.filename for info in self._infos]

    def read_text(self, name):
        """
        Decode one entry as UTF-8

        Raises:
            UnicodeDecodeError: entry is not valid UTF-8
            ArchiveLoadError: entry data is corrupt, encrypted or uses an
                unsupported compression method
            KeyError: no such entry
        """
        try:
            raw = self._zip.read(name)
        except (zipfile.BadZipFile, zlib.error, EOFError) as e:
            raise ArchiveLoadError(f"Corrupt entry {name}: {e}") from e
        except (RuntimeError, NotImplementedError) as e:
            # encrypted entries and unsupported compression methods
            raise ArchiveLoadError(f"Unreadable entry {name}: {e}") from e
        return raw.decode('utf-8')
