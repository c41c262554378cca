import io
import json
import os
import sys
import zipfile

import pytest

# Include src directory so module imports like `from verifier import ExtensionVerifier` succeed
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))


def build_zip(files):
    """Build an in-memory ZIP; entries keep the dict's insertion order"""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buffer.getvalue()


def build_manifest(**overrides):
    manifest = {
        "name": "Test Extension",
        "version": "1.0.0",
        "manifest_version": 3,
        "description": "A test extension",
    }
    manifest.update(overrides)
    return json.dumps(manifest)


@pytest.fixture
def make_zip():
    return build_zip


@pytest.fixture
def make_manifest():
    return build_manifest


@pytest.fixture
def config():
    return {'max_description_length': 150, 'show_progress': False, 'report_dir': 'reports'}


def mark_encrypted(data, name):
    """Set the encryption flag on an entry's central directory record"""
    buf = bytearray(data)
    encoded = name.encode('utf-8')
    pos = buf.find(b'PK\x01\x02')
    while pos != -1:
        name_len = int.from_bytes(buf[pos + 28:pos + 30], 'little')
        if bytes(buf[pos + 46:pos + 46 + name_len]) == encoded:
            buf[pos + 8] |= 0x01
        pos = buf.find(b'PK\x01\x02', pos + 4)
    return bytes(buf)
