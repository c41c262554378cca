"""
Manifest Locator & Parser
Finds manifest.json inside an archive and turns it into a Manifest record
"""

import json

from exceptions import ArchiveLoadError, ArchiveStructureError, ManifestFormatError
from models import DEFAULT_DESCRIPTION, Manifest

MANIFEST_FILE_NAME = 'manifest.json'


def locate_manifest(entry_names):
    """
    Find the manifest entry (suffix match, first hit in archive order)

    Args:
        entry_names (list): Archive entry names in enumeration order

    Returns:
        str: Name of the manifest entry

    Raises:
        ArchiveStructureError: no entry ends with manifest.json
    """
    for name in entry_names:
        if name.endswith(MANIFEST_FILE_NAME):
            return name

    raise ArchiveStructureError(f"{MANIFEST_FILE_NAME} not found in the zip file.")


def _as_string_tuple(value):
    # Falsy (missing, null, empty) -> (); a lone value is treated as a one-item list
    if not value:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value)
    return (str(value),)


def parse_manifest(text):
    """
    Parse manifest.json content

    Args:
        text (str): Raw manifest text

    Returns:
        Manifest: Record with defaults substituted for missing optional fields

    Raises:
        ManifestFormatError: content is not a JSON object
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestFormatError(str(e)) from e

    if not isinstance(data, dict):
        raise ManifestFormatError(
            f"Expected a JSON object at the top level, got {type(data).__name__}"
        )

    # Non-string descriptions fall back to the default like missing ones
    description = data.get('description')
    if not description or not isinstance(description, str):
        description = DEFAULT_DESCRIPTION

    return Manifest(
        manifest_version=data.get('manifest_version'),
        description=description,
        permissions=_as_string_tuple(data.get('permissions')),
        host_permissions=_as_string_tuple(data.get('host_permissions')),
        content_security_policy=data.get('content_security_policy'),
    )


def load_manifest(archive):
    """Locate, read and parse the manifest of an open ExtensionArchive"""
    name = locate_manifest(archive.entry_names)

    try:
        text = archive.read_text(name)
    except (UnicodeDecodeError, ArchiveLoadError) as e:
        raise ManifestFormatError(str(e)) from e

    return parse_manifest(text)
