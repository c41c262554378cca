"""
Verification errors
Raised by the archive and manifest layers, reported in-band by the verifier
"""


class VerificationError(Exception):
    """Base class for failures that abort a verification run"""


class ArchiveLoadError(VerificationError):
    """Archive bytes could not be opened as a ZIP or CRX package"""


class ArchiveStructureError(VerificationError):
    """Archive is readable but lacks a required entry (manifest.json)"""


class ManifestFormatError(VerificationError):
    """manifest.json exists but is not a valid JSON object"""
