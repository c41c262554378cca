"""
Extension Verification Pipeline
Runs the store-policy checks over one archive and aggregates a VerificationResult
"""

from pathlib import Path

from exceptions import ArchiveLoadError, ArchiveStructureError, ManifestFormatError
from manifest_parser import load_manifest
from models import CHECK_NAMES, CheckEntry, CheckStatus, VerificationResult
from policy_checks import (
    MAX_DESCRIPTION_LENGTH,
    check_content_security_policy,
    check_description_length,
    check_manifest_version,
    check_permissions,
)
from script_scanner import format_file_warning, scan_archive_scripts
from settings import load_config
from unpacker import ExtensionArchive
from utils import log

LOAD_ARCHIVE = CHECK_NAMES[0]
FIND_MANIFEST = CHECK_NAMES[1]
MANIFEST_VERSION = CHECK_NAMES[2]
JAVASCRIPT_FILES = CHECK_NAMES[3]
CONTENT_SECURITY_POLICY = CHECK_NAMES[4]
PERMISSIONS = CHECK_NAMES[5]
DESCRIPTION_LENGTH = CHECK_NAMES[6]


class VerificationRun:
    """Mutable state of a single run; frozen into a VerificationResult at the end"""

    def __init__(self):
        self.total_files = 0
        self.checks = {name: {'status': CheckStatus.PENDING, 'files_with_issues': None}
                       for name in CHECK_NAMES}
        self.warnings = []
        self.errors = []
        self.manifest_version = 0
        self.description = ''
        self.permissions = ()
        self.host_permissions = ()

    def set_status(self, name, status, files_with_issues=None):
        self.checks[name] = {'status': status, 'files_with_issues': files_with_issues}

    def fail(self, name, message):
        self.set_status(name, CheckStatus.ERROR)
        self.errors.append(message)

    def apply(self, name, outcome):
        self.set_status(name, outcome['status'], outcome['files_with_issues'])
        self.warnings.extend(outcome['messages'])

    def snapshot(self):
        return VerificationResult(
            total_files=self.total_files,
            checks=tuple(
                CheckEntry(name=name, **self.checks[name]) for name in CHECK_NAMES
            ),
            warnings=tuple(self.warnings),
            errors=tuple(self.errors),
            manifest_version=self.manifest_version,
            description=self.description,
            permissions=tuple(self.permissions),
            host_permissions=tuple(self.host_permissions),
        )


class ExtensionVerifier:
    """Verifies a packaged extension against Chrome Web Store policy"""

    def __init__(self, config=None, verbose=False):
        self.config = config if config is not None else load_config()
        self.verbose = verbose

    def _log(self, message, level='progress'):
        if self.verbose:
            log(message, level)

    def verify_file(self, path):
        """
        Verify an extension package on disk

        Args:
            path (Path or str): .zip or .crx file

        Returns:
            VerificationResult
        """
        path = Path(path)
        self._log(f"Verifying: {path.name}")
        return self.verify_bytes(path.read_bytes())

    def verify_bytes(self, data):
        """
        Verify raw archive bytes

        Terminal failures (unreadable archive, missing or malformed manifest)
        are reported in result.errors and stop the pipeline; every later
        check is left pending.

        Returns:
            VerificationResult
        """
        run = VerificationRun()

        try:
            with ExtensionArchive.open(data) as archive:
                run.set_status(LOAD_ARCHIVE, CheckStatus.SUCCESS)
                run.total_files = archive.total_files
                self._log(f"Archive loaded: {archive.total_files} entries")
                self._verify_archive(archive, run)
        except ArchiveLoadError as e:
            run.fail(LOAD_ARCHIVE, f'Unable to load the zip file. {e}')
            self._log(f"Unable to load archive: {e}", 'error')

        return run.snapshot()

    def _verify_archive(self, archive, run):
        try:
            manifest = load_manifest(archive)
        except ArchiveStructureError as e:
            run.fail(FIND_MANIFEST, str(e))
            self._log(str(e), 'error')
            return
        except ManifestFormatError as e:
            run.fail(FIND_MANIFEST, f'Invalid manifest.json file. {e}')
            self._log(f"Invalid manifest.json: {e}", 'error')
            return

        run.set_status(FIND_MANIFEST, CheckStatus.SUCCESS)
        self._log(f"Manifest version: {manifest.manifest_version}")

        run.manifest_version = manifest.manifest_version
        run.description = manifest.description
        run.permissions = manifest.permissions
        run.host_permissions = manifest.host_permissions

        max_length = self.config.get('max_description_length', MAX_DESCRIPTION_LENGTH)

        self._run_check(run, MANIFEST_VERSION, check_manifest_version, manifest)
        self._run_check(run, DESCRIPTION_LENGTH, check_description_length, manifest, max_length)
        self._run_check(run, JAVASCRIPT_FILES, self._check_scripts, archive)
        self._run_check(run, CONTENT_SECURITY_POLICY, check_content_security_policy, manifest)
        self._run_check(run, PERMISSIONS, check_permissions, manifest)

    def _run_check(self, run, name, check, *args):
        """Run one non-fatal check; an unexpected failure marks only that check"""
        try:
            outcome = check(*args)
        except Exception as e:
            run.fail(name, f'{name} failed unexpectedly: {e}')
            self._log(f"{name} failed: {e}", 'error')
            return

        run.apply(name, outcome)
        level = 'ok' if outcome['status'] == CheckStatus.SUCCESS else 'warning'
        self._log(f"{name}: {outcome['status'].value}", level)

    def _check_scripts(self, archive):
        messages = []

        for file_name, findings in scan_archive_scripts(
                archive,
                show_progress=self.config.get('show_progress', False),
                verbose=self.verbose):
            messages.append(format_file_warning(file_name, findings))

        if not messages:
            return {'status': CheckStatus.SUCCESS, 'messages': [], 'files_with_issues': None}

        return {
            'status': CheckStatus.WARNING,
            'messages': messages,
            'files_with_issues': len(messages),
        }
