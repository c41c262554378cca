"""
Store Policy Checks
Manifest-level rules: version, description length, CSP, permissions

Each check returns an outcome dict:
    {'status': CheckStatus, 'messages': [str, ...], 'files_with_issues': int or None}
"""

import json
import re

from models import CheckStatus

REQUIRED_MANIFEST_VERSION = 3
MAX_DESCRIPTION_LENGTH = 150

# Directives inspected inside content_security_policy.extension_pages
CSP_RESTRICTED_DIRECTIVES = ['script-src', 'object-src', 'worker-src']
CSP_ALLOWED_TOKENS = ["'self'", "'none'", "'wasm-unsafe-eval'"]

HOST_PERMISSIONS_MESSAGE = (
    'The extension requests host permissions, which may result in longer review times.'
)


def _outcome(status, messages=None, files_with_issues=None):
    return {
        'status': status,
        'messages': list(messages or []),
        'files_with_issues': files_with_issues,
    }


def check_manifest_version(manifest):
    """Manifest V3 is required; anything else is a warning, never fatal"""
    version = manifest.manifest_version

    # bool is an int subclass; true must not pass as 1
    if isinstance(version, (int, float)) and not isinstance(version, bool) \
            and version == REQUIRED_MANIFEST_VERSION:
        return _outcome(CheckStatus.SUCCESS)

    return _outcome(CheckStatus.WARNING, [
        f'The extension is not using Manifest V3. Found: "manifest_version": {json.dumps(version)}'
    ])


def check_description_length(manifest, max_length=MAX_DESCRIPTION_LENGTH):
    """Store descriptions are limited to max_length characters"""
    length = len(manifest.description)

    if length > max_length:
        return _outcome(CheckStatus.WARNING, [
            f'The description exceeds {max_length} characters (current length: {length}). '
            f'Chrome Web Store requires descriptions to be {max_length} characters or less.'
        ])

    return _outcome(CheckStatus.SUCCESS)


def find_disallowed_csp_directives(extension_pages):
    """
    Flag restricted directives whose value carries none of the allowed tokens

    The match is a plain substring test on "<directive> ...;" and does not
    validate the directive syntax.
    """
    disallowed = []

    for directive in CSP_RESTRICTED_DIRECTIVES:
        match = re.search(re.escape(directive) + r'[^;]+', extension_pages)
        if not match:
            continue
        value = match.group(0)
        if not any(token in value for token in CSP_ALLOWED_TOKENS):
            disallowed.append(directive)

    return disallowed


def csp_is_present(csp):
    """Objects and arrays count as present even when empty; falsy scalars do not"""
    if csp is None:
        return False
    if isinstance(csp, (dict, list)):
        return True
    return bool(csp)


def check_content_security_policy(manifest):
    """Any custom CSP is reported; extension_pages directives are inspected"""
    csp = manifest.content_security_policy

    if not csp_is_present(csp):
        return _outcome(CheckStatus.SUCCESS)

    messages = [
        f'The extension uses a custom content security policy: '
        f'{json.dumps(csp, separators=(",", ":"), ensure_ascii=False)}'
    ]

    extension_pages = csp.get('extension_pages') if isinstance(csp, dict) else None
    if extension_pages and isinstance(extension_pages, str):
        disallowed = find_disallowed_csp_directives(extension_pages)
        if disallowed:
            messages.append(
                f'The following CSP directives may have disallowed values: {", ".join(disallowed)}'
            )

    return _outcome(CheckStatus.WARNING, messages)


def check_permissions(manifest):
    """Host permissions take precedence over the plain permissions list"""
    if manifest.host_permissions:
        return _outcome(CheckStatus.WARNING, [HOST_PERMISSIONS_MESSAGE], files_with_issues=1)

    if manifest.permissions:
        return _outcome(
            CheckStatus.WARNING,
            [f'Permissions requested: {", ".join(manifest.permissions)}'],
            files_with_issues=1,
        )

    return _outcome(CheckStatus.SUCCESS)
