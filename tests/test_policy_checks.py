import pytest

from models import CheckStatus, Manifest
from policy_checks import (
    HOST_PERMISSIONS_MESSAGE,
    check_content_security_policy,
    check_description_length,
    check_manifest_version,
    check_permissions,
    csp_is_present,
    find_disallowed_csp_directives,
)


def test_manifest_version_3_passes():
    outcome = check_manifest_version(Manifest(manifest_version=3))

    assert outcome['status'] == CheckStatus.SUCCESS
    assert outcome['messages'] == []


@pytest.mark.parametrize('version', [1, 2, 4])
def test_other_manifest_versions_warn_with_literal_value(version):
    outcome = check_manifest_version(Manifest(manifest_version=version))

    assert outcome['status'] == CheckStatus.WARNING
    assert len(outcome['messages']) == 1
    assert f'"manifest_version": {version}' in outcome['messages'][0]


def test_missing_manifest_version_warns():
    outcome = check_manifest_version(Manifest())

    assert outcome['status'] == CheckStatus.WARNING
    assert 'null' in outcome['messages'][0]


def test_string_manifest_version_is_not_v3():
    outcome = check_manifest_version(Manifest(manifest_version="3"))

    assert outcome['status'] == CheckStatus.WARNING
    assert '"manifest_version": "3"' in outcome['messages'][0]


@pytest.mark.parametrize('length, status', [
    (0, CheckStatus.SUCCESS),
    (150, CheckStatus.SUCCESS),
    (151, CheckStatus.WARNING),
    (400, CheckStatus.WARNING),
])
def test_description_length_boundary(length, status):
    outcome = check_description_length(Manifest(description='d' * length))

    assert outcome['status'] == status
    if status == CheckStatus.WARNING:
        assert len(outcome['messages']) == 1
        assert f'current length: {length}' in outcome['messages'][0]


def test_description_length_counts_characters_not_bytes():
    outcome = check_description_length(Manifest(description='é' * 150))

    assert outcome['status'] == CheckStatus.SUCCESS


def test_description_length_custom_limit():
    outcome = check_description_length(Manifest(description='x' * 20), max_length=10)

    assert outcome['status'] == CheckStatus.WARNING
    assert 'exceeds 10 characters' in outcome['messages'][0]


def test_default_description_measured_like_any_string():
    outcome = check_description_length(Manifest())

    assert outcome['status'] == CheckStatus.SUCCESS


def test_no_csp_is_success():
    assert check_content_security_policy(Manifest())['status'] == CheckStatus.SUCCESS


def test_csp_with_allowed_values_reports_policy_only():
    csp = {"extension_pages": "script-src 'self'; object-src 'self'"}
    outcome = check_content_security_policy(Manifest(content_security_policy=csp))

    assert outcome['status'] == CheckStatus.WARNING
    assert outcome['messages'] == [
        'The extension uses a custom content security policy: '
        '{"extension_pages":"script-src \'self\'; object-src \'self\'"}'
    ]


def test_csp_flags_disallowed_directives():
    csp = {"extension_pages": "script-src https://cdn.example.com; object-src 'none'; worker-src *"}
    outcome = check_content_security_policy(Manifest(content_security_policy=csp))

    assert outcome['status'] == CheckStatus.WARNING
    assert len(outcome['messages']) == 2
    assert outcome['messages'][1] == (
        'The following CSP directives may have disallowed values: script-src, worker-src'
    )


def test_csp_string_policy_skips_directive_inspection():
    outcome = check_content_security_policy(
        Manifest(content_security_policy="script-src 'self' https://evil.example")
    )

    assert outcome['status'] == CheckStatus.WARNING
    assert len(outcome['messages']) == 1


def test_csp_allowed_token_substring_match_is_permissive():
    # 'self' anywhere in the directive value satisfies the check
    assert find_disallowed_csp_directives("script-src https://x.example 'self'") == []
    assert find_disallowed_csp_directives("img-src *") == []


def test_host_permissions_take_precedence():
    outcome = check_permissions(Manifest(host_permissions=('https://*/*',), permissions=()))

    assert outcome['status'] == CheckStatus.WARNING
    assert outcome['files_with_issues'] == 1
    assert outcome['messages'] == [HOST_PERMISSIONS_MESSAGE]


def test_host_permissions_win_over_permissions():
    outcome = check_permissions(Manifest(host_permissions=('<all_urls>',),
                                         permissions=('storage',)))

    assert outcome['messages'] == [HOST_PERMISSIONS_MESSAGE]


def test_permissions_listed_when_no_host_permissions():
    outcome = check_permissions(Manifest(permissions=('storage', 'tabs')))

    assert outcome['status'] == CheckStatus.WARNING
    assert outcome['files_with_issues'] == 1
    assert outcome['messages'] == ['Permissions requested: storage, tabs']


def test_no_permissions_is_success():
    outcome = check_permissions(Manifest())

    assert outcome['status'] == CheckStatus.SUCCESS
    assert outcome['files_with_issues'] is None


@pytest.mark.parametrize('csp, present', [
    (None, False),
    ('', False),
    (0, False),
    (False, False),
    ({}, True),
    ([], True),
    ("script-src 'self'", True),
])
def test_csp_is_present(csp, present):
    assert csp_is_present(csp) is present


@pytest.mark.parametrize('csp, raw', [({}, '{}'), ([], '[]')])
def test_empty_csp_object_still_warns(csp, raw):
    outcome = check_content_security_policy(Manifest(content_security_policy=csp))

    assert outcome['status'] == CheckStatus.WARNING
    assert outcome['messages'] == [
        f'The extension uses a custom content security policy: {raw}'
    ]
