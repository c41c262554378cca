"""
Verification data model
Immutable records handed to callers (CLI, web layer, tests)
"""

from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


DEFAULT_DESCRIPTION = 'No description provided'

# Display order of the checks; it is not the execution order
CHECK_NAMES = (
    'Load ZIP file',
    'Find manifest.json',
    'Check manifest version',
    'Analyze JavaScript files',
    'Check content security policy',
    'Review permissions',
    'Check description length',
)


class CheckStatus(str, Enum):
    """Lifecycle of a single check: pending -> success | warning | error"""
    PENDING = "pending"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class CheckEntry(_Record):
    name: str
    status: CheckStatus = CheckStatus.PENDING
    files_with_issues: Optional[int] = None


class Manifest(_Record):
    """Parsed manifest.json with defaults substituted for missing fields"""
    manifest_version: Any = None
    description: str = DEFAULT_DESCRIPTION
    permissions: Tuple[str, ...] = ()
    host_permissions: Tuple[str, ...] = ()
    content_security_policy: Any = None


class ViolationFinding(_Record):
    line_number: int
    message: str


class VerificationResult(_Record):
    """Terminal snapshot of one verification run"""
    total_files: int = 0
    checks: Tuple[CheckEntry, ...] = ()
    warnings: Tuple[str, ...] = ()
    errors: Tuple[str, ...] = ()
    manifest_version: Any = 0
    description: str = ''
    permissions: Tuple[str, ...] = ()
    host_permissions: Tuple[str, ...] = ()

    def check(self, name):
        """Look up a check entry by name"""
        for entry in self.checks:
            if entry.name == name:
                return entry
        raise KeyError(name)

    @property
    def has_errors(self):
        return bool(self.errors)

    @property
    def has_warnings(self):
        return bool(self.warnings)

    def to_dict(self):
        """camelCase dict suitable for JSON reports"""
        return self.model_dump(mode='json', by_alias=True)
