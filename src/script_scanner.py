"""
Script Violation Scanner
Line-level regex scan of .js files for store-policy red flags

Detection is lexical only: no parsing, no cross-line context. Matches inside
comments or string literals are reported too, and obfuscated code is missed.
"""

import re

from tqdm import tqdm

from exceptions import ArchiveLoadError
from models import ViolationFinding
from utils import log

SCRIPT_EXTENSION = '.js'

# Applied in order; one line may trip several detectors
DETECTORS = [
    {
        'name': 'arbitrary_code_execution',
        'pattern': r'\b(eval|new\s+Function)\s*\(',
        'label': 'Potential arbitrary code execution',
    },
    {
        'name': 'script_injection',
        'pattern': r'chrome\.(scripting|tabs)\.executeScript',
        'label': 'Uses script injection',
    },
    {
        'name': 'remote_code_loading',
        'pattern': r'\b(import|require)\s*\(\s*[\'"]https?:',
        'label': 'Potential remote code loading',
    },
    {
        'name': 'service_worker_registration',
        'pattern': r'navigator\.serviceWorker\.register',
        'label': 'Service Worker registration (potential remote code channel)',
    },
    {
        'name': 'remote_script_loading',
        'pattern': r'\.loadScript\s*\(\s*[\'"]|src\s*=\s*[\'"]https?:',
        'label': 'Potential remote script loading',
    },
]

_COMPILED_DETECTORS = [
    (detector['label'], re.compile(detector['pattern'])) for detector in DETECTORS
]


def scan_script(content):
    """
    Scan one script's text

    Args:
        content (str): Script source

    Returns:
        list: ViolationFinding objects in line order
    """
    findings = []

    for index, line in enumerate(content.split('\n')):
        line_number = index + 1
        trimmed = line.strip()

        for label, compiled in _COMPILED_DETECTORS:
            match = compiled.search(trimmed)
            if match:
                findings.append(ViolationFinding(
                    line_number=line_number,
                    message=f'Line {line_number}: {label}: "{match.group(0)}"',
                ))

    return findings


def format_file_warning(file_name, findings):
    """One multi-line warning per offending file"""
    lines = '\n'.join(finding.message for finding in findings)
    return f'The file {file_name} may contain policy violations:\n{lines}'


def scan_archive_scripts(archive, show_progress=False, verbose=False):
    """
    Scan every .js entry of an open ExtensionArchive

    Files that cannot be read or decoded as UTF-8 are skipped.

    Yields:
        tuple: (file_name, findings) for files with at least one finding
    """
    script_names = [name for name in archive.entry_names if name.endswith(SCRIPT_EXTENSION)]

    if verbose:
        log(f"Scanning {len(script_names)} JavaScript files...")

    for name in tqdm(script_names, desc="Script scan", unit="file", disable=not show_progress):
        try:
            content = archive.read_text(name)
        except (UnicodeDecodeError, ArchiveLoadError) as e:
            if verbose:
                log(f"Skipping {name}: {e}", 'warning')
            continue

        findings = scan_script(content)
        if findings:
            yield name, findings
