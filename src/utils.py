"""
Utility functions for the verifier
"""

import json
from pathlib import Path

from colorama import Fore, Style, init as colorama_init

colorama_init()

_MARKERS = {
    'progress': ('[+]', Fore.CYAN),
    'info': ('[i]', Fore.WHITE),
    'ok': ('[OK]', Fore.GREEN),
    'warning': ('[!]', Fore.YELLOW),
    'error': ('[X]', Fore.RED),
}


def log(message, level='progress'):
    """Print a status line with the marker for its level"""
    marker, color = _MARKERS.get(level, _MARKERS['info'])
    print(f"{color}{marker}{Style.RESET_ALL} {message}")


def save_json(data, file_path):
    """Save data to JSON file"""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    return file_path
