"""
Configuration for PDF Bookmarker

External tool and processing configuration options.
"""

import re
import shutil
from typing import Dict, Any


# ==============================================================================
# External Tool Configuration
# ==============================================================================

PDFTK = {
    "executable": "pdftk",
    "timeout": 120,  # Seconds per pdftk invocation

    # pdftk operations (UTF-8 variants so titles need no XML escaping)
    "dump_command": "dump_data_utf8",
    "update_command": "update_info_utf8",
}


# ==============================================================================
# Page Label Configuration
# ==============================================================================

PAGE_LABELS = {
    # pdftk PageLabelNumStyle values per numeral system
    "roman_style": "LowercaseRomanNumerals",
    "arabic_style": "DecimalArabicNumerals",

    # Style for leading pages that precede every numbering scheme
    "unnumbered_style": "NoNumber",
}


# ==============================================================================
# CSV Configuration
# ==============================================================================

CSV_FORMAT = {
    "title_column": "Title",
    "page_column": "Page",
    "level_column": "Level",

    # utf-8-sig strips the BOM spreadsheet programs like to add
    "encoding": "utf-8-sig",
}


# ==============================================================================
# Output Configuration
# ==============================================================================

OUTPUT_CONFIG = {
    # Intermediate pdftk info file, written beside the output PDF
    "info_file": "pdf_bookmarks.txt",
    "keep_info_file": False,

    # Batch summary
    "summary_file": "batch_summary.json",
}


# ==============================================================================
# Logging Configuration
# ==============================================================================

LOGGING = {
    "level": "INFO",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "file": None,  # Set to path for file logging
}


# ==============================================================================
# Roman Numeral Conversion
# ==============================================================================

ROMAN_NUMERALS = {
    'i': 1, 'v': 5, 'x': 10, 'l': 50,
    'c': 100, 'd': 500, 'm': 1000,
}

# Canonical subtractive notation, 1..3999
ROMAN_PATTERN = re.compile(
    r'^m{0,3}(cm|cd|d?c{0,3})(xc|xl|l?x{0,3})(ix|iv|v?i{0,3})$',
    re.IGNORECASE
)


# ==============================================================================
# Helper Functions
# ==============================================================================

def get_config(section: str) -> Dict[str, Any]:
    """
    Get configuration for a specific section.

    Args:
        section: Configuration section name

    Returns:
        Configuration dictionary
    """
    configs = {
        "pdftk": PDFTK,
        "page_labels": PAGE_LABELS,
        "csv": CSV_FORMAT,
        "output": OUTPUT_CONFIG,
        "logging": LOGGING,
    }

    return configs.get(section, {})


def roman_to_int(roman: str) -> int:
    """
    Convert Roman numeral to integer.

    Accepts upper or lower case, canonical forms only ('iv', not 'iiii').

    Args:
        roman: Roman numeral string (e.g., 'iv', 'xii', 'MCMXC')

    Returns:
        Integer value or -1 if invalid
    """
    roman = roman.strip().lower()
    if not roman or not ROMAN_PATTERN.match(roman):
        return -1

    total = 0
    previous = 0
    # Right to left: a smaller digit before a larger one is subtracted
    for char in reversed(roman):
        value = ROMAN_NUMERALS[char]
        if value < previous:
            total -= value
        else:
            total += value
            previous = value

    return total


def is_roman_numeral(text: str) -> bool:
    """
    Check if text is a valid Roman numeral.

    Args:
        text: Text to check

    Returns:
        True if valid Roman numeral
    """
    return roman_to_int(text) > 0


# ==============================================================================
# Configuration Validation
# ==============================================================================

def validate_config() -> bool:
    """
    Validate configuration values.

    Returns:
        True if configuration is valid
    """
    if PDFTK["timeout"] <= 0:
        print(f"Warning: pdftk timeout ({PDFTK['timeout']}) must be positive")

    if shutil.which(PDFTK["executable"]) is None:
        print(f"Warning: {PDFTK['executable']} not found on PATH; "
              f"only --verify-only runs will work")

    return True


# Run validation on import
if __name__ != '__main__':
    validate_config()
