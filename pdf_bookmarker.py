#!/usr/bin/env python3
"""
PDF Bookmarker - CSV-driven PDF Bookmark and Page Label Tool

Adds bookmarks and page labels to PDFs that ship without them:
- Loads bookmark titles, printed page labels and levels from a CSV
- Converts Roman/Arabic page labels into physical page numbers
- Formats a pdftk info description (page labels + bookmarks)
- Writes the output PDF through pdftk

Requires pdftk on PATH (https://www.pdflabs.com/tools/pdftk-the-pdf-toolkit/).
"""

import argparse
import csv
import logging
import re
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Dict, Any, Tuple

import pdfplumber

import config


# Configure logging
logging.basicConfig(
    level=config.LOGGING['level'],
    format=config.LOGGING['format'],
    filename=config.LOGGING['file']
)
logger = logging.getLogger(__name__)


ARABIC_PATTERN = re.compile(r'^[0-9]+$')


# ==============================================================================
# Errors
# ==============================================================================

class BookmarkError(Exception):
    """Base class for bookmark processing errors."""

    def __init__(self, message: str, row: Optional[int] = None):
        self.row = row
        if row is not None:
            message = f"CSV line {row}: {message}"
        super().__init__(message)


class InvalidCsvFormat(BookmarkError):
    """CSV is missing columns or holds a malformed value."""


class UnclassifiableNumeral(BookmarkError):
    """Page label is neither an Arabic nor a valid Roman numeral."""


class MissingScheme(BookmarkError):
    """Page label uses a numeral system with no numbering scheme."""


class PageOutOfRange(BookmarkError):
    """Computed page lies outside the document."""


class InvalidScheme(BookmarkError):
    """Numbering scheme values are inconsistent."""


class ExternalToolFailure(BookmarkError):
    """A delegated process is missing, timed out or exited non-zero."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = ""
    ):
        self.command = command or []
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


# ==============================================================================
# Data Model
# ==============================================================================

class NumeralSystem(Enum):
    """Numeral system a printed page label is written in."""
    ROMAN = "roman"
    ARABIC = "arabic"


@dataclass(frozen=True)
class NumberingScheme:
    """Where a numeral system begins and the value printed on that page."""
    start_page: int
    first_label: int

    @property
    def offset(self) -> int:
        return self.start_page - self.first_label


DEFAULT_ARABIC = NumberingScheme(start_page=1, first_label=1)


def classify_page_label(page_label: str, row: Optional[int] = None) -> Tuple[NumeralSystem, int]:
    """
    Determine the numeral system of a page label and its nominal value.

    Args:
        page_label: Label as printed in the book ("12", "xiv")
        row: CSV line number for diagnostics

    Returns:
        Tuple of (numeral system, nominal page)

    Raises:
        UnclassifiableNumeral: If the label is neither Arabic nor Roman
    """
    label = page_label.strip()

    if ARABIC_PATTERN.match(label):
        return NumeralSystem.ARABIC, int(label)

    value = config.roman_to_int(label)
    if value < 0:
        raise UnclassifiableNumeral(
            f"page label '{page_label}' is neither an Arabic nor a Roman numeral",
            row=row
        )

    return NumeralSystem.ROMAN, value


@dataclass
class BookmarkEntry:
    """A bookmark as described in the CSV."""
    title: str
    page_label: str
    level: int = 1
    row: Optional[int] = None
    system: NumeralSystem = field(init=False)
    nominal_page: int = field(init=False)

    def __post_init__(self):
        self.system, self.nominal_page = classify_page_label(self.page_label, self.row)


@dataclass
class ResolvedBookmark:
    """A bookmark pointing at a physical page of the document."""
    title: str
    level: int
    actual_page: int
    page_label: str = ""
    row: Optional[int] = None


# ==============================================================================
# Offset Resolution
# ==============================================================================

def validate_schemes(
    total_pages: int,
    roman: Optional[NumberingScheme] = None,
    arabic: Optional[NumberingScheme] = DEFAULT_ARABIC
) -> None:
    """
    Check numbering schemes against each other and the document.

    Raises:
        InvalidScheme: Non-positive values, or Roman not before Arabic
        PageOutOfRange: Scheme starts beyond the last page
    """
    for name, scheme in (("roman", roman), ("arabic", arabic)):
        if scheme is None:
            continue
        if scheme.start_page < 1 or scheme.first_label < 1:
            raise InvalidScheme(
                f"{name} scheme needs a start page and first label of at least 1 "
                f"(got start={scheme.start_page}, first={scheme.first_label})"
            )
        if scheme.start_page > total_pages:
            raise PageOutOfRange(
                f"{name} numbering starts on page {scheme.start_page} "
                f"but the document has {total_pages} pages"
            )

    if roman is not None and arabic is not None and roman.start_page >= arabic.start_page:
        raise InvalidScheme(
            f"roman numbering (page {roman.start_page}) must start before "
            f"arabic numbering (page {arabic.start_page}); pass --arabic START FIRST "
            f"(arabic: [START, FIRST] in a batch config) with the page where Arabic numbering begins"
        )


def resolve_offsets(
    entries: List[BookmarkEntry],
    total_pages: int,
    roman: Optional[NumberingScheme] = None,
    arabic: Optional[NumberingScheme] = DEFAULT_ARABIC
) -> List[ResolvedBookmark]:
    """
    Convert printed page labels into physical page numbers.

    actual_page = nominal_page + (start_page - first_label) of the entry's
    numeral system. Results outside [1, total_pages] are errors, never clamped.

    Args:
        entries: Bookmark entries in document order
        total_pages: Page count of the input document
        roman: Roman numbering scheme, None if the book has no Roman pages
        arabic: Arabic numbering scheme

    Returns:
        Resolved bookmarks in input order

    Raises:
        MissingScheme: Entry's numeral system has no scheme
        PageOutOfRange: Computed page outside the document
    """
    schemes = {
        NumeralSystem.ROMAN: roman,
        NumeralSystem.ARABIC: arabic,
    }

    resolved = []

    for entry in entries:
        scheme = schemes[entry.system]
        if scheme is None:
            raise MissingScheme(
                f"'{entry.title}' uses {entry.system.value} page label "
                f"'{entry.page_label}' but no {entry.system.value} numbering scheme is configured",
                row=entry.row
            )

        actual_page = entry.nominal_page + scheme.offset

        if not 1 <= actual_page <= total_pages:
            raise PageOutOfRange(
                f"'{entry.title}' (page label '{entry.page_label}') resolves to page "
                f"{actual_page}, outside 1-{total_pages}",
                row=entry.row
            )

        resolved.append(ResolvedBookmark(
            title=entry.title,
            level=entry.level,
            actual_page=actual_page,
            page_label=entry.page_label,
            row=entry.row
        ))

    return resolved


def verify_bookmarks(
    resolved: List[ResolvedBookmark],
    roman: Optional[NumberingScheme] = None,
    arabic: Optional[NumberingScheme] = DEFAULT_ARABIC
) -> Dict[str, Any]:
    """
    Look for suspicious but writable bookmark tables.

    Checks for:
    - Pages going backwards between consecutive bookmarks
    - Level structure pdftk cannot nest (first level not 1, jumps > 1)
    - Roman-labelled bookmarks landing in the Arabic page range

    Returns:
        Dictionary with warnings
    """
    warnings = []

    if not resolved:
        return {"is_consistent": True, "warnings": ["No bookmarks to write"]}

    if resolved[0].level != 1:
        warnings.append(f"First bookmark '{resolved[0].title}' has level {resolved[0].level}, expected 1")

    for previous, current in zip(resolved, resolved[1:]):
        if current.actual_page < previous.actual_page:
            warnings.append(
                f"'{current.title}' (page {current.actual_page}) comes before "
                f"'{previous.title}' (page {previous.actual_page})"
            )
        if current.level > previous.level + 1:
            warnings.append(
                f"'{current.title}' jumps from level {previous.level} to {current.level}"
            )

    if roman is not None and arabic is not None:
        for bookmark in resolved:
            is_roman = not ARABIC_PATTERN.match(bookmark.page_label.strip())
            if is_roman and bookmark.actual_page >= arabic.start_page:
                warnings.append(
                    f"'{bookmark.title}' (page label '{bookmark.page_label}') resolves to page "
                    f"{bookmark.actual_page}, inside the arabic numbered pages"
                )

    return {
        "is_consistent": not warnings,
        "warnings": warnings,
        "total_bookmarks": len(resolved),
        "page_range": f"{min(b.actual_page for b in resolved)}-{max(b.actual_page for b in resolved)}"
    }


# ==============================================================================
# CSV Loading
# ==============================================================================

def load_bookmarks_csv(csv_path: str) -> List[BookmarkEntry]:
    """
    Load bookmark entries from a CSV file.

    The CSV needs a header row with Title, Page and Level columns.
    Extra columns are ignored.

    Args:
        csv_path: Path to bookmark CSV

    Returns:
        Bookmark entries in file order

    Raises:
        FileNotFoundError: If CSV doesn't exist
        InvalidCsvFormat: Missing columns or malformed values
        UnclassifiableNumeral: Page label is not a numeral
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Bookmark CSV not found: {csv_path}")

    title_col = config.CSV_FORMAT['title_column']
    page_col = config.CSV_FORMAT['page_column']
    level_col = config.CSV_FORMAT['level_column']

    entries = []

    with open(csv_path, newline='', encoding=config.CSV_FORMAT['encoding']) as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None:
            raise InvalidCsvFormat(f"{csv_path.name} is empty, expected a header row")

        # Tolerate " Page" style headers from hand-edited files
        reader.fieldnames = [name.strip() if name else name for name in reader.fieldnames]

        missing = [col for col in (title_col, page_col, level_col) if col not in reader.fieldnames]
        if missing:
            raise InvalidCsvFormat(
                f"{csv_path.name} is missing column(s): {', '.join(missing)} "
                f"(found: {', '.join(n for n in reader.fieldnames if n)})"
            )

        for row in reader:
            line = reader.line_num
            title = (row.get(title_col) or '').strip()
            page_label = (row.get(page_col) or '').strip()
            level_text = (row.get(level_col) or '').strip()

            # Skip blank lines padded with commas
            if not title and not page_label and not level_text:
                continue

            if not title:
                raise InvalidCsvFormat("empty Title", row=line)
            if not page_label:
                raise InvalidCsvFormat(f"empty Page for '{title}'", row=line)

            try:
                level = int(level_text)
            except ValueError:
                raise InvalidCsvFormat(f"Level '{level_text}' for '{title}' is not an integer", row=line)

            if level < 1:
                raise InvalidCsvFormat(f"Level {level} for '{title}' must be 1 or higher", row=line)

            entries.append(BookmarkEntry(title=title, page_label=page_label, level=level, row=line))

    if not entries:
        logger.warning(f"No bookmark rows found in {csv_path.name}")

    logger.info(f"Loaded {len(entries)} bookmark(s) from {csv_path.name}")
    return entries


# ==============================================================================
# pdftk Info Formatting
# ==============================================================================

def _clean_value(text: str) -> str:
    """Collapse newlines so a value stays on its record line."""
    return ' '.join(str(text).split())


def format_document_info(info: Dict[str, Optional[str]]) -> List[str]:
    """Format InfoBegin records for the values that are set."""
    lines = []
    for key, value in info.items():
        if not value:
            continue
        lines.extend([
            "InfoBegin",
            f"InfoKey: {key}",
            f"InfoValue: {_clean_value(value)}",
        ])
    return lines


def format_page_labels(
    roman: Optional[NumberingScheme] = None,
    arabic: Optional[NumberingScheme] = DEFAULT_ARABIC
) -> List[str]:
    """
    Format one PageLabelBegin record per numbering scheme.

    Pages before the first scheme get an unnumbered label so they do not
    inherit a number.
    """
    schemes = [
        (scheme, style)
        for scheme, style in (
            (roman, config.PAGE_LABELS['roman_style']),
            (arabic, config.PAGE_LABELS['arabic_style']),
        )
        if scheme is not None
    ]

    lines = []

    if schemes and min(s.start_page for s, _ in schemes) > 1:
        lines.extend([
            "PageLabelBegin",
            "PageLabelNewIndex: 1",
            f"PageLabelNumStyle: {config.PAGE_LABELS['unnumbered_style']}",
        ])

    for scheme, style in schemes:
        lines.extend([
            "PageLabelBegin",
            f"PageLabelNewIndex: {scheme.start_page}",
            f"PageLabelStart: {scheme.first_label}",
            f"PageLabelNumStyle: {style}",
        ])

    return lines


def format_bookmarks(resolved: List[ResolvedBookmark]) -> List[str]:
    """Format one BookmarkBegin record per resolved bookmark."""
    lines = []
    for bookmark in resolved:
        lines.extend([
            "BookmarkBegin",
            f"BookmarkTitle: {_clean_value(bookmark.title)}",
            f"BookmarkLevel: {bookmark.level}",
            f"BookmarkPageNumber: {bookmark.actual_page}",
        ])
    return lines


def parse_dump_data(text: str) -> Dict[str, Any]:
    """
    Parse pdftk dump_data output.

    Returns:
        Dictionary with:
            - info: document info (InfoKey -> InfoValue)
            - number_of_pages: page count or None
            - bookmarks: list of bookmark records
            - page_labels: list of page label records
            - fields: remaining top-level "Key: value" pairs
    """
    result = {
        "info": {},
        "number_of_pages": None,
        "bookmarks": [],
        "page_labels": [],
        "fields": {},
    }

    record = None
    pending_key = None

    for raw_line in text.splitlines():
        line = raw_line.rstrip()
        if not line:
            continue

        if line == "InfoBegin":
            record = "info"
            pending_key = None
            continue
        if line == "BookmarkBegin":
            record = "bookmark"
            result["bookmarks"].append({})
            continue
        if line == "PageLabelBegin":
            record = "page_label"
            result["page_labels"].append({})
            continue
        if line.endswith("Begin") and ':' not in line:
            # PageMediaBegin and friends
            record = "other"
            continue

        key, sep, value = line.partition(': ')
        if not sep:
            key, value = line.rstrip(':'), ''

        if key == "InfoKey":
            pending_key = value
        elif key == "InfoValue" and record == "info" and pending_key is not None:
            result["info"][pending_key] = value
            pending_key = None
        elif key.startswith("Bookmark") and record == "bookmark":
            result["bookmarks"][-1][key] = value
        elif key.startswith("PageLabel") and record == "page_label":
            result["page_labels"][-1][key] = value
        elif key == "NumberOfPages":
            result["number_of_pages"] = int(value)
        elif key.startswith(("Bookmark", "PageLabel", "PageMedia")):
            continue
        else:
            result["fields"][key] = value

    return result


# ==============================================================================
# External Tools
# ==============================================================================

def run_pdftk(args: List[str]) -> str:
    """
    Run pdftk and return its standard output.

    Args:
        args: Arguments after the executable name

    Returns:
        Captured stdout

    Raises:
        ExternalToolFailure: pdftk missing, timed out or exited non-zero
    """
    executable = config.PDFTK['executable']
    command = [executable] + [str(arg) for arg in args]

    logger.debug(f"Running: {' '.join(command)}")

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            encoding='utf-8',
            timeout=config.PDFTK['timeout']
        )
    except FileNotFoundError as e:
        raise ExternalToolFailure(
            f"{executable} not found. Install pdftk: sudo apt-get install pdftk",
            command=command
        ) from e
    except subprocess.TimeoutExpired as e:
        raise ExternalToolFailure(
            f"{executable} timed out after {config.PDFTK['timeout']}s",
            command=command
        ) from e

    if result.returncode != 0:
        stderr = (result.stderr or '').strip()
        raise ExternalToolFailure(
            f"{executable} exited with code {result.returncode}: {stderr}",
            command=command,
            returncode=result.returncode,
            stderr=stderr
        )

    return result.stdout


class PDFBookmarker:
    """
    Main class for bookmarking a PDF.

    Workflow:
    1. Count pages of the input PDF
    2. Load bookmarks from CSV
    3. Resolve page labels to physical pages
    4. Write pdftk info file
    5. Run pdftk update_info and verify the output
    """

    def __init__(
        self,
        pdf_path: str,
        csv_path: str,
        output_path: str,
        roman: Optional[NumberingScheme] = None,
        arabic: Optional[NumberingScheme] = DEFAULT_ARABIC,
        document_info: Optional[Dict[str, str]] = None
    ):
        """
        Initialize the bookmarker.

        Args:
            pdf_path: Path to the input PDF
            csv_path: Path to the bookmark CSV
            output_path: Output PDF; a bare file name lands beside the input
            roman: Roman numbering scheme, None if the book has no Roman pages
            arabic: Arabic numbering scheme
            document_info: Optional InfoKey -> value pairs (Title, Author, ...)
        """
        self.pdf_path = Path(pdf_path).resolve()
        self.csv_path = Path(csv_path).resolve()
        self.output_path = self._resolve_output_path(output_path)
        self.roman = roman
        self.arabic = arabic
        self.document_info = document_info or {}
        self.entries: List[BookmarkEntry] = []
        self.resolved: List[ResolvedBookmark] = []

        # Validate inputs
        if not self.pdf_path.exists():
            raise FileNotFoundError(f"PDF file not found: {pdf_path}")

        if self.output_path == self.pdf_path:
            raise ValueError(f"Output must differ from input: {self.output_path}")

        logger.info(f"Initialized PDFBookmarker for: {self.pdf_path.name}")
        logger.info(f"Output file: {self.output_path}")

    def _resolve_output_path(self, output_path: str) -> Path:
        output = Path(output_path)
        if not output.is_absolute() and output.parent == Path('.'):
            return self.pdf_path.parent / output
        return output.resolve()

    @property
    def info_file_path(self) -> Path:
        return self.output_path.parent / config.OUTPUT_CONFIG['info_file']

    def get_page_count(self) -> int:
        """
        Get total number of pages in the PDF.

        Returns:
            Total page count
        """
        with pdfplumber.open(self.pdf_path) as pdf:
            return len(pdf.pages)

    def read_metadata(self, pdf_path: Optional[Path] = None) -> Dict[str, Any]:
        """
        Read PDF metadata, bookmarks and page labels through pdftk.

        Args:
            pdf_path: PDF to inspect (defaults to the input PDF)

        Returns:
            Parsed dump_data dictionary
        """
        pdf_path = pdf_path or self.pdf_path
        output = run_pdftk([pdf_path, config.PDFTK['dump_command']])
        return parse_dump_data(output)

    def load_bookmarks(self) -> List[BookmarkEntry]:
        self.entries = load_bookmarks_csv(self.csv_path)
        return self.entries

    def resolve_bookmarks(self, total_pages: int) -> List[ResolvedBookmark]:
        """
        Validate schemes and resolve loaded bookmarks to physical pages.

        Args:
            total_pages: Page count of the input PDF

        Returns:
            Resolved bookmarks
        """
        validate_schemes(total_pages, self.roman, self.arabic)

        if self.roman is not None:
            logger.info(f"Roman numbering: page {self.roman.start_page} is "
                        f"'{self.roman.first_label}' (offset {self.roman.offset:+d})")
        if self.arabic is not None:
            logger.info(f"Arabic numbering: page {self.arabic.start_page} is "
                        f"'{self.arabic.first_label}' (offset {self.arabic.offset:+d})")

        self.resolved = resolve_offsets(self.entries, total_pages, self.roman, self.arabic)
        return self.resolved

    def print_bookmarks(self):
        """
        Print resolved bookmarks for user review.

        Displays all bookmarks with hierarchy visualization.
        """
        if not self.resolved:
            print("No bookmarks resolved.")
            return

        print("=" * 80)
        print("BOOKMARKS - Review")
        print("=" * 80)
        print()

        print(f"{'Title':<55} {'Label':<8} {'Page':<8} {'Level'}")
        print("-" * 80)

        for bookmark in self.resolved:
            indent = "  " * (bookmark.level - 1)
            title_display = f"{indent}{bookmark.title}"

            # Truncate if too long
            if len(title_display) > 52:
                title_display = title_display[:49] + "..."

            print(f"{title_display:<55} {bookmark.page_label:<8} {bookmark.actual_page:<8} {bookmark.level}")

        print()
        print(f"Total bookmarks: {len(self.resolved)}")
        print("=" * 80)

    def build_info(self) -> str:
        """Build the pdftk info description for the resolved bookmarks."""
        lines = (
            format_document_info(self.document_info)
            + format_page_labels(self.roman, self.arabic)
            + format_bookmarks(self.resolved)
        )
        return '\n'.join(lines) + '\n'

    def write_info_file(self) -> Path:
        """
        Write the intermediate pdftk info file, overwriting any previous run.

        Returns:
            Path to the info file
        """
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.info_file_path.write_text(self.build_info(), encoding='utf-8')
        logger.debug(f"Wrote info file: {self.info_file_path}")
        return self.info_file_path

    def write_output(self) -> Path:
        """
        Apply the info file to the input PDF with pdftk.

        Returns:
            Path to the output PDF
        """
        info_file = self.write_info_file()

        logger.info(f"Writing {len(self.resolved)} bookmark(s) with pdftk")
        run_pdftk([
            self.pdf_path,
            config.PDFTK['update_command'],
            info_file,
            "output",
            self.output_path
        ])

        return self.output_path

    def verify_output(self) -> Dict[str, Any]:
        """
        Check that the output PDF carries the written bookmarks.

        Returns:
            Dictionary with expected/found bookmark counts
        """
        metadata = self.read_metadata(self.output_path)
        found = len(metadata["bookmarks"])
        expected = len(self.resolved)

        if found != expected:
            logger.warning(f"Output has {found} bookmark(s), expected {expected}")
        else:
            logger.info(f"Verified {found} bookmark(s) in {self.output_path.name}")

        return {
            "verified": found == expected,
            "expected_bookmarks": expected,
            "found_bookmarks": found,
            "page_labels": len(metadata["page_labels"]),
        }

    def process(self, verify_only: bool = False, keep_info_file: Optional[bool] = None) -> Dict[str, Any]:
        """
        Run the complete bookmarking workflow.

        Args:
            verify_only: Resolve and review bookmarks without writing
            keep_info_file: Keep the intermediate info file (default from config)

        Returns:
            Summary dictionary
        """
        if keep_info_file is None:
            keep_info_file = config.OUTPUT_CONFIG['keep_info_file']

        total_pages = self.get_page_count()
        logger.info(f"{self.pdf_path.name} has {total_pages} pages")

        self.load_bookmarks()
        self.resolve_bookmarks(total_pages)

        verification = verify_bookmarks(self.resolved, self.roman, self.arabic)
        for warning in verification["warnings"]:
            logger.warning(warning)

        summary = {
            "pdf": str(self.pdf_path),
            "output": str(self.output_path),
            "total_pages": total_pages,
            "bookmark_count": len(self.resolved),
            "warnings": verification["warnings"],
        }

        if verify_only:
            self.print_bookmarks()
            summary["status"] = "verified_only"
            return summary

        try:
            self.write_output()
            summary["output_check"] = self.verify_output()
        finally:
            if not keep_info_file:
                self.info_file_path.unlink(missing_ok=True)

        if keep_info_file:
            summary["info_file"] = str(self.info_file_path)

        summary["status"] = "complete"
        return summary


def parse_scheme(values: Optional[List[int]]) -> Optional[NumberingScheme]:
    """Build a scheme from a [start_page, first_label] pair."""
    if values is None:
        return None
    start_page, first_label = values
    return NumberingScheme(start_page=int(start_page), first_label=int(first_label))


def main():
    """Main entry point for command-line usage."""
    parser = argparse.ArgumentParser(
        description='PDF Bookmarker - Add bookmarks and page labels from a CSV',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Arabic numbering from the first page
  %(prog)s --pdf book.pdf --csv book.csv --output book_bookmarked.pdf

  # Roman front matter on pages 1-12, Arabic "1" printed on page 13
  %(prog)s --pdf book.pdf --csv book.csv --output out.pdf --roman 1 1 --arabic 13 1

  # Review the resolved bookmarks without writing anything
  %(prog)s --pdf book.pdf --csv book.csv --output out.pdf --arabic 13 1 --verify-only

CSV format (header row required):
  Title,Page,Level
  Preface,vii,1
  Chapter 1,1,1
  Section 1.1,4,2
        """
    )

    parser.add_argument(
        '--pdf',
        required=True,
        help='Path to input PDF file'
    )

    parser.add_argument(
        '--csv',
        required=True,
        help='Path to bookmark CSV (Title, Page, Level)'
    )

    parser.add_argument(
        '--output',
        required=True,
        help='Output PDF (a bare file name is written beside the input)'
    )

    parser.add_argument(
        '--roman',
        nargs=2,
        type=int,
        metavar=('START', 'FIRST'),
        default=None,
        help='Physical page where Roman numbering starts and its first value (default: no Roman pages)'
    )

    parser.add_argument(
        '--arabic',
        nargs=2,
        type=int,
        metavar=('START', 'FIRST'),
        default=[1, 1],
        help='Physical page where Arabic numbering starts and its first value (default: 1 1)'
    )

    parser.add_argument('--title', help='Document title metadata')
    parser.add_argument('--author', help='Document author metadata')
    parser.add_argument('--subject', help='Document subject metadata')

    parser.add_argument(
        '--verify-only',
        action='store_true',
        help='Only resolve and print bookmarks, do not write the output PDF'
    )

    parser.add_argument(
        '--keep-info-file',
        action='store_true',
        help='Keep the intermediate pdftk info file'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args()

    # Set logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        bookmarker = PDFBookmarker(
            args.pdf,
            args.csv,
            args.output,
            roman=parse_scheme(args.roman),
            arabic=parse_scheme(args.arabic),
            document_info={
                "Title": args.title,
                "Author": args.author,
                "Subject": args.subject,
            }
        )

        summary = bookmarker.process(
            verify_only=args.verify_only,
            keep_info_file=args.keep_info_file
        )

        if summary["status"] == "complete":
            print(f"✓ Bookmarks written to {summary['output']}")
        elif summary["status"] == "verified_only":
            print("✓ Verification complete!")

    except KeyboardInterrupt:
        print("\n\nProcessing interrupted by user")
        return 130
    except BookmarkError as e:
        logger.error(f"Error bookmarking PDF: {e}")
        print(f"\n✗ Error: {e}")
        return 1
    except Exception as e:
        logger.error(f"Error bookmarking PDF: {e}", exc_info=True)
        print(f"\n✗ Error: {e}")
        return 1

    return 0


if __name__ == '__main__':
    exit(main())
