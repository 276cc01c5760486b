#!/usr/bin/env python3
"""
PDF Bookmarker - Batch Processor

Bookmarks several PDFs described in a YAML configuration file and writes
a JSON summary of the run.

Usage:
    python process_batch.py --config batch.yaml
    python process_batch.py --config batch.yaml --verify-only
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Any

import yaml
from tqdm import tqdm

import config
from pdf_bookmarker import (
    PDFBookmarker,
    BookmarkError,
    DEFAULT_ARABIC,
    parse_scheme,
)


logger = logging.getLogger(__name__)


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load YAML batch configuration file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid
        ValueError: If required fields are missing
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_file, 'r', encoding='utf-8') as f:
        batch_config = yaml.safe_load(f) or {}

    # Validate required fields
    required_fields = ['output_base', 'documents']
    for field in required_fields:
        if field not in batch_config:
            raise ValueError(f"Missing required field in config: {field}")

    if not batch_config['documents']:
        raise ValueError("Configuration must include at least one document")

    # Validate each document entry
    for i, document in enumerate(batch_config['documents']):
        for field in ('pdf', 'csv'):
            if field not in document:
                raise ValueError(f"Document entry {i} missing required field: {field}")

        for scheme_field in ('roman', 'arabic'):
            values = document.get(scheme_field)
            if values is not None and (not isinstance(values, list) or len(values) != 2):
                raise ValueError(
                    f"Document entry {i}: {scheme_field} must be a [start_page, first_label] pair"
                )

    return batch_config


def default_output_name(pdf_path: str) -> str:
    return f"{Path(pdf_path).stem}_bookmarked.pdf"


def process_batch(
    config_path: str,
    verify_only: bool = False,
    keep_info_files: bool = False
) -> Dict[str, Any]:
    """
    Bookmark every document listed in the batch configuration.

    Documents are processed one after another; a failing document is
    recorded and the batch moves on.

    Args:
        config_path: Path to YAML configuration file
        verify_only: Only resolve bookmarks, don't write PDFs
        keep_info_files: Keep intermediate pdftk info files

    Returns:
        Summary dictionary with processing results
    """
    batch_config = load_config(config_path)

    output_base = Path(batch_config['output_base'])
    documents = batch_config['documents']

    output_base.mkdir(parents=True, exist_ok=True)

    logger.info(f"Processing {len(documents)} document(s) into {output_base}")

    results = []
    successful = 0
    failed = 0

    for document in tqdm(documents, desc="Bookmarking", unit="pdf"):
        pdf_path = document['pdf']
        # Absolute, so a bare name under output_base "." is not moved beside the input
        output_path = (output_base / document.get('output', default_output_name(pdf_path))).resolve()

        try:
            arabic = parse_scheme(document['arabic']) if document.get('arabic') else DEFAULT_ARABIC

            bookmarker = PDFBookmarker(
                pdf_path,
                document['csv'],
                str(output_path),
                roman=parse_scheme(document.get('roman')),
                arabic=arabic,
                document_info={
                    "Title": document.get('title'),
                    "Author": document.get('author'),
                    "Subject": document.get('subject'),
                }
            )

            summary = bookmarker.process(
                verify_only=verify_only,
                keep_info_file=keep_info_files
            )
            results.append(summary)
            successful += 1

        except (BookmarkError, FileNotFoundError, ValueError) as e:
            logger.error(f"Error processing {pdf_path}: {e}")
            results.append({
                'pdf': str(pdf_path),
                'status': 'error',
                'error': str(e),
                'row': getattr(e, 'row', None),
            })
            failed += 1

        except Exception as e:
            logger.error(f"Unexpected error processing {pdf_path}: {e}", exc_info=True)
            results.append({
                'pdf': str(pdf_path),
                'status': 'error',
                'error': f"{type(e).__name__}: {e}",
                'row': None,
            })
            failed += 1

    summary_path = output_base / config.OUTPUT_CONFIG['summary_file']
    batch_summary = {
        'generated_at': datetime.now().isoformat(),
        'config': str(config_path),
        'total_documents': len(documents),
        'successful': successful,
        'failed': failed,
        'results': results,
        'summary_file': str(summary_path),
    }

    with open(summary_path, 'w', encoding='utf-8') as f:
        json.dump(batch_summary, f, indent=2)

    logger.info(f"Batch summary written to {summary_path}")

    return batch_summary


def main():
    """Main entry point for command-line usage."""
    parser = argparse.ArgumentParser(
        description='PDF Bookmarker Batch Processor - Bookmark several PDFs from one config',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Bookmark all documents in config
  %(prog)s --config batch.yaml

  # Resolve and check every document without writing
  %(prog)s --config batch.yaml --verify-only

Configuration file format (YAML):
  output_base: "out/"

  documents:
    - pdf: "books/physiology.pdf"
      csv: "books/physiology.csv"
      output: "physiology_bookmarked.pdf"
      roman: [1, 1]
      arabic: [13, 1]
      title: "Medical Physiology"

    - pdf: "articles/review.pdf"
      csv: "articles/review.csv"
        """
    )

    parser.add_argument('--config', required=True, help='Path to YAML configuration file')
    parser.add_argument('--verify-only', action='store_true', help='Only resolve bookmarks, do not write PDFs')
    parser.add_argument('--keep-info-files', action='store_true', help='Keep intermediate pdftk info files')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose logging')

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        result = process_batch(
            config_path=args.config,
            verify_only=args.verify_only,
            keep_info_files=args.keep_info_files
        )

        print(f"Documents: {result['total_documents']}")
        print(f"Successfully Processed: {result['successful']}")
        print(f"Failed: {result['failed']}")
        print(f"Summary: {result['summary_file']}")

        # Exit with success if at least one document processed successfully
        if result.get('successful', 0) > 0:
            sys.exit(0)
        else:
            sys.exit(1)

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        print(f"Fatal error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
