#!/usr/bin/env python3
"""
Test Suite for the PDF Bookmarker batch processor.

Tests:
- YAML configuration validation
- Batch processing with per-document failures
- JSON batch summary

Usage:
    python tests/run_all_tests.py
    pytest tests/test_process_batch.py -v
"""

import json
import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import patch

import yaml

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from process_batch import load_config, process_batch, default_output_name
from test_pdf_bookmarker import MockPDF, FakePdftk


CSV_TEXT = "Title,Page,Level\nPreface,ii,1\nChapter 1,1,1\n"


def write_config(directory: Path, data) -> Path:
    config_path = directory / "batch.yaml"
    config_path.write_text(yaml.safe_dump(data), encoding='utf-8')
    return config_path


class TestBatchConfig:
    """Test suite for batch configuration loading."""

    def test_load_valid_config(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = write_config(Path(temp_dir), {
                'output_base': str(Path(temp_dir) / 'out'),
                'documents': [{'pdf': 'a.pdf', 'csv': 'a.csv', 'roman': [1, 1], 'arabic': [5, 1]}],
            })
            batch_config = load_config(str(config_path))

        assert batch_config['documents'][0]['arabic'] == [5, 1]

    def test_missing_fields(self):
        cases = [
            ({'documents': [{'pdf': 'a.pdf', 'csv': 'a.csv'}]}, "output_base"),
            ({'output_base': 'out', 'documents': []}, "at least one"),
            ({'output_base': 'out', 'documents': [{'pdf': 'a.pdf'}]}, "csv"),
            ({'output_base': 'out', 'documents': [{'pdf': 'a.pdf', 'csv': 'a.csv', 'roman': [1]}]}, "roman"),
        ]

        with tempfile.TemporaryDirectory() as temp_dir:
            for data, expected in cases:
                config_path = write_config(Path(temp_dir), data)
                try:
                    load_config(str(config_path))
                    assert False, f"Should have rejected {data}"
                except ValueError as e:
                    assert expected in str(e)

    def test_missing_config_file(self):
        try:
            load_config("/nonexistent/batch.yaml")
            assert False, "Should have raised FileNotFoundError"
        except FileNotFoundError:
            pass

    def test_default_output_name(self):
        assert default_output_name("books/physiology.pdf") == "physiology_bookmarked.pdf"


class TestBatchProcessing:
    """Test suite for processing several documents."""

    def test_batch_continues_after_failure(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            (temp_path / "good.pdf").write_text("Mock PDF")
            (temp_path / "good.csv").write_text(CSV_TEXT, encoding='utf-8')
            (temp_path / "noroman.pdf").write_text("Mock PDF")
            (temp_path / "noroman.csv").write_text(CSV_TEXT, encoding='utf-8')

            output_base = temp_path / "out"
            config_path = write_config(temp_path, {
                'output_base': str(output_base),
                'documents': [
                    {'pdf': str(temp_path / "good.pdf"), 'csv': str(temp_path / "good.csv"),
                     'roman': [1, 1], 'arabic': [4, 1], 'title': 'Good Book'},
                    {'pdf': str(temp_path / "missing.pdf"), 'csv': str(temp_path / "good.csv")},
                    {'pdf': str(temp_path / "noroman.pdf"), 'csv': str(temp_path / "noroman.csv")},
                ],
            })

            with patch('pdf_bookmarker.pdfplumber.open', return_value=MockPDF(20)), \
                    patch('pdf_bookmarker.subprocess.run', side_effect=FakePdftk(page_count=20)):
                result = process_batch(str(config_path))

            assert result['total_documents'] == 3
            assert result['successful'] == 1
            assert result['failed'] == 2

            good, missing, noroman = result['results']
            assert good['status'] == 'complete'
            assert Path(good['output']) == output_base.resolve() / "good_bookmarked.pdf"
            assert missing['status'] == 'error'
            assert "not found" in missing['error']
            assert noroman['status'] == 'error'
            assert noroman['row'] == 2

            summary = json.loads((output_base / "batch_summary.json").read_text(encoding='utf-8'))
            assert summary['successful'] == 1
            assert len(summary['results']) == 3

    def test_batch_verify_only(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            (temp_path / "book.pdf").write_text("Mock PDF")
            (temp_path / "book.csv").write_text(CSV_TEXT, encoding='utf-8')

            config_path = write_config(temp_path, {
                'output_base': str(temp_path / "out"),
                'documents': [
                    {'pdf': str(temp_path / "book.pdf"), 'csv': str(temp_path / "book.csv"),
                     'output': 'custom.pdf', 'roman': [1, 1], 'arabic': [4, 1]},
                ],
            })

            with patch('pdf_bookmarker.pdfplumber.open', return_value=MockPDF(20)), \
                    patch('pdf_bookmarker.subprocess.run') as mock_run:
                result = process_batch(str(config_path), verify_only=True)

            mock_run.assert_not_called()
            assert result['results'][0]['status'] == 'verified_only'
            assert result['results'][0]['output'].endswith('custom.pdf')

    def test_batch_continues_after_unreadable_pdf(self):
        """A file that is not a PDF fails in pdfplumber without stopping the batch."""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            (temp_path / "bad.pdf").write_text("not a pdf")
            (temp_path / "book.csv").write_text(CSV_TEXT, encoding='utf-8')

            output_base = temp_path / "out"
            config_path = write_config(temp_path, {
                'output_base': str(output_base),
                'documents': [
                    {'pdf': str(temp_path / "bad.pdf"), 'csv': str(temp_path / "book.csv"),
                     'roman': [1, 1], 'arabic': [4, 1]},
                ],
            })

            result = process_batch(str(config_path), verify_only=True)

            assert result['failed'] == 1
            assert result['results'][0]['status'] == 'error'
            assert (output_base / "batch_summary.json").exists()

    def test_batch_continues_after_bad_scheme_values(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            (temp_path / "book.pdf").write_text("Mock PDF")
            (temp_path / "book.csv").write_text(CSV_TEXT, encoding='utf-8')

            output_base = temp_path / "out"
            config_path = write_config(temp_path, {
                'output_base': str(output_base),
                'documents': [
                    {'pdf': str(temp_path / "book.pdf"), 'csv': str(temp_path / "book.csv"),
                     'output': 'first.pdf', 'roman': [1, 1], 'arabic': ['x', 1]},
                    {'pdf': str(temp_path / "book.pdf"), 'csv': str(temp_path / "book.csv"),
                     'output': 'second.pdf', 'roman': [1, 1], 'arabic': [4, 1]},
                ],
            })

            with patch('pdf_bookmarker.pdfplumber.open', return_value=MockPDF(20)), \
                    patch('pdf_bookmarker.subprocess.run', side_effect=FakePdftk(page_count=20)):
                result = process_batch(str(config_path))

            first, second = result['results']
            assert first['status'] == 'error'
            assert "'x'" in first['error']
            assert second['status'] == 'complete'
            assert result['successful'] == 1
            assert (output_base / "batch_summary.json").exists()

    def test_outputs_stay_in_current_directory_base(self):
        """output_base '.' keeps outputs in the working directory, not beside the input."""
        with tempfile.TemporaryDirectory() as books_dir, tempfile.TemporaryDirectory() as work_dir:
            books_path = Path(books_dir)
            (books_path / "a.pdf").write_text("Mock PDF")
            (books_path / "a.csv").write_text(CSV_TEXT, encoding='utf-8')

            config_path = write_config(Path(work_dir), {
                'output_base': '.',
                'documents': [
                    {'pdf': str(books_path / "a.pdf"), 'csv': str(books_path / "a.csv"),
                     'roman': [1, 1], 'arabic': [4, 1]},
                ],
            })

            previous_cwd = os.getcwd()
            os.chdir(work_dir)
            try:
                with patch('pdf_bookmarker.pdfplumber.open', return_value=MockPDF(20)), \
                        patch('pdf_bookmarker.subprocess.run', side_effect=FakePdftk(page_count=20)):
                    result = process_batch(str(config_path))
            finally:
                os.chdir(previous_cwd)

            output = Path(result['results'][0]['output'])
            assert output == Path(work_dir).resolve() / "a_bookmarked.pdf"
            assert output.exists()
            assert not (books_path / "a_bookmarked.pdf").exists()
