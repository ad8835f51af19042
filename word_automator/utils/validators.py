"""
Validation utilities for templates, output paths and saved PDF files.
"""

import os
from typing import Any, Dict

import fitz  # PyMuPDF

from ..core.config import Config


class Validators:
    """Utility class for validating files and paths."""

    @staticmethod
    def validate_template_path(template_path: str) -> Dict[str, Any]:
        """
        Validate a Word template or document path.

        Args:
            template_path: Path to a .dot/.dotx/.doc/.docx file

        Returns:
            Dict with validation results
        """
        result = {
            'valid': False,
            'resolved_path': None,
            'error_message': None,
            'file_size_mb': 0.0
        }

        try:
            resolved_path = os.path.abspath(template_path)

            if not os.path.exists(resolved_path):
                result['error_message'] = f"File not found: {resolved_path}"
                return result

            if not os.path.isfile(resolved_path):
                result['error_message'] = f"Path is not a file: {resolved_path}"
                return result

            if not any(resolved_path.lower().endswith(ext) for ext in Config.SUPPORTED_TEMPLATE_EXTENSIONS):
                result['error_message'] = f"Not a Word template or document: {resolved_path}"
                return result

            try:
                result['file_size_mb'] = os.path.getsize(resolved_path) / (1024 * 1024)
            except OSError:
                result['file_size_mb'] = 0.0

            result['valid'] = True
            result['resolved_path'] = resolved_path

        except Exception as e:
            result['error_message'] = f"Path validation error: {e}"

        return result

    @staticmethod
    def validate_output_path(output_path: str) -> Dict[str, Any]:
        """
        Validate an output file path.

        Args:
            output_path: Desired output file path

        Returns:
            Dict with validation results
        """
        result = {
            'valid': False,
            'resolved_path': None,
            'error_message': None,
            'directory_exists': False,
            'file_exists': False
        }

        try:
            resolved_path = os.path.abspath(output_path)
            directory = os.path.dirname(resolved_path)

            if not os.path.isdir(directory):
                result['error_message'] = f"Output directory does not exist: {directory}"
                return result
            result['directory_exists'] = True

            if not os.access(directory, os.W_OK):
                result['error_message'] = f"Cannot write to output directory: {directory}"
                return result

            result['file_exists'] = os.path.exists(resolved_path)
            result['valid'] = True
            result['resolved_path'] = resolved_path

        except Exception as e:
            result['error_message'] = f"Output path validation error: {e}"

        return result

    @staticmethod
    def validate_pdf_artifact(pdf_path: str) -> Dict[str, Any]:
        """
        Check that a saved PDF exists and can be opened.

        Args:
            pdf_path: Path of the PDF Word produced

        Returns:
            Dict with validation results including the page count
        """
        result = {
            'valid': False,
            'resolved_path': None,
            'page_count': 0,
            'error_message': None,
            'file_size_mb': 0.0
        }

        resolved_path = os.path.abspath(pdf_path)
        if not os.path.isfile(resolved_path):
            result['error_message'] = f"File not found: {resolved_path}"
            return result

        if not any(resolved_path.lower().endswith(ext) for ext in Config.SUPPORTED_PDF_EXTENSIONS):
            result['error_message'] = f"Not a PDF file: {resolved_path}"
            return result

        try:
            with fitz.open(resolved_path) as pdf_doc:
                page_count = len(pdf_doc)
        except Exception as e:
            result['error_message'] = f"Invalid PDF file: {e}"
            return result

        if page_count == 0:
            result['error_message'] = f"PDF has no pages: {resolved_path}"
            return result

        result['page_count'] = page_count
        result['file_size_mb'] = os.path.getsize(resolved_path) / (1024 * 1024)
        result['valid'] = True
        result['resolved_path'] = resolved_path
        return result
