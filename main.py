#!/usr/bin/env python3
"""
Word Automator - Main CLI entry point.

Fills the bookmarks of a Word template and saves the result as a Word
document or PDF.
"""

import argparse
import json
import sys
from typing import Dict, List, Optional

from word_automator.core.config import Config
from word_automator.core.exceptions import SaveFailure, WordAutomatorError
from word_automator.core.retry import RetryPolicy
from word_automator.document.automator import WordAutomator
from word_automator.document.session import WordSession
from word_automator.document.template_inspector import TemplateInspector
from word_automator.utils.logging_config import setup_logging, get_logger
from word_automator.utils.validators import Validators


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Word Automator - Fill bookmarks in a Word template and save the document',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s letter.dotx --set Name="Jane Doe" --set City=Ghent --pdf --model invoice
  %(prog)s letter.dotx --values values.json --output C:\\out\\letter.doc
  %(prog)s letter.docx --list-bookmarks

Values:
  --set NAME=VALUE       - Text for the bookmark NAME (repeatable)
  --values FILE.json     - JSON object mapping bookmark names to texts
                           (--set entries win over the file)
        """)

    parser.add_argument('template', nargs='?', help='Template (.dot/.dotx) or document to base the new document on')
    parser.add_argument('--set', dest='assignments', action='append', default=[], metavar='NAME=VALUE',
                        help='Set the text of a bookmark')
    parser.add_argument('--values', dest='values_file', help='JSON file with bookmark values')
    parser.add_argument('--pdf', action='store_true', help='Save as PDF (Word 2007 or later)')
    target = parser.add_mutually_exclusive_group()
    target.add_argument('--output', help='Save under this path instead of a generated temp filename')
    target.add_argument('--model', default='document', help='Folder name for the generated temp filename')
    parser.add_argument('--no-update-fields', action='store_true', help='Do not update fields before saving')
    parser.add_argument('--retries', type=int, default=Config.SAVE_RETRY_ATTEMPTS,
                        help='Number of save attempts for temp files (default: %(default)s)')
    parser.add_argument('--retry-delay', type=float, default=Config.SAVE_RETRY_DELAY,
                        help='Seconds to wait between save attempts (default: %(default)s)')
    parser.add_argument('--discard-failed', action='store_true',
                        help='Remove files left behind by failed save attempts')
    parser.add_argument('--list-bookmarks', action='store_true',
                        help='List the bookmarks of a DOCX template and exit (does not start Word)')
    parser.add_argument('--visible', action='store_true', help='Show the Word window while working')
    parser.add_argument('--verbose', '-v', '--debug', action='store_true', help='Enable verbose logging (DEBUG level)')
    parser.add_argument('--log-file', help='Log to file in addition to console')
    parser.add_argument('--version', action='version', version=f'Word Automator v{Config.__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(log_file=args.log_file, verbose=args.verbose)
    logger = get_logger()

    if args.list_bookmarks:
        return handle_list_bookmarks(args, logger)
    return handle_generation(args, logger)


def parse_assignments(assignments: List[str]) -> Dict[str, str]:
    """
    Parse ``NAME=VALUE`` strings into a dict.

    Raises:
        ValueError: If an entry has no ``=`` or an empty name
    """
    values = {}
    for assignment in assignments:
        name, sep, value = assignment.partition('=')
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Invalid bookmark assignment '{assignment}', expected NAME=VALUE")
        values[name] = value
    return values


def load_values(values_file: Optional[str]) -> Dict[str, str]:
    """Load bookmark values from a JSON object file."""
    if not values_file:
        return {}
    with open(values_file, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Values file must contain a JSON object: {values_file}")
    return {str(name): '' if value is None else str(value) for name, value in data.items()}


def handle_list_bookmarks(args, logger) -> int:
    """Print the bookmark names of a DOCX template."""
    if not args.template:
        logger.error("--list-bookmarks needs a template")
        return 1
    if not TemplateInspector.can_inspect(args.template):
        logger.error(f"Only .docx files can be inspected without Word: {args.template}")
        return 1

    template_result = Validators.validate_template_path(args.template)
    if not template_result['valid']:
        logger.error(f"❌ {template_result['error_message']}")
        return 1

    for name in TemplateInspector().list_bookmarks(template_result['resolved_path']):
        print(name)
    return 0


def handle_generation(args, logger) -> int:
    """Create the document, fill it and save it."""
    template = None
    if args.template:
        template_result = Validators.validate_template_path(args.template)
        if not template_result['valid']:
            logger.error(f"❌ {template_result['error_message']}")
            return 1
        template = template_result['resolved_path']
        logger.info(f"Template: {template}")

    try:
        values = load_values(args.values_file)
        values.update(parse_assignments(args.assignments))
    except (OSError, ValueError) as e:
        logger.error(f"❌ Cannot read bookmark values: {e}")
        return 1

    if template and values and TemplateInspector.can_inspect(template):
        missing = TemplateInspector().missing_bookmarks(template, values)
        for name in missing:
            logger.warning(f"⚠️ Template has no bookmark '{name}'")

    if args.output:
        output_result = Validators.validate_output_path(args.output)
        if not output_result['valid']:
            logger.error(f"❌ {output_result['error_message']}")
            return 1
        if output_result['file_exists']:
            logger.warning("⚠️ Output file exists and will be overwritten.")

    automator = None
    saved_path = None
    exit_code = 1
    try:
        retry_policy = RetryPolicy(max_attempts=args.retries, delay=args.retry_delay, retry_on=(SaveFailure,))
        automator = WordAutomator(
            session=WordSession(visible=args.visible or None),
            retry_policy=retry_policy,
            discard_failed_saves=args.discard_failed
        )
        logger.info(f"Word version {automator.version}")

        automator.create_document(template)
        for name, value in values.items():
            if automator.bookmark_exists(name):
                automator.set_bookmark(name, value)
                logger.debug(f"Bookmark '{name}' set")
            else:
                logger.warning(f"⚠️ Document has no bookmark '{name}', skipped")

        if not args.no_update_fields:
            automator.update_fields()

        if args.output:
            saved_path = automator.save(output_result['resolved_path'], args.pdf).path
        else:
            saved_path = automator.save_temp(args.model, args.pdf)

        if args.pdf:
            pdf_result = Validators.validate_pdf_artifact(saved_path)
            if pdf_result['valid']:
                logger.info(f"PDF has {pdf_result['page_count']} page(s)")
            else:
                logger.warning(f"⚠️ Saved PDF could not be verified: {pdf_result['error_message']}")

        logger.info(f"✅ Document saved: {saved_path}")
        exit_code = 0

    except WordAutomatorError as e:
        logger.error(f"❌ {e}", exc_info=args.verbose)
    except KeyboardInterrupt:
        logger.warning("\n⚠️ Interrupted by user.")
    except Exception as e:
        logger.error(f"\n❌ An unexpected error occurred: {e}", exc_info=True)
    finally:
        if automator is not None:
            try:
                automator.close_and_quit()
            except Exception as e:
                logger.warning(f"⚠️ Error closing Word: {e}")

    # printed after Word is closed, so the path is the last line of output
    if exit_code == 0:
        print(saved_path)
    return exit_code


if __name__ == '__main__':
    sys.exit(main())
