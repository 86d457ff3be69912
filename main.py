"""
Main entry point for the form encoding pipeline.
"""
import logging
import sys
from pathlib import Path
from typing import List, Optional

from source.record_source import RecordSource
from transformer.form_transformer import FormTransformer
from encoder.errors import OptionsError
from encoder.options import Options
import config

logger = logging.getLogger(__name__)


def configure_logging():
    """Log to a file and to stdout."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(config.LOG_FILE),
            logging.StreamHandler(sys.stdout)
        ]
    )


def run(input_file: Path, output_file: Path, options: Options, batch_size: int = config.BATCH_SIZE) -> int:
    """
    Encode every record of input_file and append the forms to output_file.

    Args:
        input_file: JSONL file with one record per line
        output_file: File receiving one encoded form per line
        options: Encoding options
        batch_size: Number of forms written at a time

    Returns:
        The number of records encoded
    """
    options.validate()
    source = RecordSource(input_file)
    transformer = FormTransformer(options)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    batch: List[str] = []
    total_encoded = 0

    try:
        for record in source.iter_records():
            form = transformer.transform_record(record)
            if form is None:
                continue

            batch.append(form)
            total_encoded += 1

            if len(batch) >= batch_size:
                transformer.save_to_form(batch, str(output_file))
                batch = []
                logger.info(f"Encoded and saved {total_encoded} records so far...")
    finally:
        # Flush whatever was encoded before an interruption or failure
        if batch:
            transformer.save_to_form(batch, str(output_file))

    if transformer.failed_count:
        logger.warning(f"{transformer.failed_count} records could not be encoded")
    return total_encoded


def main(argv: Optional[List[str]] = None):
    """Main execution function."""
    argv = sys.argv[1:] if argv is None else argv
    configure_logging()

    input_file = Path(argv[0]) if len(argv) > 0 else config.INPUT_FILE
    output_file = Path(argv[1]) if len(argv) > 1 else config.OUTPUT_FILE

    logger.info("=" * 60)
    logger.info("Form Encoding Pipeline")
    logger.info("=" * 60)
    logger.info(f"Input file: {input_file}")

    try:
        total = run(input_file, output_file, Options.from_env())
    except OptionsError as e:
        logger.error(f"Invalid encoding options: {e}")
        sys.exit(2)
    except KeyboardInterrupt:
        logger.warning("Pipeline interrupted by user. Encoded records so far were saved.")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Pipeline failed with error: {e}", exc_info=True)
        sys.exit(1)

    logger.info("=" * 60)
    logger.info("Pipeline completed successfully!")
    logger.info(f"Total records encoded: {total}")
    logger.info(f"Output file: {output_file}")
    logger.info("=" * 60)


if __name__ == "__main__":
    main()
