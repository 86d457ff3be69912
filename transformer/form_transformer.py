"""
Transform records into encoded form lines and save them.
"""
import logging
from typing import Any, List, Optional

from encoder.errors import FormError
from encoder.form_encoder import encode_to_string_with
from encoder.options import Options

logger = logging.getLogger(__name__)


class FormTransformer:
    """Encodes records as application/x-www-form-urlencoded lines."""

    def __init__(self, options: Optional[Options] = None):
        """
        Initialize transformer.

        Args:
            options: Encoding options; the process defaults when omitted
        """
        self.options = options
        self.failed_count = 0

    def transform_record(self, record: Any) -> Optional[str]:
        """
        Transform a single record into an encoded form.

        Args:
            record: Decoded record (mapping, list or scalar)

        Returns:
            The encoded form or None if the record could not be encoded
        """
        try:
            return encode_to_string_with(record, self.options)
        except FormError as e:
            self.failed_count += 1
            logger.error(f"Failed to encode record: {e}")
            return None

    def save_to_form(self, encoded_forms: List[str], output_file: str):
        """
        Append encoded forms to a file, one per line.

        Args:
            encoded_forms: Encoded form strings
            output_file: Path to the output file
        """
        try:
            with open(output_file, 'a', encoding='utf-8') as f:
                for form in encoded_forms:
                    if form is not None:
                        f.write(form + '\n')

            logger.info(f"Saved {len(encoded_forms)} forms to {output_file}")
        except OSError as e:
            logger.error(f"Failed to save to {output_file}: {e}")
            raise
