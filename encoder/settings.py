"""
Encoding settings read from the environment (or a local .env file).
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Composite key syntax
FORM_DELIMITER = os.getenv("FORM_DELIMITER", ".")
FORM_ESCAPE = os.getenv("FORM_ESCAPE", "\\")
FORM_IMPLICIT_KEY = os.getenv("FORM_IMPLICIT_KEY", "_")
FORM_OMITTED_KEY = os.getenv("FORM_OMITTED_KEY", "-")

# Behavioral switches
FORM_KEEP_ZEROS = _env_flag("FORM_KEEP_ZEROS")  # keep 0, false, "" in literal form
FORM_TOLERANT = _env_flag("FORM_TOLERANT")  # decode direction only
FORM_CASELESS = _env_flag("FORM_CASELESS")
