"""
Configuration settings for the form encoding pipeline.

Encoding switches (FORM_*) live in encoder.settings; this module only holds
the pipeline's file locations and batching.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Pick up a local .env before reading any variable below
load_dotenv()

# Base directory
BASE_DIR = Path(__file__).parent

# Pipeline I/O
DATA_DIR = Path(os.getenv("DATA_DIR", BASE_DIR / "data"))
INPUT_FILE = Path(os.getenv("INPUT_FILE", DATA_DIR / "records.jsonl"))
OUTPUT_FILE = Path(os.getenv("OUTPUT_FILE", DATA_DIR / "records.form"))
LOG_FILE = os.getenv("LOG_FILE", "form_encoder.log")

# Number of encoded records written per batch
BATCH_SIZE = int(os.getenv("BATCH_SIZE", "10"))
