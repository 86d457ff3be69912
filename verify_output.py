"""
Utility script to verify and analyze an encoded form output file.
"""
import sys
import urllib.parse as urlparse
from collections import Counter
from pathlib import Path
from typing import Dict

from encoder.node import split_key
from encoder.options import Options
import config


def analyze_form_line(line: str, options: Options) -> Dict:
    """
    Decode one form line into statistics about its keys.

    Returns:
        Dictionary with the pair count, top-level segments and deepest path
    """
    pairs = urlparse.parse_qsl(line, keep_blank_values=True, errors='surrogateescape')
    paths = [split_key(key, options.delimiter, options.escape) for key, _ in pairs]
    return {
        "pairs": len(pairs),
        "empty_values": sum(1 for _, value in pairs if value == ""),
        "top_level": [path[0] for path in paths],
        "max_depth": max((len(path) for path in paths), default=0),
    }


def analyze_output(file_path: Path, options: Options):
    """Analyze the output file and print statistics."""
    if not file_path.exists():
        print(f"Error: Output file not found at {file_path}")
        return

    stats = []
    print(f"Reading {file_path}...")
    with open(file_path, 'r', encoding='utf-8') as f:
        for line in f:
            stats.append(analyze_form_line(line.rstrip('\n'), options))

    if not stats:
        print("No encoded records found in output file.")
        return

    print("\n" + "=" * 60)
    print("OUTPUT ANALYSIS")
    print("=" * 60)
    print(f"\nTotal records: {len(stats)}")
    print(f"Total pairs: {sum(s['pairs'] for s in stats)}")
    print(f"Empty values: {sum(s['empty_values'] for s in stats)}")
    print(f"Records with no pairs: {sum(1 for s in stats if s['pairs'] == 0)}")
    print(f"Deepest key: {max(s['max_depth'] for s in stats)} segments")

    top_level = Counter(key for s in stats for key in set(s['top_level']))
    print(f"\nTop-level keys:")
    for key, count in top_level.most_common(10):
        print(f"  {key or '(root)'}: {count}")

    print("\n" + "=" * 60)
    print("Analysis complete!")
    print("=" * 60)


if __name__ == "__main__":
    output_file = config.OUTPUT_FILE
    if len(sys.argv) > 1:
        output_file = Path(sys.argv[1])

    analyze_output(output_file, Options.from_env())
