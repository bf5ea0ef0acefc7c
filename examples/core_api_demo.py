#!/usr/bin/env python3
"""Core Stream API Progressive Disclosure Demo.

This example reads and writes a small text resource file with the simple
functions first, then with a configured TextFileXmlStream, and finally shows
how read failures are reported.
"""

import sys
import tempfile
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

import textfile_xml as tfx


def demo_level_1_simple_api():
    """Demonstrate Level 1: Simple read/write functions."""
    print("=" * 60)
    print("LEVEL 1: Simple API Functions")
    print("=" * 60)

    print("\n1. Building and writing a document:")
    document = tfx.TextFile(name="menu")
    file_group = tfx.TextGroup(1)
    file_group.add("Open")
    file_group.add("Save & quit")
    document.add_group(file_group)
    document.add_group(tfx.TextGroup(2))

    written = tfx.write_bytes(document)
    print(f"Success: {written.success}")
    print(written.data.decode("utf-8"))

    print("2. Reading it back:")
    result = tfx.read_bytes(written.data)
    print(f"Success: {result.success}")
    print(f"Equal to original: {result.document == document}")
    for group in result.document.groups:
        print(f"  - group {group.id}: {list(group)}")


def demo_level_2_configured_stream():
    """Demonstrate Level 2: TextFileXmlStream with configuration."""
    print("\n" + "=" * 60)
    print("LEVEL 2: Configured Stream")
    print("=" * 60)

    config = tfx.StreamConfig.compact().override(reader__chunk_size=64)
    stream = tfx.TextFileXmlStream(config, correlation_id="demo-1")

    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "strings.xml"
        document = tfx.TextFile(name="compact", groups=[tfx.TextGroup(0, ["a", "b"])])

        stream.write(document, path)
        print(f"\nCompact output: {path.read_text(encoding='utf-8')}")

        result = stream.read(path)
        print(f"Tokens consumed: {result.performance.tokens_consumed}")
        print(f"Bytes processed: {result.performance.bytes_processed}")

    print(f"Statistics: {stream.statistics}")


def demo_error_reporting():
    """Demonstrate failed reads."""
    print("\n" + "=" * 60)
    print("ERROR REPORTING")
    print("=" * 60)

    class PrintSink:
        def error(self, message):
            print(f"  sink: {message}")

    stream = tfx.TextFileXmlStream(error_sink=PrintSink())
    samples = {
        "wrong root": b"<foo/>",
        "skipped index": b'<strings><group id="0"><string id="1">x</string></group></strings>',
        "truncated": b'<strings><group id="0">',
    }
    for label, data in samples.items():
        print(f"\n{label}:")
        result = stream.read(data)
        print(f"  success={result.success} kind={result.error_kind.name}")


if __name__ == "__main__":
    demo_level_1_simple_api()
    demo_level_2_configured_stream()
    demo_error_reporting()
