"""Main CLI entry point for the textfile-xml command-line tool.

Provides validation, canonical re-formatting and JSON conversion of text
resource XML files.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from textfile_xml import __version__
from textfile_xml.api import ReadResult, TextFileXmlStream
from textfile_xml.channel import BufferChannel
from textfile_xml.model import TextFile
from textfile_xml.shared.config import ConfigError, StreamConfig


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self):
        self.stream_config = StreamConfig.default().override(logging_level="WARNING")
        self.output_format = "text"

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        Recognized keys are ``preset`` (``default`` or ``compact``),
        ``stream`` (a ``StreamConfig`` dictionary) and ``output_format``.
        """
        config = cls()
        if config_path.exists():
            try:
                with config_path.open() as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("configuration must be a JSON object")

                if data.get("preset") == "compact":
                    config.stream_config = StreamConfig.compact().override(
                        logging_level=config.stream_config.logging_level
                    )
                if "stream" in data:
                    config.stream_config = StreamConfig.from_dict(data["stream"])

                config.output_format = data.get("output_format", config.output_format)

            except (OSError, ValueError, ConfigError) as e:
                print(f"Warning: Could not load config file: {e}", file=sys.stderr)

        return config


class MessageCollector:
    """Error sink that keeps messages for the CLI report instead of logging them."""

    def __init__(self):
        self.messages: List[str] = []

    def error(self, message: str) -> None:
        self.messages.append(message)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="textfile-xml",
        description="Read, validate and write <strings> text resource XML files"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate text resource files")
    validate_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="XML files to validate"
    )
    validate_parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        help="Output format (default: text)"
    )

    # Format command
    format_parser = subparsers.add_parser("format", help="Rewrite a file in canonical form")
    format_parser.add_argument("path", type=Path, help="XML file to format")
    format_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    format_parser.add_argument(
        "--compact",
        action="store_true",
        help="Write without line breaks or indentation"
    )

    # Dump command
    dump_parser = subparsers.add_parser("dump", help="Convert a file to JSON")
    dump_parser.add_argument("path", type=Path, help="XML file to convert")
    dump_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    # Build command
    build_parser = subparsers.add_parser("build", help="Build an XML file from JSON")
    build_parser.add_argument("path", type=Path, help="JSON file in the form written by dump")
    build_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    build_parser.add_argument(
        "--compact",
        action="store_true",
        help="Write without line breaks or indentation"
    )

    # Global options
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def _file_report(path: Path, result: ReadResult) -> Dict[str, Any]:
    summary = result.summary()
    return {
        "file": str(path),
        "valid": result.success,
        "name": summary["name"],
        "group_count": summary["group_count"],
        "string_count": summary["string_count"],
        "error_kind": summary["error_kind"],
        "errors": [d["message"] for d in summary["diagnostics"] if d["severity"] == "ERROR"],
        "processing_time_ms": result.performance.processing_time_ms,
    }


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format validation results for output."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    if not results:
        return "No results to display."

    valid_count = sum(1 for r in results if r.get("valid", False))
    lines = [f"Validated {len(results)} files, {valid_count} valid", "-" * 50]

    for result in results:
        if result.get("valid", False):
            lines.append(
                f"✓ {result['file']} "
                f"({result['group_count']} groups, {result['string_count']} strings)"
            )
        else:
            lines.append(f"✗ {result['file']}")
            for error in result.get("errors", []):
                lines.append(f"   Error: {error}")

    return "\n".join(lines)


def _stream_for(config: CLIConfig, compact: bool = False) -> TextFileXmlStream:
    stream_config = config.stream_config
    if compact:
        stream_config = stream_config.override(writer__auto_formatting=False)
    return TextFileXmlStream(stream_config, error_sink=MessageCollector())


def _report_failure(stream: TextFileXmlStream, path: Path) -> None:
    for message in stream.error_sink.messages:
        print(f"Error: {path}: {message}", file=sys.stderr)


def _write_document(
    stream: TextFileXmlStream,
    document: TextFile,
    output: Optional[Path]
) -> int:
    target = output if output else BufferChannel()
    result = stream.write(document, target)
    if not result.success:
        _report_failure(stream, output or Path("<stdout>"))
        return 1

    if output:
        print(f"Written to {output}", file=sys.stderr)
    else:
        sys.stdout.flush()
        sys.stdout.buffer.write(result.data)
        sys.stdout.buffer.flush()
    return 0


def cmd_validate(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle validate command."""
    stream = _stream_for(config)
    results = [_file_report(path, stream.read(path)) for path in args.paths]

    print(format_results(results, args.format or config.output_format))

    valid_count = sum(1 for r in results if r["valid"])
    return 0 if valid_count == len(results) else 1


def cmd_format(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle format command."""
    stream = _stream_for(config, compact=args.compact)
    result = stream.read(args.path)
    if not result.success:
        _report_failure(stream, args.path)
        return 1
    return _write_document(stream, result.document, args.output)


def cmd_dump(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle dump command."""
    stream = _stream_for(config)
    result = stream.read(args.path)
    if not result.success:
        _report_failure(stream, args.path)
        return 1

    output = json.dumps(result.document.to_dict(), indent=2, ensure_ascii=False)
    if args.output:
        try:
            args.output.write_text(output + "\n", encoding="utf-8")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        print(f"Written to {args.output}", file=sys.stderr)
    else:
        print(output)
    return 0


def cmd_build(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle build command."""
    try:
        with args.path.open(encoding="utf-8") as f:
            document = TextFile.from_dict(json.load(f))
    except OSError as e:
        print(f"Error reading {args.path}: {e.strerror or e}", file=sys.stderr)
        return 1
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        print(f"Error: {args.path} is not a valid document: {e}", file=sys.stderr)
        return 1

    stream = _stream_for(config, compact=args.compact)
    return _write_document(stream, document, args.output)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = CLIConfig.from_file(args.config) if args.config else CLIConfig()

    # Set up logging verbosity
    if args.verbose:
        level = "DEBUG"
    elif args.quiet:
        level = "ERROR"
    else:
        level = config.stream_config.logging_level
    logging.basicConfig(level=getattr(logging, level))

    # Route to appropriate command handler
    try:
        if args.command == "validate":
            return cmd_validate(args, config)
        elif args.command == "format":
            return cmd_format(args, config)
        elif args.command == "dump":
            return cmd_dump(args, config)
        elif args.command == "build":
            return cmd_build(args, config)
        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
