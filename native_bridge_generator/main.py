#!/usr/bin/env python3
"""
CLI entry point for the native bridge generator
Scans Kotlin and Swift sources and writes typed Dart bridge code
"""

import argparse
import sys
import os
from pathlib import Path

# Add parent directory to sys.path for direct execution
if __name__ == '__main__' and __package__ is None:
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from native_bridge_generator.config import BridgeConfig, parse_config_file
from native_bridge_generator.constants import PROJECT_MARKER
from native_bridge_generator.generator import NativeBridgeGenerator


def find_project_root(start=None):
    """Walk up from ``start`` to the first directory containing pubspec.yaml"""
    directory = Path(start or Path.cwd()).resolve()
    for candidate in [directory, *directory.parents]:
        if (candidate / PROJECT_MARKER).is_file():
            return candidate
    return None


def _resolve(root: Path, path: str) -> Path:
    candidate = Path(path)
    return candidate if candidate.is_absolute() else root / candidate


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate typed Dart bridge code from Kotlin and Swift sources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s --project-root my_app -o lib/bridge.g.dart
  %(prog)s --kotlin android/src --swift ios/Classes -o -
        """
    )

    parser.add_argument(
        "-C", "--config",
        metavar="CONFIG_FILE",
        help="XML configuration file (channel names, source directories, type mappings)"
    )

    parser.add_argument(
        "--project-root",
        metavar="DIRECTORY",
        help="Flutter project root (default: nearest parent directory with pubspec.yaml)"
    )

    parser.add_argument(
        "--kotlin",
        metavar="DIRECTORY",
        help="Kotlin source directory (default: android/app/src/main/kotlin)"
    )

    parser.add_argument(
        "--swift",
        metavar="DIRECTORY",
        help="Swift source directory (default: ios/Runner)"
    )

    parser.add_argument(
        "-o", "--output",
        metavar="FILE",
        help="Output Dart file, '-' for stdout (default: lib/native_bridge.g.dart)"
    )

    parser.add_argument(
        "--channel",
        metavar="NAME",
        help="MethodChannel name shared with the native plugins"
    )

    parser.add_argument(
        "--event-prefix",
        metavar="PREFIX",
        help="Prefix of the EventChannel names used for streams"
    )

    parser.add_argument(
        "--ignore-missing",
        action="store_true",
        help="Succeed even if neither source directory exists"
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only print warnings and errors"
    )

    args = parser.parse_args(argv)

    config = BridgeConfig()
    if args.config:
        try:
            config = parse_config_file(args.config)
        except (ValueError, FileNotFoundError) as e:
            print(f"Error reading config file: {e}", file=sys.stderr)
            sys.exit(1)

    if args.project_root:
        project_root = Path(args.project_root)
        if not project_root.is_dir():
            print(f"Error: Project root not found: {project_root}", file=sys.stderr)
            sys.exit(1)
    else:
        project_root = find_project_root()
        if project_root is None:
            print(f"Error: Could not find {PROJECT_MARKER}", file=sys.stderr)
            sys.exit(1)

    # Command line flags override the config file
    kotlin_dir = _resolve(project_root, args.kotlin or config.kotlin_dir)
    swift_dir = _resolve(project_root, args.swift or config.swift_dir)
    output = args.output or config.output_file
    to_stdout = output == "-"
    output_file = None if to_stdout else _resolve(project_root, output)

    generator = NativeBridgeGenerator(
        channel_name=args.channel or config.channel_name,
        event_prefix=args.event_prefix if args.event_prefix is not None else config.event_prefix,
        verbose=not (args.quiet or to_stdout),
    )
    for from_type, to_type in config.type_mappings:
        generator.type_mapper.add_mapping(from_type, to_type)
    for pattern, is_regex in config.removals:
        generator.add_removal(pattern, is_regex)

    if generator.verbose:
        print("Native Bridge - Code Generator")
        print("=" * 40)

    try:
        generator.generate(
            kotlin_dir=kotlin_dir,
            swift_dir=swift_dir,
            output=output_file,
            ignore_missing=args.ignore_missing,
        )
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        import traceback
        print(f"Error: {e}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
