"""
XML configuration file parsing for the native bridge generator
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from .constants import (
    DEFAULT_CHANNEL,
    DEFAULT_EVENT_PREFIX,
    DEFAULT_KOTLIN_DIR,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_SWIFT_DIR,
)


@dataclass
class BridgeConfig:
    """Configuration for Dart bridge generation"""
    kotlin_dir: str = DEFAULT_KOTLIN_DIR
    swift_dir: str = DEFAULT_SWIFT_DIR
    output_file: str = DEFAULT_OUTPUT_FILE
    channel_name: str = DEFAULT_CHANNEL
    event_prefix: str = DEFAULT_EVENT_PREFIX
    type_mappings: list[tuple[str, str]] = field(default_factory=list)
    removals: list[tuple[str, bool]] = field(default_factory=list)


def parse_config_file(config_path):
    """Parse XML configuration file and return BridgeConfig object"""
    try:
        tree = ET.parse(config_path)
        root = tree.getroot()

        if root.tag != "bridge":
            raise ValueError(f"Expected root element 'bridge', got '{root.tag}'")

        config = BridgeConfig()

        # Channel names must match the ones the native plugins register
        channel = root.get("channel")
        if channel is not None:
            if not channel.strip():
                raise ValueError("Attribute 'channel' must not be empty")
            config.channel_name = channel.strip()

        event_prefix = root.get("event_prefix")
        if event_prefix is not None:
            config.event_prefix = event_prefix.strip()

        # Source and output locations (last element wins)
        for kotlin in root.findall("kotlin"):
            path = kotlin.get("path")
            if not path:
                raise ValueError("Kotlin element missing 'path' attribute")
            config.kotlin_dir = path.strip()

        for swift in root.findall("swift"):
            path = swift.get("path")
            if not path:
                raise ValueError("Swift element missing 'path' attribute")
            config.swift_dir = path.strip()

        for output in root.findall("output"):
            output_file = output.get("file")
            if not output_file:
                raise ValueError("Output element missing 'file' attribute")
            config.output_file = output_file.strip()

        # Extra type mappings
        for mapping in root.findall("type"):
            from_type = mapping.get("from")
            to_type = mapping.get("to")
            if not from_type or not to_type:
                raise ValueError("Type element missing 'from' or 'to' attribute")
            config.type_mappings.append((from_type.strip(), to_type.strip()))

        # Removals (support both simple and regex)
        for remove in root.findall("remove"):
            pattern = remove.get("pattern")
            if not pattern:
                raise ValueError("Remove element missing 'pattern' attribute")
            is_regex = remove.get("regex", "false").lower() == "true"
            config.removals.append((pattern.strip(), is_regex))

        return config

    except ET.ParseError as e:
        raise ValueError(f"XML parsing error: {e}")
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
