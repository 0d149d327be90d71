"""
Constants and mappings for Dart bridge generation
"""


# Mapping from Kotlin/Swift primitive spellings to Dart types
DART_TYPE_MAP = {
    # Kotlin
    "String": "String",
    "Int": "int",
    "Long": "int",
    "Short": "int",
    "Byte": "int",
    "Double": "double",
    "Float": "double",
    "Boolean": "bool",
    "Unit": "void",
    # Swift
    "Int32": "int",
    "Int64": "int",
    "UInt": "int",
    "CGFloat": "double",
    "Bool": "bool",
    "Void": "void",
    "()": "void",
}

# Known generic spellings, compared with all whitespace removed
DART_GENERIC_MAP = {
    "List<String>": "List<String>",
    "List<Int>": "List<int>",
    "Map<String,Any>": "Map<String, dynamic>",
    "[String]": "List<String>",
    "[Int]": "List<int>",
    "[String:Any]": "Map<String, dynamic>",
}

LIST_PREFIXES = ("List<", "MutableList<", "ArrayList<", "Array<", "Set<", "[")
MAP_PREFIXES = ("Map<", "MutableMap<", "HashMap<", "Dictionary<")

DART_LIST = "List<dynamic>"
DART_MAP = "Map<dynamic, dynamic>"
DART_DYNAMIC = "dynamic"
DART_VOID = "void"

# Parameter types that turn a member into a stream subscription
SINK_TYPES = frozenset({"StreamSink", "EventSink"})

# Channel names shared with the native runtime plugins
DEFAULT_CHANNEL = "flutter_native_bridge"
DEFAULT_EVENT_PREFIX = "flutter_native_bridge/events/"

GENERATED_HEADER = [
    "// GENERATED CODE - DO NOT MODIFY BY HAND",
    "// Generated by native-bridge-generator",
]

REQUIRED_IMPORTS = [
    "import 'package:flutter/services.dart';",
]

# Default locations inside a Flutter project
DEFAULT_KOTLIN_DIR = "android/app/src/main/kotlin"
DEFAULT_SWIFT_DIR = "ios/Runner"
DEFAULT_OUTPUT_FILE = "lib/native_bridge.g.dart"
PROJECT_MARKER = "pubspec.yaml"

# Printed when neither source tree declares a bridged class
ANNOTATION_HINT = [
    "Android - Add annotations to your Kotlin code:",
    "",
    "  @NativeBridge",
    "  class DeviceService {",
    "      fun getModel(): String = Build.MODEL",
    "  }",
    "",
    "iOS - Add @objc to your Swift methods:",
    "",
    "  class DeviceService: NSObject {",
    "      @objc func getModel() -> String {",
    "          return UIDevice.current.model",
    "      }",
    "  }",
]
