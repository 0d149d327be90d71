"""
Main Dart bridge generator orchestration
"""

import re
import sys
from pathlib import Path

from .code_generators import CodeGenerator, OutputBuilder
from .constants import ANNOTATION_HINT, DEFAULT_CHANNEL, DEFAULT_EVENT_PREFIX
from .extractors import KotlinExtractor, SwiftExtractor
from .merger import EntityMerger
from .models import Call, LogicalEntity, describe_callable
from .type_mapper import TypeMapper


class NativeBridgeGenerator:
    """Main orchestrator for generating Dart bridges from Kotlin and Swift sources"""

    def __init__(self, channel_name: str = DEFAULT_CHANNEL,
                 event_prefix: str = DEFAULT_EVENT_PREFIX, verbose: bool = True):
        self.type_mapper = TypeMapper()
        self.code_generator = CodeGenerator(self.type_mapper, event_prefix)
        self.channel_name = channel_name
        self.verbose = verbose
        self.removals = []  # (pattern, is_regex)

        # Diagnostics from the last run
        self.warnings = []
        self.conflicts = []

    def add_removal(self, pattern: str, is_regex: bool = False):
        """Drop entities (``Name``) or single members (``Name.member``) matching pattern"""
        self.removals.append((pattern, is_regex))

    def is_removed(self, name: str) -> bool:
        for pattern, is_regex in self.removals:
            if is_regex:
                if re.fullmatch(pattern, name):
                    return True
            elif pattern == name:
                return True
        return False

    def _apply_removals(self, entities: list[LogicalEntity]) -> list[LogicalEntity]:
        if not self.removals:
            return entities
        kept = []
        for entity in entities:
            if self.is_removed(entity.name):
                continue
            callables = [m for m in entity.callables if not self.is_removed(f"{entity.name}.{m.name}")]
            if callables:
                kept.append(LogicalEntity(entity.name, callables, entity.origin))
        return kept

    def _log(self, message: str = ""):
        if self.verbose:
            print(message)

    def _scan(self, extractor, source_dir, label: str, language: str) -> list[LogicalEntity] | None:
        """Run one platform's extractor; None when its directory does not exist"""
        if source_dir is None or not Path(source_dir).is_dir():
            self._log(f"{label}: No {language} source directory found")
            return None

        self._log(f"Scanning {label}: {source_dir}")
        entities = extractor.extract_directory(source_dir)
        self._log(f"  Found {len(entities)} class(es)")
        self.warnings.extend(extractor.warnings)
        return entities

    def collect(self, kotlin_dir=None, swift_dir=None, ignore_missing: bool = False) -> list[LogicalEntity]:
        """Extract both source trees and return the merged entity list"""
        self.warnings = []
        self.conflicts = []

        android = self._scan(KotlinExtractor(), kotlin_dir, "Android", "Kotlin")
        ios = self._scan(SwiftExtractor(), swift_dir, "iOS", "Swift")

        if android is None and ios is None and not ignore_missing:
            raise FileNotFoundError(
                f"No native source directory found (Kotlin: {kotlin_dir}, Swift: {swift_dir})"
            )

        merger = EntityMerger()
        entities = merger.merge(android or [], ios or [])
        self.conflicts = merger.conflicts
        entities = self._apply_removals(entities)

        for warning in self.warnings:
            print(f"Warning: {warning}", file=sys.stderr)
        for conflict in self.conflicts:
            print(
                f"Warning: {conflict.entity}.{conflict.callable_name} differs between platforms; "
                f"using {describe_callable(conflict.kept)} over {describe_callable(conflict.dropped)}",
                file=sys.stderr,
            )
        return entities

    def render(self, entities: list[LogicalEntity]) -> str:
        """Render merged entities to Dart source"""
        classes = [self.code_generator.generate_class(entity) for entity in entities]
        return OutputBuilder.build(classes, self.channel_name)

    def _log_usage(self, entities: list[LogicalEntity], output_path: Path):
        """Print a short Dart snippet calling the first generated member"""
        if not entities or not entities[0].callables:
            return
        entity = entities[0]
        member = entity.callables[0]
        args = ", ".join("'example'" for _ in member.params)

        self._log()
        self._log("Usage in your Dart code:")
        self._log()
        self._log(f"  import '{output_path.name}';")
        self._log()
        if isinstance(member, Call):
            self._log(f"  final result = await {entity.name}.{member.name}({args});")
        else:
            self._log(f"  {entity.name}.{member.name}({args}).listen((value) {{ }});")

    def generate(self, kotlin_dir=None, swift_dir=None, output: str = None,
                 ignore_missing: bool = False) -> str:
        """Generate the Dart bridge for a Kotlin tree and a Swift tree

        Args:
            kotlin_dir: Root of the Android Kotlin sources
            swift_dir: Root of the iOS Swift sources
            output: Optional output file path (prints to stdout if not specified)
            ignore_missing: Do not fail when neither source directory exists
        """
        entities = self.collect(kotlin_dir, swift_dir, ignore_missing)
        self._log()

        if not entities:
            self._log("No native classes found.")
            self._log()
            for line in ANNOTATION_HINT:
                self._log(line)
        else:
            self._log(f"Found {len(entities)} native class(es):")
            for entity in entities:
                self._log(f"  - {entity.name} [{entity.origin.value}] ({len(entity.callables)} methods)")
                for member in entity.callables:
                    self._log(f"      {describe_callable(member)}")

        code = self.render(entities)

        if output:
            output_path = Path(output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(code)
            self._log()
            self._log(f"Generated: {output_path}")
            self._log_usage(entities, output_path)
        else:
            print(code)

        return code
