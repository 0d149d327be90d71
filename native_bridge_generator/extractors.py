"""
Declaration extractors for Kotlin and Swift source trees
"""

from dataclasses import dataclass, field
from pathlib import Path

from .constants import SINK_TYPES
from .models import Call, LogicalEntity, Origin, Parameter, Subscription
from .scanner import (
    ANNOTATION,
    WORD,
    UnbalancedDelimiterError,
    capture_type,
    extract_body,
    find_closing,
    next_token,
    split_top_level,
    strip_comments,
)


# Keywords that end a class header which has no body
HEADER_STOP_WORDS = frozenset({
    "class", "fun", "func", "val", "var", "let", "object", "interface",
    "struct", "enum", "protocol", "extension", "import", "typealias", "init",
})


@dataclass
class Declaration:
    """A class or member header found by the token walk"""
    keyword: str
    name: str
    markers: list[str] = field(default_factory=list)
    modifiers: list[str] = field(default_factory=list)
    start: int = 0
    end: int = 0


def iter_source_files(root, extension: str) -> list[Path]:
    """Return every file under ``root`` ending in ``extension``, in sorted order"""
    root = Path(root)
    if not root.is_dir():
        return []
    return sorted(path for path in root.rglob(f"*{extension}") if path.is_file())


class DeclarationExtractor:
    """Finds bridged classes and members in one platform's source text.

    Subclasses describe the platform's conventions through class attributes;
    the scanning itself is shared.
    """

    EXTENSION = ""
    ORIGIN = Origin.UNIFIED
    CLASS_MARKER = ""
    MEMBER_MARKER = ""
    EXCLUDE_MARKER = ""
    RESTRICTED_MODIFIERS = frozenset()
    # Qualifiers of type-level (static) members; such members are never exposed
    TYPE_MEMBER_MODIFIERS = frozenset()
    MODIFIERS = frozenset()
    MEMBER_KEYWORD = ""
    VOID_TYPE = ""
    SINK_TYPES = SINK_TYPES

    def __init__(self):
        self.warnings = []

    def extract_directory(self, root) -> list[LogicalEntity]:
        """Extract every source file of this platform under ``root``"""
        entities = []
        for path in iter_source_files(root, self.EXTENSION):
            entities.extend(self.extract_file(path))
        return entities

    def extract_file(self, path) -> list[LogicalEntity]:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
        return self.extract(text, source=str(path))

    def extract(self, text: str, source: str | None = None) -> list[LogicalEntity]:
        """Extract the bridged classes declared in one file's text"""
        entities = []
        for header in self._walk(text, 0, len(text), descend=True):
            if header.keyword != "class":
                continue
            entity = self._extract_class(text, header, source)
            if entity is not None:
                entities.append(entity)
        return entities

    # Declaration walk

    def _walk(self, text: str, start: int, end: int, descend: bool) -> list[Declaration]:
        """Collect class and member headers with the markers that precede them.

        With ``descend`` false, nested ``{...}`` blocks are skipped so only
        direct members of the range are reported.
        """
        headers = []
        markers, modifiers = [], []
        previous = None
        pos = start
        while True:
            token = next_token(text, pos, end)
            if token is None:
                break
            pos = token.end

            if token.kind == ANNOTATION:
                markers.append(token.value)
                pos = self._skip_arguments(text, pos, end)
                previous = token
                continue

            if token.kind == WORD and token.value in self.MODIFIERS:
                modifiers.append(token.value)
                pos = self._skip_arguments(text, pos, end)
                previous = token
                continue

            is_keyword = token.kind == WORD and token.value in ("class", self.MEMBER_KEYWORD)
            if is_keyword and not (previous is not None and previous.value in ("::", ".")):
                name_token = next_token(text, pos, end)
                if name_token is not None and name_token.value == "<":
                    # Generic member: fun <T> name(...)
                    pos = self._skip_to_closing(text, name_token.end, end, "<", ">")
                    name_token = next_token(text, pos, end)
                if token.value == "class" and name_token is not None and name_token.value in HEADER_STOP_WORDS:
                    # Swift "class func" / "class var"
                    modifiers.append("class")
                    previous = token
                    continue
                if name_token is not None and name_token.kind == WORD:
                    headers.append(Declaration(
                        keyword=token.value,
                        name=name_token.value,
                        markers=markers,
                        modifiers=modifiers,
                        start=token.start,
                        end=name_token.end,
                    ))
                    pos = name_token.end
                    previous = name_token
                else:
                    previous = token
                markers, modifiers = [], []
                continue

            if token.value == "{" and not descend:
                pos = self._skip_to_closing(text, pos, end, "{", "}")

            markers, modifiers = [], []
            previous = token
        return headers

    def _skip_arguments(self, text: str, pos: int, end: int) -> int:
        """Skip an argument list directly attached to an annotation or modifier"""
        if pos < end and text[pos] == "(":
            return self._skip_to_closing(text, pos + 1, end, "(", ")")
        return pos

    @staticmethod
    def _skip_to_closing(text: str, pos: int, end: int, opening: str, closing: str) -> int:
        try:
            return min(find_closing(text, pos, opening, closing) + 1, end)
        except UnbalancedDelimiterError:
            return end

    # Classes

    def _is_exposable_class(self, name: str, supertypes: list[str]) -> bool:
        return True

    def _find_class_body(self, text: str, pos: int) -> tuple[int | None, list[str]]:
        """Locate the ``{`` opening a class body after its name.

        Returns the offset just past the brace (or None for a body-less
        declaration) and the words seen in between (supertypes etc.).
        """
        words = []
        while True:
            token = next_token(text, pos)
            if token is None:
                return None, words
            if token.value == "{":
                return token.end, words
            if token.value in ("}", "=", ";") or (token.kind == WORD and token.value in HEADER_STOP_WORDS):
                return None, words
            pos = token.end
            if token.value == "(":
                pos = self._skip_to_closing(text, pos, len(text), "(", ")")
            elif token.value == "<":
                pos = self._skip_to_closing(text, pos, len(text), "<", ">")
            elif token.kind == WORD:
                words.append(token.value)

    def _extract_class(self, text: str, header: Declaration, source: str | None) -> LogicalEntity | None:
        body_start, supertypes = self._find_class_body(text, header.end)
        if body_start is None or not self._is_exposable_class(header.name, supertypes):
            return None

        try:
            body_end = find_closing(text, body_start)
        except UnbalancedDelimiterError:
            location = f"{source}: " if source else ""
            self.warnings.append(
                f"{location}unbalanced braces in class {header.name}, body runs to end of file"
            )
            body_end = len(text)

        whole_class = self.CLASS_MARKER in header.markers
        callables = []
        seen = set()
        for member in self._walk(text, body_start, body_end, descend=False):
            if member.keyword != self.MEMBER_KEYWORD:
                continue
            callable_ = self._extract_member(text, member, body_end, whole_class)
            if callable_ is None:
                continue
            if callable_.name in seen:
                self.warnings.append(
                    f"Duplicate member {header.name}.{callable_.name} ignored (overloads are not supported)"
                )
                continue
            seen.add(callable_.name)
            callables.append(callable_)

        if not callables:
            return None
        return LogicalEntity(header.name, callables, self.ORIGIN)

    # Members

    def _extract_member(self, text: str, member: Declaration, end: int, whole_class: bool):
        if self.TYPE_MEMBER_MODIFIERS.intersection(member.modifiers):
            return None
        signature = self._parse_signature(text, member.end, end)
        if signature is None:
            return None
        params, return_type = signature

        sinks = [p for p in params if self._is_sink(p.source_type)]
        if sinks:
            remaining = tuple(p for p in params if not self._is_sink(p.source_type))
            return Subscription(self._stream_name(member.name), return_type, remaining)

        if whole_class:
            if self.EXCLUDE_MARKER in member.markers:
                return None
            if self.RESTRICTED_MODIFIERS.intersection(member.modifiers):
                return None
        elif self.MEMBER_MARKER not in member.markers:
            return None
        return Call(member.name, return_type, tuple(params))

    def _parse_signature(self, text: str, pos: int, end: int):
        """Parse ``(params) <return>`` after a member name; None if malformed"""
        token = next_token(text, pos, end)
        if token is None or token.value != "(":
            return None
        try:
            params_text = extract_body(text, token.end, "(", ")")
        except UnbalancedDelimiterError:
            return None
        params = self.parse_params(params_text)
        return_type = self._read_return_type(text, token.end + len(params_text) + 1, end)
        return params, return_type or self.VOID_TYPE

    def _read_return_type(self, text: str, pos: int, end: int) -> str:
        raise NotImplementedError

    @staticmethod
    def _capture_return_type(text: str, pos: int, end: int) -> str:
        type_text, _ = capture_type(text, pos, end)
        # Drop a trailing generic constraint clause
        words = type_text.split(" where ", 1)
        return words[0].strip()

    def parse_params(self, params_text: str) -> list[Parameter]:
        """Split a raw parameter list into ordered Parameters"""
        params = []
        for segment in split_top_level(strip_comments(params_text), ","):
            declaration = split_top_level(segment, "=")
            if not declaration:
                continue
            pieces = split_top_level(declaration[0], ":")
            name = self._last_word(pieces[0])
            if not name:
                continue
            source_type = ": ".join(pieces[1:])
            params.append(Parameter(name, source_type))
        return params

    @staticmethod
    def _last_word(text: str) -> str:
        name = ""
        pos = 0
        while True:
            token = next_token(text, pos)
            if token is None:
                return name
            if token.kind == WORD:
                name = token.value
            pos = token.end

    def _is_sink(self, source_type: str) -> bool:
        base = source_type.strip().rstrip("?!").strip()
        return base.rsplit(".", 1)[-1] in self.SINK_TYPES

    def _stream_name(self, name: str) -> str:
        return name


class KotlinExtractor(DeclarationExtractor):
    """Kotlin: @NativeBridge classes, @NativeFunction members, @NativeIgnore exclusions"""

    EXTENSION = ".kt"
    ORIGIN = Origin.ANDROID
    CLASS_MARKER = "NativeBridge"
    MEMBER_MARKER = "NativeFunction"
    EXCLUDE_MARKER = "NativeIgnore"
    RESTRICTED_MODIFIERS = frozenset({"private", "internal", "protected"})
    MODIFIERS = frozenset({
        "public", "private", "internal", "protected", "open", "final", "abstract",
        "override", "suspend", "inline", "data", "enum", "sealed", "inner",
        "operator", "infix", "tailrec", "external", "annotation", "companion",
        "value", "expect", "actual",
    })
    MEMBER_KEYWORD = "fun"
    VOID_TYPE = "Unit"

    def _read_return_type(self, text: str, pos: int, end: int) -> str:
        token = next_token(text, pos, end)
        if token is not None and token.value == ":":
            return self._capture_return_type(text, token.end, end)
        return ""


class SwiftExtractor(DeclarationExtractor):
    """Swift: @objcMembers classes, @objc members, @nonobjc exclusions"""

    EXTENSION = ".swift"
    ORIGIN = Origin.IOS
    CLASS_MARKER = "objcMembers"
    MEMBER_MARKER = "objc"
    EXCLUDE_MARKER = "nonobjc"
    RESTRICTED_MODIFIERS = frozenset({"private", "fileprivate"})
    TYPE_MEMBER_MODIFIERS = frozenset({"static", "class"})
    MODIFIERS = frozenset({
        "public", "private", "fileprivate", "internal", "open", "final", "static",
        "override", "dynamic", "required", "convenience", "mutating",
        "nonmutating", "lazy", "weak", "unowned", "indirect", "nonisolated",
    })
    MEMBER_KEYWORD = "func"
    VOID_TYPE = "Void"

    # Host scaffolding classes that are never bridged
    IGNORED_CLASS_SUFFIXES = ("AppDelegate", "Plugin")
    IGNORED_SUPERTYPES = frozenset({"FlutterAppDelegate"})

    STREAM_SUFFIX = "WithSink"

    def _is_exposable_class(self, name: str, supertypes: list[str]) -> bool:
        if name.endswith(self.IGNORED_CLASS_SUFFIXES):
            return False
        return not self.IGNORED_SUPERTYPES.intersection(supertypes)

    def _read_return_type(self, text: str, pos: int, end: int) -> str:
        token = next_token(text, pos, end)
        while token is not None and token.value in ("throws", "rethrows", "async"):
            pos = token.end
            token = next_token(text, pos, end)
        if token is not None and token.value == "->":
            return self._capture_return_type(text, token.end, end)
        return ""

    def _stream_name(self, name: str) -> str:
        # The iOS dispatcher resolves "fooWithSink:" as stream "foo"
        if name.endswith(self.STREAM_SUFFIX) and len(name) > len(self.STREAM_SUFFIX):
            return name[:-len(self.STREAM_SUFFIX)]
        return name
