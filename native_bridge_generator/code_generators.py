"""
Code generation functions for Dart bridge classes
"""

from .constants import (
    DART_DYNAMIC,
    DART_VOID,
    DEFAULT_CHANNEL,
    DEFAULT_EVENT_PREFIX,
    GENERATED_HEADER,
    REQUIRED_IMPORTS,
)
from .models import Call, LogicalEntity, Subscription
from .type_mapper import TypeMapper


class CodeGenerator:
    """Generates Dart proxy classes from merged logical entities"""

    def __init__(self, type_mapper: TypeMapper, event_prefix: str = DEFAULT_EVENT_PREFIX):
        self.type_mapper = type_mapper
        self.event_prefix = event_prefix

    def generate_class(self, entity: LogicalEntity) -> str:
        """Generate one static, non-instantiable Dart class for an entity"""
        lines = [
            f"/// Generated bridge for {entity.name}",
            f"class {entity.name} {{",
            f"  {entity.name}._();",
        ]
        for member in entity.callables:
            lines.append("")
            lines.append(self.generate_callable(entity.name, member))
        lines.append("}")
        return "\n".join(lines) + "\n"

    def generate_callable(self, class_name: str, member) -> str:
        if isinstance(member, Call):
            return self.generate_call(class_name, member)
        if isinstance(member, Subscription):
            return self.generate_subscription(class_name, member)
        raise TypeError(f"Unsupported callable kind: {type(member).__name__}")

    def generate_call(self, class_name: str, member: Call) -> str:
        """Generate a MethodChannel request/response function"""
        dart_type = self.type_mapper.map_type(member.return_type)
        target = f"'{class_name}.{member.name}'"
        arguments = self._invoke_arguments(target, member.params)

        if dart_type in (DART_VOID, DART_DYNAMIC):
            # void cannot be wrapped as a nullable result
            signature = f"static Future<dynamic> {member.name}({self._param_list(member.params)}) async"
            invocation = f"_channel.invokeMethod({arguments})"
        else:
            signature = f"static Future<{dart_type}?> {member.name}({self._param_list(member.params)}) async"
            invocation = f"_channel.invokeMethod<{dart_type}>({arguments})"

        return (
            f"  /// Calls native {class_name}.{member.name}\n"
            f"  {signature} {{\n"
            f"    return {invocation};\n"
            f"  }}"
        )

    def generate_subscription(self, class_name: str, member: Subscription) -> str:
        """Generate an EventChannel stream function; every call opens a new subscription"""
        dart_type = self.type_mapper.map_type(member.return_type)
        if dart_type == DART_VOID:
            dart_type = DART_DYNAMIC
        channel = f"'{self.event_prefix}{class_name}.{member.name}'"
        payload = self._payload(member.params)

        stream = f"const EventChannel({channel}).receiveBroadcastStream({payload})"
        if dart_type != DART_DYNAMIC:
            stream += f".cast<{dart_type}>()"

        return (
            f"  /// Subscribes to native {class_name}.{member.name}\n"
            f"  static Stream<{dart_type}> {member.name}({self._param_list(member.params)}) {{\n"
            f"    return {stream};\n"
            f"  }}"
        )

    def _param_list(self, params) -> str:
        return ", ".join(f"{self._param_type(p.source_type)} {self._escape_keyword(p.name)}" for p in params)

    def _param_type(self, source_type: str) -> str:
        dart_type = self.type_mapper.map_type(source_type)
        if source_type.strip().endswith(("?", "!")) and dart_type != DART_DYNAMIC:
            return f"{dart_type}?"
        return dart_type

    def _invoke_arguments(self, target: str, params) -> str:
        payload = self._payload(params)
        return f"{target}, {payload}" if payload else target

    def _payload(self, params) -> str:
        """Zero params: no payload; one: the bare value; more: a name-keyed map"""
        if not params:
            return ""
        if len(params) == 1:
            return self._escape_keyword(params[0].name)
        entries = ", ".join(f"'{p.name}': {self._escape_keyword(p.name)}" for p in params)
        return f"{{{entries}}}"

    @staticmethod
    def _escape_keyword(name: str) -> str:
        """Escape Dart reserved words by appending an underscore"""
        dart_keywords = {
            'assert', 'break', 'case', 'catch', 'class', 'const', 'continue',
            'default', 'do', 'else', 'enum', 'extends', 'false', 'final',
            'finally', 'for', 'if', 'in', 'is', 'new', 'null', 'rethrow',
            'return', 'super', 'switch', 'this', 'throw', 'true', 'try', 'var',
            'void', 'while', 'with', 'await', 'yield',
        }
        if name in dart_keywords:
            return f"{name}_"
        return name


class OutputBuilder:
    """Builds the final Dart output file"""

    @staticmethod
    def build(classes: list[str], channel_name: str = DEFAULT_CHANNEL) -> str:
        """Build the final Dart output"""
        parts = []

        parts.extend(GENERATED_HEADER)
        parts.append("")

        parts.extend(REQUIRED_IMPORTS)
        parts.append("")

        parts.append(f"const _channel = MethodChannel('{channel_name}');")
        parts.append("")

        for code in classes:
            parts.append(code)

        return "\n".join(parts)


def emit(entities: list[LogicalEntity], type_mapper: TypeMapper | None = None,
         channel_name: str = DEFAULT_CHANNEL, event_prefix: str = DEFAULT_EVENT_PREFIX) -> str:
    """Render merged entities as one Dart library; pure and deterministic"""
    generator = CodeGenerator(type_mapper or TypeMapper(), event_prefix)
    classes = [generator.generate_class(entity) for entity in entities]
    return OutputBuilder.build(classes, channel_name)
