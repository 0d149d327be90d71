"""
Tests for the Kotlin declaration extractor
"""

import pytest

from native_bridge_generator.extractors import KotlinExtractor
from native_bridge_generator.models import Call, Origin, Parameter, Subscription


class TestKotlinExtractor:
    """Test extraction of @NativeBridge / @NativeFunction declarations"""

    def setup_method(self):
        self.extractor = KotlinExtractor()

    def test_parses_native_bridge_class(self):
        """Test that all public methods of a @NativeBridge class are exposed"""
        classes = self.extractor.extract("""
package com.example.app

@NativeBridge
class DeviceService {
    fun getModel(): String = Build.MODEL
    fun getVersion(): Int = Build.VERSION.SDK_INT
}
""")

        assert len(classes) == 1
        assert classes[0].name == "DeviceService"
        assert classes[0].origin == Origin.ANDROID
        assert classes[0].callable_names() == ["getModel", "getVersion"]
        assert classes[0].callables[0].return_type == "String"
        assert classes[0].callables[1].return_type == "Int"

    def test_parses_native_function_methods(self):
        """Test that only @NativeFunction methods are exposed without a class marker"""
        classes = self.extractor.extract("""
class MainActivity : FlutterActivity() {
    @NativeFunction
    fun greet(name: String): String = "Hello, $name!"

    @NativeFunction
    fun add(a: Int, b: Int): Int = a + b

    fun privateMethod(): String = "Not exposed"
}
""")

        assert len(classes) == 1
        assert classes[0].name == "MainActivity"
        assert classes[0].callable_names() == ["greet", "add"]
        assert classes[0].callables[0].params == (Parameter("name", "String"),)
        assert len(classes[0].callables[1].params) == 2

    def test_exposure_filtering(self):
        """Test that excluded and restricted members are dropped under whole-class exposure"""
        classes = self.extractor.extract("""
@NativeBridge
class Service {
    fun plain(): String = "exposed"

    @NativeIgnore
    fun ignoredMethod(): String = "not exposed"

    private fun hidden(): Int = 42
}
""")

        assert len(classes) == 1
        assert classes[0].callable_names() == ["plain"]

    @pytest.mark.parametrize("modifier", ["private", "internal", "protected"])
    def test_restricted_visibility(self, modifier):
        classes = self.extractor.extract(f"""
@NativeBridge
class Service {{
    {modifier} fun hidden(): Int = 1
    fun shown(): Int = 2
}}
""")
        assert classes[0].callable_names() == ["shown"]

    def test_single_member_exposure(self):
        classes = self.extractor.extract("""
class Helper {
    @NativeFunction
    fun exposed(): Boolean = true

    fun notExposed(): Boolean = false
}
""")

        assert len(classes) == 1
        assert classes[0].callable_names() == ["exposed"]

    def test_parses_methods_with_no_parameters(self):
        classes = self.extractor.extract("""
@NativeBridge
class Test {
    fun noParams(): String = "hello"
}
""")

        assert classes[0].callables[0].params == ()

    def test_parameter_order_and_types(self):
        classes = self.extractor.extract("""
@NativeBridge
class Calculator {
    fun calculate(a: Int, b: Int, operation: String): Int = 0
}
""")

        assert classes[0].callables[0].params == (
            Parameter("a", "Int"),
            Parameter("b", "Int"),
            Parameter("operation", "String"),
        )

    def test_generic_parameter_is_not_split(self):
        classes = self.extractor.extract("""
@NativeBridge
class Store {
    fun save(values: Map<String, Int>, key: String): Boolean = true
}
""")

        assert classes[0].callables[0].params == (
            Parameter("values", "Map<String, Int>"),
            Parameter("key", "String"),
        )

    def test_default_values_and_modifiers_in_parameters(self):
        classes = self.extractor.extract("""
@NativeBridge
class Logger {
    fun log(vararg messages: String, level: Int = 3, tag: String? = null) {
        println(messages)
    }
}
""")

        assert classes[0].callables[0].params == (
            Parameter("messages", "String"),
            Parameter("level", "Int"),
            Parameter("tag", "String?"),
        )

    def test_comments_in_parameter_list(self):
        classes = self.extractor.extract("""
@NativeBridge
class Timer {
    fun start(
        delay: Long, // unit: milliseconds
        repeat: Boolean /* times, or forever */
    ): Unit {}
}
""")

        assert classes[0].callables == [
            Call("start", "Unit", (Parameter("delay", "Long"), Parameter("repeat", "Boolean"))),
        ]

    def test_comparison_in_default_value(self):
        classes = self.extractor.extract("""
@NativeBridge
class Limits {
    fun clamp(flag: Boolean = 1 < 2, limit: Int): Int = limit
}
""")

        assert classes[0].callables[0].params == (
            Parameter("flag", "Boolean"),
            Parameter("limit", "Int"),
        )

    def test_parses_unit_return_type(self):
        classes = self.extractor.extract("""
@NativeBridge
class Actions {
    fun doSomething() {
        println("done")
    }
}
""")

        assert classes[0].callables[0].return_type == "Unit"

    def test_generic_return_type(self):
        classes = self.extractor.extract("""
@NativeBridge
class Data {
    fun getData(): Map<String, Any> {
        return mapOf()
    }
}
""")

        assert classes[0].callables[0].return_type == "Map<String, Any>"

    def test_stream_sink_member_is_subscription(self):
        classes = self.extractor.extract("""
@NativeBridge
class CounterService {
    private val handler = Handler(Looper.getMainLooper())

    @NativeStream
    fun counterUpdates(sink: StreamSink) {
        handler.post { sink.success(mapOf("count" to 1)) }
    }

    fun stopCounter() {
        handler.removeCallbacksAndMessages(null)
    }
}
""")

        members = classes[0].callables
        assert members[0] == Subscription("counterUpdates", "Unit", ())
        assert members[1] == Call("stopCounter", "Unit", ())

    def test_subscription_ignores_markers_and_visibility(self):
        classes = self.extractor.extract("""
class Sensors {
    private fun readings(interval: Long, sink: StreamSink?): Double {
        return 0.0
    }
}
""")

        assert len(classes) == 1
        assert classes[0].callables == [Subscription("readings", "Double", (Parameter("interval", "Long"),))]

    def test_drops_class_without_exposed_members(self):
        classes = self.extractor.extract("""
@NativeBridge
class Internal {
    @NativeIgnore
    fun ignored(): String = ""

    private fun hidden(): String = ""
}
""")

        assert classes == []

    def test_ignores_files_without_annotations(self):
        classes = self.extractor.extract("""
class PlainClass {
    fun regularMethod(): String = "not exposed"
}
""")

        assert classes == []

    def test_handles_class_with_inheritance_and_constructor(self):
        classes = self.extractor.extract("""
@NativeBridge
class Extended(private val context: Context) : BaseClass(), SomeInterface {
    fun extendedMethod(): String = ""
}
""")

        assert len(classes) == 1
        assert classes[0].name == "Extended"
        assert classes[0].callable_names() == ["extendedMethod"]

    def test_nested_bodies_are_not_members(self):
        classes = self.extractor.extract("""
@NativeBridge
class Outer {
    fun first(): Int {
        val r = object : Runnable {
            override fun run() {}
        }
        return 1
    }

    companion object {
        fun create(): Outer = Outer()
    }

    class Inner {
        @NativeFunction
        fun innerMethod(): String = ""
    }

    fun second(): Int = 2
}
""")

        names = {entity.name: entity.callable_names() for entity in classes}
        assert names == {"Outer": ["first", "second"], "Inner": ["innerMethod"]}

    def test_class_literals_are_not_class_headers(self):
        classes = self.extractor.extract("""
@NativeBridge
class Registry {
    fun kind(): String = Registry::class.java.name
}
""")

        assert [entity.name for entity in classes] == ["Registry"]

    def test_annotation_arguments(self):
        classes = self.extractor.extract("""
@NativeBridge(name = "svc")
class Service {
    @Deprecated("use other")
    fun old(): Int = 1
}
""")

        assert classes[0].callable_names() == ["old"]

    def test_unbalanced_class_body_is_reported(self):
        classes = self.extractor.extract("""
@NativeBridge
class Broken {
    fun open(): Int {
        return 1
""", source="Broken.kt")

        assert [entity.name for entity in classes] == ["Broken"]
        assert len(self.extractor.warnings) == 1
        assert "Broken.kt" in self.extractor.warnings[0]
        assert "Broken" in self.extractor.warnings[0]

    def test_overloads_keep_first_definition(self):
        classes = self.extractor.extract("""
@NativeBridge
class Overloaded {
    fun value(): Int = 1
    fun value(x: Int): Int = x
}
""")

        assert classes[0].callables == [Call("value", "Int", ())]
        assert any("Overloaded.value" in warning for warning in self.extractor.warnings)

    def test_parses_directory_recursively(self, temp_dir):
        sub_dir = temp_dir / "subpackage"
        sub_dir.mkdir()

        (temp_dir / "Service1.kt").write_text("""
@NativeBridge
class Service1 {
    fun method1(): String = ""
}
""")
        (sub_dir / "Service2.kt").write_text("""
@NativeBridge
class Service2 {
    fun method2(): Int = 0
}
""")
        (temp_dir / "Notes.txt").write_text("@NativeBridge class NotKotlin { fun x() {} }")

        classes = self.extractor.extract_directory(temp_dir)

        assert [entity.name for entity in classes] == ["Service1", "Service2"]

    def test_missing_directory_yields_nothing(self, temp_dir):
        assert self.extractor.extract_directory(temp_dir / "missing") == []
