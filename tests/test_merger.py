"""
Tests for cross-platform entity merging
"""

from native_bridge_generator.merger import EntityMerger, MergeConflict, merge
from native_bridge_generator.models import Call, LogicalEntity, Origin, Parameter, Subscription


def android(name, *callables):
    return LogicalEntity(name, list(callables), Origin.ANDROID)


def ios(name, *callables):
    return LogicalEntity(name, list(callables), Origin.IOS)


class TestMerge:
    """Test the union of same-named entities"""

    def test_disjoint_entities_are_kept_in_order(self):
        result = merge(
            [android("Battery", Call("level", "Int"))],
            [ios("Camera", Call("shoot", "Void"))],
        )

        assert [entity.name for entity in result] == ["Battery", "Camera"]
        assert result[0].origin == Origin.ANDROID
        assert result[1].origin == Origin.IOS

    def test_same_name_entities_are_unified(self):
        result = merge(
            [android("Device", Call("getModel", "String"))],
            [ios("Device", Subscription("battery", "Void"))],
        )

        assert len(result) == 1
        device = result[0]
        assert device.origin == Origin.UNIFIED
        assert device.callables == [Call("getModel", "String"), Subscription("battery", "Void")]

    def test_entity_order_follows_first_occurrence(self):
        result = merge(
            [android("B", Call("b", "Int")), android("A", Call("a", "Int"))],
            [ios("C", Call("c", "Int")), ios("A", Call("a2", "Int"))],
        )

        assert [entity.name for entity in result] == ["B", "A", "C"]
        assert result[1].callable_names() == ["a", "a2"]

    def test_empty_inputs(self):
        assert merge([], []) == []
        only = [android("Solo", Call("x", "Int"))]
        assert merge(only, []) == only
        assert merge([], only) == only

    def test_newcomer_wins_on_collision(self):
        merger = EntityMerger()
        result = merger.merge(
            [android("Device", Call("getModel", "String"), Call("reset", "Unit"))],
            [ios("Device", Call("getModel", "String?", (Parameter("verbose", "Bool"),)))],
        )

        members = result[0].callables
        assert members == [
            Call("getModel", "String?", (Parameter("verbose", "Bool"),)),
            Call("reset", "Unit"),
        ]

    def test_differing_collision_is_recorded(self):
        kotlin_version = Call("getModel", "String")
        swift_version = Subscription("getModel", "String")
        merger = EntityMerger()
        merger.merge([android("Device", kotlin_version)], [ios("Device", swift_version)])

        assert merger.conflicts == [MergeConflict("Device", "getModel", swift_version, kotlin_version)]

    def test_identical_collision_is_not_a_conflict(self):
        merger = EntityMerger()
        result = merger.merge(
            [android("Device", Call("getModel", "String"))],
            [ios("Device", Call("getModel", "String"))],
        )

        assert merger.conflicts == []
        assert result[0].callables == [Call("getModel", "String")]

    def test_same_side_entities_are_combined(self):
        """Two files on one platform declaring the same class merge too"""
        result = merge(
            [android("Prefs", Call("get", "String")), android("Prefs", Call("put", "Unit"))],
            [],
        )

        assert len(result) == 1
        assert result[0].callable_names() == ["get", "put"]
        assert result[0].origin == Origin.ANDROID

    def test_inputs_are_not_mutated(self):
        first = android("Device", Call("a", "Int"))
        second = ios("Device", Call("b", "Int"))
        merge([first], [second])

        assert first.callable_names() == ["a"]
        assert second.callable_names() == ["b"]
        assert first.origin == Origin.ANDROID

    def test_repeats_in_second_list_become_unified(self):
        result = merge(
            [],
            [ios("Prefs", Call("get", "String")), ios("Prefs", Call("put", "Void"))],
        )

        assert len(result) == 1
        assert result[0].callable_names() == ["get", "put"]
        assert result[0].origin == Origin.UNIFIED
