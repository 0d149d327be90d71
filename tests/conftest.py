"""
Pytest configuration and fixtures
"""

import pytest
from pathlib import Path


@pytest.fixture
def temp_dir(tmp_path):
    """Temporary working directory"""
    return tmp_path


@pytest.fixture
def kotlin_device_source():
    """Kotlin file with a whole-class bridge and an excluded member"""
    return """
package com.example.app

import io.nativebridge.NativeBridge
import io.nativebridge.NativeIgnore

@NativeBridge
class Device {
    fun getModel(): String = Build.MODEL

    @NativeIgnore
    fun secret(): String = "hidden"
}
"""


@pytest.fixture
def swift_device_source():
    """Swift file with @objc members, one of them a stream"""
    return """
import Foundation
import UIKit

class Device: NSObject {
    @objc func getModel() -> String {
        return UIDevice.current.model
    }

    @objc func battery(sink: StreamSink) -> Void {
        sink.success(UIDevice.current.batteryLevel)
    }
}
"""


@pytest.fixture
def native_sources(tmp_path, kotlin_device_source, swift_device_source):
    """Kotlin and Swift source trees for the Device scenario"""
    kotlin_dir = tmp_path / "android" / "app" / "src" / "main" / "kotlin"
    package_dir = kotlin_dir / "com" / "example" / "app"
    package_dir.mkdir(parents=True)
    (package_dir / "Device.kt").write_text(kotlin_device_source)

    swift_dir = tmp_path / "ios" / "Runner"
    swift_dir.mkdir(parents=True)
    (swift_dir / "Device.swift").write_text(swift_device_source)

    return {
        'kotlin': str(kotlin_dir),
        'swift': str(swift_dir),
        'root': str(tmp_path),
    }


@pytest.fixture
def flutter_project(native_sources):
    """A Flutter project layout with pubspec.yaml at its root"""
    root = Path(native_sources['root'])
    (root / "pubspec.yaml").write_text("name: example_app\n")
    (root / "lib").mkdir()
    return root
