"""Tests for build settings publishers."""

import json
import os
import tempfile
import unittest

from buildstamp import (
    BuildSettings,
    BuildSettingsPublisher,
    NullPublisher,
    RecordingPublisher,
    VersionEncodingError,
    VersionStage,
    VersionState,
    VersionStore,
)


class TestBuildSettingsPublisher(unittest.TestCase):
    """The four build slots receive the version independently."""

    def setUp(self):
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        self.publisher = BuildSettingsPublisher()
        self.store = VersionStore(
            path=os.path.join(tmpdir.name, "versionConfig.json"),
            publisher=self.publisher,
        )

    def test_bundle_version(self):
        self.store.set_version(1, 2, 3, VersionStage.ALPHA, 4)
        self.assertEqual(self.publisher.settings.bundle_version, "1.2.3a4")

        self.store.set_version(2, 3, 4, VersionStage.BETA, 5)
        self.assertEqual(self.publisher.settings.bundle_version, "2.3.4b5")

        self.store.set_version(3, 4, 5, VersionStage.RC, 6)
        self.assertEqual(self.publisher.settings.bundle_version, "3.4.5rc6")

        self.store.set_version(4, 5, 6, VersionStage.RELEASE, 7)
        self.assertEqual(self.publisher.settings.bundle_version, "4.5.6f7")

    def test_package_version_is_four_part(self):
        self.store.set_version(1, 2, 3, VersionStage.ALPHA, 4)

        self.assertEqual(self.publisher.settings.package_version, "1.2.3.4")

    def test_version_code_is_numeric(self):
        self.store.set_version(1, 2, 3, VersionStage.ALPHA, 4)

        self.assertEqual(self.publisher.settings.version_code, 10203)

    def test_build_number_matches_version_string(self):
        self.store.set_version(3, 4, 5, VersionStage.RC, 6)

        self.assertEqual(self.publisher.settings.build_number, "3.4.5rc6")

    def test_increment_build_updates_settings(self):
        self.store.set_version(1, 2, 3, VersionStage.ALPHA, 4)
        self.store.increment_build()

        self.assertEqual(self.publisher.settings.bundle_version, "1.2.3a5")
        self.assertEqual(self.publisher.settings.package_version, "1.2.3.5")

    def test_encoding_overflow_keeps_previous_version_code(self):
        self.store.set_version(1, 2, 3, VersionStage.ALPHA, 4)

        with self.assertRaises(VersionEncodingError):
            self.publisher.publish(
                VersionState(major=1, minor=150, patch=0, stage_number=0, build=0)
            )

        self.assertEqual(self.publisher.settings.version_code, 10203)
        self.assertEqual(self.publisher.settings.bundle_version, "1.150.0a0")

    def test_store_survives_encoding_overflow(self):
        with self.assertLogs("buildstamp.store", level="ERROR"):
            self.store.set_version(1, 150, 0, VersionStage.ALPHA)

        self.assertEqual(self.store.current().minor, 150)

    def test_encoding_overflow_still_writes_string_slots(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "build_settings.json")
            store = VersionStore(
                path=os.path.join(tmpdir, "versionConfig.json"),
                publisher=BuildSettingsPublisher(path=path),
            )
            store.set_version(1, 2, 3, VersionStage.ALPHA)

            with self.assertLogs("buildstamp.store", level="ERROR"):
                store.set_version(1, 100, 0, VersionStage.BETA)

            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)

        self.assertEqual(data["bundle_version"], "1.100.0b0")
        self.assertEqual(data["build_number"], "1.100.0b0")
        self.assertEqual(data["package_version"], "1.100.0.0")
        self.assertEqual(data["version_code"], 10203)

    def test_writes_settings_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "out", "build_settings.json")
            publisher = BuildSettingsPublisher(path=path)

            publisher.publish(
                VersionState(major=1, minor=2, patch=3, stage_number=1, build=4)
            )

            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)

        self.assertEqual(
            data,
            {
                "bundle_version": "1.2.3b4",
                "package_version": "1.2.3.4",
                "version_code": 10203,
                "build_number": "1.2.3b4",
            },
        )


class TestOtherPublishers(unittest.TestCase):
    def test_null_publisher_does_nothing(self):
        self.assertIsNone(NullPublisher().publish(VersionState.default()))

    def test_recording_publisher_snapshots(self):
        publisher = RecordingPublisher()
        state = VersionState.default()

        publisher.publish(state)
        state.build = 9
        publisher.publish(state)

        self.assertEqual([s.build for s in publisher.published], [0, 9])
        self.assertEqual(publisher.last.build, 9)

    def test_recording_publisher_empty(self):
        self.assertIsNone(RecordingPublisher().last)

    def test_build_settings_defaults_empty(self):
        self.assertEqual(
            BuildSettings().to_dict(),
            {
                "bundle_version": None,
                "package_version": None,
                "version_code": None,
                "build_number": None,
            },
        )


if __name__ == "__main__":
    unittest.main()
