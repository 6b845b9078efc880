"""Tests for the persisted JSON encoding."""

import unittest

from buildstamp import (
    MalformedStateError,
    VersionStage,
    VersionState,
    decode_state,
    encode_state,
    is_legacy_payload,
)


class TestEncodeState(unittest.TestCase):
    def test_exact_key_order_and_compact_shape(self):
        state = VersionState(
            package_version=200,
            major=1,
            minor=2,
            patch=3,
            stage_number=int(VersionStage.RC),
            build=4,
        )

        self.assertEqual(
            encode_state(state),
            '{"packageVersion":200,"majorVersion":1,"minorVersion":2,'
            '"patchVersion":3,"stageNumber":2,"buildVersion":4}',
        )

    def test_no_trailing_newline(self):
        self.assertFalse(encode_state(VersionState.default()).endswith("\n"))


class TestDecodeState(unittest.TestCase):
    def test_decodes_current_shape(self):
        state = decode_state(
            '{"packageVersion":200,"majorVersion":3,"minorVersion":4,'
            '"patchVersion":5,"stageNumber":3,"buildVersion":6}'
        )

        self.assertEqual(state.package_version, 200)
        self.assertEqual(state.version_tuple, (3, 4, 5, 6))
        self.assertEqual(state.stage, VersionStage.RELEASE)

    def test_whitespace_and_key_order_do_not_matter(self):
        state = decode_state(
            '{\n  "buildVersion": 1,\n  "stageNumber": 1,\n  "packageVersion": 300,\n'
            '  "majorVersion": 2, "minorVersion": 0, "patchVersion": 0\n}\n'
        )

        self.assertEqual(state.version_string, "2.0.0b1")
        self.assertEqual(state.package_version, 300)

    def test_legacy_shape_decodes_with_zero_package_version(self):
        state = decode_state(
            '{"majorVersion":1,"minorVersion":2,"patchVersion":3,"stage":1,"buildVersion":7}'
        )

        self.assertEqual(state.package_version, 0)
        self.assertEqual(state.stage, VersionStage.BETA)
        self.assertEqual(state.version_string, "1.2.3b7")

    def test_missing_fields_read_as_zero(self):
        state = decode_state('{"packageVersion":200,"majorVersion":5}')

        self.assertEqual(state.version_tuple, (5, 0, 0, 0))
        self.assertEqual(state.stage, VersionStage.ALPHA)

    def test_unknown_stage_number_survives(self):
        state = decode_state('{"packageVersion":200,"stageNumber":7}')

        self.assertEqual(state.stage_number, 7)
        self.assertIsNone(state.stage)

    def test_invalid_json(self):
        with self.assertRaises(MalformedStateError) as ctx:
            decode_state("{not json", path="versionConfig.json")

        self.assertEqual(ctx.exception.path, "versionConfig.json")
        self.assertIn("versionConfig.json", str(ctx.exception))

    def test_non_object_document(self):
        with self.assertRaises(MalformedStateError):
            decode_state("[1, 2, 3]")

    def test_non_integer_field(self):
        with self.assertRaises(MalformedStateError):
            decode_state('{"packageVersion":200,"majorVersion":"1"}')

    def test_boolean_field_rejected(self):
        with self.assertRaises(MalformedStateError):
            decode_state('{"packageVersion":200,"buildVersion":true}')

    def test_decodes_utf8_bytes(self):
        state = decode_state(b'{"packageVersion":200,"majorVersion":6}')

        self.assertEqual(state.major, 6)

    def test_invalid_utf8_bytes(self):
        with self.assertRaises(MalformedStateError) as ctx:
            decode_state(b'{"majorVersion":\xff}', path="versionConfig.json")

        self.assertIn("invalid UTF-8", str(ctx.exception))

    def test_empty_file(self):
        with self.assertRaises(MalformedStateError):
            decode_state("")


class TestLegacyDetection(unittest.TestCase):
    def test_legacy_payload(self):
        self.assertTrue(is_legacy_payload({"majorVersion": 1, "stage": 0}))

    def test_current_payload(self):
        self.assertFalse(is_legacy_payload({"packageVersion": 200}))


if __name__ == "__main__":
    unittest.main()
