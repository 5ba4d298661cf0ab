# -*- coding: utf-8 -*-
"""
Tests for folderdeck.update.manifest - manifest parsing and version checks.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

Created
-------
2026-10-19
"""

import base64
from unittest.mock import patch

import pytest

from folderdeck.update.manifest import (
    current_platform_key,
    decode_signature,
    is_newer,
    parse_manifest,
)


SIG = base64.b64encode(b"\x01" * 64).decode()


def _doc(**overrides):
    doc = {
        'version': '1.2.0',
        'notes': 'Fixes',
        'pub_date': '2026-10-01T12:00:00Z',
        'platforms': {
            'linux-x86_64': {
                'url': 'https://example.com/folderdeck-1.2.0-linux.tar.gz',
                'signature': SIG,
            },
        },
    }
    doc.update(overrides)
    return doc


# ---------------------------------------------------------------------------
# parse_manifest
# ---------------------------------------------------------------------------

class TestParseManifest:

    def test_selects_platform(self):
        m = parse_manifest(_doc(), 'linux-x86_64')
        assert m.version == '1.2.0'
        assert m.download_url.endswith('linux.tar.gz')
        assert m.signature == b"\x01" * 64
        assert m.notes == 'Fixes'
        assert m.pub_date == '2026-10-01T12:00:00Z'
        assert m.platform == 'linux-x86_64'

    def test_missing_platform_returns_none(self):
        assert parse_manifest(_doc(), 'windows-x86_64') is None

    def test_optional_fields(self):
        doc = _doc()
        del doc['notes']
        del doc['pub_date']
        m = parse_manifest(doc, 'linux-x86_64')
        assert m.notes is None
        assert m.pub_date is None

    @pytest.mark.parametrize("data", [
        [],
        {'platforms': {}},
        {'version': 'not-a-version!', 'platforms': {}},
        {'version': '1.0.0'},
        {'version': '1.0.0', 'platforms': {'linux-x86_64': 'nope'}},
        {'version': '1.0.0', 'platforms': {'linux-x86_64': {'url': 'https://x'}}},
    ])
    def test_malformed(self, data):
        with pytest.raises(ValueError):
            parse_manifest(data, 'linux-x86_64')

    def test_rejects_plain_http(self):
        doc = _doc(platforms={'linux-x86_64': {
            'url': 'http://example.com/update.zip', 'signature': SIG,
        }})
        with pytest.raises(ValueError):
            parse_manifest(doc, 'linux-x86_64')

    def test_bad_signature_encoding_kept_as_empty(self):
        doc = _doc(platforms={'linux-x86_64': {
            'url': 'https://example.com/update.zip', 'signature': '!!not base64!!',
        }})
        assert parse_manifest(doc, 'linux-x86_64').signature == b''


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------

class TestIsNewer:
    def test_newer(self):
        assert is_newer("1.0.0", "2.0.0") is True

    def test_same(self):
        assert is_newer("1.0.0", "1.0.0") is False

    def test_older(self):
        assert is_newer("2.0.0", "1.0.0") is False

    def test_numeric_not_lexical(self):
        assert is_newer("1.9.0", "1.10.0") is True

    def test_prerelease_older_than_release(self):
        assert is_newer("1.0.0", "1.0.0rc1") is False

    def test_invalid_version(self):
        assert is_newer("1.0.0", "not.a.version") is False


class TestDecodeSignature:
    def test_valid(self):
        assert decode_signature(" " + SIG + "\n") == b"\x01" * 64

    def test_invalid(self):
        assert decode_signature("***") == b''


class TestPlatformKey:
    @pytest.mark.parametrize("plat, machine, expected", [
        ('linux', 'x86_64', 'linux-x86_64'),
        ('darwin', 'arm64', 'darwin-aarch64'),
        ('win32', 'AMD64', 'windows-x86_64'),
        ('linux', 'riscv64', 'linux-riscv64'),
    ])
    def test_mapping(self, plat, machine, expected):
        with patch('folderdeck.update.manifest.sys.platform', plat), \
                patch('folderdeck.update.manifest.platform.machine',
                      return_value=machine):
            assert current_platform_key() == expected
