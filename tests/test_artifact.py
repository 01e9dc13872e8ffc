"""Tests for artifact hash extraction and recording."""
from pathlib import Path

import pytest

from emlib_builder.artifact import (
    HASH_FILE_NAME,
    default_out_dir,
    extract_hash_token,
    format_hash_record,
    read_hash_record,
    record_hash,
)
from emlib_builder.errors import ArtifactPathError
from emlib_builder.kits import KitVariant
from emlib_builder.profiles import Profile, assemble, base_config

CARGO_OUT_DIR = ".../target/thumbv7m-none-eabi/build/pkg-abcdef1234567890/out"


class TestExtractHashToken:

    def test_cargo_style_path(self):
        assert extract_hash_token(CARGO_OUT_DIR) == "abcdef1234567890"

    def test_rightmost_dash_token_is_used(self):
        path = "/home/dev/target/build/emlib-sys-0f1e2d3c4b5a6978/out"
        assert extract_hash_token(path) == "0f1e2d3c4b5a6978"

    def test_accepts_path_objects(self):
        assert extract_hash_token(Path("/a/b/pkg-1234/out")) == "1234"

    def test_minimal_three_components(self):
        assert extract_hash_token("build/pkg-42/out") == "42"

    @pytest.mark.parametrize("path", ["out", "pkg-1234/out", "/out", ""])
    def test_too_few_components(self, path):
        with pytest.raises(ArtifactPathError, match="fewer than 3"):
            extract_hash_token(path)

    def test_segment_without_dash(self):
        with pytest.raises(ArtifactPathError, match="no `-<hash>` suffix"):
            extract_hash_token("target/build/pkg/out")

    def test_empty_token(self):
        with pytest.raises(ArtifactPathError, match="empty hash"):
            extract_hash_token("target/build/pkg-/out")


class TestRecordHash:

    def test_format(self):
        assert format_hash_record("abcdef1234567890") == "HASH=abcdef1234567890"

    def test_writes_record(self, tmp_path):
        target = record_hash(CARGO_OUT_DIR, tmp_path)
        assert target == tmp_path / HASH_FILE_NAME
        assert target.read_text() == "HASH=abcdef1234567890"

    def test_prints_record(self, tmp_path, capsys):
        record_hash(CARGO_OUT_DIR, tmp_path)
        assert "HASH=abcdef1234567890" in capsys.readouterr().out

    def test_rebuild_overwrites(self, tmp_path):
        record_hash("target/build/pkg-aaaaaaaaaaaaaaaaaaaa/out", tmp_path)
        record_hash("target/build/pkg-bbbb/out", tmp_path)
        assert (tmp_path / HASH_FILE_NAME).read_text() == "HASH=bbbb"

    def test_bad_path_writes_nothing(self, tmp_path):
        with pytest.raises(ArtifactPathError):
            record_hash("out", tmp_path)
        assert not (tmp_path / HASH_FILE_NAME).exists()

    def test_bad_path_keeps_previous_record(self, tmp_path):
        record_hash(CARGO_OUT_DIR, tmp_path)
        with pytest.raises(ArtifactPathError):
            record_hash("target/build/pkg/out", tmp_path)
        assert read_hash_record(tmp_path) == "abcdef1234567890"

    def test_write_failure_propagates(self, tmp_path):
        with pytest.raises(OSError):
            record_hash(CARGO_OUT_DIR, tmp_path / "missing")


class TestReadHashRecord:

    def test_round_trip(self, tmp_path):
        record_hash(CARGO_OUT_DIR, tmp_path)
        assert read_hash_record(tmp_path) == "abcdef1234567890"

    @pytest.mark.parametrize("content", ["", "HASH=", "abcdef", "hash=abcdef"])
    def test_malformed_record(self, tmp_path, content):
        (tmp_path / HASH_FILE_NAME).write_text(content)
        with pytest.raises(ArtifactPathError, match="Malformed"):
            read_hash_record(tmp_path)


class TestDefaultOutDir:

    def test_layout(self, tmp_path):
        config = assemble(Profile.TEST, base_config(str(tmp_path)), KitVariant.DK3750)
        out_dir = default_out_dir(tmp_path / "build", KitVariant.DK3750, Profile.TEST, config)
        expected = tmp_path / "build" / "dk3750" / "test" / ("emlib-" + config.fingerprint()) / "out"
        assert out_dir == str(expected)

    def test_hash_is_configuration_fingerprint(self, tmp_path):
        config = assemble(Profile.PRODUCTION, base_config(str(tmp_path)), KitVariant.STK3700)
        out_dir = default_out_dir(tmp_path, KitVariant.STK3700, Profile.PRODUCTION, config)
        assert extract_hash_token(out_dir) == config.fingerprint()

    def test_profiles_get_different_hashes(self, tmp_path):
        tokens = set()
        for profile in Profile:
            config = assemble(profile, base_config(str(tmp_path)), KitVariant.STK3700)
            tokens.add(extract_hash_token(
                default_out_dir(tmp_path, KitVariant.STK3700, profile, config)
            ))
        assert len(tokens) == 2

    def test_hash_does_not_depend_on_checkout(self, tmp_path):
        tokens = set()
        for checkout in ("/home/alice/emlib", "/ci/work/emlib"):
            config = assemble(Profile.PRODUCTION, base_config(checkout), KitVariant.STK3700)
            tokens.add(extract_hash_token(
                default_out_dir(tmp_path, KitVariant.STK3700, Profile.PRODUCTION, config)
            ))
        assert len(tokens) == 1
