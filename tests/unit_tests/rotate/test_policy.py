"""
Rotation policy and writer factory tests.
"""

from __future__ import annotations

import io
import os
import stat

import pytest
from pydantic import ValidationError

from logroute.rotate import RotatingFileWriter, RotationPolicy

TEST_LOG_FILE_NAME = "test.log"


class TestRotationPolicyConfig:
    """Binding from configuration keys"""

    def test_config_keys_map_to_fields(self) -> None:
        policy = RotationPolicy.model_validate(
            {"enable": True, "max_megabytes": 10, "max_days": 3, "max_backups": 4, "localtime": True}
        )
        assert policy.enabled is True
        assert policy.max_megabytes == 10
        assert policy.max_days == 3
        assert policy.max_backups == 4
        assert policy.local_time is True

    def test_defaults_are_disabled_and_zero(self) -> None:
        policy = RotationPolicy()
        assert policy.enabled is False
        assert (policy.max_megabytes, policy.max_days, policy.max_backups) == (0, 0, 0)
        assert policy.local_time is False

    def test_policy_is_immutable(self) -> None:
        policy = RotationPolicy(enabled=True)
        with pytest.raises(ValidationError):
            policy.max_days = 7  # type: ignore[misc]

    def test_negative_limits_rejected(self) -> None:
        with pytest.raises(ValidationError, match="max_backups"):
            RotationPolicy(max_backups=-1)

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RotationPolicy.model_validate({"enable": True, "compress": True})


class TestNewWriter:
    """Choice between a plain file and the rotating writer"""

    def test_rotation_enabled_create(self, tmp_path, monkeypatch) -> None:
        """Enabled policy returns a rotating writer configured with exactly the policy values"""
        monkeypatch.chdir(tmp_path)
        policy = RotationPolicy(
            enabled=True,
            max_megabytes=1524,
            max_days=145,
            max_backups=155,
            local_time=True,
        )
        writer = policy.new_writer(TEST_LOG_FILE_NAME)

        assert isinstance(writer, RotatingFileWriter)
        assert writer.filename == TEST_LOG_FILE_NAME
        assert writer.max_size == 1524
        assert writer.max_age == 145
        assert writer.max_backups == 155
        assert writer.local_time is True
        # Nothing is created before the first write.
        assert not (tmp_path / TEST_LOG_FILE_NAME).exists()

    def test_rotation_disabled_create(self, tmp_path) -> None:
        """Disabled policy returns a plain append-mode file at the requested path"""
        filename = str(tmp_path / TEST_LOG_FILE_NAME)
        writer = RotationPolicy(enabled=False).new_writer(filename)

        assert isinstance(writer, io.FileIO)
        assert writer.name == filename
        assert writer.write(b"hello\n") == 6
        writer.close()
        assert (tmp_path / TEST_LOG_FILE_NAME).read_bytes() == b"hello\n"

    def test_rotation_disabled_appends(self, tmp_path) -> None:
        target = tmp_path / TEST_LOG_FILE_NAME
        target.write_bytes(b"first\n")
        writer = RotationPolicy().new_writer(str(target))
        writer.write(b"second\n")
        writer.close()
        assert target.read_bytes() == b"first\nsecond\n"

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
    def test_rotation_disabled_file_not_group_writable(self, tmp_path) -> None:
        target = tmp_path / TEST_LOG_FILE_NAME
        RotationPolicy().new_writer(str(target)).close()
        mode = stat.S_IMODE(target.stat().st_mode)
        assert not mode & (stat.S_IWGRP | stat.S_IWOTH)

    def test_rotation_disabled_missing_directory_raises(self, tmp_path) -> None:
        with pytest.raises(OSError):
            RotationPolicy().new_writer(str(tmp_path / "missing" / TEST_LOG_FILE_NAME))

    def test_rotation_enabled_missing_directory_does_not_raise(self, tmp_path) -> None:
        writer = RotationPolicy(enabled=True).new_writer(str(tmp_path / "missing" / TEST_LOG_FILE_NAME))
        assert isinstance(writer, RotatingFileWriter)
