from __future__ import annotations

import codecs
from pathlib import Path

import pytest

from hostblock.config import HostblockConfig, default_hosts_path
from hostblock.exceptions import HostblockConfigError
from hostblock.markers import DEFAULT_MARKERS

pytestmark = pytest.mark.unit


class TestDefaultHostsPath:
    def test_posix(self):
        assert default_hosts_path("linux", {}) == Path("/etc/hosts")
        assert default_hosts_path("darwin", {}) == Path("/etc/hosts")

    def test_windows_uses_system_root(self):
        path = default_hosts_path("win32", {"SystemRoot": r"D:\Win"})
        assert path == Path(r"D:\Win") / "System32" / "drivers" / "etc" / "hosts"

    def test_windows_fallback_root(self):
        path = default_hosts_path("win32", {})
        assert path == Path(r"C:\Windows") / "System32" / "drivers" / "etc" / "hosts"


class TestLoad:
    def test_defaults(self):
        config = HostblockConfig.load(environ={})
        assert config.markers == DEFAULT_MARKERS
        assert config.encoding == "ascii"
        assert config.backup is True
        assert config.elevate == "auto"
        assert config.log_file is None

    def test_environment_values(self, tmp_path: Path):
        environ = {
            "HOSTBLOCK_HOSTS_FILE": str(tmp_path / "hosts"),
            "HOSTBLOCK_BACKUP": "no",
            "HOSTBLOCK_ELEVATE": "Never",
            "HOSTBLOCK_ENCODING": "latin-1",
            "HOSTBLOCK_BEGIN_MARKER": "# >>> lab",
            "HOSTBLOCK_LOG_FILE": str(tmp_path / "log" / "hostblock.log"),
            "UNRELATED": "ignored",
        }
        config = HostblockConfig.load(environ=environ)
        assert config.hosts_file == tmp_path / "hosts"
        assert config.backup is False
        assert config.elevate == "never"
        assert config.encoding == "iso8859-1"
        assert config.markers.begin == "# >>> lab"
        assert config.markers.end == DEFAULT_MARKERS.end
        assert config.log_file == tmp_path / "log" / "hostblock.log"

    def test_env_file_then_environment_then_overrides(self, tmp_path: Path):
        env_file = tmp_path / ".env.hostblock"
        env_file.write_text(
            "HOSTBLOCK_HOSTS_FILE=/from/dotenv\n"
            "HOSTBLOCK_ELEVATE=always\n"
            'HOSTBLOCK_END_MARKER="# <<< lab"\n'
            "OTHER=1\n"
        )
        config = HostblockConfig.load(
            env_file,
            environ={"HOSTBLOCK_ELEVATE": "never"},
            hosts_file=tmp_path / "override",
            backup=None,
        )
        assert config.hosts_file == tmp_path / "override"
        assert config.elevate == "never"
        assert config.markers.end == "# <<< lab"
        assert config.backup is True

    def test_missing_env_file_is_ignored(self, tmp_path: Path):
        config = HostblockConfig.load(tmp_path / "nope", environ={})
        assert config.elevate == "auto"

    def test_marker_overrides(self):
        config = HostblockConfig.load(environ={}, begin_marker="# a", end_marker="# b")
        assert (config.markers.begin, config.markers.end) == ("# a", "# b")

    @pytest.mark.parametrize(
        "environ",
        [
            {"HOSTBLOCK_BACKUP": "maybe"},
            {"HOSTBLOCK_ELEVATE": "sometimes"},
            {"HOSTBLOCK_ENCODING": "no-such-codec"},
            {"HOSTBLOCK_ENCODING": "utf-8"},
            {"HOSTBLOCK_ENCODING": "utf-16"},
            {"HOSTBLOCK_ENCODING": "shift_jis"},
            {"HOSTBLOCK_ENCODING": "gbk"},
            {"HOSTBLOCK_ENCODING": "euc-jp"},
            {"HOSTBLOCK_BEGIN_MARKER": "# same", "HOSTBLOCK_END_MARKER": "# same"},
        ],
    )
    def test_invalid_values(self, environ):
        with pytest.raises(HostblockConfigError):
            HostblockConfig.load(environ=environ)

    @pytest.mark.parametrize("encoding", ["ascii", "latin-1", "cp1252"])
    def test_single_byte_encodings_are_accepted(self, encoding):
        config = HostblockConfig.load(environ={"HOSTBLOCK_ENCODING": encoding})
        assert config.encoding == codecs.lookup(encoding).name
