"""Tests for abi/platforms.py - platform selection."""

import pytest

from align_insight.abi import (
    GC_ARCH_SIZES,
    AbiContext,
    host_arch,
    known_platforms,
    resolve_platform,
)
from align_insight.exceptions import ConfigurationError, UnknownPlatformError


class TestResolvePlatform:
    """Test resolve_platform."""

    @pytest.mark.parametrize(
        "name,word,max_align",
        [("amd64", 8, 8), ("386", 4, 4), ("arm", 4, 4), ("arm64", 8, 8), ("amd64p32", 4, 8)],
    )
    def test_known_platforms(self, name, word, max_align):
        abi = resolve_platform(name)
        assert abi == AbiContext(name=name, word_size=word, max_align=max_align)

    def test_name_is_normalized(self):
        assert resolve_platform("  AMD64 ").name == "amd64"

    def test_unknown_platform_raises(self):
        with pytest.raises(UnknownPlatformError) as exc_info:
            resolve_platform("bogus-arch")
        assert exc_info.value.platform == "bogus-arch"
        assert "amd64" in exc_info.value.known_platforms
        assert "Unknown arch bogus-arch" in str(exc_info.value)

    def test_unknown_platform_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            resolve_platform("pdp11")

    def test_host_platform_by_default(self, monkeypatch):
        monkeypatch.setattr("platform.machine", lambda: "aarch64")
        assert resolve_platform().name == "arm64"
        assert resolve_platform(None).word_size == 8


class TestHostArch:
    """Test host_arch mapping."""

    @pytest.mark.parametrize(
        "machine,arch",
        [("x86_64", "amd64"), ("AMD64", "amd64"), ("i686", "386"), ("armv7l", "arm")],
    )
    def test_machine_aliases(self, monkeypatch, machine, arch):
        monkeypatch.setattr("platform.machine", lambda: machine)
        assert host_arch() == arch

    def test_unrecognised_machine_falls_back(self, monkeypatch):
        monkeypatch.setattr("platform.machine", lambda: "vax")
        assert host_arch() == "amd64"


class TestAbiContext:
    """Test AbiContext validation."""

    def test_rejects_zero_word_size(self):
        with pytest.raises(ValueError):
            AbiContext(name="bad", word_size=0, max_align=8)

    def test_rejects_zero_max_align(self):
        with pytest.raises(ValueError):
            AbiContext(name="bad", word_size=8, max_align=0)

    def test_known_platforms_sorted(self):
        assert known_platforms() == sorted(GC_ARCH_SIZES)
