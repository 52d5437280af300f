"""Filename-based platform detection for assets without a manifest."""
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from gethub.types import OS, Architecture, HeuristicClassification


@dataclass(frozen=True)
class KeywordSignature:
    """Keywords identifying one OS, architecture or tag in a filename.

    Args:
        words: Keywords that must stand alone, i.e. not touch another
            letter or digit ("arm" matches "tool-arm.zip", not "alarm.zip")
        suffixes: Endings matched against the whole filename
        fragments: Substrings matched anywhere
    """
    words: Tuple[str, ...]
    suffixes: Tuple[str, ...] = ()
    fragments: Tuple[str, ...] = ()
    _pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        alternatives = "|".join(re.escape(w) for w in self.words)
        object.__setattr__(
            self, "_pattern", re.compile(rf"(?<![a-z0-9])(?:{alternatives})(?![a-z0-9])")
        )

    def matches(self, name: str) -> bool:
        """Check a lowercased filename against this signature."""
        return (
            self._pattern.search(name) is not None
            or name.endswith(self.suffixes)
            or any(f in name for f in self.fragments)
        )


# Package formats that pin the OS whatever else the name says
PACKAGE_SUFFIXES = {
    ".apk": OS.ANDROID,
}

# Checked in order, first match wins
OS_SIGNATURES: List[Tuple[OS, KeywordSignature]] = [
    (OS.WINDOWS, KeywordSignature(
        words=("windows", "win32", "win64", "win-x64", "win-x86", "win-arm64"),
        suffixes=(".exe",),
    )),
    (OS.LINUX, KeywordSignature(
        words=("linux", "ubuntu", "debian", "fedora", "rhel", "centos"),
        fragments=(".appimage",),
    )),
    (OS.OSX, KeywordSignature(
        words=("macos", "osx", "darwin", "mac"),
        fragments=("mac-",),
    )),
    (OS.ANDROID, KeywordSignature(
        words=("android",),
        suffixes=(".apk",),
    )),
]

# x64 before x86 and arm64 before arm
ARCH_SIGNATURES: List[Tuple[Architecture, KeywordSignature]] = [
    (Architecture.X64, KeywordSignature(words=("x64", "x86_64", "amd64", "win64"))),
    (Architecture.X86, KeywordSignature(words=("x86", "win32", "i386", "i686"))),
    (Architecture.ARM64, KeywordSignature(words=("arm64", "aarch64", "apple-silicon"))),
    (Architecture.ARM, KeywordSignature(words=("arm", "armv7", "armhf"))),
]

TAG_SIGNATURES: List[Tuple[str, KeywordSignature]] = [
    ("Portable", KeywordSignature(words=("portable", "standalone"))),
    ("Installer", KeywordSignature(words=("installer", "setup", "msi"))),
    ("CLI", KeywordSignature(words=("cli", "console"))),
    ("GUI", KeywordSignature(words=("gui", "desktop"))),
    ("Musl", KeywordSignature(words=("musl",))),
]


def detect_os(name: str) -> Optional[OS]:
    for suffix, os in PACKAGE_SUFFIXES.items():
        if name.endswith(suffix):
            return os
    return next((os for os, sig in OS_SIGNATURES if sig.matches(name)), None)


def detect_arch(name: str) -> Optional[Architecture]:
    return next((arch for arch, sig in ARCH_SIGNATURES if sig.matches(name)), None)


def detect_tags(name: str) -> Tuple[str, ...]:
    return tuple(tag for tag, sig in TAG_SIGNATURES if sig.matches(name))


def infer(filename: str) -> HeuristicClassification:
    """Infer OS, architecture and tags from an asset filename.

    Args:
        filename: Asset name as published on the release

    Returns:
        Classification with os/arch set when a keyword matched, and the
        (possibly empty) tuple of detected tags
    """
    name = filename.lower()
    return HeuristicClassification(
        os=detect_os(name),
        arch=detect_arch(name),
        tags=detect_tags(name),
    )
