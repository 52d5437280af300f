"""Platform detection and display names."""
import platform
from typing import Optional

from gethub.types import OS, Architecture, PlatformGuess

# platform.system() values
SYSTEM_MAPPINGS = {
    "Windows": OS.WINDOWS,
    "Linux": OS.LINUX,
    "Darwin": OS.OSX,
    "Android": OS.ANDROID,
}

# platform.machine() values, lowercased
ARCH_MAPPINGS = {
    "x86_64": Architecture.X64,
    "amd64": Architecture.X64,
    "x64": Architecture.X64,
    "i386": Architecture.X86,
    "i686": Architecture.X86,
    "x86": Architecture.X86,
    "aarch64": Architecture.ARM64,
    "arm64": Architecture.ARM64,
    "armv7l": Architecture.ARM,
    "armv6l": Architecture.ARM,
    "arm": Architecture.ARM,
}

OS_NAMES = {
    OS.WINDOWS: "Windows",
    OS.LINUX: "Linux",
    OS.OSX: "macOS",
    OS.ANDROID: "Android",
}

ARCH_NAMES = {
    Architecture.X86: "x86",
    Architecture.X64: "x64",
    Architecture.ARM: "ARM",
    Architecture.ARM64: "ARM64",
}


def detect_platform() -> PlatformGuess:
    """Guess the platform of the machine running this process."""
    return PlatformGuess(
        os=SYSTEM_MAPPINGS.get(platform.system()),
        arch=ARCH_MAPPINGS.get(platform.machine().lower()),
    )


def detect_platform_from_user_agent(user_agent: str, platform_hint: str = "") -> PlatformGuess:
    """Guess a browser's platform from its User-Agent and navigator.platform.

    Fields stay None when the strings give no clue.
    """
    ua = user_agent.lower()
    hint = platform_hint.lower()

    os: Optional[OS] = None
    if "android" in ua:
        os = OS.ANDROID
    elif any(k in ua for k in ("windows", "win32", "win64")) or "win" in hint:
        os = OS.WINDOWS
    elif "mac" in ua or "darwin" in ua or "mac" in hint:
        os = OS.OSX
    elif "linux" in ua or "linux" in hint:
        os = OS.LINUX

    arch: Optional[Architecture] = None
    if any(k in ua for k in ("wow64", "x64", "x86_64", "amd64")):
        arch = Architecture.X64
    elif "arm64" in ua or "aarch64" in ua:
        arch = Architecture.ARM64
    elif "arm" in ua:
        arch = Architecture.ARM
    elif any(k in ua for k in ("x86", "i386", "i686")):
        arch = Architecture.X86

    return PlatformGuess(os=os, arch=arch)


def format_os(os: OS) -> str:
    return OS_NAMES[os]


def format_architecture(arch: Architecture) -> str:
    return ARCH_NAMES[arch]


def format_platform(os: Optional[OS] = None, arch: Optional[Architecture] = None) -> str:
    """Human-readable platform label, e.g. "macOS ARM64"."""
    if not os and not arch:
        return "Any platform"

    names = [format_os(os) if os else "", format_architecture(arch) if arch else ""]
    return " ".join(n for n in names if n)
