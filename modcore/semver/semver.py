# modcore/semver/semver.py
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

__all__ = [
    "ModVersion",
    "parseModVersion",
    "tryParseModVersion",
    "fixVersion",
    "compareVersions",
    "isNewerVersion",
]



_NUMERIC_PART_RE = re.compile(r"[0-9]+")
_SUFFIX_RE = re.compile(
    r"^(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

# Whatever mod authors put in front of the numbers: "v1.2", "V 1.2", "=1.2", "ver1.2"
_LEADING_NOISE_RE = re.compile(r"^[^0-9]+")



def _trimZeros(release: tuple[int, ...]) -> tuple[int, ...]:
    end = len(release)
    while end > 1 and release[end - 1] == 0:
        end -= 1
    return release[:end]



@total_ordering
@dataclass(frozen=True)
class ModVersion:
    """
    A dotted numeric version with an optional SemVer-style suffix.

    `release` holds every numeric component, however many there are. Missing
    trailing components count as zero when comparing, so 1.2 == 1.2.0 == 1.2.0.0.
    """
    release: tuple[int, ...]
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    def _part(self, idx: int) -> int:
        return self.release[idx] if idx < len(self.release) else 0

    @property
    def major(self) -> int:
        return self._part(0)

    @property
    def minor(self) -> int:
        return self._part(1)

    @property
    def patch(self) -> int:
        return self._part(2)

    def __str__(self) -> str:
        release = self.release + (0,) * (3 - len(self.release))
        base = ".".join(str(part) for part in release)
        prerelease = f"-{'.'.join(self.prerelease)}" if self.prerelease else ""
        build = f"+{'.'.join(self.build)}" if self.build else ""
        return f"{base}{prerelease}{build}"

    def _prereleaseCmpKey(self) -> tuple:
        # Numeric identifiers have lower precedence than non-numeric.
        # We encode numeric as (0, int), non-numeric as (1, str),
        # so numeric < non-numeric in tuple comparison.
        parts: list[tuple[int, int | str]] = []
        for ident in self.prerelease:
            if _NUMERIC_PART_RE.fullmatch(ident):
                parts.append((0, int(ident)))
            else:
                parts.append((1, ident))
        return tuple(parts)

    def _cmpKey(self, width: int) -> tuple:
        # Build is ignored for ordering
        # No prerelease version is preferred over any prerelease version
        release = self.release + (0,) * (width - len(self.release))
        releaseFlag = 1 if not self.prerelease else 0
        return (release, releaseFlag, self._prereleaseCmpKey())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModVersion):
            return NotImplemented
        return _trimZeros(self.release) == _trimZeros(other.release) and self.prerelease == other.prerelease

    def __hash__(self) -> int:
        return hash((_trimZeros(self.release), self.prerelease))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ModVersion):
            return NotImplemented
        width = max(len(self.release), len(other.release))
        return self._cmpKey(width) < other._cmpKey(width)



def parseModVersion(raw: str) -> ModVersion:
    """
    Parse a mod version into ModVersion.

    Accepted forms (examples):
        "1"              -> 1.0.0
        "1.2"            -> 1.2.0
        "1.2.3.4"        -> 1.2.3.4
        "1.09.0"         -> 1.9.0  (components are plain integers)
        "1.2.3-alpha.1"
        "1.2.3+build.1"
        "v1.2.3"

    Rejected:
        ".1", "1.", "1..3", "1.2.3-", "burger", "burger2.0", etc.
    """
    if raw is None:
        raise ValueError("Version string cannot be None")

    if not isinstance(raw, str):
        raise TypeError(f"Version string must be a string type, got {type(raw).__name__}")

    raw = raw.strip()
    if not raw:
        raise ValueError("Version string cannot be empty or whitespace only")

    # Accept a single 'v' and remove it (v1.2.3 -> 1.2.3)
    text = raw
    if text.startswith("v") and len(text) > 1 and "0" <= text[1] <= "9":
        text = text[1:]

    # Split into core (numeric) and suffix (-prerelease +build)
    sepIndex = len(text)
    for ch in ("-", "+"):
        idx = text.find(ch)
        if idx != -1 and idx < sepIndex:
            sepIndex = idx

    core = text[:sepIndex]
    suffix = text[sepIndex:]

    release: list[int] = []
    for part in core.split("."):
        if not _NUMERIC_PART_RE.fullmatch(part):
            raise ValueError(f"Invalid numeric component {part!r} in version {raw!r}")
        release.append(int(part))

    mtch = _SUFFIX_RE.match(suffix)
    if not mtch:
        raise ValueError(f"Invalid suffix {suffix!r} in version {raw!r}")

    prereleaseGroup = mtch.group("prerelease")
    buildGroup = mtch.group("build")

    return ModVersion(
        release=tuple(release),
        prerelease=tuple(prereleaseGroup.split(".")) if prereleaseGroup else (),
        build=tuple(buildGroup.split(".")) if buildGroup else (),
    )



def tryParseModVersion(raw: str | None) -> ModVersion | None:
    """Like parseModVersion, but returns None instead of raising."""
    if not isinstance(raw, str):
        return None
    try:
        return parseModVersion(raw)
    except ValueError:
        return None



def fixVersion(raw: str) -> str:
    """
    Normalize a manifest version to the canonical form, at least three components.

        "1.2"        -> "1.2.0"
        " v0.3 "     -> "0.3.0"
        "ver2"       -> "2.0.0"
        "1.2.3.4"    -> "1.2.3.4"
        "1.2.3-rc.1" -> "1.2.3-rc.1"
        "burger"     -> "burger"   (unparseable, passed through unchanged)
    """
    candidate = _LEADING_NOISE_RE.sub("", raw.strip())
    parsed = tryParseModVersion(candidate)
    if parsed is None:
        return raw
    return str(parsed)



def compareVersions(first: str, second: str) -> int | None:
    """
    Returns -1, 0 or 1 like a classic cmp(), or None when either side isn't
    a structured version.
    """
    firstVersion = tryParseModVersion(first)
    secondVersion = tryParseModVersion(second)
    if firstVersion is None or secondVersion is None:
        return None
    if firstVersion < secondVersion:
        return -1
    if firstVersion > secondVersion:
        return 1
    return 0



def isNewerVersion(remote: str, local: str) -> bool:
    """
    Decide whether `remote` should replace `local`.

    Structured versions on both sides: True only when remote is strictly greater.
    Otherwise fall back to plain string inequality, so "burger" vs "burger" is
    not an update while "burger" vs "burger2.0" is.
    """
    cmp = compareVersions(remote, local)
    if cmp is None:
        return remote != local
    return cmp > 0
