import pytest

from modcore.semver.semver import (
    compareVersions,
    fixVersion,
    isNewerVersion,
    parseModVersion,
    tryParseModVersion,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1",        (1, 0, 0, (), ())),
        ("1.2",      (1, 2, 0, (), ())),
        ("1.2.3",    (1, 2, 3, (), ())),
        ("0.0.1",    (0, 0, 1, (), ())),
        ("v1",       (1, 0, 0, (), ())),
        ("v1.2.3",   (1, 2, 3, (), ())),
        ("1.2.3-alpha.1",         (1, 2, 3, ("alpha", "1"), ())),
        ("1.2.3-alpha+exp.sha",   (1, 2, 3, ("alpha",), ("exp", "sha"))),
        ("1.2.3.4",  (1, 2, 3, (), ())),
        ("01.2.3",   (1, 2, 3, (), ())),
        ("1.09.0",   (1, 9, 0, (), ())),
    ],
)
def test_parseModVersion_valid(raw, expected):
    v = parseModVersion(raw)
    assert (v.major, v.minor, v.patch, v.prerelease, v.build) == expected


@pytest.mark.parametrize(
    "raw",
    ["", "   ", ".1", "1.", "1..2", "1.2.3-", "1.2.3+", "1.x.3", "v", "burger", "burger2.0"],
)
def test_parseModVersion_invalid(raw):
    with pytest.raises(ValueError):
        parseModVersion(raw)
    assert tryParseModVersion(raw) is None


def test_tryParseModVersion_rejects_non_strings():
    assert tryParseModVersion(None) is None
    assert tryParseModVersion(12) is None  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1.2.3", "1.2.3"),
        ("1.2", "1.2.0"),
        ("3", "3.0.0"),
        ("v0.3", "0.3.0"),
        (" V 2.1 ", "2.1.0"),
        ("=2", "2.0.0"),
        ("ver1.2", "1.2.0"),
        ("Version 3", "3.0.0"),
        ("1.09", "1.9.0"),
        ("1.2.3-rc.1", "1.2.3-rc.1"),
        ("1.2-beta", "1.2.0-beta"),
        ("burger", "burger"),
        ("1.2.3.4", "1.2.3.4"),
    ],
)
def test_fixVersion(raw, expected):
    assert fixVersion(raw) == expected


def test_compareVersions():
    assert compareVersions("0.2.0", "0.1.0") == 1
    assert compareVersions("0.1.0", "0.2.0") == -1
    assert compareVersions("1.0", "1.0.0") == 0
    assert compareVersions("1.0.0-rc.1", "1.0.0") == -1
    assert compareVersions("1.0.0.1", "1.0.0") == 1
    assert compareVersions("1.0.0.0", "1.0") == 0
    assert compareVersions("1.10.0", "1.09.0") == 1
    assert compareVersions("burger", "1.0.0") is None


@pytest.mark.parametrize(
    "remote, local, expected",
    [
        ("0.2.0", "0.1.0", True),
        ("0.2.0", "0.2.0", False),
        ("0.1.0", "0.2.0", False),
        ("1.0.0+build.2", "1.0.0+build.1", False),
        ("burger", "burger", False),
        ("burger2.0", "burger", True),
        ("1.0.0", "burger", True),
        ("1.0.0.0", "1.0.0.1", False),
        ("1.0.0.2", "1.0.0.1", True),
        ("1.09.0", "1.10.0", False),
        ("1.0", "1.0.0", False),
    ],
)
def test_isNewerVersion(remote, local, expected):
    assert isNewerVersion(remote, local) is expected


@pytest.mark.parametrize(
    "a, b",
    [
        ("1.0.0-alpha", "1.0.0-alpha.1"),
        ("1.0.0-alpha.beta", "1.0.0-beta"),
        ("1.0.0-beta.2", "1.0.0-beta.11"),
        ("1.0.0-rc.1", "1.0.0"),
    ],
)
def test_prerelease_order(a, b):
    assert parseModVersion(a) < parseModVersion(b)


def test_parseModVersion_keeps_every_component():
    v = parseModVersion("1.2.3.4.5")
    assert v.release == (1, 2, 3, 4, 5)
    assert str(v) == "1.2.3.4.5"


def test_trailing_zero_components_are_equal():
    assert parseModVersion("1.2") == parseModVersion("1.2.0.0")
    assert hash(parseModVersion("1.2")) == hash(parseModVersion("1.2.0.0"))
    assert parseModVersion("1.2.0.1") > parseModVersion("1.2")
