import pytest

from vulnreach.advisories import (
    SEMVER,
    Affected,
    Entry,
    EcosystemSpecificImport,
    Range,
    RangeEvent,
    affects_semver,
    compare_semver,
)

VERSIONS = [
    "v0.0.1",
    "v1.0.0-alpha",
    "v1.0.0-alpha.1",
    "v1.0.0-beta",
    "v1.0.0",
    "v1.0.4",
    "v1.1.2",
    "v1.18.0",
    "v2.0.0",
]


@pytest.mark.parametrize("a", VERSIONS)
@pytest.mark.parametrize("b", VERSIONS)
def test_compare_is_antisymmetric(a, b):
    assert compare_semver(a, b) == -compare_semver(b, a)


def test_compare_follows_listed_order():
    for lower, higher in zip(VERSIONS, VERSIONS[1:]):
        assert compare_semver(lower, higher) < 0


def test_compare_accepts_prefixes():
    assert compare_semver("1.0.0", "v1.0.0") == 0
    assert compare_semver("go1.18", "v1.18.0") == 0
    assert compare_semver("v1.2", "v1.2.0") == 0


def test_invalid_versions_sort_first():
    assert compare_semver("not-a-version", "v0.0.1") < 0
    assert compare_semver("", "x") == 0
    assert compare_semver("v01.0.0", "v0.0.0") < 0


def test_build_metadata_ignored():
    assert compare_semver("v1.0.0+meta", "v1.0.0") == 0


AMOD_RANGES = [
    Range(
        type=SEMVER,
        events=[RangeEvent(introduced="1.0.0"), RangeEvent(fixed="1.0.4"), RangeEvent(introduced="1.1.2")],
    )
]


def test_affects_semver_without_ranges_affects_everything():
    assert affects_semver([], "v1.0.0") is True
    assert affects_semver([Range(type=SEMVER)], "v9.9.9") is True
    assert affects_semver([Range(type="GIT", events=[RangeEvent(fixed="1.0.0")])], "v2.0.0") is True


def test_affects_semver_beginning_of_time():
    ranges = [Range(events=[RangeEvent(fixed="0.9.0"), RangeEvent(introduced="0")])]
    assert affects_semver(ranges, "v0.1.0") is True
    assert affects_semver(ranges, "v1.0.0") is False


def test_affects_semver_does_not_reorder_input():
    events = [RangeEvent(fixed="2.0.0"), RangeEvent(introduced="1.0.0")]
    ranges = [Range(events=list(events))]
    assert affects_semver(ranges, "v1.5.0") is True
    assert ranges[0].events == events


def test_entry_defaults_round_trip():
    imp = EcosystemSpecificImport(path="example.org/amod/avuln", symbols=["VulnData.Vuln1"])
    entry = Entry(id="VA", affected=[Affected(package="example.org/amod", imports=[imp])])
    assert entry.withdrawn is None
    assert entry.affected[0].imports[0].symbols == ["VulnData.Vuln1"]
    assert entry == Entry(id="VA", affected=[Affected(package="example.org/amod", imports=[imp])])