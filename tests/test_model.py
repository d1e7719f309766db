import pytest

from vulnreach.model import (
    CallGraph,
    CallSite,
    FuncNode,
    ImportGraph,
    Package,
    PkgNode,
    Position,
    Result,
    Vuln,
    is_std_package,
)


def witness_call_graph():
    e1 = FuncNode(id=1, name="entry1")
    e2 = FuncNode(id=2, name="entry2")
    i1 = FuncNode(id=3, name="interm1", pkg_path="net/http", call_sites=[CallSite(parent=1, resolved=True)])
    i2 = FuncNode(
        id=4, name="interm2", call_sites=[CallSite(parent=2, resolved=True), CallSite(parent=3, resolved=True)]
    )
    v1 = FuncNode(
        id=5, name="vuln1", call_sites=[CallSite(parent=3, resolved=True), CallSite(parent=4, resolved=False)]
    )
    v2 = FuncNode(id=6, name="vuln2", call_sites=[CallSite(parent=4, resolved=False)])
    return CallGraph(functions={1: e1, 2: e2, 3: i1, 4: i2, 5: v1, 6: v2}, entries=[1, 2])


@pytest.mark.parametrize(
    "pkg,expected",
    [
        ("net/http", True),
        ("archive/zip", True),
        ("fmt", True),
        ("example.org/amod/avuln", False),
        ("example.mod/a", False),
        ("", False),
    ],
)
def test_is_std_package(pkg, expected):
    assert is_std_package(pkg) is expected


def test_func_node_str_uses_package_path():
    cg = witness_call_graph()
    assert str(cg.functions[3]) == "net/http.interm1"
    assert str(cg.functions[1]) == ".entry1"


def test_func_node_str_prefers_receiver():
    fn = FuncNode(name="Vuln1", recv_type="example.org/amod/avuln.VulnData", pkg_path="example.org/amod/avuln")
    assert str(fn) == "example.org/amod/avuln.VulnData.Vuln1"


def test_std_functions_in_witness_graph():
    cg = witness_call_graph()
    std = sorted(f.name for f in cg.functions.values() if is_std_package(f.pkg_path))
    assert std == ["interm1"]


def test_vulns_hash_by_identity():
    vuln1 = Vuln(import_sink=5, pkg_path="vuln1")
    vuln2 = Vuln(import_sink=5, pkg_path="vuln1")
    table = {vuln1: "a", vuln2: "b"}
    assert len(table) == 2
    assert vuln1 != vuln2
    assert table[vuln1] == "a"


def test_pkg_node_equality_ignores_package():
    a = PkgNode(id=1, path="entry1", pkg=Package(pkg_path="entry1"))
    b = PkgNode(id=1, path="entry1")
    assert a == b


def test_position_is_hashable_and_ordered_fields():
    p = Position(filename="x.go", line=3, column=7)
    assert {p: 1}[Position("x.go", 3, 7)] == 1


def test_result_holds_graphs():
    ig = ImportGraph(packages={1: PkgNode(id=1, path="entry1")}, entries=[1])
    res = Result(imports=ig, vulns=[Vuln(pkg_path="vuln1")])
    assert res.imports.packages[res.imports.entries[0]].path == "entry1"
    assert res.calls is None
    assert [v.pkg_path for v in res.vulns] == ["vuln1"]