"""Per-module vulnerability sets: filtering and lookup by package or symbol."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from vulnreach.advisories import Entry, EcosystemSpecificImport, affects_semver
from vulnreach.model import Module, Package, is_std_package

STDLIB_PATH = "stdlib"


@dataclass
class ModVulns:
    """Vulnerabilities known for one module."""

    module: Module
    vulns: list[Entry] = field(default_factory=list)


def _withdrawn(entry: Entry) -> bool:
    withdrawn = entry.withdrawn
    return withdrawn is not None and withdrawn < datetime.now(withdrawn.tzinfo)


@dataclass
class ModuleVulnerabilities:
    """Vulnerabilities grouped per module."""

    modules: list[ModVulns] = field(default_factory=list)

    def __iter__(self) -> Iterator[ModVulns]:
        return iter(self.modules)

    def __len__(self) -> int:
        return len(self.modules)

    def filter(self, goos: str, goarch: str) -> ModuleVulnerabilities:
        """Keep only advisories that affect each module's version and platform.

        An empty goos or goarch matches every platform.
        """
        result = []
        for mod in self.modules:
            module = mod.module
            version = module.replace.version if module.replace is not None else module.version
            kept = []
            for entry in mod.vulns:
                if _withdrawn(entry):
                    continue
                affected = []
                for aff in entry.affected:
                    # Advisories may mention other modules; those would skew results.
                    if aff.package != module.path:
                        continue
                    # An unknown version is not reported, to avoid false alarms.
                    if not version:
                        continue
                    if not affects_semver(aff.ranges, version):
                        continue
                    imports = [imp for imp in aff.imports if matches_platform(goos, goarch, imp)]
                    if aff.imports and not imports:
                        continue
                    affected.append(replace(aff, imports=imports))
                if affected:
                    kept.append(replace(entry, affected=affected))
            result.append(ModVulns(module=module, vulns=kept))
        return ModuleVulnerabilities(result)

    def _most_specific(self, import_path: str) -> ModVulns | None:
        is_std = is_std_package(import_path)
        best = None
        for mod in self.modules:
            if is_std and mod.module.path == STDLIB_PATH:
                best = mod
            elif import_path.startswith(mod.module.path):
                if best is None or len(best.module.path) < len(mod.module.path):
                    best = mod
        return best

    def vulns_for_package(self, import_path: str) -> list[Entry] | None:
        """Vulnerabilities of import_path from its most specific module.

        Returns None when no module matches the path.
        """
        mod = self._most_specific(import_path)
        if mod is None:
            return None
        if mod.module.replace is not None:
            import_path = mod.module.replace.path + import_path[len(mod.module.path):]
        return [
            entry
            for entry in mod.vulns
            if any(imp.path == import_path for aff in entry.affected for imp in aff.imports)
        ]

    def vulns_for_symbol(self, import_path: str, symbol: str) -> list[Entry] | None:
        """Vulnerabilities of import_path that affect symbol.

        Returns None when no module matches the path.
        """
        vulns = self.vulns_for_package(import_path)
        if vulns is None:
            return None
        return [
            entry
            for entry in vulns
            if any(
                imp.path == import_path and (not imp.symbols or symbol in imp.symbols)
                for aff in entry.affected
                for imp in aff.imports
            )
        ]


def matches_platform_component(value: str, platforms: list[str]) -> bool:
    """Report whether value is among platforms; empty value or list matches all."""
    return not value or not platforms or value in platforms


def matches_platform(goos: str, goarch: str, imp: EcosystemSpecificImport) -> bool:
    """Report whether an affected import applies to the given OS and architecture."""
    return matches_platform_component(goos, imp.goos) and matches_platform_component(goarch, imp.goarch)


def convert(pkgs: list[Any]) -> list[Package]:
    """Convert loaded package objects into analysis packages.

    Each input needs name, pkg_path, imports (a sequence or a mapping of
    path to package) and module (None, or an object with path, version,
    dir and replace). Shared inputs convert to shared outputs.
    """
    modules: dict[int, Module] = {}
    packages: dict[int, Package] = {}

    def convert_module(m: Any) -> Module | None:
        if m is None:
            return None
        known = modules.get(id(m))
        if known is not None:
            return known
        vm = Module(path=m.path, version=m.version, dir=m.dir)
        modules[id(m)] = vm
        vm.replace = convert_module(m.replace)
        return vm

    def convert_package(p: Any) -> Package:
        known = packages.get(id(p))
        if known is not None:
            return known
        vp = Package(name=p.name, pkg_path=p.pkg_path, module=convert_module(p.module))
        packages[id(p)] = vp
        imports = p.imports.values() if isinstance(p.imports, Mapping) else p.imports
        vp.imports.extend(convert_package(i) for i in imports)
        return vp

    return [convert_package(p) for p in pkgs]