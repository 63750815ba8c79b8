"""Analyzer facade: inputs and configuration in, layout Report out."""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .abi import AbiContext, GoSizes, resolve_platform
from .config import AnalysisConfig
from .exceptions import InvalidConfigError, NoInputPathsError
from .layout import RawPackage, RawRecord, Report, build_report
from .logging_config import get_logger
from .scanning import (
    GoStructScanner,
    PackageDecls,
    PackageDiscovery,
    StructDecl,
    load_descriptors,
)

logger = get_logger(__name__)


class LayoutAnalyzer:
    """Analyze struct layouts of Go packages and descriptor files.

    Example:
        >>> analyzer = LayoutAnalyzer(["./..."], AnalysisConfig(arch="amd64"))
        >>> report = analyzer.analyze()
    """

    def __init__(self, inputs: Sequence[str], config: Optional[AnalysisConfig] = None):
        self.inputs = list(inputs) or ["."]
        self.config = config or AnalysisConfig()
        self.discovery = PackageDiscovery.from_config(self.config)
        self.scanner = GoStructScanner(ignore_marker=self.config.ignore_marker)
        self.abi: Optional[AbiContext] = None

    def analyze(self) -> Report:
        """Run the analysis.

        The platform is resolved before any source is scanned, so an unknown
        platform aborts the run without partial output.

        Raises:
            UnknownPlatformError: If the selected platform is unknown
            NoInputPathsError: If the inputs name no packages or descriptor files
            InvalidConfigError: If descriptor files disagree on the platform
        """
        descriptor_paths = [Path(p) for p in self.inputs if p.endswith(".json")]
        source_inputs = [p for p in self.inputs if not p.endswith(".json")]

        descriptor_sets = [load_descriptors(p) for p in descriptor_paths]
        self.abi = resolve_platform(self._select_arch(descriptor_sets))
        logger.info(
            f"Target platform {self.abi.name} "
            f"(word size {self.abi.word_size}, max align {self.abi.max_align})"
        )

        raw_packages: List[RawPackage] = []
        for ds in descriptor_sets:
            raw_packages.extend(ds.packages)

        sources = self.discovery.discover(source_inputs) if source_inputs else []
        for source in sources:
            raw_packages.append(self._size_package(self.scanner.scan_package(source)))

        if not raw_packages:
            raise NoInputPathsError(self.inputs)

        return build_report(raw_packages, self.abi, workers=self.config.workers)

    def _select_arch(self, descriptor_sets) -> Optional[str]:
        declared = {ds.platform for ds in descriptor_sets if ds.platform}
        if len(declared) > 1:
            raise InvalidConfigError(
                "platform", ", ".join(sorted(declared)), "descriptor files disagree"
            )

        if self.config.arch is not None:
            if declared and self.config.arch not in declared:
                raise InvalidConfigError(
                    "arch",
                    self.config.arch,
                    f"descriptor files were sized for {declared.pop()}",
                )
            return self.config.arch

        return declared.pop() if declared else None

    def _size_package(self, decls: PackageDecls) -> RawPackage:
        sizes = GoSizes(
            self.abi,
            local_types=decls.local_types,
            generic_types=decls.generic_types,
        )
        records: Tuple[RawRecord, ...] = tuple(
            self._size_struct(decl, sizes) for decl in decls.structs
        )
        return RawPackage(path=decls.path, records=records)

    @staticmethod
    def _size_struct(decl: StructDecl, sizes: GoSizes) -> RawRecord:
        if decl.type_params:
            sizes = sizes.with_type_params(decl.type_params)
        fields = tuple(
            sizes.field(fd.name, fd.type_expr, tag=fd.tag, comment=fd.comment)
            for fd in decl.fields
        )
        return RawRecord(
            name=decl.name,
            position=decl.position,
            fields=fields,
            ignore=decl.ignore,
        )


def analyze(inputs: Sequence[str], config: Optional[AnalysisConfig] = None) -> Report:
    """Analyze ``inputs`` and return the layout report."""
    return LayoutAnalyzer(inputs, config).analyze()
