"""Record report builder: raw structs in, analysed Report out.

Each struct is analysed independently. A struct whose layout cannot be
computed is still reported, marked unchecked, and never stops the run.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..exceptions import IndeterminateLayoutError
from .calculator import compute_layout
from .models import Package, RawPackage, RawRecord, Record, Report
from .optimizer import optimize

if TYPE_CHECKING:
    from ..abi.platforms import AbiContext

logger = logging.getLogger(__name__)


def build_record(raw: RawRecord, abi: "AbiContext") -> Record:
    """Analyse one struct."""
    try:
        size = compute_layout(raw.fields, abi)
        candidate = optimize(raw.fields, abi)
        best = compute_layout(candidate, abi)
    except IndeterminateLayoutError as e:
        logger.debug(f"Struct {raw.name} ({raw.position}) left unchecked: {e}")
        return Record(
            name=raw.name,
            position=raw.position,
            fields=raw.fields,
            size=None,
            optimal_size=None,
            ignore=raw.ignore,
            reason=str(e),
        )

    if best >= size:
        return Record(
            name=raw.name,
            position=raw.position,
            fields=raw.fields,
            size=size,
            optimal_size=size,
            ignore=raw.ignore,
        )

    return Record(
        name=raw.name,
        position=raw.position,
        fields=raw.fields,
        size=size,
        optimal_size=best,
        optimized_fields=tuple(candidate),
        ignore=raw.ignore,
    )


def _build_records(
    raws: Sequence[RawRecord], abi: "AbiContext", workers: Optional[int]
) -> List[Record]:
    if not workers or workers < 2 or len(raws) < 2:
        return [build_record(raw, abi) for raw in raws]

    results: List[Optional[Record]] = [None] * len(raws)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(build_record, raw, abi): i for i, raw in enumerate(raws)}
        for future in as_completed(futures):
            results[futures[future]] = future.result()
    return [r for r in results if r is not None]


def build_package(raw: RawPackage, abi: "AbiContext", workers: Optional[int] = None) -> Package:
    """Analyse every struct of a package, keeping declaration order."""
    return Package(path=raw.path, records=tuple(_build_records(raw.records, abi, workers)))


def build_report(
    raw_packages: Sequence[RawPackage],
    abi: "AbiContext",
    workers: Optional[int] = None,
    sort_packages: bool = True,
) -> Report:
    """Analyse all packages.

    Records of all packages share one worker pool; results are collected by
    position so the report order never depends on scheduling. Packages are
    sorted by path unless ``sort_packages`` is False.
    """
    flat = [raw for pkg in raw_packages for raw in pkg.records]
    records = _build_records(flat, abi, workers)

    packages: List[Package] = []
    cursor = 0
    for raw_pkg in raw_packages:
        count = len(raw_pkg.records)
        packages.append(Package(path=raw_pkg.path, records=tuple(records[cursor : cursor + count])))
        cursor += count

    if sort_packages:
        packages.sort(key=lambda p: p.path)

    logger.debug(f"Analysed {len(flat)} structs in {len(packages)} packages for {abi.name}")
    return Report.of(packages)
