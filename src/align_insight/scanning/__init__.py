"""Source scanning: package discovery, Go struct extraction, descriptor files."""

from .descriptors import DescriptorSet, load_descriptors, parse_descriptors
from .discovery import PackageDiscovery, SourcePackage
from .go_scanner import FileDecls, GoStructScanner, PackageDecls, StructDecl
from .gosyntax import FieldDecl

__all__ = [
    "DescriptorSet",
    "FieldDecl",
    "FileDecls",
    "GoStructScanner",
    "PackageDecls",
    "PackageDiscovery",
    "SourcePackage",
    "StructDecl",
    "load_descriptors",
    "parse_descriptors",
]
