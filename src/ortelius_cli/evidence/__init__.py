"""Evidence gathering and registry submission."""

from .assembler import EvidenceAssembler, SubmissionReport
from .client import RegistryClient
from .files import FileKind, gather_api_spec, gather_file
from .image import SbomExtractor, image_reference

__all__ = [
    "EvidenceAssembler",
    "FileKind",
    "RegistryClient",
    "SbomExtractor",
    "SubmissionReport",
    "gather_api_spec",
    "gather_file",
    "image_reference",
]
