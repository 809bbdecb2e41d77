"""
ortelius-cli: build evidence collector for the Ortelius component registry.

Gathers git facts, component attributes and supply-chain documents for the
component version built from a checkout, then submits them to the registry.

Packages:
    core      errors, logging, settings, models, timestamps
    collect   command runner and git-derived facts
    resolve   component.toml, ``${NAME}`` substitution, attribute precedence
    evidence  files, image SBOM/provenance, registry client, assembler
    cli       the ``ortelius-cli`` command
"""

__version__ = "0.1.0"
