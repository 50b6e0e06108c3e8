"""
Terraform Provider for Bitwarden Secrets Manager

Manages Secrets Manager projects and secrets as Terraform resources and
data sources.

Layout:
- config: provider block resolution (config > environment > defaults)
- secrets: backend interface + Bitwarden SDK backend
- services: Terraform state <-> backend mapping
- plugin: tf provider, resources and data sources
"""

__version__ = "0.1.0"
