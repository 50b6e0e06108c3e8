"""
Provider entry point.

Terraform launches the provider binary and talks to it over gRPC:
    terraform-provider-bitwarden
    python -m bitwarden_provider
"""

import sys

from tf import runner

from .logs import setup_logging
from .plugin import BitwardenProvider


def main() -> None:
    setup_logging()
    runner.run_provider(BitwardenProvider(), sys.argv)


if __name__ == "__main__":
    main()
