"""Allow running the CLI with ``python -m appimage_integration``."""

from appimage_integration.main import main

main()
