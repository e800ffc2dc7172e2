"""Entry point: ``python -m island_sim``."""

from .main import main

main()
